"""Virtual card endpoints."""

from fastapi import APIRouter, Depends

from hsa.api.deps import UserIdParam, get_card_service
from hsa.schemas.card import CardIssueResult, CardResponse, CardResult
from hsa.services.card import CardService

router = APIRouter(prefix="/card", tags=["cards"])


@router.get(
    "/get",
    response_model=CardResult,
    summary="Get active virtual card",
    description="Returns the user's active card, or null if none has been issued.",
)
async def get_card(
    user_id: UserIdParam,
    service: CardService = Depends(get_card_service),
) -> CardResult:
    card = await service.get_active_card(user_id)
    return CardResult(card=CardResponse.model_validate(card) if card else None)


@router.post(
    "/issue",
    response_model=CardIssueResult,
    summary="Issue a virtual card",
    responses={
        404: {"description": "HSA account not found"},
        409: {"description": "User already has an active virtual card"},
    },
)
async def issue_card(
    user_id: UserIdParam,
    service: CardService = Depends(get_card_service),
) -> CardIssueResult:
    card = await service.issue_card(user_id)
    return CardIssueResult(
        message="Virtual card issued successfully",
        card=CardResponse.model_validate(card),
    )
