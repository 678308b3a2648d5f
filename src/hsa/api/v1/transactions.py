"""Transaction processing, simulation and history endpoints."""

from fastapi import APIRouter, Depends

from hsa.api.deps import UserIdParam, get_transaction_service
from hsa.schemas.transaction import (
    AuthorizedTransactionResponse,
    RecentTransactionsResult,
    TransactionRequest,
    TransactionResponse,
    TransactionResult,
)
from hsa.services.transaction import AuthorizationResult, TransactionService

router = APIRouter(prefix="/transaction", tags=["transactions"])


def _to_result(result: AuthorizationResult) -> TransactionResult:
    txn = TransactionResponse.model_validate(result.transaction)
    reason = result.decision.decline_reason
    return TransactionResult(
        message="Transaction processed successfully",
        transaction=AuthorizedTransactionResponse(
            **txn.model_dump(),
            new_balance=result.new_balance,
            status=result.decision.status.value,
            decline_reason=reason.value if reason else None,
        ),
    )


@router.post(
    "/process",
    response_model=TransactionResult,
    summary="Charge the virtual card",
    description="""
    Authorize a card charge against the HSA balance.

    - No active card: rejected with 400, nothing recorded
    - Balance below amount: DECLINED (insufficient funds), recorded
    - Non-qualified category: DECLINED (non-qualified expense), recorded
    - Otherwise: APPROVED, balance debited, recorded

    Declines are returned with 200; check **status**.
    """,
    responses={
        400: {"description": "Invalid input or no active virtual card"},
        404: {"description": "HSA account not found"},
    },
)
async def process_transaction(
    data: TransactionRequest,
    user_id: UserIdParam,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResult:
    result = await service.process(user_id, data.amount, data.merchant, data.category)
    return _to_result(result)


@router.post(
    "/simulate",
    response_model=TransactionResult,
    summary="Simulate a random card purchase",
    description="Pick a sample purchase at random and run it through authorization.",
    responses={
        400: {"description": "No active virtual card"},
        404: {"description": "HSA account not found"},
    },
)
async def simulate_transaction(
    user_id: UserIdParam,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResult:
    result = await service.simulate(user_id)
    return _to_result(result)


@router.get(
    "/recent",
    response_model=RecentTransactionsResult,
    summary="Recent transactions",
    description="The most recent transactions (expenses and simulated deposits), newest first.",
)
async def recent_transactions(
    user_id: UserIdParam,
    service: TransactionService = Depends(get_transaction_service),
) -> RecentTransactionsResult:
    transactions = await service.get_recent(user_id)
    return RecentTransactionsResult(
        transactions=[TransactionResponse.model_validate(t) for t in transactions]
    )
