"""Account balance, summary and deposit endpoints."""

from fastapi import APIRouter, Depends

from hsa.api.deps import UserIdParam, get_account_service
from hsa.schemas.account import (
    AccountResponse,
    AccountSummaryResponse,
    BalanceResponse,
    DepositRequest,
    DepositResponse,
    DepositResult,
    SimulatedDepositResponse,
    SimulatedDepositResult,
    SummaryResponse,
)
from hsa.services.account import BANK_VERIFICATION_STEPS, AccountService

router = APIRouter(prefix="/account", tags=["account"])


@router.get(
    "/balance",
    response_model=BalanceResponse,
    summary="Get HSA balance",
    responses={404: {"description": "HSA account not found"}},
)
async def get_balance(
    user_id: UserIdParam,
    service: AccountService = Depends(get_account_service),
) -> BalanceResponse:
    account = await service.get_account(user_id)
    return BalanceResponse(account=AccountResponse.model_validate(account))


@router.get(
    "/summary",
    response_model=AccountSummaryResponse,
    summary="Get account summary",
    description="""
    Current balance with lifetime totals.

    - **total_deposits**: every deposit, plain or simulated
    - **total_expenses**: approved medical expenses only
    """,
    responses={404: {"description": "HSA account not found"}},
)
async def get_summary(
    user_id: UserIdParam,
    service: AccountService = Depends(get_account_service),
) -> AccountSummaryResponse:
    summary = await service.get_summary(user_id)
    return AccountSummaryResponse(
        summary=SummaryResponse(
            current_balance=summary.current_balance,
            total_deposits=summary.total_deposits,
            total_expenses=summary.total_expenses,
        )
    )


@router.post(
    "/deposit",
    response_model=DepositResult,
    summary="Deposit funds",
    responses={404: {"description": "HSA account not found"}},
)
async def deposit(
    data: DepositRequest,
    user_id: UserIdParam,
    service: AccountService = Depends(get_account_service),
) -> DepositResult:
    result = await service.deposit(user_id, data.amount)
    return DepositResult(
        message="Deposit successful",
        deposit=DepositResponse(
            id=result.deposit.id,
            amount=result.deposit.amount,
            new_balance=result.new_balance,
        ),
    )


@router.post(
    "/deposit/simulate",
    response_model=SimulatedDepositResult,
    summary="Simulate a bank deposit",
    description="Deposit through a simulated bank connection. Also appears in recent transactions.",
    responses={404: {"description": "HSA account not found"}},
)
async def simulate_deposit(
    data: DepositRequest,
    user_id: UserIdParam,
    service: AccountService = Depends(get_account_service),
) -> SimulatedDepositResult:
    result = await service.simulate_deposit(user_id, data.amount)
    return SimulatedDepositResult(
        message="Deposit processed successfully",
        deposit=SimulatedDepositResponse(
            id=result.deposit.id,
            amount=result.deposit.amount,
            new_balance=result.new_balance,
            bank_verification_steps=list(BANK_VERIFICATION_STEPS),
            status="COMPLETED",
        ),
    )
