"""Account ledger service: balances, deposits and summaries.

Every mutation writes its log row(s) and the balance change in one commit, so
the stored balance always equals total deposits minus approved expenses.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hsa.core.exceptions import NotFoundError, StoreError, ValidationError
from hsa.core.money import ZERO, to_money
from hsa.models.account import HSAAccount
from hsa.models.deposit import Deposit
from hsa.models.transaction import Transaction, TransactionType
from hsa.repositories.account import AccountRepository
from hsa.repositories.deposit import DepositRepository
from hsa.repositories.transaction import TransactionRepository

logger = logging.getLogger(__name__)

DEPOSIT_MERCHANT = "Direct Contribution"
DEPOSIT_CATEGORY = "DEPOSIT"

BANK_VERIFICATION_STEPS: tuple[str, ...] = (
    "Checking for bank connection...",
    "Verifying account information...",
    "Validating routing number...",
    "Confirming account ownership...",
    "Processing deposit...",
)


@dataclass
class AccountSummary:
    current_balance: Decimal
    total_deposits: Decimal
    total_expenses: Decimal


@dataclass
class DepositResult:
    deposit: Deposit
    new_balance: Decimal
    transaction: Transaction | None = None


@dataclass
class ResetResult:
    deposits_deleted: int
    transactions_deleted: int
    balance: Decimal


class AccountService:
    """Service layer for HSA account ledger operations."""

    def __init__(self, db: AsyncSession):
        """Initialize account service with database session.

        Args:
            db: Database session
        """
        self.db = db
        self.account_repo = AccountRepository(db)
        self.deposit_repo = DepositRepository(db)
        self.transaction_repo = TransactionRepository(db)

    async def get_account(self, user_id: UUID) -> HSAAccount:
        """Get the user's HSA account.

        Raises:
            NotFoundError: If the user has no account
        """
        account = await self.account_repo.get_by_user(user_id)
        if account is None:
            raise NotFoundError("NF_001", details={"user_id": str(user_id)})
        return account

    async def get_summary(self, user_id: UUID) -> AccountSummary:
        """Current balance plus lifetime deposit and approved-expense totals."""
        account = await self.get_account(user_id)
        return AccountSummary(
            current_balance=to_money(account.balance),
            total_deposits=await self.deposit_repo.get_total(account.id),
            total_expenses=await self.transaction_repo.get_total_approved_expenses(account.id),
        )

    async def deposit(self, user_id: UUID, amount: Decimal) -> DepositResult:
        """Record a deposit and credit the balance.

        Raises:
            ValidationError: If amount is not positive
            NotFoundError: If the user has no account
        """
        return await self._deposit(user_id, amount, mirror_transaction=False)

    async def simulate_deposit(self, user_id: UUID, amount: Decimal) -> DepositResult:
        """Deposit via the simulated bank connection.

        Unlike a plain deposit this also writes a mirrored ``deposit``-type
        row to the transaction log, so it appears in recent activity.
        """
        return await self._deposit(user_id, amount, mirror_transaction=True)

    async def _deposit(
        self, user_id: UUID, amount: Decimal, mirror_transaction: bool
    ) -> DepositResult:
        requested = amount
        amount = to_money(amount)
        if amount <= 0:
            raise ValidationError("VAL_002", details={"amount": str(requested)})

        account = await self.get_account(user_id)
        account_id = account.id

        deposit = Deposit(account_id=account_id, amount=amount)
        transaction = None
        try:
            await self.deposit_repo.add(deposit)
            if mirror_transaction:
                transaction = Transaction(
                    account_id=account_id,
                    amount=amount,
                    merchant=DEPOSIT_MERCHANT,
                    category=DEPOSIT_CATEGORY,
                    is_medical_expense=False,
                    type=TransactionType.DEPOSIT.value,
                )
                await self.transaction_repo.add(transaction)
            await self.account_repo.credit(account_id, amount)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Deposit failed",
                extra={"account_id": str(account_id), "error_type": type(e).__name__},
            )
            raise StoreError("DB_001") from e

        await self.account_repo.reload(account)
        new_balance = to_money(account.balance)
        logger.info(
            "Deposit recorded",
            extra={
                "account_id": str(account.id),
                "deposit_id": str(deposit.id),
                "amount": str(amount),
                "simulated": mirror_transaction,
            },
        )
        return DepositResult(deposit=deposit, new_balance=new_balance, transaction=transaction)

    async def reset_by_email(self, email: str) -> ResetResult:
        """Delete an account's deposits and transactions and zero its balance.

        Maintenance operation for demo accounts. Cards are kept.

        Raises:
            NotFoundError: If no account belongs to that email
        """
        account = await self.account_repo.get_by_user_email(email)
        if account is None:
            raise NotFoundError("NF_001", details={"email": email})

        try:
            deposits_deleted = await self.deposit_repo.delete_by_account(account.id)
            transactions_deleted = await self.transaction_repo.delete_by_account(account.id)
            await self.account_repo.set_balance(account.id, ZERO)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError("DB_001") from e

        await self.account_repo.reload(account)
        logger.info(
            "Account reset",
            extra={
                "account_id": str(account.id),
                "deposits_deleted": deposits_deleted,
                "transactions_deleted": transactions_deleted,
            },
        )
        return ResetResult(
            deposits_deleted=deposits_deleted,
            transactions_deleted=transactions_deleted,
            balance=to_money(account.balance),
        )
