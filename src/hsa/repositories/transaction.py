"""Transaction repository with history and aggregation queries."""
from decimal import Decimal
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hsa.core.money import to_money
from hsa.models.transaction import Transaction, TransactionType
from hsa.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for the append-only transaction log."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def get_recent_by_account(self, account_id: UUID, limit: int = 5) -> list[Transaction]:
        """Get the most recent transactions for an account, newest first."""
        result = await self.db.execute(
            select(Transaction)
            .where(Transaction.account_id == account_id)
            .order_by(Transaction.transaction_date.desc(), Transaction.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_all_by_account(self, account_id: UUID) -> list[Transaction]:
        result = await self.db.execute(
            select(Transaction)
            .where(Transaction.account_id == account_id)
            .order_by(Transaction.transaction_date.desc())
        )
        return list(result.scalars().all())

    async def get_total_approved_expenses(self, account_id: UUID) -> Decimal:
        """Sum of approved expenses (qualified medical spending only)."""
        result = await self.db.execute(
            select(func.sum(Transaction.amount)).where(
                Transaction.account_id == account_id,
                Transaction.type == TransactionType.EXPENSE.value,
                Transaction.is_medical_expense == True,
            )
        )
        return to_money(result.scalar_one())

    async def delete_by_account(self, account_id: UUID) -> int:
        """Delete all transactions for an account (maintenance only). Does not commit."""
        result = await self.db.execute(
            delete(Transaction).where(Transaction.account_id == account_id)
        )
        return result.rowcount
