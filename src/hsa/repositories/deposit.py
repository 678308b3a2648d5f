"""Deposit repository."""
from decimal import Decimal
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hsa.core.money import to_money
from hsa.models.deposit import Deposit
from hsa.repositories.base import BaseRepository


class DepositRepository(BaseRepository[Deposit]):
    """Repository for the append-only deposit log."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Deposit)

    async def get_by_account(self, account_id: UUID) -> list[Deposit]:
        result = await self.db.execute(
            select(Deposit)
            .where(Deposit.account_id == account_id)
            .order_by(Deposit.deposit_date.desc())
        )
        return list(result.scalars().all())

    async def get_total(self, account_id: UUID) -> Decimal:
        """Sum of all deposits into an account."""
        result = await self.db.execute(
            select(func.sum(Deposit.amount)).where(
                Deposit.account_id == account_id
            )
        )
        return to_money(result.scalar_one())

    async def delete_by_account(self, account_id: UUID) -> int:
        """Delete all deposits for an account (maintenance only). Does not commit."""
        result = await self.db.execute(delete(Deposit).where(Deposit.account_id == account_id))
        return result.rowcount
