"""HSA account repository with atomic balance updates."""
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hsa.models.account import HSAAccount
from hsa.models.user import User
from hsa.repositories.base import BaseRepository


class AccountRepository(BaseRepository[HSAAccount]):
    """Repository for HSAAccount.

    Balance changes are single UPDATE statements computed in SQL, never
    read-modify-write in Python, so concurrent requests cannot lose updates.
    None of the mutating methods commit.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db, HSAAccount)

    async def get_by_user(self, user_id: UUID) -> HSAAccount | None:
        """Get the HSA account owned by a user."""
        result = await self.db.execute(
            select(HSAAccount).where(HSAAccount.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_user_email(self, email: str) -> HSAAccount | None:
        result = await self.db.execute(
            select(HSAAccount).join(User, HSAAccount.user_id == User.id).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def credit(self, account_id: UUID, amount: Decimal) -> None:
        """Add amount to the balance."""
        await self.db.execute(
            update(HSAAccount)
            .where(HSAAccount.id == account_id)
            .values(balance=HSAAccount.balance + amount)
            .execution_options(synchronize_session=False)
        )

    async def debit_if_sufficient(self, account_id: UUID, amount: Decimal) -> bool:
        """
        Subtract amount from the balance only if the balance covers it.

        Returns:
            True if the debit was applied, False if funds were insufficient
            at the moment the UPDATE ran.
        """
        result = await self.db.execute(
            update(HSAAccount)
            .where(HSAAccount.id == account_id, HSAAccount.balance >= amount)
            .values(balance=HSAAccount.balance - amount)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def set_balance(self, account_id: UUID, balance: Decimal) -> None:
        await self.db.execute(
            update(HSAAccount)
            .where(HSAAccount.id == account_id)
            .values(balance=balance)
            .execution_options(synchronize_session=False)
        )

    async def reload(self, account: HSAAccount) -> HSAAccount:
        """Re-read the row so the in-memory balance reflects SQL-side updates."""
        await self.db.refresh(account)
        return account
