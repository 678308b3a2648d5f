"""Virtual card repository."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hsa.models.account import HSAAccount
from hsa.models.card import VirtualCard
from hsa.repositories.base import BaseRepository


class CardRepository(BaseRepository[VirtualCard]):
    """Repository for VirtualCard model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, VirtualCard)

    async def get_active_by_account(self, account_id: UUID) -> VirtualCard | None:
        """Get the active card for an account, if any."""
        result = await self.db.execute(
            select(VirtualCard).where(
                VirtualCard.account_id == account_id, VirtualCard.is_active == True
            )
        )
        return result.scalars().first()

    async def get_active_by_user(self, user_id: UUID) -> VirtualCard | None:
        """Get the active card for the account owned by a user."""
        result = await self.db.execute(
            select(VirtualCard)
            .join(HSAAccount, VirtualCard.account_id == HSAAccount.id)
            .where(HSAAccount.user_id == user_id, VirtualCard.is_active == True)
        )
        return result.scalars().first()

    async def count_by_account(self, account_id: UUID) -> int:
        result = await self.db.execute(
            select(VirtualCard.id).where(VirtualCard.account_id == account_id)
        )
        return len(result.scalars().all())
