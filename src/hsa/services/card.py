"""Virtual card issuance."""

import logging
import secrets
from datetime import date
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hsa.config import settings
from hsa.core.exceptions import ConflictError, NotFoundError, StoreError
from hsa.models.card import VirtualCard
from hsa.repositories.account import AccountRepository
from hsa.repositories.card import CardRepository

logger = logging.getLogger(__name__)

CARD_NUMBER_LENGTH = 16
CVV_LENGTH = 3


def _random_digits(length: int) -> str:
    return "".join(secrets.choice("0123456789") for _ in range(length))


def generate_card_number() -> str:
    """16 uniformly random digits. Not Luhn-valid; demo cards never leave the system."""
    return _random_digits(CARD_NUMBER_LENGTH)


def generate_cvv() -> str:
    return _random_digits(CVV_LENGTH)


def generate_expiry_date(today: date | None = None, years: int | None = None) -> str:
    """Expiry as MM/YYYY, same month ``years`` years from today."""
    today = today or date.today()
    years = settings.card_expiry_years if years is None else years
    return f"{today.month:02d}/{today.year + years}"


class CardService:
    """Service layer for card-related operations."""

    def __init__(self, db: AsyncSession):
        """Initialize card service with database session.

        Args:
            db: Database session
        """
        self.db = db
        self.card_repo = CardRepository(db)
        self.account_repo = AccountRepository(db)

    async def get_active_card(self, user_id: UUID) -> VirtualCard | None:
        """Get the user's active card, or None."""
        return await self.card_repo.get_active_by_user(user_id)

    async def issue_card(self, user_id: UUID) -> VirtualCard:
        """Issue a new virtual card for the user's account.

        Raises:
            NotFoundError: If the user has no account
            ConflictError: If the account already has an active card
            StoreError: If the insert fails for any other reason (including
                a card-number collision)
        """
        account = await self.account_repo.get_by_user(user_id)
        if account is None:
            raise NotFoundError("NF_001", details={"user_id": str(user_id)})

        account_id = account.id

        if await self.card_repo.get_active_by_account(account_id) is not None:
            raise ConflictError("CONF_002", details={"account_id": str(account_id)})

        card = VirtualCard(
            account_id=account_id,
            card_number=generate_card_number(),
            cvv=generate_cvv(),
            expiry_date=generate_expiry_date(),
            is_active=True,
        )
        try:
            await self.card_repo.create(card)
        except IntegrityError as e:
            await self.db.rollback()
            # The one-active-card index rejects a concurrent issue for the same account.
            if await self.card_repo.get_active_by_account(account_id) is not None:
                raise ConflictError("CONF_002", details={"account_id": str(account_id)}) from e
            logger.error("Card insert rejected by store", extra={"account_id": str(account_id)})
            raise StoreError("DB_001") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError("DB_001") from e

        logger.info(
            "Virtual card issued",
            extra={"account_id": str(account_id), "card_id": str(card.id)},
        )
        return card
