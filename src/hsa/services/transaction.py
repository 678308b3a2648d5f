"""Transaction processing: card-gated expense authorization and history."""

import logging
import random
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hsa.config import settings
from hsa.core.exceptions import NotFoundError, StoreError, ValidationError
from hsa.core.money import to_money
from hsa.models.account import HSAAccount
from hsa.models.card import VirtualCard
from hsa.models.transaction import Transaction, TransactionType
from hsa.repositories.account import AccountRepository
from hsa.repositories.card import CardRepository
from hsa.repositories.transaction import TransactionRepository
from hsa.services.authorizer import (
    DECLINED_INSUFFICIENT_FUNDS,
    AuthorizationDecision,
    decide,
)
from hsa.services.simulator import pick_sample

logger = logging.getLogger(__name__)


@dataclass
class AuthorizationResult:
    transaction: Transaction
    decision: AuthorizationDecision
    new_balance: Decimal


class TransactionService:
    """Service for authorizing card expenses against an HSA balance."""

    def __init__(self, db: AsyncSession, rng: random.Random | None = None):
        """
        Args:
            db: Database session
            rng: Random source for the simulator; unseeded module RNG if omitted
        """
        self.db = db
        self.rng = rng
        self.account_repo = AccountRepository(db)
        self.card_repo = CardRepository(db)
        self.transaction_repo = TransactionRepository(db)

    async def process(
        self, user_id: UUID, amount: Decimal, merchant: str, category: str
    ) -> AuthorizationResult:
        """Authorize a card expense and record the attempt.

        Raises:
            NotFoundError: If the user has no account
            ValidationError: If there is no active card or amount is not positive
        """
        account, card = await self._load_account_and_card(user_id)
        return await self._authorize(account, card, amount, merchant, category)

    async def simulate(self, user_id: UUID) -> AuthorizationResult:
        """Run a randomly chosen sample purchase through authorization."""
        account, card = await self._load_account_and_card(user_id)
        sample = pick_sample(self.rng)
        logger.info(
            "Simulating purchase",
            extra={"account_id": str(account.id), "category": sample.category, "mcc": sample.mcc},
        )
        return await self._authorize(account, card, sample.amount, sample.merchant, sample.category)

    async def get_recent(self, user_id: UUID, limit: int | None = None) -> list[Transaction]:
        """Most recent transactions for the user's account, newest first."""
        account = await self.account_repo.get_by_user(user_id)
        if account is None:
            raise NotFoundError("NF_001", details={"user_id": str(user_id)})
        return await self.transaction_repo.get_recent_by_account(
            account.id, limit or settings.recent_transactions_limit
        )

    async def _load_account_and_card(self, user_id: UUID) -> tuple[HSAAccount, VirtualCard]:
        account = await self.account_repo.get_by_user(user_id)
        if account is None:
            raise NotFoundError("NF_001", details={"user_id": str(user_id)})

        # No card, no attempt: nothing is written to the log.
        card = await self.card_repo.get_active_by_account(account.id)
        if card is None:
            raise ValidationError("CARD_001", details={"account_id": str(account.id)})
        return account, card

    async def _authorize(
        self,
        account: HSAAccount,
        card: VirtualCard,
        amount: Decimal,
        merchant: str,
        category: str,
    ) -> AuthorizationResult:
        # decide() and the debit must see the same rounded amount.
        amount = to_money(amount)
        decision = decide(to_money(account.balance), amount, category)
        account_id = account.id
        card_id = card.id

        try:
            if decision.approved:
                # The balance may have moved since it was read; the UPDATE re-checks it.
                if not await self.account_repo.debit_if_sufficient(account_id, amount):
                    decision = DECLINED_INSUFFICIENT_FUNDS

            transaction = Transaction(
                account_id=account_id,
                card_id=card_id,
                amount=amount,
                merchant=merchant,
                category=category,
                is_medical_expense=decision.is_medical_expense,
                type=TransactionType.EXPENSE.value,
            )
            await self.transaction_repo.add(transaction)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Transaction write failed",
                extra={"account_id": str(account_id), "error_type": type(e).__name__},
            )
            raise StoreError("DB_001") from e

        await self.account_repo.reload(account)
        new_balance = to_money(account.balance)

        logger.info(
            "Transaction %s",
            decision.status.value,
            extra={
                "account_id": str(account.id),
                "transaction_id": str(transaction.id),
                "amount": str(amount),
                "category": category,
                "decline_reason": decision.decline_reason.value if decision.decline_reason else None,
            },
        )
        return AuthorizationResult(transaction=transaction, decision=decision, new_balance=new_balance)
