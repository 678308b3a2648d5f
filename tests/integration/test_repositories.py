"""Integration tests for repository layer and ledger maintenance."""
from decimal import Decimal

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hsa.core.exceptions import ConflictError, NotFoundError
from hsa.models.card import VirtualCard
from hsa.models.transaction import Transaction, TransactionType
from hsa.models.user import User
from hsa.repositories.account import AccountRepository
from hsa.repositories.card import CardRepository
from hsa.repositories.deposit import DepositRepository
from hsa.repositories.transaction import TransactionRepository
from hsa.repositories.user import UserRepository
from hsa.services.account import AccountService
from hsa.services.card import CardService


@pytest.fixture
async def account(db_session: AsyncSession, test_user: User):
    return await AccountRepository(db_session).get_by_user(test_user.id)


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_get_by_email(self, db_session: AsyncSession, test_user: User):
        repo = UserRepository(db_session)

        assert (await repo.get_by_email("testuser@example.com")).id == test_user.id
        assert await repo.get_by_email("missing@example.com") is None

    @pytest.mark.asyncio
    async def test_email_exists(self, db_session: AsyncSession, test_user: User):
        repo = UserRepository(db_session)

        assert await repo.email_exists(test_user.email) is True
        assert await repo.email_exists("other@example.com") is False


class TestAccountRepository:
    @pytest.mark.asyncio
    async def test_get_by_user_email(self, db_session: AsyncSession, test_user: User, account):
        found = await AccountRepository(db_session).get_by_user_email(test_user.email)
        assert found.id == account.id

    @pytest.mark.asyncio
    async def test_credit(self, db_session: AsyncSession, account):
        repo = AccountRepository(db_session)

        await repo.credit(account.id, Decimal("12.50"))
        await db_session.commit()
        await repo.reload(account)

        assert account.balance == Decimal("12.50")

    @pytest.mark.asyncio
    async def test_debit_if_sufficient(self, db_session: AsyncSession, account):
        repo = AccountRepository(db_session)
        await repo.set_balance(account.id, Decimal("20.00"))

        assert await repo.debit_if_sufficient(account.id, Decimal("15.00")) is True
        assert await repo.debit_if_sufficient(account.id, Decimal("15.00")) is False
        await db_session.commit()
        await repo.reload(account)

        assert account.balance == Decimal("5.00")


    @pytest.mark.asyncio
    async def test_fractional_credits_are_exact(self, db_session: AsyncSession, account):
        repo = AccountRepository(db_session)
        await repo.credit(account.id, Decimal("0.10"))
        await repo.credit(account.id, Decimal("0.70"))

        assert await repo.debit_if_sufficient(account.id, Decimal("0.80")) is True
        await db_session.commit()
        await repo.reload(account)

        assert account.balance == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_balance_stored_as_integer_cents(self, db_session: AsyncSession, account):
        repo = AccountRepository(db_session)
        await repo.credit(account.id, Decimal("12.34"))
        await db_session.commit()

        raw = await db_session.execute(
            text("SELECT balance, typeof(balance) FROM hsa_accounts WHERE id = :id"),
            {"id": account.id.hex},
        )
        assert tuple(raw.one()) == (1234, "integer")


class TestCardRepository:
    @pytest.mark.asyncio
    async def test_one_active_card_per_account(self, db_session: AsyncSession, account):
        """The partial unique index rejects a second active card."""
        db_session.add(
            VirtualCard(
                account_id=account.id,
                card_number="4000000000000001",
                cvv="111",
                expiry_date="01/2030",
            )
        )
        await db_session.commit()

        db_session.add(
            VirtualCard(
                account_id=account.id,
                card_number="4000000000000002",
                cvv="222",
                expiry_date="01/2030",
            )
        )
        with pytest.raises(IntegrityError):
            await db_session.flush()
        await db_session.rollback()

    @pytest.mark.asyncio
    async def test_inactive_cards_do_not_conflict(self, db_session: AsyncSession, account):
        repo = CardRepository(db_session)
        for number in ("4000000000000001", "4000000000000002"):
            db_session.add(
                VirtualCard(
                    account_id=account.id,
                    card_number=number,
                    cvv="123",
                    expiry_date="01/2030",
                    is_active=False,
                )
            )
        await db_session.commit()

        assert await repo.count_by_account(account.id) == 2
        assert await repo.get_active_by_account(account.id) is None


class TestTransactionRepository:
    @pytest.mark.asyncio
    async def test_total_counts_only_approved_expenses(self, db_session: AsyncSession, account):
        repo = TransactionRepository(db_session)
        rows = [
            (Decimal("45.00"), "doctor_visit", True, TransactionType.EXPENSE),
            (Decimal("30.00"), "gym_membership", False, TransactionType.EXPENSE),
            (Decimal("250.00"), "DEPOSIT", False, TransactionType.DEPOSIT),
            (Decimal("19.99"), "dental_care", True, TransactionType.EXPENSE),
        ]
        for amount, category, medical, kind in rows:
            await repo.add(
                Transaction(
                    account_id=account.id,
                    amount=amount,
                    merchant="M",
                    category=category,
                    is_medical_expense=medical,
                    type=kind.value,
                )
            )
        await db_session.commit()

        assert await repo.get_total_approved_expenses(account.id) == Decimal("64.99")

    @pytest.mark.asyncio
    async def test_totals_for_empty_account(self, db_session: AsyncSession, account):
        assert await TransactionRepository(db_session).get_total_approved_expenses(account.id) == Decimal("0.00")
        assert await DepositRepository(db_session).get_total(account.id) == Decimal("0.00")


class TestCardService:
    @pytest.mark.asyncio
    async def test_issue_twice_conflicts(self, db_session: AsyncSession, test_user: User):
        service = CardService(db_session)
        await service.issue_card(test_user.id)

        with pytest.raises(ConflictError) as exc_info:
            await service.issue_card(test_user.id)

        assert exc_info.value.error_code == "CONF_002"


class TestAccountReset:
    @pytest.mark.asyncio
    async def test_reset_by_email(self, db_session: AsyncSession, test_user: User, account):
        service = AccountService(db_session)
        await service.deposit(test_user.id, Decimal("100.00"))
        await service.simulate_deposit(test_user.id, Decimal("25.00"))

        result = await service.reset_by_email(test_user.email)

        assert result.deposits_deleted == 2
        assert result.transactions_deleted == 1
        assert result.balance == Decimal("0.00")
        assert await DepositRepository(db_session).get_by_account(account.id) == []
        summary = await service.get_summary(test_user.id)
        assert summary.total_deposits == Decimal("0.00")
        assert summary.current_balance == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_reset_keeps_card(self, db_session: AsyncSession, test_user: User, account):
        card = await CardService(db_session).issue_card(test_user.id)

        await AccountService(db_session).reset_by_email(test_user.email)

        assert (await CardRepository(db_session).get_active_by_account(account.id)).id == card.id

    @pytest.mark.asyncio
    async def test_reset_unknown_email(self, db_session: AsyncSession):
        with pytest.raises(NotFoundError):
            await AccountService(db_session).reset_by_email("ghost@example.com")
