"""Integration tests for account balance, summary and deposit endpoints."""

from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from hsa.models.user import User
from hsa.repositories.account import AccountRepository
from hsa.repositories.deposit import DepositRepository
from hsa.repositories.transaction import TransactionRepository
from hsa.services.account import BANK_VERIFICATION_STEPS

BALANCE_URL = "/api/v1/account/balance"
SUMMARY_URL = "/api/v1/account/summary"
DEPOSIT_URL = "/api/v1/account/deposit"
SIMULATE_DEPOSIT_URL = "/api/v1/account/deposit/simulate"


class TestBalance:
    @pytest.mark.asyncio
    async def test_new_account_balance_is_zero(self, client: AsyncClient, test_user: User):
        response = await client.get(BALANCE_URL, params={"userId": str(test_user.id)})

        assert response.status_code == 200
        account = response.json()["account"]
        assert account["balance"] == 0
        assert "id" in account
        assert "created_at" in account

    @pytest.mark.asyncio
    async def test_balance_is_a_json_number(self, client: AsyncClient, funded_user: User):
        response = await client.get(BALANCE_URL, params={"userId": str(funded_user.id)})

        assert response.json()["account"]["balance"] == 100.0

    @pytest.mark.asyncio
    async def test_unknown_user(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.get(BALANCE_URL, params={"userId": str(uuid4())})

        assert response.status_code == 404
        assert response.json() == {
            "error": "HSA account not found",
            "error_code": "NF_001",
            "retry_allowed": False,
        }

    @pytest.mark.asyncio
    async def test_missing_user_id(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.get(BALANCE_URL)
        assert response.status_code == 400


class TestDeposit:
    @pytest.mark.asyncio
    async def test_deposit_credits_balance(
        self, client: AsyncClient, test_user: User, db_session: AsyncSession
    ):
        response = await client.post(
            DEPOSIT_URL, params={"userId": str(test_user.id)}, json={"amount": 100.00}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Deposit successful"
        assert data["deposit"]["amount"] == 100.0
        assert data["deposit"]["new_balance"] == 100.0

        account = await AccountRepository(db_session).get_by_user(test_user.id)
        deposits = await DepositRepository(db_session).get_by_account(account.id)
        assert len(deposits) == 1
        assert str(deposits[0].id) == data["deposit"]["id"]

    @pytest.mark.asyncio
    async def test_deposits_accumulate(self, client: AsyncClient, test_user: User):
        params = {"userId": str(test_user.id)}
        await client.post(DEPOSIT_URL, params=params, json={"amount": 40.25})
        response = await client.post(DEPOSIT_URL, params=params, json={"amount": 9.75})

        assert response.json()["deposit"]["new_balance"] == 50.0

    @pytest.mark.asyncio
    async def test_plain_deposit_not_in_transaction_log(
        self, client: AsyncClient, test_user: User, db_session: AsyncSession
    ):
        await client.post(DEPOSIT_URL, params={"userId": str(test_user.id)}, json={"amount": 20})

        account = await AccountRepository(db_session).get_by_user(test_user.id)
        assert await TransactionRepository(db_session).get_all_by_account(account.id) == []

    @pytest.mark.parametrize("amount", [0, -5, "abc"])
    @pytest.mark.asyncio
    async def test_invalid_amount(
        self, client: AsyncClient, test_user: User, db_session: AsyncSession, amount
    ):
        response = await client.post(
            DEPOSIT_URL, params={"userId": str(test_user.id)}, json={"amount": amount}
        )

        assert response.status_code == 400
        account = await AccountRepository(db_session).get_by_user(test_user.id)
        assert account.balance == Decimal("0.00")
        assert await DepositRepository(db_session).get_by_account(account.id) == []

    @pytest.mark.asyncio
    async def test_sub_cent_amount_rejected(
        self, client: AsyncClient, test_user: User, db_session: AsyncSession
    ):
        response = await client.post(
            DEPOSIT_URL, params={"userId": str(test_user.id)}, json={"amount": 0.004}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"
        account = await AccountRepository(db_session).get_by_user(test_user.id)
        assert await DepositRepository(db_session).get_by_account(account.id) == []

    @pytest.mark.asyncio
    async def test_missing_amount(self, client: AsyncClient, test_user: User):
        response = await client.post(DEPOSIT_URL, params={"userId": str(test_user.id)}, json={})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_deposit_unknown_user(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post(
            DEPOSIT_URL, params={"userId": str(uuid4())}, json={"amount": 10}
        )
        assert response.status_code == 404


class TestSimulatedDeposit:
    @pytest.mark.asyncio
    async def test_simulated_deposit(
        self, client: AsyncClient, test_user: User, db_session: AsyncSession
    ):
        response = await client.post(
            SIMULATE_DEPOSIT_URL, params={"userId": str(test_user.id)}, json={"amount": 250}
        )

        assert response.status_code == 200
        deposit = response.json()["deposit"]
        assert deposit["amount"] == 250.0
        assert deposit["new_balance"] == 250.0
        assert deposit["status"] == "COMPLETED"
        assert deposit["bank_verification_steps"] == list(BANK_VERIFICATION_STEPS)

    @pytest.mark.asyncio
    async def test_simulated_deposit_mirrored_in_transactions(
        self, client: AsyncClient, test_user: User, db_session: AsyncSession
    ):
        await client.post(
            SIMULATE_DEPOSIT_URL, params={"userId": str(test_user.id)}, json={"amount": 250}
        )

        account = await AccountRepository(db_session).get_by_user(test_user.id)
        transactions = await TransactionRepository(db_session).get_all_by_account(account.id)
        assert len(transactions) == 1
        mirrored = transactions[0]
        assert mirrored.type == "deposit"
        assert mirrored.category == "DEPOSIT"
        assert mirrored.merchant == "Direct Contribution"
        assert mirrored.is_medical_expense is False
        assert mirrored.amount == Decimal("250.00")
        assert mirrored.card_id is None


class TestSummary:
    @pytest.mark.asyncio
    async def test_empty_summary(self, client: AsyncClient, test_user: User):
        response = await client.get(SUMMARY_URL, params={"userId": str(test_user.id)})

        assert response.status_code == 200
        assert response.json() == {
            "summary": {"current_balance": 0.0, "total_deposits": 0.0, "total_expenses": 0.0}
        }

    @pytest.mark.asyncio
    async def test_summary_counts_both_deposit_kinds(self, client: AsyncClient, test_user: User):
        params = {"userId": str(test_user.id)}
        await client.post(DEPOSIT_URL, params=params, json={"amount": 100})
        await client.post(SIMULATE_DEPOSIT_URL, params=params, json={"amount": 50})

        summary = (await client.get(SUMMARY_URL, params=params)).json()["summary"]

        assert summary["current_balance"] == 150.0
        assert summary["total_deposits"] == 150.0
        assert summary["total_expenses"] == 0.0

    @pytest.mark.asyncio
    async def test_summary_unknown_user(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.get(SUMMARY_URL, params={"userId": str(uuid4())})
        assert response.status_code == 404
