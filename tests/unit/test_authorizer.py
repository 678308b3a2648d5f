"""Unit tests for the expense authorization decision."""

from decimal import Decimal

import pytest

from hsa.core.exceptions import ValidationError
from hsa.services.authorizer import (
    AuthorizationStatus,
    DeclineReason,
    decide,
)


class TestDecide:
    def test_qualified_with_funds_is_approved(self):
        decision = decide(Decimal("100.00"), Decimal("45.00"), "doctor_visit")

        assert decision.approved
        assert decision.status is AuthorizationStatus.APPROVED
        assert decision.is_medical_expense is True
        assert decision.decline_reason is None

    def test_exact_balance_is_approved(self):
        decision = decide(Decimal("45.00"), Decimal("45.00"), "dental_care")
        assert decision.approved

    def test_insufficient_funds(self):
        decision = decide(Decimal("10.00"), Decimal("10.01"), "doctor_visit")

        assert not decision.approved
        assert decision.status is AuthorizationStatus.DECLINED
        assert decision.decline_reason is DeclineReason.INSUFFICIENT_FUNDS
        assert decision.is_medical_expense is False

    def test_non_qualified_category(self):
        decision = decide(Decimal("100.00"), Decimal("30.00"), "gym_membership")

        assert decision.status is AuthorizationStatus.DECLINED
        assert decision.decline_reason is DeclineReason.NON_QUALIFIED
        assert decision.is_medical_expense is False

    def test_unknown_category_declined_as_non_qualified(self):
        decision = decide(Decimal("100.00"), Decimal("48.20"), "fuel")
        assert decision.decline_reason is DeclineReason.NON_QUALIFIED

    def test_funds_checked_before_category(self):
        """A non-qualified charge that also exceeds the balance is an insufficient-funds decline."""
        decision = decide(Decimal("5.00"), Decimal("30.00"), "gym_membership")
        assert decision.decline_reason is DeclineReason.INSUFFICIENT_FUNDS

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-1.00"), None])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(ValidationError) as exc_info:
            decide(Decimal("100.00"), amount, "doctor_visit")

        assert exc_info.value.error_code == "VAL_002"
        assert exc_info.value.http_status == 400

    def test_reason_strings(self):
        assert DeclineReason.INSUFFICIENT_FUNDS.value == "Insufficient funds"
        assert DeclineReason.NON_QUALIFIED.value == "Non-qualified expense"
