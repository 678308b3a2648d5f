"""Transaction authorization rules.

The decision is a pure function of balance, amount and category so it can be
reasoned about without a database. Applying the decision (debit, log row) is
the job of TransactionService.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from hsa.categorization import is_qualified
from hsa.core.exceptions import ValidationError


class AuthorizationStatus(str, Enum):
    APPROVED = "APPROVED"
    DECLINED = "DECLINED"


class DeclineReason(str, Enum):
    INSUFFICIENT_FUNDS = "Insufficient funds"
    NON_QUALIFIED = "Non-qualified expense"


@dataclass(frozen=True)
class AuthorizationDecision:
    status: AuthorizationStatus
    is_medical_expense: bool
    decline_reason: DeclineReason | None = None

    @property
    def approved(self) -> bool:
        return self.status is AuthorizationStatus.APPROVED


APPROVED = AuthorizationDecision(AuthorizationStatus.APPROVED, is_medical_expense=True)
DECLINED_INSUFFICIENT_FUNDS = AuthorizationDecision(
    AuthorizationStatus.DECLINED,
    is_medical_expense=False,
    decline_reason=DeclineReason.INSUFFICIENT_FUNDS,
)
DECLINED_NON_QUALIFIED = AuthorizationDecision(
    AuthorizationStatus.DECLINED,
    is_medical_expense=False,
    decline_reason=DeclineReason.NON_QUALIFIED,
)


def decide(balance: Decimal, amount: Decimal, category: str) -> AuthorizationDecision:
    """
    Decide whether an expense is approved.

    Checks run in order: positive amount, sufficient balance, qualified
    category. The active-card check happens earlier, in the service, because
    it needs the store.

    Raises:
        ValidationError: If amount is not greater than zero
    """
    if amount is None or amount <= 0:
        raise ValidationError("VAL_002", details={"amount": str(amount)})

    if balance < amount:
        return DECLINED_INSUFFICIENT_FUNDS

    if not is_qualified(category):
        return DECLINED_NON_QUALIFIED

    return APPROVED
