"""Medical-expense categorization.

Deterministic, local lookup of whether a spending category qualifies for
tax-free HSA payment. No network calls, no side effects.
"""

from .rules import MedicalExpenseCategory, all_categories, describe, is_qualified

__all__ = ["MedicalExpenseCategory", "all_categories", "describe", "is_qualified"]
