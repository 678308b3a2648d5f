"""Medical-expense qualification rules.

A static table of category codes, each flagged qualified or not for tax-free
HSA spending under (simulated) IRS rules. Lookups are exact-match on the
category code; anything not in the table is treated as unqualified.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MedicalExpenseCategory:
    category: str
    is_qualified: bool
    description: str


UNKNOWN_DESCRIPTION = "Unknown category"

# Ordering is preserved in API responses: qualified categories first.
MEDICAL_EXPENSE_CATEGORIES: tuple[MedicalExpenseCategory, ...] = (
    MedicalExpenseCategory("doctor_visit", True, "Doctor office visits and consultations"),
    MedicalExpenseCategory("prescription_medication", True, "Prescription drugs and medications"),
    MedicalExpenseCategory("dental_care", True, "Dental treatment and procedures"),
    MedicalExpenseCategory("vision_care", True, "Eye exams, glasses, and contact lenses"),
    MedicalExpenseCategory("hospital_services", True, "Hospital stays and medical procedures"),
    MedicalExpenseCategory("laboratory_tests", True, "Medical tests and laboratory services"),
    MedicalExpenseCategory("physical_therapy", True, "Physical therapy and rehabilitation"),
    MedicalExpenseCategory("mental_health", True, "Mental health services and therapy"),
    MedicalExpenseCategory("medical_equipment", True, "Medical devices and equipment"),
    MedicalExpenseCategory("health_insurance", True, "Health insurance premiums"),
    MedicalExpenseCategory("cosmetic_surgery", False, "Cosmetic procedures not medically necessary"),
    MedicalExpenseCategory("vitamins_supplements", False, "Vitamins and supplements (unless prescribed)"),
    MedicalExpenseCategory("gym_membership", False, "Gym memberships and fitness programs"),
    MedicalExpenseCategory("over_the_counter", False, "Over-the-counter medications"),
    MedicalExpenseCategory("restaurant_food", False, "Restaurant meals and food purchases"),
    MedicalExpenseCategory("clothing", False, "Clothing and personal items"),
    MedicalExpenseCategory("entertainment", False, "Entertainment and recreational activities"),
)

_BY_CODE: dict[str, MedicalExpenseCategory] = {c.category: c for c in MEDICAL_EXPENSE_CATEGORIES}


def is_qualified(category: str | None) -> bool:
    """Return True if the category is an HSA-qualified medical expense.

    Unknown or empty categories fail closed.
    """
    entry = _BY_CODE.get(category or "")
    return entry.is_qualified if entry else False


def describe(category: str | None) -> str:
    entry = _BY_CODE.get(category or "")
    return entry.description if entry else UNKNOWN_DESCRIPTION


def all_categories() -> list[MedicalExpenseCategory]:
    return list(MEDICAL_EXPENSE_CATEGORIES)
