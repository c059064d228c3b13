"""
Charges Package

Charge definitions, tier resolution and authoring-time validation.

Evaluation Order:
    Active charges run in ascending priority. Non-percentage charges with
    apply_before_pct feed the running base that later PERCENTAGE charges use.
"""

from .base import (
    ChargeType,
    RateBasis,
    WeightSource,
    RateBreak,
    ChargeDefinition,
    charge,
    Scenario,
    LineItem,
    RateCardResult,
    RateCard,
)
from .breaks import BreakPolicy, policy_for, resolve_break, describe_break
from .validation import (
    RateCardError,
    MissingBreaksError,
    OverlappingBreaksError,
    InvalidBreakBoundsError,
    InvalidBreakValueError,
    InvalidChargeValueError,
    DuplicatePriorityError,
    EmptyRateCardError,
    InvalidValidityWindowError,
    DuplicateModifierError,
    validate_breaks,
    check_breaks,
    validate_charge,
    check_charge,
    validate_rate_card,
    check_rate_card,
    next_priority,
)


# =============================================================================
# HELPERS
# =============================================================================

def active_in_order(charges) -> list[ChargeDefinition]:
    """Active charges sorted by priority (stable for equal priorities)."""
    return sorted(
        [c for c in charges if c.is_active],
        key=lambda c: c.priority
    )


def charge_key(charge: ChargeDefinition) -> str:
    """Column suffix for a charge, e.g. "1_freight"."""
    return f"{charge.priority}_{charge.charge_type.value.lower()}"


__all__ = [
    # Records
    "ChargeType",
    "RateBasis",
    "WeightSource",
    "RateBreak",
    "ChargeDefinition",
    "charge",
    "Scenario",
    "LineItem",
    "RateCardResult",
    "RateCard",
    # Breaks
    "BreakPolicy",
    "policy_for",
    "resolve_break",
    "describe_break",
    # Validation
    "RateCardError",
    "MissingBreaksError",
    "OverlappingBreaksError",
    "InvalidBreakBoundsError",
    "InvalidBreakValueError",
    "InvalidChargeValueError",
    "DuplicatePriorityError",
    "EmptyRateCardError",
    "InvalidValidityWindowError",
    "DuplicateModifierError",
    "validate_breaks",
    "check_breaks",
    "validate_charge",
    "check_charge",
    "validate_rate_card",
    "check_rate_card",
    "next_priority",
    # Helpers
    "active_in_order",
    "charge_key",
]
