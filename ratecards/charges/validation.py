"""
Rate Card Validation

Authoring-time checks for tier tables, charges and whole rate cards.

These run when a rate card is created or edited. The evaluators never call
them and never raise these errors: evaluation assumes validated input and
degrades to flat rates when a table is malformed.

Every error is a ValueError subclass carrying a `field` path
(e.g. "charges[2].breaks[0].max_value") so an editor can attach the message
to the offending input.
"""

from typing import Sequence

from .base import ChargeDefinition, RateBasis, RateBreak, RateCard, WeightSource


# =============================================================================
# ERRORS
# =============================================================================

class RateCardError(ValueError):
    """Base class for rate card configuration errors."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def at(self, prefix: str) -> "RateCardError":
        """Re-root the field path under prefix (e.g. "charges[1]")."""
        self.field = f"{prefix}.{self.field}" if self.field else prefix
        return self


class MissingBreaksError(RateCardError):
    """PER_WEIGHT charge without tiers."""


class OverlappingBreaksError(RateCardError):
    """Two ACTUAL weight tiers overlap or touch."""


class InvalidBreakBoundsError(RateCardError):
    """A tier with max_value < min_value."""


class InvalidBreakValueError(RateCardError):
    """A tier with a negative min_value or rate_value."""


class InvalidChargeValueError(RateCardError):
    """A charge with a negative value or priority."""


class DuplicatePriorityError(RateCardError):
    """Two charges share a priority within one rate card."""


class EmptyRateCardError(RateCardError):
    """A rate card without charges."""


class InvalidValidityWindowError(RateCardError):
    """valid_to earlier than valid_from."""


class DuplicateModifierError(RateCardError):
    """More than one thermal modifier for the same thermal profile."""


# =============================================================================
# BREAKS
# =============================================================================

def validate_breaks(breaks: Sequence[RateBreak] | None, weight_source: WeightSource) -> None:
    """
    Validate a tier table.

    Raises the first error found:
        - InvalidBreakValueError   if min_value or rate_value is negative
        - InvalidBreakBoundsError  if max_value < min_value
        - OverlappingBreaksError   if ACTUAL tiers overlap or touch

    TRUCK_CAPACITY tables skip the overlap check; they resolve by
    closest-lower min_value, not by containment.
    """
    errors = check_breaks(breaks, weight_source)
    if errors:
        raise errors[0]


def check_breaks(breaks: Sequence[RateBreak] | None, weight_source: WeightSource) -> list[RateCardError]:
    """Collect every tier table error (see validate_breaks)."""
    if not breaks:
        return []

    errors: list[RateCardError] = []

    for i, b in enumerate(breaks):
        if b.min_value < 0:
            errors.append(InvalidBreakValueError(
                f"Minimum value must be >= 0 (got {b.min_value})",
                f"breaks[{i}].min_value",
            ))
        if b.rate_value < 0:
            errors.append(InvalidBreakValueError(
                f"Rate value must be >= 0 (got {b.rate_value})",
                f"breaks[{i}].rate_value",
            ))
        if b.max_value is not None and b.max_value < b.min_value:
            errors.append(InvalidBreakBoundsError(
                f"Invalid range: {b.min_value}-{b.max_value} (max must be >= min)",
                f"breaks[{i}].max_value",
            ))

    if WeightSource(weight_source) == WeightSource.ACTUAL and len(breaks) >= 2:
        ordered = sorted(breaks, key=lambda b: b.min_value)
        for current, following in zip(ordered, ordered[1:]):
            current_max = float("inf") if current.max_value is None else current.max_value
            if current_max >= following.min_value:
                errors.append(OverlappingBreaksError(
                    f"Ranges overlap: {_range(current)} and {_range(following)} "
                    "(transported weight tiers must not overlap)",
                    "breaks",
                ))

    return errors


def _range(b: RateBreak) -> str:
    upper = "inf" if b.max_value is None else b.max_value
    return f"{b.min_value}-{upper}"


# =============================================================================
# CHARGES
# =============================================================================

def validate_charge(charge: ChargeDefinition) -> None:
    """
    Validate one charge definition.

    Raises the first error found:
        - InvalidChargeValueError  if value or priority is negative
        - MissingBreaksError       if a PER_WEIGHT charge has no tiers
        - any validate_breaks error
    """
    errors = check_charge(charge)
    if errors:
        raise errors[0]


def check_charge(charge: ChargeDefinition) -> list[RateCardError]:
    """Collect every error for one charge (see validate_charge)."""
    errors: list[RateCardError] = []

    if charge.value < 0:
        errors.append(InvalidChargeValueError(
            f"Value must be >= 0 (got {charge.value})", "value"
        ))
    if charge.priority < 0:
        errors.append(InvalidChargeValueError(
            f"Priority must be >= 0 (got {charge.priority})", "priority"
        ))

    if charge.rate_basis == RateBasis.PER_WEIGHT and not charge.has_breaks:
        errors.append(MissingBreaksError(
            "Breaks are required for per-weight charges", "breaks"
        ))

    errors.extend(check_breaks(charge.breaks, charge.weight_source))
    return errors


def next_priority(charges: Sequence[ChargeDefinition]) -> int:
    """Priority for a charge appended to the card: max + 1, or 0 when empty."""
    if not charges:
        return 0
    return max(c.priority for c in charges) + 1


# =============================================================================
# RATE CARDS
# =============================================================================

def validate_rate_card(card: RateCard) -> None:
    """
    Validate a whole rate card.

    Raises the first error reported by check_rate_card.
    """
    errors = check_rate_card(card)
    if errors:
        raise errors[0]


def check_rate_card(card: RateCard) -> list[RateCardError]:
    """
    Collect every rate card error, each with a field path.

    Checks:
        - at least one charge
        - valid_to >= valid_from
        - unique charge priorities
        - at most one thermal modifier per thermal profile
        - every charge (see check_charge)
    """
    errors: list[RateCardError] = []

    if not card.charges:
        errors.append(EmptyRateCardError("At least one charge is required", "charges"))

    if card.valid_to is not None and card.valid_to < card.valid_from:
        errors.append(InvalidValidityWindowError(
            f"End date {card.valid_to} is before start date {card.valid_from}",
            "valid_to",
        ))

    seen_priorities: set[int] = set()
    for i, c in enumerate(card.charges):
        if c.priority in seen_priorities:
            errors.append(DuplicatePriorityError(
                f"Charges must have unique priorities ({c.priority} is repeated)",
                f"charges[{i}].priority",
            ))
        seen_priorities.add(c.priority)

    seen_profiles: set = set()
    for i, m in enumerate(card.thermal_modifiers):
        if m.thermal_profile in seen_profiles:
            errors.append(DuplicateModifierError(
                f"Thermal profile {m.thermal_profile} already has a modifier",
                f"thermal_modifiers[{i}]",
            ))
        seen_profiles.add(m.thermal_profile)

    for i, c in enumerate(card.charges):
        errors.extend(e.at(f"charges[{i}]") for e in check_charge(c))

    return errors
