"""
Charge Definitions

Records shared by the resolver, validator and evaluators.

Every categorical field is a closed Enum, so each branch over rate basis or
weight source can be enumerated. Records are immutable NamedTuples: the engine
never mutates its inputs.
"""

from datetime import date
from enum import Enum
from typing import NamedTuple, Iterable

from ..data.reference.defaults import IS_ACTIVE, APPLY_BEFORE_PCT, WEIGHT_SOURCE
from ..thermal import ThermalModifier


# =============================================================================
# ENUMS
# =============================================================================

class ChargeType(str, Enum):
    """Informational tag; does not affect arithmetic."""
    BASE = "BASE"
    FREIGHT = "FREIGHT"
    DISTANCE = "DISTANCE"
    FUEL = "FUEL"
    HYBRID = "HYBRID"


class RateBasis(str, Enum):
    """Which scenario dimension the rate is multiplied by."""
    FLAT = "FLAT"
    PER_WEIGHT = "PER_WEIGHT"
    PER_DISTANCE = "PER_DISTANCE"
    PERCENTAGE = "PERCENTAGE"


class WeightSource(str, Enum):
    """
    Weight used by PER_WEIGHT charges.

        ACTUAL          - transported weight, tiers matched by RANGE
        TRUCK_CAPACITY  - vehicle rated capacity, tiers matched by CLOSEST_LOWER
    """
    ACTUAL = "ACTUAL"
    TRUCK_CAPACITY = "TRUCK_CAPACITY"


# =============================================================================
# RECORDS
# =============================================================================

class RateBreak(NamedTuple):
    """
    One tier of a tiered rate table.

    max_value of None means unbounded above. max_value == min_value denotes an
    exact point tier (e.g. a 28 ton truck).
    """
    min_value: float
    max_value: float | None
    rate_value: float

    @property
    def is_exact(self) -> bool:
        return self.max_value is not None and self.max_value == self.min_value


class ChargeDefinition(NamedTuple):
    """
    One pricing rule within a rate card.

    Attributes:
        IDENTITY
            charge_type      - Informational tag (BASE, FREIGHT, ...)
            label            - Display string, no semantic effect

        PRICING
            rate_basis       - FLAT, PER_WEIGHT, PER_DISTANCE or PERCENTAGE
            value            - Flat/default rate, used when no tier matches
            breaks           - None or a non-empty tuple of RateBreak

        ORDERING
            priority         - Evaluation order (sort_order), unique per card
            is_active        - Inactive charges are skipped entirely
            apply_before_pct - Feed this amount into the percentage base

        WEIGHT
            weight_source    - ACTUAL or TRUCK_CAPACITY (PER_WEIGHT only)
    """
    charge_type: ChargeType
    rate_basis: RateBasis
    value: float
    priority: int
    label: str | None = None
    is_active: bool = IS_ACTIVE
    apply_before_pct: bool = APPLY_BEFORE_PCT
    weight_source: WeightSource = WeightSource(WEIGHT_SOURCE)
    breaks: tuple[RateBreak, ...] | None = None

    @property
    def has_breaks(self) -> bool:
        return bool(self.breaks)

    @property
    def feeds_percentage_base(self) -> bool:
        """True if this charge's amount is added to the running percentage base."""
        return self.apply_before_pct and self.rate_basis != RateBasis.PERCENTAGE


def charge(
    charge_type: ChargeType | str,
    rate_basis: RateBasis | str,
    value: float,
    priority: int,
    label: str | None = None,
    is_active: bool = IS_ACTIVE,
    apply_before_pct: bool = APPLY_BEFORE_PCT,
    weight_source: WeightSource | str = WEIGHT_SOURCE,
    breaks: Iterable[RateBreak | tuple] | None = None,
) -> ChargeDefinition:
    """
    Build a ChargeDefinition from loosely typed values.

    Codes are coerced to their enums, break rows to RateBreak, and an empty
    break list is stored as None so "absent" and "empty" are one state.
    """
    tiers = tuple(RateBreak(*b) for b in breaks) if breaks is not None else ()

    return ChargeDefinition(
        charge_type=ChargeType(charge_type),
        rate_basis=RateBasis(rate_basis),
        value=float(value),
        priority=int(priority),
        label=label,
        is_active=bool(is_active),
        apply_before_pct=bool(apply_before_pct),
        weight_source=WeightSource(weight_source),
        breaks=tiers or None,
    )


class Scenario(NamedTuple):
    """
    Evaluation input for one order.

    truck_capacity is the vehicle's rated capacity. TRUCK_CAPACITY charges use
    it when given and fall back to weight otherwise.
    """
    weight: float
    distance: float
    truck_capacity: float | None = None


class LineItem(NamedTuple):
    """One evaluated charge."""
    charge_type: ChargeType
    label: str | None
    amount: float
    effective_rate: float
    matched_break: str | None = None


class RateCardResult(NamedTuple):
    """Line items in evaluation order and their sum."""
    line_items: tuple[LineItem, ...]
    subtotal: float


class RateCard(NamedTuple):
    """
    Ordered charges for a lane/carrier plus a validity window.

    thermal_modifiers holds at most one modifier per thermal profile.
    """
    lane: str
    valid_from: date
    charges: tuple[ChargeDefinition, ...]
    valid_to: date | None = None
    carrier: str | None = None
    thermal_profile: str | None = None
    thermal_modifiers: tuple[ThermalModifier, ...] = ()
    name: str | None = None
    is_active: bool = True

    def is_valid_on(self, day: date) -> bool:
        """Check if day falls within [valid_from, valid_to]."""
        if day < self.valid_from:
            return False
        return self.valid_to is None or day <= self.valid_to
