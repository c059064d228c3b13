"""
Break Resolver

Finds the tier of a tiered rate table that applies to a lookup value.

Two matching policies:
    RANGE          - first tier whose [min_value, max_value) contains the value.
                     Used for transported weight, where tiers never overlap.
    CLOSEST_LOWER  - tier with the greatest min_value at or below the value.
                     Used for truck capacity: a 30 ton truck takes the 28 ton
                     tier, not an exact bucket. Overlapping tiers are allowed.

The resolver assumes validated tables and never re-checks them. On a malformed
table it returns whatever matches first (or None); it does not raise.
"""

from enum import Enum
from typing import Sequence

from .base import RateBasis, RateBreak, WeightSource


class BreakPolicy(str, Enum):
    RANGE = "RANGE"
    CLOSEST_LOWER = "CLOSEST_LOWER"


def policy_for(rate_basis: RateBasis, weight_source: WeightSource) -> BreakPolicy:
    """CLOSEST_LOWER for truck-capacity weight charges, RANGE for everything else."""
    if rate_basis == RateBasis.PER_WEIGHT and weight_source == WeightSource.TRUCK_CAPACITY:
        return BreakPolicy.CLOSEST_LOWER
    return BreakPolicy.RANGE


def resolve_break(
    breaks: Sequence[RateBreak] | None,
    lookup_value: float,
    policy: BreakPolicy,
) -> RateBreak | None:
    """
    Find the applicable tier.

    Args:
        breaks: Tier table (may be None or empty)
        lookup_value: Value to match (weight, distance, percentage base, ...)
        policy: RANGE or CLOSEST_LOWER

    Returns:
        Matching RateBreak, or None if no tier applies
    """
    if not breaks:
        return None

    if policy == BreakPolicy.CLOSEST_LOWER:
        return _closest_lower(breaks, lookup_value)
    return _in_range(breaks, lookup_value)


def _in_range(breaks: Sequence[RateBreak], lookup_value: float) -> RateBreak | None:
    for b in breaks:
        if lookup_value >= b.min_value and (b.max_value is None or lookup_value < b.max_value):
            return b
    return None


def _closest_lower(breaks: Sequence[RateBreak], lookup_value: float) -> RateBreak | None:
    # Strict comparison: on equal min_value the earliest tier wins
    best = None
    for b in breaks:
        if lookup_value >= b.min_value and (best is None or b.min_value > best.min_value):
            best = b
    return best


def describe_break(rate_break: RateBreak | None) -> str | None:
    """
    Audit string for a matched tier.

    "10" for an exact tier, "28-+" for an unbounded one, "0-10" otherwise.
    """
    if rate_break is None:
        return None
    if rate_break.is_exact:
        return _fmt(rate_break.min_value)
    upper = "+" if rate_break.max_value is None else _fmt(rate_break.max_value)
    return f"{_fmt(rate_break.min_value)}-{upper}"


def _fmt(value: float) -> str:
    # 28.0 -> "28", 9.99 -> "9.99"
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)
