"""
Rate Card Cost Calculator

DataFrame in, DataFrame out. Each row is one order scenario; the output is the
same DataFrame with rate and cost columns appended. Figures match
ratecards.evaluate.evaluate_rate_card for the same scenario, so billing runs
and the interactive simulator agree.

REQUIRED INPUT COLUMNS
----------------------
    weight          - Transported weight (tons)
    distance        - Route distance (km)

OPTIONAL INPUT COLUMNS
----------------------
    truck_capacity  - Rated vehicle capacity; TRUCK_CAPACITY charges fall back
                      to weight where missing or null

OUTPUT COLUMNS ADDED
--------------------
    Per active charge, keyed "<priority>_<charge_type>":
        - rate_<key>   effective rate (tier rate or flat value)
        - break_<key>  matched tier description (tiered charges only)
        - cost_<key>   amount
    Then:
        - cost_subtotal, cost_total, calculator_version

USAGE
-----
    from ratecards.calculate_costs import calculate_costs
    result = calculate_costs(df, charges)
"""

import operator
from functools import reduce

import polars as pl

from .charges import (
    BreakPolicy,
    ChargeDefinition,
    RateBasis,
    RateBreak,
    WeightSource,
    active_in_order,
    charge_key,
    describe_break,
    policy_for,
)
from .data import PERCENT_DIVISOR
from .thermal import ThermalModifier, apply_modifier, find_modifier
from .version import VERSION


REQUIRED_COLUMNS = ["weight", "distance"]


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def calculate_costs(
    df: pl.DataFrame,
    charges: list[ChargeDefinition],
    modifiers: list[ThermalModifier] | tuple = (),
    thermal_profile: str | None = None,
) -> pl.DataFrame:
    """
    Calculate rate card costs for a scenario DataFrame.

    Args:
        df: Scenario DataFrame with required columns (see module docstring)
        charges: Rate card charges (inactive ones are skipped)
        modifiers: Rate card thermal modifiers
        thermal_profile: Thermal profile of the orders (standard mode)

    Returns:
        DataFrame with rate, break and cost columns, subtotal and total
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required column(s): {', '.join(missing)}")

    ordered = active_in_order(charges)

    # Phase 1: Charge lines in priority order
    df = _apply_charges(df, ordered)

    # Phase 2: Totals
    df = _calculate_subtotal(df, ordered)
    df = _apply_thermal(df, modifiers, thermal_profile)

    # Phase 3: Stamp version
    df = _stamp_version(df)

    return df


# =============================================================================
# CHARGE LINES
# =============================================================================

def _apply_charges(df: pl.DataFrame, charges: list[ChargeDefinition]) -> pl.DataFrame:
    """
    Add rate/break/cost columns for each charge.

    The running percentage base is rebuilt as an expression over the cost
    columns of earlier charges that feed it, in evaluation order.
    """
    pct_base = pl.lit(0.0)
    has_capacity = "truck_capacity" in df.columns

    for charge, key in zip(charges, _column_keys(charges)):
        dimension = _dimension(charge, pct_base, has_capacity)

        rate = pl.lit(float(charge.value))
        if charge.has_breaks:
            rate, described = _resolve_breaks(charge, dimension)
            df = df.with_columns(described.alias(f"break_{key}"))

        df = df.with_columns(rate.alias(f"rate_{key}"))
        df = df.with_columns(_amount(charge, pl.col(f"rate_{key}"), dimension, pct_base).alias(f"cost_{key}"))

        if charge.feeds_percentage_base:
            pct_base = pct_base + pl.col(f"cost_{key}")

    return df


def _column_keys(charges: list[ChargeDefinition]) -> list[str]:
    """Column key per charge; repeated keys (unvalidated cards) get a _2, _3 suffix."""
    keys = []
    seen: dict[str, int] = {}
    for charge in charges:
        key = charge_key(charge)
        seen[key] = seen.get(key, 0) + 1
        keys.append(key if seen[key] == 1 else f"{key}_{seen[key]}")
    return keys


def _dimension(charge: ChargeDefinition, pct_base: pl.Expr, has_capacity: bool) -> pl.Expr:
    basis = charge.rate_basis

    if basis == RateBasis.FLAT:
        return pl.lit(1.0)
    if basis == RateBasis.PER_WEIGHT:
        if charge.weight_source == WeightSource.TRUCK_CAPACITY and has_capacity:
            return pl.coalesce(["truck_capacity", "weight"]).cast(pl.Float64)
        return pl.col("weight").cast(pl.Float64)
    if basis == RateBasis.PER_DISTANCE:
        return pl.col("distance").cast(pl.Float64)
    if basis == RateBasis.PERCENTAGE:
        return pct_base

    raise ValueError(f"Unknown rate basis: {basis!r}")


def _resolve_breaks(charge: ChargeDefinition, dimension: pl.Expr) -> tuple[pl.Expr, pl.Expr]:
    """
    Chained when/then over the tiers; the first tier in candidate order wins.

    RANGE keeps list order. CLOSEST_LOWER tries tiers by descending min_value
    (stable, so the earliest of equal tiers wins), which picks the greatest
    min_value at or below the lookup value.
    """
    policy = policy_for(charge.rate_basis, charge.weight_source)

    if policy == BreakPolicy.CLOSEST_LOWER:
        candidates = sorted(charge.breaks, key=lambda b: -b.min_value)
    else:
        candidates = list(charge.breaks)

    rate = pl.lit(float(charge.value))
    described = pl.lit(None, dtype=pl.Utf8)

    for b in reversed(candidates):
        matches = _matches(b, dimension, policy)
        rate = pl.when(matches).then(pl.lit(float(b.rate_value))).otherwise(rate)
        described = pl.when(matches).then(pl.lit(describe_break(b))).otherwise(described)

    return rate, described


def _matches(b: RateBreak, dimension: pl.Expr, policy: BreakPolicy) -> pl.Expr:
    above_min = dimension >= b.min_value
    if policy == BreakPolicy.CLOSEST_LOWER or b.max_value is None:
        return above_min
    return above_min & (dimension < b.max_value)


def _amount(charge: ChargeDefinition, rate: pl.Expr, dimension: pl.Expr, pct_base: pl.Expr) -> pl.Expr:
    if charge.rate_basis == RateBasis.PERCENTAGE:
        return pct_base * (rate / PERCENT_DIVISOR)
    if charge.rate_basis == RateBasis.FLAT:
        return rate
    return rate * dimension


# =============================================================================
# TOTALS
# =============================================================================

def _calculate_subtotal(df: pl.DataFrame, charges: list[ChargeDefinition]) -> pl.DataFrame:
    """
    Calculate cost_subtotal as the sum of all charge costs.

    Added left to right from 0.0 in evaluation order, the same as
    evaluate_rate_card, so float rounding matches.
    """
    cost_cols = [pl.col(f"cost_{key}") for key in _column_keys(charges)]
    subtotal = reduce(operator.add, cost_cols, pl.lit(0.0))
    return df.with_columns(subtotal.alias("cost_subtotal"))


def _apply_thermal(
    df: pl.DataFrame,
    modifiers: list[ThermalModifier] | tuple,
    thermal_profile: str | None,
) -> pl.DataFrame:
    """Calculate cost_total by applying the thermal profile's modifier, if any."""
    selected = find_modifier(modifiers, thermal_profile)
    return df.with_columns(
        apply_modifier(pl.col("cost_subtotal"), selected).alias("cost_total")
    )


def _stamp_version(df: pl.DataFrame) -> pl.DataFrame:
    """Stamp calculator version on output."""
    return df.with_columns(pl.lit(VERSION).alias("calculator_version"))


__all__ = [
    "calculate_costs",
    "REQUIRED_COLUMNS",
]
