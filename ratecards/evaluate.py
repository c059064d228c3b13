"""
Rate Card Evaluation

Scenario in, cost breakdown out. Pure functions: no I/O, no state kept
between calls, identical inputs give identical figures.

USAGE
-----
    from ratecards.evaluate import evaluate_rate_card
    result = evaluate_rate_card(charges, Scenario(weight=12, distance=380.5))
    result.subtotal
"""

from functools import reduce
from typing import NamedTuple, Sequence

from .charges import (
    ChargeDefinition,
    LineItem,
    RateBasis,
    RateCardResult,
    Scenario,
    WeightSource,
    active_in_order,
    describe_break,
    policy_for,
    resolve_break,
)
from .data import PERCENT_DIVISOR
from .thermal import (
    Compartment,
    CompartmentCost,
    OrderMode,
    ThermalModifier,
    allocate_hybrid,
    apply_thermal,
)


# =============================================================================
# CHARGE LINE
# =============================================================================

def dimension_value(charge: ChargeDefinition, scenario: Scenario, running_pct_base: float) -> float:
    """Scenario quantity the charge's rate applies to."""
    basis = charge.rate_basis

    if basis == RateBasis.FLAT:
        return 1.0
    if basis == RateBasis.PER_WEIGHT:
        if charge.weight_source == WeightSource.TRUCK_CAPACITY and scenario.truck_capacity is not None:
            return scenario.truck_capacity
        return scenario.weight
    if basis == RateBasis.PER_DISTANCE:
        return scenario.distance
    if basis == RateBasis.PERCENTAGE:
        return running_pct_base

    raise ValueError(f"Unknown rate basis: {basis!r}")


def evaluate_charge(charge: ChargeDefinition, scenario: Scenario, running_pct_base: float) -> LineItem:
    """
    Evaluate one charge.

    Args:
        charge: Charge definition
        scenario: Order weight/distance
        running_pct_base: Sum of earlier charges that feed percentage charges

    Returns:
        LineItem with amount, effective rate and matched tier (if any)

    The effective rate comes from the matching tier, or the charge's flat value
    when there are no tiers or none matches.
    """
    dimension = dimension_value(charge, scenario, running_pct_base)

    matched = None
    if charge.has_breaks:
        policy = policy_for(charge.rate_basis, charge.weight_source)
        matched = resolve_break(charge.breaks, dimension, policy)

    rate = matched.rate_value if matched is not None else charge.value

    if charge.rate_basis == RateBasis.PERCENTAGE:
        amount = running_pct_base * (rate / PERCENT_DIVISOR)
    elif charge.rate_basis == RateBasis.FLAT:
        amount = rate
    else:
        amount = rate * dimension

    return LineItem(
        charge_type=charge.charge_type,
        label=charge.label,
        amount=amount,
        effective_rate=rate,
        matched_break=describe_break(matched),
    )


# =============================================================================
# RATE CARD
# =============================================================================

def evaluate_rate_card(charges: Sequence[ChargeDefinition], scenario: Scenario) -> RateCardResult:
    """
    Evaluate every active charge in priority order.

    Folds over the sorted charges carrying (running_pct_base, line_items).
    A PERCENTAGE charge only sees amounts of lower-priority charges with
    apply_before_pct; percentage amounts never feed the base themselves.

    Returns:
        RateCardResult with line items in evaluation order and their sum
    """
    def step(acc: tuple[float, tuple[LineItem, ...]], charge: ChargeDefinition):
        running_pct_base, line_items = acc
        item = evaluate_charge(charge, scenario, running_pct_base)
        if charge.feeds_percentage_base:
            running_pct_base += item.amount
        return running_pct_base, line_items + (item,)

    _, line_items = reduce(step, active_in_order(charges), (0.0, ()))
    subtotal = sum((item.amount for item in line_items), 0.0)

    return RateCardResult(line_items=line_items, subtotal=subtotal)


# =============================================================================
# SIMULATOR
# =============================================================================

class Quote(NamedTuple):
    """Rate card evaluation plus thermal adjustment."""
    line_items: tuple[LineItem, ...]
    subtotal: float
    total: float
    mode: OrderMode
    compartments: tuple[CompartmentCost, ...] = ()


def simulate(
    charges: Sequence[ChargeDefinition],
    scenario: Scenario,
    modifiers: Sequence[ThermalModifier] = (),
    mode: OrderMode = OrderMode.STANDARD,
    thermal_profile: str | None = None,
    compartments: Sequence[Compartment] = (),
) -> Quote:
    """
    Price a scenario end to end.

    STANDARD applies the modifier for thermal_profile (compartments ignored).
    HYBRID allocates the subtotal across compartments (thermal_profile ignored).
    """
    result = evaluate_rate_card(charges, scenario)

    if OrderMode(mode) == OrderMode.HYBRID:
        total, breakdown = allocate_hybrid(result.subtotal, compartments, modifiers)
        return Quote(result.line_items, result.subtotal, total, OrderMode.HYBRID, breakdown)

    total = apply_thermal(result.subtotal, modifiers, thermal_profile)
    return Quote(result.line_items, result.subtotal, total, OrderMode.STANDARD)
