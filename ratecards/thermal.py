"""
Thermal Adjustment

Post-processes a rate card subtotal for temperature-controlled orders.

Two modes, chosen by the caller:
    STANDARD - one thermal profile for the whole order; its modifier (if any)
               applies to the subtotal.
    HYBRID   - several compartments, each with its own thermal profile. The
               subtotal is split in proportion to compartment weight and each
               portion is adjusted by its own modifier.

Both modes share apply_modifier. A profile without a modifier is no adjustment.
"""

from enum import Enum
from typing import NamedTuple, Sequence


class ModifierType(str, Enum):
    MULTIPLIER = "MULTIPLIER"
    FIXED_ADD = "FIXED_ADD"


class OrderMode(str, Enum):
    STANDARD = "STANDARD"
    HYBRID = "HYBRID"


class ThermalModifier(NamedTuple):
    """Adjustment keyed by thermal profile: amount * value or amount + value."""
    thermal_profile: str
    modifier_type: ModifierType
    value: float


class Compartment(NamedTuple):
    """One temperature compartment of a hybrid order."""
    thermal_profile: str
    weight: float


class CompartmentCost(NamedTuple):
    """Allocated share of the subtotal for one compartment."""
    thermal_profile: str
    weight: float
    portion: float
    cost: float


# =============================================================================
# MODIFIERS
# =============================================================================

def modifier(thermal_profile: str, modifier_type: ModifierType | str, value: float) -> ThermalModifier:
    """Build a ThermalModifier, coercing the type code."""
    return ThermalModifier(thermal_profile, ModifierType(modifier_type), float(value))


def apply_modifier(amount: float, thermal_modifier: ThermalModifier | None) -> float:
    """Apply one modifier to an amount. None leaves the amount unchanged."""
    if thermal_modifier is None:
        return amount
    if thermal_modifier.modifier_type == ModifierType.MULTIPLIER:
        return amount * thermal_modifier.value
    return amount + thermal_modifier.value


def find_modifier(
    modifiers: Sequence[ThermalModifier],
    thermal_profile: str | None,
) -> ThermalModifier | None:
    """First modifier for thermal_profile, or None."""
    if thermal_profile is None:
        return None
    for m in modifiers:
        if m.thermal_profile == thermal_profile:
            return m
    return None


# =============================================================================
# STANDARD
# =============================================================================

def apply_thermal(
    subtotal: float,
    modifiers: Sequence[ThermalModifier],
    thermal_profile: str | None = None,
) -> float:
    """Total for a standard order with an optional thermal profile."""
    return apply_modifier(subtotal, find_modifier(modifiers, thermal_profile))


# =============================================================================
# HYBRID
# =============================================================================

def allocate_hybrid(
    subtotal: float,
    compartments: Sequence[Compartment],
    modifiers: Sequence[ThermalModifier],
) -> tuple[float, tuple[CompartmentCost, ...]]:
    """
    Split subtotal across compartments by weight and adjust each portion.

    Args:
        subtotal: Rate card subtotal
        compartments: Compartments of the hybrid order
        modifiers: Rate card thermal modifiers

    Returns:
        (total, per-compartment breakdown). With no compartments or a
        non-positive total weight the subtotal is returned unadjusted with
        an empty breakdown.
    """
    total_weight = sum(c.weight for c in compartments)
    if not compartments or total_weight <= 0:
        return subtotal, ()

    breakdown = []
    for c in compartments:
        portion = (c.weight / total_weight) * subtotal
        cost = apply_modifier(portion, find_modifier(modifiers, c.thermal_profile))
        breakdown.append(CompartmentCost(c.thermal_profile, c.weight, portion, cost))

    return sum(c.cost for c in breakdown), tuple(breakdown)
