"""
Rate Card Module

Charge evaluation engine for lane/carrier rate cards: tiered breaks,
percentage-of-subtotal charges and thermal adjustments.
"""

from .charges import (
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
    validate_breaks,
    validate_charge,
    validate_rate_card,
    check_rate_card,
)
from .thermal import ModifierType, OrderMode, ThermalModifier, Compartment, modifier
from .evaluate import evaluate_charge, evaluate_rate_card, simulate, Quote
from .calculate_costs import calculate_costs
from .version import VERSION

__all__ = [
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
    "validate_breaks",
    "validate_charge",
    "validate_rate_card",
    "check_rate_card",
    "ModifierType",
    "OrderMode",
    "ThermalModifier",
    "Compartment",
    "modifier",
    "evaluate_charge",
    "evaluate_rate_card",
    "simulate",
    "Quote",
    "calculate_costs",
    "VERSION",
]
