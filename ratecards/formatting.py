"""
Display Formatting

Labels and money/date strings for the rate card console and calculator.
"""

from datetime import date

from .charges import ChargeDefinition, RateBasis, RateCard
from .data import (
    CHARGE_TYPE_LABELS,
    CURRENCY_SYMBOL,
    DATE_FORMAT,
    MODIFIER_TYPE_LABELS,
    RATE_BASIS_LABELS,
    WEIGHT_SOURCE_LABELS,
)
from .thermal import ModifierType, ThermalModifier


def _code(value) -> str:
    return getattr(value, "value", value)


def format_charge_type(charge_type) -> str:
    """Display label for a charge type; unknown codes are returned as-is."""
    code = _code(charge_type)
    return CHARGE_TYPE_LABELS.get(code, code)


def format_rate_basis(rate_basis) -> str:
    """Display label for a rate basis; unknown codes are returned as-is."""
    code = _code(rate_basis)
    return RATE_BASIS_LABELS.get(code, code)


def format_weight_source(weight_source) -> str:
    code = _code(weight_source)
    return WEIGHT_SOURCE_LABELS.get(code, code)


def format_modifier_type(modifier_type) -> str:
    code = _code(modifier_type)
    return MODIFIER_TYPE_LABELS.get(code, code)


def format_modifier(thermal_modifier: ThermalModifier) -> str:
    """
    One-line summary of a thermal modifier.

    "REFRIGERADO - Multiplicador: x1.15" or "SECO - Monto fijo: +$80.00".
    """
    kind = format_modifier_type(thermal_modifier.modifier_type)
    if thermal_modifier.modifier_type == ModifierType.MULTIPLIER:
        amount = f"x{thermal_modifier.value:g}"
    else:
        sign = "+" if thermal_modifier.value >= 0 else ""
        amount = f"{sign}{format_currency(thermal_modifier.value)}"
    return f"{thermal_modifier.thermal_profile} - {kind}: {amount}"


def format_charge(charge: ChargeDefinition) -> str:
    """
    One-line summary of a charge.

    "Flete - Por Tonelada: $45.00" or "Combustible - Recargo: 12.0%".
    The label falls back to the rate basis label.
    """
    kind = format_charge_type(charge.charge_type)
    label = charge.label or format_rate_basis(charge.rate_basis)

    if charge.rate_basis == RateBasis.PERCENTAGE:
        return f"{kind} - {label}: {charge.value}%"
    return f"{kind} - {label}: {CURRENCY_SYMBOL}{charge.value:.2f}"


def format_currency(value: float) -> str:
    """$1,234.50; negatives as -$1,234.50."""
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(value):,.2f}"


def format_date_range(valid_from: date, valid_to: date | None) -> str:
    """Validity window, e.g. "01/01/2026 - 31/12/2026" or "Desde 01/01/2026"."""
    start = valid_from.strftime(DATE_FORMAT)
    if valid_to is None:
        return f"Desde {start}"
    return f"{start} - {valid_to.strftime(DATE_FORMAT)}"


def format_rate_card(card: RateCard) -> str:
    """Header line: name (or lane), validity window and an inactive mark."""
    title = card.name or card.lane
    status = "" if card.is_active else " (inactiva)"
    return f"{title} [{format_date_range(card.valid_from, card.valid_to)}]{status}"
