"""
Reference Data

Static defaults, display labels and a sample rate card.
"""

from .defaults import IS_ACTIVE, APPLY_BEFORE_PCT, WEIGHT_SOURCE, PERCENT_DIVISOR
from .labels import (
    CHARGE_TYPE_LABELS,
    RATE_BASIS_LABELS,
    WEIGHT_SOURCE_LABELS,
    MODIFIER_TYPE_LABELS,
    CURRENCY_SYMBOL,
    DATE_FORMAT,
)

__all__ = [
    "IS_ACTIVE",
    "APPLY_BEFORE_PCT",
    "WEIGHT_SOURCE",
    "PERCENT_DIVISOR",
    "CHARGE_TYPE_LABELS",
    "RATE_BASIS_LABELS",
    "WEIGHT_SOURCE_LABELS",
    "MODIFIER_TYPE_LABELS",
    "CURRENCY_SYMBOL",
    "DATE_FORMAT",
]
