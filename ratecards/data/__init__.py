"""
Rate Card Data

Reference data and sample files.

Structure:
    - reference/: Static defaults, labels and a sample rate card (CSV)
"""

from pathlib import Path

from .reference import (
    IS_ACTIVE,
    APPLY_BEFORE_PCT,
    WEIGHT_SOURCE,
    PERCENT_DIVISOR,
    CHARGE_TYPE_LABELS,
    RATE_BASIS_LABELS,
    WEIGHT_SOURCE_LABELS,
    MODIFIER_TYPE_LABELS,
    CURRENCY_SYMBOL,
    DATE_FORMAT,
)


REFERENCE_DIR = Path(__file__).parent / "reference"

EXAMPLE_CHARGES = REFERENCE_DIR / "example_charges.csv"
EXAMPLE_BREAKS = REFERENCE_DIR / "example_breaks.csv"
EXAMPLE_MODIFIERS = REFERENCE_DIR / "example_modifiers.csv"

__all__ = [
    "REFERENCE_DIR",
    "EXAMPLE_CHARGES",
    "EXAMPLE_BREAKS",
    "EXAMPLE_MODIFIERS",
    # Charge defaults
    "IS_ACTIVE",
    "APPLY_BEFORE_PCT",
    "WEIGHT_SOURCE",
    "PERCENT_DIVISOR",
    # Labels
    "CHARGE_TYPE_LABELS",
    "RATE_BASIS_LABELS",
    "WEIGHT_SOURCE_LABELS",
    "MODIFIER_TYPE_LABELS",
    "CURRENCY_SYMBOL",
    "DATE_FORMAT",
]
