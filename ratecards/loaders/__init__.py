"""
Loaders Package

Builds rate card records from relational rows and CSV files.
"""

from .rows import (
    load_breaks,
    load_charges,
    load_modifiers,
    read_charges_csv,
    read_breaks_csv,
    read_modifiers_csv,
    load_rate_card_csv,
    load_example_rate_card,
)

__all__ = [
    "load_breaks",
    "load_charges",
    "load_modifiers",
    "read_charges_csv",
    "read_breaks_csv",
    "read_modifiers_csv",
    "load_rate_card_csv",
    "load_example_rate_card",
]
