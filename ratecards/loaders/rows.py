"""
Load Rate Card Rows

Builds in-memory rate card records from relational rows (charges, breaks,
thermal modifiers) held in polars DataFrames. The rows can come from any
source (database export, CSV, manual creation) as long as they have the
expected columns.

CHARGE COLUMNS
--------------
    charge_type, rate_basis, value, priority    - required
    label, is_active, apply_before_pct,
    weight_source                               - optional (defaults apply)
    charge_id                                   - join key to break rows

BREAK COLUMNS
-------------
    charge_id, min_value, max_value, rate_value

MODIFIER COLUMNS
----------------
    thermal_profile, modifier_type, value
"""

from datetime import date
from pathlib import Path

import polars as pl

from ..charges import ChargeDefinition, RateBreak, RateCard, charge
from ..data import (
    APPLY_BEFORE_PCT,
    EXAMPLE_BREAKS,
    EXAMPLE_CHARGES,
    EXAMPLE_MODIFIERS,
    IS_ACTIVE,
    WEIGHT_SOURCE,
)
from ..thermal import ThermalModifier, modifier


CHARGE_COLUMNS = ["charge_type", "rate_basis", "value", "priority"]
BREAK_COLUMNS = ["charge_id", "min_value", "max_value", "rate_value"]
MODIFIER_COLUMNS = ["thermal_profile", "modifier_type", "value"]


def _require(df: pl.DataFrame, columns: list[str], what: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"{what} rows missing column(s): {', '.join(missing)}")


def _as_bool(value, default: bool) -> bool:
    """Nullable bool from a CSV/database cell ("true", "1", True, None...)."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("true", "t", "1", "yes")
    return bool(value)


# =============================================================================
# CHARGES
# =============================================================================

def load_breaks(df: pl.DataFrame) -> dict:
    """
    Group break rows by charge_id, keeping row order.

    Returns:
        Dict of charge_id -> list of RateBreak
    """
    _require(df, BREAK_COLUMNS, "Break")

    grouped: dict = {}
    for row in df.iter_rows(named=True):
        grouped.setdefault(row["charge_id"], []).append(RateBreak(
            min_value=float(row["min_value"]),
            max_value=None if row["max_value"] is None else float(row["max_value"]),
            rate_value=float(row["rate_value"]),
        ))
    return grouped


def load_charges(
    charges_df: pl.DataFrame,
    breaks_df: pl.DataFrame | None = None,
) -> list[ChargeDefinition]:
    """
    Build ChargeDefinitions from charge rows and (optionally) break rows.

    Args:
        charges_df: One row per charge
        breaks_df: One row per tier, joined on charge_id

    Returns:
        Charges in row order (evaluation sorts them by priority)
    """
    _require(charges_df, CHARGE_COLUMNS, "Charge")

    breaks_by_charge = load_breaks(breaks_df) if breaks_df is not None else {}

    charges = []
    for row in charges_df.iter_rows(named=True):
        charges.append(charge(
            charge_type=row["charge_type"],
            rate_basis=row["rate_basis"],
            value=row["value"],
            priority=row["priority"],
            label=row.get("label"),
            is_active=_as_bool(row.get("is_active"), IS_ACTIVE),
            apply_before_pct=_as_bool(row.get("apply_before_pct"), APPLY_BEFORE_PCT),
            weight_source=row.get("weight_source") or WEIGHT_SOURCE,
            breaks=breaks_by_charge.get(row.get("charge_id")),
        ))
    return charges


# =============================================================================
# MODIFIERS
# =============================================================================

def load_modifiers(df: pl.DataFrame) -> list[ThermalModifier]:
    """Build ThermalModifiers from modifier rows."""
    _require(df, MODIFIER_COLUMNS, "Modifier")
    return [
        modifier(str(row["thermal_profile"]), row["modifier_type"], row["value"])
        for row in df.iter_rows(named=True)
    ]


# =============================================================================
# CSV
# =============================================================================

def read_charges_csv(path: Path | str) -> pl.DataFrame:
    return pl.read_csv(
        path,
        schema_overrides={"label": pl.Utf8, "weight_source": pl.Utf8},
    )


def read_breaks_csv(path: Path | str) -> pl.DataFrame:
    return pl.read_csv(
        path,
        schema_overrides={
            "min_value": pl.Float64,
            "max_value": pl.Float64,  # Empty cell = unbounded
            "rate_value": pl.Float64,
        },
    )


def read_modifiers_csv(path: Path | str) -> pl.DataFrame:
    return pl.read_csv(path, schema_overrides={"thermal_profile": pl.Utf8})


def load_rate_card_csv(
    charges_path: Path | str,
    breaks_path: Path | str | None = None,
    modifiers_path: Path | str | None = None,
    lane: str = "CSV",
    valid_from: date | None = None,
    name: str | None = None,
) -> RateCard:
    """Load a rate card from CSV files (breaks and modifiers optional)."""
    charges_df = read_charges_csv(charges_path)
    breaks_df = read_breaks_csv(breaks_path) if breaks_path is not None else None
    modifiers = load_modifiers(read_modifiers_csv(modifiers_path)) if modifiers_path is not None else []

    return RateCard(
        lane=lane,
        valid_from=valid_from or date.today(),
        charges=tuple(load_charges(charges_df, breaks_df)),
        thermal_modifiers=tuple(modifiers),
        name=name,
    )


def load_example_rate_card() -> RateCard:
    """Sample rate card shipped in data/reference."""
    return load_rate_card_csv(
        EXAMPLE_CHARGES,
        EXAMPLE_BREAKS,
        EXAMPLE_MODIFIERS,
        lane="EXAMPLE",
        valid_from=date(2026, 1, 1),
        name="Tarifa de ejemplo",
    )
