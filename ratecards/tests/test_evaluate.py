"""
Unit Tests for Rate Card Evaluation

Tests charge line arithmetic, percentage base ordering and the simulator.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from ratecards.charges import ChargeType, Scenario, charge
from ratecards.evaluate import evaluate_charge, evaluate_rate_card, simulate
from ratecards.thermal import Compartment, OrderMode, modifier


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def scenario():
    return Scenario(weight=12.0, distance=380.5)


@pytest.fixture
def full_card():
    """Base fee, tiered freight, distance and fuel percentage."""
    return [
        charge("BASE", "FLAT", 150, 0, label="Cargo base"),
        charge("FREIGHT", "PER_WEIGHT", 45, 1, breaks=[(0, 9.99, 50), (10, 24.99, 45), (25, None, 40)]),
        charge("DISTANCE", "PER_DISTANCE", 1.2, 2),
        charge("FUEL", "PERCENTAGE", 12, 3, apply_before_pct=False),
    ]


# =============================================================================
# CONCRETE SCENARIOS
# =============================================================================

class TestScenarios:
    """Reference figures for each rate basis."""

    def test_flat(self):
        result = evaluate_rate_card([charge("BASE", "FLAT", 100, 0)], Scenario(7, 3))
        assert result.subtotal == pytest.approx(100.0)

    def test_per_distance(self):
        result = evaluate_rate_card([charge("DISTANCE", "PER_DISTANCE", 5.5, 0)], Scenario(0, 380.5))
        assert result.line_items[0].amount == pytest.approx(2092.75)

    def test_per_weight_actual(self):
        c = charge("FREIGHT", "PER_WEIGHT", 0, 0, breaks=[(0, 10, 50), (10, None, 40)])
        result = evaluate_rate_card([c], Scenario(12, 0))
        item = result.line_items[0]
        assert item.effective_rate == 40
        assert item.amount == pytest.approx(480.0)
        assert item.matched_break == "10-+"

    def test_per_weight_truck_capacity(self):
        c = charge(
            "FREIGHT", "PER_WEIGHT", 0, 0,
            weight_source="TRUCK_CAPACITY",
            breaks=[(20, 20, 300), (28, 28, 380)],
        )
        item = evaluate_rate_card([c], Scenario(30, 0)).line_items[0]
        assert item.effective_rate == 380
        assert item.amount == pytest.approx(11400.0)
        assert item.matched_break == "28"

    def test_percentage_of_flat(self):
        charges = [
            charge("BASE", "FLAT", 1000, 0, apply_before_pct=True),
            charge("FUEL", "PERCENTAGE", 10, 1),
        ]
        result = evaluate_rate_card(charges, Scenario(5, 5))
        assert [i.amount for i in result.line_items] == pytest.approx([1000.0, 100.0])
        assert result.subtotal == pytest.approx(1100.0)


# =============================================================================
# CHARGE LINES
# =============================================================================

class TestEvaluateCharge:
    """Tests for single charge evaluation."""

    def test_flat_ignores_dimension(self):
        item = evaluate_charge(charge("BASE", "FLAT", 75, 0), Scenario(99, 99), 500)
        assert item.amount == pytest.approx(75.0)

    def test_percentage_uses_running_base(self):
        item = evaluate_charge(charge("FUEL", "PERCENTAGE", 12, 0), Scenario(1, 1), 2000)
        assert item.amount == pytest.approx(240.0)

    def test_no_matching_tier_falls_back_to_value(self):
        c = charge("FREIGHT", "PER_WEIGHT", 42, 0, breaks=[(10, None, 40)])
        item = evaluate_charge(c, Scenario(5, 0), 0)
        assert item.effective_rate == 42
        assert item.amount == pytest.approx(210.0)
        assert item.matched_break is None

    def test_capacity_below_every_tier_falls_back(self):
        c = charge(
            "FREIGHT", "PER_WEIGHT", 250, 0,
            weight_source="TRUCK_CAPACITY",
            breaks=[(20, 20, 300)],
        )
        item = evaluate_charge(c, Scenario(12, 0), 0)
        assert item.effective_rate == 250

    def test_truck_capacity_dimension(self):
        """A given truck capacity is both lookup value and multiplier."""
        c = charge(
            "FREIGHT", "PER_WEIGHT", 0, 0,
            weight_source="TRUCK_CAPACITY",
            breaks=[(20, 20, 300), (28, 28, 380)],
        )
        item = evaluate_charge(c, Scenario(weight=12, distance=0, truck_capacity=28), 0)
        assert item.amount == pytest.approx(380 * 28)

    def test_actual_weight_ignores_truck_capacity(self):
        c = charge("FREIGHT", "PER_WEIGHT", 0, 0, breaks=[(0, None, 10)])
        item = evaluate_charge(c, Scenario(weight=12, distance=0, truck_capacity=28), 0)
        assert item.amount == pytest.approx(120.0)

    def test_malformed_table_does_not_raise(self):
        """Invalid bounds just never match."""
        c = charge("FREIGHT", "PER_WEIGHT", 30, 0, breaks=[(10, 5, 99)])
        item = evaluate_charge(c, Scenario(7, 0), 0)
        assert item.amount == pytest.approx(210.0)

    def test_line_item_metadata(self):
        item = evaluate_charge(charge("BASE", "FLAT", 1, 0, label="Peaje"), Scenario(0, 0), 0)
        assert item.charge_type is ChargeType.BASE
        assert item.label == "Peaje"


# =============================================================================
# RATE CARDS
# =============================================================================

class TestEvaluateRateCard:
    """Tests for ordering, activity and the percentage base."""

    def test_full_card(self, full_card, scenario):
        result = evaluate_rate_card(full_card, scenario)
        amounts = [i.amount for i in result.line_items]
        base = 150 + 45 * 12 + 1.2 * 380.5
        assert amounts == pytest.approx([150.0, 540.0, 456.6, base * 0.12])
        assert result.subtotal == pytest.approx(base * 1.12)

    def test_subtotal_is_sum_of_items(self, full_card, scenario):
        result = evaluate_rate_card(full_card, scenario)
        assert result.subtotal == pytest.approx(sum(i.amount for i in result.line_items))

    def test_inactive_excluded(self, full_card, scenario):
        charges = full_card + [charge("HYBRID", "FLAT", 999, 9, is_active=False)]
        result = evaluate_rate_card(charges, scenario)
        assert len(result.line_items) == 4
        assert result.subtotal == pytest.approx(evaluate_rate_card(full_card, scenario).subtotal)

    def test_sorted_by_priority(self, full_card, scenario):
        result = evaluate_rate_card(list(reversed(full_card)), scenario)
        assert [i.charge_type for i in result.line_items] == [
            ChargeType.BASE, ChargeType.FREIGHT, ChargeType.DISTANCE, ChargeType.FUEL,
        ]

    def test_percentage_only_sees_earlier_charges(self):
        charges = [
            charge("FUEL", "PERCENTAGE", 10, 0),
            charge("BASE", "FLAT", 1000, 1),
        ]
        result = evaluate_rate_card(charges, Scenario(0, 0))
        assert result.line_items[0].amount == pytest.approx(0.0)
        assert result.subtotal == pytest.approx(1000.0)

    def test_percentage_not_accumulated(self):
        """A percentage charge never feeds a later percentage charge."""
        charges = [
            charge("BASE", "FLAT", 1000, 0),
            charge("FUEL", "PERCENTAGE", 10, 1, apply_before_pct=True),
            charge("FUEL", "PERCENTAGE", 5, 2),
        ]
        result = evaluate_rate_card(charges, Scenario(0, 0))
        assert result.line_items[2].amount == pytest.approx(50.0)

    def test_apply_before_pct_false_excluded_from_base(self):
        charges = [
            charge("BASE", "FLAT", 1000, 0),
            charge("DISTANCE", "PER_DISTANCE", 2, 1, apply_before_pct=False),
            charge("FUEL", "PERCENTAGE", 10, 2),
        ]
        result = evaluate_rate_card(charges, Scenario(0, 100))
        assert result.line_items[2].amount == pytest.approx(100.0)
        assert result.subtotal == pytest.approx(1300.0)

    def test_order_sensitivity(self):
        """Swapping priorities changes the percentage, not the swapped amounts."""
        feeding = charge("BASE", "FLAT", 1000, 0, apply_before_pct=True)
        skipped = charge("DISTANCE", "FLAT", 500, 2, apply_before_pct=False)
        pct = charge("FUEL", "PERCENTAGE", 10, 1)

        before = evaluate_rate_card([feeding, skipped, pct], Scenario(0, 0))
        after = evaluate_rate_card(
            [feeding._replace(priority=2), skipped._replace(priority=0), pct],
            Scenario(0, 0),
        )

        def amount(result, charge_type):
            return next(i.amount for i in result.line_items if i.charge_type is charge_type)

        assert amount(before, ChargeType.FUEL) == pytest.approx(100.0)
        assert amount(after, ChargeType.FUEL) == pytest.approx(0.0)
        assert amount(before, ChargeType.BASE) == amount(after, ChargeType.BASE)
        assert amount(before, ChargeType.DISTANCE) == amount(after, ChargeType.DISTANCE)

    def test_idempotent(self, full_card, scenario):
        assert evaluate_rate_card(full_card, scenario) == evaluate_rate_card(full_card, scenario)

    def test_empty(self, scenario):
        result = evaluate_rate_card([], scenario)
        assert result.line_items == ()
        assert result.subtotal == 0.0


# =============================================================================
# SIMULATOR
# =============================================================================

class TestSimulate:
    """Tests for the end-to-end quote."""

    def test_standard_with_modifier(self, full_card, scenario):
        mods = [modifier("REFRIGERADO", "MULTIPLIER", 1.15)]
        quote = simulate(full_card, scenario, mods, thermal_profile="REFRIGERADO")
        assert quote.mode is OrderMode.STANDARD
        assert quote.total == pytest.approx(quote.subtotal * 1.15)

    def test_standard_unknown_profile(self, full_card, scenario):
        mods = [modifier("REFRIGERADO", "MULTIPLIER", 1.15)]
        quote = simulate(full_card, scenario, mods, thermal_profile="CONGELADO")
        assert quote.total == quote.subtotal

    def test_standard_no_profile(self, full_card, scenario):
        quote = simulate(full_card, scenario)
        assert quote.total == quote.subtotal
        assert quote.compartments == ()

    def test_hybrid(self):
        charges = [charge("BASE", "FLAT", 1000, 0)]
        mods = [modifier("A", "MULTIPLIER", 1.1), modifier("B", "FIXED_ADD", 50)]
        quote = simulate(
            charges, Scenario(5, 0), mods,
            mode=OrderMode.HYBRID,
            compartments=[Compartment("A", 2), Compartment("B", 3)],
        )
        assert quote.total == pytest.approx(1090.0)
        assert [c.cost for c in quote.compartments] == pytest.approx([440.0, 650.0])

    def test_hybrid_ignores_thermal_profile(self):
        charges = [charge("BASE", "FLAT", 1000, 0)]
        mods = [modifier("A", "MULTIPLIER", 2)]
        quote = simulate(charges, Scenario(0, 0), mods, mode="HYBRID", thermal_profile="A")
        assert quote.total == pytest.approx(1000.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
