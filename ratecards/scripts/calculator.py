"""
Rate Card Cost Calculator
=========================

Interactive CLI tool to price a single order against a rate card.

Usage:
    python -m ratecards.scripts.calculator
    python -m ratecards.scripts.calculator --charges charges.csv --breaks breaks.csv --modifiers modifiers.csv
"""

import argparse
from datetime import date

from ratecards.charges import RateCard, Scenario, WeightSource, check_rate_card
from ratecards.evaluate import Quote, simulate
from ratecards.formatting import (
    format_charge,
    format_charge_type,
    format_currency,
    format_modifier,
    format_rate_card,
    format_weight_source,
)
from ratecards.loaders import load_example_rate_card, load_rate_card_csv
from ratecards.thermal import Compartment, OrderMode
from ratecards.version import VERSION


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Price one order against a rate card")
    parser.add_argument("--charges", help="Charges CSV (default: bundled example)")
    parser.add_argument("--breaks", help="Breaks CSV")
    parser.add_argument("--modifiers", help="Thermal modifiers CSV")
    return parser.parse_args(argv)


def _optional_float(prompt: str) -> float | None:
    raw = input(prompt).strip()
    return float(raw) if raw else None


def get_user_input(profiles: list[str]) -> dict:
    """Prompt user for order details."""
    print("\n=== Rate Card Cost Calculator ===")
    print(f"Version: {VERSION}\n")

    weight = float(input("Weight (tons): "))
    distance = float(input("Distance (km): "))
    truck_capacity = _optional_float("Truck capacity (tons) [default: weight]: ")

    order = {
        "scenario": Scenario(weight, distance, truck_capacity),
        "mode": OrderMode.STANDARD,
        "thermal_profile": None,
        "compartments": [],
    }

    if not profiles:
        return order

    print("\nOrder type:")
    print("  1. Standard")
    print("  2. Hybrid (several compartments)")
    choice = input("Select (1 or 2) [default: 1]: ").strip()

    print(f"\nThermal profiles: {', '.join(profiles)}")

    if choice == "2":
        order["mode"] = OrderMode.HYBRID
        while True:
            profile = input("Compartment profile (blank to finish): ").strip()
            if not profile:
                break
            order["compartments"].append(Compartment(profile, float(input("  Weight (tons): "))))
    else:
        profile = input("Thermal profile (blank for none): ").strip()
        order["thermal_profile"] = profile or None

    return order


def print_results(quote: Quote, order: dict) -> None:
    """Print calculation results."""
    scenario = order["scenario"]

    print("\n" + "=" * 50)
    print("CALCULATION RESULTS")
    print("=" * 50)

    print(f"\nOrder: {scenario.weight} tons, {scenario.distance} km", end="")
    if scenario.truck_capacity is not None:
        print(f", truck {scenario.truck_capacity} tons")
    else:
        print()

    print("\n--- Cost Breakdown ---")
    for item in quote.line_items:
        name = item.label or format_charge_type(item.charge_type)
        tier = f" [{item.matched_break}]" if item.matched_break else ""
        print(f"{name + tier:<34} {format_currency(item.amount):>14}")

    print(f"{'':<34} {'-' * 14}")
    print(f"{'Subtotal':<34} {format_currency(quote.subtotal):>14}")

    if quote.mode == OrderMode.HYBRID:
        for c in quote.compartments:
            print(f"  {c.thermal_profile} ({c.weight} t): {format_currency(c.portion)} -> {format_currency(c.cost)}")
    elif order["thermal_profile"]:
        print(f"Thermal profile: {order['thermal_profile']}")

    print(f"{'':<34} {'=' * 14}")
    print(f"{'TOTAL':<34} {format_currency(quote.total):>14}")
    print()


def card_warnings(card: RateCard, day: date) -> list[str]:
    """Authoring errors plus inactive/out-of-window notices for a rate card."""
    warnings = [f"{error.field}: {error.message}" for error in check_rate_card(card)]
    if not card.is_active:
        warnings.append("rate card is inactive")
    if not card.is_valid_on(day):
        warnings.append(f"rate card is not valid on {day.isoformat()}")
    return warnings


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    try:
        if args.charges:
            card = load_rate_card_csv(args.charges, args.breaks, args.modifiers)
        else:
            card = load_example_rate_card()

        print(f"\nRate card: {format_rate_card(card)}")

        # Evaluation still degrades to flat rates on authoring errors
        for warning in card_warnings(card, date.today()):
            print(f"Warning: {warning}")

        print("\nCharges:")
        for c in sorted(card.charges, key=lambda c: c.priority):
            source = ""
            if c.weight_source == WeightSource.TRUCK_CAPACITY:
                source = f" ({format_weight_source(c.weight_source)})"
            status = "" if c.is_active else " (inactive)"
            print(f"  {c.priority}. {format_charge(c)}{source}{status}")

        if card.thermal_modifiers:
            print("\nThermal modifiers:")
            for m in card.thermal_modifiers:
                print(f"  {format_modifier(m)}")

        profiles = [m.thermal_profile for m in card.thermal_modifiers]
        order = get_user_input(profiles)

        quote = simulate(
            card.charges,
            order["scenario"],
            card.thermal_modifiers,
            mode=order["mode"],
            thermal_profile=order["thermal_profile"],
            compartments=order["compartments"],
        )

        print_results(quote, order)

    except KeyboardInterrupt:
        print("\n\nCancelled.")
    except Exception as e:
        print(f"\nError: {e}")
        raise


if __name__ == "__main__":
    main()
