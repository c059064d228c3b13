"""
Unit Tests for the Calculator Script

Tests the rate card notices printed before pricing.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from datetime import date

from ratecards.charges import charge
from ratecards.loaders import load_example_rate_card
from ratecards.scripts.calculator import card_warnings


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def card():
    """Sample rate card, valid from 2026-01-01 with no end date."""
    return load_example_rate_card()


# =============================================================================
# CARD WARNINGS
# =============================================================================

class TestCardWarnings:
    """Tests for card_warnings."""

    def test_clean_card(self, card):
        assert card_warnings(card, date(2026, 10, 19)) == []

    def test_inactive_card(self, card):
        warnings = card_warnings(card._replace(is_active=False), date(2026, 10, 19))
        assert warnings == ["rate card is inactive"]

    def test_outside_validity_window(self, card):
        assert card_warnings(card, date(2025, 12, 31)) == ["rate card is not valid on 2025-12-31"]

        expired = card._replace(valid_to=date(2026, 6, 30))
        assert card_warnings(expired, date(2026, 7, 1)) == ["rate card is not valid on 2026-07-01"]

    def test_authoring_errors_carry_field(self, card):
        broken = card._replace(charges=card.charges + (charge("FUEL", "PERCENTAGE", 5, 0),))
        warnings = card_warnings(broken, date(2026, 10, 19))
        assert warnings == ["charges[5].priority: Charges must have unique priorities (0 is repeated)"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
