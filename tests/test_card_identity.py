"""
Tests for card identity derivation and LoyaltyCard value semantics.
"""

import pytest
from pydantic import ValidationError

from loyalty_keyring.models.card import (
    LoyaltyCard,
    make_card_id,
    parse_card_id,
    format_from_id,
    data_from_id,
)


class TestCardId:
    """make_card_id / parse_card_id behavior."""

    def test_make_card_id(self):
        assert make_card_id("QR_CODE", "abc123") == "QR_CODE:abc123"

    @pytest.mark.parametrize("format, data", [
        ("QR_CODE", "abc123"),
        ("QR_CODE", "WIFI:S:home;T:WPA;P:secret;;"),
        ("CODE_128", ":leading-colon"),
        ("QR_CODE", "trailing:"),
        ("QR_CODE", ""),
        ("QR_CODE", "line one\nline two"),
    ])
    def test_round_trip_keeps_colons_in_data(self, format, data):
        card_id = make_card_id(format, data)
        assert parse_card_id(card_id) == (format, data)
        assert format_from_id(card_id) == format
        assert data_from_id(card_id) == data

    def test_format_is_text_before_first_colon(self):
        assert parse_card_id("EAN_13:12:34:56") == ("EAN_13", "12:34:56")

    def test_id_without_separator_is_rejected(self):
        assert parse_card_id("no-separator") is None
        assert format_from_id("no-separator") is None
        assert data_from_id("no-separator") is None


class TestLoyaltyCard:
    """Value semantics of LoyaltyCard."""

    def test_card_id_property(self):
        card = LoyaltyCard(name="Coffee", format="QR_CODE", data="abc:123")
        assert card.card_id == "QR_CODE:abc:123"

    def test_str_is_display_name(self):
        assert str(LoyaltyCard(name="Coffee", format="QR_CODE", data="abc")) == "Coffee"

    def test_equality_includes_name(self):
        coffee = LoyaltyCard(name="Coffee", format="QR_CODE", data="abc")
        renamed = LoyaltyCard(name="Cafe", format="QR_CODE", data="abc")

        assert coffee == LoyaltyCard(name="Coffee", format="QR_CODE", data="abc")
        assert coffee != renamed
        # Same stored card, different values
        assert coffee.same_card(renamed)
        assert not coffee.same_card(None)

    def test_cards_are_hashable_and_frozen(self):
        card = LoyaltyCard(name="Coffee", format="QR_CODE", data="abc")
        assert len({card, LoyaltyCard(name="Coffee", format="QR_CODE", data="abc")}) == 1

        with pytest.raises(ValidationError):
            card.name = "Other"
