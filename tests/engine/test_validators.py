"""
Peppa - Validator Tests

Tests for invariant checks that guard engine inputs.
"""

import pytest

from src.engine.base import Card
from src.engine.deck import build_deck
from src.engine.validators import (
    validate_deal,
    validate_pass_selection,
    validate_player_id,
    validate_unique_cards,
)

C = Card.from_id


class TestValidateUniqueCards:
    def test_accepts_distinct(self):
        assert len(validate_unique_cards(build_deck())) == 52

    def test_rejects_duplicate(self):
        with pytest.raises(ValueError, match="Duplicate card 2-clubs"):
            validate_unique_cards([C("2-clubs"), C("2-clubs")])


class TestValidateDeal:
    def test_accepts_full_deal(self):
        deck = build_deck()
        hands = [deck[i * 13:(i + 1) * 13] for i in range(4)]
        assert len(validate_deal(hands)) == 4

    def test_rejects_three_hands(self):
        deck = build_deck()
        with pytest.raises(ValueError, match="Expected 4 hands"):
            validate_deal([deck[:13], deck[13:26], deck[26:39]])

    def test_rejects_uneven_hands(self):
        deck = build_deck()
        hands = [deck[:14], deck[14:26], deck[26:39], deck[39:]]
        with pytest.raises(ValueError, match="Hand 0 has 14 cards"):
            validate_deal(hands)


class TestValidatePlayerId:
    @pytest.mark.parametrize("seat", [0, 1, 2, 3])
    def test_valid(self, seat):
        assert validate_player_id(seat) == seat

    @pytest.mark.parametrize("seat", [-1, 4])
    def test_out_of_range(self, seat):
        with pytest.raises(ValueError, match="0-3"):
            validate_player_id(seat)

    def test_non_integer(self):
        with pytest.raises(ValueError, match="integer"):
            validate_player_id("1")


class TestValidatePassSelection:
    HAND = (C("2-clubs"), C("A-clubs"), C("K-hearts"), C("Q-spades"))

    def test_valid(self):
        ids = ("A-clubs", "K-hearts", "Q-spades")
        assert validate_pass_selection(self.HAND, ids) == ids

    def test_wrong_count(self):
        with pytest.raises(ValueError, match="Exactly 3"):
            validate_pass_selection(self.HAND, ["A-clubs"])

    def test_duplicates(self):
        with pytest.raises(ValueError, match="duplicates"):
            validate_pass_selection(self.HAND, ["A-clubs", "A-clubs", "K-hearts"])

    def test_not_in_hand(self):
        with pytest.raises(ValueError, match="not in hand"):
            validate_pass_selection(self.HAND, ["A-clubs", "K-hearts", "3-diamonds"])
