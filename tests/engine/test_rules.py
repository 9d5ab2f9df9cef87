"""
Peppa - Rules Tests

Tests for pass-direction sequencing, legality, trick resolution and ranking.
"""

from dataclasses import replace

import pytest

from src.engine.base import Card, GameStatus, PassDirection, Play, Suit
from src.engine.rules import (
    direction_for_round,
    get_rank,
    is_legal_play,
    legal_cards,
    legal_cards_for,
    rank_scores,
    standings,
    trick_points,
    trick_winner,
)

C = Card.from_id


def hand(*ids):
    return tuple(C(card_id) for card_id in ids)


class TestDirectionForRound:
    """Tests for direction_for_round()."""

    def test_eight_round_cycle(self):
        assert [direction_for_round(n) for n in range(1, 9)] == [
            PassDirection.RIGHT,
            PassDirection.LEFT,
            PassDirection.ACROSS,
            PassDirection.NONE,
            PassDirection.RIGHT,
            PassDirection.LEFT,
            PassDirection.ACROSS,
            PassDirection.NONE,
        ]


class TestLegalCards:
    """Tests for legal_cards() and is_legal_play()."""

    def test_must_follow_lead_suit(self):
        cards = hand("2-clubs", "9-clubs", "K-spades", "5-hearts")
        assert legal_cards(cards, Suit.CLUBS, hearts_broken=False) == hand("2-clubs", "9-clubs")

    def test_off_suit_rejected_when_holding_lead_suit(self):
        cards = hand("2-clubs", "K-spades")
        assert not is_legal_play(C("K-spades"), cards, Suit.CLUBS, hearts_broken=True)

    def test_void_player_may_play_anything(self):
        cards = hand("K-spades", "5-hearts")
        assert legal_cards(cards, Suit.CLUBS, hearts_broken=False) == cards

    def test_void_player_may_play_heart_before_hearts_broken(self):
        cards = hand("K-spades", "5-hearts")
        assert is_legal_play(C("5-hearts"), cards, Suit.DIAMONDS, hearts_broken=False)

    def test_cannot_lead_heart_before_broken(self):
        cards = hand("2-clubs", "5-hearts")
        assert not is_legal_play(C("5-hearts"), cards, None, hearts_broken=False)
        assert legal_cards(cards, None, hearts_broken=False) == hand("2-clubs")

    def test_all_hearts_hand_may_lead_heart(self):
        cards = hand("5-hearts", "Q-hearts")
        assert is_legal_play(C("5-hearts"), cards, None, hearts_broken=False)

    def test_any_lead_once_hearts_broken(self):
        cards = hand("2-clubs", "5-hearts")
        assert legal_cards(cards, None, hearts_broken=True) == cards

    def test_legal_cards_for_ignores_stale_lead_suit(self, make_state):
        state = make_state(
            [["2-clubs", "5-hearts"], [], [], []],
            lead_suit=Suit.HEARTS,
            hearts_broken=False,
        )
        assert legal_cards_for(state, 0) == hand("2-clubs")


class TestTrickWinner:
    """Tests for trick_winner()."""

    def test_highest_of_lead_suit_wins(self):
        plays = (
            Play(0, C("2-hearts")),
            Play(1, C("K-spades")),
            Play(2, C("3-spades")),
            Play(3, C("A-spades")),
        )
        assert trick_winner(plays, Suit.SPADES) == 3

    def test_off_suit_high_card_cannot_win(self):
        plays = (
            Play(2, C("3-clubs")),
            Play(3, C("A-hearts")),
            Play(0, C("A-spades")),
            Play(1, C("2-clubs")),
        )
        assert trick_winner(plays) == 2

    def test_lead_suit_defaults_to_first_card(self):
        plays = (Play(1, C("5-diamonds")), Play(2, C("9-diamonds")))
        assert trick_winner(plays) == 2

    def test_empty_trick_rejected(self):
        with pytest.raises(ValueError):
            trick_winner(())


class TestTrickPoints:
    """Tests for trick_points()."""

    def test_clean_trick_is_baseline(self):
        plays = tuple(Play(i, C(f"{r}-clubs")) for i, r in enumerate(["2", "3", "4", "5"]))
        assert trick_points(plays) == 10

    def test_queen_and_two_hearts(self):
        plays = (
            Play(0, C("K-spades")),
            Play(1, C("Q-spades")),
            Play(2, C("5-hearts")),
            Play(3, C("9-hearts")),
        )
        assert trick_points(plays) == 10 - 5 - 9 - 26 == -30

    def test_partial_trick(self):
        assert trick_points((Play(0, C("A-hearts")),)) == -4


class TestRanking:
    """Tests for rank_scores(), get_rank() and standings()."""

    def test_ties_share_rank_and_skip(self):
        assert rank_scores([10, 10, -5, 20]) == (2, 2, 4, 1)

    def test_all_equal(self):
        assert rank_scores([0, 0, 0, 0]) == (1, 1, 1, 1)

    def _with_scores(self, state, scores, round_points):
        players = tuple(
            replace(p, score=s, points_this_round=r)
            for p, s, r in zip(state.players, scores, round_points)
        )
        return replace(state, players=players)

    def test_round_points_ignored_while_playing(self, make_state):
        state = self._with_scores(make_state([[], [], [], []]), [10, 10, -5, 20], [50, 0, 0, 0])
        assert [get_rank(state, seat) for seat in range(4)] == [2, 2, 4, 1]

    def test_round_points_counted_while_scoring(self, make_state):
        state = self._with_scores(
            make_state([[], [], [], []], status=GameStatus.SCORING),
            [10, 10, -5, 20],
            [50, 0, 0, 0],
        )
        assert get_rank(state, 0) == 1
        assert get_rank(state, 3) == 2

    def test_standings_order(self, make_state):
        state = self._with_scores(make_state([[], [], [], []]), [10, 10, -5, 20], [0, 0, 0, 0])
        assert standings(state) == [(1, 3, 20), (2, 0, 10), (2, 1, 10), (4, 2, -5)]
