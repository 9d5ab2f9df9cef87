"""
Peppa - Passing Engine Tests

Tests for card selection and the simultaneous three-card exchange.
"""

from collections import Counter
from dataclasses import replace

import pytest

from src.engine.base import Card, GameStatus, PassDirection
from src.engine.deck import sort_hand
from src.engine.heuristics import choose_pass
from src.engine.passing import PassingEngine

C = Card.from_id


def all_cards(state):
    return Counter(card for player in state.players for card in player.hand)


def with_direction(state, direction):
    return replace(state, pass_direction=direction)


def select_heuristic_for_all(state):
    for player in state.players:
        state = PassingEngine.set_selection(state, player.id, choose_pass(player.hand))
    return state


class TestToggleSelection:
    """Tests for PassingEngine.toggle_selection()."""

    def test_select_one(self, dealt_state):
        state = PassingEngine.toggle_selection(dealt_state, "A-clubs")
        assert state.human.selected_to_pass == ("A-clubs",)
        assert state.version == dealt_state.version + 1

    def test_deselect(self, dealt_state):
        state = PassingEngine.toggle_selection(dealt_state, "A-clubs")
        state = PassingEngine.toggle_selection(state, "A-clubs")
        assert state.human.selected_to_pass == ()

    def test_fourth_card_ignored(self, dealt_state):
        state = dealt_state
        for card_id in ("A-clubs", "K-clubs", "Q-clubs"):
            state = PassingEngine.toggle_selection(state, card_id)
        assert PassingEngine.toggle_selection(state, "J-clubs") is state

    def test_deselect_allowed_at_three(self, dealt_state):
        state = dealt_state
        for card_id in ("A-clubs", "K-clubs", "Q-clubs"):
            state = PassingEngine.toggle_selection(state, card_id)
        state = PassingEngine.toggle_selection(state, "K-clubs")
        assert state.human.selected_to_pass == ("A-clubs", "Q-clubs")

    def test_card_not_in_hand_ignored(self, dealt_state):
        assert PassingEngine.toggle_selection(dealt_state, "A-spades") is dealt_state

    def test_ignored_when_no_pass_due(self, dealt_state):
        state = with_direction(dealt_state, PassDirection.NONE)
        assert PassingEngine.toggle_selection(state, "A-clubs") is state

    def test_ignored_outside_passing(self, dealt_state):
        state = replace(dealt_state, status=GameStatus.PLAYING)
        assert PassingEngine.toggle_selection(state, "A-clubs") is state


class TestSetSelection:
    """Tests for PassingEngine.set_selection() and fill_missing_selections()."""

    def test_valid_selection(self, dealt_state):
        state = PassingEngine.set_selection(dealt_state, 2, ["2-hearts", "3-hearts", "4-hearts"])
        assert state.player(2).selected_to_pass == ("2-hearts", "3-hearts", "4-hearts")

    @pytest.mark.parametrize(
        "ids",
        [
            ["2-hearts", "3-hearts"],
            ["2-hearts", "2-hearts", "3-hearts"],
            ["2-hearts", "3-hearts", "2-clubs"],
        ],
    )
    def test_invalid_selection_ignored(self, dealt_state, ids):
        assert PassingEngine.set_selection(dealt_state, 2, ids) is dealt_state

    def test_fill_missing_only_touches_bots(self, dealt_state):
        state = PassingEngine.fill_missing_selections(dealt_state)
        assert state.human.selected_to_pass == ()
        assert set(state.player(3).selected_to_pass) == {"A-spades", "K-spades", "Q-spades"}

    def test_fill_missing_keeps_existing_selection(self, dealt_state):
        state = PassingEngine.set_selection(dealt_state, 1, ["2-diamonds", "3-diamonds", "4-diamonds"])
        state = PassingEngine.fill_missing_selections(state)
        assert state.player(1).selected_to_pass == ("2-diamonds", "3-diamonds", "4-diamonds")


class TestExecutePass:
    """Tests for PassingEngine.execute_pass()."""

    @pytest.mark.parametrize(
        "direction", [PassDirection.LEFT, PassDirection.RIGHT, PassDirection.ACROSS]
    )
    def test_hands_stay_thirteen_and_cards_conserved(self, dealt_state, direction):
        state = select_heuristic_for_all(with_direction(dealt_state, direction))
        before = all_cards(state)
        after = PassingEngine.execute_pass(state)

        assert after.status is GameStatus.RECEIVING
        assert [len(p.hand) for p in after.players] == [13, 13, 13, 13]
        assert all_cards(after) == before

    @pytest.mark.parametrize(
        "direction, donor_of_human",
        [(PassDirection.LEFT, 1), (PassDirection.RIGHT, 3), (PassDirection.ACROSS, 2)],
    )
    def test_human_receives_from_donor(self, dealt_state, direction, donor_of_human):
        state = select_heuristic_for_all(with_direction(dealt_state, direction))
        donor_cards = set(state.player(donor_of_human).selected_to_pass)
        after = PassingEngine.execute_pass(state)

        assert {card.id for card in after.received_cards} == donor_cards
        assert donor_cards <= {card.id for card in after.human.hand}

    def test_passing_right_moves_cards(self, dealt_state):
        state = select_heuristic_for_all(dealt_state)
        after = PassingEngine.execute_pass(state)

        # Seat 1 gets seat 0's top clubs, seat 0 gets seat 3's top spades
        assert {"A-clubs", "K-clubs", "Q-clubs"} <= {c.id for c in after.player(1).hand}
        assert {"A-spades", "K-spades", "Q-spades"} <= {c.id for c in after.player(0).hand}
        assert "A-clubs" not in {c.id for c in after.player(0).hand}

    def test_hands_resorted_after_pass(self, dealt_state):
        after = PassingEngine.execute_pass(select_heuristic_for_all(dealt_state))
        for player in after.players:
            assert player.hand == sort_hand(player.hand)

    def test_selections_cleared(self, dealt_state):
        after = PassingEngine.execute_pass(select_heuristic_for_all(dealt_state))
        assert all(p.selected_to_pass == () for p in after.players)

    def test_starting_player_leads(self, dealt_state):
        after = PassingEngine.execute_pass(select_heuristic_for_all(dealt_state))
        assert after.turn_index == dealt_state.starting_player_index

    def test_incomplete_selection_is_atomic_noop(self, dealt_state):
        state = PassingEngine.fill_missing_selections(dealt_state)
        state = PassingEngine.toggle_selection(state, "A-clubs")
        assert PassingEngine.execute_pass(state) is state

    def test_no_pass_round_keeps_hands(self, dealt_state):
        state = with_direction(dealt_state, PassDirection.NONE)
        after = PassingEngine.execute_pass(state)

        assert after.status is GameStatus.RECEIVING
        assert after.received_cards == ()
        assert [p.hand for p in after.players] == [p.hand for p in state.players]

    def test_not_ready_outside_passing(self, dealt_state):
        state = replace(select_heuristic_for_all(dealt_state), status=GameStatus.PLAYING)
        assert PassingEngine.execute_pass(state) is state
