"""
Peppa - Session Event Tests

Tests for mapping state changes to session events.
"""

from dataclasses import replace

import pytest

from src.engine.base import Card, GameStatus, Play
from src.engine.trick import TrickEngine
from src.runtime.events import EventPayload, GameEvent, classify_transition

C = Card.from_id


@pytest.fixture
def playing_state(make_state):
    return make_state(
        [["2-clubs"], ["3-clubs", "4-hearts"], ["5-clubs"], ["6-clubs"]],
        turn_index=0,
    )


class TestClassifyTransition:
    """Tests for classify_transition()."""

    @pytest.mark.parametrize(
        "old_status, new_status, expected",
        [
            (GameStatus.DEALING, GameStatus.PASSING, GameEvent.ROUND_DEALT),
            (GameStatus.PASSING, GameStatus.RECEIVING, GameEvent.PASS_EXECUTED),
            (GameStatus.RECEIVING, GameStatus.PLAYING, GameEvent.PLAY_STARTED),
            (GameStatus.PLAYING, GameStatus.SCORING, GameEvent.ROUND_SETTLED),
            (GameStatus.PLAYING, GameStatus.GAME_OVER, GameEvent.GAME_OVER),
            (GameStatus.SCORING, GameStatus.DEALING, GameEvent.ROUND_ADVANCED),
        ],
    )
    def test_phase_changes(self, playing_state, old_status, new_status, expected):
        old = replace(playing_state, status=old_status)
        new = replace(playing_state, status=new_status)
        assert classify_transition(old, new) is expected

    def test_card_played(self, playing_state):
        new = TrickEngine.play_card(playing_state, 0, C("2-clubs"))
        assert classify_transition(playing_state, new) is GameEvent.CARD_PLAYED

    def test_trick_resolved(self, playing_state):
        full = replace(
            playing_state,
            current_trick=(
                Play(0, C("7-clubs")),
                Play(1, C("8-clubs")),
                Play(2, C("9-clubs")),
                Play(3, C("10-clubs")),
            ),
        )
        resolved = TrickEngine.resolve_trick(full)
        assert classify_transition(full, resolved) is GameEvent.TRICK_RESOLVED

    def test_other_changes(self, playing_state):
        new = playing_state.evolve(hearts_broken=True)
        assert classify_transition(playing_state, new) is GameEvent.STATE_UPDATED


class TestEventPayload:
    """Tests for EventPayload."""

    def test_snapshot(self, playing_state):
        payload = EventPayload(event=GameEvent.STATE_UPDATED, state=playing_state)
        snapshot = payload.snapshot
        assert snapshot["gameStatus"] == "playing"
        assert snapshot["version"] == playing_state.version
        assert payload.data == {}
