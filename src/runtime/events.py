"""
Peppa - Session Event Definitions

Event types and payloads delivered to the presentation layer after every
accepted state change.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from src.engine.base import GameStatus
from src.engine.state import GameState


class GameEvent(Enum):
    """Events that can occur during a game."""

    GAME_STARTED = auto()
    ROUND_DEALT = auto()
    PASS_EXECUTED = auto()
    PLAY_STARTED = auto()
    CARD_PLAYED = auto()
    FORCED_MOVE = auto()
    TRICK_RESOLVED = auto()
    ROUND_SETTLED = auto()
    SLAM = auto()
    ROUND_ADVANCED = auto()
    GAME_OVER = auto()
    STATE_UPDATED = auto()


@dataclass
class EventPayload:
    """Wrapper for a session event and the state it produced."""

    event: GameEvent
    state: GameState
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def snapshot(self) -> dict[str, Any]:
        return self.state.to_dict()


# Map phase changes to game events
_STATUS_EVENT_MAP: dict[GameStatus, GameEvent] = {
    GameStatus.DEALING: GameEvent.ROUND_ADVANCED,
    GameStatus.PASSING: GameEvent.ROUND_DEALT,
    GameStatus.RECEIVING: GameEvent.PASS_EXECUTED,
    GameStatus.PLAYING: GameEvent.PLAY_STARTED,
    GameStatus.SCORING: GameEvent.ROUND_SETTLED,
    GameStatus.GAME_OVER: GameEvent.GAME_OVER,
}


def classify_transition(old: GameState, new: GameState) -> GameEvent:
    """Determine the game event from a state change."""
    if new.status is not old.status:
        return _STATUS_EVENT_MAP[new.status]
    if len(new.current_trick) > len(old.current_trick):
        return GameEvent.CARD_PLAYED
    if old.is_trick_full and not new.current_trick:
        return GameEvent.TRICK_RESOLVED
    return GameEvent.STATE_UPDATED
