"""
Peppa - Test Configuration and Fixtures

Common fixtures and card helpers for all test modules.
"""

import random
from typing import Callable, Iterable

import pytest

from src.config.settings import Settings
from src.engine.base import Card, GameConfig, GameStatus
from src.engine.deck import build_deck, sort_hand
from src.engine.game import HeartsEngine
from src.engine.state import GameState, PlayerState


def cards(*ids: str) -> tuple[Card, ...]:
    """Build cards from ids such as ``"Q-spades"``."""
    return tuple(Card.from_id(card_id) for card_id in ids)


# =============================================================================
# CONFIGURATION
# =============================================================================

@pytest.fixture
def game_config() -> GameConfig:
    return GameConfig(total_rounds=4, bot_names=("Robbie", "HAL 9000", "T-800"))


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with near-zero delays so sessions run quickly."""
    return Settings(
        total_rounds=4,
        human_turn_seconds=5,
        bot_turn_seconds=1,
        bot_move_delay=0,
        trick_resolve_delay=0,
        pass_delay=0,
        advisory_enabled=False,
        advisory_api_key=None,
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(20240601)


# =============================================================================
# GAME STATE FIXTURES
# =============================================================================

@pytest.fixture
def ordered_deck() -> tuple[Card, ...]:
    """
    Unshuffled deck: dealing it gives seat 0 every club, seat 1 every
    diamond, seat 2 every heart and seat 3 every spade.
    """
    return build_deck()


@pytest.fixture
def new_game(game_config, rng) -> GameState:
    return HeartsEngine.new_game(game_config, rng)


@pytest.fixture
def dealt_state(new_game, ordered_deck) -> GameState:
    """Round 1 in the passing phase, dealt from the ordered deck."""
    return HeartsEngine.start_round(new_game, deck=ordered_deck)


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    """
    Factory for a game in the playing phase with the given hands.

    Usage:
        state = make_state([["2-clubs"], ["3-clubs"], [], []], turn_index=0)
    """

    def _make(hands: Iterable[Iterable[str]], **overrides) -> GameState:
        players = overrides.pop("players", None) or tuple(
            PlayerState(id=seat, name=f"P{seat}", hand=sort_hand(cards(*hand)))
            for seat, hand in enumerate(hands)
        )
        fields = {
            "players": players,
            "dealer_offset": 0,
            "total_rounds": 4,
            "status": GameStatus.PLAYING,
        }
        fields.update(overrides)
        return GameState(**fields)

    return _make
