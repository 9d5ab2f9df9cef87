"""
Peppa Game Engine.

Pure Python Hearts rules with zero UI/network dependencies.
Handles dealing, passing, trick play, round settlement and ranking.
"""

from src.engine.base import (
    Card,
    GameConfig,
    GameStatus,
    PassDirection,
    Play,
    Rank,
    Suit,
)
from src.engine.game import HeartsEngine
from src.engine.passing import PassingEngine
from src.engine.scoring import RoundSummary, SettlementEngine
from src.engine.state import GameState, PlayerState
from src.engine.trick import TrickEngine, TrickResult

__all__ = [
    # Data Classes
    "Card",
    "GameConfig",
    "GameState",
    "Play",
    "PlayerState",
    "RoundSummary",
    "TrickResult",
    # Enums
    "GameStatus",
    "PassDirection",
    "Rank",
    "Suit",
    # Engines
    "HeartsEngine",
    "PassingEngine",
    "SettlementEngine",
    "TrickEngine",
]
