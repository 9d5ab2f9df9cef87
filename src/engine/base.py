"""
Peppa - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses) so a game
state can be handed to timers, advisory callbacks and the presentation layer
without anyone observing a half-applied change.
"""

from dataclasses import dataclass, field
from enum import Enum


NUM_PLAYERS = 4
HAND_SIZE = 13
CARDS_TO_PASS = 3
HUMAN_PLAYER_ID = 0

TRICK_BASELINE = 10
QUEEN_OF_SPADES_PENALTY = 26
# 104 (sum of heart values 2..14) + 26 for the queen of spades
TOTAL_PENALTY = 130
SLAM_BONUS = 45
SLAM_PENALTY = -15

BOT_NAME_ROSTER: tuple[str, ...] = (
    "Andrew Martin",
    "Bomb #20",
    "HAL 9000",
    "Joshua WOPR",
    "MU-TH-UR 6000",
    "Neuromancer",
    "Nexus-7",
    "R. Daneel Olivaw",
    "Robbie",
    "SAM 104",
    "T-800",
    "Roy Batty",
)


class Suit(Enum):
    """Card suits. Declaration order is the display order of a sorted hand."""
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]


_SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}


class Rank(Enum):
    """Card ranks, 2 lowest, ace highest."""
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def value_points(self) -> int:
        """Rank-derived value: 2..10 literal, J=11, Q=12, K=13, A=14."""
        return _RANK_VALUES[self]


_RANK_VALUES = {rank: index + 2 for index, rank in enumerate(Rank)}


class PassDirection(Enum):
    """Direction cards travel during the passing phase."""
    RIGHT = "right"
    LEFT = "left"
    ACROSS = "across"
    NONE = "none"

    @property
    def donor_offset(self) -> int | None:
        """Seat offset of the player whose cards a seat receives.

        Seat ``i`` receives from ``(i + donor_offset) % 4``. None when no
        cards move.
        """
        return _DONOR_OFFSETS[self]


_DONOR_OFFSETS = {
    PassDirection.LEFT: 1,
    PassDirection.RIGHT: 3,
    PassDirection.ACROSS: 2,
    PassDirection.NONE: None,
}


class GameStatus(Enum):
    """Phases of the round/game state machine."""
    DEALING = "dealing"
    PASSING = "passing"
    RECEIVING = "receiving"
    PLAYING = "playing"
    SCORING = "scoring"
    GAME_OVER = "gameOver"


@dataclass(frozen=True)
class Card:
    """
    Immutable playing card.

    Attributes:
        suit: The card's suit
        rank: The card's rank
    """
    suit: Suit
    rank: Rank

    @property
    def value(self) -> int:
        return self.rank.value_points

    @property
    def id(self) -> str:
        """Identifier unique within a deck, e.g. ``"Q-spades"``."""
        return f"{self.rank.value}-{self.suit.value}"

    @property
    def label(self) -> str:
        return f"{self.rank.value}{self.suit.symbol}"

    @property
    def is_queen_of_spades(self) -> bool:
        return self.suit is Suit.SPADES and self.rank is Rank.QUEEN

    @property
    def penalty(self) -> int:
        """Points this card subtracts from the trick that captures it."""
        if self.suit is Suit.HEARTS:
            return self.value
        if self.is_queen_of_spades:
            return QUEEN_OF_SPADES_PENALTY
        return 0

    @property
    def is_penalty(self) -> bool:
        return self.penalty > 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "suit": self.suit.value,
            "rank": self.rank.value,
            "value": self.value,
        }

    @classmethod
    def from_id(cls, card_id: str) -> "Card":
        """Rebuild a card from its ``"<rank>-<suit>"`` identifier."""
        rank_text, _, suit_text = card_id.partition("-")
        try:
            return cls(suit=Suit(suit_text), rank=Rank(rank_text))
        except ValueError:
            raise ValueError(f"Invalid card id {card_id!r}") from None

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Play:
    """A single card played into a trick."""
    player_id: int
    card: Card

    def to_dict(self) -> dict:
        return {"playerId": self.player_id, "card": self.card.to_dict()}


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a game session.

    Attributes:
        total_rounds: Number of rounds before the game ends
        human_name: Display name of the human seat
        bot_names: Display names of the three computer seats, or empty to
                   draw them at random from the roster when a game starts
    """
    total_rounds: int = 4
    human_name: str = "Charlie Bartom"
    bot_names: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.total_rounds < 1:
            raise ValueError("A game needs at least one round.")
        if self.bot_names and len(self.bot_names) != NUM_PLAYERS - 1:
            raise ValueError(
                f"Expected {NUM_PLAYERS - 1} bot names, got {len(self.bot_names)}."
            )

    @classmethod
    def from_settings(cls, settings) -> "GameConfig":
        """Build engine configuration from application settings."""
        return cls(total_rounds=settings.total_rounds, human_name=settings.human_name)
