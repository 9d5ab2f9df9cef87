"""
Peppa - Game State

Immutable player and game state plus the single authoritative table of
phase transitions. Every accepted change produces a new GameState with a
bumped ``version``; rejected changes return the original object untouched,
so callers can test acceptance with ``new is not old``.
"""

import logging
from dataclasses import dataclass, field, replace

from src.engine.base import (
    HUMAN_PLAYER_ID,
    NUM_PLAYERS,
    Card,
    GameStatus,
    PassDirection,
    Play,
    Suit,
)
from src.engine.validators import validate_player_id

logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS: dict[GameStatus, frozenset[GameStatus]] = {
    GameStatus.DEALING: frozenset({GameStatus.PASSING}),
    GameStatus.PASSING: frozenset({GameStatus.RECEIVING}),
    GameStatus.RECEIVING: frozenset({GameStatus.PLAYING}),
    GameStatus.PLAYING: frozenset({GameStatus.SCORING, GameStatus.GAME_OVER}),
    GameStatus.SCORING: frozenset({GameStatus.DEALING}),
    GameStatus.GAME_OVER: frozenset(),
}


@dataclass(frozen=True)
class PlayerState:
    """
    One seat at the table.

    Attributes:
        id: Seat index 0-3 (0 is the human)
        name: Display name
        hand: Cards held, sorted by suit then value
        score: Cumulative score across settled rounds
        points_this_round: Points won in the current round (may be negative)
        tricks_won: Tricks taken in the current round
        selected_to_pass: Ids of up to 3 cards chosen for the pass
    """
    id: int
    name: str
    hand: tuple[Card, ...] = field(default_factory=tuple)
    score: int = 0
    points_this_round: int = 0
    tricks_won: int = 0
    selected_to_pass: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_human(self) -> bool:
        return self.id == HUMAN_PLAYER_ID

    def has_card(self, card_id: str) -> bool:
        return any(card.id == card_id for card in self.hand)

    def find_card(self, card_id: str) -> Card | None:
        for card in self.hand:
            if card.id == card_id:
                return card
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "isHuman": self.is_human,
            "hand": [card.to_dict() for card in self.hand],
            "score": self.score,
            "pointsThisRound": self.points_this_round,
            "tricksWon": self.tricks_won,
            "selectedToPass": list(self.selected_to_pass),
        }


@dataclass(frozen=True)
class GameState:
    """
    Complete state of a game session.

    Attributes:
        players: The four seats, indexed by player id
        dealer_offset: Random seat offset drawn once per game
        total_rounds: Rounds in this game
        round_number: Current round, 1-based
        pass_direction: Passing direction of the current round
        status: Current phase
        current_trick: Plays made into the trick in progress (0-4)
        turn_index: Seat whose turn it is to play
        lead_suit: Suit led in the current trick, if any
        hearts_broken: Whether a heart has been played this round
        winning_message: Slam announcement for the last settled round
        received_cards: Cards the human just received in the pass
        version: Incremented by every accepted transition
    """
    players: tuple[PlayerState, ...]
    dealer_offset: int
    total_rounds: int
    round_number: int = 1
    pass_direction: PassDirection = PassDirection.RIGHT
    status: GameStatus = GameStatus.DEALING
    current_trick: tuple[Play, ...] = field(default_factory=tuple)
    turn_index: int = 0
    lead_suit: Suit | None = None
    hearts_broken: bool = False
    winning_message: str | None = None
    received_cards: tuple[Card, ...] = field(default_factory=tuple)
    version: int = 0

    def __post_init__(self) -> None:
        """Validate seat layout."""
        if len(self.players) != NUM_PLAYERS:
            raise ValueError(f"A game needs exactly {NUM_PLAYERS} players.")
        for index, player in enumerate(self.players):
            if player.id != index:
                raise ValueError(f"Player at seat {index} has id {player.id}.")
        if not (0 <= self.dealer_offset < NUM_PLAYERS):
            raise ValueError(f"Dealer offset must be 0-{NUM_PLAYERS - 1}.")

    @property
    def dealer_index(self) -> int:
        return (self.round_number - 1 + self.dealer_offset) % NUM_PLAYERS

    @property
    def starting_player_index(self) -> int:
        return (self.round_number + self.dealer_offset) % NUM_PLAYERS

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.turn_index]

    @property
    def human(self) -> PlayerState:
        return self.players[HUMAN_PLAYER_ID]

    @property
    def is_trick_full(self) -> bool:
        return len(self.current_trick) == NUM_PLAYERS

    @property
    def is_final_round(self) -> bool:
        return self.round_number >= self.total_rounds

    def player(self, player_id: int) -> PlayerState:
        return self.players[validate_player_id(player_id)]

    def has_played(self, player_id: int) -> bool:
        """Whether ``player_id`` already has a card in the current trick."""
        return any(play.player_id == player_id for play in self.current_trick)

    def with_player(self, player: PlayerState) -> "GameState":
        """Return a copy with one seat replaced (version unchanged)."""
        players = list(self.players)
        players[player.id] = player
        return replace(self, players=tuple(players))

    def evolve(self, **changes) -> "GameState":
        """Return a copy with ``changes`` applied and the version bumped."""
        return replace(self, version=self.version + 1, **changes)

    def to_dict(self) -> dict:
        """Read-only snapshot for the presentation layer."""
        return {
            "players": [player.to_dict() for player in self.players],
            "currentTrick": [play.to_dict() for play in self.current_trick],
            "turnIndex": self.turn_index,
            "leadSuit": self.lead_suit.value if self.lead_suit else None,
            "heartsBroken": self.hearts_broken,
            "roundNumber": self.round_number,
            "totalRounds": self.total_rounds,
            "passDirection": self.pass_direction.value,
            "gameStatus": self.status.value,
            "dealerIndex": self.dealer_index,
            "startingPlayerIndex": self.starting_player_index,
            "winningMessage": self.winning_message,
            "receivedCards": [card.to_dict() for card in self.received_cards],
            "version": self.version,
        }


def transition(state: GameState, target: GameStatus, **changes) -> GameState:
    """
    Move ``state`` to phase ``target``, applying ``changes``.

    Transitions not listed in ALLOWED_TRANSITIONS are ignored and the
    original state is returned.
    """
    if target not in ALLOWED_TRANSITIONS[state.status]:
        logger.debug("Ignoring transition %s -> %s", state.status.value, target.value)
        return state

    logger.info(
        "Round %d: %s -> %s", state.round_number, state.status.value, target.value
    )
    return state.evolve(status=target, **changes)
