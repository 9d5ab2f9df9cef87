"""
Peppa - Trick Engine

Plays cards into the current trick and resolves full tricks.

Game Rules:
- Players play in seat order starting from the trick's leader
- The first card sets the lead suit; the highest card of that suit wins
- A trick is worth 10 points to its winner, minus each heart's value,
  minus 26 for the queen of spades
- The winner leads the next trick; after the 13th trick the round settles

All methods are stateless class methods operating on immutable data.
"""

import logging
from dataclasses import dataclass, replace

from src.engine.base import NUM_PLAYERS, Card, GameStatus, Play, Suit
from src.engine.rules import trick_points, trick_winner
from src.engine.scoring import SettlementEngine
from src.engine.state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrickResult:
    """
    Resolution of a full trick.

    Attributes:
        winner_id: Seat that took the trick
        points: Points credited to the winner (may be negative)
        plays: The four plays, in play order
    """
    winner_id: int
    points: int
    plays: tuple[Play, ...]

    @property
    def penalty_cards(self) -> tuple[Card, ...]:
        return tuple(play.card for play in self.plays if play.card.is_penalty)


class TrickEngine:
    """
    Stateless engine for trick play.

    Suit-following legality is checked at the caller's boundary (see
    ``rules.legal_cards``); ``play_card`` only guards turn order and hand
    ownership.
    """

    @classmethod
    def play_card(cls, state: GameState, player_id: int, card: Card) -> GameState:
        """
        Play ``card`` from ``player_id``'s hand into the current trick.

        Ignored (same state returned) when the game is not in play, the
        trick is already full, it is not that player's turn, the player
        already played into this trick, or the card is not in their hand.
        """
        if state.status is not GameStatus.PLAYING:
            return state
        if state.is_trick_full:
            return state
        if player_id != state.turn_index or state.has_played(player_id):
            logger.debug("Ignoring out-of-turn play by player %d", player_id)
            return state

        player = state.player(player_id)
        if card not in player.hand:
            logger.debug("Player %d does not hold %s", player_id, card.label)
            return state

        is_lead = not state.current_trick
        updated = state.with_player(
            replace(player, hand=tuple(c for c in player.hand if c != card))
        )
        return updated.evolve(
            current_trick=state.current_trick + (Play(player_id=player_id, card=card),),
            lead_suit=card.suit if is_lead else state.lead_suit,
            hearts_broken=state.hearts_broken or card.suit is Suit.HEARTS,
            turn_index=(state.turn_index + 1) % NUM_PLAYERS,
        )

    @classmethod
    def score_trick(cls, plays: tuple[Play, ...], lead_suit: Suit | None = None) -> TrickResult:
        """Winner and point value of a full trick."""
        return TrickResult(
            winner_id=trick_winner(plays, lead_suit),
            points=trick_points(plays),
            plays=plays,
        )

    @classmethod
    def resolve_trick(cls, state: GameState) -> GameState:
        """
        Award a full trick to its winner and clear the table.

        The winner's round points and trick count go up and they lead the
        next trick. When that was the last card of the round, the round is
        settled instead.
        """
        if state.status is not GameStatus.PLAYING or not state.is_trick_full:
            return state

        result = cls.score_trick(state.current_trick, state.lead_suit)
        winner = state.player(result.winner_id)
        logger.debug(
            "Trick to player %d for %+d (%s)",
            result.winner_id,
            result.points,
            " ".join(play.card.label for play in result.plays),
        )

        updated = state.with_player(
            replace(
                winner,
                points_this_round=winner.points_this_round + result.points,
                tricks_won=winner.tricks_won + 1,
            )
        ).evolve(current_trick=(), lead_suit=None, turn_index=result.winner_id)

        if all(not player.hand for player in updated.players):
            return SettlementEngine.settle_round(updated)
        return updated
