"""
Peppa - Round Settlement

End-of-round scoring: slam ("cappotto") detection, score accumulation and
the choice between another round and the end of the game.
"""

import logging
from dataclasses import dataclass, replace

from src.engine.base import (
    SLAM_BONUS,
    SLAM_PENALTY,
    TOTAL_PENALTY,
    TRICK_BASELINE,
    GameStatus,
)
from src.engine.state import GameState, PlayerState, transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundSummary:
    """
    Outcome of a settled round.

    Attributes:
        deltas: Points each seat gained this round (after any slam override)
        slam_player_id: Seat that shot the moon, if any
        game_over: Whether this was the final round
    """
    deltas: tuple[int, ...]
    slam_player_id: int | None
    game_over: bool


def is_slam(player: PlayerState) -> bool:
    """
    Whether a player captured every penalty card this round.

    Each trick is worth the baseline minus the penalties it carries, so a
    player's baseline total minus their points equals the penalties they
    took. Taking all 130 is a slam. The identity only holds for a baseline
    of 10 per trick and 130 penalty points in the deck.
    """
    return player.tricks_won * TRICK_BASELINE - player.points_this_round == TOTAL_PENALTY


def find_slam(players: tuple[PlayerState, ...]) -> PlayerState | None:
    for player in players:
        if is_slam(player):
            return player
    return None


def slam_message(player: PlayerState) -> str:
    return f"CAPPOTTO DI {player.name.upper()}!"


class SettlementEngine:
    """Stateless end-of-round scoring."""

    @classmethod
    def summarize(cls, state: GameState) -> RoundSummary:
        """Compute the round outcome without applying it."""
        slam_player = find_slam(state.players)
        if slam_player is not None:
            deltas = tuple(
                SLAM_BONUS if player.id == slam_player.id else SLAM_PENALTY
                for player in state.players
            )
        else:
            deltas = tuple(player.points_this_round for player in state.players)

        return RoundSummary(
            deltas=deltas,
            slam_player_id=slam_player.id if slam_player else None,
            game_over=state.is_final_round,
        )

    @classmethod
    def settle_round(cls, state: GameState) -> GameState:
        """
        Fold the round's points into the cumulative scores.

        A slam replaces every player's round points with +45 for the
        shooter and -15 for everyone else. Moves to scoring, or to game
        over after the final round.
        """
        if state.status is not GameStatus.PLAYING:
            return state

        summary = cls.summarize(state)
        players = tuple(
            replace(
                player,
                points_this_round=delta,
                score=player.score + delta,
                tricks_won=0,
            )
            for player, delta in zip(state.players, summary.deltas)
        )

        message = None
        if summary.slam_player_id is not None:
            message = slam_message(state.player(summary.slam_player_id))
            logger.info("Round %d: %s", state.round_number, message)

        logger.info(
            "Round %d settled: deltas=%s scores=%s",
            state.round_number,
            list(summary.deltas),
            [player.score for player in players],
        )

        target = GameStatus.GAME_OVER if summary.game_over else GameStatus.SCORING
        return transition(
            state,
            target,
            players=players,
            current_trick=(),
            lead_suit=None,
            winning_message=message,
        )


def round_deltas(state: GameState) -> tuple[int, ...]:
    """Points each seat gained in the current (or just settled) round."""
    return tuple(player.points_this_round for player in state.players)
