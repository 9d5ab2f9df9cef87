"""
Peppa - Rules

Pure rule functions: pass-direction sequencing, play legality, trick
resolution and ranking. Nothing here touches a GameState beyond reading it.
"""

from typing import Sequence

from src.engine.base import (
    NUM_PLAYERS,
    TRICK_BASELINE,
    Card,
    GameStatus,
    PassDirection,
    Play,
    Suit,
)
from src.engine.state import GameState

PASS_CYCLE: tuple[PassDirection, ...] = (
    PassDirection.RIGHT,
    PassDirection.LEFT,
    PassDirection.ACROSS,
    PassDirection.NONE,
)


def direction_for_round(round_number: int) -> PassDirection:
    """
    Passing direction for a 1-based round number.

    Round 1 passes right, 2 left, 3 across, 4 keeps its cards, then the
    cycle repeats.
    """
    return PASS_CYCLE[(round_number - 1) % len(PASS_CYCLE)]


def legal_cards(
    hand: Sequence[Card],
    lead_suit: Suit | None,
    hearts_broken: bool,
) -> tuple[Card, ...]:
    """
    Cards a player may play.

    Following: cards of the lead suit if the player holds any, otherwise
    the whole hand. Leading: while hearts are unbroken a heart may only be
    led from an all-heart hand.

    Args:
        hand: The player's hand
        lead_suit: Suit led in the current trick, None when leading
        hearts_broken: Whether a heart has been played this round

    Returns:
        The legal subset in hand order
    """
    cards = tuple(hand)

    if lead_suit is not None:
        following = tuple(card for card in cards if card.suit is lead_suit)
        return following or cards

    if not hearts_broken:
        non_hearts = tuple(card for card in cards if card.suit is not Suit.HEARTS)
        return non_hearts or cards

    return cards


def is_legal_play(
    card: Card,
    hand: Sequence[Card],
    lead_suit: Suit | None,
    hearts_broken: bool,
) -> bool:
    return card in legal_cards(hand, lead_suit, hearts_broken)


def legal_cards_for(state: GameState, player_id: int) -> tuple[Card, ...]:
    """Legal cards for a seat in the current trick of ``state``."""
    lead_suit = state.lead_suit if state.current_trick else None
    return legal_cards(state.player(player_id).hand, lead_suit, state.hearts_broken)


def trick_winner(plays: Sequence[Play], lead_suit: Suit | None = None) -> int:
    """
    Seat that wins a trick: highest card of the led suit.

    Cards of other suits never win, whatever their value.

    Args:
        plays: Cards in the trick
        lead_suit: Suit led; the first play's suit when omitted

    Raises:
        ValueError: If no card in the trick follows the lead suit
    """
    if not plays:
        raise ValueError("Cannot resolve an empty trick.")

    lead_suit = lead_suit or plays[0].card.suit
    if not any(play.card.suit is lead_suit for play in plays):
        raise ValueError(f"No card in the trick follows {lead_suit.value}.")

    winning = max(
        (play for play in plays if play.card.suit is lead_suit),
        key=lambda play: play.card.value,
    )
    return winning.player_id


def trick_points(plays: Sequence[Play]) -> int:
    """
    Point value of a trick (or a trick in progress).

    Starts from the baseline of 10, minus each heart's value, minus 26 for
    the queen of spades. May be negative.
    """
    return TRICK_BASELINE - sum(play.card.penalty for play in plays)


def is_scoring_phase(status: GameStatus) -> bool:
    return status in (GameStatus.SCORING, GameStatus.GAME_OVER)


def effective_scores(state: GameState) -> tuple[int, ...]:
    """Scores used for ranking; round points count only once a round is over."""
    include_round = is_scoring_phase(state.status)
    return tuple(
        player.score + (player.points_this_round if include_round else 0)
        for player in state.players
    )


def rank_scores(scores: Sequence[int]) -> tuple[int, ...]:
    """
    Rank a list of scores, highest first.

    Tied scores share a rank and the following rank is skipped, so
    ``[10, 10, -5, 20]`` ranks as ``[2, 2, 4, 1]``.
    """
    return tuple(1 + sum(1 for other in scores if other > score) for score in scores)


def get_rank(state: GameState, player_id: int) -> int:
    return rank_scores(effective_scores(state))[player_id]


def standings(state: GameState) -> list[tuple[int, int, int]]:
    """
    Leaderboard rows as ``(rank, player_id, effective_score)``.

    Sorted by descending score; seat order breaks ties.
    """
    scores = effective_scores(state)
    ranks = rank_scores(scores)
    rows = [(ranks[seat], seat, scores[seat]) for seat in range(NUM_PLAYERS)]
    return sorted(rows, key=lambda row: (-row[2], row[1]))
