"""
Peppa - Local Heuristics

Deterministic move and pass choices used for computer players and for
forced moves when a turn runs out of time. Always available, no I/O.
"""

from typing import Sequence

from src.engine.base import CARDS_TO_PASS, Card, Suit
from src.engine.rules import legal_cards, legal_cards_for
from src.engine.state import GameState


def choose_move(
    hand: Sequence[Card],
    lead_suit: Suit | None,
    hearts_broken: bool,
) -> Card:
    """
    Lowest-value legal card; the first in hand order on ties.

    Raises:
        ValueError: If the hand is empty
    """
    if not hand:
        raise ValueError("Cannot choose a move from an empty hand.")
    return min(legal_cards(hand, lead_suit, hearts_broken), key=lambda card: card.value)


def choose_move_for(state: GameState, player_id: int) -> Card:
    """Heuristic move for a seat in the current trick of ``state``."""
    legal = legal_cards_for(state, player_id)
    if not legal:
        raise ValueError(f"Player {player_id} has no cards to play.")
    return min(legal, key=lambda card: card.value)


def choose_pass(hand: Sequence[Card]) -> tuple[str, ...]:
    """Ids of the three highest-value cards; hand order breaks ties."""
    ranked = sorted(hand, key=lambda card: -card.value)
    return tuple(card.id for card in ranked[:CARDS_TO_PASS])
