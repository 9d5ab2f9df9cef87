"""
Peppa - Deck

Building, shuffling, sorting and dealing the 52-card deck.
"""

import random
from typing import Sequence, TypeVar

from src.engine.base import HAND_SIZE, NUM_PLAYERS, Card, Rank, Suit
from src.engine.validators import validate_deal

T = TypeVar("T")

_SUIT_ORDER = {suit: index for index, suit in enumerate(Suit)}


def build_deck() -> tuple[Card, ...]:
    """Return the 52 canonical cards, suit by suit, lowest rank first."""
    return tuple(Card(suit=suit, rank=rank) for suit in Suit for rank in Rank)


def shuffle(cards: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """
    Return a uniformly shuffled copy of ``cards`` (Fisher-Yates).

    The caller's sequence is left untouched.

    Args:
        cards: Items to shuffle
        rng: Random source; the module-level generator when omitted
    """
    rng = rng or random
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def sort_key(card: Card) -> tuple[int, int]:
    return (_SUIT_ORDER[card.suit], card.value)


def sort_hand(cards: Sequence[Card]) -> tuple[Card, ...]:
    """Sort by suit (clubs, diamonds, hearts, spades) then by value."""
    return tuple(sorted(cards, key=sort_key))


def deal(deck: Sequence[Card]) -> tuple[tuple[Card, ...], ...]:
    """
    Deal a full deck into four sorted 13-card hands.

    Consecutive slices of the deck go to seats 0..3.

    Raises:
        ValueError: If the deck does not split into four hands of unique cards
    """
    cards = tuple(deck)
    hands = tuple(
        sort_hand(cards[seat * HAND_SIZE:(seat + 1) * HAND_SIZE])
        for seat in range(NUM_PLAYERS)
    )
    validate_deal(hands, expected_total=len(cards))
    return hands
