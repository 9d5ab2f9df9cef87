"""
Peppa - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
A failure here is a programming error, not a player mistake; illegal
player actions are ignored by the engine instead.
"""

from typing import Iterable, Sequence

from src.engine.base import CARDS_TO_PASS, HAND_SIZE, NUM_PLAYERS, Card


def validate_unique_cards(cards: Iterable[Card]) -> tuple[Card, ...]:
    """
    Validate that no card id appears twice.

    Args:
        cards: Cards to check

    Returns:
        The cards as a tuple

    Raises:
        ValueError: If a card id is duplicated
    """
    cards_tuple = tuple(cards)
    seen: set[str] = set()
    for card in cards_tuple:
        if card.id in seen:
            raise ValueError(f"Duplicate card {card.id}.")
        seen.add(card.id)
    return cards_tuple


def validate_deal(
    hands: Sequence[Sequence[Card]],
    expected_total: int = NUM_PLAYERS * HAND_SIZE,
) -> tuple[tuple[Card, ...], ...]:
    """
    Validate that a deal partitions the deck into four equal hands.

    Args:
        hands: One hand per seat
        expected_total: Number of cards the deck held

    Returns:
        Validated hands as a tuple of tuples

    Raises:
        ValueError: If the hand count, hand sizes or card ids are wrong
    """
    if len(hands) != NUM_PLAYERS:
        raise ValueError(f"Expected {NUM_PLAYERS} hands, got {len(hands)}.")

    if expected_total != NUM_PLAYERS * HAND_SIZE:
        raise ValueError(
            f"Deck of {expected_total} cards does not deal into "
            f"{NUM_PLAYERS} hands of {HAND_SIZE}."
        )

    for seat, hand in enumerate(hands):
        if len(hand) != HAND_SIZE:
            raise ValueError(f"Hand {seat} has {len(hand)} cards (expected {HAND_SIZE}).")

    validate_unique_cards(card for hand in hands for card in hand)
    return tuple(tuple(hand) for hand in hands)


def validate_player_id(player_id: int) -> int:
    """
    Validate a seat index.

    Raises:
        ValueError: If the seat is not 0-3
    """
    if not isinstance(player_id, int) or isinstance(player_id, bool):
        raise ValueError(f"Player id must be an integer, got {type(player_id).__name__}.")

    if not (0 <= player_id < NUM_PLAYERS):
        raise ValueError(f"Player id must be 0-{NUM_PLAYERS - 1}, got {player_id}.")

    return player_id


def validate_pass_selection(
    hand: Sequence[Card],
    card_ids: Sequence[str],
) -> tuple[str, ...]:
    """
    Validate a set of cards chosen for passing.

    Args:
        hand: The passing player's hand
        card_ids: Ids of the chosen cards

    Returns:
        Validated ids as a tuple, in the order given

    Raises:
        ValueError: If the selection is not exactly 3 distinct ids from the hand
    """
    ids = tuple(card_ids)

    if len(ids) != CARDS_TO_PASS:
        raise ValueError(f"Exactly {CARDS_TO_PASS} cards must be passed, got {len(ids)}.")

    if len(set(ids)) != len(ids):
        raise ValueError(f"Pass selection contains duplicates: {ids}.")

    hand_ids = {card.id for card in hand}
    missing = [card_id for card_id in ids if card_id not in hand_ids]
    if missing:
        raise ValueError(f"Cards not in hand: {missing}.")

    return ids
