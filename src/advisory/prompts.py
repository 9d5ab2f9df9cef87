"""
Peppa - Advisory Prompts

Prompt text and generation settings sent to the advisory service.
"""

import json
from typing import Sequence

from src.engine.base import Card, Play, Suit

PASS_RESPONSE_SCHEMA = {"type": "ARRAY", "items": {"type": "STRING"}}


def _cards_json(cards: Sequence[Card]) -> str:
    return json.dumps(
        [
            {"suit": c.suit.value, "rank": c.rank.value, "id": c.id, "value": c.value}
            for c in cards
        ]
    )


def pass_prompt(hand: Sequence[Card]) -> str:
    return (
        'You are an expert "Hearts" (Peppa) player.\n'
        "You must pass 3 cards to an opponent.\n"
        "Goal: get rid of high or dangerous cards (ace/king/queen of spades, "
        "high hearts).\n"
        f"Your hand: {_cards_json(hand)}\n"
        'Return ONLY a JSON array of the 3 card ids to pass: ["id1", "id2", "id3"]'
    )


def move_prompt(
    playable: Sequence[Card],
    trick: Sequence[Play],
    lead_suit: Suit | None,
) -> str:
    trick_json = json.dumps(
        [
            {"card": {"suit": p.card.suit.value, "rank": p.card.rank.value, "value": p.card.value}}
            for p in trick
        ]
    )
    return (
        "Game: Hearts (Peppa).\n"
        "Goal: avoid taking hearts or the queen of spades (Q-spades).\n"
        f"Lead suit: {lead_suit.value if lead_suit else 'none'}.\n"
        f"Cards on the table: {trick_json}\n"
        f"Your PLAYABLE cards: {_cards_json(playable)}\n"
        "Choose the best card to play. Return ONLY the card id."
    )


def pass_generation_config(temperature: float) -> dict:
    return {
        "temperature": temperature,
        "responseMimeType": "application/json",
        "responseSchema": PASS_RESPONSE_SCHEMA,
    }


def move_generation_config(temperature: float) -> dict:
    return {
        "temperature": temperature,
        "maxOutputTokens": 20,
        "thinkingConfig": {"thinkingBudget": 0},
    }
