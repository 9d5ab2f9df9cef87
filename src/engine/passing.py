"""
Peppa - Passing Engine

Card selection and the simultaneous three-card exchange that opens each
round. The exchange direction rotates right, left, across, none.

All methods are stateless class methods operating on immutable data.
"""

import logging
from dataclasses import replace
from typing import Sequence

from src.engine.base import (
    CARDS_TO_PASS,
    HUMAN_PLAYER_ID,
    NUM_PLAYERS,
    Card,
    GameStatus,
    PassDirection,
)
from src.engine.deck import sort_hand
from src.engine.heuristics import choose_pass
from src.engine.state import GameState, transition
from src.engine.validators import validate_pass_selection

logger = logging.getLogger(__name__)


class PassingEngine:
    """
    Stateless engine for the passing phase.

    Every method returns a new GameState, or the state it was given when
    the request is not allowed.
    """

    @classmethod
    def is_open(cls, state: GameState) -> bool:
        """Whether cards can currently be chosen for passing."""
        return (
            state.status is GameStatus.PASSING
            and state.pass_direction is not PassDirection.NONE
        )

    @classmethod
    def toggle_selection(
        cls,
        state: GameState,
        card_id: str,
        player_id: int = HUMAN_PLAYER_ID,
    ) -> GameState:
        """
        Select or deselect one card for passing.

        Deselecting is always allowed; selecting a fourth card is ignored.
        """
        if not cls.is_open(state):
            return state

        player = state.player(player_id)
        if not player.has_card(card_id):
            return state

        if card_id in player.selected_to_pass:
            selected = tuple(c for c in player.selected_to_pass if c != card_id)
        elif len(player.selected_to_pass) >= CARDS_TO_PASS:
            logger.debug("Player %d already selected %d cards", player_id, CARDS_TO_PASS)
            return state
        else:
            selected = player.selected_to_pass + (card_id,)

        return _replace_selection(state, player_id, selected)

    @classmethod
    def set_selection(
        cls,
        state: GameState,
        player_id: int,
        card_ids: Sequence[str],
    ) -> GameState:
        """
        Record a complete selection for one player.

        Ignored unless it names exactly three distinct cards from the hand.
        """
        if not cls.is_open(state):
            return state

        try:
            selected = validate_pass_selection(state.player(player_id).hand, card_ids)
        except ValueError as exc:
            logger.debug("Rejected pass selection for player %d: %s", player_id, exc)
            return state

        return _replace_selection(state, player_id, selected)

    @classmethod
    def fill_missing_selections(cls, state: GameState) -> GameState:
        """Give every computer player without a full selection the heuristic pass."""
        if not cls.is_open(state):
            return state

        for player in state.players:
            if player.is_human or len(player.selected_to_pass) == CARDS_TO_PASS:
                continue
            state = cls.set_selection(state, player.id, choose_pass(player.hand))
        return state

    @classmethod
    def is_ready(cls, state: GameState) -> bool:
        """Whether every player has a valid selection (or no pass is due)."""
        if state.status is not GameStatus.PASSING:
            return False
        if state.pass_direction is PassDirection.NONE:
            return True
        for player in state.players:
            try:
                validate_pass_selection(player.hand, player.selected_to_pass)
            except ValueError:
                return False
        return True

    @classmethod
    def execute_pass(cls, state: GameState) -> GameState:
        """
        Exchange the selected cards between all four players at once.

        Seat ``i`` receives the selection of seat ``(i + offset) % 4`` where
        the offset is 1 passing left, 3 passing right and 2 across. Either
        all four transfers happen or, if any selection is incomplete, none
        do. With no pass due, hands are left alone. Either way the game
        moves to the receiving phase with the round's starting player to
        lead.
        """
        if not cls.is_ready(state):
            return state

        offset = state.pass_direction.donor_offset
        if offset is None:
            players = tuple(replace(p, selected_to_pass=()) for p in state.players)
            return transition(
                state,
                GameStatus.RECEIVING,
                players=players,
                received_cards=(),
                turn_index=state.starting_player_index,
            )

        outgoing: list[tuple[Card, ...]] = [
            tuple(card for card in player.hand if card.id in player.selected_to_pass)
            for player in state.players
        ]

        players = []
        for seat, player in enumerate(state.players):
            donor = (seat + offset) % NUM_PLAYERS
            kept = tuple(card for card in player.hand if card.id not in player.selected_to_pass)
            players.append(
                replace(player, hand=sort_hand(kept + outgoing[donor]), selected_to_pass=())
            )

        received = outgoing[(HUMAN_PLAYER_ID + offset) % NUM_PLAYERS]
        logger.info(
            "Round %d: passed %s, human received %s",
            state.round_number,
            state.pass_direction.value,
            ", ".join(card.label for card in received),
        )
        return transition(
            state,
            GameStatus.RECEIVING,
            players=tuple(players),
            received_cards=sort_hand(received),
            turn_index=state.starting_player_index,
        )


def _replace_selection(state: GameState, player_id: int, selected: tuple[str, ...]) -> GameState:
    player = state.player(player_id)
    updated = state.with_player(replace(player, selected_to_pass=selected))
    return updated.evolve()
