"""
Peppa - Game Engine

Round and game lifecycle for Hearts with four seats: one human, three
computer players.

Phases: dealing -> passing -> receiving -> playing -> scoring -> dealing,
until the last round settles into game over. Dealing and leading duties
rotate with the round number from a random offset fixed at game start.
"""

import logging
import random
from dataclasses import replace
from typing import Sequence

from src.engine.base import (
    BOT_NAME_ROSTER,
    NUM_PLAYERS,
    Card,
    GameConfig,
    GameStatus,
)
from src.engine.deck import build_deck, deal, shuffle
from src.engine.rules import direction_for_round
from src.engine.state import GameState, PlayerState, transition

logger = logging.getLogger(__name__)


class HeartsEngine:
    """
    Stateless engine for the round/game lifecycle.

    State is passed in and returned, never stored.
    """

    @classmethod
    def new_game(
        cls,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
    ) -> GameState:
        """
        Create a game in the dealing phase of round 1.

        The dealer offset and, unless configured, the bot names are drawn
        from ``rng``.
        """
        config = config or GameConfig()
        rng = rng or random

        bot_names = config.bot_names or tuple(rng.sample(BOT_NAME_ROSTER, NUM_PLAYERS - 1))
        names = (config.human_name,) + tuple(bot_names)
        players = tuple(PlayerState(id=seat, name=names[seat]) for seat in range(NUM_PLAYERS))
        dealer_offset = rng.randrange(NUM_PLAYERS)

        logger.info(
            "New game: %d rounds, dealer offset %d, players %s",
            config.total_rounds,
            dealer_offset,
            ", ".join(names),
        )
        return GameState(
            players=players,
            dealer_offset=dealer_offset,
            total_rounds=config.total_rounds,
            round_number=1,
            pass_direction=direction_for_round(1),
            status=GameStatus.DEALING,
        )

    @classmethod
    def start_round(
        cls,
        state: GameState,
        deck: Sequence[Card] | None = None,
        rng: random.Random | None = None,
    ) -> GameState:
        """
        Deal a fresh deck and open the passing phase.

        Args:
            state: Game in the dealing phase
            deck: Card order to deal from; a shuffled deck when omitted
            rng: Random source for the shuffle
        """
        if state.status is not GameStatus.DEALING:
            return state

        cards = tuple(deck) if deck is not None else tuple(shuffle(build_deck(), rng))
        hands = deal(cards)
        players = tuple(
            replace(
                player,
                hand=hands[player.id],
                points_this_round=0,
                tricks_won=0,
                selected_to_pass=(),
            )
            for player in state.players
        )

        return transition(
            state,
            GameStatus.PASSING,
            players=players,
            pass_direction=direction_for_round(state.round_number),
            current_trick=(),
            turn_index=state.starting_player_index,
            lead_suit=None,
            hearts_broken=False,
            received_cards=(),
            winning_message=None,
        )

    @classmethod
    def confirm_receipt(cls, state: GameState) -> GameState:
        """Acknowledge the received cards and start trick play."""
        return transition(state, GameStatus.PLAYING, received_cards=())

    @classmethod
    def advance_round(cls, state: GameState) -> GameState:
        """Leave the scoring intermission for the next round's deal."""
        if state.status is not GameStatus.SCORING:
            return state
        next_round = state.round_number + 1
        return transition(
            state,
            GameStatus.DEALING,
            round_number=next_round,
            pass_direction=direction_for_round(next_round),
        )
