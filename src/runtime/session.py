"""
Peppa - Game Session

Owns the single live GameState and is the only place it changes. Player
intents, timer callbacks and advisory answers all go through ``_commit``,
which swaps in the new immutable state, invalidates every timer armed for
the old one, arms the timers the new state needs and notifies listeners.

Timers while playing:
- a turn countdown (long for the human, short for bots) that forces the
  heuristic move when it runs out
- a pacing delay before each bot move
- a short pause between the fourth card of a trick and its resolution
"""

from __future__ import annotations

import asyncio
import logging
import math
import random
from typing import Callable, Sequence

from src.advisory.client import AdvisoryClient
from src.advisory.outcomes import choose_move_with_advice, choose_pass_with_advice
from src.config.settings import Settings, get_settings
from src.engine.base import CARDS_TO_PASS, Card, GameConfig, GameStatus, PassDirection
from src.engine.game import HeartsEngine
from src.engine.heuristics import choose_move_for
from src.engine.passing import PassingEngine
from src.engine.rules import legal_cards_for
from src.engine.state import GameState
from src.engine.trick import TrickEngine
from src.runtime.events import EventPayload, GameEvent, classify_transition
from src.runtime.scheduler import Scheduler

logger = logging.getLogger(__name__)

Listener = Callable[[EventPayload], None]


class GameSession:
    """Runs one game for one human and three computer players.

    Must be driven from a running asyncio event loop once play starts.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        advisory: AdvisoryClient | None = None,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._config = config or GameConfig.from_settings(self._settings)
        self._advisory = advisory or AdvisoryClient(self._settings)
        self._rng = rng
        self._listeners: list[Listener] = []
        self._state = HeartsEngine.new_game(self._config, rng)
        self._scheduler = Scheduler(lambda: self._state.version)
        self._bot_task: asyncio.Task | None = None
        self._pass_tasks: set[asyncio.Task] = set()
        self._pass_pending = False
        self._deadline: float | None = None

    # -- Read-only views -------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def time_left(self) -> int | None:
        """Whole seconds left on the turn countdown, None outside play."""
        if self._deadline is None:
            return None
        remaining = self._deadline - self._scheduler.loop.time()
        return max(0, math.ceil(remaining))

    @property
    def pass_pending(self) -> bool:
        return self._pass_pending

    def legal_cards(self) -> tuple[Card, ...]:
        """Cards the human may play right now (empty when not their turn)."""
        state = self._state
        if state.status is not GameStatus.PLAYING or state.is_trick_full:
            return ()
        if not state.current_player.is_human:
            return ()
        return legal_cards_for(state, state.turn_index)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # -- Intents ---------------------------------------------------------

    def new_game(self) -> None:
        """Discard the current game and start over from round 1."""
        self._cancel_timers()
        self._cancel_pass_requests()
        self._pass_pending = False
        self._state = HeartsEngine.new_game(self._config, self._rng)
        self._notify(GameEvent.GAME_STARTED, {})

    def start_round(self, deck: Sequence[Card] | None = None) -> bool:
        """Deal the round. ``deck`` fixes the card order (tests)."""
        accepted = self._commit(HeartsEngine.start_round(self._state, deck, self._rng))
        if accepted:
            self._pass_pending = False
            self._request_bot_passes()
        return accepted

    def select_card(self, card_id: str) -> bool:
        """Toggle one of the human's cards in or out of the pass."""
        if self._pass_pending:
            return False
        return self._commit(PassingEngine.toggle_selection(self._state, card_id))

    def confirm_pass(self) -> bool:
        """
        Confirm the human's pass; the exchange runs after a short delay.

        Rejected until exactly three cards are chosen (unless no pass is
        due this round).
        """
        state = self._state
        if state.status is not GameStatus.PASSING or self._pass_pending:
            return False
        if (
            state.pass_direction is not PassDirection.NONE
            and len(state.human.selected_to_pass) != CARDS_TO_PASS
        ):
            return False

        self._pass_pending = True
        self._scheduler.schedule(self._settings.pass_delay, self._execute_pass, name="pass")
        return True

    def play_card(self, card_id: str) -> bool:
        """Play one of the human's cards, if it is their turn and legal."""
        state = self._state
        if state.status is not GameStatus.PLAYING or state.is_trick_full:
            return False

        player = state.current_player
        if not player.is_human:
            return False

        card = player.find_card(card_id)
        if card is None or card not in legal_cards_for(state, player.id):
            logger.debug("Rejected play %s by player %d", card_id, player.id)
            return False

        return self._commit(TrickEngine.play_card(state, player.id, card))

    def confirm_receipt(self) -> bool:
        return self._commit(HeartsEngine.confirm_receipt(self._state))

    def advance_round(self) -> bool:
        return self._commit(HeartsEngine.advance_round(self._state))

    async def aclose(self) -> None:
        """Cancel every timer and pending request and close the advisory client."""
        self._cancel_timers()
        self._cancel_pass_requests()
        await self._advisory.aclose()

    # -- State changes ---------------------------------------------------

    def _commit(self, new_state: GameState, data: dict | None = None) -> bool:
        """Install ``new_state`` if it differs from the live one."""
        old_state = self._state
        if new_state is old_state:
            return False

        self._state = new_state
        self._cancel_timers()
        self._arm()

        event = classify_transition(old_state, new_state)
        self._notify(event, data or {})
        if event in (GameEvent.ROUND_SETTLED, GameEvent.GAME_OVER) and new_state.winning_message:
            self._notify(GameEvent.SLAM, {"message": new_state.winning_message})
        return True

    def _notify(self, event: GameEvent, data: dict) -> None:
        payload = EventPayload(event=event, state=self._state, data=data)
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener failed on %s", event.name)

    def _arm(self) -> None:
        """Arm the timers the live state needs."""
        state = self._state
        if state.status is not GameStatus.PLAYING:
            return

        if state.is_trick_full:
            self._scheduler.schedule(
                self._settings.trick_resolve_delay, self._resolve_trick, name="resolve"
            )
            return

        player = state.current_player
        if not player.hand:
            return

        budget = (
            self._settings.human_turn_seconds
            if player.is_human
            else self._settings.bot_turn_seconds
        )
        self._deadline = self._scheduler.loop.time() + budget
        self._scheduler.schedule(budget, self._on_turn_timeout, name=f"turn-{player.id}")

        if not player.is_human:
            self._bot_task = self._scheduler.loop.create_task(
                self._bot_turn(state.version, player.id)
            )

    def _cancel_timers(self) -> None:
        self._scheduler.cancel_all()
        self._deadline = None
        task = self._bot_task
        self._bot_task = None
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()

    # -- Timer callbacks -------------------------------------------------

    def _execute_pass(self) -> None:
        self._pass_pending = False
        self._cancel_pass_requests()
        state = PassingEngine.fill_missing_selections(self._state)
        self._commit(PassingEngine.execute_pass(state))

    def _resolve_trick(self) -> None:
        state = self._state
        result = TrickEngine.score_trick(state.current_trick, state.lead_suit)
        self._commit(
            TrickEngine.resolve_trick(state),
            {"winner_id": result.winner_id, "points": result.points},
        )

    def _on_turn_timeout(self) -> None:
        state = self._state
        player_id = state.turn_index
        card = choose_move_for(state, player_id)
        logger.info("Player %d ran out of time, playing %s", player_id, card.label)
        data = {"player_id": player_id, "card": card.to_dict(), "forced": True}
        if self._commit(TrickEngine.play_card(state, player_id, card), data):
            self._notify(GameEvent.FORCED_MOVE, data)

    async def _bot_turn(self, version: int, player_id: int) -> None:
        """Pace a bot move and play the advisory card, or the heuristic one."""
        state = self._state
        delay = asyncio.sleep(self._settings.bot_move_delay)
        if self._advisory.enabled:
            _, card = await asyncio.gather(
                delay,
                choose_move_with_advice(
                    self._advisory, state, player_id, self._settings.advisory_timeout_seconds
                ),
            )
        else:
            await delay
            card = choose_move_for(state, player_id)

        if self._state.version != version:
            logger.debug("Discarding stale move for player %d", player_id)
            return

        self._commit(
            TrickEngine.play_card(self._state, player_id, card),
            {"player_id": player_id, "card": card.to_dict(), "forced": False},
        )

    # -- Advisory passes -------------------------------------------------

    def _request_bot_passes(self) -> None:
        if not self._advisory.enabled or not PassingEngine.is_open(self._state):
            return
        loop = self._scheduler.loop
        for player in self._state.players:
            if player.is_human:
                continue
            task = loop.create_task(self._request_pass(player.id, self._state.round_number))
            self._pass_tasks.add(task)
            task.add_done_callback(self._pass_tasks.discard)

    async def _request_pass(self, player_id: int, round_number: int) -> None:
        hand = self._state.player(player_id).hand
        selection = await choose_pass_with_advice(
            self._advisory, hand, self._settings.advisory_timeout_seconds
        )

        state = self._state
        if (
            self._pass_pending
            or not PassingEngine.is_open(state)
            or state.round_number != round_number
            or state.player(player_id).selected_to_pass
        ):
            logger.debug("Discarding stale pass proposal for player %d", player_id)
            return

        self._commit(PassingEngine.set_selection(state, player_id, selection))

    def _cancel_pass_requests(self) -> None:
        for task in list(self._pass_tasks):
            task.cancel()
        self._pass_tasks.clear()
