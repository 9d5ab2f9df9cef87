"""
Peppa - Bounded Advisory Attempts

Runs an advisory request under a time budget and folds every failure into
a result value, then composes that result with the local heuristic. The
fallback is written once here and shared by passing and move selection.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Sequence, TypeVar, Union

from src.advisory.client import (
    AdvisoryClient,
    AdvisoryDisabled,
    AdvisoryError,
    AdvisoryTimeout,
)
from src.engine.base import Card
from src.engine.heuristics import choose_move_for, choose_pass
from src.engine.state import GameState

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Proposal(Generic[T]):
    """A usable answer from the advisory service."""
    value: T


@dataclass(frozen=True)
class Timeout:
    """No answer within the budget."""
    budget: float


@dataclass(frozen=True)
class Failure:
    """The service failed or answered with something unusable."""
    reason: str


Outcome = Union[Proposal, Timeout, Failure]


async def attempt(
    request: Callable[[], Awaitable[T]],
    budget: float,
    *,
    label: str = "advisory",
) -> Outcome:
    """
    Await ``request()`` for at most ``budget`` seconds.

    Returns:
        Proposal with the answer, Timeout, or Failure; never raises
        (cancellation still propagates)
    """
    try:
        value = await asyncio.wait_for(request(), timeout=budget)
    except asyncio.TimeoutError:
        logger.warning("%s: no answer within %.1fs, using fallback", label, budget)
        return Timeout(budget=budget)
    except AdvisoryTimeout as exc:
        logger.warning("%s: %s, using fallback", label, exc)
        return Timeout(budget=budget)
    except AdvisoryDisabled:
        return Failure(reason="disabled")
    except AdvisoryError as exc:
        logger.warning("%s failed: %s, using fallback", label, exc)
        return Failure(reason=str(exc))
    except Exception as exc:
        logger.exception("%s raised unexpectedly, using fallback", label)
        return Failure(reason=f"{type(exc).__name__}: {exc}")
    return Proposal(value=value)


async def choose_pass_with_advice(
    client: AdvisoryClient,
    hand: Sequence[Card],
    budget: float,
) -> tuple[str, ...]:
    """Advisory pass if one arrives in time, else the three highest cards."""
    outcome = await attempt(lambda: client.propose_pass(hand), budget, label="pass proposal")
    if isinstance(outcome, Proposal):
        return outcome.value
    return choose_pass(hand)


async def choose_move_with_advice(
    client: AdvisoryClient,
    state: GameState,
    player_id: int,
    budget: float,
) -> Card:
    """Advisory move if one arrives in time, else the lowest legal card."""
    outcome = await attempt(
        lambda: client.propose_move(state, player_id),
        budget,
        label=f"move proposal for player {player_id}",
    )
    if isinstance(outcome, Proposal):
        return outcome.value
    return choose_move_for(state, player_id)
