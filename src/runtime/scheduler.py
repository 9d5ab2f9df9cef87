"""
Peppa - Scheduled Tasks

Cancellable timer callbacks on the asyncio event loop, each keyed to the
state version that armed it. A task whose version is no longer current
when it fires does nothing.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class ScheduledTask:
    """Handle for one pending callback."""

    def __init__(self, name: str, armed_version: int) -> None:
        self.name = name
        self.armed_version = armed_version
        self.fired = False
        self._cancelled = False
        self._handle: asyncio.TimerHandle | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()

    def __repr__(self) -> str:
        return f"ScheduledTask({self.name!r}, version={self.armed_version})"


class Scheduler:
    """Arms version-keyed timers on the running event loop.

    Args:
        current_version: Returns the version of the live state
        loop: Event loop to use; the running loop when omitted
    """

    def __init__(
        self,
        current_version: Callable[[], int],
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._current_version = current_version
        self._loop = loop
        self._tasks: set[ScheduledTask] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    @property
    def pending(self) -> list[ScheduledTask]:
        return [task for task in self._tasks if not task.cancelled]

    def schedule(
        self,
        delay: float,
        callback: Callable[[], None],
        *,
        name: str,
    ) -> ScheduledTask:
        """Run ``callback`` after ``delay`` seconds if the state is unchanged."""
        task = ScheduledTask(name, self._current_version())
        task._handle = self.loop.call_later(max(0.0, delay), self._fire, task, callback)
        self._tasks.add(task)
        return task

    def _fire(self, task: ScheduledTask, callback: Callable[[], None]) -> None:
        self._tasks.discard(task)
        if task.cancelled:
            return
        if self._current_version() != task.armed_version:
            logger.debug("Dropping stale %r (state is at version %d)", task, self._current_version())
            return
        task.fired = True
        callback()

    def cancel_all(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()
