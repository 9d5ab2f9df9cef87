"""
Peppa Runtime.

The live game session: intents, turn timers, bot pacing and advisory calls.
"""

from src.runtime.app import create_session
from src.runtime.events import EventPayload, GameEvent, classify_transition
from src.runtime.scheduler import ScheduledTask, Scheduler
from src.runtime.session import GameSession

__all__ = [
    "EventPayload",
    "GameEvent",
    "GameSession",
    "ScheduledTask",
    "Scheduler",
    "classify_transition",
    "create_session",
]
