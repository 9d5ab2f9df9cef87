"""
Peppa - Application Entry

Builds a ready-to-drive GameSession from application settings. The
presentation layer calls ``create_session`` once at startup.
"""

import logging

from src.config.logging_config import setup_logging
from src.config.settings import Settings, get_settings
from src.runtime.session import GameSession

logger = logging.getLogger(__name__)


def create_session(settings: Settings | None = None) -> GameSession:
    """
    Configure logging and create a game session.

    ``debug`` forces DEBUG logging regardless of ``log_level``.
    """
    settings = settings or get_settings()
    setup_logging("DEBUG" if settings.debug else settings.log_level)

    session = GameSession(settings)
    logger.info(
        "Session ready: %d rounds, advisory %s",
        settings.total_rounds,
        "on" if settings.advisory_active else "off",
    )
    return session
