"""
Peppa Configuration.

Environment variables, settings, and logging configuration.
"""

from src.config.logging_config import setup_logging
from src.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "setup_logging"]
