"""
Peppa - Application Settings

Loads configuration from environment variables using Pydantic Settings.
Variables are prefixed with ``PEPPA_`` (for example ``PEPPA_TOTAL_ROUNDS``).
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Game
    total_rounds: int = Field(default=4, ge=1)
    human_name: str = "Charlie Bartom"

    # Turn timer (seconds)
    human_turn_seconds: float = Field(default=40, gt=0)
    bot_turn_seconds: float = Field(default=5, gt=0)

    # Pacing delays (seconds)
    bot_move_delay: float = Field(default=1.0, ge=0)
    trick_resolve_delay: float = Field(default=1.5, ge=0)
    pass_delay: float = Field(default=1.0, ge=0)

    # Advisory service
    advisory_enabled: bool = False
    advisory_api_key: str | None = None
    advisory_model: str = "gemini-3-flash-preview"
    advisory_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    advisory_timeout_seconds: float = Field(default=15.0, gt=0)
    advisory_temperature: float = Field(default=0.1, ge=0)

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PEPPA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def advisory_active(self) -> bool:
        """Whether the advisory service should actually be called."""
        return self.advisory_enabled and bool(self.advisory_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
