"""Replay-specific configuration.

Independent of the engine settings: only covers how a history is replayed.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReplaySettings(BaseSettings):
    """Replay configuration loaded from REPLAY_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPLAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Bars fed to the engine before the first signal is acted on
    warmup_bars: int = Field(default=30, ge=0)

    initial_capital: float = Field(default=10_000.0, gt=0)

    # Annualisation factor for the Sharpe ratio (daily bars by default)
    periods_per_year: int = Field(default=252, gt=0)


_settings: ReplaySettings | None = None


def get_replay_settings() -> ReplaySettings:
    """Get cached replay settings instance."""
    global _settings
    if _settings is None:
        _settings = ReplaySettings()
    return _settings
