"""Engine configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Engine settings loaded from SIGNALCORE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SIGNALCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Upper bound (seconds) on each ML / sentiment sub-generator call
    generator_timeout: float = Field(default=5.0, gt=0)

    # Seed for the simulated ML and sentiment stand-ins (None = nondeterministic)
    random_seed: int | None = None

    # Optional strategies.yaml with catalog overrides
    strategies_file: Path | None = None

    # Root log level for the replay CLI; --verbose forces DEBUG
    log_level: str = "INFO"


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
