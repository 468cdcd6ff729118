"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FieldSettings(BaseSettings):
    """Play field geometry, in logical pixels."""

    width: float = Field(default=375.0, gt=0)
    height: float = Field(default=667.0, gt=0)
    lanes: int = Field(default=3, gt=0)

    # Radii of the round tokens
    player_radius: float = Field(default=24.0, gt=0)
    obstacle_radius: float = Field(default=20.0, gt=0)
    power_up_radius: float = Field(default=18.0, gt=0)

    # Player row sits this far above the bottom edge
    player_offset: float = Field(default=120.0, ge=0)


class GameSettings(BaseSettings):
    """Rules and pacing."""

    difficulty: str = "normal"
    control_mode: Literal["tilt", "swipe"] = "tilt"

    tick_rate: int = Field(default=60, gt=0)
    max_ticks_per_advance: int = Field(default=5, gt=0)

    tilt_threshold: float = Field(default=0.2, ge=0.0, le=1.0)
    tilt_window: int = Field(default=5, gt=0)

    power_up_chance: float = Field(default=0.01, ge=0.0, le=1.0)
    power_up_hit_cap: int = Field(default=3, gt=0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DODGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Simulator window
    window_scale: float = Field(default=1.0, gt=0)
    fps: int = Field(default=60, gt=0)

    high_score_path: Path = Field(
        default_factory=lambda: Path.home() / ".dodger" / "high_score.json"
    )

    # Nested settings
    playfield: FieldSettings = Field(default_factory=FieldSettings)
    game: GameSettings = Field(default_factory=GameSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
