"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
All game values are per-tick rates: one tick is one simulation step.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameSettings(BaseSettings):
    """Tunable simulation constants."""

    # Player physics
    gravity: float = Field(default=0.6, gt=0.0)
    jump_force: float = Field(default=-11.0, lt=0.0)
    double_jump_force: float = Field(default=-9.0, lt=0.0)
    player_width: float = Field(default=40.0, gt=0.0)
    player_height: float = Field(default=60.0, gt=0.0)

    # Scrolling
    start_speed: float = Field(default=4.0, gt=0.0)
    speed_increase: float = Field(default=0.003, ge=0.0)

    # Environment milestones
    milestone_step: int = Field(default=100, gt=0)

    # Field geometry (ground line sits ground_offset above the bottom edge)
    field_width: int = Field(default=960, gt=0)
    field_height: int = Field(default=540, gt=0)
    ground_offset: int = Field(default=80, ge=0)

    # Spawn cadence
    spawn_interval_start: float = Field(default=90.0, gt=0.0)
    spawn_interval_floor: float = Field(default=40.0, gt=0.0)
    spawn_interval_divisor: float = Field(default=15.0, gt=0.0)
    spawn_jitter: float = Field(default=0.2, ge=0.0, lt=1.0)

    # Obstacle sizes
    obstacle_min_height: float = Field(default=20.0, gt=0.0)
    obstacle_min_height_cap: float = Field(default=45.0, gt=0.0)
    obstacle_height_divisor: float = Field(default=50.0, gt=0.0)
    obstacle_max_height: float = Field(default=60.0, gt=0.0)
    obstacle_min_width: float = Field(default=30.0, gt=0.0)
    obstacle_max_width: float = Field(default=50.0, gt=0.0)

    # Effects
    burst_particles: int = Field(default=10, ge=0)

    @model_validator(mode="after")
    def _check_ranges(self) -> "GameSettings":
        if self.spawn_interval_floor > self.spawn_interval_start:
            raise ValueError("spawn_interval_floor must not exceed spawn_interval_start")
        if self.obstacle_min_height_cap > self.obstacle_max_height:
            raise ValueError("obstacle_min_height_cap must not exceed obstacle_max_height")
        if self.obstacle_min_width > self.obstacle_max_width:
            raise ValueError("obstacle_min_width must not exceed obstacle_max_width")
        if self.ground_offset >= self.field_height:
            raise ValueError("ground_offset must be smaller than field_height")
        return self

    @property
    def ground_y(self) -> float:
        """Y coordinate of the ground line."""
        return float(self.field_height - self.ground_offset)


class DisplaySettings(BaseSettings):
    """Host window settings."""

    title: str = "ASTRO RUN"
    fps: int = Field(default=60, gt=0)  # simulation ticks per second
    max_steps_per_frame: int = Field(default=5, gt=0)
    resizable: bool = True


class StorageSettings(BaseSettings):
    """High score persistence."""

    high_score_path: Path = Field(
        default_factory=lambda: Path.home() / ".astrorun" / "highscore.json"
    )
    high_score_key: str = "astroRunHighScore"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ASTRORUN_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
