"""
Game settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Every group has its own prefix, e.g. DRAGON_RUNNER_PHYSICS_GRAVITY=0.8.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PhysicsSettings(BaseSettings):
    """Player body and vertical motion. Units are field units and frames."""

    model_config = SettingsConfigDict(env_prefix="DRAGON_RUNNER_PHYSICS_")

    player_x: float = 80.0
    player_width: float = Field(default=50.0, gt=0)
    player_height: float = Field(default=50.0, gt=0)

    gravity: float = Field(default=0.6, gt=0)       # units/frame^2
    jump_power: float = Field(default=-12.0, lt=0)  # units/frame, upward is negative

    # Frames per integration step; 1.0 keeps the classic frame-locked feel
    timestep: float = Field(default=1.0, gt=0)


class ObstacleSettings(BaseSettings):
    """Obstacle shape."""

    model_config = SettingsConfigDict(env_prefix="DRAGON_RUNNER_OBSTACLE_")

    width: float = Field(default=20.0, gt=0)
    min_height: float = Field(default=40.0, gt=0)
    max_height: float = Field(default=70.0, gt=0)

    @model_validator(mode="after")
    def _check_height_range(self) -> "ObstacleSettings":
        if self.min_height > self.max_height:
            raise ValueError(
                f"min_height ({self.min_height}) exceeds max_height ({self.max_height})"
            )
        return self


class DifficultySettings(BaseSettings):
    """Starting pace and how it ramps with score."""

    model_config = SettingsConfigDict(env_prefix="DRAGON_RUNNER_DIFFICULTY_")

    game_speed: float = Field(default=5.0, gt=0)
    spawn_interval: int = Field(default=100, gt=0)  # Frames between obstacles

    score_step: int = Field(default=500, gt=0)      # Ramp every N points
    speed_increment: float = Field(default=0.5, ge=0)
    interval_decrement: int = Field(default=5, ge=0)
    min_spawn_interval: int = Field(default=60, gt=0)


class ScenerySettings(BaseSettings):
    """Decorative clouds."""

    model_config = SettingsConfigDict(env_prefix="DRAGON_RUNNER_SCENERY_")

    cloud_count: int = Field(default=5, ge=0)
    sky_fraction: float = Field(default=0.4, ge=0.0, le=1.0)


class DisplaySettings(BaseSettings):
    """Playfield and window settings."""

    model_config = SettingsConfigDict(env_prefix="DRAGON_RUNNER_DISPLAY_")

    # Playfield in field units
    field_width: int = Field(default=800, ge=0)
    field_height: int = Field(default=400, ge=0)
    ground_height: float = Field(default=60.0, ge=0)

    # Rendering
    fps: int = Field(default=60, gt=0)
    scale: int = Field(default=1, gt=0)  # Window pixels per field unit

    @property
    def window_size(self) -> tuple[int, int]:
        return self.field_width * self.scale, self.field_height * self.scale


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DRAGON_RUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Obstacle and cloud randomness; None seeds from the OS
    seed: int | None = None

    # Paths
    data_path: Path = Field(default_factory=lambda: Path.cwd() / "data")
    high_score_file: str = "high_score.json"
    log_file: Path | None = None

    # Simulator settings
    window_title: str = "Dragon Runner"
    simulator_fullscreen: bool = False

    # Nested settings
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    obstacles: ObstacleSettings = Field(default_factory=ObstacleSettings)
    difficulty: DifficultySettings = Field(default_factory=DifficultySettings)
    scenery: ScenerySettings = Field(default_factory=ScenerySettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def high_score_path(self) -> Path:
        """Where the JSON high score store lives."""
        return self.data_path / self.high_score_file


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
