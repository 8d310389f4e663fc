"""Configuration for Dragon Runner."""

from .settings import (
    Settings,
    PhysicsSettings,
    ObstacleSettings,
    DifficultySettings,
    ScenerySettings,
    DisplaySettings,
    get_settings,
)

__all__ = [
    "Settings",
    "PhysicsSettings",
    "ObstacleSettings",
    "DifficultySettings",
    "ScenerySettings",
    "DisplaySettings",
    "get_settings",
]
