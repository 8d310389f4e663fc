"""The runner simulation."""

from dragon_runner.game.entities import Box, Cloud, Ground, Obstacle, Player, SessionState
from dragon_runner.game.obstacles import ObstaclePipeline
from dragon_runner.game.physics import apply_jump, integrate
from dragon_runner.game.runner import GameSnapshot, RunnerGame
from dragon_runner.game.scenery import Scenery
from dragon_runner.game.scoring import ScoreKeeper, ScoreResult, check_collision

__all__ = [
    "Box",
    "Cloud",
    "Ground",
    "Obstacle",
    "Player",
    "SessionState",
    "ObstaclePipeline",
    "apply_jump",
    "integrate",
    "GameSnapshot",
    "RunnerGame",
    "Scenery",
    "ScoreKeeper",
    "ScoreResult",
    "check_collision",
]
