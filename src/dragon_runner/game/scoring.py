"""Collision detection, per-frame score and difficulty ramp."""

import logging
from dataclasses import dataclass
from typing import Iterable

from dragon_runner.config.settings import DifficultySettings
from dragon_runner.game.entities import Box, Obstacle, Player, SessionState

logger = logging.getLogger(__name__)


def check_collision(a: Box, b: Box) -> bool:
    """Strict AABB overlap. Boxes that only share an edge do not collide."""
    return (
        a.left < b.right
        and a.right > b.left
        and a.top < b.bottom
        and a.bottom > b.top
    )


@dataclass
class ScoreResult:
    """What happened during one scoring pass."""
    hit: Obstacle | None = None
    leveled_up: bool = False

    @property
    def collided(self) -> bool:
        return self.hit is not None


class ScoreKeeper:
    """Counts frames survived and ramps the pace every score_step points."""

    def __init__(self, settings: DifficultySettings | None = None) -> None:
        self.settings = settings or DifficultySettings()

    def reset(self, session: SessionState) -> None:
        """Put score and pace back to their starting values."""
        session.score = 0
        session.level = 0
        session.game_speed = self.settings.game_speed
        session.obstacle_interval = self.settings.spawn_interval

    def check_and_score(
        self,
        session: SessionState,
        player: Player,
        obstacles: Iterable[Obstacle],
    ) -> ScoreResult:
        """Score this frame, then look for the first obstacle touching the player."""
        result = ScoreResult()

        session.score += 1
        if session.score % self.settings.score_step == 0:
            self.ramp(session)
            result.leveled_up = True

        for obstacle in obstacles:
            if check_collision(player, obstacle):
                result.hit = obstacle
                break

        return result

    def ramp(self, session: SessionState) -> None:
        """Speed up and shorten the spawn interval, never below the floor."""
        session.game_speed += self.settings.speed_increment
        session.obstacle_interval = max(
            self.settings.min_spawn_interval,
            session.obstacle_interval - self.settings.interval_decrement,
        )
        session.level += 1
        logger.info(
            f"Difficulty {session.level}: speed={session.game_speed:.1f} "
            f"interval={session.obstacle_interval}"
        )
