"""Obstacle spawning, scrolling and culling."""

import logging
import random
from typing import Iterator

from dragon_runner.config.settings import ObstacleSettings
from dragon_runner.game.entities import Ground, Obstacle, SessionState

logger = logging.getLogger(__name__)


class ObstaclePipeline:
    """Owns the live obstacles.

    Reads game_speed and obstacle_interval from the session each frame but
    never writes them; the score keeper drives difficulty.
    """

    def __init__(
        self,
        settings: ObstacleSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or ObstacleSettings()
        self._rng = rng or random.Random()
        self._obstacles: list[Obstacle] = []
        self.spawn_timer = 0

    @property
    def obstacles(self) -> list[Obstacle]:
        """Live obstacles, oldest first."""
        return list(self._obstacles)

    def __len__(self) -> int:
        return len(self._obstacles)

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(list(self._obstacles))

    def advance(
        self,
        session: SessionState,
        field_width: float,
        ground: Ground,
    ) -> Obstacle | None:
        """Run one Playing frame: spawn, scroll, cull.

        Returns:
            The obstacle spawned this frame, if any
        """
        spawned = None

        self.spawn_timer += 1
        if self.spawn_timer > session.obstacle_interval:
            spawned = self.spawn(field_width, ground)
            self.spawn_timer = 0

        for obstacle in self._obstacles:
            obstacle.x -= session.game_speed

        # Rebuild instead of removing while iterating
        self._obstacles = [o for o in self._obstacles if o.right >= 0]

        return spawned

    def spawn(self, field_width: float, ground: Ground) -> Obstacle:
        """Create an obstacle at the right edge, resting on the ground."""
        height = self._rng.uniform(self.settings.min_height, self.settings.max_height)
        obstacle = Obstacle(
            x=float(field_width),
            y=ground.y - height,
            width=self.settings.width,
            height=height,
        )
        self._obstacles.append(obstacle)
        logger.debug(f"Spawned obstacle h={height:.1f} at x={obstacle.x:.0f}")
        return obstacle

    def add(self, obstacle: Obstacle) -> None:
        """Place an obstacle directly (scripted layouts, tests)."""
        self._obstacles.append(obstacle)

    def shift(self, dy: float) -> None:
        """Move every obstacle vertically, e.g. when the floor moves."""
        for obstacle in self._obstacles:
            obstacle.y += dy

    def clear(self) -> None:
        """Drop every obstacle and restart the spawn countdown."""
        self._obstacles = []
        self.spawn_timer = 0
