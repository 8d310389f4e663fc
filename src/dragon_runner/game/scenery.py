"""Drifting background clouds. Decorative only."""

import random

from dragon_runner.config.settings import ScenerySettings
from dragon_runner.game.entities import Cloud


class Scenery:
    def __init__(
        self,
        settings: ScenerySettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or ScenerySettings()
        self._rng = rng or random.Random()
        self.clouds: list[Cloud] = []

    def reset(self, field_width: float, field_height: float) -> None:
        """Scatter a fresh set of clouds across the sky band."""
        self.clouds = [
            Cloud(
                x=self._rng.random() * field_width,
                y=self._sky_y(field_height),
                width=60 + self._rng.random() * 40,
                height=30 + self._rng.random() * 20,
                speed=0.5 + self._rng.random() * 0.5,
            )
            for _ in range(self.settings.cloud_count)
        ]

    def update(self, field_width: float, field_height: float) -> None:
        """Drift left; clouds that leave the field wrap to the right edge."""
        for cloud in self.clouds:
            cloud.x -= cloud.speed
            if cloud.right < 0:
                cloud.x = float(field_width)
                cloud.y = self._sky_y(field_height)

    def _sky_y(self, field_height: float) -> float:
        return self._rng.random() * (field_height * self.settings.sky_fraction)
