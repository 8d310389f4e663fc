"""Plain state for the runner: player, obstacles, clouds, ground and session.

Coordinates are screen-style: x grows to the right, y grows downward, and
(x, y) is the top-left corner of a box.
"""

from dataclasses import dataclass


class Box:
    """Edge helpers for anything with x, y, width and height."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def as_rect(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass
class Ground:
    """Playable floor. y is the top surface, height its thickness."""
    y: float = 0.0
    height: float = 60.0

    def fit(self, field_height: float) -> None:
        """Place the floor at the bottom of a field of the given height."""
        self.y = field_height - self.height


@dataclass
class Player(Box):
    x: float = 80.0
    y: float = 0.0
    width: float = 50.0
    height: float = 50.0
    velocity_y: float = 0.0
    jumping: bool = False
    jump_power: float = -12.0
    gravity: float = 0.6

    def rest_on(self, ground: Ground) -> None:
        """Stand still on the ground surface."""
        self.y = ground.y - self.height
        self.velocity_y = 0.0
        self.jumping = False


@dataclass
class Obstacle(Box):
    x: float
    y: float
    width: float = 20.0
    height: float = 40.0


@dataclass
class Cloud(Box):
    x: float
    y: float
    width: float
    height: float
    speed: float


@dataclass
class SessionState:
    """Mutable aggregate for one run. The phase lives in the state machine."""
    score: int = 0
    high_score: int = 0
    is_new_high_score: bool = False
    game_speed: float = 5.0
    obstacle_interval: int = 100
    level: int = 0   # Difficulty ramps applied this run
