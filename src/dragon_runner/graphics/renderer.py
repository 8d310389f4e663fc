"""Flat-box renderer for game snapshots.

Paints what the simulation knows about (sky, clouds, ground, player,
obstacles) as solid rectangles. Good enough to play and to debug hitboxes.
"""

from dataclasses import dataclass
import logging

import numpy as np

from dragon_runner.game.runner import GameSnapshot
from dragon_runner.graphics.primitives import (
    Buffer,
    Color,
    draw_hline,
    draw_rect,
    fill,
    new_buffer,
)

logger = logging.getLogger(__name__)


@dataclass
class Palette:
    sky: Color = (135, 206, 235)
    cloud: Color = (255, 255, 255)
    ground: Color = (139, 115, 85)
    ground_line: Color = (107, 89, 69)
    player: Color = (255, 107, 107)
    player_outline: Color = (255, 71, 87)
    obstacle: Color = (45, 52, 54)


class SnapshotRenderer:
    """Renders snapshots into a reusable buffer of a fixed pixel size.

    Field coordinates are scaled to the buffer independently on each axis.
    """

    def __init__(self, width: int, height: int, palette: Palette | None = None) -> None:
        self.palette = palette or Palette()
        self._buffer = new_buffer(width, height)

    @property
    def buffer(self) -> Buffer:
        return self._buffer

    def resize(self, width: int, height: int) -> None:
        self._buffer = new_buffer(width, height)
        logger.debug(f"Render buffer resized to {width}x{height}")

    def render(self, snapshot: GameSnapshot) -> Buffer:
        """Draw a snapshot and return the buffer (reused between calls)."""
        render_snapshot(self._buffer, snapshot, self.palette)
        return self._buffer


def render_snapshot(
    buffer: Buffer,
    snapshot: GameSnapshot,
    palette: Palette | None = None,
) -> None:
    """Paint a snapshot into buffer, scaling field units to pixels."""
    palette = palette or Palette()
    h, w = buffer.shape[:2]

    fill(buffer, palette.sky)
    if snapshot.field_width <= 0 or snapshot.field_height <= 0 or w == 0 or h == 0:
        return

    sx = w / snapshot.field_width
    sy = h / snapshot.field_height

    def box(rect: tuple[float, float, float, float], color: Color, filled: bool = True) -> None:
        x, y, rw, rh = rect
        draw_rect(buffer, x * sx, y * sy, rw * sx, rh * sy, color, filled=filled)

    for cloud in snapshot.clouds:
        box(cloud, palette.cloud)

    ground_top = snapshot.ground_y * sy
    buffer[max(0, min(int(round(ground_top)), h)):, :] = palette.ground
    draw_hline(buffer, ground_top, palette.ground_line, thickness=2)

    for obstacle in snapshot.obstacles:
        box(obstacle, palette.obstacle)

    box(snapshot.player, palette.player)
    box(snapshot.player, palette.player_outline, filled=False)


def to_surface_array(buffer: Buffer) -> Buffer:
    """(H, W, 3) buffer to the (W, H, 3) layout pygame.surfarray expects."""
    return np.ascontiguousarray(buffer.swapaxes(0, 1))
