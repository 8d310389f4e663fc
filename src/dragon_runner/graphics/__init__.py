"""Graphics for Dragon Runner."""

from dragon_runner.graphics.primitives import draw_hline, draw_rect, fill, new_buffer
from dragon_runner.graphics.renderer import Palette, SnapshotRenderer, render_snapshot

__all__ = [
    "draw_hline",
    "draw_rect",
    "fill",
    "new_buffer",
    "Palette",
    "SnapshotRenderer",
    "render_snapshot",
]
