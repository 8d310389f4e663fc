"""Basic drawing primitives on numpy RGB buffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    """Allocate a (height, width, 3) buffer filled with color."""
    buffer = np.zeros((max(0, height), max(0, width), 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a rectangle on the buffer.

    Coordinates may be fractional or partly off the buffer; they are rounded
    and clamped.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw a 1px outline
    """
    h, w = buffer.shape[:2]

    # Clamp to buffer bounds
    x1 = max(0, min(int(round(x)), w))
    y1 = max(0, min(int(round(y)), h))
    x2 = max(0, min(int(round(x + width)), w))
    y2 = max(0, min(int(round(y + height)), h))

    if x1 >= x2 or y1 >= y2:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
    else:
        buffer[y1, x1:x2] = color
        buffer[y2 - 1, x1:x2] = color
        buffer[y1:y2, x1] = color
        buffer[y1:y2, x2 - 1] = color


def draw_hline(buffer: Buffer, y: float, color: Color, thickness: int = 1) -> None:
    """Draw a full-width horizontal line with its top edge at y."""
    h = buffer.shape[0]
    y1 = max(0, min(int(round(y)), h))
    y2 = max(0, min(y1 + thickness, h))
    buffer[y1:y2, :] = color
