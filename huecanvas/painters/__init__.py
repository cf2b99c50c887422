# Painters: sorted palette → RGBA pixel buffer

from typing import Sequence

import numpy as np

from ..palette import Color, generate_palette
from .base import CANVAS_HEIGHT, CANVAS_WIDTH, Painter, new_pixel_buffer, to_bytes
from .circles import CIRCLES, Circle, CirclePainter, circle_index, paint_circles, partition_palette
from .spiral import SpiralPainter, SpiralState, paint_spiral, spiral_positions

PAINTERS: dict[int, type[Painter]] = {
    SpiralPainter.version: SpiralPainter,
    CirclePainter.version: CirclePainter,
}


def get_painter(version: int, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT) -> Painter:
    """Painter instance for a version number (1 = spiral, 2 = atom circles)."""
    try:
        cls = PAINTERS[int(version)]
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"Unknown version {version!r}; expected one of {sorted(PAINTERS)}") from None
    return cls(width, height)


def paint(
    version: int,
    palette: Sequence[Color] | None = None,
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
) -> np.ndarray:
    """Paint one version. Uses the cached palette when none is given."""
    if palette is None:
        palette = generate_palette()
    return get_painter(version, width, height).paint(palette)


__all__ = [
    "CANVAS_HEIGHT",
    "CANVAS_WIDTH",
    "CIRCLES",
    "Circle",
    "CirclePainter",
    "PAINTERS",
    "Painter",
    "SpiralPainter",
    "SpiralState",
    "circle_index",
    "get_painter",
    "new_pixel_buffer",
    "paint",
    "paint_circles",
    "paint_spiral",
    "partition_palette",
    "spiral_positions",
    "to_bytes",
]
