"""
Version 1: anti-clockwise square spiral from the canvas centre.
Sorted colours are laid down one per step; once the spiral leaves the top edge the
remaining area is filled column by column, alternating left and right of the
filled block.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np

from ..errors import CoverageGap
from ..palette import Color
from .base import CANVAS_HEIGHT, CANVAS_WIDTH, Painter, new_pixel_buffer, write_pixel

logger = logging.getLogger(__name__)


@dataclass
class SpiralState:
    """Traversal cursor. step = leg length; offset = +1/-1 direction for both axes."""
    x: int
    y: int
    step: int = 1
    offset: int = 1
    vertical_only: bool = False

    @classmethod
    def at_centre(cls, width: int, height: int) -> "SpiralState":
        return cls(x=width // 2, y=height // 2 - 1)

    def next_iteration(self) -> None:
        self.step += 1
        self.offset *= -1


def _spiral_iteration(state: SpiralState) -> Iterator[tuple[int, int]]:
    # Horizontal leg: left when offset is +1, right when -1
    for _ in range(state.step):
        yield state.x, state.y
        state.x -= state.offset
    # Vertical leg: down when offset is +1, up when -1
    for _ in range(state.step):
        yield state.x, state.y
        state.y += state.offset
        if state.y < 0:
            state.vertical_only = True


def _column_iteration(state: SpiralState, height: int) -> Iterator[tuple[int, int]]:
    # Undo the last horizontal overshoot: lands on the next free column, alternating sides
    state.x -= state.step * state.offset
    state.y = 0 if state.offset == 1 else height - 1
    for _ in range(height):
        yield state.x, state.y
        state.y += state.offset


def spiral_positions(
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
    state: SpiralState | None = None,
) -> Iterator[tuple[int, int]]:
    """
    Lazily yield (x, y) in painting order until width * height positions were produced.
    Stops at an iteration boundary, so a full 256x128 run ends exactly on the last
    column. The column fallback is only derived for 256x128.
    """
    if state is None:
        state = SpiralState.at_centre(width, height)
    total = width * height
    emitted = 0
    while emitted < total:
        if state.vertical_only:
            positions = _column_iteration(state, height)
        else:
            positions = _spiral_iteration(state)
        for pos in positions:
            emitted += 1
            yield pos
        state.next_iteration()


class SpiralPainter(Painter):
    version = 1
    name = "spiral"

    def paint(self, palette: Sequence[Color]) -> np.ndarray:
        self.check_palette(palette)
        width, height = self.width, self.height
        buffer = new_pixel_buffer(width, height)
        visited = np.zeros((height, width), dtype=bool)
        state = SpiralState.at_centre(width, height)
        for index, (x, y) in enumerate(spiral_positions(width, height, state)):
            if index >= len(palette):
                raise CoverageGap(
                    "Spiral produced more positions than palette colours",
                    index=index,
                    position=(x, y),
                )
            if not (0 <= x < width and 0 <= y < height):
                raise CoverageGap(f"Spiral left the canvas at {(x, y)}", index=index, position=(x, y))
            if visited[y, x]:
                raise CoverageGap(f"Spiral visited {(x, y)} twice", index=index, position=(x, y))
            visited[y, x] = True
            write_pixel(buffer, x, y, palette[index])
        missing = int((~visited).sum())
        if missing:
            raise CoverageGap(f"Spiral finished with {missing} unpainted pixels", missing=missing)
        logger.debug("Spiral finished at step %s, column x=%s", state.step, state.x)
        return buffer


def paint_spiral(
    palette: Sequence[Color],
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
) -> np.ndarray:
    """Paint version 1 onto a fresh buffer."""
    return SpiralPainter(width, height).paint(palette)
