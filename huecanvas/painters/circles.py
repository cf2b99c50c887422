"""
Version 2: seven circles laid out like an atom logo, each filled by its own hue family.
The palette is cut into 8 chunks of 4096; the first 812 colours of chunks 0-6 fill the
circles and everything else fills the background in raster order.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..errors import PartitionMismatch, QueueExhaustion
from ..palette import Color
from .base import CANVAS_HEIGHT, CANVAS_WIDTH, Painter, new_pixel_buffer, write_pixel

logger = logging.getLogger(__name__)

CHUNK_COUNT = 8
CHUNK_SIZE = 4096
FAMILY_SIZE = 812  # pixels inside one radius-16 circle centred on a half-pixel
CIRCLE_RADIUS = 16.0


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float = CIRCLE_RADIUS

    def contains(self, px: int, py: int) -> bool:
        return math.sqrt((px - self.x) ** 2 + (py - self.y) ** 2) <= self.radius


# Origin top-left; neighbouring centres are 48px apart
CIRCLES: tuple[Circle, ...] = (
    Circle(79.5, 63.5),
    Circle(127.5, 63.5),
    Circle(175.5, 63.5),
    Circle(103.5, 111.5),
    Circle(151.5, 111.5),
    Circle(151.5, 15.5),
    Circle(103.5, 15.5),
)


class ColorQueue:
    """FIFO over an immutable run of colours: a cursor, never a pop."""

    def __init__(self, colors: Sequence[Color], label: str = ""):
        self._colors = tuple(colors)
        self._cursor = 0
        self.label = label

    def __len__(self) -> int:
        return len(self._colors) - self._cursor

    @property
    def consumed(self) -> int:
        return self._cursor

    @property
    def colors(self) -> tuple[Color, ...]:
        return self._colors

    def dequeue(self) -> Color:
        if self._cursor >= len(self._colors):
            raise QueueExhaustion(
                f"Queue {self.label or '?'} exhausted after {self._cursor} colours",
                queue=self.label,
                size=len(self._colors),
            )
        color = self._colors[self._cursor]
        self._cursor += 1
        return color


def partition_palette(
    palette: Sequence[Color],
    circle_count: int = len(CIRCLES),
) -> tuple[list[ColorQueue], ColorQueue]:
    """
    Split the palette into per-circle family queues and one rest queue.
    Family i = palette[i*4096 : i*4096 + 812]; the rest pool holds the tail of each of
    those chunks, in chunk order, followed by every remaining chunk whole.
    """
    families: list[ColorQueue] = []
    rest: list[Color] = []
    for i in range(CHUNK_COUNT):
        start = i * CHUNK_SIZE
        chunk = palette[start:start + CHUNK_SIZE]
        if i < circle_count:
            families.append(ColorQueue(chunk[:FAMILY_SIZE], label=f"family {i}"))
            rest.extend(chunk[FAMILY_SIZE:])
        else:
            rest.extend(chunk)
    family_total = sum(len(f) for f in families)
    if family_total + len(rest) != len(palette) or any(len(f) != FAMILY_SIZE for f in families):
        raise PartitionMismatch(
            f"Families ({family_total}) + rest ({len(rest)}) != palette ({len(palette)})",
            families=family_total,
            rest=len(rest),
            palette=len(palette),
        )
    return families, ColorQueue(rest, label="rest")


def circle_index(x: int, y: int, circles: Sequence[Circle] = CIRCLES) -> int:
    """Index of the first circle containing (x, y), or -1 if none does."""
    for i, circle in enumerate(circles):
        if circle.contains(x, y):
            return i
    return -1


def circle_membership(
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
    circles: Sequence[Circle] = CIRCLES,
) -> np.ndarray:
    """(height, width) int array of circle_index for every pixel."""
    out = np.full((height, width), -1, dtype=np.int8)
    for y in range(height):
        for x in range(width):
            out[y, x] = circle_index(x, y, circles)
    return out


class CirclePainter(Painter):
    version = 2
    name = "atom-circles"

    def __init__(
        self,
        width: int = CANVAS_WIDTH,
        height: int = CANVAS_HEIGHT,
        circles: Sequence[Circle] = CIRCLES,
    ):
        super().__init__(width, height)
        self.circles = tuple(circles)

    def paint(self, palette: Sequence[Color]) -> np.ndarray:
        self.check_palette(palette)
        width, height = self.width, self.height
        families, rest = partition_palette(palette, len(self.circles))
        buffer = new_pixel_buffer(width, height)
        for i in range(width * height):
            x, y = i % width, i // width
            j = circle_index(x, y, self.circles)
            queue = families[j] if j >= 0 else rest
            write_pixel(buffer, x, y, queue.dequeue())
        leftovers = {q.label: len(q) for q in (*families, rest) if len(q)}
        if leftovers:
            raise PartitionMismatch(f"Colours left after raster scan: {leftovers}", leftovers=leftovers)
        logger.debug("Circles filled: %s family colours, %s rest colours",
                     sum(f.consumed for f in families), rest.consumed)
        return buffer


def paint_circles(
    palette: Sequence[Color],
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
    circles: Sequence[Circle] = CIRCLES,
) -> np.ndarray:
    """Paint version 2 onto a fresh buffer."""
    return CirclePainter(width, height, circles).paint(palette)
