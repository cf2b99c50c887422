"""
Abstract interface for painters. One Hue-sorted palette → one fully written pixel buffer.
Implementations: spiral (version 1) and atom circles (version 2).
"""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from ..palette import PALETTE_SIZE, Color

CANVAS_WIDTH = 256
CANVAS_HEIGHT = 128


def new_pixel_buffer(width: int, height: int) -> np.ndarray:
    """Blank RGBA buffer (H, W, 4) uint8; alpha 0 marks a pixel nobody painted."""
    return np.zeros((height, width, 4), dtype=np.uint8)


def write_pixel(buffer: np.ndarray, x: int, y: int, color: Color) -> None:
    buffer[y, x] = color.to_rgba()


def to_bytes(buffer: np.ndarray) -> bytes:
    """Flat row-major RGBA bytes, as raster image APIs expect."""
    return np.ascontiguousarray(buffer, dtype=np.uint8).tobytes()


class Painter(ABC):
    """
    Places every palette colour on exactly one pixel. Each paint() call works on its
    own cursors and buffer; the palette is only read.
    """

    version: int = 0
    name: str = ""

    def __init__(self, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT):
        if (width, height) != (CANVAS_WIDTH, CANVAS_HEIGHT):
            raise ValueError(
                f"{type(self).__name__} only supports a {CANVAS_WIDTH}x{CANVAS_HEIGHT} canvas, "
                f"got {width}x{height}"
            )
        self.width = width
        self.height = height

    def check_palette(self, palette: Sequence[Color]) -> None:
        if len(palette) != self.width * self.height or len(palette) != PALETTE_SIZE:
            raise ValueError(
                f"Palette has {len(palette)} colours; canvas needs {self.width * self.height}"
            )

    @abstractmethod
    def paint(self, palette: Sequence[Color]) -> np.ndarray:
        """Return an (height, width, 4) uint8 RGBA buffer with every pixel written once."""
        ...
