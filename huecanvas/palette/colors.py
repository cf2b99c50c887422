"""
Colour grid and Hue sort. Every (r, g, b) on the 8-step grid 8..256 is generated once,
converted to HSL and stably sorted by hue. Pure and deterministic; the result is cached.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from ..errors import PartitionMismatch

logger = logging.getLogger(__name__)

# 32 samples per channel. The top sample is 256, not 255: it is kept as-is for the
# HSL maths (256 / 255 > 1.0) and written to the image as 255.
CHANNEL_LEVELS: tuple[int, ...] = tuple(range(8, 257, 8))
PALETTE_SIZE = len(CHANNEL_LEVELS) ** 3


@dataclass(frozen=True)
class Color:
    """One grid colour with its HSL coordinates (h 0-360, s and l 0-100)."""
    r: int
    g: int
    b: int
    h: float
    s: float
    l: float

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_rgba(self) -> tuple[int, int, int, int]:
        """RGBA as written to a pixel buffer (channels capped at 255, opaque)."""
        return (min(self.r, 255), min(self.g, 255), min(self.b, 255), 255)


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """
    Standard RGB → HSL on channels divided by 255.
    Returns (h, s, l) with h in degrees and s, l in percent.
    """
    rn, gn, bn = r / 255, g / 255, b / 255
    cmax = max(rn, gn, bn)
    cmin = min(rn, gn, bn)
    l = (cmax + cmin) / 2
    if cmax == cmin:
        h = s = 0.0
    else:
        diff = cmax - cmin
        total = cmax + cmin
        s = diff / (2 - total) if l > 0.5 else diff / total
        # Channel order decides ties: red, then green, then blue
        if cmax == rn:
            h = (gn - bn) / diff + (6 if gn < bn else 0)
        elif cmax == gn:
            h = (bn - rn) / diff + 2
        else:
            h = (rn - gn) / diff + 4
        h /= 6
    return h * 360, s * 100, l * 100


@lru_cache(maxsize=1)
def generate_palette() -> tuple[Color, ...]:
    """
    All 32768 grid colours sorted ascending by hue.
    Equal hues keep generation order (r outer, g middle, b inner); sorted() is stable.
    """
    colors = []
    for r in CHANNEL_LEVELS:
        for g in CHANNEL_LEVELS:
            for b in CHANNEL_LEVELS:
                h, s, l = rgb_to_hsl(r, g, b)
                colors.append(Color(r, g, b, h, s, l))
    if len(colors) != PALETTE_SIZE:
        raise PartitionMismatch(
            f"Generated {len(colors)} colours, expected {PALETTE_SIZE}",
            generated=len(colors),
        )
    palette = tuple(sorted(colors, key=lambda c: c.h))
    logger.debug("Generated palette of %s colours (hue %.2f..%.2f)", len(palette), palette[0].h, palette[-1].h)
    return palette
