# Palette: the full 32-level RGB grid, Hue-sorted

from .colors import (
    CHANNEL_LEVELS,
    PALETTE_SIZE,
    Color,
    generate_palette,
    rgb_to_hsl,
)

__all__ = ["CHANNEL_LEVELS", "PALETTE_SIZE", "Color", "generate_palette", "rgb_to_hsl"]
