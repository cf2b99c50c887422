"""
Pure checks on painted buffers: coverage against the palette, mean saturation and hue.
"""
from typing import Any, Sequence

import numpy as np

from ..palette import Color


def verify_pixel_buffer(buffer: np.ndarray, palette: Sequence[Color]) -> dict[str, Any]:
    """
    Does the buffer use every palette colour exactly once on opaque pixels?
    Returns a report dict; "ok" is True only if every check passes.
    """
    if buffer.ndim != 3 or buffer.shape[-1] != 4:
        raise ValueError("Expected RGBA buffer (H, W, 4)")
    h, w = buffer.shape[:2]
    pixels = buffer.reshape(-1, 4)
    opaque = int((pixels[:, 3] == 255).sum())
    packed = (
        pixels[:, 0].astype(np.uint32) << 16
        | pixels[:, 1].astype(np.uint32) << 8
        | pixels[:, 2].astype(np.uint32)
    )
    unique = int(np.unique(packed).size)
    expected = {
        (min(c.r, 255) << 16) | (min(c.g, 255) << 8) | min(c.b, 255) for c in palette
    }
    matches_palette = set(int(v) for v in packed) == expected
    report = {
        "width": w,
        "height": h,
        "pixels": h * w,
        "opaque": opaque,
        "unique_colors": unique,
        "palette_size": len(palette),
        "matches_palette": matches_palette,
    }
    report["ok"] = (
        opaque == h * w
        and unique == h * w == len(palette)
        and matches_palette
    )
    return report


def saturation_and_hue(buffer: np.ndarray, mask: np.ndarray | None = None) -> dict[str, float]:
    """
    Mean saturation (0–1) and mean hue (0–360) in HSV space over opaque pixels,
    optionally restricted to a boolean (H, W) mask.
    """
    if buffer.ndim != 3 or buffer.shape[-1] < 3:
        return {"saturation": 0.0, "hue": 0.0}
    select = buffer[:, :, 3] == 255 if buffer.shape[-1] == 4 else np.ones(buffer.shape[:2], dtype=bool)
    if mask is not None:
        select = select & mask
    if not select.any():
        return {"saturation": 0.0, "hue": 0.0}
    r = buffer[:, :, 0][select].astype(np.float64) / 255.0
    g = buffer[:, :, 1][select].astype(np.float64) / 255.0
    b = buffer[:, :, 2][select].astype(np.float64) / 255.0
    cmax = np.maximum(np.maximum(r, g), b)
    cmin = np.minimum(np.minimum(r, g), b)
    delta = cmax - cmin
    delta_safe = np.maximum(delta, 1e-9)  # np.where evaluates both branches
    sat = np.zeros_like(r)
    np.divide(delta, cmax, out=sat, where=cmax > 1e-9)
    hue = np.zeros_like(r)
    has_hue = delta > 1e-9
    mask_r = (cmax == r) & has_hue
    mask_g = (cmax == g) & has_hue & ~mask_r
    mask_b = (cmax == b) & has_hue & ~mask_r & ~mask_g
    hue = np.where(mask_r, 60 * (((g - b) / delta_safe) % 6), hue)
    hue = np.where(mask_g, 60 * ((b - r) / delta_safe + 2), hue)
    hue = np.where(mask_b, 60 * ((r - g) / delta_safe + 4), hue)
    return {
        "saturation": float(sat.mean()),
        "hue": float(hue.mean()),
    }
