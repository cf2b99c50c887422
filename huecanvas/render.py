"""
Render pipeline: version → timed pixel buffer → PNG file, plus a JSONL log of runs.
The painters stay pure; timing, files and logging live here.
"""
import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

import numpy as np
from PIL import Image

from .config import get_canvas_size, get_output_dir, load_config
from .painters import get_painter
from .palette import Color, generate_palette
from .workflow_utils import log_structured

VERSION_DESCRIPTIONS: dict[int, str] = {
    1: (
        "Sorted colours are placed from the centre of the canvas along an anti-clockwise "
        "spiral. The image looks like a colourful stump, tunnel or vortex."
    ),
    2: (
        "Seven circles outline an atom logo, each filled with a distinct colour family; "
        "the remaining colours fill the background."
    ),
}


@dataclass
class RenderResult:
    version: int
    buffer: np.ndarray
    duration_ms: float

    @property
    def width(self) -> int:
        return int(self.buffer.shape[1])

    @property
    def height(self) -> int:
        return int(self.buffer.shape[0])

    def to_dict(self) -> dict[str, Any]:
        """Summary for logging (no pixel data)."""
        return {
            "version": self.version,
            "width": self.width,
            "height": self.height,
            "duration_ms": round(self.duration_ms, 3),
        }


def other_version(version: int) -> int:
    """The version a toggle switches to: 1 ↔ 2."""
    return 2 if version == 1 else 1


def render(
    version: int | None = None,
    *,
    palette: Sequence[Color] | None = None,
    config: dict[str, Any] | None = None,
) -> RenderResult:
    """
    Paint one version and measure wall-clock time. Palette generation is cached and not
    counted in the duration once warm.
    """
    if config is None:
        config = load_config()
    if version is None:
        version = int(config.get("render", {}).get("version", 1))
    width, height = get_canvas_size(config)
    painter = get_painter(version, width, height)
    if palette is None:
        palette = generate_palette()
    start = time.perf_counter()
    buffer = painter.paint(palette)
    duration_ms = (time.perf_counter() - start) * 1000.0
    result = RenderResult(version=painter.version, buffer=buffer, duration_ms=duration_ms)
    log_structured("info", event="render", painter=painter.name, **result.to_dict())
    return result


def default_output_path(version: int, config: dict[str, Any] | None = None) -> Path:
    """<output.dir>/<prefix><version>.png"""
    if config is None:
        config = load_config()
    prefix = config.get("output", {}).get("filename_prefix", "version")
    return get_output_dir(config) / f"{prefix}{version}.png"


def save_png(buffer: np.ndarray, path: Path) -> Path:
    """Write an RGBA buffer to a PNG file. Returns the path written."""
    if buffer.ndim != 3 or buffer.shape[-1] != 4:
        raise ValueError(f"Expected RGBA buffer (H, W, 4), got shape {buffer.shape}")
    path = Path(path)
    if path.suffix == "":
        path = path.with_suffix(".png")
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(buffer, dtype=np.uint8)).save(path, format="PNG")
    log_structured("info", event="png_written", path=str(path))
    return path


def get_log_path(config: dict[str, Any] | None = None) -> Path:
    """Path to the render log file (JSONL)."""
    if config is None:
        config = load_config()
    return get_output_dir(config).parent / "render_log.jsonl"


def log_render(
    result: RenderResult,
    *,
    image_path: Path | None = None,
    config: dict[str, Any] | None = None,
    log_path: Path | None = None,
) -> Path | None:
    """
    Append one run to the render log: version, size, duration and output file.
    Returns the log path, or None when output.log_renders is off.
    """
    if config is None:
        config = load_config()
    if not config.get("output", {}).get("log_renders", True):
        return None
    if log_path is None:
        log_path = get_log_path(config)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    entry = {
        **result.to_dict(),
        "image_path": str(image_path) if image_path else None,
        "timestamp": time.time(),
    }
    with open(log_path, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, ensure_ascii=False) + "\n")
    return log_path


def read_render_log(log_path: Path | None = None) -> list[dict[str, Any]]:
    """Read all entries from the render log."""
    if log_path is None:
        log_path = get_log_path()
    if not log_path.exists():
        return []
    entries = []
    with open(log_path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                entries.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return entries
