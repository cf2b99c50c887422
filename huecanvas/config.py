"""
Load and expose app config (YAML). Used by the render pipeline and scripts to get
canvas size, default version, output dir, etc.
"""
from pathlib import Path
from typing import Any

import yaml


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load config from YAML. Path is optional; defaults to config/default.yaml."""
    if config_path is None:
        config_path = _project_root() / "config" / "default.yaml"
    path = Path(config_path)
    if not path.exists():
        return _defaults()
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(data).__name__}")
    merged = _defaults()
    for section, values in data.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section] = {**merged[section], **values}
        else:
            merged[section] = values
    return merged


def _defaults() -> dict[str, Any]:
    return {
        "canvas": {"width": 256, "height": 128},
        "render": {"version": 1},
        "output": {
            "dir": "output",
            "filename_prefix": "version",
            "log_renders": True,
        },
    }


def get_canvas_size(config: dict[str, Any]) -> tuple[int, int]:
    """(width, height) from config; painters reject anything but 256x128."""
    canvas = config.get("canvas", {})
    try:
        return int(canvas.get("width", 256)), int(canvas.get("height", 128))
    except (TypeError, ValueError):
        raise ValueError(f"Invalid canvas size in config: {canvas!r}") from None


def get_output_dir(config: dict[str, Any]) -> Path:
    """Resolve output directory (relative to project root if needed)."""
    out = config.get("output", {})
    d = out.get("dir", "output")
    p = Path(d)
    if not p.is_absolute():
        p = _project_root() / p
    return p
