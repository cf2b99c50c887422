#!/usr/bin/env python3
"""
CLI: Render the all-colours image (one or both versions) and write PNG files.
Usage:
  python scripts/generate.py
  python scripts/generate.py --version 2
  python scripts/generate.py --all --verify
  python scripts/generate.py --version 1 --output my_image.png
"""
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse

from huecanvas.analysis import saturation_and_hue, verify_pixel_buffer
from huecanvas.config import load_config
from huecanvas.palette import generate_palette
from huecanvas.render import (
    VERSION_DESCRIPTIONS,
    default_output_path,
    log_render,
    other_version,
    render,
    save_png,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render every colour of the 32-level RGB grid onto a 256x128 image."
    )
    parser.add_argument(
        "--version",
        "-v",
        type=int,
        choices=(1, 2),
        default=None,
        help="1 = spiral, 2 = atom circles (default: render.version from config).",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Render both versions.",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output PNG path (default: output/version<N>.png). Ignored with --all.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config YAML (default: config/default.yaml).",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check that every colour appears exactly once before writing.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: could not load config: {e}", file=sys.stderr)
        return 1

    first = args.version or int(config.get("render", {}).get("version", 1))
    versions = [first, other_version(first)] if args.all else [first]
    palette = generate_palette()

    for version in versions:
        try:
            result = render(version, palette=palette, config=config)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Version {version}: {VERSION_DESCRIPTIONS[version]}")
        print(f"Rendering time: {result.duration_ms:.0f}ms")

        if args.verify:
            report = verify_pixel_buffer(result.buffer, palette)
            if not report["ok"]:
                print(f"Error: verification failed: {report}", file=sys.stderr)
                return 2
            print(f"Verified: {report['unique_colors']} unique colours on {report['pixels']} pixels")
        stats = saturation_and_hue(result.buffer)
        print(f"Mean saturation {stats['saturation']:.3f}, mean hue {stats['hue']:.1f}")

        out = args.output if (args.output and not args.all) else default_output_path(version, config)
        try:
            path = save_png(result.buffer, out)
        except OSError as e:
            print(f"Error: could not write {out}: {e}", file=sys.stderr)
            return 1
        log_render(result, image_path=path, config=config)
        print(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
