"""
Unit tests for version dispatch, the render pipeline, config and the CLI.
Run from project root: python -m pytest tests/ -v
"""
import importlib.util
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _temp_config(tmp: Path) -> dict:
    from huecanvas.config import load_config

    config = load_config(tmp / "missing.yaml")
    config["output"]["dir"] = str(tmp / "output")
    return config


class TestPaintDispatch(unittest.TestCase):
    """paint(version, palette) contract."""

    def test_idempotent_per_version(self):
        from huecanvas.painters import paint, to_bytes
        from huecanvas.palette import generate_palette

        palette = generate_palette()
        for version in (1, 2):
            a = paint(version, palette)
            b = paint(version, palette)
            self.assertEqual(to_bytes(a), to_bytes(b))
            self.assertEqual(len(to_bytes(a)), 256 * 128 * 4)

    def test_default_palette_matches_explicit(self):
        from huecanvas.painters import paint
        from huecanvas.palette import generate_palette

        self.assertTrue((paint(1) == paint(1, generate_palette())).all())

    def test_versions_differ(self):
        from huecanvas.painters import paint

        self.assertFalse((paint(1) == paint(2)).all())

    def test_unknown_version(self):
        from huecanvas.painters import get_painter, paint

        with self.assertRaises(ValueError):
            paint(3)
        with self.assertRaises(ValueError):
            get_painter("spiral")

    def test_spiral_centre_and_circle_background(self):
        from huecanvas.painters import paint
        from huecanvas.palette import generate_palette

        palette = generate_palette()
        self.assertEqual(tuple(paint(1, palette)[63, 128]), palette[0].to_rgba())
        self.assertEqual(tuple(paint(2, palette)[0, 0]), palette[812].to_rgba())


class TestRenderPipeline(unittest.TestCase):
    """Timing, PNG export and the render log."""

    def test_render_result(self):
        from huecanvas.render import render

        with tempfile.TemporaryDirectory() as tmp:
            result = render(2, config=_temp_config(Path(tmp)))
        self.assertEqual(result.version, 2)
        self.assertEqual((result.width, result.height), (256, 128))
        self.assertGreaterEqual(result.duration_ms, 0.0)
        self.assertEqual(set(result.to_dict()), {"version", "width", "height", "duration_ms"})

    def test_render_uses_config_version(self):
        from huecanvas.render import render

        with tempfile.TemporaryDirectory() as tmp:
            config = _temp_config(Path(tmp))
            config["render"]["version"] = 2
            self.assertEqual(render(config=config).version, 2)

    def test_render_rejects_other_canvas_size(self):
        from huecanvas.render import render

        with tempfile.TemporaryDirectory() as tmp:
            config = _temp_config(Path(tmp))
            config["canvas"]["width"] = 512
            with self.assertRaises(ValueError):
                render(1, config=config)

    def test_save_png_round_trip(self):
        import numpy as np
        from PIL import Image

        from huecanvas.render import render, save_png

        with tempfile.TemporaryDirectory() as tmp:
            result = render(1, config=_temp_config(Path(tmp)))
            path = save_png(result.buffer, Path(tmp) / "nested" / "version1")
            self.assertEqual(path.suffix, ".png")
            with Image.open(path) as img:
                self.assertEqual(img.mode, "RGBA")
                self.assertEqual(img.size, (256, 128))
                self.assertTrue((np.array(img) == result.buffer).all())

    def test_save_png_rejects_rgb(self):
        import numpy as np

        from huecanvas.render import save_png

        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ValueError):
                save_png(np.zeros((4, 4, 3), dtype=np.uint8), Path(tmp) / "x.png")

    def test_default_output_path(self):
        from huecanvas.render import default_output_path

        with tempfile.TemporaryDirectory() as tmp:
            config = _temp_config(Path(tmp))
            self.assertEqual(default_output_path(2, config), Path(tmp) / "output" / "version2.png")

    def test_render_log(self):
        from huecanvas.render import RenderResult, get_log_path, log_render, read_render_log
        from huecanvas.painters import new_pixel_buffer

        with tempfile.TemporaryDirectory() as tmp:
            config = _temp_config(Path(tmp))
            result = RenderResult(version=1, buffer=new_pixel_buffer(256, 128), duration_ms=12.5)
            log_path = log_render(result, image_path=Path(tmp) / "a.png", config=config)
            self.assertEqual(log_path, get_log_path(config))
            with open(log_path, "a", encoding="utf-8") as f:
                f.write("not json\n\n")
            entries = read_render_log(log_path)
            self.assertEqual(len(entries), 1)
            self.assertEqual(entries[0]["version"], 1)
            self.assertEqual(entries[0]["duration_ms"], 12.5)

            config["output"]["log_renders"] = False
            self.assertIsNone(log_render(result, config=config))

    def test_other_version(self):
        from huecanvas.render import VERSION_DESCRIPTIONS, other_version

        self.assertEqual(other_version(1), 2)
        self.assertEqual(other_version(2), 1)
        self.assertEqual(set(VERSION_DESCRIPTIONS), {1, 2})


class TestConfig(unittest.TestCase):

    def test_missing_file_gives_defaults(self):
        from huecanvas.config import get_canvas_size, load_config

        with tempfile.TemporaryDirectory() as tmp:
            config = load_config(Path(tmp) / "nope.yaml")
        self.assertEqual(get_canvas_size(config), (256, 128))
        self.assertEqual(config["render"]["version"], 1)

    def test_yaml_merges_over_defaults(self):
        from huecanvas.config import load_config

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "c.yaml"
            path.write_text("render:\n  version: 2\noutput:\n  dir: /tmp/x\n", encoding="utf-8")
            config = load_config(path)
        self.assertEqual(config["render"]["version"], 2)
        self.assertEqual(config["output"]["dir"], "/tmp/x")
        self.assertEqual(config["output"]["filename_prefix"], "version")
        self.assertEqual(config["canvas"]["width"], 256)

    def test_non_mapping_yaml(self):
        from huecanvas.config import load_config

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "c.yaml"
            path.write_text("- 1\n- 2\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(path)

    def test_shipped_default_yaml(self):
        from huecanvas.config import load_config

        config = load_config()
        self.assertEqual(config["canvas"], {"width": 256, "height": 128})


class TestAnalysis(unittest.TestCase):

    def test_blank_buffer_fails_verification(self):
        from huecanvas.analysis import verify_pixel_buffer
        from huecanvas.painters import new_pixel_buffer
        from huecanvas.palette import generate_palette

        report = verify_pixel_buffer(new_pixel_buffer(256, 128), generate_palette())
        self.assertFalse(report["ok"])
        self.assertEqual(report["opaque"], 0)
        self.assertEqual(report["unique_colors"], 1)

    def test_saturation_and_hue_in_circle(self):
        from huecanvas.analysis import saturation_and_hue
        from huecanvas.painters import paint
        from huecanvas.painters.circles import circle_membership

        buffer = paint(2)
        membership = circle_membership()
        whole = saturation_and_hue(buffer)
        self.assertGreater(whole["saturation"], 0.0)
        self.assertLess(whole["hue"], 360.0)
        # Circle 1 holds the second hue family (roughly 45-90 degrees)
        ring = saturation_and_hue(buffer, membership == 1)
        self.assertGreater(ring["hue"], 30.0)
        self.assertLess(ring["hue"], 100.0)


class TestGenerateScript(unittest.TestCase):
    """scripts/generate.py end to end with a temp output dir."""

    @classmethod
    def setUpClass(cls):
        spec = importlib.util.spec_from_file_location("generate_script", ROOT / "scripts" / "generate.py")
        cls.module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(cls.module)

    def test_all_versions_with_verify(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = Path(tmp) / "c.yaml"
            cfg.write_text(f"output:\n  dir: {Path(tmp) / 'out'}\n", encoding="utf-8")
            code = self.module.main(["--all", "--verify", "--config", str(cfg)])
            self.assertEqual(code, 0)
            self.assertTrue((Path(tmp) / "out" / "version1.png").exists())
            self.assertTrue((Path(tmp) / "out" / "version2.png").exists())
            self.assertTrue((Path(tmp) / "render_log.jsonl").exists())

    def test_explicit_output(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = Path(tmp) / "c.yaml"
            cfg.write_text(f"output:\n  dir: {Path(tmp) / 'out'}\n  log_renders: false\n", encoding="utf-8")
            out = Path(tmp) / "mine.png"
            code = self.module.main(["--version", "2", "--output", str(out), "--config", str(cfg)])
            self.assertEqual(code, 0)
            self.assertTrue(out.exists())
            self.assertFalse((Path(tmp) / "render_log.jsonl").exists())

    def test_bad_version_exits(self):
        with self.assertRaises(SystemExit):
            self.module.main(["--version", "3"])


if __name__ == "__main__":
    unittest.main()
