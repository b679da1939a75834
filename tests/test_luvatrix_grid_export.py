from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest
import xml.etree.ElementTree as ET

import numpy as np

from luvatrix_grid import Grid, GridConfigurationError, grid
from luvatrix_grid.loader import grid_from_config, load_grid_config
from luvatrix_grid.raster import draw_label, label_mask, new_canvas
from luvatrix_grid.shapes import parse_color
from luvatrix_grid.theme import DEFAULT_THEME, validate_grid_theme


SVG = "{http://www.w3.org/2000/svg}"


class _DictRenderer:
    def __init__(self) -> None:
        self.nodes: dict[str, dict] = {}

    def find_element(self, key):
        return self.nodes.get(key)

    def create_element(self, role, key, attributes):
        node = {"role": role, "attributes": dict(attributes)}
        self.nodes[key] = node
        return node

    def set_layout(self, handle, layout) -> None:
        handle["layout"] = layout

    def set_visible(self, handle, visible) -> None:
        handle["visible"] = visible

    def set_text(self, handle, text) -> None:
        handle["text"] = text


class SvgExportTests(unittest.TestCase):
    def _svg(self, g: Grid) -> ET.Element:
        return ET.fromstring(g.render_svg())

    def test_lines_axis_and_labels_are_emitted(self) -> None:
        g = Grid(container_size=(200, 100), lines=[{"min": 0, "max": 100}], axes=[{"name": "x"}])
        root = self._svg(g)
        self.assertEqual(root.tag, f"{SVG}svg")
        self.assertEqual(root.get("viewBox"), "0 0 200 100")
        self.assertEqual(len(root.findall(f"{SVG}line")), 6)
        texts = root.findall(f"{SVG}text")
        self.assertEqual([t.text for t in texts], ["0", "25", "50", "75", "100"])
        self.assertEqual(texts[0].find(f"{SVG}title").text, "0")  # type: ignore[union-attr]

    def test_line_geometry_and_boundary_colors(self) -> None:
        g = Grid(container_size=(200, 100), lines=[{"min": 0, "max": 100}])
        lines = {node.get("id"): node for node in self._svg(g).findall(f"{SVG}line")}
        middle = lines[f"grid-line-x-50-0-{g.instance_id}"]
        self.assertEqual((middle.get("x1"), middle.get("y1"), middle.get("x2"), middle.get("y2")), ("100", "0", "100", "100"))
        self.assertEqual(middle.get("stroke"), DEFAULT_THEME.line_color.lower())
        low = lines[f"grid-line-x-0-0-{g.instance_id}"]
        self.assertEqual(low.get("stroke"), DEFAULT_THEME.boundary_line_color.lower())

    def test_hidden_elements_are_not_exported(self) -> None:
        g = Grid(container_size=(200, 100), lines=[{"min": 0, "max": 100}])
        g.update(lines=[{"max": 50}])
        ids = {node.get("id") for node in self._svg(g).findall(f"{SVG}line")}
        self.assertNotIn(f"grid-line-x-100-0-{g.instance_id}", ids)
        self.assertIn(f"grid-line-x-50-0-{g.instance_id}", ids)

    def test_radial_lines_export_as_circles(self) -> None:
        g = Grid(container_size=(100, 100), lines=[{"orientation": "radial", "min": 0, "max": 2}])
        circles = self._svg(g).findall(f"{SVG}circle")
        self.assertTrue(circles)
        outer = max(circles, key=lambda c: float(c.get("r", "0")))
        self.assertEqual((outer.get("cx"), outer.get("cy"), outer.get("r")), ("50", "50", "50"))
        self.assertEqual(outer.get("fill"), "none")

    def test_style_color_overrides_theme(self) -> None:
        g = Grid(container_size=(200, 100), lines=[{"min": 0, "max": 100, "style": {"color": "rgba(255, 0, 0, 0.5)"}}])
        node = self._svg(g).find(f"{SVG}line")
        assert node is not None
        self.assertEqual(node.get("stroke"), "#ff0000")
        self.assertEqual(node.get("stroke-opacity"), "0.502")

    def test_theme_override_applies(self) -> None:
        g = Grid(container_size=(200, 100), lines=[{"min": 0, "max": 100}], theme={"line_color": "#00ff00"})
        strokes = {node.get("stroke") for node in self._svg(g).findall(f"{SVG}line")}
        self.assertIn("#00ff00", strokes)

    def test_export_requires_element_tree(self) -> None:
        g = Grid(_DictRenderer(), container_size=(200, 100), lines=[{"min": 0, "max": 100}])
        with self.assertRaises(TypeError):
            g.render_svg()


class RasterExportTests(unittest.TestCase):
    def test_canvas_shape_and_line_pixels(self) -> None:
        g = Grid(container_size=(200, 100), lines=[{"min": 0, "max": 100}])
        canvas = g.render_rgba()
        self.assertEqual(canvas.shape, (100, 200, 4))
        self.assertEqual(canvas.dtype, np.uint8)
        self.assertGreater(int(canvas[50, 50, 3]), 0)
        self.assertGreater(int(canvas[50, 199, 3]), 0)
        self.assertEqual(int(canvas[50, 20, 3]), 0)

    def test_viewport_sizes_canvas(self) -> None:
        g = Grid(container_size=(400, 300), viewport=[10, 10, 120, 80], lines=[{"min": 0, "max": 1}])
        self.assertEqual(g.render_rgba().shape, (80, 120, 4))

    def test_label_is_pushed_inside_canvas(self) -> None:
        canvas = new_canvas(60, 20)
        h, w = label_mask("88").shape
        self.assertEqual(draw_label(canvas, 60.0, 20.0, "88", (255, 255, 255, 255)), (60 - w, 20 - h))
        self.assertGreater(int(canvas[:, :, 3].max()), 0)
        self.assertIsNone(draw_label(canvas, 0.0, 0.0, "", (255, 255, 255, 255)))

    def test_labels_paint_pixels(self) -> None:
        g = Grid(container_size=(200, 100), lines=[{"min": 0, "max": 100}], axes=[{"name": "x"}])
        bare = Grid(container_size=(200, 100), lines=[{"min": 0, "max": 100}])
        self.assertGreater(int(g.render_rgba()[:, :, 3].sum()), int(bare.render_rgba()[:, :, 3].sum()))


class ThemeTests(unittest.TestCase):
    def test_defaults(self) -> None:
        self.assertEqual(validate_grid_theme(), DEFAULT_THEME)

    def test_override_merges(self) -> None:
        theme = validate_grid_theme({"font_size_px": 12})
        self.assertEqual(theme.font_size_px, 12.0)
        self.assertEqual(theme.line_color, DEFAULT_THEME.line_color)

    def test_invalid_tokens(self) -> None:
        for overrides in (
            {"grid_color": "#ffffff"},
            {"line_color": "red"},
            {"font_family": "  "},
            {"font_size_px": 0},
            {"line_width_px": True},
        ):
            with self.assertRaises(GridConfigurationError, msg=str(overrides)):
                validate_grid_theme(overrides)

    def test_parse_color(self) -> None:
        self.assertEqual(parse_color("#fff"), (255, 255, 255, 255))
        self.assertEqual(parse_color("#11223344"), (0x11, 0x22, 0x33, 0x44))
        self.assertEqual(parse_color("rgb(1, 2, 3)"), (1, 2, 3, 255))
        self.assertIsNone(parse_color("tomato"))
        self.assertIsNone(parse_color(None))


class LoaderTests(unittest.TestCase):
    def _write(self, payload: object) -> Path:
        tmp = tempfile.NamedTemporaryFile("w", suffix=".json", delete=False)
        with tmp:
            if isinstance(payload, str):
                tmp.write(payload)
            else:
                json.dump(payload, tmp)
        path = Path(tmp.name)
        self.addCleanup(path.unlink)
        return path

    def test_load_document(self) -> None:
        path = self._write(
            {
                "container": {"width": 500, "height": 300},
                "viewport": ["10px", 0, "50%", 300],
                "lines": [{"orientation": "x", "min": 0, "max": 100}, None],
                "axes": [{"name": "time"}],
                "theme": {"line_color": "#112233"},
            }
        )
        doc = load_grid_config(path)
        self.assertEqual(doc.container_size, (500.0, 300.0))
        self.assertEqual(doc.viewport, ("10px", 0, "50%", 300))
        self.assertEqual(len(doc.lines), 2)
        self.assertIsNone(doc.lines[1])
        self.assertEqual(doc.axes[0].name, "time")  # type: ignore[union-attr]
        self.assertEqual(doc.theme.line_color, "#112233")

    def test_grid_from_config(self) -> None:
        path = self._write({"container": {"width": 500, "height": 300}, "lines": [{"min": 0, "max": 100}]})
        g = grid_from_config(path)
        stats = g.stats_for(0)
        assert stats is not None
        self.assertEqual(stats.values, [0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100])

    def test_invalid_documents(self) -> None:
        for payload in (
            "{not json",
            [1, 2],
            {"viewport": [0, 0, 10]},
            {"lines": {"min": 0}},
            {"lines": [{"colour": "red"}]},
            {"lines": [{"logarithmic": True, "min": 0, "max": 10}]},
            {"theme": {"line_color": "blue"}},
        ):
            with self.assertRaises(GridConfigurationError, msg=str(payload)):
                load_grid_config(self._write(payload))

    def test_missing_file(self) -> None:
        with self.assertRaises(GridConfigurationError):
            load_grid_config(Path(tempfile.gettempdir()) / "luvatrix-grid-missing.json")


class FactoryTests(unittest.TestCase):
    def test_default_container(self) -> None:
        self.assertEqual(grid().container_size, (640.0, 360.0))

    def test_missing_dimension_follows_aspect_ratio(self) -> None:
        self.assertEqual(grid(height=360).container_size, (640.0, 360.0))
        self.assertEqual(grid(width=300, aspect_ratio=1.5).container_size, (300.0, 200.0))

    def test_invalid_arguments(self) -> None:
        with self.assertRaises(ValueError):
            grid(aspect_ratio=0)
        with self.assertRaises(ValueError):
            grid(width=-1)


if __name__ == "__main__":
    unittest.main()
