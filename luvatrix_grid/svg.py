from __future__ import annotations

import xml.etree.ElementTree as ET

from luvatrix_grid.config import Viewport
from luvatrix_grid.renderer import ElementTreeRenderer
from luvatrix_grid.shapes import RGBA, CircleShape, LineShape, TextShape, element_shapes
from luvatrix_grid.theme import DEFAULT_THEME, GridTheme


SVG_NS = "http://www.w3.org/2000/svg"


def render_svg_markup(tree: ElementTreeRenderer, viewport: Viewport, theme: GridTheme = DEFAULT_THEME) -> str:
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": _fmt(viewport.width),
            "height": _fmt(viewport.height),
            "viewBox": f"0 0 {_fmt(viewport.width)} {_fmt(viewport.height)}",
        },
    )
    for shape in element_shapes(tree, viewport, theme):
        if isinstance(shape, LineShape):
            node = ET.SubElement(
                root,
                "line",
                {
                    "id": shape.element_id,
                    "x1": _fmt(shape.x1),
                    "y1": _fmt(shape.y1),
                    "x2": _fmt(shape.x2),
                    "y2": _fmt(shape.y2),
                    "stroke-width": _fmt(shape.stroke_width),
                },
            )
            _set_paint(node, "stroke", shape.stroke)
        elif isinstance(shape, CircleShape):
            node = ET.SubElement(
                root,
                "circle",
                {
                    "id": shape.element_id,
                    "cx": _fmt(shape.cx),
                    "cy": _fmt(shape.cy),
                    "r": _fmt(shape.r),
                    "fill": "none",
                    "stroke-width": _fmt(shape.stroke_width),
                },
            )
            _set_paint(node, "stroke", shape.stroke)
        elif isinstance(shape, TextShape):
            node = ET.SubElement(
                root,
                "text",
                {
                    "id": shape.element_id,
                    "x": _fmt(shape.x),
                    "y": _fmt(shape.y),
                    "font-family": shape.font_family,
                    "font-size": _fmt(shape.font_size_px),
                },
            )
            _set_paint(node, "fill", shape.fill)
            node.text = shape.text
            if shape.title:
                ET.SubElement(node, "title").text = shape.title
    return ET.tostring(root, encoding="unicode")


def _set_paint(node: ET.Element, attr: str, color: RGBA) -> None:
    r, g, b, a = color
    node.set(attr, f"#{r:02x}{g:02x}{b:02x}")
    if a < 255:
        node.set(f"{attr}-opacity", _fmt(a / 255.0))


def _fmt(value: float) -> str:
    out = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if out in ("", "-0") else out
