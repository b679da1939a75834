from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Optional, Union

from luvatrix_grid.config import Viewport
from luvatrix_grid.renderer import ElementTreeRenderer, GridElement
from luvatrix_grid.theme import GridTheme, hex_to_rgba


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class LineShape:
    element_id: str
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: RGBA
    stroke_width: float


@dataclass(frozen=True)
class CircleShape:
    element_id: str
    cx: float
    cy: float
    r: float
    stroke: RGBA
    stroke_width: float


@dataclass(frozen=True)
class TextShape:
    element_id: str
    x: float
    y: float
    text: str
    fill: RGBA
    font_family: str
    font_size_px: float
    title: str | None = None


Shape = Union[LineShape, CircleShape, TextShape]


def element_shapes(tree: ElementTreeRenderer, viewport: Viewport, theme: GridTheme) -> list[Shape]:
    """Visible elements as drawable shapes, in paint order, viewport-relative."""

    shapes: list[Shape] = []
    for element in tree.visible_elements():
        if element.layout is None:
            continue
        shape = _element_shape(element, viewport, theme)
        if shape is not None:
            shapes.append(shape)
    return shapes


def _element_shape(element: GridElement, viewport: Viewport, theme: GridTheme) -> Optional[Shape]:
    layout = element.layout
    assert layout is not None
    style = layout.style
    orientation = element.attributes.get("orientation")
    left = layout.left or 0.0
    top = layout.top or 0.0

    if element.role == "label":
        if not element.text:
            return None
        return TextShape(
            element_id=element.element_id,
            x=left,
            y=top,
            text=element.text,
            fill=parse_color(style.get("color")) or hex_to_rgba(theme.label_color),
            font_family=theme.font_family,
            font_size_px=_number(style.get("font_size"), theme.font_size_px),
            title=layout.title,
        )

    if element.role == "axis":
        default = theme.axis_color
    elif "min" in element.markers or "max" in element.markers:
        default = theme.boundary_line_color
    else:
        default = theme.line_color
    stroke = parse_color(style.get("color")) or hex_to_rgba(default)
    stroke_width = _number(style.get("line_width"), theme.line_width_px)

    if orientation == "radial" and element.role == "line":
        diameter = layout.width if layout.width is not None else 0.0
        return CircleShape(
            element_id=element.element_id,
            cx=left + diameter / 2.0,
            cy=top + diameter / 2.0,
            r=diameter / 2.0,
            stroke=stroke,
            stroke_width=stroke_width,
        )
    if layout.rotation_deg is not None or orientation in ("radial", "angular"):
        length = layout.width or 0.0
        angle = math.radians(layout.rotation_deg or 0.0)
        return LineShape(
            element_id=element.element_id,
            x1=left,
            y1=top,
            x2=left + length * math.cos(angle),
            y2=top + length * math.sin(angle),
            stroke=stroke,
            stroke_width=stroke_width,
        )
    # Lines of a horizontal group run vertically; its axis runs along the bottom edge.
    runs_down = (orientation == "horizontal") == (element.role == "line")
    if runs_down:
        length = layout.height if layout.height is not None else viewport.height
        return LineShape(element.element_id, left, top, left, top + length, stroke, stroke_width)
    length = layout.width if layout.width is not None else viewport.width
    return LineShape(element.element_id, left, top, left + length, top, stroke, stroke_width)


def _number(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def parse_color(value: Any) -> Optional[RGBA]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    if value.startswith("#"):
        hex_value = value[1:]
        try:
            if len(hex_value) in (3, 4):
                channels = [int(c * 2, 16) for c in hex_value]
            elif len(hex_value) in (6, 8):
                channels = [int(hex_value[i : i + 2], 16) for i in range(0, len(hex_value), 2)]
            else:
                return None
        except ValueError:
            return None
        if len(channels) == 3:
            channels.append(255)
        r, g, b, a = channels
        return (r, g, b, a)
    if value.startswith("rgb"):
        numbers = value[value.find("(") + 1 : value.find(")")].split(",")
        if len(numbers) >= 3:
            try:
                r, g, b = (int(n) for n in numbers[:3])
                a = int(round(float(numbers[3]) * 255)) if len(numbers) >= 4 else 255
            except ValueError:
                return None
            return (r, g, b, a)
    return None
