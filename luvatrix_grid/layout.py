from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
import math
from typing import Any

from luvatrix_grid.config import Orientation, Viewport, parse_length
from luvatrix_grid.errors import GridConfigurationError
from luvatrix_grid.scales import linear_ratio, log_ratio


GEOMETRY_KEYS = ("left", "top", "width", "height")


@dataclass(frozen=True)
class LayoutDirective:
    """Placement of one element, in pixels relative to the viewport origin.

    `offset` is the value's position along the axis as a percentage. Fields left
    as `None` are not constrained by the layout.
    """

    offset: float
    left: float | None = None
    top: float | None = None
    width: float | None = None
    height: float | None = None
    rotation_deg: float | None = None
    style: Mapping[str, Any] = field(default_factory=dict)
    title: str | None = None


def value_offset(value: float, low: float, high: float, *, inverted: bool, logarithmic: bool) -> float:
    ratio = log_ratio(value, low, high) if logarithmic else linear_ratio(value, low, high)
    if inverted:
        ratio = 1.0 - ratio
    return ratio * 100.0


def layout_for(
    orientation: Orientation,
    offset: float,
    viewport: Viewport,
    *,
    style: Mapping[str, Any] | None = None,
    title: str | None = None,
) -> LayoutDirective:
    w, h = viewport.width, viewport.height
    if orientation == "horizontal":
        directive = LayoutDirective(offset=offset, left=w * offset / 100.0, top=0.0, height=h)
    elif orientation == "vertical":
        directive = LayoutDirective(offset=offset, left=0.0, top=h * (100.0 - offset) / 100.0, width=w)
    elif orientation == "radial":
        diameter = viewport.min_side * offset / 100.0
        cx, cy = viewport.center
        directive = LayoutDirective(
            offset=offset,
            left=cx - diameter / 2.0,
            top=cy - diameter / 2.0,
            width=diameter,
            height=diameter,
        )
    elif orientation == "angular":
        cx, cy = viewport.center
        directive = LayoutDirective(
            offset=offset,
            left=cx,
            top=cy,
            width=viewport.min_side / 2.0,
            rotation_deg=offset * 360.0 / 100.0,
        )
    else:
        raise GridConfigurationError(f"unknown orientation: {orientation!r}")
    directive = replace(directive, title=title)
    if style:
        directive = apply_style_overrides(directive, style, viewport)
    return directive


def apply_style_overrides(directive: LayoutDirective, style: Mapping[str, Any], viewport: Viewport) -> LayoutDirective:
    """Overrides win over computed geometry; numeric values are pixel lengths."""

    geometry: dict[str, float] = {}
    passthrough: dict[str, Any] = dict(directive.style)
    for key, value in style.items():
        if key in GEOMETRY_KEYS:
            reference = viewport.width if key in ("left", "width") else viewport.height
            geometry[key] = parse_length(value, reference)
        else:
            passthrough[key] = value
    return replace(directive, style=passthrough, **geometry)


def label_layout_for(orientation: Orientation, offset: float, viewport: Viewport, *, title: str | None = None) -> LayoutDirective:
    """Anchor point for an axis label sharing the ratio of its line."""

    w, h = viewport.width, viewport.height
    if orientation == "horizontal":
        return LayoutDirective(offset=offset, left=w * offset / 100.0, top=h, title=title)
    if orientation == "vertical":
        return LayoutDirective(offset=offset, left=0.0, top=h * (100.0 - offset) / 100.0, title=title)
    cx, cy = viewport.center
    radius = viewport.min_side / 2.0
    if orientation == "radial":
        return LayoutDirective(offset=offset, left=cx + radius * offset / 100.0, top=cy, title=title)
    angle = math.radians(offset * 360.0 / 100.0)
    return LayoutDirective(
        offset=offset,
        left=cx + radius * math.cos(angle),
        top=cy + radius * math.sin(angle),
        rotation_deg=offset * 360.0 / 100.0,
        title=title,
    )


def axis_layout_for(orientation: Orientation, viewport: Viewport, *, title: str | None = None) -> LayoutDirective:
    w, h = viewport.width, viewport.height
    if orientation == "horizontal":
        return LayoutDirective(offset=0.0, left=0.0, top=h, width=w, title=title)
    if orientation == "vertical":
        return LayoutDirective(offset=0.0, left=0.0, top=0.0, height=h, title=title)
    cx, cy = viewport.center
    return LayoutDirective(offset=0.0, left=cx, top=cy, width=viewport.min_side / 2.0, title=title)
