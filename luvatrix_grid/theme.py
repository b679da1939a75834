from __future__ import annotations

from dataclasses import asdict, dataclass
import re
from typing import Any, Mapping

from luvatrix_grid.errors import GridConfigurationError

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")
_COLOR_TOKENS = (
    "background",
    "line_color",
    "boundary_line_color",
    "axis_color",
    "label_color",
)


@dataclass(frozen=True)
class GridTheme:
    """Default look of grid lines, axes and labels when exported."""

    background: str = "#00000000"
    line_color: str = "#2C3542"
    boundary_line_color: str = "#7C8A9C"
    axis_color: str = "#7C8A9C"
    label_color: str = "#D0DAE8"
    line_width_px: float = 1.0
    font_family: str = "Comic Mono"
    font_size_px: float = 10.0


DEFAULT_THEME = GridTheme()


def validate_grid_theme(overrides: Mapping[str, Any] | None = None) -> GridTheme:
    """Validate and merge user token overrides against the defaults."""

    raw: dict[str, Any] = asdict(DEFAULT_THEME)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise GridConfigurationError(f"Unknown theme token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise GridConfigurationError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise GridConfigurationError("Token `font_family` must be a non-empty string")

    for key in ("font_size_px", "line_width_px"):
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) <= 0:
            raise GridConfigurationError(f"Token `{key}` must be a positive number")

    return GridTheme(
        background=str(raw["background"]),
        line_color=str(raw["line_color"]),
        boundary_line_color=str(raw["boundary_line_color"]),
        axis_color=str(raw["axis_color"]),
        label_color=str(raw["label_color"]),
        line_width_px=float(raw["line_width_px"]),
        font_family=str(raw["font_family"]),
        font_size_px=float(raw["font_size_px"]),
    )


def hex_to_rgba(value: str) -> tuple[int, int, int, int]:
    hex_value = value.lstrip("#")
    r = int(hex_value[0:2], 16)
    g = int(hex_value[2:4], 16)
    b = int(hex_value[4:6], 16)
    a = int(hex_value[6:8], 16) if len(hex_value) == 8 else 255
    return (r, g, b, a)
