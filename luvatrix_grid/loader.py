from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
from typing import Any

from luvatrix_grid.config import AxisConfig, LinesGroup, merge_axis, merge_lines_group
from luvatrix_grid.errors import GridConfigurationError
from luvatrix_grid.grid import DEFAULT_CONTAINER_SIZE, Grid
from luvatrix_grid.renderer import GridRenderer
from luvatrix_grid.theme import GridTheme, validate_grid_theme


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridConfigDocument:
    container_size: tuple[float, float] = DEFAULT_CONTAINER_SIZE
    viewport: tuple[Any, Any, Any, Any] | None = None
    lines: tuple[LinesGroup | None, ...] = ()
    axes: tuple[AxisConfig | None, ...] = ()
    theme: GridTheme = field(default_factory=validate_grid_theme)


def load_grid_config(path: Path) -> GridConfigDocument:
    """Read a grid definition; generator hooks cannot be expressed in JSON."""

    try:
        data = json.loads(Path(path).read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise GridConfigurationError(f"cannot read grid config `{path}`: {exc}") from exc
    if not isinstance(data, dict):
        raise GridConfigurationError("grid config root must be an object")

    container = data.get("container", {})
    container_size = (
        float(container.get("width", DEFAULT_CONTAINER_SIZE[0])),
        float(container.get("height", DEFAULT_CONTAINER_SIZE[1])),
    )
    viewport = data.get("viewport")
    if viewport is not None:
        if not isinstance(viewport, list) or len(viewport) != 4:
            raise GridConfigurationError("`viewport` must be a [x, y, width, height] list")
        viewport = tuple(viewport)

    lines = tuple(merge_lines_group(None, raw) for raw in _slots(data, "lines"))
    axes = tuple(merge_axis(None, raw) for raw in _slots(data, "axes"))
    theme = validate_grid_theme(data.get("theme"))
    LOGGER.info("loaded grid config %s: %d lines group(s), %d axis slot(s)", path, len(lines), len(axes))
    return GridConfigDocument(
        container_size=container_size,
        viewport=viewport,
        lines=lines,
        axes=axes,
        theme=theme,
    )


def grid_from_config(path: Path, renderer: GridRenderer | None = None) -> Grid:
    doc = load_grid_config(path)
    return Grid(
        renderer,
        container_size=doc.container_size,
        viewport=doc.viewport,
        lines=doc.lines,
        axes=doc.axes,
        theme=doc.theme,
    )


def _slots(data: dict[str, Any], key: str) -> list[Any]:
    raw = data.get(key, [])
    if not isinstance(raw, list):
        raise GridConfigurationError(f"`{key}` must be a list")
    return raw
