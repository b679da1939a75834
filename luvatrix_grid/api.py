from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from luvatrix_grid.config import AxisOverride, LinesOverride, ViewportSpec
from luvatrix_grid.grid import DEFAULT_CONTAINER_SIZE, Grid
from luvatrix_grid.renderer import GridRenderer
from luvatrix_grid.theme import GridTheme


DEFAULT_ASPECT_RATIO = DEFAULT_CONTAINER_SIZE[0] / DEFAULT_CONTAINER_SIZE[1]


def grid(
    lines: Sequence[LinesOverride] | None = None,
    axes: Sequence[AxisOverride] | None = None,
    *,
    width: float | None = None,
    height: float | None = None,
    viewport: ViewportSpec = None,
    renderer: GridRenderer | None = None,
    theme: GridTheme | Mapping[str, Any] | None = None,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
) -> Grid:
    if aspect_ratio <= 0:
        raise ValueError("aspect_ratio must be > 0")
    if width is None and height is None:
        width, height = DEFAULT_CONTAINER_SIZE
    elif width is None and height is not None:
        if height <= 0:
            raise ValueError("height must be > 0")
        width = float(round(height * aspect_ratio))
    elif width is not None and height is None:
        if width <= 0:
            raise ValueError("width must be > 0")
        height = float(round(width / aspect_ratio))
    assert width is not None and height is not None
    return Grid(
        renderer,
        container_size=(width, height),
        viewport=viewport,
        lines=lines,
        axes=axes,
        theme=theme,
    )
