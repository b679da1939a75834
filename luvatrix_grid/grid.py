from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
import itertools
import logging
from typing import Any

import numpy as np

from luvatrix_grid.config import (
    AxisConfig,
    AxisOverride,
    LinesGroup,
    LinesOverride,
    Viewport,
    ViewportSpec,
    merge_axis,
    merge_lines_group,
    resolve_viewport,
)
from luvatrix_grid.errors import GridConfigurationError
from luvatrix_grid.reconcile import GridReconciler
from luvatrix_grid.renderer import ElementTreeRenderer, GridRenderer
from luvatrix_grid.theme import GridTheme, validate_grid_theme
from luvatrix_grid.ticks import GridStats


LOGGER = logging.getLogger(__name__)
DEFAULT_CONTAINER_SIZE = (640.0, 360.0)

_INSTANCE_IDS = itertools.count(1)

UpdateListener = Callable[[], None]


def _coerce_container_size(size: Sequence[float]) -> tuple[float, float]:
    if len(size) != 2:
        raise GridConfigurationError("container_size must be (width, height)")
    w, h = float(size[0]), float(size[1])
    if w < 0 or h < 0:
        raise GridConfigurationError("container width/height must be >= 0")
    return (w, h)


class Grid:
    """Ruled-lines overlay for one viewport.

    Each call to `update()` runs one full pass: hide every pooled element, then
    for each index merge the lines/axis overrides into the stored configuration,
    reconcile lines and labels, and finally notify update listeners.
    """

    def __init__(
        self,
        renderer: GridRenderer | None = None,
        *,
        container_size: Sequence[float] = DEFAULT_CONTAINER_SIZE,
        viewport: ViewportSpec = None,
        lines: Sequence[LinesOverride] | None = None,
        axes: Sequence[AxisOverride] | None = None,
        theme: GridTheme | Mapping[str, Any] | None = None,
    ) -> None:
        self.instance_id = next(_INSTANCE_IDS)
        self.renderer: GridRenderer = renderer if renderer is not None else ElementTreeRenderer()
        self.theme = theme if isinstance(theme, GridTheme) else validate_grid_theme(theme)
        self._container_size = _coerce_container_size(container_size)
        self._viewport_spec: ViewportSpec = viewport
        self._viewport: Viewport = resolve_viewport(viewport, *self._container_size)
        self._lines: list[LinesGroup | None] = []
        self._axes: list[AxisConfig | None] = []
        self._stats: dict[int, GridStats] = {}
        self._listeners: list[UpdateListener] = []
        self._reconciler = GridReconciler(self.renderer, self.instance_id)
        self.update(lines=lines, axes=axes)

    @property
    def lines(self) -> tuple[LinesGroup | None, ...]:
        return tuple(self._lines)

    @property
    def axes(self) -> tuple[AxisConfig | None, ...]:
        return tuple(self._axes)

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def container_size(self) -> tuple[float, float]:
        return self._container_size

    @property
    def element_count(self) -> int:
        return len(self._reconciler)

    def stats_for(self, index: int) -> GridStats | None:
        """Finalized values/titles/offsets of the last pass for one lines group."""
        return self._stats.get(index)

    def add_update_listener(self, callback: UpdateListener) -> None:
        self._listeners.append(callback)

    def remove_update_listener(self, callback: UpdateListener) -> None:
        self._listeners.remove(callback)

    def resize(self, width: float, height: float) -> "Grid":
        self._container_size = _coerce_container_size((width, height))
        return self.update()

    def update(
        self,
        *,
        viewport: ViewportSpec = None,
        lines: Sequence[LinesOverride] | None = None,
        axes: Sequence[AxisOverride] | None = None,
    ) -> "Grid":
        if viewport is not None:
            self._viewport_spec = viewport
        self._viewport = resolve_viewport(self._viewport_spec, *self._container_size)

        line_overrides = list(lines) if lines is not None else None
        axis_overrides = list(axes) if axes is not None else None
        lines_len = len(line_overrides) if line_overrides is not None else len(self._lines)
        axes_len = len(axis_overrides) if axis_overrides is not None else len(self._axes)
        _pad(self._lines, lines_len)
        _pad(self._axes, axes_len)

        created_before = self._reconciler.created_count
        self._reconciler.hide_all()
        self._stats = {}

        for index in range(max(lines_len, axes_len)):
            if line_overrides is not None and index < lines_len:
                self._lines[index] = merge_lines_group(self._lines[index], line_overrides[index])
            if axis_overrides is not None and index < axes_len:
                self._axes[index] = merge_axis(self._axes[index], axis_overrides[index])

            group = self._lines[index] if index < lines_len else None
            if group is None:
                continue
            axis = self._axes[index] if index < axes_len else None

            stats = GridStats(index=index, instance_id=self.instance_id)
            self._reconciler.reconcile_lines(index, group, self._viewport, stats)
            self._reconciler.reconcile_axis(index, group, axis, self._viewport, stats)
            self._stats[index] = stats

        del self._lines[lines_len:]
        del self._axes[axes_len:]

        LOGGER.debug(
            "grid %d updated: %d line group(s), %d element(s) created, %d pooled",
            self.instance_id,
            sum(1 for g in self._lines if g is not None),
            self._reconciler.created_count - created_before,
            len(self._reconciler),
        )
        self._emit_update()
        return self

    def _emit_update(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                LOGGER.exception("grid %d update listener failed", self.instance_id)
                raise

    def _element_tree(self) -> ElementTreeRenderer:
        if not isinstance(self.renderer, ElementTreeRenderer):
            raise TypeError("export requires the grid to use an ElementTreeRenderer")
        return self.renderer

    def render_svg(self) -> str:
        from luvatrix_grid.svg import render_svg_markup

        return render_svg_markup(self._element_tree(), self.viewport, self.theme)

    def render_rgba(self) -> np.ndarray:
        from luvatrix_grid.raster import rasterize_elements

        return rasterize_elements(self._element_tree(), self.viewport, self.theme)


def _pad(items: list[Any], length: int) -> None:
    if len(items) < length:
        items.extend([None] * (length - len(items)))
