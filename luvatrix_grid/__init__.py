"""Ruled-lines and axis overlay engine for Luvatrix viewports."""

from luvatrix_grid.api import grid
from luvatrix_grid.config import (
    AxisConfig,
    Computed,
    Explicit,
    Generator,
    LinesGroup,
    Orientation,
    Viewport,
    merge_axis,
    merge_lines_group,
    resolve_viewport,
)
from luvatrix_grid.errors import GridConfigurationError, GridError
from luvatrix_grid.grid import Grid
from luvatrix_grid.layout import LayoutDirective
from luvatrix_grid.loader import GridConfigDocument, grid_from_config, load_grid_config
from luvatrix_grid.renderer import ElementTreeRenderer, GridElement, GridRenderer
from luvatrix_grid.theme import DEFAULT_THEME, GridTheme, validate_grid_theme
from luvatrix_grid.ticks import GridStats

__all__ = [
    "AxisConfig",
    "Computed",
    "DEFAULT_THEME",
    "ElementTreeRenderer",
    "Explicit",
    "Generator",
    "Grid",
    "GridConfigDocument",
    "GridConfigurationError",
    "GridElement",
    "GridError",
    "GridRenderer",
    "GridStats",
    "GridTheme",
    "LayoutDirective",
    "LinesGroup",
    "Orientation",
    "Viewport",
    "grid",
    "grid_from_config",
    "load_grid_config",
    "merge_axis",
    "merge_lines_group",
    "resolve_viewport",
    "validate_grid_theme",
]
