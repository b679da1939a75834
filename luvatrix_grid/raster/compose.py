from __future__ import annotations

import numpy as np

from luvatrix_grid.config import Viewport
from luvatrix_grid.raster.canvas import new_canvas
from luvatrix_grid.raster.draw_lines import draw_ring, draw_segment
from luvatrix_grid.raster.draw_text import draw_label
from luvatrix_grid.renderer import ElementTreeRenderer
from luvatrix_grid.shapes import CircleShape, LineShape, TextShape, element_shapes
from luvatrix_grid.theme import DEFAULT_THEME, GridTheme, hex_to_rgba


def rasterize_elements(tree: ElementTreeRenderer, viewport: Viewport, theme: GridTheme = DEFAULT_THEME) -> np.ndarray:
    """Paint the visible overlay into an `H x W x 4` RGBA array sized to the viewport."""

    width = max(1, int(round(viewport.width)))
    height = max(1, int(round(viewport.height)))
    canvas = new_canvas(width, height, color=hex_to_rgba(theme.background))
    for shape in element_shapes(tree, viewport, theme):
        if isinstance(shape, LineShape):
            # Lines sitting on the far edge are pulled back onto the last pixel row/column.
            draw_segment(
                canvas,
                min(shape.x1, width - 1),
                min(shape.y1, height - 1),
                min(shape.x2, width - 1),
                min(shape.y2, height - 1),
                shape.stroke,
                width=max(1, int(round(shape.stroke_width))),
            )
        elif isinstance(shape, CircleShape):
            draw_ring(canvas, shape.cx, shape.cy, shape.r, shape.stroke, width=max(1, int(round(shape.stroke_width))))
        elif isinstance(shape, TextShape):
            draw_label(canvas, shape.x, shape.y, shape.text, shape.fill, font_family=shape.font_family, font_size_px=shape.font_size_px)
    return canvas
