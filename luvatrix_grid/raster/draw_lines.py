from __future__ import annotations

import math

import numpy as np

from luvatrix_grid.raster.canvas import RGBA, draw_pixel


CIRCLE_SEGMENTS_MIN = 16


def draw_segment(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: int = 1) -> None:
    _draw_line_segment(dst, int(round(x0)), int(round(y0)), int(round(x1)), int(round(y1)), color=color, width=width)


def draw_ring(dst: np.ndarray, cx: float, cy: float, r: float, color: RGBA, width: int = 1) -> None:
    if r <= 0:
        draw_pixel(dst, int(round(cx)), int(round(cy)), color)
        return
    segments = max(CIRCLE_SEGMENTS_MIN, int(math.ceil(2.0 * math.pi * r / 2.0)))
    angles = np.linspace(0.0, 2.0 * math.pi, segments + 1)
    xs = np.rint(cx + r * np.cos(angles)).astype(np.int32)
    ys = np.rint(cy + r * np.sin(angles)).astype(np.int32)
    for i in range(segments):
        _draw_line_segment(dst, int(xs[i]), int(ys[i]), int(xs[i + 1]), int(ys[i + 1]), color=color, width=width)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
