from __future__ import annotations

import math

import numpy as np

from planar_plot.raster.canvas import RGBA, draw_pixel, scale_alpha


def draw_line(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: float = 1.0) -> None:
    # Sub-pixel widths are drawn one pixel wide with proportionally less alpha.
    if width < 1.0:
        color = scale_alpha(color, width)
    _draw_line_segment(
        dst,
        math.floor(x0),
        math.floor(y0),
        math.floor(x1),
        math.floor(y1),
        color=color,
        width=max(1, int(round(width))),
    )


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
    if radius == 0:
        draw_pixel(dst, x, y, color)
        return
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
