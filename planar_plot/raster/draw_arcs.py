from __future__ import annotations

import math

import numpy as np

from planar_plot.raster.canvas import RGBA, blend


TAU = 2.0 * math.pi


def draw_arc(
    dst: np.ndarray,
    cx: float,
    cy: float,
    radius: float,
    start_angle: float,
    end_angle: float,
    color: RGBA,
    *,
    counter_clockwise: bool = False,
    filled: bool = False,
    line_width: float = 1.0,
) -> None:
    """Draw an arc with canvas angle conventions: radians, clockwise on screen from +x.

    Filled arcs cover the pie slice between the two angles.
    """
    if radius <= 0:
        return
    reach = radius + max(0.5, line_width / 2.0)
    x0 = max(0, math.floor(cx - reach))
    x1 = min(dst.shape[1] - 1, math.ceil(cx + reach))
    y0 = max(0, math.floor(cy - reach))
    y1 = min(dst.shape[0] - 1, math.ceil(cy + reach))
    if x1 < x0 or y1 < y0:
        return

    ys, xs = np.mgrid[y0 : y1 + 1, x0 : x1 + 1]
    # Sample at pixel centres.
    dx = xs.astype(np.float64) + 0.5 - cx
    dy = ys.astype(np.float64) + 0.5 - cy
    dist = np.hypot(dx, dy)
    if filled:
        mask = dist <= radius
    else:
        mask = np.abs(dist - radius) <= max(0.5, line_width / 2.0)
    mask &= _angle_mask(np.arctan2(dy, dx), start_angle, end_angle, counter_clockwise)
    if not np.any(mask):
        return

    region = dst[y0 : y1 + 1, x0 : x1 + 1]
    pixels = region[mask]
    blend(pixels, color)
    region[mask] = pixels


def _angle_mask(theta: np.ndarray, start: float, end: float, counter_clockwise: bool) -> np.ndarray:
    if abs(end - start) >= TAU:
        return np.ones(theta.shape, dtype=bool)
    if counter_clockwise:
        sweep = (start - end) % TAU
        return ((start - theta) % TAU) <= sweep
    sweep = (end - start) % TAU
    return ((theta - start) % TAU) <= sweep
