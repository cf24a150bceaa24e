from __future__ import annotations

import math
import re

import numpy as np
from PIL import ImageColor

from planar_plot.errors import PlotDataError


RGBA = tuple[int, int, int, int]
TRANSPARENT: RGBA = (0, 0, 0, 0)

_CSS_RGBA = re.compile(
    r"rgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d*\.?\d+)\s*\)",
    re.IGNORECASE,
)


def coerce_color(color: str | tuple[int, ...] | None, default: RGBA = (0, 0, 0, 255)) -> RGBA:
    if color is None:
        return default
    if isinstance(color, str):
        parsed = _parse_css_rgba(color)
        if parsed is None:
            try:
                parsed = ImageColor.getrgb(color)
            except ValueError as exc:
                raise PlotDataError(f"unknown color: {color!r}") from exc
    elif isinstance(color, tuple):
        parsed = color
    else:
        raise PlotDataError(f"color must be a string or an RGB(A) tuple, got {type(color)!r}")
    if len(parsed) not in (3, 4) or any(isinstance(c, bool) or not isinstance(c, int) or not 0 <= c <= 255 for c in parsed):
        raise PlotDataError(f"color tuple must hold 3 or 4 ints in [0, 255], got {color!r}")
    if len(parsed) == 3:
        r, g, b = parsed
        return (r, g, b, 255)
    r, g, b, a = parsed
    return (r, g, b, a)


def _parse_css_rgba(color: str) -> tuple[int, int, int, int] | None:
    # CSS alpha is a fraction in [0, 1]; larger values keep Pillow's 0-255 reading.
    match = _CSS_RGBA.fullmatch(color.strip())
    if match is None:
        return None
    alpha = float(match.group(4))
    if alpha > 1.0:
        return None
    r, g, b = (int(match.group(i)) for i in (1, 2, 3))
    return (r, g, b, int(round(alpha * 255)))


def scale_alpha(color: RGBA, factor: float) -> RGBA:
    r, g, b, a = color
    return (r, g, b, int(max(0.0, min(1.0, factor)) * a))


def new_canvas(width: int, height: int, color: RGBA = TRANSPARENT) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = color
    return canvas


def clear_canvas(dst: np.ndarray, color: RGBA = TRANSPARENT) -> None:
    dst[:, :] = color


def blit(dst: np.ndarray, src: np.ndarray, x0: int = 0, y0: int = 0) -> None:
    h, w, _ = src.shape
    y1 = min(dst.shape[0], y0 + h)
    x1 = min(dst.shape[1], x0 + w)
    if y0 >= y1 or x0 >= x1:
        return

    view = dst[y0:y1, x0:x1]
    patch = src[: y1 - y0, : x1 - x0]
    alpha = patch[:, :, 3:4].astype(np.float32) / 255.0
    inv = 1.0 - alpha
    view[:, :, :3] = (patch[:, :, :3] * alpha + view[:, :, :3] * inv).astype(np.uint8)
    dst_alpha = view[:, :, 3:4].astype(np.float32) / 255.0
    view[:, :, 3:4] = np.clip((alpha + dst_alpha * inv) * 255.0, 0, 255).astype(np.uint8)


def blend(segment: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    if a <= 0:
        return
    inv = 1.0 - a
    rgb = np.asarray(color[0:3], dtype=np.float32)
    segment[..., :3] = (rgb * a + segment[..., :3].astype(np.float32) * inv).astype(np.uint8)
    dst_a = segment[..., 3].astype(np.float32) / 255.0
    segment[..., 3] = np.clip((a + dst_a * inv) * 255.0, 0, 255).astype(np.uint8)


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    blend(dst[y : y + 1, x], color)


def fill_rect(dst: np.ndarray, x: float, y: float, w: float, h: float, color: RGBA) -> None:
    if w == 0 or h == 0:
        return
    left = math.floor(min(x, x + w))
    right = math.floor(max(x, x + w)) - 1
    top = math.floor(min(y, y + h))
    bottom = math.floor(max(y, y + h)) - 1
    left = max(0, left)
    top = max(0, top)
    right = min(dst.shape[1] - 1, right)
    bottom = min(dst.shape[0] - 1, bottom)
    if right < left or bottom < top:
        return
    blend(dst[top : bottom + 1, left : right + 1], color)
