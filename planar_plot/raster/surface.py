from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from planar_plot.errors import PlotDataError
from planar_plot.raster.canvas import RGBA, TRANSPARENT, blit, clear_canvas, coerce_color, fill_rect, new_canvas
from planar_plot.raster.draw_arcs import draw_arc
from planar_plot.raster.draw_lines import draw_line
from planar_plot.raster.draw_text import anchor_offset, draw_text, text_size
from planar_plot.scales import require_size
from planar_plot.surface import Color, DrawingSurface, Point, TextStyle


BLACK: RGBA = (0, 0, 0, 255)


@dataclass(frozen=True)
class OverlayText:
    """Label placed outside the raster, in pixel coordinates relative to its top-left corner."""

    text: str
    x: float
    y: float
    style: TextStyle


class RasterSurface(DrawingSurface):
    def __init__(self, width: int, height: int, background: Color | None = None) -> None:
        require_size(width, height)
        self._background = coerce_color(background, default=TRANSPARENT)
        self._rgba = new_canvas(width, height, self._background)
        self._overlay: list[OverlayText] = []

    @property
    def width(self) -> int:
        return int(self._rgba.shape[1])

    @property
    def height(self) -> int:
        return int(self._rgba.shape[0])

    @property
    def rgba(self) -> np.ndarray:
        return self._rgba

    @property
    def overlay(self) -> tuple[OverlayText, ...]:
        return tuple(self._overlay)

    def resize(self, width: int, height: int) -> None:
        require_size(width, height)
        # Resizing drops the content, the same as resizing an HTML canvas.
        self._rgba = new_canvas(width, height, self._background)

    def clear(self) -> None:
        clear_canvas(self._rgba, self._background)

    def clear_overlay(self) -> None:
        self._overlay.clear()

    def draw_line(self, start: Point, end: Point, color: Color | None = None, width: float | None = None) -> None:
        line_width = 1.0 if width is None else float(width)
        if line_width <= 0:
            raise PlotDataError("line width must be > 0")
        rgba = coerce_color(color, default=BLACK)
        draw_line(self._rgba, start[0], start[1], end[0], end[1], rgba, width=line_width)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color | None = None) -> None:
        fill_rect(self._rgba, x, y, w, h, coerce_color(color, default=BLACK))

    def draw_arc(
        self,
        x: float,
        y: float,
        radius: float,
        start_angle: float,
        end_angle: float,
        color: Color,
        counter_clockwise: bool = False,
        filled: bool = False,
    ) -> None:
        draw_arc(
            self._rgba,
            x,
            y,
            radius,
            start_angle,
            end_angle,
            coerce_color(color, default=BLACK),
            counter_clockwise=counter_clockwise,
            filled=filled,
        )

    def draw_text(self, text: str, x: float, y: float, style: TextStyle) -> None:
        w, h = text_size(text, font_family=style.font_family, font_size_px=style.font_size_px)
        ox, oy = anchor_offset(w, h, style.align, style.baseline)
        draw_text(
            self._rgba,
            int(x) + ox,
            int(y) + oy,
            text,
            coerce_color(style.color, default=BLACK),
            font_family=style.font_family,
            font_size_px=style.font_size_px,
        )

    def draw_overlay_text(self, text: str, x: float, y: float, style: TextStyle) -> None:
        self._overlay.append(OverlayText(text=text, x=float(x), y=float(y), style=style))

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._rgba)


def compose_layers(*surfaces: RasterSurface, background: Color | None = None) -> np.ndarray:
    """Alpha-blend surfaces bottom to top; every surface must have the same size."""
    if not surfaces:
        raise PlotDataError("at least one surface is required")
    width, height = surfaces[0].width, surfaces[0].height
    out = new_canvas(width, height, coerce_color(background, default=TRANSPARENT))
    for surface in surfaces:
        if (surface.width, surface.height) != (width, height):
            raise PlotDataError(
                f"layer size mismatch: {surface.width}x{surface.height} != {width}x{height}"
            )
        blit(out, surface.rgba)
    return out


def save_png(path: str | Path, *surfaces: RasterSurface, background: Color | None = None) -> Path:
    target = Path(path)
    rgba = compose_layers(*surfaces, background=background)
    Image.fromarray(rgba).save(target, format="PNG")
    return target

