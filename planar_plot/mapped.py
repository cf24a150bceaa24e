from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Sequence

from planar_plot.errors import PlotDataError
from planar_plot.plane import PlaneManager
from planar_plot.scales import require_real, require_size, scalar_map
from planar_plot.surface import Color, DrawingSurface, TextStyle


TEXT_MARGIN_PX = 10
TEXT_BOTTOM_MARGIN_PX = 5


def _require_point(point: Any, label: str) -> tuple[float, float]:
    if isinstance(point, (str, bytes)) or not isinstance(point, Sequence) or len(point) != 2:
        raise PlotDataError(f"`{label}` must be an [x, y] pair")
    return (require_real(point[0], f"{label}[0]"), require_real(point[1], f"{label}[1]"))


def _require_color(color: Any) -> None:
    if color is not None and not isinstance(color, (str, tuple)):
        raise PlotDataError(f"color must be a string or an RGB(A) tuple, got {type(color)!r}")


class MappedSurface:
    """Draws on a surface in plane coordinates.

    Every coordinate goes through the plane manager's plane-to-pixel mapping;
    radii and line widths stay in pixels.
    """

    def __init__(self, surface: DrawingSurface, planes: PlaneManager) -> None:
        if (surface.width, surface.height) != (planes.width, planes.height):
            raise PlotDataError("surface and plane manager sizes differ")
        self._surface = surface
        self._planes = planes

    @property
    def surface(self) -> DrawingSurface:
        return self._surface

    @property
    def planes(self) -> PlaneManager:
        return self._planes

    @property
    def width(self) -> int:
        return self._surface.width

    @property
    def height(self) -> int:
        return self._surface.height

    def set_size(self, width: int, height: int) -> None:
        require_size(width, height)
        self._surface.resize(width, height)
        self._planes.resize(width, height)

    def set_size_from_parent(
        self,
        parent_size: tuple[int, int],
        callback: Callable[[int, int], tuple[int, int]] | None = None,
    ) -> None:
        """Size the canvas from its parent's size, optionally transformed by ``callback``."""
        parent_w, parent_h = parent_size
        width, height = callback(parent_w, parent_h) if callback is not None else (parent_w, parent_h)
        self.set_size(width, height)

    def to_pixel(self, x: Any, y: Any) -> tuple[float, float]:
        return self._planes.to_pixel(x, y)

    def clear(self) -> None:
        self._surface.clear()

    def clear_overlay(self) -> None:
        self._surface.clear_overlay()

    def draw_line(self, start: Any, end: Any, color: Color | None = None, line_width: float | None = None) -> None:
        p0 = _require_point(start, "start")
        p1 = _require_point(end, "end")
        _require_color(color)
        width = 1.0 if line_width is None else require_real(line_width, "line_width")
        if width <= 0:
            raise PlotDataError("`line_width` must be > 0")
        self._surface.draw_line(self.to_pixel(*p0), self.to_pixel(*p1), color, width)

    def fill_rect(self, x: Any, y: Any, w: Any, h: Any, color: Color | None = None) -> None:
        """Fill the plane-space rectangle from (x, y) to (x + w, y + h)."""
        x = require_real(x, "x")
        y = require_real(y, "y")
        w = require_real(w, "w")
        h = require_real(h, "h")
        _require_color(color)
        px0, py0 = self.to_pixel(x, y)
        px1, py1 = self.to_pixel(x + w, y + h)
        self._surface.fill_rect(px0, py1, px1 - px0, py0 - py1, color)

    def draw_arc(
        self,
        x: Any,
        y: Any,
        radius: Any,
        start_angle: Any,
        end_angle: Any,
        color: Color,
        counter_clockwise: bool = False,
        filled: bool = False,
    ) -> None:
        """Draw an arc centred on plane point (x, y); ``radius`` is in pixels."""
        x = require_real(x, "x")
        y = require_real(y, "y")
        radius = require_real(radius, "radius")
        start_angle = require_real(start_angle, "start_angle")
        end_angle = require_real(end_angle, "end_angle")
        if not isinstance(counter_clockwise, bool):
            raise PlotDataError("`counter_clockwise` must be a bool")
        if not isinstance(filled, bool):
            raise PlotDataError("`filled` must be a bool")
        _require_color(color)
        px, py = self.to_pixel(x, y)
        self._surface.draw_arc(px, py, radius, start_angle, end_angle, color, counter_clockwise, filled)

    def fill_text(self, text: str, x: Any, y: Any, style: TextStyle | None = None) -> None:
        """Draw ``text`` anchored at plane point (x, y).

        With ``stay_inbound`` text that would leave the surface is pulled back
        inside its margins and recolored; with
        ``render_outside_if_out_of_bound`` it is sent to the overlay instead.
        """
        if not isinstance(text, str):
            raise PlotDataError("`text` must be a string")
        x = require_real(x, "x")
        y = require_real(y, "y")
        style = style or TextStyle()
        px, py = self.to_pixel(x, y)

        if style.stay_inbound:
            w, h = self.width, self.height
            margin = TEXT_MARGIN_PX
            bottom_margin = TEXT_BOTTOM_MARGIN_PX
            align, baseline = style.align, style.baseline

            if px < margin or px > w or py < margin or py > h:
                style = replace(style, color=style.inbound_color)
                if style.render_outside_if_out_of_bound:
                    if px < margin:
                        px, align = -margin, "right"
                    if px > w:
                        px, align = w + margin, "left"
                    if py < 0:
                        py, baseline = -margin, "bottom"
                    if py > h:
                        py, baseline = h + bottom_margin, "top"
                    self._surface.draw_overlay_text(text, px, py, replace(style, align=align, baseline=baseline))
                    return

            if px < margin:
                px, align = margin, "left"
            if px > w:
                px, align = w - margin, "right"
            if py < margin:
                py, baseline = margin, "top"
            if py > h - bottom_margin:
                py, baseline = h - bottom_margin, "bottom"
            style = replace(style, align=align, baseline=baseline)

        self._surface.draw_text(text, px, py, style)

    def pixels_to_plane_length(self, px: float, *, axis: str) -> float:
        """Convert a pixel distance into a plane distance along ``axis`` ("x" or "y")."""
        plane = self._planes.plane
        if axis == "x":
            return scalar_map(px, (0, self.width), (0, plane.x_interval))
        if axis == "y":
            return scalar_map(px, (0, self.height), (0, plane.y_interval))
        raise PlotDataError(f"axis must be 'x' or 'y', got {axis!r}")
