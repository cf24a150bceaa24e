from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from planar_plot.config import GridLineOptions, GridOptions, LineStyle, resolve_grid_options
from planar_plot.mapped import MappedSurface
from planar_plot.plane import PlaneManager
from planar_plot.scales import Plane, StepDescriptor, format_tick, grid_line_values
from planar_plot.surface import TextStyle


LABEL_MARGIN_PX = 10


class GridRenderer:
    """Draws axes, major/minor grid lines and tick labels for the current plane.

    The renderer redraws itself whenever its plane manager reports a change
    (plane, steps or canvas size) while render-on-change is enabled.
    """

    def __init__(self, mapped: MappedSurface, options: GridOptions | Mapping[str, Any] | None = None) -> None:
        self._mapped = mapped
        self._options = resolve_grid_options(options)
        mapped.planes.subscribe(self.draw)
        if mapped.planes.render_on_change:
            self.draw()

    @property
    def mapped(self) -> MappedSurface:
        return self._mapped

    @property
    def planes(self) -> PlaneManager:
        return self._mapped.planes

    @property
    def options(self) -> GridOptions:
        return self._options

    def draw(self) -> None:
        planes = self._mapped.planes
        plane = planes.plane
        x_step, y_step = planes.steps

        self._mapped.clear()
        self._mapped.clear_overlay()
        self._draw_tick_labels(plane, x_step, y_step)
        self._draw_x_lines(plane, x_step)
        self._draw_y_lines(plane, y_step)
        self._draw_axes(plane)

    def _draw_x_lines(self, plane: Plane, step: StepDescriptor) -> None:
        major = self._options.grid_lines
        minor = self._options.sub_grid_lines
        show_major = _shown(major, major.x_lines)
        show_minor = _shown(minor, minor.x_lines)
        first_sub = 1 if show_major else 0
        for x in grid_line_values(plane.xmin, plane.xmax, step.step):
            if show_major:
                self._vertical(plane, x, major.x_lines)
            if show_minor:
                for k in range(first_sub, step.subdivisions):
                    self._vertical(plane, x + k * step.sub_step, minor.x_lines)

    def _draw_y_lines(self, plane: Plane, step: StepDescriptor) -> None:
        major = self._options.grid_lines
        minor = self._options.sub_grid_lines
        show_major = _shown(major, major.y_lines)
        show_minor = _shown(minor, minor.y_lines)
        first_sub = 1 if show_major else 0
        for y in grid_line_values(plane.ymin, plane.ymax, step.step):
            if show_major:
                self._horizontal(plane, y, major.y_lines)
            if show_minor:
                for k in range(first_sub, step.subdivisions):
                    self._horizontal(plane, y + k * step.sub_step, minor.y_lines)

    def _draw_axes(self, plane: Plane) -> None:
        axis = self._options.axis
        if not axis.displayed:
            return
        if plane.xmin <= 0.0 <= plane.xmax and axis.y_axis.displayed:
            self._vertical(plane, 0.0, axis.y_axis)
        if plane.ymin <= 0.0 <= plane.ymax and axis.x_axis.displayed:
            self._horizontal(plane, 0.0, axis.x_axis)

    def _draw_tick_labels(self, plane: Plane, x_step: StepDescriptor, y_step: StepDescriptor) -> None:
        font = self._options.font
        base = TextStyle(
            font_family=font.family,
            font_size_px=font.size_px,
            color=font.color,
            stay_inbound=True,
            inbound_color=font.inbound_color,
        )
        x_label_offset = self._mapped.pixels_to_plane_length(LABEL_MARGIN_PX, axis="y")
        y_label_offset = self._mapped.pixels_to_plane_length(LABEL_MARGIN_PX, axis="x")

        x_style = replace(base, align="center", baseline="top")
        for x in grid_line_values(plane.xmin, plane.xmax, x_step.step, leading=False):
            # Values next to the origin would overlap the "0" label.
            if abs(x) > x_step.step / 2:
                self._mapped.fill_text(format_tick(x, x_step.power), x, -x_label_offset, x_style)

        y_style = replace(base, align="right", baseline="middle")
        for y in grid_line_values(plane.ymin, plane.ymax, y_step.step, leading=False):
            if abs(y) > y_step.step / 2:
                self._mapped.fill_text(format_tick(y, y_step.power), -y_label_offset, y, y_style)

        if plane.contains_origin():
            zero_style = replace(base, align="right", baseline="top", stay_inbound=False)
            self._mapped.fill_text("0", -y_label_offset, -x_label_offset, zero_style)

    def _vertical(self, plane: Plane, x: float, style: LineStyle) -> None:
        self._mapped.draw_line((x, plane.ymin), (x, plane.ymax), style.line_color, style.line_width)

    def _horizontal(self, plane: Plane, y: float, style: LineStyle) -> None:
        self._mapped.draw_line((plane.xmin, y), (plane.xmax, y), style.line_color, style.line_width)


def _shown(group: GridLineOptions, lines: LineStyle) -> bool:
    return group.displayed and lines.displayed
