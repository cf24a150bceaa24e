from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import math
from typing import Any, Literal

import numpy as np

from planar_plot.adapters import normalize_samples
from planar_plot.errors import PlotDataError, PlotStateError
from planar_plot.mapped import MappedSurface
from planar_plot.plane import PlaneManager
from planar_plot.raster.canvas import coerce_color
from planar_plot.scales import fit_plane, require_real
from planar_plot.surface import Color


LOGGER = logging.getLogger(__name__)

PlotStyle = Literal["line", "dot", "tower"]
PLOT_STYLES: tuple[str, ...] = ("line", "dot", "tower")
_STYLE_ALIASES = {"towers": "tower", "dots": "dot", "lines": "line"}


@dataclass(frozen=True)
class SeriesStyle:
    mode: PlotStyle = "line"
    color: Color = "red"
    dot_radius: float = 3.0
    line_width: float = 1.0


def resolve_plot_style(style: Any) -> PlotStyle:
    if not isinstance(style, str):
        raise PlotDataError(f"plot style must be a string, got {type(style)!r}")
    key = style.strip().lower()
    key = _STYLE_ALIASES.get(key, key)
    if key not in PLOT_STYLES:
        raise PlotDataError(f'plot style "{style}" is not supported')
    return key  # type: ignore[return-value]


def sort_samples(samples: np.ndarray) -> np.ndarray:
    order = np.argsort(samples[:, 0], kind="stable")
    return samples[order]


def tower_spans(xs: np.ndarray, xmin: float, xmax: float) -> list[tuple[float, float]]:
    """Bar spans reaching halfway to each neighbour; plane bounds stand in for missing neighbours."""
    spans: list[tuple[float, float]] = []
    n = xs.size
    for i in range(n):
        x = float(xs[i])
        prev_x = float(xs[i - 1]) if i > 0 else xmin
        next_x = float(xs[i + 1]) if i < n - 1 else xmax
        start = x - (x - prev_x) / 2
        end = next_x - (next_x - x) / 2
        spans.append((start, end))
    return spans


class SeriesPlotter:
    """Plots an in-memory list of (x, y) samples on a mapped surface."""

    def __init__(self, mapped: MappedSurface, style: SeriesStyle | None = None) -> None:
        self._mapped = mapped
        self._style = style or SeriesStyle()
        coerce_color(self._style.color)
        self._values: np.ndarray | None = None

    @property
    def mapped(self) -> MappedSurface:
        return self._mapped

    @property
    def planes(self) -> PlaneManager:
        return self._mapped.planes

    @property
    def style(self) -> SeriesStyle:
        return self._style

    @property
    def values(self) -> np.ndarray | None:
        return None if self._values is None else self._values.copy()

    def set_values_to_plot(self, values: Any) -> None:
        self._values = normalize_samples(values)

    def set_plot_style(self, style: str) -> None:
        self._style = replace(self._style, mode=resolve_plot_style(style))

    def set_plot_color(self, color: Color) -> None:
        coerce_color(color)
        self._style = replace(self._style, color=color)

    def set_dot_radius(self, radius: float) -> None:
        value = require_real(radius, "radius")
        if value <= 0:
            raise PlotDataError("dot radius must be > 0")
        self._style = replace(self._style, dot_radius=value)

    def set_line_width(self, width: float) -> None:
        value = require_real(width, "width")
        if value <= 0:
            raise PlotDataError("line width must be > 0")
        self._style = replace(self._style, line_width=value)

    def clear(self) -> None:
        self._mapped.clear()

    def plot(self, auto_plane: bool = False) -> None:
        """Draw the current values in the current style.

        With ``auto_plane`` the plane is first set to the samples' bounding box.
        """
        if self._values is None:
            raise PlotStateError("no values to plot; call set_values_to_plot first")
        if not isinstance(auto_plane, bool):
            raise PlotDataError("auto_plane must be a bool")

        samples = sort_samples(self._values)
        if auto_plane:
            self._mapped.planes.set_plane(fit_plane(samples))

        style = self._style
        LOGGER.debug("plotting %d samples as %s", samples.shape[0], style.mode)
        if style.mode == "line":
            self._plot_line(samples, style)
        elif style.mode == "dot":
            self._plot_dots(samples, style)
        else:
            self._plot_towers(samples, style)

    def _plot_line(self, samples: np.ndarray, style: SeriesStyle) -> None:
        for i in range(1, samples.shape[0]):
            self._mapped.draw_line(
                (float(samples[i - 1, 0]), float(samples[i - 1, 1])),
                (float(samples[i, 0]), float(samples[i, 1])),
                style.color,
                style.line_width,
            )

    def _plot_dots(self, samples: np.ndarray, style: SeriesStyle) -> None:
        for x, y in samples.tolist():
            self._mapped.draw_arc(x, y, style.dot_radius, 0.0, 2.0 * math.pi, style.color, True, True)

    def _plot_towers(self, samples: np.ndarray, style: SeriesStyle) -> None:
        plane = self._mapped.planes.plane
        spans = tower_spans(samples[:, 0], plane.xmin, plane.xmax)
        for (start, end), y in zip(spans, samples[:, 1].tolist(), strict=True):
            self._mapped.fill_rect(start, plane.ymin, end - start, y - plane.ymin, style.color)
