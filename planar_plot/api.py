from __future__ import annotations

import itertools
from pathlib import Path
from typing import Any, Mapping

from planar_plot.config import CanvasOptions, GridOptions, resolve_canvas_options, resolve_grid_options
from planar_plot.display import resolve_canvas_size
from planar_plot.errors import PlotDataError
from planar_plot.grid import GridRenderer
from planar_plot.mapped import MappedSurface
from planar_plot.plane import PlaneManager
from planar_plot.raster.surface import RasterSurface, save_png
from planar_plot.series import SeriesPlotter, SeriesStyle
from planar_plot.surface import Color


_canvas_ids = itertools.count(1)


def _next_name(prefix: str) -> str:
    return f"{prefix}-{next(_canvas_ids)}"


def _build_mapped(
    parent_size: tuple[int, int] | None,
    canvas_options: CanvasOptions | Mapping[str, Any] | None,
    name: str,
    grid_options: GridOptions | None = None,
) -> MappedSurface:
    width, height = resolve_canvas_size(resolve_canvas_options(canvas_options), parent_size)
    pixel_steps = grid_options.px_step if grid_options is not None else None
    planes = PlaneManager(width, height, pixel_steps=pixel_steps, name=name)
    return MappedSurface(RasterSurface(width, height), planes)


def grid_canvas(
    parent_size: tuple[int, int] | None = None,
    *,
    name: str | None = None,
    options: GridOptions | Mapping[str, Any] | None = None,
    canvas_options: CanvasOptions | Mapping[str, Any] | None = None,
) -> GridRenderer:
    grid_options = resolve_grid_options(options)
    mapped = _build_mapped(parent_size, canvas_options, name or _next_name("grid"), grid_options)
    return GridRenderer(mapped, grid_options)


def graph_canvas(
    parent_size: tuple[int, int] | None = None,
    *,
    name: str | None = None,
    color: Color = "red",
    canvas_options: CanvasOptions | Mapping[str, Any] | None = None,
) -> SeriesPlotter:
    mapped = _build_mapped(parent_size, canvas_options, name or _next_name("graph"))
    return SeriesPlotter(mapped, SeriesStyle(color=color))


def save_layers(path: str | Path, *layers: GridRenderer | SeriesPlotter, background: Color | None = "white") -> Path:
    """Write the layers, bottom first, into one PNG."""
    surfaces = []
    for layer in layers:
        surface = layer.mapped.surface
        if not isinstance(surface, RasterSurface):
            raise PlotDataError(f"layer {layer!r} does not draw on a raster surface")
        surfaces.append(surface)
    return save_png(path, *surfaces, background=background)
