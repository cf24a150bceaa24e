from planar_plot.api import graph_canvas, grid_canvas, save_layers
from planar_plot.config import (
    AxisOptions,
    CanvasOptions,
    FontOptions,
    GridLineOptions,
    GridOptions,
    LineStyle,
    PixelStepBounds,
    merge_options,
)
from planar_plot.errors import DegenerateIntervalError, PlotDataError, PlotError, PlotStateError
from planar_plot.grid import GridRenderer
from planar_plot.mapped import MappedSurface
from planar_plot.plane import PlaneManager
from planar_plot.raster import RasterSurface
from planar_plot.scales import Plane, StepDescriptor, auto_step, plane_to_pixel, scalar_map
from planar_plot.series import SeriesPlotter, SeriesStyle
from planar_plot.surface import DrawingSurface, TextStyle

__all__ = [
    "AxisOptions",
    "CanvasOptions",
    "DegenerateIntervalError",
    "DrawingSurface",
    "FontOptions",
    "GridLineOptions",
    "GridOptions",
    "GridRenderer",
    "LineStyle",
    "MappedSurface",
    "PixelStepBounds",
    "Plane",
    "PlaneManager",
    "PlotDataError",
    "PlotError",
    "PlotStateError",
    "RasterSurface",
    "SeriesPlotter",
    "SeriesStyle",
    "StepDescriptor",
    "TextStyle",
    "auto_step",
    "graph_canvas",
    "grid_canvas",
    "merge_options",
    "plane_to_pixel",
    "save_layers",
    "scalar_map",
]
