from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass, replace
import logging
from typing import Any, Mapping, TypeVar

from planar_plot.errors import PlotDataError
from planar_plot.raster.canvas import coerce_color


LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def _require_bool(value: Any, name: str) -> None:
    if not isinstance(value, bool):
        raise PlotDataError(f"`{name}` must be a bool")


@dataclass(frozen=True)
class LineStyle:
    displayed: bool = True
    line_color: str | tuple[int, ...] = "grey"
    line_width: float = 0.5

    def __post_init__(self) -> None:
        _require_bool(self.displayed, "displayed")
        if isinstance(self.line_width, bool) or not isinstance(self.line_width, (int, float)) or self.line_width <= 0:
            raise PlotDataError("`line_width` must be a positive number")
        coerce_color(self.line_color)


@dataclass(frozen=True)
class AxisOptions:
    """Style of the two axis lines; ``x_axis`` is the line y=0, ``y_axis`` the line x=0."""

    displayed: bool = True
    x_axis: LineStyle = field(default_factory=lambda: LineStyle(line_color="#222", line_width=1.0))
    y_axis: LineStyle = field(default_factory=lambda: LineStyle(line_color="#222", line_width=1.0))

    def __post_init__(self) -> None:
        _require_bool(self.displayed, "displayed")


@dataclass(frozen=True)
class GridLineOptions:
    """``x_lines`` are the vertical lines placed at x ticks, ``y_lines`` the horizontal ones at y ticks."""

    displayed: bool = True
    x_lines: LineStyle = field(default_factory=LineStyle)
    y_lines: LineStyle = field(default_factory=LineStyle)

    def __post_init__(self) -> None:
        _require_bool(self.displayed, "displayed")


def _sub_grid_line_style() -> LineStyle:
    return LineStyle(line_color="lightgrey", line_width=0.5)


def _sub_grid_line_options() -> GridLineOptions:
    return GridLineOptions(x_lines=_sub_grid_line_style(), y_lines=_sub_grid_line_style())


@dataclass(frozen=True)
class PixelStepBounds:
    min_px: float = 100.0
    max_px: float = 100.0

    def __post_init__(self) -> None:
        for name in ("min_px", "max_px"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise PlotDataError(f"`{name}` must be a positive number")
        if self.min_px > self.max_px:
            raise PlotDataError("`min_px` must be <= `max_px`")


@dataclass(frozen=True)
class FontOptions:
    family: str = "Arial"
    size_px: float = 15.0
    color: str | tuple[int, ...] = "black"
    inbound_color: str | tuple[int, ...] = "grey"

    def __post_init__(self) -> None:
        if not isinstance(self.family, str) or not self.family.strip():
            raise PlotDataError("`family` must be a non-empty string")
        if isinstance(self.size_px, bool) or not isinstance(self.size_px, (int, float)) or self.size_px <= 0:
            raise PlotDataError("`size_px` must be a positive number")
        coerce_color(self.color)
        coerce_color(self.inbound_color)


@dataclass(frozen=True)
class GridOptions:
    axis: AxisOptions = field(default_factory=AxisOptions)
    grid_lines: GridLineOptions = field(default_factory=GridLineOptions)
    sub_grid_lines: GridLineOptions = field(default_factory=_sub_grid_line_options)
    px_step: PixelStepBounds = field(default_factory=PixelStepBounds)
    font: FontOptions = field(default_factory=FontOptions)


@dataclass(frozen=True)
class CanvasOptions:
    size_to_parent: bool = True
    initial_width: int = 100
    initial_height: int = 100

    def __post_init__(self) -> None:
        _require_bool(self.size_to_parent, "size_to_parent")
        for name in ("initial_width", "initial_height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise PlotDataError(f"`{name}` must be a positive int")


def merge_options(defaults: T, overrides: Mapping[str, Any] | T | None = None, *, path: str = "") -> T:
    """Merge ``overrides`` into ``defaults`` leaf by leaf.

    Nested mappings only replace the leaves they name. Unknown keys are
    ignored; a ready instance of the defaults' type replaces them whole.
    """
    if overrides is None:
        return defaults
    if isinstance(overrides, type(defaults)):
        return overrides
    if not isinstance(overrides, Mapping):
        raise PlotDataError(f"options{'.' + path if path else ''} must be a mapping, got {type(overrides)!r}")
    if not is_dataclass(defaults):
        raise PlotDataError(f"option `{path}` does not take nested values")

    known = {f.name for f in fields(defaults)}
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        key_path = f"{path}.{key}" if path else str(key)
        if key not in known:
            LOGGER.debug("ignoring unknown option `%s`", key_path)
            continue
        current = getattr(defaults, key)
        if is_dataclass(current):
            changes[key] = merge_options(current, value, path=key_path)
        else:
            changes[key] = value
    if not changes:
        return defaults
    return replace(defaults, **changes)


def resolve_grid_options(options: Mapping[str, Any] | GridOptions | None = None) -> GridOptions:
    return merge_options(GridOptions(), options)


def resolve_canvas_options(options: Mapping[str, Any] | CanvasOptions | None = None) -> CanvasOptions:
    return merge_options(CanvasOptions(), options)
