from __future__ import annotations


class PlotError(Exception):
    """Base class for every error raised by planar_plot."""


class PlotDataError(PlotError, ValueError):
    """An argument has the wrong type, shape, count or value."""


class DegenerateIntervalError(PlotDataError):
    """A mapping was requested from an interval of zero width."""


class PlotStateError(PlotError, RuntimeError):
    """An operation was called before the state it needs was set up."""
