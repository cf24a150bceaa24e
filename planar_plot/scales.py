from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import math
from numbers import Real
from typing import Any, Sequence

import numpy as np

from planar_plot.errors import DegenerateIntervalError, PlotDataError


_STEP_BASES = (1, 2, 5)
# 5 * 10**307 is the largest candidate a float can hold.
_MAX_STEP_MAGNITUDE = 307


def require_real(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise PlotDataError(f"{label} must be a number, got {value!r}")
    out = float(value)
    if not math.isfinite(out):
        raise PlotDataError(f"{label} must be finite, got {value!r}")
    return out


def require_size(width: Any, height: Any) -> None:
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise PlotDataError(f"width must be a positive int, got {width!r}")
    if isinstance(height, bool) or not isinstance(height, int) or height <= 0:
        raise PlotDataError(f"height must be a positive int, got {height!r}")


def _from_ndarray(values: Any, length: int, label: str) -> Any:
    if not isinstance(values, np.ndarray):
        return values
    if values.shape != (length,):
        raise PlotDataError(f"{label} array must have shape ({length},), got {values.shape}")
    return values.tolist()


def _require_pair(values: Any, label: str) -> tuple[float, float]:
    values = _from_ndarray(values, 2, label)
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence) or len(values) != 2:
        raise PlotDataError(f"{label} must be a sequence of length 2")
    return (require_real(values[0], f"{label}[0]"), require_real(values[1], f"{label}[1]"))


@dataclass(frozen=True)
class Plane:
    """Coordinate rectangle mapped onto the full pixel surface."""

    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self) -> None:
        for name in ("xmin", "ymin", "xmax", "ymax"):
            object.__setattr__(self, name, require_real(getattr(self, name), f"plane.{name}"))
        if not self.xmin < self.xmax:
            raise PlotDataError(f"plane xmin must be < xmax, got {self.xmin} >= {self.xmax}")
        if not self.ymin < self.ymax:
            raise PlotDataError(f"plane ymin must be < ymax, got {self.ymin} >= {self.ymax}")

    @classmethod
    def from_values(cls, values: Any) -> "Plane":
        if isinstance(values, Plane):
            return values
        values = _from_ndarray(values, 4, "plane")
        if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
            raise PlotDataError("plane must be a sequence of 4 numbers [xmin, ymin, xmax, ymax]")
        if len(values) != 4:
            raise PlotDataError(f"plane must have length 4, got {len(values)}")
        xmin, ymin, xmax, ymax = values
        return cls(xmin=xmin, ymin=ymin, xmax=xmax, ymax=ymax)

    @property
    def x_interval(self) -> float:
        return self.xmax - self.xmin

    @property
    def y_interval(self) -> float:
        return self.ymax - self.ymin

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.xmin, self.ymin, self.xmax, self.ymax)

    def contains_origin(self) -> bool:
        return self.xmin < 0.0 < self.xmax and self.ymin < 0.0 < self.ymax


@dataclass(frozen=True)
class StepDescriptor:
    step: float
    power: int
    subdivisions: int

    @property
    def sub_step(self) -> float:
        return self.step / self.subdivisions

    @classmethod
    def from_step(cls, step: Any) -> "StepDescriptor":
        value = require_real(step, "step")
        if value <= 0:
            raise PlotDataError(f"step must be > 0, got {value}")
        power = max(0, _decimals_from_step(value) - 1)
        return cls(step=value, power=power, subdivisions=subdivisions_for(value))


def scalar_map(value: Any, in_range: Sequence[Any], out_range: Sequence[Any]) -> float:
    v = require_real(value, "value")
    in_min, in_max = _require_pair(in_range, "in_range")
    out_min, out_max = _require_pair(out_range, "out_range")
    if in_min == in_max:
        raise DegenerateIntervalError(f"cannot map from degenerate interval [{in_min}, {in_max}]")
    return out_min + (v - in_min) / (in_max - in_min) * (out_max - out_min)


def plane_to_pixel(x: Any, y: Any, plane: Plane, width: int, height: int) -> tuple[float, float]:
    if width <= 0 or height <= 0:
        raise PlotDataError("canvas width/height must be > 0")
    px = scalar_map(x, (plane.xmin, plane.xmax), (0, width))
    py = scalar_map(y, (plane.ymin, plane.ymax), (height, 0))
    # Half-pixel offset keeps 1px strokes on a single raster row/column.
    return (math.trunc(px) + 0.5, math.trunc(py) + 0.5)


def fit_plane(samples: np.ndarray) -> Plane:
    if samples.ndim != 2 or samples.shape[0] == 0 or samples.shape[1] != 2:
        raise PlotDataError("samples must be a non-empty (n, 2) array")
    xmin = float(np.min(samples[:, 0]))
    xmax = float(np.max(samples[:, 0]))
    ymin = float(np.min(samples[:, 1]))
    ymax = float(np.max(samples[:, 1]))

    if xmin == xmax:
        xmin -= 1.0
        xmax += 1.0
    if ymin == ymax:
        ymin -= 1.0
        ymax += 1.0

    return Plane(xmin=xmin, ymin=ymin, xmax=xmax, ymax=ymax)


def candidate_step(index: int, *, reciprocal: bool = False) -> float:
    base = _STEP_BASES[index % len(_STEP_BASES)]
    exponent = index // len(_STEP_BASES)
    if exponent > _MAX_STEP_MAGNITUDE:
        raise PlotDataError("no 1/2/5 grid step representable as a float fits this interval and pixel length")
    magnitude = 10 ** exponent
    if reciprocal:
        return 1.0 / (base * magnitude)
    return float(base * magnitude)


def auto_step(interval: float, pixel_length: float, min_px: float, max_px: float) -> StepDescriptor:
    """Pick a 1/2/5 x 10^n grid step for ``interval`` spread over ``pixel_length`` pixels.

    ``min_px``/``max_px`` bound the pixel distance between two grid lines, so
    ``pixel_length / min_px`` is the most lines allowed and
    ``pixel_length / max_px`` the fewest.
    """
    if not interval > 0:
        raise PlotDataError(f"interval must be > 0, got {interval}")
    if not pixel_length > 0:
        raise PlotDataError(f"pixel length must be > 0, got {pixel_length}")
    if not 0 < min_px <= max_px:
        raise PlotDataError(f"pixel step bounds must satisfy 0 < min <= max, got ({min_px}, {max_px})")

    max_lines = pixel_length / min_px
    min_lines = pixel_length / max_px

    if interval > min_lines:
        index = 0
        while max_lines * candidate_step(index) < interval:
            index += 1
        index = max(0, index - 1)
        step = candidate_step(index)
    else:
        index = 0
        step = 1.0
        while min_lines > interval / step:
            step = candidate_step(index, reciprocal=True)
            index += 1
        # The loop exits one index past the step that ended it; back off two.
        index = max(0, index - 2)
        step = candidate_step(index, reciprocal=True)

    return StepDescriptor(step=step, power=index // len(_STEP_BASES), subdivisions=subdivisions_for(step))


def subdivisions_for(step: float) -> int:
    digits = Decimal(repr(float(step))).normalize().as_tuple().digits
    return 5 if digits and digits[0] == 5 else 4


def grid_line_values(vmin: float, vmax: float, step: float, *, leading: bool = True) -> list[float]:
    if not step > 0:
        raise PlotDataError(f"step must be > 0, got {step}")
    # fmod keeps the sign of vmin, so the first value never lands above it.
    start = vmin - math.fmod(vmin, step)
    if leading:
        start -= step
    values: list[float] = []
    k = 0
    while True:
        value = start + k * step
        if value >= vmax:
            break
        values.append(value)
        k += 1
    return values


def format_tick(value: float, power: int) -> str:
    v = require_real(value, "value")
    if v.is_integer():
        return str(int(v))
    rounded = round(v, max(0, int(power)) + 1)
    if rounded.is_integer():
        return str(int(rounded))
    return repr(rounded)


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not math.isfinite(step):
        return 6
    d = Decimal(repr(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
