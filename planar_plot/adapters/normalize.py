from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from numbers import Real
from typing import Any

import numpy as np

from planar_plot.errors import PlotDataError


def normalize_samples(values: Any) -> np.ndarray:
    """Validate ``[[x, y], ...]`` samples and return them as an ``(n, 2)`` float64 array.

    The whole input is rejected when any sample is malformed; nothing is
    dropped or coerced from strings.
    """
    if values is None:
        raise PlotDataError("no values passed")

    if isinstance(values, np.ndarray):
        return _coerce_ndarray(values)

    if isinstance(values, (str, bytes, bytearray)) or not isinstance(values, Sequence):
        raise PlotDataError(f"values must be a sequence of [x, y] pairs, got {type(values)!r}")
    if len(values) == 0:
        raise PlotDataError("empty series")

    out = np.empty((len(values), 2), dtype=np.float64)
    for i, sample in enumerate(values):
        if isinstance(sample, (str, bytes, bytearray)) or not isinstance(sample, (Sequence, np.ndarray)):
            raise PlotDataError(f"sample at index {i} must be an [x, y] pair, got {sample!r}")
        if len(sample) != 2:
            raise PlotDataError(f"sample at index {i} must have length 2, got {len(sample)}")
        out[i, 0] = _coerce_value(sample[0], index=i, label="x")
        out[i, 1] = _coerce_value(sample[1], index=i, label="y")
    return out


def _coerce_value(raw: Any, *, index: int, label: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (Real, Decimal)):
        raise PlotDataError(f"{label} of sample {index} must be a number, got {raw!r}")
    value = float(raw)
    if not np.isfinite(value):
        raise PlotDataError(f"{label} of sample {index} must be finite, got {raw!r}")
    return value


def _coerce_ndarray(arr: np.ndarray) -> np.ndarray:
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise PlotDataError(f"values array must have shape (n, 2), got {arr.shape}")
    if arr.shape[0] == 0:
        raise PlotDataError("empty series")
    if arr.dtype.kind not in {"i", "u", "f"}:
        raise PlotDataError(f"values array must be numeric, got dtype {arr.dtype}")
    out = arr.astype(np.float64, copy=True)
    if not np.all(np.isfinite(out)):
        bad = int(np.flatnonzero(~np.all(np.isfinite(out), axis=1))[0])
        raise PlotDataError(f"sample at index {bad} is not finite")
    return out
