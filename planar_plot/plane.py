from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from planar_plot.config import PixelStepBounds
from planar_plot.errors import PlotDataError
from planar_plot.scales import (
    Plane,
    StepDescriptor,
    auto_step,
    format_tick,
    plane_to_pixel,
    require_real,
    require_size,
    scalar_map,
)


LOGGER = logging.getLogger(__name__)

Listener = Callable[[], None]


class PlaneManager:
    """Owns the visible plane of one canvas and the grid steps derived from it.

    Steps are recomputed whenever the plane or the canvas size changes. When
    ``render_on_change`` is set, subscribed listeners (usually a grid
    renderer's ``draw``) run after every change.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        pixel_steps: PixelStepBounds | None = None,
        plane: Sequence[Any] | Plane | None = None,
        name: str = "canvas",
    ) -> None:
        require_size(width, height)
        self._width = width
        self._height = height
        self._pixel_steps = pixel_steps or PixelStepBounds()
        self._render_on_change = True
        self._listeners: list[Listener] = []
        self.name = name
        self._plane = self._resolve_plane(plane)
        self._steps = self._compute_steps(self._plane, width, height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def plane(self) -> Plane:
        return self._plane

    @property
    def pixel_steps(self) -> PixelStepBounds:
        return self._pixel_steps

    @property
    def steps(self) -> tuple[StepDescriptor, StepDescriptor]:
        return self._steps

    @property
    def x_step(self) -> StepDescriptor:
        return self._steps[0]

    @property
    def y_step(self) -> StepDescriptor:
        return self._steps[1]

    @property
    def render_on_change(self) -> bool:
        return self._render_on_change

    def set_render_on_change(self, render_on_change: bool) -> None:
        if not isinstance(render_on_change, bool):
            raise PlotDataError("render_on_change must be a bool")
        self._render_on_change = render_on_change

    def subscribe(self, listener: Listener) -> None:
        if not callable(listener):
            raise PlotDataError("listener must be callable")
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def get_plane(self) -> Plane:
        return self._plane

    def set_plane(self, plane: Sequence[Any] | Plane | None = None) -> None:
        resolved = self._resolve_plane(plane)
        steps = self._compute_steps(resolved, self._width, self._height)
        self._plane = resolved
        self._steps = steps
        self._log_plane()
        self._notify()

    def translate(self, dx: float, dy: float) -> None:
        dx = require_real(dx, "dx")
        dy = require_real(dy, "dy")
        p = self._plane
        self.set_plane((p.xmin - dx, p.ymin - dy, p.xmax - dx, p.ymax - dy))

    def resize(self, width: int, height: int) -> None:
        require_size(width, height)
        steps = self._compute_steps(self._plane, width, height)
        self._width = width
        self._height = height
        self._steps = steps
        self._notify()

    def auto_step(self) -> None:
        self._steps = self._compute_steps(self._plane, self._width, self._height)
        self._notify()

    def set_x_step(self, step: float) -> None:
        self._steps = (StepDescriptor.from_step(step), self._steps[1])
        self._notify()

    def set_y_step(self, step: float) -> None:
        self._steps = (self._steps[0], StepDescriptor.from_step(step))
        self._notify()

    def square_plane(self, preserve_x_axis: bool = True) -> None:
        """Rescale one axis so a unit spans the same number of pixels on both axes.

        The rescaled axis keeps the relative position of 0 within its range
        and takes over the step of the preserved axis.
        """
        aspect_ratio = self._height / self._width
        vp = self._plane
        if preserve_x_axis:
            new_y_interval = vp.x_interval * aspect_ratio
            new_ymin = -scalar_map(0, (vp.ymin, vp.ymax), (0, new_y_interval))
            plane = Plane(xmin=vp.xmin, ymin=new_ymin, xmax=vp.xmax, ymax=new_ymin + new_y_interval)
            x_step, _ = self._compute_steps(plane, self._width, self._height)
            steps = (x_step, x_step)
        else:
            new_x_interval = vp.y_interval / aspect_ratio
            new_xmin = -scalar_map(0, (vp.xmin, vp.xmax), (0, new_x_interval))
            plane = Plane(xmin=new_xmin, ymin=vp.ymin, xmax=new_xmin + new_x_interval, ymax=vp.ymax)
            _, y_step = self._compute_steps(plane, self._width, self._height)
            steps = (y_step, y_step)
        self._plane = plane
        self._steps = steps
        self._log_plane()
        self._notify()

    def to_pixel(self, x: Any, y: Any) -> tuple[float, float]:
        return plane_to_pixel(x, y, self._plane, self._width, self._height)

    def _resolve_plane(self, plane: Sequence[Any] | Plane | None) -> Plane:
        if plane is None:
            return Plane(xmin=0, ymin=0, xmax=self._width, ymax=self._height)
        return Plane.from_values(plane)

    def _compute_steps(self, plane: Plane, width: int, height: int) -> tuple[StepDescriptor, StepDescriptor]:
        bounds = self._pixel_steps
        return (
            auto_step(plane.x_interval, width, bounds.min_px, bounds.max_px),
            auto_step(plane.y_interval, height, bounds.min_px, bounds.max_px),
        )

    def _notify(self) -> None:
        if not self._render_on_change:
            return
        for listener in tuple(self._listeners):
            listener()

    def _log_plane(self) -> None:
        try:
            values = ", ".join(format_tick(v, 2) for v in self._plane.as_tuple())
            LOGGER.info("new plane set for %s: [%s]", self.name, values)
        except Exception:
            pass

