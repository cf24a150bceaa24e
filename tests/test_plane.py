from __future__ import annotations

import unittest
from unittest import mock

import numpy as np

from planar_plot.config import PixelStepBounds
from planar_plot.errors import PlotDataError
from planar_plot.plane import PlaneManager
from planar_plot.scales import Plane, StepDescriptor


class PlaneManagerTests(unittest.TestCase):
    def test_default_plane_is_pixel_identity(self) -> None:
        planes = PlaneManager(640, 480)
        self.assertEqual(planes.plane, Plane(0, 0, 640, 480))
        self.assertEqual(planes.to_pixel(10, 240), (10.5, 240.5))

    def test_set_plane_recomputes_steps(self) -> None:
        planes = PlaneManager(500, 300)
        planes.set_plane([0, -0.01, 51, 1.01])
        self.assertEqual(planes.get_plane().as_tuple(), (0.0, -0.01, 51.0, 1.01))
        self.assertEqual(planes.x_step, StepDescriptor(step=10.0, power=1, subdivisions=4))
        self.assertEqual(planes.y_step, StepDescriptor(step=0.5, power=0, subdivisions=5))

    def test_set_plane_without_argument_resets_to_identity(self) -> None:
        planes = PlaneManager(200, 100, plane=(-1, -1, 1, 1))
        planes.set_plane()
        self.assertEqual(planes.plane, Plane(0, 0, 200, 100))

    def test_invalid_plane_leaves_state_untouched(self) -> None:
        planes = PlaneManager(500, 300, plane=(0, 0, 10, 10))
        before = (planes.plane, planes.steps)
        listener = mock.Mock()
        planes.subscribe(listener)
        for bad in ([0, 0, 1], "0,0,1,1", [0, 0, "x", 1], [5, 0, 1, 1]):
            with self.subTest(bad=bad):
                with self.assertRaises(PlotDataError):
                    planes.set_plane(bad)
        self.assertEqual((planes.plane, planes.steps), before)
        listener.assert_not_called()

    def test_plane_too_narrow_for_any_step_is_rejected(self) -> None:
        planes = PlaneManager(500, 300, plane=(0, 0, 10, 10))
        before = (planes.plane, planes.steps)
        with self.assertRaises(PlotDataError):
            planes.set_plane((0, 0, 1e-320, 1))
        self.assertEqual((planes.plane, planes.steps), before)

    def test_set_plane_accepts_numpy_array(self) -> None:
        planes = PlaneManager(100, 100)
        planes.set_plane(np.array([0.0, 0.0, 2.0, 2.0]))
        self.assertEqual(planes.plane, Plane(0, 0, 2, 2))

    def test_listeners_follow_render_on_change(self) -> None:
        planes = PlaneManager(100, 100)
        listener = mock.Mock()
        planes.subscribe(listener)

        planes.set_plane((0, 0, 5, 5))
        self.assertEqual(listener.call_count, 1)

        planes.set_render_on_change(False)
        planes.set_plane((0, 0, 6, 6))
        planes.set_x_step(2)
        planes.resize(50, 50)
        self.assertEqual(listener.call_count, 1)

        planes.set_render_on_change(True)
        planes.unsubscribe(listener)
        planes.set_plane((0, 0, 7, 7))
        self.assertEqual(listener.call_count, 1)

    def test_set_render_on_change_requires_bool(self) -> None:
        with self.assertRaises(PlotDataError):
            PlaneManager(10, 10).set_render_on_change("yes")

    def test_translate_moves_the_view(self) -> None:
        planes = PlaneManager(100, 100, plane=(0, 0, 10, 10))
        planes.translate(2, 3)
        self.assertEqual(planes.plane.as_tuple(), (-2.0, -3.0, 8.0, 7.0))
        with self.assertRaises(PlotDataError):
            planes.translate("1", 0)

    def test_square_plane_preserving_x(self) -> None:
        planes = PlaneManager(400, 200, plane=(-10, -10, 10, 10))
        listener = mock.Mock()
        planes.subscribe(listener)

        planes.square_plane()

        self.assertEqual(planes.plane.as_tuple(), (-10.0, -5.0, 10.0, 5.0))
        self.assertEqual(planes.x_step.step, 2.0)
        self.assertEqual(planes.y_step, planes.x_step)
        listener.assert_called_once_with()

    def test_square_plane_preserving_y(self) -> None:
        planes = PlaneManager(400, 200, plane=(-10, -10, 10, 10))
        planes.square_plane(preserve_x_axis=False)
        self.assertEqual(planes.plane.as_tuple(), (-20.0, -10.0, 20.0, 10.0))
        self.assertEqual(planes.x_step, StepDescriptor(step=5.0, power=0, subdivisions=5))
        self.assertEqual(planes.y_step, planes.x_step)

    def test_square_plane_keeps_units_equal_on_both_axes(self) -> None:
        planes = PlaneManager(300, 500, plane=(-2, 0, 4, 3))
        planes.square_plane()
        plane = planes.plane
        self.assertAlmostEqual(300 / plane.x_interval, 500 / plane.y_interval)
        # 0 sits at the same relative height as before.
        self.assertAlmostEqual(-plane.ymin / plane.y_interval, 0.0)

    def test_manual_steps(self) -> None:
        planes = PlaneManager(100, 100)
        planes.set_x_step(0.5)
        planes.set_y_step(20)
        self.assertEqual(planes.x_step, StepDescriptor(step=0.5, power=0, subdivisions=5))
        self.assertEqual(planes.y_step, StepDescriptor(step=20.0, power=0, subdivisions=4))
        with self.assertRaises(PlotDataError):
            planes.set_x_step(0)

        planes.auto_step()
        self.assertEqual(planes.x_step.step, 50.0)

    def test_resize_recomputes_steps(self) -> None:
        planes = PlaneManager(500, 300, plane=(0, -0.01, 51, 1.01))
        planes.resize(1000, 300)
        self.assertEqual((planes.width, planes.height), (1000, 300))
        self.assertEqual(planes.x_step.step, 5.0)
        self.assertEqual(planes.plane.as_tuple(), (0.0, -0.01, 51.0, 1.01))
        with self.assertRaises(PlotDataError):
            planes.resize(0, 10)

    def test_custom_pixel_steps(self) -> None:
        planes = PlaneManager(500, 500, pixel_steps=PixelStepBounds(50, 100), plane=(0, 0, 51, 51))
        self.assertEqual(planes.x_step.step, 5.0)

    def test_plane_change_is_logged(self) -> None:
        planes = PlaneManager(100, 100, name="grid-7")
        with self.assertLogs("planar_plot.plane", level="INFO") as logs:
            planes.set_plane((0, 0, 2.5, 10))
        self.assertIn("new plane set for grid-7: [0, 0, 2.5, 10]", logs.output[0])

    def test_logging_failure_does_not_break_set_plane(self) -> None:
        planes = PlaneManager(100, 100)
        with mock.patch("planar_plot.plane.LOGGER") as logger:
            logger.info.side_effect = RuntimeError("handler down")
            planes.set_plane((0, 0, 1, 1))
        self.assertEqual(planes.plane, Plane(0, 0, 1, 1))


if __name__ == "__main__":
    unittest.main()
