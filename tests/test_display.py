from __future__ import annotations

import unittest
from unittest import mock

from planar_plot.config import CanvasOptions
from planar_plot.display import resolve_canvas_size
from planar_plot.errors import PlotDataError


class ResolveCanvasSizeTests(unittest.TestCase):
    def test_fixed_size_ignores_parent(self) -> None:
        options = CanvasOptions(size_to_parent=False, initial_width=320, initial_height=200)
        self.assertEqual(resolve_canvas_size(options, (1000, 1000)), (320, 200))

    def test_parent_size_wins_when_fitting(self) -> None:
        self.assertEqual(resolve_canvas_size(CanvasOptions(), (640, 480)), (640, 480))
        with self.assertRaises(PlotDataError):
            resolve_canvas_size(CanvasOptions(), (0, 480))

    @mock.patch("planar_plot.display._detect_screen_size", return_value=(1920, 1080))
    def test_falls_back_to_screen_fraction(self, _detect: mock.Mock) -> None:
        self.assertEqual(resolve_canvas_size(CanvasOptions()), (960, 540))
        self.assertEqual(resolve_canvas_size(CanvasOptions(), screen_fraction=0.25), (480, 270))

    @mock.patch("planar_plot.display._detect_screen_size", return_value=None)
    def test_headless_uses_initial_dims(self, _detect: mock.Mock) -> None:
        options = CanvasOptions(initial_width=150, initial_height=90)
        self.assertEqual(resolve_canvas_size(options), (150, 90))


if __name__ == "__main__":
    unittest.main()
