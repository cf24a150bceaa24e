from __future__ import annotations

import unittest

from planar_plot.config import (
    CanvasOptions,
    GridOptions,
    LineStyle,
    PixelStepBounds,
    merge_options,
    resolve_canvas_options,
    resolve_grid_options,
)
from planar_plot.errors import PlotDataError


class GridOptionDefaultsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        options = GridOptions()
        self.assertEqual(options.axis.x_axis, LineStyle(line_color="#222", line_width=1.0))
        self.assertEqual(options.grid_lines.y_lines, LineStyle(line_color="grey", line_width=0.5))
        self.assertEqual(options.sub_grid_lines.x_lines.line_color, "lightgrey")
        self.assertEqual(options.px_step, PixelStepBounds(100.0, 100.0))
        self.assertEqual((options.font.family, options.font.size_px), ("Arial", 15.0))


class MergeOptionsTests(unittest.TestCase):
    def test_nested_override_keeps_sibling_leaves(self) -> None:
        options = resolve_grid_options({"axis": {"x_axis": {"line_width": 2}}, "px_step": {"min_px": 50}})
        self.assertEqual(options.axis.x_axis.line_width, 2)
        self.assertEqual(options.axis.x_axis.line_color, "#222")
        self.assertEqual(options.axis.y_axis.line_width, 1.0)
        self.assertEqual(options.px_step, PixelStepBounds(50, 100.0))

    def test_unknown_keys_are_ignored_and_logged(self) -> None:
        with self.assertLogs("planar_plot.config", level="DEBUG") as logs:
            options = resolve_grid_options({"colour": "red", "axis": {"thickness": 3}})
        self.assertEqual(options, GridOptions())
        self.assertTrue(any("axis.thickness" in line for line in logs.output))

    def test_instances_replace_whole_groups(self) -> None:
        style = LineStyle(line_color="blue")
        options = resolve_grid_options({"grid_lines": {"x_lines": style}})
        self.assertIs(options.grid_lines.x_lines, style)
        given = GridOptions()
        self.assertIs(resolve_grid_options(given), given)

    def test_invalid_values_raise(self) -> None:
        with self.assertRaises(PlotDataError):
            resolve_grid_options({"px_step": {"min_px": 200}})
        with self.assertRaises(PlotDataError):
            resolve_grid_options({"grid_lines": {"displayed": "no"}})
        with self.assertRaises(PlotDataError):
            resolve_grid_options({"axis": 3})
        with self.assertRaises(PlotDataError):
            resolve_grid_options(["axis"])
        with self.assertRaises(PlotDataError):
            merge_options(LineStyle(), {"line_width": {"value": 1}})

    def test_colors_are_checked_when_options_are_built(self) -> None:
        bad = [
            {"sub_grid_lines": {"y_lines": {"line_color": "nope"}}},
            {"axis": {"x_axis": {"line_color": (0, 0, 256)}}},
            {"font": {"color": "nope"}},
            {"font": {"inbound_color": 12}},
        ]
        for overrides in bad:
            with self.subTest(overrides=overrides):
                with self.assertRaises(PlotDataError):
                    resolve_grid_options(overrides)
        options = resolve_grid_options({"font": {"color": "rgba(0,0,0,0.5)"}})
        self.assertEqual(options.font.color, "rgba(0,0,0,0.5)")

    def test_canvas_options(self) -> None:
        self.assertEqual(resolve_canvas_options(), CanvasOptions())
        options = resolve_canvas_options({"size_to_parent": False, "initial_width": 640})
        self.assertEqual((options.size_to_parent, options.initial_width, options.initial_height), (False, 640, 100))
        with self.assertRaises(PlotDataError):
            resolve_canvas_options({"initial_height": 0})


if __name__ == "__main__":
    unittest.main()
