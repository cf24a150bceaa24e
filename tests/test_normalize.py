from __future__ import annotations

from decimal import Decimal
import unittest

import numpy as np

from planar_plot.adapters import normalize_samples
from planar_plot.errors import PlotDataError


class NormalizeSamplesTests(unittest.TestCase):
    def test_lists_and_tuples(self) -> None:
        out = normalize_samples([(0, 1), [2.5, Decimal("3")], (np.int32(4), np.float32(5))])
        self.assertEqual(out.dtype, np.float64)
        np.testing.assert_array_equal(out, np.array([[0.0, 1.0], [2.5, 3.0], [4.0, 5.0]]))

    def test_numpy_input_is_copied(self) -> None:
        data = np.array([[1, 2], [3, 4]], dtype=np.int64)
        out = normalize_samples(data)
        data[0, 0] = 10
        self.assertEqual(out[0, 0], 1.0)
        self.assertEqual(out.dtype, np.float64)

    def test_rejects_malformed_input(self) -> None:
        cases = [
            None,
            "1,2",
            42,
            [],
            [[1, "a"]],
            [[1]],
            [[1, 2, 3]],
            [1, 2],
            [["1", "2"]],
            [[False, 1]],
            [[1, float("inf")]],
            [[None, 1]],
        ]
        for values in cases:
            with self.subTest(values=values):
                with self.assertRaises(PlotDataError):
                    normalize_samples(values)

    def test_rejects_malformed_arrays(self) -> None:
        for arr in (np.zeros((3,)), np.zeros((2, 3)), np.zeros((0, 2)), np.array([["a", "b"]]), np.array([[np.nan, 1.0]])):
            with self.subTest(shape=arr.shape, dtype=arr.dtype):
                with self.assertRaises(PlotDataError):
                    normalize_samples(arr)

    def test_error_names_the_offending_sample(self) -> None:
        with self.assertRaisesRegex(PlotDataError, "sample 2"):
            normalize_samples([[0, 0], [1, 1], [2, "x"]])


if __name__ == "__main__":
    unittest.main()
