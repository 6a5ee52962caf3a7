import unittest

import numpy as np

from fixedfrac import (
    as_fraction_array,
    frac8,
    frac16,
    frac64,
    to_float_array,
    zeros,
    zeros_like,
)


class ArrayHelperTests(unittest.TestCase):
    def test_zeros(self):
        arr = zeros(4)
        self.assertEqual(arr.shape, (4,))
        self.assertEqual(arr.dtype, object)
        self.assertTrue(all(isinstance(item, frac64) for item in arr))
        self.assertTrue(all(item.to_string() == "0/1" for item in arr))

        grid = zeros((2, 3), fraction_cls=frac8)
        self.assertEqual(grid.shape, (2, 3))
        self.assertTrue(all(isinstance(item, frac8) for item in grid.flat))

    def test_zero_entries_are_distinct_objects(self):
        arr = zeros(2)
        arr[0] += frac64(1, 2)
        self.assertEqual(arr[1].to_string(), "0/1")

    def test_as_fraction_array(self):
        arr = as_fraction_array([frac64(1, 2), 0.25, 0.75])
        self.assertEqual(arr.shape, (3,))
        self.assertTrue(all(isinstance(item, frac64) for item in arr))
        np.testing.assert_allclose(to_float_array(arr), [0.5, 0.25, 0.75])

        ints = as_fraction_array(np.array([1, -2]), fraction_cls=frac8)
        self.assertEqual([item.to_string() for item in ints], ["1/1", "-2/1"])

    def test_as_fraction_array_without_copy(self):
        arr = np.array([frac64(1, 2), frac64(1, 3)], dtype=object)
        self.assertIs(as_fraction_array(arr, copy=False), arr)
        self.assertIsNot(as_fraction_array(arr), arr)

    def test_as_fraction_array_rejects_other_types(self):
        with self.assertRaises(TypeError):
            as_fraction_array([frac8(1, 2)], fraction_cls=frac16)
        with self.assertRaises(TypeError):
            as_fraction_array(["a"])

    def test_zeros_like_keeps_fraction_type(self):
        base = as_fraction_array([1, 2, 3], fraction_cls=frac16)
        like = zeros_like(base)
        self.assertEqual(like.shape, base.shape)
        self.assertTrue(all(isinstance(item, frac16) for item in like))
        self.assertTrue(all(float(item) == 0.0 for item in like))

    def test_to_float_array(self):
        arr = np.array([frac16(1, 4), frac16(3, 2)], dtype=object)
        single = to_float_array(arr, dtype=np.float32)
        self.assertEqual(single.dtype, np.float32)
        np.testing.assert_array_equal(single, [0.25, 1.5])
        self.assertEqual(to_float_array(arr).dtype, np.float64)
        with self.assertRaises(TypeError):
            to_float_array(arr, dtype=np.int32)


class NumpyInteropTests(unittest.TestCase):
    def test_fraction_with_integer_array(self):
        result = frac64(1, 4) + np.array([1, 2])
        self.assertEqual(result.dtype, object)
        self.assertTrue(all(isinstance(item, frac64) for item in result))
        np.testing.assert_allclose(to_float_array(result), [1.25, 2.25])

        scaled = frac64(1, 4) * np.array([2, 4])
        np.testing.assert_allclose(to_float_array(scaled), [0.5, 1.0])

    def test_object_array_with_fraction(self):
        vector = np.array([frac64(1, 2), frac64(1, 3)], dtype=object)
        result = vector + frac64(1, 6)
        np.testing.assert_allclose(to_float_array(result), [2 / 3, 1 / 2])

    def test_fraction_with_fraction_array(self):
        vector = np.array([frac64(1, 2), frac64(3, 4)], dtype=object)
        result = frac64(1, 4) + vector
        np.testing.assert_allclose(to_float_array(result), [0.75, 1.0])

        difference = vector - frac64(1, 4)
        np.testing.assert_allclose(to_float_array(difference), [0.25, 0.5])
        quotient = vector / frac64(1, 4)
        np.testing.assert_allclose(to_float_array(quotient), [2.0, 3.0])


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
