import unittest

import numpy as np

from fixedfrac import _integers


class FixedWidthTests(unittest.TestCase):
    def test_wrap(self):
        int8 = np.dtype(np.int8)
        self.assertEqual(_integers.wrap(127, int8), 127)
        self.assertEqual(_integers.wrap(128, int8), -128)
        self.assertEqual(_integers.wrap(-129, int8), 127)
        self.assertEqual(_integers.wrap(200, int8), -56)
        self.assertEqual(_integers.wrap(2**63, np.dtype(np.int64)), -(2**63))

    def test_truncating_division(self):
        self.assertEqual(_integers.trunc_div(7, 2), 3)
        self.assertEqual(_integers.trunc_div(-7, 2), -3)
        self.assertEqual(_integers.trunc_div(7, -2), -3)
        self.assertEqual(_integers.trunc_div(-7, -2), 3)
        self.assertEqual(_integers.trunc_mod(-7, 2), -1)
        self.assertEqual(_integers.trunc_mod(7, -2), 1)

    def test_ensure_int(self):
        int16 = np.dtype(np.int16)
        self.assertEqual(_integers.ensure_int(np.int8(-5), int16, name="x"), -5)
        with self.assertRaises(OverflowError):
            _integers.ensure_int(40000, int16, name="x")
        with self.assertRaises(TypeError):
            _integers.ensure_int(1.0, int16, name="x")

    def test_as_signed_dtype(self):
        self.assertEqual(_integers.as_signed_dtype("int32"), np.dtype(np.int32))
        with self.assertRaises(TypeError):
            _integers.as_signed_dtype(np.uint16)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
