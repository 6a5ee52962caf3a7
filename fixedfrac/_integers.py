"""Fixed-width signed integer semantics on top of NumPy integer dtypes."""
from __future__ import annotations

import numbers
from typing import Any, Tuple

import numpy as np


def as_signed_dtype(dtype: Any) -> np.dtype:
    """Return ``numpy.dtype(dtype)`` after checking it is a signed integer."""
    resolved = np.dtype(dtype)
    if resolved.kind != "i":
        raise TypeError(f"expected a signed integer dtype, got {resolved!r}")
    return resolved


def bounds(dtype: np.dtype) -> Tuple[int, int]:
    info = np.iinfo(dtype)
    return int(info.min), int(info.max)


def wrap(value: int, dtype: np.dtype) -> int:
    """Wrap *value* into the two's-complement range of *dtype*."""
    low, high = bounds(dtype)
    span = high - low + 1
    return (int(value) - low) % span + low


def ensure_int(value: Any, dtype: np.dtype, *, name: str) -> int:
    """Convert *value* to ``int`` when it is integral and fits in *dtype*."""
    if not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be an integer, got {type(value)!r}")
    value = int(value)
    low, high = bounds(dtype)
    if not low <= value <= high:
        raise OverflowError(f"{name} {value} out of bounds for {dtype}")
    return value


def trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def trunc_mod(a: int, b: int) -> int:
    """Remainder taking the sign of the dividend."""
    return a - b * trunc_div(a, b)
