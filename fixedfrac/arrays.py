"""NumPy object-array helpers for fixed-width fractions."""
from __future__ import annotations

import numbers
from typing import Any, Iterable

import numpy as np

from .fraction import FixedFraction, frac64


def _as_fraction(value: Any, fraction_cls: type) -> FixedFraction:
    if isinstance(value, fraction_cls):
        return value
    if isinstance(value, FixedFraction):
        raise TypeError(
            f"cannot store {type(value).__name__} in a {fraction_cls.__name__} array"
        )
    if isinstance(value, numbers.Integral):
        return fraction_cls(int(value), 1)
    if isinstance(value, numbers.Real):
        return fraction_cls.from_float(value)
    raise TypeError(f"Cannot convert {type(value)!r} to {fraction_cls.__name__}")


def as_fraction_array(
    values: Iterable[Any], *, fraction_cls: type = frac64, copy: bool = True
) -> np.ndarray:
    """Return an object array whose elements are all ``fraction_cls`` values.

    Integers become ``n/1`` and floats go through ``from_float``. With
    ``copy=False`` an object array that already holds only ``fraction_cls``
    values is returned as is.
    """
    if isinstance(values, np.ndarray) and values.dtype == object and not copy:
        if all(isinstance(item, fraction_cls) for item in values.flat):
            return values
    array = np.asarray(values)
    converted = np.empty(array.shape, dtype=object)
    for index, item in np.ndenumerate(array):
        converted[index] = _as_fraction(item, fraction_cls)
    return converted


def zeros(shape: Any, *, fraction_cls: type = frac64) -> np.ndarray:
    """Return an object array of ``0/1`` fractions."""
    array = np.empty(shape, dtype=object)
    for index in np.ndindex(array.shape):
        array[index] = fraction_cls(0, 1)
    return array


def zeros_like(array: Any) -> np.ndarray:
    """Return zeros with the shape and fraction type of *array*."""
    array = np.asarray(array, dtype=object)
    fraction_cls = frac64
    for item in array.flat:
        if isinstance(item, FixedFraction):
            fraction_cls = type(item)
            break
    return zeros(array.shape, fraction_cls=fraction_cls)


def to_float_array(array: Any, *, dtype: Any = np.float64) -> np.ndarray:
    """Convert an array of fractions to a float array of *dtype*."""
    dtype = np.dtype(dtype)
    if dtype == np.float32:
        convert = lambda item: item.float32()  # noqa: E731
    elif dtype == np.float64:
        convert = lambda item: item.float64()  # noqa: E731
    else:
        raise TypeError(f"expected float32 or float64, got {dtype!r}")
    array = np.asarray(array, dtype=object)
    result = np.empty(array.shape, dtype=dtype)
    for index, item in np.ndenumerate(array):
        result[index] = convert(item)
    return result


__all__ = ["as_fraction_array", "zeros", "zeros_like", "to_float_array"]
