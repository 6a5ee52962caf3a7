"""Fixed-width fraction package."""

from .arrays import as_fraction_array, to_float_array, zeros, zeros_like
from .fraction import (
    DEFAULT_MAX_DIGITS,
    FixedFraction,
    cmp,
    equals,
    frac8,
    frac16,
    frac32,
    frac64,
    fraction_type,
    gcd,
    greater_equal,
    greater_than,
    less_equal,
    less_than,
    not_equals,
    reduce,
)

__all__ = [
    "FixedFraction",
    "fraction_type",
    "frac8",
    "frac16",
    "frac32",
    "frac64",
    "DEFAULT_MAX_DIGITS",
    "gcd",
    "reduce",
    "cmp",
    "equals",
    "not_equals",
    "less_than",
    "less_equal",
    "greater_than",
    "greater_equal",
    "as_fraction_array",
    "to_float_array",
    "zeros",
    "zeros_like",
]
