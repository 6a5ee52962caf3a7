"""Fixed-width fraction values with NumPy interoperability."""
from __future__ import annotations

import logging
import numbers
import operator
from fractions import Fraction
from typing import Any, Dict, Optional, Tuple

import numpy as np

from . import _integers

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIGITS = 9  # Largest power of ten held by a 32-bit exponent.

_TYPE_CACHE: Dict[Tuple[np.dtype, np.dtype], type] = {}


def gcd(a: int, b: int, dtype: Any = np.int64) -> int:
    """Greatest common divisor of ``|a|`` and ``|b|`` at the width of *dtype*.

    Uses the mutual-modulo form of Euclid's algorithm with truncating
    remainders. ``gcd(a, 0) == a``, ``gcd(0, b) == b`` and ``gcd(0, 0) == 0``.
    Absolute values wrap like fixed-width negation, so the most negative
    value of the dtype keeps its sign.
    """
    dtype = _integers.as_signed_dtype(dtype)
    a = _integers.wrap(a, dtype)
    b = _integers.wrap(b, dtype)
    if a < 0:
        a = _integers.wrap(-a, dtype)
    if b < 0:
        b = _integers.wrap(-b, dtype)

    while b != 0:
        a = _integers.trunc_mod(a, b)
        if a == 0:
            return b
        b = _integers.trunc_mod(b, a)
    return a


class FixedFraction:
    """A numerator/denominator pair held at fixed signed integer widths.

    Concrete classes come from :func:`fraction_type` (or the ``frac8`` ..
    ``frac64`` aliases). Values are never reduced automatically, the
    denominator may be zero or negative, and all field arithmetic wraps at
    the width of the field it is stored in.

    Equality and ordering follow :meth:`cmp`: a fraction whose numerator is
    ``0`` is a plain zero whatever its denominator, so ``0/0`` compares like
    any other zero.
    """

    __slots__ = ("_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer fraction semantics in NumPy expressions.
    __hash__ = None  # reduce() and compound assignment mutate in place.

    numerator_type: Optional[np.dtype] = None
    denominator_type: Optional[np.dtype] = None

    def __init__(
        self,
        numerator: numbers.Integral = 0,
        denominator: numbers.Integral = 0,
    ) -> None:
        if self.numerator_type is None or self.denominator_type is None:
            raise TypeError(
                "FixedFraction has no field widths; use fraction_type() or frac8/16/32/64"
            )
        self._numerator = _integers.ensure_int(
            numerator, self.numerator_type, name="numerator"
        )
        self._denominator = _integers.ensure_int(
            denominator, self.denominator_type, name="denominator"
        )

    @classmethod
    def _wrapped(cls, numerator: int, denominator: int) -> "FixedFraction":
        frac = cls.__new__(cls)
        frac._numerator = _integers.wrap(numerator, cls.numerator_type)
        frac._denominator = _integers.wrap(denominator, cls.denominator_type)
        return frac

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def from_float(
        cls, value: numbers.Real, *, max_digits: Optional[int] = None
    ) -> "FixedFraction":
        """Approximate *value* by shifting its fractional part one decimal at a time.

        ``numpy.float32`` inputs are worked in single precision, everything
        else in double precision. The shift stops as soon as
        ``floor(f * 10**k) / 10**k`` is no longer below the fractional part
        ``f``, or after *max_digits* shifts. The result is reduced.

        This is a decimal heuristic: values without a short decimal expansion
        in the working precision run to the digit cap.
        Plain Python floats are doubles, so ``from_float(1.555)`` runs to the
        cap while ``from_float(np.float32(1.555))`` gives ``311/200``.
        """
        if cls.numerator_type is None or cls.denominator_type is None:
            raise TypeError(
                "FixedFraction has no field widths; use fraction_type() or frac8/16/32/64"
            )
        if isinstance(value, bool):
            return cls._wrapped(int(value), 1)
        if not isinstance(value, numbers.Real):
            raise TypeError(f"Cannot convert {type(value)!r} to a fraction")
        if max_digits is None:
            max_digits = DEFAULT_MAX_DIGITS
        if max_digits < 0:
            raise ValueError("max_digits must be >= 0")

        ftype = np.float32 if isinstance(value, np.float32) else np.float64
        x = ftype(value)
        if not np.isfinite(x):
            raise ValueError("cannot convert NaN or infinity to a fraction")

        dec_part, int_part = np.modf(x)
        candidate = np.floor(dec_part)
        exp = 1
        digits = 0
        while dec_part > candidate / ftype(exp):
            if digits == max_digits:
                logger.debug(
                    "from_float(%r) stopped after %d digits at %s/%d",
                    value,
                    digits,
                    candidate,
                    exp,
                )
                break
            exp *= 10
            digits += 1
            candidate = np.floor(dec_part * ftype(exp))

        numerator = int_part * ftype(exp) + candidate
        return cls._wrapped(int(numerator), exp).reduced()

    # ------------------------------------------------------------------
    # Fields
    @property
    def numerator(self) -> int:
        return self._numerator

    @numerator.setter
    def numerator(self, value: numbers.Integral) -> None:
        self._numerator = _integers.ensure_int(value, self.numerator_type, name="numerator")

    @property
    def denominator(self) -> int:
        return self._denominator

    @denominator.setter
    def denominator(self, value: numbers.Integral) -> None:
        self._denominator = _integers.ensure_int(
            value, self.denominator_type, name="denominator"
        )

    def copy(self) -> "FixedFraction":
        return self._wrapped(self._numerator, self._denominator)

    def as_fraction(self) -> Fraction:
        """Return a :class:`fractions.Fraction` with the same value."""
        return Fraction(self._numerator, self._denominator)

    # ------------------------------------------------------------------
    # Float conversion
    def float32(self) -> np.float32:
        """``numerator / denominator`` in single precision; ``x/0`` gives inf or NaN."""
        with np.errstate(divide="ignore", invalid="ignore"):
            return np.float32(self._numerator) / np.float32(self._denominator)

    def float64(self) -> np.float64:
        """``numerator / denominator`` in double precision; ``x/0`` gives inf or NaN."""
        with np.errstate(divide="ignore", invalid="ignore"):
            return np.float64(self._numerator) / np.float64(self._denominator)

    def __float__(self) -> float:
        return float(self.float64())

    def __int__(self) -> int:
        if self._denominator == 0:
            raise ZeroDivisionError("fraction has a zero denominator")
        return _integers.trunc_div(self._numerator, self._denominator)

    def __bool__(self) -> bool:
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Reduction
    def _reduced_fields(self) -> Tuple[int, int]:
        num_type = self.numerator_type
        divisor = gcd(
            self._numerator, _integers.wrap(self._denominator, num_type), num_type
        )
        if divisor == 0:
            # Only 0/0 has no divisor; it stays as it is.
            return self._numerator, self._denominator
        return (
            _integers.wrap(_integers.trunc_div(self._numerator, divisor), num_type),
            _integers.wrap(
                _integers.trunc_div(self._denominator, divisor), self.denominator_type
            ),
        )

    def reduce(self) -> None:
        """Divide both fields by their gcd in place. Signs are left where they are."""
        self._numerator, self._denominator = self._reduced_fields()

    def reduced(self) -> "FixedFraction":
        """Return a reduced copy, leaving this value untouched."""
        return self._wrapped(*self._reduced_fields())

    # ------------------------------------------------------------------
    # Pure arithmetic
    @staticmethod
    def _common_type(lhs: Any, rhs: Any) -> type:
        if not isinstance(lhs, FixedFraction) or not isinstance(rhs, FixedFraction):
            raise TypeError(
                f"expected two fractions, got {type(lhs)!r} and {type(rhs)!r}"
            )
        if type(lhs) is not type(rhs):
            raise TypeError(
                f"cannot combine {type(lhs).__name__} with {type(rhs).__name__}"
            )
        return type(lhs)

    @staticmethod
    def add(lhs: "FixedFraction", rhs: "FixedFraction") -> "FixedFraction":
        cls = FixedFraction._common_type(lhs, rhs)
        return cls._wrapped(
            lhs._numerator * rhs._denominator + rhs._numerator * lhs._denominator,
            lhs._denominator * rhs._denominator,
        )

    @staticmethod
    def sub(lhs: "FixedFraction", rhs: "FixedFraction") -> "FixedFraction":
        cls = FixedFraction._common_type(lhs, rhs)
        return cls._wrapped(
            lhs._numerator * rhs._denominator - rhs._numerator * lhs._denominator,
            lhs._denominator * rhs._denominator,
        )

    @staticmethod
    def mul(lhs: "FixedFraction", rhs: "FixedFraction") -> "FixedFraction":
        cls = FixedFraction._common_type(lhs, rhs)
        return cls._wrapped(
            lhs._numerator * rhs._numerator,
            lhs._denominator * rhs._denominator,
        )

    @staticmethod
    def div(lhs: "FixedFraction", rhs: "FixedFraction") -> "FixedFraction":
        cls = FixedFraction._common_type(lhs, rhs)
        return cls._wrapped(
            lhs._numerator * rhs._denominator,
            lhs._denominator * rhs._numerator,
        )

    @staticmethod
    def cmp(lhs: "FixedFraction", rhs: "FixedFraction") -> int:
        """Return a value whose sign orders *lhs* against *rhs*.

        If either numerator is zero the result is the difference of the
        numerators. Otherwise both sides are reduced and the result is the
        numerator of their difference. Only the sign is meaningful.
        """
        cls = FixedFraction._common_type(lhs, rhs)
        if lhs._numerator == 0 or rhs._numerator == 0:
            return _integers.wrap(lhs._numerator - rhs._numerator, cls.numerator_type)
        return FixedFraction.sub(lhs.reduced(), rhs.reduced())._numerator

    def increment(self) -> "FixedFraction":
        """Return ``numerator + denominator`` over the same denominator; no mutation."""
        return self._wrapped(self._numerator + self._denominator, self._denominator)

    def decrement(self) -> "FixedFraction":
        """Return ``numerator - denominator`` over the same denominator; no mutation."""
        return self._wrapped(self._numerator - self._denominator, self._denominator)

    # ------------------------------------------------------------------
    # Representation
    def to_string(self) -> str:
        return f"{self._numerator}/{self._denominator}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._numerator}, {self._denominator})"

    def __format__(self, format_spec: str) -> str:
        if format_spec in ("", "r", "R"):
            return str(self)
        try:
            return format(float(self), format_spec)
        except (ValueError, TypeError):
            return format(str(self), format_spec)

    # ------------------------------------------------------------------
    # Internal helpers
    def _coerce_scalar(self, value: Any) -> int:
        if isinstance(value, FixedFraction):
            raise TypeError(
                f"cannot combine {type(self).__name__} with {type(value).__name__}"
            )
        if isinstance(value, numbers.Integral):
            return _integers.wrap(int(value), self.denominator_type)
        raise TypeError(f"Cannot interpret {type(value)!r} as an integer scalar")

    def _binary_operation(self, other: Any, op):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(lambda x: op(self, x), otypes=[object])
            return vectorised(other)
        return op(self, other)

    def _check_in_place(self, other: Any) -> None:
        if isinstance(other, np.ndarray):
            raise TypeError("cannot assign an array into a fraction in place")

    def _assign(self, result: "FixedFraction") -> "FixedFraction":
        self._numerator = result._numerator
        self._denominator = result._denominator
        return self

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        def _add(a: "FixedFraction", b: Any) -> "FixedFraction":
            if isinstance(b, FixedFraction):
                return FixedFraction.add(a, b)
            scalar = a._coerce_scalar(b)
            return a._wrapped(a._numerator + scalar * a._denominator, a._denominator)

        return self._binary_operation(other, _add)

    def __radd__(self, other: Any) -> Any:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Any:
        def _sub(a: "FixedFraction", b: Any) -> "FixedFraction":
            if isinstance(b, FixedFraction):
                return FixedFraction.sub(a, b)
            scalar = a._coerce_scalar(b)
            return a._wrapped(a._numerator - scalar * a._denominator, a._denominator)

        return self._binary_operation(other, _sub)

    def __rsub__(self, other: Any) -> Any:
        def _rsub(a: "FixedFraction", b: Any) -> "FixedFraction":
            if isinstance(b, FixedFraction):
                return FixedFraction.sub(b, a)
            scalar = a._coerce_scalar(b)
            # Same fields as f - s.
            return a._wrapped(a._numerator - scalar * a._denominator, a._denominator)

        return self._binary_operation(other, _rsub)

    def __mul__(self, other: Any) -> Any:
        def _mul(a: "FixedFraction", b: Any) -> "FixedFraction":
            if isinstance(b, FixedFraction):
                return FixedFraction.mul(a, b)
            scalar = a._coerce_scalar(b)
            return a._wrapped(a._numerator * scalar, a._denominator)

        return self._binary_operation(other, _mul)

    def __rmul__(self, other: Any) -> Any:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Any:
        def _truediv(a: "FixedFraction", b: Any) -> "FixedFraction":
            if isinstance(b, FixedFraction):
                return FixedFraction.div(a, b)
            scalar = a._coerce_scalar(b)
            return a._wrapped(a._numerator, a._denominator * scalar)

        return self._binary_operation(other, _truediv)

    def __rtruediv__(self, other: Any) -> Any:
        def _rtruediv(a: "FixedFraction", b: Any) -> "FixedFraction":
            if isinstance(b, FixedFraction):
                return FixedFraction.div(b, a)
            scalar = a._coerce_scalar(b)
            # Same fields as f / s.
            return a._wrapped(a._numerator, a._denominator * scalar)

        return self._binary_operation(other, _rtruediv)

    def __neg__(self) -> "FixedFraction":
        # The sign goes on the denominator.
        return self._wrapped(self._numerator, -self._denominator)

    def __pos__(self) -> "FixedFraction":
        return self.copy()

    # ------------------------------------------------------------------
    # Compound assignment
    def __iadd__(self, other: Any) -> Any:
        self._check_in_place(other)
        return self._assign(self + other)

    def __isub__(self, other: Any) -> Any:
        self._check_in_place(other)
        return self._assign(self - other)

    def __imul__(self, other: Any) -> Any:
        self._check_in_place(other)
        return self._assign(self * other)

    def __itruediv__(self, other: Any) -> Any:
        self._check_in_place(other)
        return self._assign(self / other)

    # ------------------------------------------------------------------
    # Comparisons
    def _compare(self, other: Any, op) -> Any:
        if type(other) is not type(self):
            return NotImplemented
        return op(FixedFraction.cmp(self, other), 0)

    def __eq__(self, other: Any) -> Any:
        return self._compare(other, operator.eq)

    def __ne__(self, other: Any) -> Any:
        return self._compare(other, operator.ne)

    def __lt__(self, other: Any) -> Any:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> Any:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> Any:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> Any:
        return self._compare(other, operator.ge)


def fraction_type(
    numerator_type: Any,
    denominator_type: Any = None,
    *,
    name: Optional[str] = None,
) -> type:
    """Return the :class:`FixedFraction` class for the given field dtypes.

    *denominator_type* defaults to *numerator_type*. Classes are cached, so
    asking twice for the same pair yields the same class; *name* only applies
    when the class is first created.
    """
    num_dtype = _integers.as_signed_dtype(numerator_type)
    if denominator_type is None:
        den_dtype = num_dtype
    else:
        den_dtype = _integers.as_signed_dtype(denominator_type)

    key = (num_dtype, den_dtype)
    cls = _TYPE_CACHE.get(key)
    if cls is None:
        if name is None:
            name = f"FixedFraction[{num_dtype.name}, {den_dtype.name}]"
        cls = type(
            name,
            (FixedFraction,),
            {
                "__slots__": (),
                "__module__": __name__,
                "numerator_type": num_dtype,
                "denominator_type": den_dtype,
            },
        )
        _TYPE_CACHE[key] = cls
    return cls


frac8 = fraction_type(np.int8, name="frac8")
frac16 = fraction_type(np.int16, name="frac16")
frac32 = fraction_type(np.int32, name="frac32")
frac64 = fraction_type(np.int64, name="frac64")


def reduce(frac: FixedFraction) -> FixedFraction:
    """Return *frac* reduced to lowest terms without modifying it."""
    return frac.reduced()


def cmp(lhs: FixedFraction, rhs: FixedFraction) -> int:
    return FixedFraction.cmp(lhs, rhs)


def equals(lhs: FixedFraction, rhs: FixedFraction) -> bool:
    return FixedFraction.cmp(lhs, rhs) == 0


def not_equals(lhs: FixedFraction, rhs: FixedFraction) -> bool:
    return FixedFraction.cmp(lhs, rhs) != 0


def less_than(lhs: FixedFraction, rhs: FixedFraction) -> bool:
    return FixedFraction.cmp(lhs, rhs) < 0


def less_equal(lhs: FixedFraction, rhs: FixedFraction) -> bool:
    return FixedFraction.cmp(lhs, rhs) <= 0


def greater_than(lhs: FixedFraction, rhs: FixedFraction) -> bool:
    return FixedFraction.cmp(lhs, rhs) > 0


def greater_equal(lhs: FixedFraction, rhs: FixedFraction) -> bool:
    return FixedFraction.cmp(lhs, rhs) >= 0


__all__ = [
    "DEFAULT_MAX_DIGITS",
    "FixedFraction",
    "fraction_type",
    "frac8",
    "frac16",
    "frac32",
    "frac64",
    "gcd",
    "reduce",
    "cmp",
    "equals",
    "not_equals",
    "less_than",
    "less_equal",
    "greater_than",
    "greater_equal",
]
