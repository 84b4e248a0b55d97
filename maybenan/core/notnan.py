"""Ordered floating-point types that cannot hold NaN."""

from __future__ import annotations

import numbers

import numpy as np

__all__ = ["N32", "N64"]


class _NotNanFloat(float):
    """Base for floats that are guaranteed not to be NaN.

    Instances are plain Python floats, so they compare, hash and order like
    the raw value they hold. Construction and arithmetic reject NaN results.
    Subclasses set ``_raw_type`` to the NumPy scalar type they mirror.
    """

    __slots__ = ()
    _raw_type: type[np.floating] = np.float64

    def __new__(cls, value):
        if not isinstance(value, numbers.Real):
            raise TypeError(f"{cls.__name__} requires a real number, got {type(value).__name__}")
        raw = cls._raw_type(value)
        if np.isnan(raw):
            raise ValueError(f"{cls.__name__} cannot hold a NaN value")
        return float.__new__(cls, raw)

    @classmethod
    def _from_raw(cls, raw):
        # Caller has already checked that raw is not NaN.
        return float.__new__(cls, raw)

    def raw(self):
        """Return the value as the NumPy scalar type it was built from."""
        return self._raw_type(self)

    def _checked(self, result):
        if result is NotImplemented:
            return result
        return type(self)(result)

    def __add__(self, other):
        return self._checked(float.__add__(self, other))

    def __radd__(self, other):
        return self._checked(float.__radd__(self, other))

    def __sub__(self, other):
        return self._checked(float.__sub__(self, other))

    def __rsub__(self, other):
        return self._checked(float.__rsub__(self, other))

    def __mul__(self, other):
        return self._checked(float.__mul__(self, other))

    def __rmul__(self, other):
        return self._checked(float.__rmul__(self, other))

    def __truediv__(self, other):
        return self._checked(float.__truediv__(self, other))

    def __rtruediv__(self, other):
        return self._checked(float.__rtruediv__(self, other))

    def __neg__(self):
        return type(self)._from_raw(float.__neg__(self))

    def __abs__(self):
        return type(self)._from_raw(float.__abs__(self))

    def __repr__(self):
        return f"{type(self).__name__}({float.__repr__(self)})"


class N32(_NotNanFloat):
    """Single-precision float that is never NaN.

    The stored value is rounded to ``float32`` on construction and after
    every arithmetic operation, so ``N32(x).raw()`` always round-trips to the
    same ``np.float32`` bits.
    """

    __slots__ = ()
    _raw_type = np.float32


class N64(_NotNanFloat):
    """Double-precision float that is never NaN."""

    __slots__ = ()
    _raw_type = np.float64
