"""Wrapper around an optional value that is known to be present."""

from __future__ import annotations

import functools
from typing import Generic, TypeVar

__all__ = ["NotNone"]

T = TypeVar("T")


@functools.total_ordering
class NotNone(Generic[T]):
    """An optional value that is guaranteed not to be ``None``.

    This is the not-NaN counterpart of optional discrete values: ``None``
    plays the role of NaN, and ``NotNone`` proves the value is present.
    Both public constructors check for presence, so :meth:`unwrap` never
    needs to.

    Parameters
    ----------
    value : T
        The present value. Passing ``None`` raises ``ValueError``.
    """

    __slots__ = ("_inner",)

    def __init__(self, value: T):
        if value is None:
            raise ValueError("NotNone cannot wrap an absent value")
        self._inner = value

    @classmethod
    def from_optional(cls, value: T | None) -> NotNone[T] | None:
        """Wrap ``value`` if it is present, otherwise return ``None``."""
        if value is None:
            return None
        return cls._new_unchecked(value)

    @classmethod
    def _new_unchecked(cls, value):
        # Escape hatch for callers that have already excluded None. Wrapping
        # None here breaks the guarantee behind unwrap().
        obj = object.__new__(cls)
        obj._inner = value
        return obj

    def into_inner(self) -> T | None:
        """Return the underlying optional value."""
        return self._inner

    def unwrap(self) -> T:
        """Return the wrapped value.

        No presence check is made; construction already guarantees it.
        """
        return self._inner

    def __eq__(self, other):
        if isinstance(other, NotNone):
            return self._inner == other._inner
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, NotNone):
            return self._inner < other._inner
        return NotImplemented

    def __hash__(self):
        return hash(self._inner)

    def __repr__(self):
        return f"NotNone({self._inner!r})"
