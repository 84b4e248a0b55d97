"""Views whose elements are known not to be NaN."""

from __future__ import annotations

import operator
from typing import Generic, TypeVar

import numpy as np

__all__ = ["NotNanView"]

W = TypeVar("W")


class NotNanView(Generic[W]):
    """A 1-D window over storage that holds no NaN elements.

    The view wraps a NumPy view of the caller's buffer; elements are exposed
    as the family's not-NaN type (``N32``, ``N64`` or ``NotNone``) without
    copying the buffer. Instances are produced by ``remove_nan_mut``.

    Parameters
    ----------
    raw : ndarray
        1-D array view holding only non-NaN values.
    family : MaybeNan
        Family that maps the raw values to their not-NaN type.
    """

    __slots__ = ("_family", "_raw")

    def __init__(self, raw, family):
        self._raw = raw
        self._family = family

    @property
    def raw(self) -> np.ndarray:
        """Underlying NumPy view, sharing memory with the partitioned array."""
        return self._raw

    @property
    def family(self):
        return self._family

    @property
    def shape(self):
        return self._raw.shape

    def __len__(self):
        return self._raw.shape[0]

    def __getitem__(self, index):
        if isinstance(index, slice):
            return NotNanView(self._raw[index], self._family)
        return self._family._wrap_unchecked(self._raw[operator.index(index)])

    def __setitem__(self, index, value: W):
        self._raw[operator.index(index)] = self._family.from_not_nan(value)

    def __iter__(self):
        wrap = self._family._wrap_unchecked
        for value in self._raw:
            yield wrap(value)

    def swap(self, i, j):
        """Exchange the elements at positions ``i`` and ``j``."""
        raw = self._raw
        raw[i], raw[j] = raw[j], raw[i]

    def to_owned(self) -> NotNanView[W]:
        """Return a view over a fresh copy of the data."""
        return NotNanView(self._raw.copy(), self._family)

    def to_list(self) -> list[W]:
        return list(self)

    def __eq__(self, other):
        if not isinstance(other, NotNanView):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other, strict=True))

    __hash__ = None

    def __repr__(self):
        return f"NotNanView({self.to_list()!r})"
