"""In-place partition that moves non-NaN elements to the front of a view."""

from __future__ import annotations

import logging

import numpy as np

__all__ = ["check_mutable_view", "partition_not_nan"]

log = logging.getLogger("maybenan.partition")


def check_mutable_view(view):
    """Validate that ``view`` can be partitioned in place.

    Parameters
    ----------
    view : ndarray
        Candidate view.

    Returns
    -------
    ndarray
        The same object, unchanged.

    Raises
    ------
    TypeError
        If ``view`` is not a NumPy array.
    ValueError
        If ``view`` is not one-dimensional or is read-only.
    """
    if not isinstance(view, np.ndarray):
        raise TypeError(f"Expected a numpy.ndarray view, got {type(view).__name__}")
    if view.ndim != 1:
        raise ValueError(f"Expected a 1-D view, got an array with ndim={view.ndim}")
    if not view.flags.writeable:
        raise ValueError("Cannot partition a read-only view in place")
    return view


def partition_not_nan(view, is_nan):
    """Partition ``view`` in place so that non-NaN elements come first.

    Two indices converge from both ends. Elements already on the correct
    side are skipped; a NaN on the left is swapped with a non-NaN on the
    right. The resulting order of the non-NaN elements is unspecified but
    the same for the same input, and re-running on the result swaps nothing.

    Parameters
    ----------
    view : ndarray
        Writable 1-D array view. It is modified in place.
    is_nan : callable
        Predicate returning ``True`` for elements to move to the back.

    Returns
    -------
    int
        Number of non-NaN elements; they occupy ``view[:count]``.
    """
    n = len(view)
    if n == 0:
        return 0

    i = 0
    j = n - 1
    swaps = 0
    while True:
        # view[:i] holds no NaN, view[j + 1:] holds only NaN.
        while i <= j and not is_nan(view[i]):
            i += 1
        while j > i and is_nan(view[j]):
            j -= 1
        if i >= j:
            log.debug("partitioned %d elements: kept %d with %d swaps", n, i, swaps)
            return i
        view[i], view[j] = view[j], view[i]
        swaps += 1
        i += 1
        j -= 1
