"""Folds that skip NaN elements."""

from __future__ import annotations

import numpy as np

from .families import FloatFamily, family_for
from .numba_utils import count_float_not_nan

__all__ = [
    "count_not_nan",
    "fold_skipnan",
    "max_skipnan",
    "min_skipnan",
]


def fold_skipnan(container, init, f, family=None):
    """Fold ``f`` over the non-NaN elements of ``container``.

    Elements are visited in memory order, which for non-contiguous views can
    differ from logical index order. The order is fixed for a given array and
    layout. NaN elements are skipped, never reported.

    Parameters
    ----------
    container : array_like
        Values of any dimensionality. Lists holding ``None`` become ``object``
        arrays and are treated as optional values.
    init : object
        Initial accumulator.
    f : callable
        ``f(acc, value) -> acc`` where ``value`` is the not-NaN form of each
        element (``N32``, ``N64`` or ``NotNone``).
    family : MaybeNan, optional
        Family to use; inferred from the array dtype when omitted.

    Returns
    -------
    object
        The final accumulator.
    """
    values = np.asarray(container)
    if family is None:
        family = family_for(values)

    acc = init
    for value in values.ravel(order="K"):
        not_nan = family.try_as_not_nan(value)
        if not_nan is not None:
            acc = f(acc, not_nan)
    return acc


def count_not_nan(container, family=None):
    """Count the elements of ``container`` that are not NaN.

    Parameters
    ----------
    container : array_like
        Values of any dimensionality.
    family : MaybeNan, optional
        Family to use; inferred from the array dtype when omitted.

    Returns
    -------
    int
        Number of non-NaN elements.
    """
    values = np.asarray(container)
    if family is None:
        family = family_for(values)
    if isinstance(family, FloatFamily):
        return count_float_not_nan(values)
    return fold_skipnan(values, 0, lambda acc, _: acc + 1, family=family)


def min_skipnan(container, family=None):
    """Return the smallest non-NaN element, or ``None`` if there is none.

    The result is the not-NaN form of the element (``N32``, ``N64`` or
    ``NotNone``). Ties keep the first element visited.
    """
    return fold_skipnan(container, None, lambda acc, v: v if acc is None or v < acc else acc, family=family)


def max_skipnan(container, family=None):
    """Return the largest non-NaN element, or ``None`` if there is none."""
    return fold_skipnan(container, None, lambda acc, v: v if acc is None or v > acc else acc, family=family)
