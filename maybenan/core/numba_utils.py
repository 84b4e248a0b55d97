"""Numba-compiled kernels for float arrays."""

import numba as nb
import numpy as np

__all__ = [
    "count_float_not_nan",
    "partition_float_nan",
]


@nb.njit(cache=True, nogil=True)
def _partition_nan_impl(values):
    n = values.shape[0]
    if n == 0:
        return 0

    i = 0
    j = n - 1
    while True:
        # values[:i] holds no NaN, values[j + 1:] holds only NaN.
        while i <= j and not np.isnan(values[i]):
            i += 1
        while j > i and np.isnan(values[j]):
            j -= 1
        if i >= j:
            return i
        tmp = values[i]
        values[i] = values[j]
        values[j] = tmp
        i += 1
        j -= 1


@nb.njit(cache=True, nogil=True)
def _count_not_nan_impl(values):
    count = 0
    for k in range(values.shape[0]):
        if not np.isnan(values[k]):
            count += 1
    return count


def partition_float_nan(values):
    """Move the non-NaN entries of a float view to its front, in place.

    Runs the same two-pointer swap sequence as
    :func:`~maybenan.core.partition.partition_not_nan`, compiled.

    Parameters
    ----------
    values : ndarray
        Writable 1-D ``float32`` or ``float64`` array in native byte order.
        Strided views are partitioned through their strides; no copy is made.

    Returns
    -------
    int
        Number of non-NaN entries, which now occupy ``values[:count]``.
    """
    return int(_partition_nan_impl(values))


def count_float_not_nan(values):
    """Count the non-NaN entries of a float array of any shape.

    Parameters
    ----------
    values : ndarray
        ``float32`` or ``float64`` array.

    Returns
    -------
    int
        Number of entries that are not NaN.
    """
    flat = np.ascontiguousarray(values).reshape(-1)
    if not flat.dtype.isnative:
        flat = flat.astype(flat.dtype.newbyteorder("="))
    return int(_count_not_nan_impl(flat))
