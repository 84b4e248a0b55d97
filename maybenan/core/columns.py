"""Conversion of dataframe columns into maybe-NaN arrays."""

import narwhals as nw
import numpy as np

__all__ = ["to_maybe_nan"]

_FLOAT_DTYPES = ((nw.Float32, np.float32), (nw.Float64, np.float64))
_INTEGER_DTYPES = (
    nw.Int8,
    nw.Int16,
    nw.Int32,
    nw.Int64,
    nw.UInt8,
    nw.UInt16,
    nw.UInt32,
    nw.UInt64,
)


def to_maybe_nan(column):
    """Copy a dataframe column into a writable array of maybe-NaN values.

    Float columns become float arrays with NaN for missing entries. Integer
    columns become ``object`` arrays of Python ``int`` with ``None`` for
    missing entries, whether or not any entry is missing.

    Parameters
    ----------
    column : Any
        A pandas or polars Series, or any other series narwhals supports.

    Returns
    -------
    ndarray
        Owned 1-D array, ready for ``remove_nan_mut``.

    Raises
    ------
    TypeError
        If the column type or dtype is not supported.
    """
    try:
        series = nw.from_native(column, series_only=True)
    except TypeError:
        raise TypeError(f"Expected a pandas or polars Series, got {type(column).__name__}") from None

    dtype = series.dtype
    missing = np.asarray(series.is_null().to_numpy(), dtype=bool)

    for nw_dtype, np_dtype in _FLOAT_DTYPES:
        if dtype == nw_dtype:
            out = np.array(series.fill_null(0.0).to_numpy(), dtype=np_dtype, copy=True)
            out[missing] = np.nan
            return out

    if any(dtype == nw_dtype for nw_dtype in _INTEGER_DTYPES):
        present = series.fill_null(0).to_list()
        out = np.empty(len(present), dtype=object)
        out[:] = [None if m else int(v) for m, v in zip(missing, present, strict=True)]
        return out

    raise TypeError(f"Unsupported dtype {dtype}; expected a float or integer column")
