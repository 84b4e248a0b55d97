"""Mapping between maybe-NaN value types and their not-NaN counterparts.

A *family* implements the :class:`MaybeNan` protocol for one concrete value
type. Floating-point families treat IEEE NaN as the NaN state and map to the
ordered :class:`~maybenan.core.notnan.N32` / :class:`~maybenan.core.notnan.N64`
types. Optional families treat ``None`` as the NaN state and map to
:class:`~maybenan.core.not_none.NotNone`.

The family is resolved once per call from the array dtype (or passed in
explicitly), never per element.
"""

from __future__ import annotations

import logging
import numbers
from typing import Any, Protocol, runtime_checkable

import numpy as np

from .config import get_engine
from .not_none import NotNone
from .notnan import N32, N64
from .numba_utils import partition_float_nan
from .partition import check_mutable_view, partition_not_nan
from .views import NotNanView

__all__ = [
    "FLOAT32",
    "FLOAT64",
    "OPTIONAL",
    "FloatFamily",
    "MaybeNan",
    "OptionalFamily",
    "family_for",
    "from_not_nan",
    "from_not_nan_opt",
    "from_not_nan_ref_opt",
    "is_nan",
    "optional_family",
    "remove_nan_mut",
    "try_as_not_nan",
]

log = logging.getLogger("maybenan.families")


def _is_absent(value) -> bool:
    # A float NaN stored in an object array is missing, same as None.
    return value is None or (isinstance(value, numbers.Real) and value != value)


@runtime_checkable
class MaybeNan(Protocol):
    """Capability of a value type that has a NaN (or absent) state."""

    def is_nan(self, value: Any) -> bool:
        """Return ``True`` if ``value`` is in the NaN state."""

    def try_as_not_nan(self, value: Any) -> Any | None:
        """Return ``value`` as the not-NaN type, or ``None`` if it is NaN."""

    def from_not_nan(self, value: Any) -> Any:
        """Convert a not-NaN value back to the maybe-NaN type."""

    def from_not_nan_opt(self, value: Any | None) -> Any:
        """Like :meth:`from_not_nan`, mapping ``None`` to the canonical NaN."""

    def from_not_nan_ref_opt(self, value: Any | None) -> Any:
        """Like :meth:`from_not_nan_opt`, returning the shared NaN constant."""

    def remove_nan_mut(self, view: np.ndarray) -> NotNanView:
        """Partition ``view`` in place and return its non-NaN prefix."""


class FloatFamily:
    """NaN handling for ``float32`` or ``float64`` values.

    Parameters
    ----------
    dtype : dtype-like
        Floating-point dtype of the maybe-NaN values.
    not_nan_type : type
        Matching not-NaN type (``N32`` or ``N64``).
    """

    def __init__(self, dtype, not_nan_type):
        self.dtype = np.dtype(dtype)
        self.not_nan_type = not_nan_type
        self.nan = self.dtype.type("nan")

    def is_nan(self, value) -> bool:
        return bool(value != value)

    def try_as_not_nan(self, value):
        if not isinstance(value, numbers.Real):
            raise TypeError(f"Expected a real number, got {type(value).__name__}")
        if value != value:
            return None
        return self.not_nan_type._from_raw(self.dtype.type(value))

    def from_not_nan(self, value):
        if not isinstance(value, self.not_nan_type):
            raise TypeError(f"Expected {self.not_nan_type.__name__}, got {type(value).__name__}")
        return value.raw()

    def from_not_nan_opt(self, value):
        if value is None:
            return self.dtype.type("nan")
        return self.from_not_nan(value)

    def from_not_nan_ref_opt(self, value):
        if value is None:
            return self.nan
        return self.from_not_nan(value)

    def _wrap_unchecked(self, raw):
        return self.not_nan_type._from_raw(raw)

    def remove_nan_mut(self, view) -> NotNanView:
        """Partition a float view in place and return its non-NaN prefix.

        Parameters
        ----------
        view : ndarray
            Writable 1-D array of this family's dtype.

        Returns
        -------
        NotNanView
            View over ``view[:count]``, sharing memory with ``view``.
        """
        check_mutable_view(view)
        if view.dtype.type is not self.dtype.type:
            raise TypeError(f"Expected a {self.dtype.name} view, got {view.dtype.name}")

        engine = get_engine()
        if engine == "numba" and view.dtype.isnative:
            count = partition_float_nan(view)
        else:
            count = partition_not_nan(view, self.is_nan)
        log.debug("%s view of length %d: kept %d (engine=%s)", self.dtype.name, len(view), count, engine)
        return NotNanView(view[:count], self)

    def __repr__(self):
        return f"FloatFamily({self.dtype.name})"


class OptionalFamily:
    """NaN handling for optional discrete values, where ``None`` is NaN.

    Values live in ``object`` arrays. A float NaN in such an array is treated
    as absent too. Present values must be instances of ``value_type``;
    ``object`` accepts anything.

    Parameters
    ----------
    value_type : type
        Type of the present values.
    """

    dtype = np.dtype(object)
    nan = None

    def __init__(self, value_type):
        self.value_type = value_type

    def is_nan(self, value) -> bool:
        return _is_absent(value)

    def try_as_not_nan(self, value):
        if _is_absent(value):
            return None
        if not isinstance(value, self.value_type):
            raise TypeError(f"Expected {self.value_type.__name__} or None, got {type(value).__name__}")
        return NotNone._new_unchecked(value)

    def from_not_nan(self, value):
        if not isinstance(value, NotNone):
            raise TypeError(f"Expected NotNone, got {type(value).__name__}")
        inner = value.into_inner()
        if not isinstance(inner, self.value_type):
            raise TypeError(f"Expected NotNone[{self.value_type.__name__}], got NotNone[{type(inner).__name__}]")
        return inner

    def from_not_nan_opt(self, value):
        if value is None:
            return None
        return self.from_not_nan(value)

    from_not_nan_ref_opt = from_not_nan_opt

    def _wrap_unchecked(self, raw):
        return NotNone._new_unchecked(raw)

    def remove_nan_mut(self, view) -> NotNanView:
        """Partition an ``object`` view in place, moving ``None`` to the back.

        Parameters
        ----------
        view : ndarray
            Writable 1-D ``object`` array.

        Returns
        -------
        NotNanView
            View over ``view[:count]``, sharing memory with ``view``.
        """
        check_mutable_view(view)
        if view.dtype != self.dtype:
            raise TypeError(f"Expected an object view, got {view.dtype.name}")
        count = partition_not_nan(view, self.is_nan)
        log.debug("optional[%s] view of length %d: kept %d", self.value_type.__name__, len(view), count)
        return NotNanView(view[:count], self)

    def __repr__(self):
        return f"OptionalFamily({self.value_type.__name__})"


FLOAT32 = FloatFamily(np.float32, N32)
FLOAT64 = FloatFamily(np.float64, N64)
OPTIONAL = OptionalFamily(object)

_OPTIONAL_FAMILIES = {object: OPTIONAL}
for _value_type in (
    int,
    np.int8,
    np.int16,
    np.int32,
    np.int64,
    np.uint8,
    np.uint16,
    np.uint32,
    np.uint64,
    N32,
    N64,
):
    _OPTIONAL_FAMILIES[_value_type] = OptionalFamily(_value_type)
del _value_type

_FLOAT_FAMILIES = {np.float32: FLOAT32, np.float64: FLOAT64}


def optional_family(value_type) -> OptionalFamily:
    """Return the registered optional family for ``value_type``.

    Raises
    ------
    TypeError
        If no family is registered for ``value_type``.
    """
    try:
        return _OPTIONAL_FAMILIES[value_type]
    except KeyError:
        raise TypeError(f"No optional family registered for {getattr(value_type, '__name__', value_type)!r}") from None


def family_for(obj) -> MaybeNan:
    """Resolve the family for an array, dtype, or value type.

    Parameters
    ----------
    obj : ndarray, dtype, or type
        ``float32``/``float64`` arrays and dtypes resolve to the float
        families, ``object`` arrays to :data:`OPTIONAL`. ``float`` and NumPy
        floating types resolve to the float families; any other type (``int``,
        ``np.int16``, ``N64``, ...) to the optional family registered for it.

    Returns
    -------
    MaybeNan
        The family object.

    Raises
    ------
    TypeError
        If the dtype cannot represent a NaN or absent state.
    """
    if isinstance(obj, type):
        if obj is float:
            return FLOAT64
        if not issubclass(obj, np.floating):
            return optional_family(obj)

    dtype = obj.dtype if isinstance(obj, np.ndarray) else np.dtype(obj)
    if dtype.type in _FLOAT_FAMILIES:
        return _FLOAT_FAMILIES[dtype.type]
    if dtype == np.dtype(object):
        return OPTIONAL
    raise TypeError(
        f"dtype {dtype.name} cannot hold NaN or absent values; "
        "use float32/float64, or an object array with None for missing entries"
    )


def _resolve(family, value):
    if family is not None:
        return family
    if value is None:
        return OPTIONAL
    if isinstance(value, NotNone):
        return OPTIONAL
    if isinstance(value, N32):
        return FLOAT32
    if isinstance(value, float):
        return FLOAT64
    if isinstance(value, np.floating):
        return family_for(type(value))
    return OPTIONAL


def is_nan(value, family=None) -> bool:
    """Return ``True`` if ``value`` is NaN (float) or ``None`` (optional)."""
    return _resolve(family, value).is_nan(value)


def try_as_not_nan(value, family=None):
    """Return ``value`` as its not-NaN type, or ``None`` if it is NaN."""
    return _resolve(family, value).try_as_not_nan(value)


def from_not_nan(value, family=None):
    """Convert a not-NaN value back to its maybe-NaN representation."""
    return _resolve(family, value).from_not_nan(value)


def from_not_nan_opt(value, family):
    """Convert an optional not-NaN value; ``None`` maps to the family's NaN.

    ``family`` is required because ``None`` alone does not say which NaN
    to produce.
    """
    return family.from_not_nan_opt(value)


def from_not_nan_ref_opt(value, family):
    """Like :func:`from_not_nan_opt`, returning the family's shared NaN constant."""
    return family.from_not_nan_ref_opt(value)


def remove_nan_mut(view, family=None) -> NotNanView:
    """Partition ``view`` in place and return its non-NaN prefix.

    Parameters
    ----------
    view : ndarray
        Writable 1-D array of ``float32``, ``float64`` or ``object`` dtype.
    family : MaybeNan, optional
        Family to use; inferred from ``view.dtype`` when omitted.

    Returns
    -------
    NotNanView
        View over the retained prefix, sharing memory with ``view``. The order
        of its elements is unspecified but reproducible for the same input.
    """
    check_mutable_view(view)
    if family is None:
        family = family_for(view)
    return family.remove_nan_mut(view)
