"""Engine selection for float partitioning."""

from __future__ import annotations

import contextlib
from contextvars import ContextVar

__all__ = [
    "ENGINES",
    "get_engine",
    "set_engine",
    "use_engine",
]

ENGINES = ("numba", "python")

_active_engine: ContextVar[str] = ContextVar("maybenan_engine", default="numba")


def _validate_engine_name(name):
    name = name.lower()
    if name not in ENGINES:
        raise ValueError(f"Unknown engine {name!r}. Choose 'numba' or 'python'.")
    return name


def set_engine(name):
    """Set the engine used to partition float arrays.

    Parameters
    ----------
    name : {"numba", "python"}
        ``"numba"`` runs the compiled kernel, ``"python"`` runs the generic
        predicate-based partition. Both perform the same swaps.
    """
    _active_engine.set(_validate_engine_name(name))


def get_engine():
    """Return the name of the active engine.

    Returns
    -------
    str
        ``"numba"`` or ``"python"``.
    """
    return _active_engine.get()


@contextlib.contextmanager
def use_engine(name):
    """Context manager that temporarily activates an engine.

    The previous engine is restored when the block exits, even if an
    exception is raised. Worker threads started by
    :func:`~maybenan.core.lanes.remove_nan_mut_lanes` inherit the value set here.

    Parameters
    ----------
    name : {"numba", "python"}
        Engine to activate for the duration of the block.
    """
    token = _active_engine.set(_validate_engine_name(name))
    try:
        yield
    finally:
        _active_engine.reset(token)
