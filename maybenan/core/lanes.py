"""Per-lane NaN removal for n-dimensional arrays."""

from __future__ import annotations

import contextvars
import logging
import os
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .families import family_for

__all__ = ["remove_nan_mut_lanes"]

log = logging.getLogger("maybenan.lanes")


def remove_nan_mut_lanes(array, axis=-1, n_jobs=1, family=None):
    """Partition every 1-D lane of ``array`` along ``axis`` in place.

    Each lane is partitioned independently, exactly as
    :func:`~maybenan.core.families.remove_nan_mut` would partition it on its
    own. Lanes never overlap, so they can run in worker threads.

    Parameters
    ----------
    array : ndarray
        Writable array of ``float32``, ``float64`` or ``object`` dtype with at
        least one dimension.
    axis : int, default -1
        Axis along which the lanes run.
    n_jobs : int, default 1
        1 = sequential, -1 = all cores, >1 = that many worker threads.
    family : MaybeNan, optional
        Family to use; inferred from ``array.dtype`` when omitted.

    Returns
    -------
    list of NotNanView
        One view per lane, in C order over the remaining axes. Each view shares
        memory with ``array``.
    """
    if not isinstance(array, np.ndarray):
        raise TypeError(f"Expected a numpy.ndarray, got {type(array).__name__}")
    if array.ndim == 0:
        raise ValueError("Cannot take lanes of a 0-d array")
    if not array.flags.writeable:
        raise ValueError("Cannot partition a read-only array in place")
    if n_jobs == 0 or n_jobs < -1:
        raise ValueError(f"n_jobs must be -1 or a positive integer, got {n_jobs}")
    if family is None:
        family = family_for(array)

    moved = np.moveaxis(array, axis, -1)
    lanes = [moved[idx] for idx in np.ndindex(moved.shape[:-1])]
    max_workers = (os.cpu_count() or 1) if n_jobs == -1 else n_jobs
    workers = min(max_workers, len(lanes))
    log.debug("partitioning %d lanes of length %d (workers=%d)", len(lanes), moved.shape[-1], workers)

    if workers <= 1:
        return _partition_block(family, lanes)
    return _partition_threaded(family, lanes, workers)


def _partition_block(family, lanes):
    return [family.remove_nan_mut(lane) for lane in lanes]


def _partition_threaded(family, lanes, workers):
    """Split ``lanes`` into one contiguous block per worker and partition them.

    The numba kernels release the GIL, so float blocks run concurrently. Each
    block runs inside its own snapshot of the caller's context, so the active
    engine is the one selected with :func:`~maybenan.core.config.use_engine`.
    """
    bounds = np.linspace(0, len(lanes), workers + 1).astype(int)
    blocks = [lanes[start:stop] for start, stop in zip(bounds[:-1], bounds[1:], strict=True)]
    # A Context cannot be entered by two threads at once.
    contexts = [contextvars.copy_context() for _ in blocks]

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(ctx.run, _partition_block, family, block)
            for ctx, block in zip(contexts, blocks, strict=True)
        ]
        return [view for future in futures for view in future.result()]
