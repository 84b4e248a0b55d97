"""Shared test configuration for maybenan."""

import numpy as np
import pytest

from maybenan.core.config import use_engine


@pytest.fixture(autouse=True)
def _default_engine():
    with use_engine("numba"):
        yield


@pytest.fixture
def rng():
    return np.random.default_rng(42)
