"""Pytest configuration and shared fixtures for pipedsp tests.

This module provides:
- Deterministic RNG fixtures for numpy
- The two reference signals used by the fixture-based filter tests
- Debug mode isolation between tests
"""

import os
from typing import Iterator, List

import numpy as np
import pytest

from pipedsp.diagnostics import is_debug_enabled, set_debug_enabled

# Reference signal with three large outliers around index 27.
_INPUT_A = [
    0.0, 1.0, 7.0, 2.0, 5.0, 8.0, 16.0, 13.0, 19.0, 6.0,
    14.0, 9.0, 9.0, 17.0, 17.0, 4.0, 12.0, 20.0, 20.0, 7.0,
    7.0, 15.0, 15.0, 10.0, 23.0, 10.0, 111.0, 180.0, 108.0, 18.0,
    106.0, 5.0, 26.0, 13.0, 13.0, 21.0, 21.0, 21.0, 34.0, 8.0,
    109.0, 8.0, 29.0, 16.0, 16.0, 16.0, 104.0, 11.0, 24.0, 24.0,
]

# Same signal with milder values at indices 7, 27 and 28.
_INPUT_B = list(_INPUT_A)
_INPUT_B[7] = 3.0
_INPUT_B[27] = 18.0
_INPUT_B[28] = 18.0


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Set the numpy global seed for every test."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture(scope="function", autouse=True)
def restore_debug_mode() -> Iterator[None]:
    """Restore the global debug flag after each test."""
    original = is_debug_enabled()
    yield
    set_debug_enabled(original)


@pytest.fixture
def input_a() -> List[float]:
    """Reference signal A (50 samples)."""
    return list(_INPUT_A)


@pytest.fixture
def input_b() -> List[float]:
    """Reference signal B (50 samples)."""
    return list(_INPUT_B)
