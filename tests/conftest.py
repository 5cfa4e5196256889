"""Pytest configuration and shared fixtures for gradopt tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Small objectives shared by the optimizer tests
"""

import os

import numpy as np
import pytest
import torch


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    np.random.seed(seed)
    torch.manual_seed(seed)


@pytest.fixture(scope="function", autouse=True)
def debug_off() -> None:
    """Run every test with debug mode off unless the test enables it."""
    from gradopt.diagnostics import debug_context

    with debug_context(False):
        yield
