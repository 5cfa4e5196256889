"""Invariant checks on optimizer state."""

from __future__ import annotations

import numpy as np

from gradopt import vector as vec
from gradopt.vector import Vector


def assert_finite(v: Vector, name: str = "weights") -> None:
    """
    Assert that a vector contains only finite entries.

    Parameters
    ----------
    v:
        Vector to check.
    name:
        Label used in the error message.

    Raises
    ------
    ValueError
        If any entry is NaN or infinite.
    """
    if vec.contains_nonfinite(v):
        bad = int((~np.isfinite(vec.as_array(v))).sum())
        raise ValueError(f"{name} contains {bad} non-finite value(s).")


def assert_dimensions_match(a: Vector, b: Vector, what: str = "vectors") -> None:
    """
    Assert that two vectors have the same shape.

    Raises
    ------
    ValueError
        If the shapes differ.
    """
    if not vec.dimensions_match(a, b):
        raise ValueError(
            f"{what} do not have the same dimensionality: "
            f"{tuple(a.shape)} vs {tuple(b.shape)}."
        )
