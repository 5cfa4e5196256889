"""Dense vector operations used by the optimizers.

Optimizers never own the weight vector; they operate on whatever the caller
hands them. Both ``numpy.ndarray`` and ``torch.Tensor`` are supported, and all
functions below dispatch on the type of their first argument. Mixing the two
kinds within one call is rejected.
"""

from __future__ import annotations

from typing import Union

import numpy as np
import torch

Vector = Union[np.ndarray, torch.Tensor]


def _check_vector(v: Vector) -> None:
    if isinstance(v, torch.Tensor):
        if not torch.is_floating_point(v):
            raise TypeError(f"Expected a floating-point tensor, got dtype {v.dtype}.")
    elif isinstance(v, np.ndarray):
        if not np.issubdtype(v.dtype, np.floating):
            raise TypeError(f"Expected a floating-point array, got dtype {v.dtype}.")
    else:
        raise TypeError(
            f"Unsupported vector type {type(v).__name__}; "
            "expected numpy.ndarray or torch.Tensor."
        )


def _check_pair(a: Vector, b: Vector) -> None:
    _check_vector(a)
    _check_vector(b)
    if isinstance(a, torch.Tensor) != isinstance(b, torch.Tensor):
        raise TypeError("Cannot mix numpy arrays and torch tensors in one operation.")


def _require_match(a: Vector, b: Vector) -> None:
    if not dimensions_match(a, b):
        raise ValueError(
            f"Vector shapes do not match: {tuple(a.shape)} vs {tuple(b.shape)}."
        )


def copy(v: Vector) -> Vector:
    """Return a deep copy of ``v``."""
    _check_vector(v)
    if isinstance(v, torch.Tensor):
        return v.detach().clone()
    return v.copy()


def zeros_like(v: Vector) -> Vector:
    _check_vector(v)
    if isinstance(v, torch.Tensor):
        return torch.zeros_like(v)
    return np.zeros_like(v)


def add_scaled(v: Vector, other: Vector, scale: float = 1.0) -> None:
    """In-place ``v += other * scale``."""
    _check_pair(v, other)
    _require_match(v, other)
    if isinstance(v, torch.Tensor):
        with torch.no_grad():
            v.add_(other, alpha=float(scale))
    else:
        v += other * float(scale)


def scale_(v: Vector, factor: float) -> None:
    """In-place ``v *= factor``."""
    _check_vector(v)
    if isinstance(v, torch.Tensor):
        with torch.no_grad():
            v.mul_(float(factor))
    else:
        v *= float(factor)


def assign(v: Vector, other: Vector) -> None:
    """Overwrite the contents of ``v`` with ``other`` without reallocating."""
    _check_pair(v, other)
    _require_match(v, other)
    if isinstance(v, torch.Tensor):
        with torch.no_grad():
            v.copy_(other)
    else:
        v[...] = other


def dot(a: Vector, b: Vector) -> float:
    _check_pair(a, b)
    _require_match(a, b)
    if isinstance(a, torch.Tensor):
        return float(torch.sum(a.detach() * b.detach()).item())
    return float(np.dot(a.ravel(), b.ravel()))


def two_norm(v: Vector) -> float:
    """Euclidean norm of ``v`` as a Python float."""
    _check_vector(v)
    if isinstance(v, torch.Tensor):
        return float(torch.linalg.vector_norm(v.detach()).item())
    return float(np.linalg.norm(v.ravel()))


def as_array(v: Vector) -> np.ndarray:
    """Flat float64 numpy view of ``v`` for element-wise iteration.

    For torch tensors this is a host copy; writes to it do not reach ``v``.
    """
    _check_vector(v)
    if isinstance(v, torch.Tensor):
        return v.detach().cpu().reshape(-1).to(torch.float64).numpy()
    return np.asarray(v, dtype=np.float64).reshape(-1)


def dimensions_match(a: Vector, b: Vector) -> bool:
    _check_pair(a, b)
    return tuple(a.shape) == tuple(b.shape)


def different(a: Vector, b: Vector, atol: float) -> bool:
    """Return True if any element of ``a`` and ``b`` differs by more than ``atol``."""
    _check_pair(a, b)
    _require_match(a, b)
    if isinstance(a, torch.Tensor):
        return bool(torch.any(torch.abs(a.detach() - b.detach()) > atol).item())
    return bool(np.any(np.abs(a - b) > atol))


def contains_nonfinite(v: Vector) -> bool:
    _check_vector(v)
    if isinstance(v, torch.Tensor):
        return not bool(torch.all(torch.isfinite(v.detach())).item())
    return not bool(np.all(np.isfinite(v)))


__all__ = [
    "Vector",
    "add_scaled",
    "as_array",
    "assign",
    "contains_nonfinite",
    "copy",
    "different",
    "dimensions_match",
    "dot",
    "scale_",
    "two_norm",
    "zeros_like",
]
