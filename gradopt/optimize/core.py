"""Core interfaces shared across the gradient ascent optimizers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from gradopt.diagnostics import assert_finite, is_debug_enabled
from gradopt.vector import Vector

Objective = Callable[[Vector], float]
Gradient = Callable[[Vector], Vector]

# Armijo constant for the sufficient-increase test.
ALF = 1e-4
EPS = 1e-10


class GradientOptimizer(ABC):
    """Maximizes an objective by repeated calls to :meth:`step`.

    The caller owns the weight vector. Each call supplies the gradient and
    value of the objective at the current weights; the optimizer mutates the
    weights in place and returns nothing. After the first call the caller
    must re-evaluate value and gradient at the mutated weights before calling
    again. Call ``step`` until :attr:`is_converged` is true.

    ``margin`` is reserved for margin-based training objectives. None of the
    optimizers in this package read it.
    """

    @abstractmethod
    def step(
        self, weights: Vector, gradient: Vector, value: float, margin: float = 0.0
    ) -> None:
        """Mutate ``weights`` in place. A no-op once converged."""

    @property
    @abstractmethod
    def is_converged(self) -> bool:
        """True once no further mutation will happen in this episode."""

    @abstractmethod
    def reset(self) -> None:
        """Drop all episode state. Configuration is kept."""


def check_weights(weights: Vector) -> None:
    """Run the debug-mode invariant checks on ``weights``."""
    if is_debug_enabled():
        assert_finite(weights, "weights")


def value_converged(
    value: float, old_value: float, tolerance: float, eps: float = EPS
) -> bool:
    """Relative change test ``2|v - v_old| <= tol * (|v| + |v_old| + eps)``.

    Always False while ``old_value`` is NaN.
    """
    return 2.0 * abs(value - old_value) <= tolerance * (
        abs(value) + abs(old_value) + eps
    )


@dataclass(frozen=True)
class Problem:
    """Objective to maximize together with its gradient."""

    fun: Objective
    grad: Gradient
    dim: Optional[int] = None


@dataclass
class OptimizeResult:
    """Result returned by :func:`gradopt.optimize.maximize`."""

    x: Vector
    fun: float
    nit: int
    success: bool
    message: str
    grad_norm: float
    nfev: int
    njev: int
    history: List[Vector] = field(default_factory=list)


__all__ = [
    "ALF",
    "EPS",
    "Gradient",
    "GradientOptimizer",
    "Objective",
    "OptimizeResult",
    "Problem",
    "check_weights",
    "value_converged",
]
