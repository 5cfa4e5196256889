"""Evaluation loop tying a :class:`Problem` to a :class:`GradientOptimizer`."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np
import torch

from gradopt import vector as vec
from gradopt.logging import get_logger
from gradopt.vector import Vector

from .core import GradientOptimizer, OptimizeResult, Problem

logger = get_logger(__name__)


def _as_vector(x0: Vector) -> Vector:
    if isinstance(x0, torch.Tensor):
        return vec.copy(x0)
    return np.array(x0, dtype=float)


def _evaluate(problem: Problem, x: Vector) -> tuple[float, Vector]:
    value = float(problem.fun(x))
    grad = problem.grad(x)
    if not isinstance(grad, torch.Tensor):
        grad = np.asarray(grad, dtype=float)
    return value, grad


def maximize(
    optimizer: GradientOptimizer,
    problem: Problem,
    x0: Vector,
    maxiter: int = 1000,
    callback: Optional[Callable[[Vector, float, Vector], None]] = None,
    history: bool = False,
) -> OptimizeResult:
    """Run ``optimizer`` on ``problem`` starting from ``x0``.

    Each iteration hands the optimizer the value and gradient at the current
    point, then re-evaluates both at the mutated point. The loop stops when
    the optimizer reports convergence or after ``maxiter`` steps. ``x0`` is
    not modified.

    Example
    -------
    >>> import numpy as np
    >>> from gradopt.optimize import LineSearchAscent, Problem, maximize
    >>> problem = Problem(fun=lambda w: -float((w[0] - 3.0) ** 2),
    ...                   grad=lambda w: -2.0 * (w - 3.0))
    >>> res = maximize(LineSearchAscent(), problem, np.array([0.0]))
    >>> bool(res.success), float(res.x[0])
    (True, 3.0)
    """
    if maxiter <= 0:
        raise ValueError("maxiter must be positive.")
    if problem.dim is not None and np.size(x0) != problem.dim:
        raise ValueError(
            f"x0 has {np.size(x0)} elements but problem.dim is {problem.dim}."
        )
    x = _as_vector(x0)
    hist: list[Vector] = []
    if history:
        hist.append(vec.copy(x))

    fx, grad = _evaluate(problem, x)
    nfev = 1
    njev = 1
    nit = 0
    while nit < maxiter and not optimizer.is_converged:
        optimizer.step(x, grad, fx)
        nit += 1
        fx, grad = _evaluate(problem, x)
        nfev += 1
        njev += 1
        if callback is not None:
            callback(vec.copy(x), fx, vec.copy(grad))
        if history:
            hist.append(vec.copy(x))

    success = optimizer.is_converged
    message = "Optimizer converged." if success else "Maximum iterations reached."
    logger.info("maximize finished after %d steps: %s", nit, message)
    return OptimizeResult(
        x=x,
        fun=fx,
        nit=nit,
        success=success,
        message=message,
        grad_norm=vec.two_norm(grad),
        nfev=nfev,
        njev=njev,
        history=hist,
    )


__all__ = ["maximize"]
