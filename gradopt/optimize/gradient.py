"""Steepest ascent driven by backtracking line search."""

from __future__ import annotations

import math
from typing import Optional

from gradopt import vector as vec
from gradopt.logging import get_logger
from gradopt.vector import Vector

from .core import EPS, GradientOptimizer
from .line_search import BacktrackingLineSearch

logger = get_logger(__name__)


class LineSearchAscent(GradientOptimizer):
    """Move the weights along the gradient, using line search to go uphill.

    Convergence is tested on every call before any line-search work: a
    small relative change in value, or a small gradient norm, ends the
    episode.

    When a line search finishes, a new one along the gradient supplied in
    the same call is started and stepped immediately, so no evaluation is
    spent idle between directions.
    """

    def __init__(
        self,
        step_size: float = 1.0,
        gradient_tolerance: float = 1e-3,
        value_tolerance: float = 1e-4,
        eps: float = EPS,
    ) -> None:
        if step_size <= 0.0:
            raise ValueError("step_size must be positive.")
        self.step_size = float(step_size)
        self.gradient_tolerance = float(gradient_tolerance)
        self.value_tolerance = float(value_tolerance)
        self.eps = float(eps)
        self.reset()

    def reset(self) -> None:
        self._converged = False
        self.old_value = math.nan
        self.line_search: Optional[BacktrackingLineSearch] = None

    @property
    def is_converged(self) -> bool:
        return self._converged

    def step(
        self, weights: Vector, gradient: Vector, value: float, margin: float = 0.0
    ) -> None:
        if self._converged:
            return
        value = float(value)

        if 2.0 * abs(value - self.old_value) < self.value_tolerance * (
            abs(value) + abs(self.old_value) + self.eps
        ):
            logger.info(
                "LineSearchAscent converged: old value=%g new value=%g tolerance=%g",
                self.old_value,
                value,
                self.value_tolerance,
            )
            self._converged = True
            return

        gradient_norm = vec.two_norm(gradient)
        if gradient_norm < self.gradient_tolerance:
            logger.info(
                "LineSearchAscent converged: gradient norm=%g tolerance=%g",
                gradient_norm,
                self.gradient_tolerance,
            )
            self._converged = True
            return

        if self.line_search is None:
            self.line_search = BacktrackingLineSearch(gradient, self.step_size)
            self.old_value = value
        self.line_search.step(weights, gradient, value, margin)
        if not self.line_search.is_converged:
            return

        self.line_search = BacktrackingLineSearch(gradient, self.step_size)
        self.line_search.step(weights, gradient, value, margin)
        self.old_value = value


__all__ = ["LineSearchAscent"]
