"""Polak-Ribiere conjugate gradient ascent."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from gradopt import vector as vec
from gradopt.logging import get_logger
from gradopt.vector import Vector

from .core import EPS, GradientOptimizer, value_converged
from .line_search import BacktrackingLineSearch

logger = get_logger(__name__)


class ConjugateGradient(GradientOptimizer):
    """Nonlinear conjugate gradient with backtracking line maximization.

    State follows Numerical Recipes ``frprmn``: ``xi`` is the current search
    direction, ``g`` the previous gradient and ``h`` the accumulated
    conjugate direction. Each direction is maximized by a
    :class:`BacktrackingLineSearch`; when that finishes the direction is
    updated with the Polak-Ribiere formula and a new line search is started
    and stepped in the same call.

    The backtracking search stops at the first step with sufficient
    increase, not at the maximum along the line, so the conjugate direction
    can turn downhill. When ``xi . h <= 0`` the direction falls back to the
    gradient.
    """

    def __init__(
        self,
        initial_step_size: float = 1.0,
        tolerance: float = 1e-4,
        gradient_tolerance: float = 1e-3,
        max_iterations: int = 1000,
        eps: float = EPS,
    ) -> None:
        if initial_step_size <= 0.0:
            raise ValueError("initial_step_size must be positive.")
        if max_iterations <= 0:
            raise ValueError("max_iterations must be positive.")
        self.initial_step_size = float(initial_step_size)
        self.tolerance = float(tolerance)
        self.gradient_tolerance = float(gradient_tolerance)
        self.max_iterations = int(max_iterations)
        self.eps = float(eps)
        self.reset()

    def reset(self) -> None:
        self._converged = False
        self.xi: Optional[Vector] = None
        self.g: Optional[Vector] = None
        self.h: Optional[Vector] = None
        self.old_value = math.nan
        self.gam = 0.0
        self.iterations = 0
        self.line_search: Optional[BacktrackingLineSearch] = None

    @property
    def is_converged(self) -> bool:
        return self._converged

    def _converge(self, message: str, *args: object) -> None:
        logger.info("ConjugateGradient converged: " + message, *args)
        self._converged = True

    def step(
        self, weights: Vector, gradient: Vector, value: float, margin: float = 0.0
    ) -> None:
        if self._converged:
            return
        value = float(value)

        if self.xi is None:
            gradient_norm = vec.two_norm(gradient)
            if gradient_norm < self.gradient_tolerance:
                self._converge("initial gradient norm=%g", gradient_norm)
                return
            self.xi = vec.copy(gradient)
            self.g = vec.copy(gradient)
            self.h = vec.copy(gradient)
            self.old_value = value

        if self.line_search is None:
            self.line_search = BacktrackingLineSearch(self.xi, self.initial_step_size)
        self.line_search.step(weights, gradient, value, margin)
        if not self.line_search.is_converged:
            return
        self.line_search = None
        self.xi = vec.copy(gradient)

        # Termination rule from Numerical Recipes.
        if value_converged(value, self.old_value, self.tolerance, self.eps):
            self._converge(
                "old value=%g new value=%g tolerance=%g",
                self.old_value,
                value,
                self.tolerance,
            )
            return
        xi_norm = vec.two_norm(self.xi)
        if xi_norm < self.gradient_tolerance:
            self._converge(
                "gradient norm=%g tolerance=%g", xi_norm, self.gradient_tolerance
            )
            return

        self.old_value = value

        xi_a = vec.as_array(self.xi)
        g_a = vec.as_array(self.g)
        gg = float(np.dot(g_a, g_a))
        dgg = float(np.dot(xi_a, xi_a - g_a))
        if gg == 0.0:
            self._converge("previous gradient is exactly zero")
            return
        self.gam = dgg / gg
        vec.assign(self.g, self.xi)
        vec.scale_(self.h, self.gam)
        vec.add_scaled(self.h, self.g, 1.0)
        if vec.contains_nonfinite(self.h):
            raise RuntimeError(
                f"Conjugate direction contains non-finite values (gam={self.gam})."
            )

        if vec.dot(self.xi, self.h) > 0.0:
            vec.assign(self.xi, self.h)
        else:
            logger.debug("Conjugate direction not ascending; resetting to gradient.")
            vec.assign(self.h, self.xi)

        self.iterations += 1
        if self.iterations >= self.max_iterations:
            self._converge("reached max_iterations=%d", self.max_iterations)
            return

        self.line_search = BacktrackingLineSearch(self.xi, self.initial_step_size)
        self.line_search.step(weights, gradient, value, margin)


__all__ = ["ConjugateGradient"]
