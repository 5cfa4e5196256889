"""Backtracking line search along a fixed ascent direction.

This is the ``lnsrch`` routine of Numerical Recipes turned inside out: rather
than calling the objective itself, the search is driven one evaluation at a
time through :meth:`BacktrackingLineSearch.step`, moving the caller's weights
incrementally between trial step lengths.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from gradopt import vector as vec
from gradopt.diagnostics import assert_dimensions_match
from gradopt.logging import get_logger
from gradopt.vector import Vector

from .core import ALF, GradientOptimizer, check_weights

logger = get_logger(__name__)


class BacktrackingLineSearch(GradientOptimizer):
    """Find a step along ``direction`` that gives sufficient increase.

    The first call snapshots the weights and takes the full step. Each later
    call receives the objective value at the trial point and either accepts
    it (Armijo condition), or shrinks the step by quadratic/cubic
    interpolation and moves the weights to the new trial point. When no
    useful step can be found the original weights are restored.

    An instance searches a single direction. Once converged it must be
    discarded; the owning optimizer creates a new one for the next direction.

    The step multiplier ``alam`` (see :attr:`step_size`) always starts at 1.0.
    ``initial_step_size`` only rescales the copied direction down to that
    norm when it is longer, so the first trial point is
    ``weights + direction * min(1, initial_step_size / |direction|)``. It is
    not also applied to ``alam``, which would make the first step
    ``initial_step_size ** 2`` long.

    Parameters
    ----------
    direction:
        Ascent direction. It is copied, so the caller's vector is untouched.
    initial_step_size:
        Upper bound on the norm of the first trial step. Directions shorter
        than this are used as given.
    """

    rel_tolx = 1e-7
    abs_tolx = 1e-4
    alf = ALF

    def __init__(self, direction: Vector, initial_step_size: float = 1.0) -> None:
        if initial_step_size <= 0.0:
            raise ValueError("initial_step_size must be positive.")
        self.initial_step_size = float(initial_step_size)
        self._direction = vec.copy(direction)
        self.reset()

    def reset(self) -> None:
        self.line = vec.copy(self._direction)
        self._converged = False
        # None until the first call; the slope doubles as the phase marker.
        self._slope: Optional[float] = None
        self._orig_weights: Optional[Vector] = None
        self.orig_value = math.nan
        self.old_value = math.nan
        self.alamin = math.nan
        self.alam = 1.0
        self.old_alam = 0.0
        self.alam2 = 0.0
        self._tmplam = 0.0

    @property
    def is_converged(self) -> bool:
        return self._converged

    @property
    def slope(self) -> Optional[float]:
        """Directional derivative at the origin, None before the first step."""
        return self._slope

    @property
    def step_size(self) -> float:
        """Current step length multiplier on the (capped) direction."""
        return self.alam

    def step(
        self, weights: Vector, gradient: Vector, value: float, margin: float = 0.0
    ) -> None:
        if self._converged:
            return
        value = float(value)
        if self._slope is None:
            self._start(weights, gradient, value)
        else:
            self._backtrack(weights, value)

        if self.alam < self.alamin or not vec.different(
            self._orig_weights, weights, self.abs_tolx
        ):
            vec.assign(weights, self._orig_weights)
            logger.warning(
                "Exiting backtrack: jump too small (alam=%g, alamin=%g); "
                "restoring original weights.",
                self.alam,
                self.alamin,
            )
            self._converged = True
        check_weights(weights)

    def _start(self, weights: Vector, gradient: Vector, value: float) -> None:
        assert_dimensions_match(weights, self.line, "weights and line direction")
        self._orig_weights = vec.copy(weights)

        norm = vec.two_norm(self.line)
        if norm > self.initial_step_size:
            vec.scale_(self.line, self.initial_step_size / norm)

        slope = vec.dot(gradient, self.line)
        logger.debug("Line search slope=%g", slope)
        if not slope > 0.0:
            raise ValueError(
                f"Slope={slope} is negative or zero; the direction is not ascending."
            )
        self._slope = slope

        # Converge once (delta w) / w < rel_tolx in every coordinate.
        line_a = np.abs(vec.as_array(self.line))
        weights_a = np.abs(vec.as_array(weights))
        test = float(np.max(line_a / np.maximum(weights_a, 1.0)))
        self.alamin = self.rel_tolx / test

        self.orig_value = value
        self.old_value = value
        self._move(weights)

    def _backtrack(self, weights: Vector, value: float) -> None:
        slope = self._slope
        if value >= self.orig_value + self.alf * self.alam * slope:
            if value < self.orig_value:
                raise RuntimeError(
                    f"Value did not increase: original={self.orig_value} new={value}"
                )
            logger.debug("Line search accepted step alam=%g value=%g", self.alam, value)
            self._converged = True
            return

        if not (math.isfinite(value) and math.isfinite(self.old_value)):
            # Jumped into unstable territory.
            tmplam = 0.2 * self.alam
            if self.alam < self.alamin:
                # The alamin check in step() restores the original weights.
                self._converged = True
        elif self.alam == self.old_alam:
            tmplam = self._tmplam
            self._converged = True
        else:
            tmplam = self._interpolate(value)

        self._tmplam = tmplam
        self.alam2 = self.alam
        self.old_value = value
        self.old_alam = self.alam
        self.alam = max(tmplam, 0.1 * self.alam)
        if self.alam == self.old_alam:
            self._converged = True

        if not self._converged:
            self._move(weights)

    def _interpolate(self, value: float) -> float:
        slope = self._slope
        alam, alam2 = self.alam, self.alam2
        if self.old_alam == 0.0:
            # Only the initial step has been tried: quadratic model.
            return -slope / (2.0 * (value - self.orig_value - slope))

        rhs1 = value - self.orig_value - alam * slope
        rhs2 = self.old_value - self.orig_value - alam2 * slope
        if alam == alam2:
            raise RuntimeError(f"Cannot divide by alam - alam2 (alam={alam}).")
        a = (rhs1 / (alam * alam) - rhs2 / (alam2 * alam2)) / (alam - alam2)
        b = (-alam2 * rhs1 / (alam * alam) + alam * rhs2 / (alam2 * alam2)) / (
            alam - alam2
        )
        if a == 0.0:
            tmplam = -slope / (2.0 * b) if b != 0.0 else 0.5 * alam
        else:
            disc = b * b - 3.0 * a * slope
            if disc < 0.0:
                tmplam = 0.5 * alam
            elif b <= 0.0:
                tmplam = (-b + math.sqrt(disc)) / (3.0 * a)
            else:
                tmplam = -slope / (b + math.sqrt(disc))
        if not math.isfinite(tmplam) or tmplam > 0.5 * alam:
            tmplam = 0.5 * alam
        return tmplam

    def _move(self, weights: Vector) -> None:
        factor = self.alam - self.old_alam
        logger.debug("Line search factor=%g", factor)
        vec.add_scaled(weights, self.line, factor)


__all__ = ["BacktrackingLineSearch"]
