"""Running average of the weights visited by another optimizer."""

from __future__ import annotations

from typing import Optional

from gradopt import vector as vec
from gradopt.vector import Vector

from .core import GradientOptimizer


class WeightsAveraging(GradientOptimizer):
    """Wrap ``inner`` and keep the sum of the weights seen at every step.

    The weights are added before ``inner`` mutates them, so the average
    covers the starting point and excludes the final update. Use
    ``WeightsAveraging(StepwiseAscent())`` for the averaged perceptron.
    """

    def __init__(self, inner: GradientOptimizer) -> None:
        self.inner = inner
        self._weights_sum: Optional[Vector] = None
        self._count = 0

    @property
    def is_converged(self) -> bool:
        return self.inner.is_converged

    @property
    def num_steps(self) -> int:
        return self._count

    def reset(self) -> None:
        self._weights_sum = None
        self._count = 0
        self.inner.reset()

    def step(
        self, weights: Vector, gradient: Vector, value: float, margin: float = 0.0
    ) -> None:
        if self._weights_sum is None:
            self._weights_sum = vec.copy(weights)
        else:
            vec.add_scaled(self._weights_sum, weights, 1.0)
        self._count += 1
        self.inner.step(weights, gradient, value, margin)

    def average_weights(self) -> Vector:
        """Return a new vector holding the mean of the summed weights."""
        if self._weights_sum is None:
            raise RuntimeError("average_weights() called before any step.")
        return self._weights_sum / self._count


__all__ = ["WeightsAveraging"]
