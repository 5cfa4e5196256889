"""Fixed or decaying rate gradient ascent."""

from __future__ import annotations

from typing import Callable

from gradopt import vector as vec
from gradopt.vector import Vector

from .core import GradientOptimizer, check_weights

RateSchedule = Callable[[float], float]
"""
A RateSchedule maps the rate used in the current step to the rate for the
next one.
"""


def constant_rate(rate: float) -> float:
    """Keep the rate unchanged."""
    return rate


def exponential_decay(gamma: float) -> RateSchedule:
    """
    Build a schedule multiplying the rate by ``gamma`` after every step.

    Raises
    ------
    ValueError
        If gamma is not in (0, 1].
    """
    if not 0.0 < gamma <= 1.0:
        raise ValueError("gamma must lie in (0, 1].")

    def schedule(rate: float) -> float:
        return rate * gamma

    return schedule


def inverse_time_decay(decay: float) -> RateSchedule:
    """
    Build a schedule with ``1 / rate`` growing by ``decay`` every step.

    Starting from ``rate0`` the rate after ``t`` steps is
    ``rate0 / (1 + decay * rate0 * t)``.

    Raises
    ------
    ValueError
        If decay is negative.
    """
    if decay < 0.0:
        raise ValueError("decay must be non-negative.")

    def schedule(rate: float) -> float:
        return rate / (1.0 + decay * rate)

    return schedule


class StepwiseAscent(GradientOptimizer):
    """Add ``gradient * rate`` to the weights on every step.

    Never converges; the caller decides when to stop. Wrapping it in
    :class:`~gradopt.optimize.averaging.WeightsAveraging` gives the averaged
    perceptron.
    """

    def __init__(self, rate: float = 1.0, schedule: RateSchedule = constant_rate):
        self.initial_rate = float(rate)
        self.schedule = schedule
        self.rate = self.initial_rate

    @property
    def is_converged(self) -> bool:
        return False

    def reset(self) -> None:
        self.rate = self.initial_rate

    def step(
        self, weights: Vector, gradient: Vector, value: float, margin: float = 0.0
    ) -> None:
        vec.add_scaled(weights, gradient, self.rate)
        self.rate = self.schedule(self.rate)
        check_weights(weights)


__all__ = [
    "RateSchedule",
    "StepwiseAscent",
    "constant_rate",
    "exponential_decay",
    "inverse_time_decay",
]
