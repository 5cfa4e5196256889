"""Iterative gradient ascent optimizers driven one evaluation at a time.

Example
-------
>>> import numpy as np
>>> from gradopt.optimize import ConjugateGradient
>>> target = np.array([1.0, 2.0])
>>> w = np.zeros(2)
>>> opt = ConjugateGradient(initial_step_size=10.0)
>>> while not opt.is_converged:
...     value = -0.5 * float((w - target) @ (w - target))
...     opt.step(w, target - w, value)
>>> w.tolist()
[1.0, 2.0]
"""

from .averaging import WeightsAveraging
from .conjugate_gradient import ConjugateGradient
from .core import ALF, EPS, GradientOptimizer, OptimizeResult, Problem
from .driver import maximize
from .gradient import LineSearchAscent
from .line_search import BacktrackingLineSearch
from .stepwise import (
    RateSchedule,
    StepwiseAscent,
    constant_rate,
    exponential_decay,
    inverse_time_decay,
)

__all__ = [
    "ALF",
    "BacktrackingLineSearch",
    "ConjugateGradient",
    "EPS",
    "GradientOptimizer",
    "LineSearchAscent",
    "OptimizeResult",
    "Problem",
    "RateSchedule",
    "StepwiseAscent",
    "WeightsAveraging",
    "constant_rate",
    "exponential_decay",
    "inverse_time_decay",
    "maximize",
]
