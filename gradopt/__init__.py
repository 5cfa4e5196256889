"""gradopt - incremental gradient ascent optimizers over numpy and torch vectors."""

__version__ = "0.1.0"

from . import vector
from .diagnostics import (
    assert_dimensions_match,
    assert_finite,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)
from .logging import configure_logging, get_logger, set_log_level
from .optim import OptimConfig, create_optimizer
from .optimize import (
    BacktrackingLineSearch,
    ConjugateGradient,
    GradientOptimizer,
    LineSearchAscent,
    OptimizeResult,
    Problem,
    StepwiseAscent,
    WeightsAveraging,
    maximize,
)

__all__ = [
    "BacktrackingLineSearch",
    "ConjugateGradient",
    "GradientOptimizer",
    "LineSearchAscent",
    "OptimConfig",
    "OptimizeResult",
    "Problem",
    "StepwiseAscent",
    "WeightsAveraging",
    "assert_dimensions_match",
    "assert_finite",
    "configure_logging",
    "create_optimizer",
    "debug_context",
    "get_logger",
    "is_debug_enabled",
    "maximize",
    "set_debug_enabled",
    "set_log_level",
    "vector",
]
