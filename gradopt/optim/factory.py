"""Factory for creating gradient ascent optimizers from configuration."""

from __future__ import annotations

from dataclasses import dataclass

from gradopt.optimize import (
    ConjugateGradient,
    GradientOptimizer,
    LineSearchAscent,
    StepwiseAscent,
    WeightsAveraging,
)


@dataclass(frozen=True)
class OptimConfig:
    """
    Configuration for creating a gradient ascent optimizer.

    Fields an optimizer does not use are ignored.

    Args:
        name: Optimizer name. Supported values: "stepwise", "line_search",
            "conjugate_gradient".
        step_size: Initial step size bound for the line-search optimizers.
            Must be positive.
        rate: Rate for "stepwise". Must be positive.
        tolerance: Relative value tolerance for "conjugate_gradient".
        gradient_tolerance: Gradient norm below which the line-search
            optimizers stop.
        value_tolerance: Relative value tolerance for "line_search".
        max_iterations: Maximum number of directions for
            "conjugate_gradient".
        averaged: Wrap the optimizer in WeightsAveraging.
    """

    name: str
    step_size: float = 1.0
    rate: float = 1.0
    tolerance: float = 1e-4
    gradient_tolerance: float = 1e-3
    value_tolerance: float = 1e-4
    max_iterations: int = 1000
    averaged: bool = False


def create_optimizer(config: OptimConfig) -> GradientOptimizer:
    """
    Create an optimizer from a configuration.

    Args:
        config: Optimizer configuration.

    Returns:
        A GradientOptimizer, wrapped in WeightsAveraging if
        ``config.averaged`` is set.

    Raises:
        ValueError: If the optimizer name is not supported or if the step
            size or rate is not positive.
    """
    if config.step_size <= 0.0:
        raise ValueError("Step size must be positive.")
    if config.rate <= 0.0:
        raise ValueError("Rate must be positive.")

    name_lower = config.name.lower()

    optimizer: GradientOptimizer
    if name_lower == "stepwise":
        optimizer = StepwiseAscent(rate=config.rate)
    elif name_lower == "line_search":
        optimizer = LineSearchAscent(
            step_size=config.step_size,
            gradient_tolerance=config.gradient_tolerance,
            value_tolerance=config.value_tolerance,
        )
    elif name_lower == "conjugate_gradient":
        optimizer = ConjugateGradient(
            initial_step_size=config.step_size,
            tolerance=config.tolerance,
            gradient_tolerance=config.gradient_tolerance,
            max_iterations=config.max_iterations,
        )
    else:
        supported = ["stepwise", "line_search", "conjugate_gradient"]
        raise ValueError(
            f"Unsupported optimizer name '{config.name}'. "
            f"Supported names: {supported}"
        )

    if config.averaged:
        return WeightsAveraging(optimizer)
    return optimizer
