"""Configuration-driven construction of gradopt optimizers."""

from .factory import OptimConfig, create_optimizer

__all__ = ["OptimConfig", "create_optimizer"]
