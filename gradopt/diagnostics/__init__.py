"""Diagnostics and debugging utilities for gradopt."""

from .core import assert_dimensions_match, assert_finite
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "assert_finite",
    "assert_dimensions_match",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
