"""Debug mode management for gradopt.

While debug mode is on, every weight update made by ``StepwiseAscent`` or by
a ``BacktrackingLineSearch`` (and so by the optimizers built on it) ends with
:func:`gradopt.diagnostics.assert_finite` on the weight vector. A NaN or
infinite weight then raises ``ValueError`` at the step that produced it.
The flag starts from the ``GRADOPT_DEBUG`` environment variable ("1",
"true", "yes" or "on" enable it).
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_DEBUG_ENV_VAR = "GRADOPT_DEBUG"
_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").lower() in (
    "1",
    "true",
    "yes",
    "on",
)


def is_debug_enabled() -> bool:
    """
    Return whether gradopt debug mode is currently enabled.

    Debug mode can be toggled via set_debug_enabled(...) or the
    GRADOPT_DEBUG environment variable. While it is on, every optimizer
    checks the weight vector for non-finite entries after each step.

    Returns
    -------
    bool
        True if debug mode is enabled, False otherwise.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Globally enable or disable gradopt debug mode.

    Enabling it makes optimizer steps raise ValueError as soon as the
    weights contain NaN or inf, instead of carrying them into later steps.

    Parameters
    ----------
    enabled:
        Whether to enable debug mode.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Context manager to temporarily enable or disable debug mode.

    The previous setting is restored on exit, also when the block raises.

    Example
    -------
    >>> with debug_context(True):
    ...     # non-finite weights raise ValueError inside the block
    ...     pass
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev
