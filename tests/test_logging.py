"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np

from gradopt.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)
from gradopt.optimize import LineSearchAscent


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "gradopt.test_module"


def test_get_logger_keeps_package_prefix():
    """Module names inside the package are not prefixed twice."""
    logger = get_logger("gradopt.optimize.line_search")
    assert logger.name == "gradopt.optimize.line_search"
    assert get_logger().name == "gradopt"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
        set_log_level("ERROR")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging():
    """Test configure_logging function."""
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        logger = get_logger("test_module")
        logger.debug("Debug message")
        assert "Debug message" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_convergence_is_logged_at_info():
    """Optimizers report convergence through their module logger."""
    stream = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=stream)
        opt = LineSearchAscent()
        opt.step(np.zeros(1), np.zeros(1), 0.0)
        assert opt.is_converged
        output = stream.getvalue()
        assert "LineSearchAscent converged" in output
        assert "gradopt.optimize.gradient" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    logger = get_logger("test_module")
    assert logger.propagate is False
