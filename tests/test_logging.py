"""Tests for logging utilities."""

import logging
from io import StringIO

import pytest

from simsolve.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)
from simsolve.solve import FunctionEquationProblem, bisection


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging(level=logging.WARNING)


def test_get_logger_returns_prefixed_logger():
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "simsolve.test_module"


def test_get_logger_keeps_existing_prefix():
    logger = get_logger("simsolve.solve.bisection")
    assert logger.name == "simsolve.solve.bisection"
    assert get_logger(None).name == "simsolve"


def test_get_logger_caching():
    """Repeated calls return the same logger without stacking handlers."""
    logger1 = get_logger("test_module")
    handlers = list(logger1.handlers)
    logger2 = get_logger("test_module")
    assert logger1 is logger2
    assert logger2.handlers == handlers
    stream_handlers = [h for h in handlers if type(h) is logging.StreamHandler]
    assert len(stream_handlers) == 1


def test_get_logger_different_modules():
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_set_log_level():
    logger = get_logger("test_module")

    set_log_level(logging.INFO)
    assert logger.level == logging.INFO

    set_log_level("debug")
    assert logger.level == logging.DEBUG

    set_log_level("not-a-level")
    assert logger.level == logging.WARNING


def test_configure_logging_redirects_output():
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)

    logger = get_logger("test_module")
    logger.debug("Debug message")

    output = stream.getvalue()
    assert "[DEBUG] simsolve.test_module: Debug message" in output


def test_configure_logging_custom_format():
    stream = StringIO()
    configure_logging(level="INFO", format_string="%(message)s!", stream=stream)

    get_logger("test_module").info("hello")

    assert stream.getvalue() == "hello!\n"


def test_logger_does_not_propagate():
    logger = get_logger("test_module")
    assert logger.propagate is False


def test_solver_traces_at_debug_level():
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)

    problem = FunctionEquationProblem(residual_fn=lambda x, y: y - 9.0)
    bisection.solve(lambda x: x * x, problem, (0.0, 10.0))

    output = stream.getvalue()
    assert "simsolve.solve.bisection" in output
    assert "bisection finished: status=converged" in output


def test_solver_is_silent_by_default():
    stream = StringIO()
    configure_logging(level=logging.WARNING, stream=stream)

    problem = FunctionEquationProblem(residual_fn=lambda x, y: y - 9.0)
    bisection.solve(lambda x: x * x, problem, (0.0, 10.0))

    assert stream.getvalue() == ""
