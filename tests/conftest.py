"""Pytest configuration and shared fixtures for simsolve tests.

This module provides small deterministic models and problems reused across
the solver tests.
"""

from dataclasses import dataclass

import pytest

from simsolve.solve import FunctionEquationProblem, FunctionOptimizationProblem


def parabola(x: float) -> float:
    """Parabola with its minimum at x = 2."""
    return (x - 2.0) ** 2


class ThresholdError(RuntimeError):
    """Raised by :class:`ThresholdModel` above its threshold."""


@dataclass
class ThresholdModel:
    """Model that fails above ``threshold`` and otherwise applies ``fun``.

    Mimics a physical model that rejects states outside its valid range.
    """

    threshold: float
    fun: object = parabola

    def call(self, x: float) -> float:
        if x > self.threshold:
            raise ThresholdError(f"x={x} exceeds threshold {self.threshold}")
        return self.fun(x)


@dataclass
class CountingModel:
    """Wraps a function and records every input it is called with."""

    fun: object
    calls: list

    def call(self, x: float) -> float:
        self.calls.append(x)
        return self.fun(x)


@pytest.fixture
def target_problem():
    """Equation problem with residual ``output - 9``."""
    return FunctionEquationProblem(residual_fn=lambda _input, output: output - 9.0)


@pytest.fixture
def output_objective():
    """Optimization problem whose objective is the model output."""
    return FunctionOptimizationProblem(objective_fn=lambda _input, output: output)


@pytest.fixture
def counting_model():
    def factory(fun):
        return CountingModel(fun=fun, calls=[])

    return factory


@pytest.fixture
def threshold_model():
    """Factory for :class:`ThresholdModel` instances."""
    return ThresholdModel
