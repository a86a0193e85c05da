"""Problem interfaces that connect a search vector to a model.

A problem has two jobs: lift the raw search vector ``x`` into the model's
domain input, and reduce the model's input/output pair to what the solver
drives, either a residual vector (root finding) or a scalar objective
(optimization).

Example
-------
>>> import numpy as np
>>> from simsolve.solve.problem import FunctionEquationProblem
>>> problem = FunctionEquationProblem(residual_fn=lambda inp, out: out - 9.0)
>>> problem.input(np.array([3.0]))
3.0
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike

Array = np.ndarray


def scalar_input(x: Array) -> float:
    """Default input mapping for single-variable problems."""
    return float(x[0])


@runtime_checkable
class EquationProblem(Protocol):
    """Root-finding problem: residuals are driven toward zero."""

    def input(self, x: Array) -> Any:
        ...

    def residuals(self, input: Any, output: Any) -> ArrayLike:
        ...


@runtime_checkable
class OptimizationProblem(Protocol):
    """Optimization problem: a scalar objective is minimized or maximized."""

    def input(self, x: Array) -> Any:
        ...

    def objective(self, input: Any, output: Any) -> float:
        ...


@dataclass(frozen=True)
class FunctionEquationProblem:
    """Equation problem built from plain functions."""

    residual_fn: Callable[[Any, Any], ArrayLike]
    input_fn: Callable[[Array], Any] = scalar_input

    def input(self, x: Array) -> Any:
        return self.input_fn(x)

    def residuals(self, input: Any, output: Any) -> ArrayLike:
        return self.residual_fn(input, output)


@dataclass(frozen=True)
class FunctionOptimizationProblem:
    """Optimization problem built from plain functions."""

    objective_fn: Callable[[Any, Any], float]
    input_fn: Callable[[Array], Any] = scalar_input

    def input(self, x: Array) -> Any:
        return self.input_fn(x)

    def objective(self, input: Any, output: Any) -> float:
        return self.objective_fn(input, output)


@dataclass(frozen=True)
class NegateObjective:
    """Wrap an optimization problem so that its objective changes sign.

    Minimizing the wrapped problem maximizes the original one.
    """

    problem: OptimizationProblem

    def input(self, x: Array) -> Any:
        return self.problem.input(x)

    def objective(self, input: Any, output: Any) -> float:
        return -self.problem.objective(input, output)


class Goal(Enum):
    """Optimization direction.

    Solvers always minimize internally; :meth:`transform` maps a raw
    objective to the value that is minimized.
    """

    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"

    def transform(self, value: float) -> float:
        if self is Goal.MAXIMIZE:
            return -value
        return value


__all__ = [
    "Array",
    "EquationProblem",
    "FunctionEquationProblem",
    "FunctionOptimizationProblem",
    "Goal",
    "NegateObjective",
    "OptimizationProblem",
    "scalar_input",
]
