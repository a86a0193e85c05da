"""Compose problem and model into a single fallible evaluation.

Each evaluation runs three steps:

1. ``input = problem.input(x)``; a failure raises :class:`InputError`.
2. ``output = model.call(input)``; a failure raises :class:`ModelError`.
3. residuals or objective from ``(input, output)``; a failure raises
   :class:`ProblemError`.

Nothing is returned unless all three steps succeed and the result is finite,
so a partially built evaluation is never observable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import numpy as np
from numpy.typing import ArrayLike

from ..errors import (
    InputError,
    ModelError,
    NonFiniteObjectiveError,
    NonFiniteResidualError,
    ProblemError,
)
from ..model import Model, Snapshot
from .problem import Array, EquationProblem, OptimizationProblem

I = TypeVar("I")
O = TypeVar("O")


def _frozen(values: ArrayLike) -> Array:
    arr = np.array(values, dtype=float, ndmin=1)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class EquationEvaluation(Generic[I, O]):
    """Search vector, snapshot and residuals of one equation evaluation."""

    x: Array
    residuals: Array
    snapshot: Snapshot[I, O]

    @property
    def residual(self) -> float:
        """The first (for single-variable problems, the only) residual."""
        return float(self.residuals[0])


@dataclass(frozen=True, eq=False)
class ObjectiveEvaluation(Generic[I, O]):
    """Search vector, snapshot and objective of one optimization evaluation."""

    x: Array
    objective: float
    snapshot: Snapshot[I, O]


def _call(model: Model, problem: Any, x: Array) -> tuple[Any, Any]:
    first = float(x[0])
    try:
        input = problem.input(x)
    except Exception as err:
        raise InputError(first, err) from err
    try:
        output = model.call(input)
    except Exception as err:
        raise ModelError(first, err) from err
    return input, output


def evaluate_residuals(
    model: Model, problem: EquationProblem, x: ArrayLike
) -> EquationEvaluation:
    """Evaluate an equation problem at ``x``.

    The problem must return exactly one residual per search variable.

    Raises:
        InputError: ``problem.input`` raised.
        ModelError: ``model.call`` raised.
        ProblemError: ``problem.residuals`` raised or returned the wrong
            number of residuals.
        NonFiniteResidualError: A residual is NaN or infinite.
    """
    x = _frozen(x)
    input, output = _call(model, problem, x)
    first = float(x[0])
    try:
        residuals = _frozen(problem.residuals(input, output))
    except Exception as err:
        raise ProblemError(first, err) from err

    if residuals.shape != x.shape:
        raise ProblemError(
            first,
            ValueError(
                f"expected {x.size} residual(s), got shape {residuals.shape}"
            ),
        )
    finite = np.isfinite(residuals)
    if not finite.all():
        raise NonFiniteResidualError(first, float(residuals[~finite][0]))

    return EquationEvaluation(x=x, residuals=residuals, snapshot=Snapshot(input, output))


def evaluate_objective(
    model: Model, problem: OptimizationProblem, x: ArrayLike
) -> ObjectiveEvaluation:
    """Evaluate an optimization problem at ``x``.

    Raises:
        InputError: ``problem.input`` raised.
        ModelError: ``model.call`` raised.
        ProblemError: ``problem.objective`` raised.
        NonFiniteObjectiveError: The objective is NaN or infinite.
    """
    x = _frozen(x)
    input, output = _call(model, problem, x)
    first = float(x[0])
    try:
        objective = float(problem.objective(input, output))
    except Exception as err:
        raise ProblemError(first, err) from err
    if not math.isfinite(objective):
        raise NonFiniteObjectiveError(first, objective)

    return ObjectiveEvaluation(x=x, objective=objective, snapshot=Snapshot(input, output))


__all__ = [
    "EquationEvaluation",
    "ObjectiveEvaluation",
    "evaluate_objective",
    "evaluate_residuals",
]
