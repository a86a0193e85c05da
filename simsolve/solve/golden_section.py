"""Golden-section search for single-variable optimization.

Golden-section search finds a minimum (or maximum) of a unimodal objective on
a bounded interval. Two interior points are positioned by the golden ratio;
the bracket shrinks away from the worse of the two, and the surviving
interior point is reused, so every iteration costs exactly one evaluation.

Observer events
---------------
One event is emitted per evaluation after the first:

- :class:`Evaluated` when the evaluation succeeded;
- :class:`ModelFailed` when the model raised;
- :class:`ProblemFailed` when the problem raised (input or objective).

Each event carries ``other``, the interior point the new one is compared
against. Initialization evaluates two points but only the second is
reported, since the first has no ``other`` yet.

An observer may return ``Action.STOP_EARLY`` to halt with the best point so
far, or ``Action.ASSUME_WORSE`` to rank the point below every real
evaluation. An assumed-worse point keeps its place in the bracket but is
never reported as the solution. Without an action, a failure is re-raised.

Example
-------
>>> from simsolve.solve.golden_section import minimize
>>> from simsolve.solve.problem import FunctionOptimizationProblem
>>> problem = FunctionOptimizationProblem(objective_fn=lambda x, y: y)
>>> sol = minimize(lambda x: (x - 2.0) ** 2, problem, (0.0, 10.0))
>>> round(sol.x, 6)
2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union

from ..errors import EvaluationError, ModelError
from ..logging import get_logger
from ..model import Model, Snapshot, as_model
from .core import (
    DEFAULT_MAX_ITERS,
    DEFAULT_X_ABS_TOL,
    DEFAULT_X_REL_TOL,
    Observer,
    Status,
    check_max_iters,
    check_tolerance,
    is_x_converged,
    no_op_observer,
    order_bounds,
)
from .evaluate import ObjectiveEvaluation, evaluate_objective
from .problem import Goal, OptimizationProblem

logger = get_logger(__name__)

PHI = (1.0 + math.sqrt(5.0)) / 2.0
INV_PHI = PHI - 1.0


class Action(Enum):
    """Control actions an observer may return during golden-section search."""

    STOP_EARLY = "stop_early"
    ASSUME_WORSE = "assume_worse"


@dataclass(frozen=True)
class Config:
    """
    Golden-section solver configuration.

    Args:
        max_iters: Maximum number of bracket shrinks (one evaluation each).
        x_abs_tol: Absolute bracket-width tolerance.
        x_rel_tol: Bracket-width tolerance relative to ``|midpoint|``.
    """

    max_iters: int = DEFAULT_MAX_ITERS
    x_abs_tol: float = DEFAULT_X_ABS_TOL
    x_rel_tol: float = DEFAULT_X_REL_TOL

    def validate(self) -> None:
        """Raise :class:`~simsolve.errors.InvalidConfigError` if invalid."""
        check_max_iters(self.max_iters)
        check_tolerance("x_abs_tol", self.x_abs_tol)
        check_tolerance("x_rel_tol", self.x_rel_tol)


@dataclass(frozen=True)
class GoldenBracket:
    """Outer bounds and the two golden-ratio interior points.

    Invariant: ``left < inner_left < inner_right < right``.
    """

    left: float
    right: float
    inner_left: float
    inner_right: float

    @classmethod
    def from_bounds(cls, left: float, right: float) -> "GoldenBracket":
        # Convex combinations stay finite for any finite bounds.
        return cls(
            left=left,
            right=right,
            inner_left=INV_PHI * left + (1.0 - INV_PHI) * right,
            inner_right=(1.0 - INV_PHI) * left + INV_PHI * right,
        )

    @property
    def width(self) -> float:
        return self.right - self.left

    def midpoint(self) -> float:
        return 0.5 * self.left + 0.5 * self.right

    def next_inner_left(self) -> float:
        """``inner_left`` of :meth:`shrink_right`, without building it."""
        return INV_PHI * self.left + (1.0 - INV_PHI) * self.inner_right

    def next_inner_right(self) -> float:
        """``inner_right`` of :meth:`shrink_left`, without building it."""
        return (1.0 - INV_PHI) * self.inner_left + INV_PHI * self.right

    def shrink_right(self) -> "GoldenBracket":
        """Drop ``right``; the old ``inner_left`` becomes ``inner_right``."""
        return replace(
            self,
            right=self.inner_right,
            inner_right=self.inner_left,
            inner_left=self.next_inner_left(),
        )

    def shrink_left(self) -> "GoldenBracket":
        """Drop ``left``; the old ``inner_right`` becomes ``inner_left``."""
        return replace(
            self,
            left=self.inner_left,
            inner_left=self.inner_right,
            inner_right=self.next_inner_right(),
        )


@dataclass(frozen=True)
class Point:
    """An evaluated location and its raw objective.

    ``assumed_worse`` marks a point the observer ranked below every real
    evaluation. Its ``objective`` holds the goal's worst value (``+inf`` when
    minimizing, ``-inf`` when maximizing), but ranking uses the flag.
    """

    x: float
    objective: float
    assumed_worse: bool = False

    @classmethod
    def from_evaluation(cls, evaluation: ObjectiveEvaluation) -> "Point":
        return cls(float(evaluation.x[0]), evaluation.objective)

    @classmethod
    def worse(cls, x: float, goal: Goal) -> "Point":
        return cls(x, goal.transform(math.inf), assumed_worse=True)

    def score(self, goal: Goal) -> float:
        """Value minimized by the search; lower is better."""
        if self.assumed_worse:
            return math.inf
        return goal.transform(self.objective)


@dataclass(frozen=True)
class Evaluated:
    """A successful evaluation at ``point.x``."""

    iter: int
    point: Point
    other: Point
    input: Any
    output: Any

    @property
    def x(self) -> float:
        return self.point.x


@dataclass(frozen=True)
class ModelFailed:
    """The model raised while evaluating ``x``."""

    iter: int
    x: float
    other: Point
    error: EvaluationError


@dataclass(frozen=True)
class ProblemFailed:
    """The problem raised while evaluating ``x``."""

    iter: int
    x: float
    other: Point
    error: EvaluationError


Event = Union[Evaluated, ModelFailed, ProblemFailed]


@dataclass(frozen=True)
class Solution:
    """Result of a golden-section search.

    Attributes:
        status: How the search terminated.
        x: Location of the best evaluation.
        objective: Raw (untransformed) objective at ``x``.
        snapshot: Model input/output at ``x``.
        iters: Loop iterations performed (initialization not counted).
    """

    status: Status
    x: float
    objective: float
    snapshot: Snapshot
    iters: int


def _failure_event(
    iteration: int, x: float, other: Point, error: EvaluationError
) -> Union[ModelFailed, ProblemFailed]:
    if isinstance(error, ModelError):
        return ModelFailed(iter=iteration, x=x, other=other, error=error)
    return ProblemFailed(iter=iteration, x=x, other=other, error=error)


def _check_action(action: Optional[Action]) -> Optional[Action]:
    if action is None or isinstance(action, Action):
        return action
    raise ValueError(f"unsupported golden-section action: {action!r}")


class _State:
    """Mutable search state: bracket, interior points and best evaluation."""

    def __init__(
        self,
        bracket: GoldenBracket,
        left: Point,
        right: Point,
        best: ObjectiveEvaluation,
        goal: Goal,
    ) -> None:
        self.bracket = bracket
        self.left = left
        self.right = right
        self.best = best
        self.goal = goal

    def shrinks_right(self) -> bool:
        # Ties shrink right, keeping the left interior point.
        return self.left.score(self.goal) <= self.right.score(self.goal)

    def apply(self, shrink_right: bool, point: Point) -> None:
        if shrink_right:
            self.bracket = self.bracket.shrink_right()
            self.left, self.right = point, self.left
        else:
            self.bracket = self.bracket.shrink_left()
            self.left, self.right = self.right, point

    def offer(self, evaluation: ObjectiveEvaluation) -> None:
        """Make ``evaluation`` the best if its score is strictly lower."""
        candidate = self.goal.transform(evaluation.objective)
        if candidate < self.goal.transform(self.best.objective):
            self.best = evaluation

    def is_converged(self, config: Config) -> bool:
        return is_x_converged(
            self.bracket.width,
            self.bracket.midpoint(),
            config.x_abs_tol,
            config.x_rel_tol,
        )

    def solution(self, status: Status, iters: int) -> Solution:
        return _solution(status, self.best, iters)


def _solution(status: Status, evaluation: ObjectiveEvaluation, iters: int) -> Solution:
    logger.debug(
        "golden-section finished: status=%s x=%r objective=%r iters=%d",
        status.value,
        float(evaluation.x[0]),
        evaluation.objective,
        iters,
    )
    return Solution(
        status=status,
        x=float(evaluation.x[0]),
        objective=evaluation.objective,
        snapshot=evaluation.snapshot,
        iters=iters,
    )


def _try_evaluate(
    model: Model, problem: OptimizationProblem, x: float
) -> Union[ObjectiveEvaluation, EvaluationError]:
    try:
        return evaluate_objective(model, problem, [x])
    except EvaluationError as err:
        return err


def _init(
    model: Model,
    problem: OptimizationProblem,
    bracket: GoldenBracket,
    observer: Observer[Event, Action],
    goal: Goal,
) -> Union[_State, Solution]:
    """Evaluate both interior points and build the initial state.

    Only the second evaluation (or a failure) reaches the observer, because an
    event always needs a valid ``other`` to compare against. If both
    evaluations fail, one failure event with a synthetic ``other``
    (``objective = NaN``) is emitted and the first error is raised: neither
    action can be honoured without a successful evaluation.
    """
    left = _try_evaluate(model, problem, bracket.inner_left)
    right = _try_evaluate(model, problem, bracket.inner_right)

    if isinstance(left, EvaluationError) and isinstance(right, EvaluationError):
        synthetic_other = Point(bracket.inner_right, math.nan)
        observer(_failure_event(0, bracket.inner_left, synthetic_other, left))
        raise left

    if isinstance(left, EvaluationError) or isinstance(right, EvaluationError):
        if isinstance(left, EvaluationError):
            ok, error, failed_x = right, left, bracket.inner_left
        else:
            ok, error, failed_x = left, right, bracket.inner_right
        ok_point = Point.from_evaluation(ok)
        action = _check_action(observer(_failure_event(0, failed_x, ok_point, error)))
        if action is Action.STOP_EARLY:
            logger.debug("golden-section stopped by observer during init")
            return _solution(Status.STOPPED_BY_OBSERVER, ok, 0)
        if action is None:
            raise error
        worse = Point.worse(failed_x, goal)
        logger.debug("golden-section assuming worse objective at x=%r", failed_x)
        if ok_point.x < worse.x:
            return _State(bracket, ok_point, worse, ok, goal)
        return _State(bracket, worse, ok_point, ok, goal)

    left_point = Point.from_evaluation(left)
    right_point = Point.from_evaluation(right)
    action = _check_action(
        observer(
            Evaluated(
                iter=0,
                point=right_point,
                other=left_point,
                input=right.snapshot.input,
                output=right.snapshot.output,
            )
        )
    )
    if action is Action.STOP_EARLY:
        logger.debug("golden-section stopped by observer during init")
        return _solution(Status.STOPPED_BY_OBSERVER, left, 0)
    if action is Action.ASSUME_WORSE:
        return _State(bracket, left_point, Point.worse(right_point.x, goal), left, goal)
    best = left if left_point.score(goal) <= right_point.score(goal) else right
    return _State(bracket, left_point, right_point, best, goal)


def search(
    model: Any,
    problem: OptimizationProblem,
    bracket: tuple[float, float],
    config: Optional[Config] = None,
    observer: Optional[Observer[Event, Action]] = None,
    goal: Goal = Goal.MINIMIZE,
) -> Solution:
    """Run golden-section search in the direction given by ``goal``.

    Args:
        model: Object with ``call(input)``, or a plain callable.
        problem: Optimization problem with a scalar objective.
        bracket: Two distinct finite endpoints, in any order.
        config: Solver configuration; defaults to :class:`Config`.
        observer: Callback receiving one event per evaluation after the first.
        goal: Whether to minimize or maximize the objective.

    Returns:
        The :class:`Solution` holding the best real evaluation found.

    Raises:
        InvalidConfigError: The config is invalid.
        NonFiniteBracketError: An endpoint is not finite.
        ZeroWidthBracketError: The endpoints are equal.
        EvaluationError: An evaluation failed and the observer did not
            recover, or both initial evaluations failed.
        ValueError: The observer returned an unsupported action.
    """
    config = config if config is not None else Config()
    config.validate()
    observer = observer if observer is not None else no_op_observer
    model = as_model(model)
    golden = GoldenBracket.from_bounds(*order_bounds(bracket))
    logger.debug("golden-section %s on [%r, %r]", goal.value, golden.left, golden.right)

    state = _init(model, problem, golden, observer, goal)
    if isinstance(state, Solution):
        return state

    for iteration in range(1, config.max_iters + 1):
        shrink_right = state.shrinks_right()
        if shrink_right:
            x, other = state.bracket.next_inner_left(), state.left
        else:
            x, other = state.bracket.next_inner_right(), state.right

        result = _try_evaluate(model, problem, x)
        if isinstance(result, EvaluationError):
            action = _check_action(observer(_failure_event(iteration, x, other, result)))
            if action is None:
                raise result
        else:
            point = Point.from_evaluation(result)
            action = _check_action(
                observer(
                    Evaluated(
                        iter=iteration,
                        point=point,
                        other=other,
                        input=result.snapshot.input,
                        output=result.snapshot.output,
                    )
                )
            )

        if action is Action.STOP_EARLY:
            logger.debug("golden-section stopped by observer at iteration %d", iteration)
            return state.solution(Status.STOPPED_BY_OBSERVER, iteration)
        if action is Action.ASSUME_WORSE:
            logger.debug("golden-section assuming worse objective at x=%r", x)
            state.apply(shrink_right, Point.worse(x, goal))
        else:
            state.apply(shrink_right, point)
            state.offer(result)

        if state.is_converged(config):
            return state.solution(Status.CONVERGED, iteration)

    return state.solution(Status.MAX_ITERS, config.max_iters)


def minimize(
    model: Any,
    problem: OptimizationProblem,
    bracket: tuple[float, float],
    config: Optional[Config] = None,
    observer: Optional[Observer[Event, Action]] = None,
) -> Solution:
    """Find a minimum of the objective by golden-section search."""
    return search(model, problem, bracket, config, observer, Goal.MINIMIZE)


def maximize(
    model: Any,
    problem: OptimizationProblem,
    bracket: tuple[float, float],
    config: Optional[Config] = None,
    observer: Optional[Observer[Event, Action]] = None,
) -> Solution:
    """Find a maximum of the objective by golden-section search."""
    return search(model, problem, bracket, config, observer, Goal.MAXIMIZE)


__all__ = [
    "Action",
    "Config",
    "Evaluated",
    "Event",
    "GoldenBracket",
    "INV_PHI",
    "ModelFailed",
    "PHI",
    "Point",
    "ProblemFailed",
    "Solution",
    "maximize",
    "minimize",
    "search",
]
