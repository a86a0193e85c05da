"""Bisection root finding for single-variable equation problems.

Algorithm
---------
1. Validate the config and order the bracket endpoints.
2. Evaluate both endpoints. If either residual is already within
   ``residual_tol`` the solve converges there with zero iterations; if the
   residuals share a sign, :class:`~simsolve.errors.NoBracketError` is raised.
3. Repeatedly evaluate the midpoint, report it to the observer, test
   convergence and replace the endpoint whose residual sign matches the
   midpoint's.

Convergence is reported when the current bracket width satisfies
``x_abs_tol + x_rel_tol * |mid|`` or the midpoint residual magnitude is within
``residual_tol``.

Observer
--------
The observer sees one :class:`Event` per midpoint evaluation (endpoints are
not observed). It may return:

- ``Action.STOP_EARLY`` to return the better of the midpoint and the best
  evaluation so far;
- ``Action.ASSUME_POSITIVE`` / ``Action.ASSUME_NEGATIVE`` to shrink the bracket
  with an assumed residual sign. This is how a failed midpoint is recovered;
  on a successful midpoint it excludes that evaluation from the solution.

Without an action, a failed midpoint re-raises its
:class:`~simsolve.errors.EvaluationError`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from ..errors import EvaluationError, NoBracketError
from ..logging import get_logger
from ..model import Snapshot, as_model
from .core import (
    DEFAULT_MAX_ITERS,
    DEFAULT_RESIDUAL_TOL,
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
from .evaluate import EquationEvaluation, evaluate_residuals
from .problem import EquationProblem

logger = get_logger(__name__)


class Sign(Enum):
    """Sign of a residual for bracket updates. Zero counts as positive."""

    POSITIVE = "positive"
    NEGATIVE = "negative"

    @classmethod
    def of(cls, value: float) -> "Sign":
        return cls.POSITIVE if value >= 0.0 else cls.NEGATIVE


class Action(Enum):
    """Control actions an observer may return during bisection."""

    STOP_EARLY = "stop_early"
    ASSUME_POSITIVE = "assume_positive"
    ASSUME_NEGATIVE = "assume_negative"

    @property
    def assumed_sign(self) -> Optional[Sign]:
        if self is Action.ASSUME_POSITIVE:
            return Sign.POSITIVE
        if self is Action.ASSUME_NEGATIVE:
            return Sign.NEGATIVE
        return None


@dataclass(frozen=True)
class Config:
    """
    Bisection solver configuration.

    Args:
        max_iters: Maximum number of midpoint evaluations.
        x_abs_tol: Absolute bracket-width tolerance.
        x_rel_tol: Bracket-width tolerance relative to ``|mid|``.
        residual_tol: Absolute tolerance on the residual magnitude.
    """

    max_iters: int = DEFAULT_MAX_ITERS
    x_abs_tol: float = DEFAULT_X_ABS_TOL
    x_rel_tol: float = DEFAULT_X_REL_TOL
    residual_tol: float = DEFAULT_RESIDUAL_TOL

    def validate(self) -> None:
        """Raise :class:`~simsolve.errors.InvalidConfigError` if invalid."""
        check_max_iters(self.max_iters)
        check_tolerance("x_abs_tol", self.x_abs_tol)
        check_tolerance("x_rel_tol", self.x_rel_tol)
        check_tolerance("residual_tol", self.residual_tol)


@dataclass(frozen=True)
class Bracket:
    """Bracket endpoints with the residual sign observed at each.

    Invariants: ``left < right`` and ``left_sign != right_sign``.
    """

    left: float
    right: float
    left_sign: Sign
    right_sign: Sign

    @property
    def width(self) -> float:
        return self.right - self.left

    def midpoint(self) -> float:
        return 0.5 * (self.left + self.right)

    def as_tuple(self) -> tuple[float, float]:
        return (self.left, self.right)

    def shrink(self, x: float, sign: Sign) -> "Bracket":
        """Return the bracket with the endpoint sharing ``sign`` moved to ``x``."""
        if sign is self.left_sign:
            return replace(self, left=x)
        return replace(self, right=x)


@dataclass(frozen=True)
class Event:
    """
    Read-only view of one midpoint evaluation.

    Exactly one of ``evaluation`` and ``error`` is set.

    Attributes:
        iter: Iteration number (1-indexed).
        x: The midpoint that was evaluated.
        bracket: ``(left, right)`` before this iteration shrinks it.
        evaluation: The successful evaluation, if any.
        error: The evaluation failure, if any.
    """

    iter: int
    x: float
    bracket: tuple[float, float]
    evaluation: Optional[EquationEvaluation] = None
    error: Optional[EvaluationError] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def residual(self) -> Optional[float]:
        if self.evaluation is None:
            return None
        return self.evaluation.residual


@dataclass(frozen=True)
class Solution:
    """Result of a bisection solve.

    Attributes:
        status: How the solve terminated.
        x: Root estimate.
        residual: Residual at ``x``.
        snapshot: Model input/output at ``x``.
        iters: Midpoint evaluations performed.
    """

    status: Status
    x: float
    residual: float
    snapshot: Snapshot
    iters: int


def _finish(status: Status, evaluation: EquationEvaluation, iters: int) -> Solution:
    logger.debug(
        "bisection finished: status=%s x=%r residual=%r iters=%d",
        status.value,
        float(evaluation.x[0]),
        evaluation.residual,
        iters,
    )
    return Solution(
        status=status,
        x=float(evaluation.x[0]),
        residual=evaluation.residual,
        snapshot=evaluation.snapshot,
        iters=iters,
    )


def _is_better(candidate: EquationEvaluation, incumbent: EquationEvaluation) -> bool:
    # Strict comparison: ties keep the earlier evaluation.
    return abs(candidate.residual) < abs(incumbent.residual)


def solve(
    model: Any,
    problem: EquationProblem,
    bracket: tuple[float, float],
    config: Optional[Config] = None,
    observer: Optional[Observer[Event, Action]] = None,
) -> Solution:
    """Find a root of a single-residual equation problem by bisection.

    Args:
        model: Object with ``call(input)``, or a plain callable.
        problem: Equation problem returning exactly one residual.
        bracket: Two distinct finite endpoints, in any order.
        config: Solver configuration; defaults to :class:`Config`.
        observer: Callback receiving one :class:`Event` per midpoint.

    Returns:
        The :class:`Solution`; its ``status`` distinguishes convergence,
        exhausted iterations and an observer stop.

    Raises:
        InvalidConfigError: The config is invalid.
        NonFiniteBracketError: An endpoint is not finite.
        ZeroWidthBracketError: The endpoints are equal.
        NonFiniteResidualError: Any residual is not finite.
        NoBracketError: The endpoint residuals share a sign.
        EvaluationError: An endpoint failed, or a midpoint failed and the
            observer did not recover.
        ValueError: The observer returned an unsupported action.
    """
    config = config if config is not None else Config()
    config.validate()
    observer = observer if observer is not None else no_op_observer
    model = as_model(model)

    left, right = order_bounds(bracket)
    left_eval = evaluate_residuals(model, problem, [left])
    right_eval = evaluate_residuals(model, problem, [right])

    for endpoint in (left_eval, right_eval):
        if abs(endpoint.residual) <= config.residual_tol:
            return _finish(Status.CONVERGED, endpoint, 0)

    left_sign = Sign.of(left_eval.residual)
    right_sign = Sign.of(right_eval.residual)
    if left_sign is right_sign:
        raise NoBracketError(left, right, left_eval.residual, right_eval.residual)

    best = right_eval if _is_better(right_eval, left_eval) else left_eval
    current = Bracket(left, right, left_sign, right_sign)
    logger.debug("bisection bracket [%r, %r]", left, right)

    for iteration in range(1, config.max_iters + 1):
        mid = current.midpoint()
        mid_eval: Optional[EquationEvaluation] = None
        error: Optional[EvaluationError] = None
        try:
            mid_eval = evaluate_residuals(model, problem, [mid])
        except EvaluationError as err:
            error = err

        x_converged = is_x_converged(
            current.width, mid, config.x_abs_tol, config.x_rel_tol
        )
        residual_converged = (
            mid_eval is not None and abs(mid_eval.residual) <= config.residual_tol
        )

        action = observer(
            Event(
                iter=iteration,
                x=mid,
                bracket=current.as_tuple(),
                evaluation=mid_eval,
                error=error,
            )
        )

        if action is Action.STOP_EARLY:
            logger.debug("bisection stopped by observer at iteration %d", iteration)
            chosen = best
            if mid_eval is not None and _is_better(mid_eval, best):
                chosen = mid_eval
            return _finish(Status.STOPPED_BY_OBSERVER, chosen, iteration)

        if action is None:
            if error is not None:
                raise error
            sign = Sign.of(mid_eval.residual)
        elif isinstance(action, Action):
            sign = action.assumed_sign
            logger.debug("bisection assuming %s residual at x=%r", sign.value, mid)
            mid_eval = None
            residual_converged = False
        else:
            raise ValueError(f"unsupported bisection action: {action!r}")

        if x_converged or residual_converged:
            return _finish(
                Status.CONVERGED, mid_eval if mid_eval is not None else best, iteration
            )

        if mid_eval is not None and _is_better(mid_eval, best):
            best = mid_eval
        current = current.shrink(mid, sign)

    return _finish(Status.MAX_ITERS, best, config.max_iters)


__all__ = [
    "Action",
    "Bracket",
    "Config",
    "Event",
    "Sign",
    "Solution",
    "solve",
]
