"""Exception taxonomy shared by the bracketed solvers.

Errors fall into four groups:

- configuration errors, raised before any evaluation
  (:class:`InvalidConfigError`);
- bracket errors, raised before the iteration loop begins
  (:class:`NonFiniteBracketError`, :class:`ZeroWidthBracketError`,
  :class:`NoBracketError`);
- per-evaluation errors from the model or problem (:class:`EvaluationError`
  and its subclasses), which an observer may recover from at well-defined
  points;
- numerical degeneracy (:class:`NonFiniteResidualError`), always fatal.

The user exception behind an evaluation failure is available as ``cause``
and is also chained as ``__cause__``.
"""

from __future__ import annotations

from typing import Optional


class SolverError(Exception):
    """Base class for every error raised by :mod:`simsolve` solvers."""


class InvalidConfigError(SolverError, ValueError):
    """A solver configuration failed validation."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"invalid config: {reason}")


class NonFiniteBracketError(SolverError, ValueError):
    """A bracket endpoint is NaN or infinite."""

    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(f"bracket contains non-finite value: {value}")


class ZeroWidthBracketError(SolverError, ValueError):
    """Both bracket endpoints are equal."""

    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(
            f"bracket has zero width: left and right are both {value}"
        )


class NoBracketError(SolverError):
    """Residuals at both endpoints share a sign, so no root is guaranteed."""

    def __init__(
        self,
        left: float,
        right: float,
        left_residual: float,
        right_residual: float,
    ) -> None:
        self.left = left
        self.right = right
        self.left_residual = left_residual
        self.right_residual = right_residual
        super().__init__(
            f"no root in bracket: f({left})={left_residual}, "
            f"f({right})={right_residual}"
        )


class NonFiniteResidualError(SolverError, ArithmeticError):
    """A residual evaluated to NaN or infinity."""

    def __init__(self, x: float, residual: float) -> None:
        self.x = x
        self.residual = residual
        super().__init__(f"non-finite residual {residual} at x = {x}")


class EvaluationError(SolverError):
    """A single evaluation of the model or problem failed at ``x``."""

    stage = "evaluation"

    def __init__(self, x: float, cause: Optional[BaseException] = None) -> None:
        self.x = x
        self.cause = cause
        message = f"{self.stage} failed at x = {x}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ModelError(EvaluationError):
    """The model raised while mapping an input to an output."""

    stage = "model call"


class ProblemError(EvaluationError):
    """The problem raised or produced an unusable residual/objective."""

    stage = "problem"


class InputError(ProblemError):
    """The problem could not lift the search vector into a model input."""

    stage = "input mapping"


class NonFiniteObjectiveError(ProblemError):
    """The objective evaluated to NaN or infinity."""

    stage = "objective"

    def __init__(self, x: float, objective: float) -> None:
        self.objective = objective
        super().__init__(x, ValueError(f"non-finite objective {objective}"))


__all__ = [
    "EvaluationError",
    "InputError",
    "InvalidConfigError",
    "ModelError",
    "NoBracketError",
    "NonFiniteBracketError",
    "NonFiniteObjectiveError",
    "NonFiniteResidualError",
    "ProblemError",
    "SolverError",
    "ZeroWidthBracketError",
]
