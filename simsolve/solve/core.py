"""Core interfaces shared by the bracketed solvers."""

from __future__ import annotations

import math
from enum import Enum
from numbers import Integral
from typing import Optional, Protocol, TypeVar

from ..errors import InvalidConfigError, NonFiniteBracketError, ZeroWidthBracketError

E_contra = TypeVar("E_contra", contravariant=True)
A_co = TypeVar("A_co", covariant=True)

DEFAULT_MAX_ITERS = 100
DEFAULT_X_ABS_TOL = 1e-12
DEFAULT_X_REL_TOL = 1e-12
DEFAULT_RESIDUAL_TOL = 1e-12


class Status(Enum):
    """How a solve terminated."""

    CONVERGED = "converged"
    MAX_ITERS = "max_iters"
    STOPPED_BY_OBSERVER = "stopped_by_observer"


class Observer(Protocol[E_contra, A_co]):
    """
    Callback invoked synchronously after each observed evaluation.

    The event is a read-only view that is only valid for the duration of the
    call. Returning ``None`` lets the solver proceed normally; returning an
    action redirects it.
    """

    def __call__(self, event: E_contra) -> Optional[A_co]:
        ...


def no_op_observer(event: object) -> None:
    """Observer that never intervenes."""
    return None


def check_tolerance(name: str, value: float) -> None:
    """Raise :class:`InvalidConfigError` unless ``value`` is finite and >= 0."""
    if not math.isfinite(value) or value < 0.0:
        raise InvalidConfigError(f"{name} must be finite and non-negative")


def check_max_iters(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidConfigError("max_iters must be an integer")
    if value < 0:
        raise InvalidConfigError("max_iters must be non-negative")


def order_bounds(bracket: tuple[float, float]) -> tuple[float, float]:
    """Validate a two-element bracket and return it as ``(left, right)``.

    Raises:
        NonFiniteBracketError: If either endpoint is NaN or infinite.
        ZeroWidthBracketError: If both endpoints are equal.
    """
    a, b = (float(v) for v in bracket)
    for value in (a, b):
        if not math.isfinite(value):
            raise NonFiniteBracketError(value)
    if a == b:
        raise ZeroWidthBracketError(a)
    return (a, b) if a < b else (b, a)


def is_x_converged(width: float, mid: float, x_abs_tol: float, x_rel_tol: float) -> bool:
    """Return True if a bracket of ``width`` around ``mid`` is within tolerance."""
    return abs(width) <= x_abs_tol + x_rel_tol * abs(mid)


__all__ = [
    "DEFAULT_MAX_ITERS",
    "DEFAULT_RESIDUAL_TOL",
    "DEFAULT_X_ABS_TOL",
    "DEFAULT_X_REL_TOL",
    "Observer",
    "Status",
    "check_max_iters",
    "check_tolerance",
    "is_x_converged",
    "no_op_observer",
    "order_bounds",
]
