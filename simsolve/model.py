"""Model interface consumed by the solvers.

A model is a pure, deterministic mapping from a domain input to a domain
output. Failure is signalled by raising; the solvers wrap whatever the model
raises in :class:`~simsolve.errors.ModelError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

I = TypeVar("I")
O = TypeVar("O")


@runtime_checkable
class Model(Protocol):
    """Anything exposing ``call(input) -> output``."""

    def call(self, input: Any) -> Any:
        ...


@dataclass(frozen=True)
class Snapshot(Generic[I, O]):
    """A captured input/output pair from one model call."""

    input: I
    output: O


@dataclass(frozen=True)
class FunctionModel:
    """Model backed by a plain function."""

    fun: Callable[[Any], Any]

    def call(self, input: Any) -> Any:
        return self.fun(input)


def as_model(model: Any) -> Model:
    """Return ``model`` as a :class:`Model`, wrapping bare callables."""
    if isinstance(model, Model):
        return model
    if callable(model):
        return FunctionModel(model)
    raise TypeError(
        f"expected an object with a call() method or a callable, got {type(model).__name__}"
    )


__all__ = ["FunctionModel", "Model", "Snapshot", "as_model"]
