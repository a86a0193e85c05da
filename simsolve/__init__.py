"""simsolve - observer-driven numerical solvers for engineering models."""

__version__ = "0.1.0"

from .errors import (
    EvaluationError,
    InputError,
    InvalidConfigError,
    ModelError,
    NoBracketError,
    NonFiniteBracketError,
    NonFiniteObjectiveError,
    NonFiniteResidualError,
    ProblemError,
    SolverError,
    ZeroWidthBracketError,
)
from .model import FunctionModel, Model, Snapshot, as_model
from .solve import (
    EquationProblem,
    FunctionEquationProblem,
    FunctionOptimizationProblem,
    Goal,
    NegateObjective,
    OptimizationProblem,
    Status,
    bisection,
    golden_section,
    maximize,
    minimize,
)

__all__ = [
    "__version__",
    # Errors
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
    # Models
    "FunctionModel",
    "Model",
    "Snapshot",
    "as_model",
    # Problems
    "EquationProblem",
    "FunctionEquationProblem",
    "FunctionOptimizationProblem",
    "Goal",
    "NegateObjective",
    "OptimizationProblem",
    # Solvers
    "Status",
    "bisection",
    "golden_section",
    "maximize",
    "minimize",
]
