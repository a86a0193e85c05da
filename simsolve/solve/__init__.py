"""Observer-driven bracketed solvers.

Two solvers share one evaluation and observer protocol:

- :mod:`~simsolve.solve.bisection` finds a root of a single residual;
- :mod:`~simsolve.solve.golden_section` minimizes or maximizes a scalar
  objective.

Example
-------
>>> from simsolve.solve import FunctionEquationProblem, Status, bisection
>>> problem = FunctionEquationProblem(residual_fn=lambda x, y: y - 9.0)
>>> sol = bisection.solve(lambda x: x * x, problem, (0.0, 10.0))
>>> sol.status is Status.CONVERGED, round(sol.x, 9)
(True, 3.0)
"""

from . import bisection, core, evaluate, golden_section, problem
from .core import (
    DEFAULT_MAX_ITERS,
    DEFAULT_RESIDUAL_TOL,
    DEFAULT_X_ABS_TOL,
    DEFAULT_X_REL_TOL,
    Observer,
    Status,
    no_op_observer,
)
from .evaluate import (
    EquationEvaluation,
    ObjectiveEvaluation,
    evaluate_objective,
    evaluate_residuals,
)
from .golden_section import maximize, minimize
from .problem import (
    EquationProblem,
    FunctionEquationProblem,
    FunctionOptimizationProblem,
    Goal,
    NegateObjective,
    OptimizationProblem,
)

__all__ = [
    "bisection",
    "core",
    "evaluate",
    "golden_section",
    "problem",
    # Core types
    "DEFAULT_MAX_ITERS",
    "DEFAULT_RESIDUAL_TOL",
    "DEFAULT_X_ABS_TOL",
    "DEFAULT_X_REL_TOL",
    "Observer",
    "Status",
    "no_op_observer",
    # Evaluation
    "EquationEvaluation",
    "ObjectiveEvaluation",
    "evaluate_objective",
    "evaluate_residuals",
    # Problems
    "EquationProblem",
    "FunctionEquationProblem",
    "FunctionOptimizationProblem",
    "Goal",
    "NegateObjective",
    "OptimizationProblem",
    # Solvers
    "maximize",
    "minimize",
]
