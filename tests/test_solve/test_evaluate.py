import math

import numpy as np
import pytest

from simsolve.errors import (
    EvaluationError,
    InputError,
    ModelError,
    NonFiniteObjectiveError,
    NonFiniteResidualError,
    ProblemError,
)
from simsolve.model import FunctionModel
from simsolve.solve.evaluate import evaluate_objective, evaluate_residuals
from simsolve.solve.problem import FunctionEquationProblem, FunctionOptimizationProblem

square = FunctionModel(lambda x: x * x)


def failing(exc):
    def fun(*_args):
        raise exc

    return fun


def test_evaluate_residuals_composes_problem_and_model(target_problem):
    ev = evaluate_residuals(square, target_problem, [4.0])
    assert np.array_equal(ev.x, [4.0])
    assert np.array_equal(ev.residuals, [7.0])
    assert ev.residual == 7.0
    assert ev.snapshot.input == 4.0
    assert ev.snapshot.output == 16.0


def test_evaluation_arrays_are_read_only(target_problem):
    ev = evaluate_residuals(square, target_problem, [4.0])
    with pytest.raises(ValueError):
        ev.x[0] = 1.0
    with pytest.raises(ValueError):
        ev.residuals[0] = 1.0


def test_input_failure_is_wrapped():
    problem = FunctionEquationProblem(
        residual_fn=lambda i, o: o, input_fn=failing(KeyError("missing"))
    )
    with pytest.raises(InputError) as excinfo:
        evaluate_residuals(square, problem, [1.0])
    err = excinfo.value
    assert isinstance(err, ProblemError)
    assert isinstance(err.cause, KeyError)
    assert err.__cause__ is err.cause
    assert err.x == 1.0


def test_model_failure_is_wrapped(target_problem):
    model = FunctionModel(failing(RuntimeError("boom")))
    with pytest.raises(ModelError, match="boom"):
        evaluate_residuals(model, target_problem, [1.0])


def test_residual_failure_is_wrapped():
    problem = FunctionEquationProblem(residual_fn=failing(ZeroDivisionError()))
    with pytest.raises(ProblemError) as excinfo:
        evaluate_residuals(square, problem, [1.0])
    assert not isinstance(excinfo.value, InputError)


def test_wrong_residual_count_is_a_problem_error():
    problem = FunctionEquationProblem(residual_fn=lambda i, o: [o, o])
    with pytest.raises(ProblemError, match="expected 1 residual"):
        evaluate_residuals(square, problem, [1.0])


def test_non_numeric_residual_is_a_problem_error():
    problem = FunctionEquationProblem(residual_fn=lambda i, o: "high")
    with pytest.raises(ProblemError):
        evaluate_residuals(square, problem, [1.0])


def test_non_finite_residual_is_rejected():
    problem = FunctionEquationProblem(residual_fn=lambda i, o: math.nan)
    with pytest.raises(NonFiniteResidualError) as excinfo:
        evaluate_residuals(square, problem, [2.0])
    assert excinfo.value.x == 2.0
    assert math.isnan(excinfo.value.residual)
    assert not isinstance(excinfo.value, EvaluationError)


def test_evaluate_objective(output_objective):
    ev = evaluate_objective(square, output_objective, np.array([3.0]))
    assert ev.objective == 9.0
    assert isinstance(ev.objective, float)
    assert ev.snapshot.output == 9.0


def test_objective_failure_is_wrapped():
    problem = FunctionOptimizationProblem(objective_fn=failing(ValueError("bad")))
    with pytest.raises(ProblemError, match="bad"):
        evaluate_objective(square, problem, [1.0])


def test_non_finite_objective_is_a_recoverable_problem_error():
    problem = FunctionOptimizationProblem(objective_fn=lambda i, o: math.inf)
    with pytest.raises(NonFiniteObjectiveError) as excinfo:
        evaluate_objective(square, problem, [1.0])
    assert isinstance(excinfo.value, ProblemError)
    assert excinfo.value.objective == math.inf
