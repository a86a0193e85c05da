"""Behavioural properties shared by both solvers."""

import pytest

from simsolve.solve import (
    FunctionEquationProblem,
    FunctionOptimizationProblem,
    NegateObjective,
    Status,
    bisection,
    golden_section,
)


def square(x: float) -> float:
    return x * x


def bump(x: float) -> float:
    return -((x - 2.0) ** 2)


@pytest.fixture
def root_problem():
    return FunctionEquationProblem(residual_fn=lambda _x, y: y - 2.0)


@pytest.fixture
def bump_problem():
    return FunctionOptimizationProblem(objective_fn=lambda _x, y: y)


def test_bisection_is_deterministic(root_problem):
    first = bisection.solve(square, root_problem, (0.0, 2.0))
    second = bisection.solve(square, root_problem, (0.0, 2.0))
    assert first == second


def test_golden_section_is_deterministic(bump_problem):
    first = golden_section.maximize(bump, bump_problem, (-5.0, 5.0))
    second = golden_section.maximize(bump, bump_problem, (-5.0, 5.0))
    assert first == second


@pytest.mark.parametrize("n", [1, 2, 5, 10])
def test_bisection_stop_on_nth_event(root_problem, n):
    calls = []

    def observer(event):
        calls.append(event.iter)
        return bisection.Action.STOP_EARLY if len(calls) == n else None

    solution = bisection.solve(square, root_problem, (0.0, 2.0), observer=observer)

    # Endpoints are evaluated before the loop and never observed.
    assert solution.status is Status.STOPPED_BY_OBSERVER
    assert solution.iters == n
    assert calls == list(range(1, n + 1))


@pytest.mark.parametrize("n", [1, 2, 5, 10])
def test_golden_section_stop_on_nth_event(bump_problem, n):
    calls = []

    def observer(event):
        calls.append(event.iter)
        return golden_section.Action.STOP_EARLY if len(calls) == n else None

    solution = golden_section.maximize(bump, bump_problem, (-5.0, 5.0), observer=observer)

    # Initialization consumes the first event.
    assert solution.status is Status.STOPPED_BY_OBSERVER
    assert solution.iters == n - 1
    assert calls == list(range(n))


def test_observed_run_matches_unobserved(root_problem, bump_problem):
    events = []
    assert bisection.solve(square, root_problem, (0.0, 2.0)) == bisection.solve(
        square, root_problem, (0.0, 2.0), observer=events.append
    )
    assert events

    events.clear()
    assert golden_section.maximize(bump, bump_problem, (-5.0, 5.0)) == golden_section.maximize(
        bump, bump_problem, (-5.0, 5.0), observer=events.append
    )
    assert events


def test_maximize_matches_minimizing_negated_problem(bump_problem):
    maximized = golden_section.maximize(bump, bump_problem, (-5.0, 5.0))
    minimized = golden_section.minimize(bump, NegateObjective(bump_problem), (-5.0, 5.0))

    assert maximized.x == minimized.x
    assert maximized.iters == minimized.iters
    assert maximized.objective == -minimized.objective


def test_solutions_stay_inside_bracket(root_problem, bump_problem):
    root = bisection.solve(square, root_problem, (0.5, 3.0), bisection.Config(max_iters=4))
    assert 0.5 <= root.x <= 3.0

    peak = golden_section.maximize(bump, bump_problem, (3.0, 7.0))
    assert 3.0 <= peak.x <= 7.0
    assert peak.x == pytest.approx(3.0, abs=1e-6)
