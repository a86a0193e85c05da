"""
Example: Observer-Driven Solvers in simsolve

This example wraps small engineering models and drives them with the
bisection root finder and the golden-section optimizer. It shows how an
observer watches each evaluation, stops a solve early, and recovers from
model failures by steering the search away from invalid states.
"""

import sys
from dataclasses import dataclass

import numpy as np

from simsolve import (
    FunctionEquationProblem,
    FunctionOptimizationProblem,
    ModelError,
    Status,
    bisection,
    golden_section,
)
from simsolve.logging import configure_logging


@dataclass
class PipeModel:
    """Turbulent pressure drop (Pa) in a smooth pipe for a flow rate (m^3/s)."""

    length: float = 50.0
    diameter: float = 0.1
    density: float = 1000.0
    viscosity: float = 1.0e-3

    def call(self, flow_rate: float) -> float:
        area = np.pi * self.diameter**2 / 4.0
        velocity = flow_rate / area
        reynolds = self.density * velocity * self.diameter / self.viscosity
        # Blasius correlation
        friction = 0.316 * reynolds**-0.25
        return float(friction * (self.length / self.diameter) * 0.5 * self.density * velocity**2)


@dataclass
class TurbineModel:
    """Normalized shaft power as a function of pressure ratio.

    The stage stalls above ``stall_ratio``, where the model has no solution.
    """

    stall_ratio: float = 4.5

    def call(self, pressure_ratio: float) -> float:
        if pressure_ratio > self.stall_ratio:
            raise RuntimeError(f"stage stalled at pressure ratio {pressure_ratio:.3f}")
        return float(pressure_ratio * np.exp(-pressure_ratio / 3.0))


def pressure_drop_problem(target: float) -> FunctionEquationProblem:
    return FunctionEquationProblem(residual_fn=lambda _q, dp: dp - target)


def example_root_finding():
    """Example: Flow rate that produces a target pressure drop."""
    print("=" * 60)
    print("Example 1: Bisection - Flow Rate for a 2 kPa Pressure Drop")
    print("=" * 60)

    trace = []

    def observer(event):
        trace.append((event.iter, event.x, event.residual))

    solution = bisection.solve(
        PipeModel(), pressure_drop_problem(2000.0), (0.001, 0.007), observer=observer
    )
    print(f"Status: {solution.status.value}")
    if solution.status == Status.CONVERGED:
        print(f"Flow rate: {solution.x:.6e} m^3/s")
        print(f"Pressure drop: {solution.snapshot.output:.3f} Pa")
        print(f"Iterations: {solution.iters}")
    print("First midpoints:")
    for iteration, x, residual in trace[:3]:
        print(f"  iter {iteration}: q = {x:.6e}, residual = {residual:+.3f} Pa")
    print()


def example_observer_stop():
    """Example: Stop once the bracket is tight enough for the application."""
    print("=" * 60)
    print("Example 2: Bisection - Observer-Defined Tolerance")
    print("=" * 60)

    def observer(event):
        left, right = event.bracket
        if right - left < 1.0e-5:
            return bisection.Action.STOP_EARLY
        return None

    solution = bisection.solve(
        PipeModel(), pressure_drop_problem(2000.0), (0.001, 0.007), observer=observer
    )
    print(f"Status: {solution.status.value}")
    print(f"Flow rate: {solution.x:.6e} m^3/s")
    print(f"Residual: {solution.residual:+.3f} Pa")
    print(f"Iterations: {solution.iters}")
    print()


def example_failure_recovery():
    """Example: Maximize turbine power while steering away from stall."""
    print("=" * 60)
    print("Example 3: Golden Section - Recovering from Model Failures")
    print("=" * 60)

    problem = FunctionOptimizationProblem(objective_fn=lambda _ratio, power: power)
    failures = []

    def observer(event):
        if isinstance(event, golden_section.ModelFailed):
            failures.append(event.x)
            return golden_section.Action.ASSUME_WORSE
        return None

    try:
        golden_section.maximize(TurbineModel(), problem, (0.5, 10.0))
    except ModelError as err:
        print(f"Without an observer: {err}")

    solution = golden_section.maximize(TurbineModel(), problem, (0.5, 10.0), observer=observer)
    print(f"Status: {solution.status.value}")
    print(f"Best pressure ratio: {solution.x:.6f} (expected 3.0)")
    print(f"Power: {solution.objective:.6f}")
    print(f"Stalled evaluations skipped: {len(failures)}")
    print()


def example_logging():
    """Example: Debug tracing through the library logger."""
    print("=" * 60)
    print("Example 4: Solver Logging")
    print("=" * 60)

    configure_logging(level="DEBUG", stream=sys.stdout)
    try:
        bisection.solve(
            PipeModel(),
            pressure_drop_problem(2000.0),
            (0.001, 0.007),
            bisection.Config(max_iters=5),
        )
    finally:
        configure_logging(level="WARNING")
    print()


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("simsolve - Observer-Driven Solver Examples")
    print("=" * 60 + "\n")

    example_root_finding()
    example_observer_stop()
    example_failure_recovery()
    example_logging()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
