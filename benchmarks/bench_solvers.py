"""Benchmark solver overhead per model evaluation."""

import time
from typing import Dict

import numpy as np

from simsolve import FunctionEquationProblem, FunctionOptimizationProblem, bisection, golden_section


def _cheap_model(x: float) -> float:
    return float(np.cos(x) - x)


def benchmark_bisection(n_repeats: int = 1000) -> Dict[str, float]:
    """Benchmark bisection on ``cos(x) = x``.

    Args:
        n_repeats: Number of full solves to time.

    Returns:
        Dictionary with timing results.
    """
    problem = FunctionEquationProblem(residual_fn=lambda _x, y: y)

    # Warmup
    solution = bisection.solve(_cheap_model, problem, (0.0, 1.0))

    start = time.perf_counter()
    for _ in range(n_repeats):
        bisection.solve(_cheap_model, problem, (0.0, 1.0))
    end = time.perf_counter()

    total_time = end - start
    evaluations = n_repeats * (solution.iters + 2)
    return {
        "n_repeats": n_repeats,
        "iters": solution.iters,
        "total_time_sec": total_time,
        "time_per_solve_sec": total_time / n_repeats,
        "time_per_eval_sec": total_time / evaluations,
    }


def benchmark_golden_section(n_repeats: int = 1000) -> Dict[str, float]:
    """Benchmark golden-section search minimizing ``(cos(x) - x)^2``.

    Args:
        n_repeats: Number of full searches to time.

    Returns:
        Dictionary with timing results.
    """
    problem = FunctionOptimizationProblem(objective_fn=lambda _x, y: y * y)

    # Warmup
    solution = golden_section.minimize(_cheap_model, problem, (0.0, 1.0))

    start = time.perf_counter()
    for _ in range(n_repeats):
        golden_section.minimize(_cheap_model, problem, (0.0, 1.0))
    end = time.perf_counter()

    total_time = end - start
    evaluations = n_repeats * (solution.iters + 2)
    return {
        "n_repeats": n_repeats,
        "iters": solution.iters,
        "total_time_sec": total_time,
        "time_per_solve_sec": total_time / n_repeats,
        "time_per_eval_sec": total_time / evaluations,
    }


if __name__ == "__main__":
    print("Benchmarking solvers...")

    for name, bench in (("Bisection", benchmark_bisection), ("Golden section", benchmark_golden_section)):
        results = bench()
        print(f"{name} ({results['iters']} iterations per solve):")
        print(f"  Time per solve: {results['time_per_solve_sec']*1e6:.2f} μs")
        print(f"  Time per evaluation: {results['time_per_eval_sec']*1e6:.2f} μs")
