"""Performance benchmarks for simsolve.

This package contains microbenchmarks measuring the per-evaluation overhead
of the bracketed solvers.
"""
