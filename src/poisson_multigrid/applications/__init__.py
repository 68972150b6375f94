"""Poisson problem, manufactured solutions and convergence studies."""

from .poisson_problem import PoissonProblem
from .manufactured import forcing_function, exact_solution
from .convergence_study import (
    ConvergenceData, run_problem, grid_convergence_study,
    observed_orders, convergence_factors, average_convergence_factor
)

__all__ = [
    "PoissonProblem",
    "forcing_function",
    "exact_solution",
    "ConvergenceData",
    "run_problem",
    "grid_convergence_study",
    "observed_orders",
    "convergence_factors",
    "average_convergence_factor",
]
