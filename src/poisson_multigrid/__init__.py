"""
Geometric Multigrid Solver for the 2-D Poisson Equation

Solves u_xx + u_yy = f on a (2^l+1) x (2^l+1) grid with zero Dirichlet
boundary values using recursive V-cycles with Gauss-Seidel smoothing.
"""

# Version information
from ._version import __version__

from .core import multigrid_size, grid_size, GridAllocationError, BoundaryViolationError
from .operators import (
    LaplacianOperator, RestrictionOperator, ProlongationOperator, poisson_residual
)
from .solvers import (
    MultigridSolver, Smoother, GaussSeidel, GaussSeidelRedBlack,
    create_smoother, multigrid_v_cycle
)
from .applications import PoissonProblem, grid_convergence_study
from .config import MultigridConfig

__all__ = [
    "__version__",
    "multigrid_size",
    "grid_size",
    "GridAllocationError",
    "BoundaryViolationError",
    "LaplacianOperator",
    "RestrictionOperator",
    "ProlongationOperator",
    "poisson_residual",
    "MultigridSolver",
    "Smoother",
    "GaussSeidel",
    "GaussSeidelRedBlack",
    "create_smoother",
    "multigrid_v_cycle",
    "PoissonProblem",
    "grid_convergence_study",
    "MultigridConfig",
]
