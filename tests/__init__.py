"""
Test Suite for the Poisson Multigrid Solver

Test Categories:
    - Unit tests: grid layout, stencil operators, smoothers, V-cycle, config
    - Integration tests: manufactured-problem convergence and the CLI driver
"""

import numpy as np
import sys
from pathlib import Path

# Add src directory to path for imports
test_dir = Path(__file__).parent
src_dir = test_dir.parent / 'src'
sys.path.insert(0, str(src_dir))

# Test configuration
TEST_CONFIG = {
    'levels': [4, 5, 6],
    'max_cycles': 40,
    'convergence_threshold': 1e-10,
    'factor_bounds': (0.01, 0.4),
}


def discrete_poisson_solution(f, h):
    """Solve the five-point system Lu = f with a sparse direct solver (interior only)."""
    import scipy.sparse as sp
    import scipy.sparse.linalg as spla

    n = f.shape[0]
    m = n - 2
    second_difference = sp.diags([1.0, -2.0, 1.0], [-1, 0, 1], shape=(m, m))
    identity = sp.identity(m)
    laplacian = (sp.kron(identity, second_difference) +
                 sp.kron(second_difference, identity)) / h**2

    u = np.zeros_like(f, dtype=np.float64)
    u[1:-1, 1:-1] = spla.spsolve(laplacian.tocsc(), f[1:-1, 1:-1].ravel()).reshape(m, m)
    return u


def discrete_error_prediction(level, h, modes=1.0):
    """
    L1 error between the discrete and the exact manufactured solution.

    sin(s h i) sin(s h j) is an eigenvector of the five-point Laplacian, so the
    discrete solution is the exact one scaled by s²h² / (4 sin²(sh/2)).
    """
    from poisson_multigrid.applications.manufactured import exact_solution
    from poisson_multigrid.core.grid import allocate_grid, grid_l1norm, grid_size

    n = grid_size(level)
    s = 2.0 * np.pi * modes / (h * (n - 1))
    scale = (s * h) ** 2 / (4.0 * np.sin(s * h / 2.0) ** 2)
    exact = exact_solution(allocate_grid(n), n, h, modes)
    return abs(scale - 1.0) * grid_l1norm(exact, h, h)


__all__ = ['TEST_CONFIG', 'discrete_poisson_solution', 'discrete_error_prediction']
