"""Discrete Laplacian operator and Poisson residual."""

import numpy as np
from numba import njit
import logging

from .base import BaseOperator
from ..core.grid import allocate_grid, level_from_size, validate_grid, validate_spacing

logger = logging.getLogger(__name__)


@njit
def _laplacian_kernel(out, u, n, h):
    hi2 = 1.0 / (h * h)
    for i in range(1, n - 1):
        for j in range(1, n - 1):
            out[i, j] = (u[i + 1, j] + u[i - 1, j] + u[i, j + 1] + u[i, j - 1]
                         - 4.0 * u[i, j]) * hi2


@njit
def _residual_kernel(r, u, f, n, h):
    hi2 = 1.0 / (h * h)
    for i in range(1, n - 1):
        for j in range(1, n - 1):
            r[i, j] = f[i, j] - (u[i + 1, j] + u[i - 1, j] + u[i, j + 1] + u[i, j - 1]
                                 - 4.0 * u[i, j]) * hi2


def poisson_residual(r: np.ndarray, u: np.ndarray, f: np.ndarray, n: int, h: float) -> np.ndarray:
    """
    Compute the residual r = f - Lu on the interior of an n x n grid.

    Lu is the five-point Laplacian
    (u[i+1,j] + u[i-1,j] + u[i,j+1] + u[i,j-1] - 4u[i,j]) / h².
    Boundary cells of ``r`` are not written.

    Args:
        r: Output residual grid
        u: Approximate solution
        f: Right-hand side
        n: Points per side
        h: Grid spacing

    Returns:
        ``r``
    """
    validate_grid(r, n, "r")
    validate_grid(u, n, "u")
    validate_grid(f, n, "f")
    validate_spacing(h)

    _residual_kernel(r, u, f, n, h)
    return r


class LaplacianOperator(BaseOperator):
    """
    Discrete Laplacian operator using five-point stencil.

    Implements: ∇²u ≈ (u_{i+1,j} + u_{i-1,j} + u_{i,j+1} + u_{i,j-1} - 4u_{i,j})/h²
    """

    def __init__(self):
        super().__init__("Laplacian(5-point)")

    def can_apply(self, n: int) -> bool:
        """True if ``n`` is a valid grid size 2^l + 1."""
        try:
            level_from_size(n)
        except ValueError:
            return False
        return True

    def apply(self, u: np.ndarray, n: int, h: float) -> np.ndarray:
        """
        Apply discrete Laplacian operator.

        Args:
            u: Input field
            n: Points per side
            h: Grid spacing

        Returns:
            New grid holding Lu on the interior and zeros on the boundary
        """
        validate_grid(u, n, "u")
        validate_spacing(h)

        result = allocate_grid(n, u.dtype)
        _laplacian_kernel(result, u, n, h)

        logger.debug(f"Applied Laplacian on {n}x{n} grid")
        return result

    def residual(self, r: np.ndarray, u: np.ndarray, f: np.ndarray, n: int, h: float) -> np.ndarray:
        """Compute residual r = f - Lu in place."""
        return poisson_residual(r, u, f, n, h)
