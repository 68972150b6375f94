"""Poisson problem container: solution, forcing and residual grids on one level."""

import numpy as np
from typing import Union, TYPE_CHECKING
import logging

from .manufactured import exact_solution, forcing_function
from ..core.grid import (
    allocate_grid, grid_l1norm, grid_size, grid_subtract,
    resolve_dtype, validate_spacing
)
from ..operators.laplacian import poisson_residual

if TYPE_CHECKING:
    from ..config.settings import ProblemConfig

logger = logging.getLogger(__name__)


class PoissonProblem:
    """
    The 2-D Poisson problem u_xx + u_yy = f with zero Dirichlet boundary.

    Holds the solution ``u``, the manufactured forcing ``f`` and a residual
    scratch ``r``, all ``(n, n)`` grids with n = 2^level + 1.
    """

    def __init__(
        self,
        level: int,
        h: float,
        modes: float = 1.0,
        dtype: Union[str, np.dtype, type] = np.float64
    ):
        """
        Initialize a Poisson problem.

        Args:
            level: Grid level, n = 2^level + 1 points per side
            h: Grid spacing
            modes: Number of sine periods of the manufactured solution
            dtype: float32 or float64
        """
        if level < 1:
            raise ValueError(f"Problem level must be >= 1, got {level}")
        validate_spacing(h)

        self.level = level
        self.h = float(h)
        self.modes = modes
        self.n = grid_size(level)
        self.dtype = resolve_dtype(dtype)

        self.u = allocate_grid(self.n, self.dtype)
        self.f = allocate_grid(self.n, self.dtype)
        self.r = allocate_grid(self.n, self.dtype)
        forcing_function(self.f, self.n, self.h, self.modes)

        logger.info(f"Created Poisson problem: {self.n}x{self.n}, h={self.h:.6e}, "
                    f"modes={self.modes}, dtype={self.dtype}")

    @classmethod
    def on_unit_square(
        cls,
        level: int,
        modes: float = 1.0,
        dtype: Union[str, np.dtype, type] = np.float64
    ) -> 'PoissonProblem':
        """Problem on [0, 1]², h = 1 / 2^level."""
        return cls(level, 1.0 / (1 << level), modes, dtype)

    @classmethod
    def from_config(cls, config: 'ProblemConfig') -> 'PoissonProblem':
        """Create a problem from a ``ProblemConfig``."""
        if config.spacing is None:
            return cls.on_unit_square(config.level, config.modes, config.dtype)
        return cls(config.level, config.spacing, config.modes, config.dtype)

    def residual(self) -> np.ndarray:
        """Refresh and return the residual r = f - Lu."""
        return poisson_residual(self.r, self.u, self.f, self.n, self.h)

    def norm(self) -> float:
        """Weighted L1 norm of the last computed residual."""
        return grid_l1norm(self.r, self.h, self.h)

    def error(self) -> float:
        """Weighted L1 norm of u minus the manufactured exact solution."""
        exact = exact_solution(allocate_grid(self.n, self.dtype), self.n, self.h, self.modes)
        difference = grid_subtract(exact, self.u, exact)
        return grid_l1norm(difference, self.h, self.h)

    def reset(self) -> None:
        """Reset the solution to the zero initial guess."""
        self.u.fill(0)
        self.r.fill(0)

    def __str__(self) -> str:
        return f"PoissonProblem({self.n}x{self.n}, h={self.h:.6f}, modes={self.modes})"

    def __repr__(self) -> str:
        return (f"PoissonProblem(level={self.level}, h={self.h}, modes={self.modes}, "
                f"dtype={self.dtype})")
