"""Cycle-convergence and grid-convergence studies on the manufactured problem."""

import numpy as np
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Union
import logging

from .poisson_problem import PoissonProblem
from ..solvers.multigrid import MultigridSolver
from ..solvers.smoothers import create_smoother

logger = logging.getLogger(__name__)


@dataclass
class ConvergenceData:
    """Outcome of solving the manufactured problem on one level."""
    level: int
    n: int
    h: float
    cycles: int
    residual: float
    error: float
    converged: bool
    residual_history: List[float] = field(default_factory=list)

    @property
    def convergence_factor(self) -> float:
        """Average residual reduction per cycle."""
        return average_convergence_factor(self.residual_history)


def run_problem(
    level: int,
    smoother: str = "gauss_seidel",
    modes: float = 1.0,
    max_cycles: int = 30,
    tolerance: float = 1e-10,
    dtype: Union[str, np.dtype, type] = np.float64
) -> ConvergenceData:
    """
    Solve the manufactured problem on the unit square at one level.

    Args:
        level: Grid level
        smoother: Smoother tag, see ``create_smoother``
        modes: Mode count of the manufactured solution
        max_cycles: Maximum number of V-cycles
        tolerance: Residual norm threshold
        dtype: float32 or float64

    Returns:
        ConvergenceData for this level
    """
    problem = PoissonProblem.on_unit_square(level, modes, dtype)
    solver = MultigridSolver(problem, create_smoother(smoother))

    problem.residual()
    initial_residual = problem.norm()
    history = solver.solve(problem, max_cycles, tolerance)

    return ConvergenceData(
        level=level,
        n=problem.n,
        h=problem.h,
        cycles=history.iterations,
        residual=history.final_residual,
        error=problem.error(),
        converged=history.converged,
        residual_history=[initial_residual] + history.residual_norms,
    )


def grid_convergence_study(levels: Iterable[int], **kwargs) -> List[ConvergenceData]:
    """Run ``run_problem`` on each level; keyword arguments are passed through."""
    results = []
    for level in levels:
        data = run_problem(level, **kwargs)
        logger.info(f"Level {level}: n={data.n}, cycles={data.cycles}, "
                    f"residual={data.residual:.2e}, error={data.error:.4e}")
        results.append(data)
    return results


def observed_orders(results: Sequence[ConvergenceData]) -> List[float]:
    """
    Observed order of accuracy between successive levels.

    Returns:
        log2(e_l / e_(l+1)) for each consecutive pair, about 2 for O(h²)
    """
    orders = []
    for coarse, fine in zip(results[:-1], results[1:]):
        if coarse.error <= 0 or fine.error <= 0:
            orders.append(float('nan'))
        else:
            orders.append(float(np.log2(coarse.error / fine.error)))
    return orders


def convergence_factors(residuals: Sequence[float]) -> List[float]:
    """Residual ratio r_k / r_(k-1) of each cycle."""
    return [
        current / previous
        for previous, current in zip(residuals[:-1], residuals[1:])
        if previous > 0
    ]


def average_convergence_factor(residuals: Sequence[float]) -> float:
    """Geometric mean of the positive per-cycle residual ratios."""
    factors = [factor for factor in convergence_factors(residuals) if factor > 0]
    if not factors:
        return 0.0
    return float(np.exp(np.mean(np.log(factors))))
