"""Geometric multigrid V-cycle and its buffer manager."""

import numpy as np
from typing import List, Optional, TYPE_CHECKING
import logging

from .base import ConvergenceHistory, Smoother
from .smoothers import GaussSeidel, create_smoother
from ..core.grid import (
    allocate_buffer, check_zero_boundary, clear_boundary, grid_size, grid_view,
    level_offsets, multigrid_size, validate_grid, validate_spacing
)
from ..operators.laplacian import poisson_residual
from ..operators.transfer import ProlongationOperator, RestrictionOperator
from ..utils.performance import Timer

if TYPE_CHECKING:
    from ..applications.poisson_problem import PoissonProblem
    from ..config.settings import SolverConfig

logger = logging.getLogger(__name__)


def base_case(u: np.ndarray, f: np.ndarray, h: float) -> None:
    """Closed-form coarsest-level update of the single interior point of a 3x3 grid."""
    u[1, 1] = -0.5 * f[1, 1] * h * h


def multigrid_v_cycle(
    level: int,
    smoother: Smoother,
    u: np.ndarray,
    f: np.ndarray,
    r: np.ndarray,
    v: np.ndarray,
    w: np.ndarray,
    h: float,
    offsets: List[int],
    restriction: RestrictionOperator,
    prolongation: ProlongationOperator,
    debug: bool = False
) -> None:
    """
    Apply one V(1,1)-cycle to ``u`` in place.

    The coarse-grid error of level l-1 lives in the level l-1 region of ``v``
    and the restricted residual in the level l-1 region of ``w``; the finest
    grid of the residual scratch ``r`` is reused on every level. Nothing is
    allocated during the recursion.

    Args:
        level: Grid level of ``u`` and ``f`` (grid size 2^level + 1)
        smoother: Relaxation used for pre- and post-smoothing
        u: Solution (or error correction) on this level, mutated
        f: Right-hand side on this level
        r: Flat residual scratch of at least grid_size(level)**2 scalars
        v: Flat correction buffer laid out by ``offsets``
        w: Flat restricted-residual buffer laid out by ``offsets``
        h: Grid spacing on this level
        offsets: Region offsets per level, see ``level_offsets``
        restriction: Fine-to-coarse transfer
        prolongation: Coarse-to-fine transfer
        debug: Check the zero-boundary invariant after each stencil call
    """
    if level < 1:
        raise ValueError(f"V-cycle level must be >= 1, got {level}")

    nu = grid_size(level)
    validate_grid(u, nu, "u")
    validate_grid(f, nu, "f")
    validate_spacing(h)

    if level == 1:
        base_case(u, f, h)
        return

    nv = grid_size(level - 1)
    el = grid_view(v, offsets[level - 1], nv)
    rl = grid_view(w, offsets[level - 1], nv)
    rf = grid_view(r, 0, nu)

    logger.debug(f"V-cycle level {level}: {nu}x{nu}, h={h:.6e}")

    smoother.smooth(u, f, nu, h)
    if debug:
        check_zero_boundary(u, f"u after pre-smoothing on level {level}")

    # r^l := f - Lu^l, on a scratch view whose edges may hold finer-level values
    clear_boundary(rf)
    poisson_residual(rf, u, f, nu, h)
    if debug:
        check_zero_boundary(rf, f"residual on level {level}")

    # r^(l-1) := R r^l
    restriction.apply(rl, nv, rf, nu, 0.0, 1.0)

    # Solve A^(l-1) e^(l-1) = r^(l-1)
    multigrid_v_cycle(level - 1, smoother, el, rl, r, v, w, 2 * h, offsets,
                      restriction, prolongation, debug)

    # u^l := u^l + P e^(l-1)
    prolongation.apply(u, nu, el, nv, 1.0, 1.0)

    smoother.smooth(u, f, nu, h)
    if debug:
        check_zero_boundary(u, f"u after post-smoothing on level {level}")


class MultigridSolver:
    """
    Geometric multigrid solver bound to one problem level.

    Owns the correction buffer ``v``, the restricted-residual buffer ``w``
    (each ``multigrid_size(level)`` scalars) and a finest-grid residual
    scratch ``r``. Each call runs exactly one V-cycle on the problem.
    """

    def __init__(
        self,
        problem: 'PoissonProblem',
        smoother: Optional[Smoother] = None,
        restriction: Optional[RestrictionOperator] = None,
        prolongation: Optional[ProlongationOperator] = None,
        debug: bool = False
    ):
        """
        Initialize multigrid solver.

        Args:
            problem: Problem whose level and dtype size the buffers
            smoother: Smoother for pre- and post-smoothing (default: Gauss-Seidel)
            restriction: Restriction operator (default: full weighting)
            prolongation: Prolongation operator (default: bilinear)
            debug: Check the zero-boundary invariant during each cycle
        """
        if problem.level < 1:
            raise ValueError(f"Problem level must be >= 1, got {problem.level}")
        if problem.n != grid_size(problem.level):
            raise ValueError(f"Problem size {problem.n} does not match level {problem.level}")

        self.level = problem.level
        self.smoother = smoother if smoother is not None else GaussSeidel()
        self.restriction = restriction if restriction is not None else RestrictionOperator()
        self.prolongation = prolongation if prolongation is not None else ProlongationOperator()
        self.debug = debug

        self.offsets = level_offsets(self.level)
        self.num_scalars = multigrid_size(self.level)
        dtype = problem.u.dtype
        self.v = allocate_buffer(self.num_scalars, dtype)
        self.w = allocate_buffer(self.num_scalars, dtype)
        self.r = allocate_buffer(problem.n * problem.n, dtype)

        logger.info(f"Initialized {self.name}: level={self.level}, "
                    f"hierarchy buffers={self.num_scalars} x {dtype}")

    @classmethod
    def from_config(cls, problem: 'PoissonProblem', config: 'SolverConfig') -> 'MultigridSolver':
        """Create a solver for ``problem`` from a ``SolverConfig``."""
        config.validate()
        return cls(
            problem,
            smoother=create_smoother(config.smoother),
            restriction=RestrictionOperator(config.restriction_method),
            prolongation=ProlongationOperator(config.prolongation_method),
            debug=config.debug_checks
        )

    @property
    def name(self) -> str:
        """Solver name including the smoother."""
        return f"Multi-Grid<{self.smoother.name}>"

    def __call__(self, problem: 'PoissonProblem') -> None:
        """Run one V-cycle on ``problem``, updating ``problem.u`` in place."""
        if self.v is None:
            raise RuntimeError(f"{self.name} buffers have been released")
        if problem.level != self.level:
            raise ValueError(f"Solver built for level {self.level}, got problem on level {problem.level}")

        self.v.fill(0)
        self.w.fill(0)
        multigrid_v_cycle(self.level, self.smoother, problem.u, problem.f, self.r,
                          self.v, self.w, problem.h, self.offsets,
                          self.restriction, self.prolongation, self.debug)

    cycle = __call__

    def solve(
        self,
        problem: 'PoissonProblem',
        max_cycles: int = 20,
        tolerance: float = 1e-10
    ) -> ConvergenceHistory:
        """
        Run V-cycles until the residual norm drops below ``tolerance``.

        Args:
            problem: Problem to solve, ``problem.u`` is the initial guess
            max_cycles: Maximum number of V-cycles
            tolerance: Threshold on ``problem.norm()``

        Returns:
            Convergence history with one entry per cycle
        """
        if max_cycles <= 0:
            raise ValueError("max_cycles must be positive")

        history = ConvergenceHistory()

        for iteration in range(1, max_cycles + 1):
            with Timer(f"{self.name} cycle {iteration}") as timer:
                self(problem)
                problem.residual()
                residual_norm = problem.norm()

            history.record_iteration(residual_norm, timer.elapsed_time)
            logger.debug(f"{self.name} cycle {iteration}: residual = {residual_norm:.2e}")

            if residual_norm < tolerance:
                history.converged = True
                logger.info(f"{self.name} converged in {iteration} cycles: "
                            f"residual = {residual_norm:.2e}")
                break
        else:
            logger.warning(f"{self.name} reached max cycles ({max_cycles}): "
                           f"residual = {history.final_residual:.2e}")

        return history

    def release(self) -> None:
        """Drop the owned buffers; the solver cannot cycle afterwards."""
        self.v = self.w = self.r = None
        logger.debug(f"Released {self.name} buffers")

    def __repr__(self) -> str:
        return f"MultigridSolver(level={self.level}, smoother={self.smoother!r})"
