"""Base classes for relaxation smoothers and convergence tracking."""

from abc import ABC, abstractmethod
import numpy as np
from typing import Dict, Any, List, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from ..applications.poisson_problem import PoissonProblem

logger = logging.getLogger(__name__)


class ConvergenceHistory:
    """Track residual and error norms over successive cycles."""

    def __init__(self):
        """Initialize convergence history."""
        self.residual_norms: List[float] = []
        self.iteration_times: List[float] = []
        self.converged = False

    def record_iteration(self, residual_norm: float, iteration_time: float) -> None:
        """Record an iteration."""
        self.residual_norms.append(residual_norm)
        self.iteration_times.append(iteration_time)

    @property
    def iterations(self) -> int:
        """Number of recorded iterations."""
        return len(self.residual_norms)

    @property
    def final_residual(self) -> float:
        """Residual norm after the last recorded iteration."""
        return self.residual_norms[-1] if self.residual_norms else float('inf')

    def get_convergence_rate(self) -> float:
        """Estimate asymptotic convergence rate."""
        if len(self.residual_norms) < 3:
            return 0.0

        # Use last few iterations to estimate rate
        recent_residuals = self.residual_norms[-5:]

        ratios = []
        for i in range(1, len(recent_residuals)):
            if recent_residuals[i-1] > 0:
                ratio = recent_residuals[i] / recent_residuals[i-1]
                if 0 < ratio < 1:  # Converging
                    ratios.append(ratio)

        return float(np.mean(ratios)) if ratios else 0.0

    def get_convergence_info(self) -> Dict[str, Any]:
        """
        Get convergence information.

        Returns:
            Dictionary with convergence statistics
        """
        return {
            "converged": self.converged,
            "iterations": self.iterations,
            "final_residual": self.final_residual,
            "convergence_rate": self.get_convergence_rate(),
            "residual_history": self.residual_norms.copy(),
            "total_time": sum(self.iteration_times),
        }

    def clear(self) -> None:
        """Clear convergence history."""
        self.residual_norms.clear()
        self.iteration_times.clear()
        self.converged = False


class Smoother(ABC):
    """
    In-place relaxation sweep for the five-point Poisson stencil.

    Subclasses provide ``smooth`` and a human-readable ``name``; the
    multigrid cycle uses them only through this interface.
    """

    name = "Smoother"

    @abstractmethod
    def smooth(self, u: np.ndarray, f: np.ndarray, n: int, h: float) -> np.ndarray:
        """
        Apply one relaxation sweep to ``u`` in place.

        Args:
            u: Current solution estimate, mutated
            f: Right-hand side
            n: Points per side
            h: Grid spacing

        Returns:
            ``u``
        """
        pass

    def __call__(self, u: np.ndarray, f: np.ndarray, n: int, h: float) -> np.ndarray:
        return self.smooth(u, f, n, h)

    def relax(self, problem: 'PoissonProblem') -> None:
        """Apply one sweep to the solution of ``problem``."""
        self.smooth(problem.u, problem.f, problem.n, problem.h)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
