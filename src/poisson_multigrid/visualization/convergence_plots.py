"""Convergence visualization tools for residual history and grid convergence."""

import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from typing import Dict, Optional, Sequence
import logging
import os

from ..applications.convergence_study import ConvergenceData, average_convergence_factor

logger = logging.getLogger(__name__)


class ConvergencePlotter:
    """
    Convergence plots for the multigrid solver.

    Residual histories per cycle, and error against grid spacing with an
    O(h²) reference slope.
    """

    def __init__(self, output_dir: str = "plots"):
        """Initialize convergence plotter."""
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        self.colors = matplotlib.colormaps["tab10"].colors
        self.markers = ['o', 's', '^', 'v', 'D', '<', '>', 'p']

    def plot_residual_history(
        self,
        residual_histories: Dict[str, Sequence[float]],
        title: str = "Multigrid Convergence",
        save_name: Optional[str] = None
    ) -> plt.Figure:
        """
        Plot residual norm against V-cycle count on a log scale.

        Args:
            residual_histories: Dict of {solver_name: residual norms}
            title: Plot title
            save_name: Filename to save inside ``output_dir``

        Returns:
            Matplotlib figure object
        """
        fig, ax = plt.subplots(figsize=(8, 6))

        for i, (solver_name, residuals) in enumerate(residual_histories.items()):
            residuals = np.asarray(residuals, dtype=float)
            factor = average_convergence_factor(residuals)
            ax.semilogy(np.arange(len(residuals)), residuals,
                        color=self.colors[i % len(self.colors)],
                        marker=self.markers[i % len(self.markers)],
                        linewidth=2, markersize=5,
                        label=f"{solver_name} (ρ≈{factor:.3f})")

        ax.set_xlabel("V-cycle", fontsize=12)
        ax.set_ylabel("Residual L1 norm", fontsize=12)
        ax.set_title(title, fontsize=14)
        ax.grid(True, alpha=0.3)
        ax.legend(loc='best')
        fig.tight_layout()

        if save_name:
            self._save_figure(fig, save_name)

        return fig

    def plot_grid_convergence(
        self,
        results: Sequence[ConvergenceData],
        title: str = "Grid Convergence",
        save_name: Optional[str] = None
    ) -> plt.Figure:
        """Plot error against grid spacing with an O(h²) reference line."""
        if not results:
            raise ValueError("No convergence results to plot")

        h = np.array([data.h for data in results])
        errors = np.array([data.error for data in results])

        fig, ax = plt.subplots(figsize=(8, 6))
        ax.loglog(h, errors, color=self.colors[0], marker='o', linewidth=2, label="Error")
        ax.loglog(h, errors[0] * (h / h[0]) ** 2, 'k--', alpha=0.7, label="O(h²)")

        ax.set_xlabel("Grid spacing h", fontsize=12)
        ax.set_ylabel("Error L1 norm", fontsize=12)
        ax.set_title(title, fontsize=14)
        ax.grid(True, which='both', alpha=0.3)
        ax.legend(loc='best')
        fig.tight_layout()

        if save_name:
            self._save_figure(fig, save_name)

        return fig

    def _save_figure(self, fig: plt.Figure, save_name: str) -> str:
        path = os.path.join(self.output_dir, save_name)
        fig.savefig(path, dpi=150, bbox_inches='tight')
        logger.info(f"Saved figure to {path}")
        return path
