"""Unit tests for convergence plots."""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from poisson_multigrid.applications import ConvergenceData
from poisson_multigrid.visualization import ConvergencePlotter


def _results():
    return [
        ConvergenceData(level=l, n=2 ** l + 1, h=2.0 ** -l, cycles=12, residual=1e-11,
                        error=0.02 * 4.0 ** (3 - l), converged=True)
        for l in range(3, 7)
    ]


class TestConvergencePlotter:
    """Test cases for the plotter."""

    def test_residual_history(self, tmp_path):
        """One line per solver, saved under the output directory."""
        plotter = ConvergencePlotter(str(tmp_path / "plots"))
        fig = plotter.plot_residual_history(
            {"Multi-Grid<Gauss-Seidel>": [30.0, 5.0, 0.8, 0.1],
             "Multi-Grid<Gauss-Seidel (red-black)>": [30.0, 4.0, 0.5, 0.06]},
            save_name="history.png"
        )

        assert len(fig.axes[0].get_lines()) == 2
        assert (tmp_path / "plots" / "history.png").exists()
        plt.close(fig)

    def test_grid_convergence(self, tmp_path):
        """Error curve plus the O(h²) reference."""
        plotter = ConvergencePlotter(str(tmp_path))
        fig = plotter.plot_grid_convergence(_results())

        lines = fig.axes[0].get_lines()
        assert len(lines) == 2
        assert lines[1].get_label() == "O(h²)"
        plt.close(fig)

    def test_grid_convergence_requires_results(self, tmp_path):
        """An empty study cannot be plotted."""
        with pytest.raises(ValueError, match="No convergence results"):
            ConvergencePlotter(str(tmp_path)).plot_grid_convergence([])


if __name__ == "__main__":
    pytest.main([__file__])
