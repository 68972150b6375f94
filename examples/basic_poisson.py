"""
Basic example: Solve the 2D Poisson equation with multigrid V-cycles.

Problem: u_xx + u_yy = f in Ω = [0,1]²
         u = 0 on ∂Ω

Exact solution: u(x,y) = sin(2πx)sin(2πy)
RHS: f(x,y) = -8π²sin(2πx)sin(2πy)
"""

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from poisson_multigrid import PoissonProblem, MultigridSolver, create_smoother
from poisson_multigrid.applications import exact_solution
from poisson_multigrid.core import allocate_grid, multigrid_size
from poisson_multigrid.utils import setup_logging


def main(level=7, cycles=15):
    """Solve the manufactured problem with both smoothers."""

    setup_logging("WARNING")

    print("=" * 60)
    print("Geometric Multigrid - Poisson 2D Example")
    print("=" * 60)

    histories = {}
    for kind in ["gauss_seidel", "red_black"]:
        problem = PoissonProblem.on_unit_square(level)
        solver = MultigridSolver(problem, create_smoother(kind))

        print(f"\n{solver.name} on {problem}")
        print(f"Hierarchy storage: {multigrid_size(level)} scalars per buffer")

        problem.residual()
        residuals = [problem.norm()]
        for cycle in range(1, cycles + 1):
            solver(problem)
            problem.residual()
            residuals.append(problem.norm())
            print(f"  cycle {cycle:2d}: residual = {residuals[-1]:.3e}, "
                  f"ratio = {residuals[-1] / residuals[-2]:.3f}")

        print(f"Error vs exact solution: {problem.error():.3e}")
        histories[solver.name] = residuals

    create_plots(problem, histories)
    return histories


def create_plots(problem, histories):
    """Plot the last solution, its error and the residual histories."""
    exact = exact_solution(allocate_grid(problem.n), problem.n, problem.h, problem.modes)
    x = problem.h * np.arange(problem.n)

    fig, axes = plt.subplots(1, 3, figsize=(15, 4.5))
    fig.suptitle('2D Poisson Equation - Multigrid Solution', fontsize=14)

    im1 = axes[0].contourf(x, x, problem.u, levels=20, cmap='viridis')
    axes[0].set_title('Numerical Solution')
    plt.colorbar(im1, ax=axes[0])

    im2 = axes[1].contourf(x, x, problem.u - exact, levels=20, cmap='RdBu')
    axes[1].set_title('Error (Numerical - Exact)')
    plt.colorbar(im2, ax=axes[1])

    for name, residuals in histories.items():
        axes[2].semilogy(residuals, marker='o', markersize=4, label=name)
    axes[2].set_title('Convergence History')
    axes[2].set_xlabel('V-cycle')
    axes[2].set_ylabel('Residual L1 norm')
    axes[2].grid(True, alpha=0.3)
    axes[2].legend()

    plt.tight_layout()

    output_file = Path(__file__).parent / 'poisson_2d_results.png'
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"\nPlots saved to: {output_file}")


if __name__ == "__main__":
    main()
