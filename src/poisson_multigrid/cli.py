"""Command line driver: solve the manufactured Poisson problem or run a grid study."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .applications.convergence_study import (
    average_convergence_factor, grid_convergence_study, observed_orders
)
from .applications.poisson_problem import PoissonProblem
from .config.settings import MultigridConfig, create_default_config
from .core.grid import GridAllocationError
from .solvers.multigrid import MultigridSolver

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="poisson-multigrid",
        description="Solve u_xx + u_yy = f on the unit square with multigrid V-cycles"
    )
    parser.add_argument('--config', help='YAML or JSON configuration file')
    parser.add_argument('--level', type=int, help='Grid level, n = 2^level + 1')
    parser.add_argument('--smoother', choices=['gauss_seidel', 'red_black'],
                        help='Relaxation used inside the V-cycle')
    parser.add_argument('--modes', type=float, help='Mode count of the manufactured solution')
    parser.add_argument('--cycles', type=int, help='Maximum number of V-cycles')
    parser.add_argument('--tolerance', type=float, help='Residual L1 norm threshold')
    parser.add_argument('--dtype', choices=['float32', 'float64'], help='Floating point type')
    parser.add_argument('--debug-checks', action='store_true',
                        help='Check the zero-boundary invariant during each cycle')
    parser.add_argument('--study', type=int, nargs=2, metavar=('MIN', 'MAX'),
                        help='Run a grid convergence study over levels MIN..MAX')
    parser.add_argument('--plot', metavar='FILE', help='Save a convergence plot to FILE')
    parser.add_argument('--log-level', help='Logging level (DEBUG, INFO, ...)')
    parser.add_argument('--log-file', help='Also write the log to this file')
    return parser


def load_config(args: argparse.Namespace) -> MultigridConfig:
    """Build the run configuration from an optional file and command line overrides."""
    config = MultigridConfig.from_file(args.config) if args.config else create_default_config()

    overrides = [
        (config.problem, 'level', args.level),
        (config.problem, 'modes', args.modes),
        (config.problem, 'dtype', args.dtype),
        (config.solver, 'smoother', args.smoother),
        (config.solver, 'max_cycles', args.cycles),
        (config.solver, 'tolerance', args.tolerance),
        (config.logging, 'level', args.log_level),
        (config.logging, 'file_output', args.log_file),
    ]
    for section, name, value in overrides:
        if value is not None:
            setattr(section, name, value)

    if args.debug_checks:
        config.solver.debug_checks = True

    config.validate()
    return config


def run_solve(config: MultigridConfig, plot_path: Optional[str] = None) -> int:
    """Solve one problem and print the per-cycle residual table."""
    problem = PoissonProblem.from_config(config.problem)
    solver = MultigridSolver.from_config(problem, config.solver)

    problem.residual()
    residuals = [problem.norm()]
    print(f"{solver.name} on {problem}")
    print(f"{'cycle':>5}  {'residual':>12}  {'ratio':>8}")
    print(f"{0:>5}  {residuals[0]:>12.4e}")

    history = solver.solve(problem, config.solver.max_cycles, config.solver.tolerance)
    for cycle, norm in enumerate(history.residual_norms, start=1):
        previous = residuals[-1]
        ratio = norm / previous if previous > 0 else float('nan')
        print(f"{cycle:>5}  {norm:>12.4e}  {ratio:>8.4f}")
        residuals.append(norm)

    print(f"error = {problem.error():.6e}, "
          f"average factor = {average_convergence_factor(residuals):.4f}")

    if plot_path:
        fig = _plotter(plot_path).plot_residual_history({solver.name: residuals},
                                                        save_name=os.path.basename(plot_path))
        _close(fig)

    return 0 if history.converged else 1


def run_study(config: MultigridConfig, levels: List[int], plot_path: Optional[str] = None) -> int:
    """Run a grid convergence study and print error and observed order per level."""
    results = grid_convergence_study(
        range(levels[0], levels[1] + 1),
        smoother=config.solver.smoother,
        modes=config.problem.modes,
        max_cycles=config.solver.max_cycles,
        tolerance=config.solver.tolerance,
        dtype=config.problem.dtype
    )
    orders = [float('nan')] + observed_orders(results)

    print(f"{'level':>5}  {'n':>6}  {'cycles':>6}  {'residual':>12}  {'error':>12}  {'order':>6}")
    for data, order in zip(results, orders):
        print(f"{data.level:>5}  {data.n:>6}  {data.cycles:>6}  "
              f"{data.residual:>12.4e}  {data.error:>12.4e}  {order:>6.3f}")

    if plot_path:
        fig = _plotter(plot_path).plot_grid_convergence(results,
                                                        save_name=os.path.basename(plot_path))
        _close(fig)

    return 0 if all(data.converged for data in results) else 1


def _plotter(path: str):
    import matplotlib
    matplotlib.use("Agg")
    from .visualization.convergence_plots import ConvergencePlotter
    return ConvergencePlotter(os.path.dirname(path) or ".")


def _close(fig) -> None:
    import matplotlib.pyplot as plt
    plt.close(fig)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the ``poisson-multigrid`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except (ValueError, TypeError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    config.setup_logging()

    if args.study and (args.study[0] < 1 or args.study[1] < args.study[0]):
        print(f"error: invalid level range {args.study}", file=sys.stderr)
        return 2

    try:
        if args.study:
            return run_study(config, args.study, args.plot)
        return run_solve(config, args.plot)
    except GridAllocationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
