"""Plotting tools for multigrid convergence results."""

from .convergence_plots import ConvergencePlotter

__all__ = ["ConvergencePlotter"]
