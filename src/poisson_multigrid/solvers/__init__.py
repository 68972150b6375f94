"""Multigrid V-cycle and relaxation smoothers."""

from .base import Smoother, ConvergenceHistory
from .multigrid import MultigridSolver, multigrid_v_cycle, base_case
from .smoothers import (
    GaussSeidel, GaussSeidelRedBlack, SMOOTHERS, create_smoother,
    gauss_seidel, gauss_seidel_red_black
)

__all__ = [
    "Smoother",
    "ConvergenceHistory",
    "MultigridSolver",
    "multigrid_v_cycle",
    "base_case",
    "GaussSeidel",
    "GaussSeidelRedBlack",
    "SMOOTHERS",
    "create_smoother",
    "gauss_seidel",
    "gauss_seidel_red_black",
]
