"""Discrete operators for multigrid methods."""

from .laplacian import LaplacianOperator, poisson_residual
from .transfer import (
    RestrictionOperator, ProlongationOperator,
    grid_restrict, grid_inject, grid_prolongate
)
from .base import BaseOperator

__all__ = [
    "LaplacianOperator",
    "RestrictionOperator",
    "ProlongationOperator",
    "BaseOperator",
    "poisson_residual",
    "grid_restrict",
    "grid_inject",
    "grid_prolongate",
]
