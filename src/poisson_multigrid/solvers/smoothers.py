"""Smoothing operators for multigrid methods."""

import numpy as np
from numba import njit
import logging

from .base import Smoother
from ..core.grid import validate_grid, validate_spacing

logger = logging.getLogger(__name__)


@njit
def _gauss_seidel_kernel(u, f, n, h):
    h2 = h * h
    for i in range(1, n - 1):
        for j in range(1, n - 1):
            # (i-1, j) and (i, j-1) already hold this sweep's values
            u[i, j] = 0.25 * (u[i + 1, j] + u[i - 1, j] + u[i, j + 1] + u[i, j - 1]
                              - h2 * f[i, j])


@njit
def _colored_pass_kernel(u, f, n, h, parity):
    h2 = h * h
    for i in range(1, n - 1):
        # first interior column whose (i + j) has the requested parity
        start = 1 + (i + 1 + parity) % 2
        for j in range(start, n - 1, 2):
            u[i, j] = 0.25 * (u[i + 1, j] + u[i - 1, j] + u[i, j + 1] + u[i, j - 1]
                              - h2 * f[i, j])


def _check_inputs(u: np.ndarray, f: np.ndarray, n: int, h: float) -> None:
    validate_grid(u, n, "u")
    validate_grid(f, n, "f")
    validate_spacing(h)


def gauss_seidel(u: np.ndarray, f: np.ndarray, n: int, h: float) -> np.ndarray:
    """
    One lexicographic Gauss-Seidel sweep over the interior, in place.

    Updates: u[i,j] = (u[i+1,j] + u[i-1,j] + u[i,j+1] + u[i,j-1] - h²f[i,j]) / 4
    in row-major order, so each update sees the already updated neighbours
    above and to the left.
    """
    _check_inputs(u, f, n, h)
    _gauss_seidel_kernel(u, f, n, h)
    return u


def gauss_seidel_red_black(u: np.ndarray, f: np.ndarray, n: int, h: float) -> np.ndarray:
    """
    One red-black Gauss-Seidel sweep, in place.

    The red pass updates every interior point with (i + j) even, the black
    pass every point with (i + j) odd. The black pass reads the red values
    written by the red pass.
    """
    _check_inputs(u, f, n, h)
    _colored_pass_kernel(u, f, n, h, 0)
    _colored_pass_kernel(u, f, n, h, 1)
    return u


class GaussSeidel(Smoother):
    """
    Gauss-Seidel smoother for multigrid methods.

    Updates points in lexicographic order using most recent values.
    """

    name = "Gauss-Seidel"

    def smooth(self, u: np.ndarray, f: np.ndarray, n: int, h: float) -> np.ndarray:
        return gauss_seidel(u, f, n, h)


class GaussSeidelRedBlack(Smoother):
    """Gauss-Seidel smoother with red-black (checkerboard) ordering."""

    name = "Gauss-Seidel (red-black)"

    def smooth(self, u: np.ndarray, f: np.ndarray, n: int, h: float) -> np.ndarray:
        return gauss_seidel_red_black(u, f, n, h)


SMOOTHERS = {
    "gauss_seidel": GaussSeidel,
    "red_black": GaussSeidelRedBlack,
}


def create_smoother(kind: str = "gauss_seidel") -> Smoother:
    """
    Create a smoother by tag.

    Args:
        kind: 'gauss_seidel' or 'red_black'

    Returns:
        Smoother instance
    """
    if kind not in SMOOTHERS:
        raise ValueError(f"Invalid smoother type: {kind}. Choose from {sorted(SMOOTHERS)}")

    smoother = SMOOTHERS[kind]()
    logger.debug(f"Created smoother: {smoother.name}")
    return smoother
