"""Manufactured sinusoidal solution of the Poisson equation.

u(x, y) = sin(s x) sin(s y) with s = 2π·modes / L on a square of side
L = h (n - 1), so that Lu = u_xx + u_yy = -2 s² u. Integer mode counts give
u = 0 on the boundary.
"""

import numpy as np

from ..core.grid import validate_grid, validate_spacing


def _wavenumber(n: int, h: float, modes: float) -> float:
    return 2.0 * np.pi * modes / (h * (n - 1))


def _interior_profile(n: int, h: float, modes: float) -> np.ndarray:
    s = _wavenumber(n, h, modes)
    return np.sin(s * h * np.arange(1, n - 1))


def forcing_function(f: np.ndarray, n: int, h: float, modes: float = 1.0) -> np.ndarray:
    """
    Fill ``f`` with f = -2 s² sin(s h i) sin(s h j) on the interior.

    Boundary cells are set to zero.
    """
    validate_grid(f, n, "f")
    validate_spacing(h)

    s = _wavenumber(n, h, modes)
    profile = _interior_profile(n, h, modes)
    f.fill(0)
    f[1:-1, 1:-1] = -2.0 * s * s * np.outer(profile, profile)
    return f


def exact_solution(u: np.ndarray, n: int, h: float, modes: float = 1.0) -> np.ndarray:
    """Fill ``u`` with u = sin(s h j) sin(s h i) on the interior, zero on the boundary."""
    validate_grid(u, n, "u")
    validate_spacing(h)

    profile = _interior_profile(n, h, modes)
    u.fill(0)
    u[1:-1, 1:-1] = np.outer(profile, profile)
    return u
