"""Grid transfer operators for multigrid methods.

Both transfers blend into their destination, ``dst := alpha*dst + beta*T(src)``,
and touch interior points only. Boundary cells of either grid are taken as the
homogeneous Dirichlet value zero.
"""

import numpy as np
from numba import njit
import logging

from .base import BaseOperator
from ..core.grid import validate_grid

logger = logging.getLogger(__name__)


@njit
def _blend(old, value, alpha, beta):
    # alpha == 0 must not propagate whatever the destination held
    if alpha == 0.0:
        return beta * value
    return alpha * old + beta * value


@njit
def _full_weighting_kernel(dst, dst_n, src, alpha, beta):
    for ic in range(1, dst_n - 1):
        i = 2 * ic
        for jc in range(1, dst_n - 1):
            j = 2 * jc
            value = (
                0.25 * src[i, j] +
                0.125 * (src[i - 1, j] + src[i + 1, j] + src[i, j - 1] + src[i, j + 1]) +
                0.0625 * (src[i - 1, j - 1] + src[i - 1, j + 1] +
                          src[i + 1, j - 1] + src[i + 1, j + 1])
            )
            dst[ic, jc] = _blend(dst[ic, jc], value, alpha, beta)


@njit
def _injection_kernel(dst, dst_n, src, alpha, beta):
    for ic in range(1, dst_n - 1):
        for jc in range(1, dst_n - 1):
            dst[ic, jc] = _blend(dst[ic, jc], src[2 * ic, 2 * jc], alpha, beta)


@njit
def _coarse_value(src, src_n, i, j):
    if i <= 0 or j <= 0 or i >= src_n - 1 or j >= src_n - 1:
        return 0.0
    return src[i, j]


@njit
def _bilinear_kernel(dst, dst_n, src, src_n, alpha, beta):
    for i in range(1, dst_n - 1):
        ic = i // 2
        for j in range(1, dst_n - 1):
            jc = j // 2
            if i % 2 == 0 and j % 2 == 0:
                value = _coarse_value(src, src_n, ic, jc)
            elif i % 2 == 1 and j % 2 == 0:
                value = 0.5 * (_coarse_value(src, src_n, ic, jc) +
                               _coarse_value(src, src_n, ic + 1, jc))
            elif i % 2 == 0 and j % 2 == 1:
                value = 0.5 * (_coarse_value(src, src_n, ic, jc) +
                               _coarse_value(src, src_n, ic, jc + 1))
            else:
                value = 0.25 * (_coarse_value(src, src_n, ic, jc) +
                                _coarse_value(src, src_n, ic + 1, jc) +
                                _coarse_value(src, src_n, ic, jc + 1) +
                                _coarse_value(src, src_n, ic + 1, jc + 1))
            dst[i, j] = _blend(dst[i, j], value, alpha, beta)


def _check_transfer(dst: np.ndarray, dst_n: int, src: np.ndarray, src_n: int,
                    coarse_n: int, fine_n: int) -> None:
    validate_grid(dst, dst_n, "dst")
    validate_grid(src, src_n, "src")
    if coarse_n != (fine_n - 1) // 2 + 1:
        raise ValueError(f"Cannot transfer between {fine_n}x{fine_n} and {coarse_n}x{coarse_n} grids")


def grid_restrict(
    dst: np.ndarray,
    dst_n: int,
    src: np.ndarray,
    src_n: int,
    alpha: float = 0.0,
    beta: float = 1.0
) -> np.ndarray:
    """
    Full-weighting restriction from a fine grid onto the next coarser grid.

    Args:
        dst: Coarse grid, dst_n = (src_n - 1)/2 + 1 points per side
        dst_n: Coarse points per side
        src: Fine grid
        src_n: Fine points per side
        alpha: Weight of the existing destination values
        beta: Weight of the restricted values

    Returns:
        ``dst``
    """
    _check_transfer(dst, dst_n, src, src_n, dst_n, src_n)
    _full_weighting_kernel(dst, dst_n, src, alpha, beta)
    return dst


def grid_inject(
    dst: np.ndarray,
    dst_n: int,
    src: np.ndarray,
    src_n: int,
    alpha: float = 0.0,
    beta: float = 1.0
) -> np.ndarray:
    """Injection restriction: coarse point (i, j) takes fine point (2i, 2j)."""
    _check_transfer(dst, dst_n, src, src_n, dst_n, src_n)
    _injection_kernel(dst, dst_n, src, alpha, beta)
    return dst


def grid_prolongate(
    dst: np.ndarray,
    dst_n: int,
    src: np.ndarray,
    src_n: int,
    alpha: float = 1.0,
    beta: float = 1.0
) -> np.ndarray:
    """
    Bilinear prolongation from a coarse grid onto the next finer grid.

    Args:
        dst: Fine grid, dst_n = 2*(src_n - 1) + 1 points per side
        dst_n: Fine points per side
        src: Coarse grid
        src_n: Coarse points per side
        alpha: Weight of the existing destination values
        beta: Weight of the interpolated values

    Returns:
        ``dst``
    """
    _check_transfer(dst, dst_n, src, src_n, src_n, dst_n)
    _bilinear_kernel(dst, dst_n, src, src_n, alpha, beta)
    return dst


class RestrictionOperator(BaseOperator):
    """
    Restriction operator: transfers data from fine grid to coarse grid.

    Implements I_{2h}^h using weighted averaging (full weighting) or injection.
    """

    _KERNELS = {
        "full_weighting": grid_restrict,
        "injection": grid_inject,
    }

    def __init__(self, method: str = "full_weighting"):
        """
        Initialize restriction operator.

        Args:
            method: Restriction method ('full_weighting', 'injection')
        """
        if method not in self._KERNELS:
            raise ValueError(f"Unknown restriction method: {method}")

        super().__init__(f"Restriction({method})")
        self.method = method

    def can_apply(self, dst_n: int, src_n: int) -> bool:
        """True if a fine grid of size ``src_n`` coarsens to ``dst_n``."""
        return src_n >= 5 and (src_n - 1) % 2 == 0 and dst_n == (src_n - 1) // 2 + 1

    def apply(
        self,
        dst: np.ndarray,
        dst_n: int,
        src: np.ndarray,
        src_n: int,
        alpha: float = 0.0,
        beta: float = 1.0
    ) -> np.ndarray:
        """Apply restriction, ``dst := alpha*dst + beta*R(src)``."""
        self._KERNELS[self.method](dst, dst_n, src, src_n, alpha, beta)
        logger.debug(f"Applied {self.method} restriction: {src_n}x{src_n} -> {dst_n}x{dst_n}")
        return dst


class ProlongationOperator(BaseOperator):
    """
    Prolongation operator: transfers data from coarse grid to fine grid.

    Implements I_h^{2h} using bilinear interpolation.
    """

    def __init__(self, method: str = "bilinear"):
        """
        Initialize prolongation operator.

        Args:
            method: Prolongation method ('bilinear')
        """
        if method != "bilinear":
            raise ValueError(f"Unknown prolongation method: {method}")

        super().__init__(f"Prolongation({method})")
        self.method = method

    def can_apply(self, dst_n: int, src_n: int) -> bool:
        """True if a coarse grid of size ``src_n`` refines to ``dst_n``."""
        return src_n >= 3 and dst_n == 2 * (src_n - 1) + 1

    def apply(
        self,
        dst: np.ndarray,
        dst_n: int,
        src: np.ndarray,
        src_n: int,
        alpha: float = 1.0,
        beta: float = 1.0
    ) -> np.ndarray:
        """Apply prolongation, ``dst := alpha*dst + beta*P(src)``."""
        grid_prolongate(dst, dst_n, src, src_n, alpha, beta)
        logger.debug(f"Applied {self.method} prolongation: {src_n}x{src_n} -> {dst_n}x{dst_n}")
        return dst
