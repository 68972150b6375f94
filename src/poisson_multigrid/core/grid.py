"""Grid storage and hierarchy layout for multigrid methods."""

import numpy as np
from typing import List, Union
import logging

logger = logging.getLogger(__name__)


class GridAllocationError(MemoryError):
    """Raised when storage for a grid or hierarchy buffer cannot be obtained."""


class BoundaryViolationError(ValueError):
    """Raised when a grid carries non-zero values on its Dirichlet boundary."""


def grid_size(level: int) -> int:
    """Return the number of points per side, 2^level + 1, of a grid on ``level``."""
    if level < 0:
        raise ValueError(f"Grid level must be non-negative, got {level}")
    return (1 << level) + 1


def level_from_size(n: int) -> int:
    """
    Return the level of a grid with ``n`` points per side.

    Args:
        n: Points per side

    Returns:
        Level l >= 1 with n == 2^l + 1
    """
    if n < 3 or (n - 1) & (n - 2) != 0:
        raise ValueError(f"Grid size {n} is not of the form 2^l + 1 with l >= 1")
    return (n - 1).bit_length() - 1


def multigrid_size(level: int) -> int:
    """
    Combined number of points of all grids on levels 0..level.

    This bounds the storage needed for one grid per level of a hierarchy.
    """
    return sum(grid_size(i) ** 2 for i in range(level + 1))


def level_offsets(level: int) -> List[int]:
    """
    Offsets of each level's region inside a hierarchy buffer.

    The region of level k is ``[offsets[k], offsets[k] + grid_size(k)**2)``,
    so coarser levels sit in front of finer ones.
    """
    offsets = []
    total = 0
    for i in range(level + 1):
        offsets.append(total)
        total += grid_size(i) ** 2
    return offsets


def resolve_dtype(dtype: Union[str, np.dtype, type]) -> np.dtype:
    """Normalize a dtype specification; only float32 and float64 are supported."""
    resolved = np.dtype(dtype)
    if resolved not in (np.dtype(np.float32), np.dtype(np.float64)):
        raise ValueError(f"Unsupported dtype: {resolved}")
    return resolved


def allocate_buffer(size: int, dtype: Union[str, np.dtype, type] = np.float64) -> np.ndarray:
    """
    Allocate a zeroed flat buffer.

    Args:
        size: Number of scalars
        dtype: float32 or float64

    Returns:
        Zero-initialized 1-D array
    """
    if size <= 0:
        raise ValueError(f"Buffer size must be positive, got {size}")

    dtype = resolve_dtype(dtype)
    message = f"Cannot allocate {size} scalars ({size * dtype.itemsize} bytes) of {dtype}"
    if size * dtype.itemsize > np.iinfo(np.intp).max:
        raise GridAllocationError(f"{message}: exceeds the addressable size")

    try:
        buffer = np.zeros(size, dtype=dtype)
    except (MemoryError, ValueError) as exc:
        # numpy rejects some oversized requests with ValueError ("array is too big")
        raise GridAllocationError(message) from exc

    logger.debug(f"Allocated buffer: {size} x {dtype}")
    return buffer


def allocate_grid(n: int, dtype: Union[str, np.dtype, type] = np.float64) -> np.ndarray:
    """Allocate a zeroed ``(n, n)`` grid."""
    level_from_size(n)
    return allocate_buffer(n * n, dtype).reshape(n, n)


def grid_view(buffer: np.ndarray, offset: int, n: int) -> np.ndarray:
    """
    Return the ``(n, n)`` grid stored at ``offset`` of a flat buffer.

    The result is a view: writes through it land in ``buffer``.
    """
    end = offset + n * n
    if offset < 0 or end > buffer.size:
        raise ValueError(
            f"Grid region [{offset}, {end}) lies outside buffer of size {buffer.size}"
        )
    return buffer[offset:end].reshape(n, n)


def validate_grid(grid: np.ndarray, n: int, name: str = "grid") -> None:
    """Check that ``grid`` is an ``(n, n)`` array with n = 2^l + 1."""
    level_from_size(n)
    if grid.ndim != 2 or grid.shape != (n, n):
        raise ValueError(f"{name} has shape {grid.shape}, expected ({n}, {n})")


def validate_spacing(h: float) -> None:
    """Check that the grid spacing is finite and positive."""
    if not np.isfinite(h) or h <= 0:
        raise ValueError(f"Grid spacing must be finite and positive, got {h}")


def check_zero_boundary(grid: np.ndarray, name: str = "grid") -> None:
    """Raise if any boundary row or column of ``grid`` is non-zero."""
    if (np.any(grid[0, :]) or np.any(grid[-1, :]) or
            np.any(grid[:, 0]) or np.any(grid[:, -1])):
        raise BoundaryViolationError(f"{name} has non-zero boundary values")


def clear_boundary(grid: np.ndarray) -> np.ndarray:
    """Set the boundary rows and columns of ``grid`` to zero."""
    grid[0, :] = 0
    grid[-1, :] = 0
    grid[:, 0] = 0
    grid[:, -1] = 0
    return grid


def grid_subtract(dst: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Elementwise ``dst := a - b``."""
    if a.shape != b.shape or dst.shape != a.shape:
        raise ValueError(f"Shape mismatch: {dst.shape} := {a.shape} - {b.shape}")
    np.subtract(a, b, out=dst)
    return dst


def grid_l1norm(grid: np.ndarray, hx: float, hy: float) -> float:
    """
    Discrete L1 norm weighted by the cell area.

    Returns:
        hx * hy * sum(|grid|)
    """
    return float(hx * hy * np.sum(np.abs(grid)))
