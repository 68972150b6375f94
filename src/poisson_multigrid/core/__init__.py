"""Grid storage and hierarchy layout."""

from .grid import (
    GridAllocationError, BoundaryViolationError,
    grid_size, level_from_size, multigrid_size, level_offsets,
    allocate_buffer, allocate_grid, grid_view,
    validate_grid, validate_spacing, check_zero_boundary, clear_boundary,
    grid_subtract, grid_l1norm, resolve_dtype
)

__all__ = [
    "GridAllocationError",
    "BoundaryViolationError",
    "grid_size",
    "level_from_size",
    "multigrid_size",
    "level_offsets",
    "allocate_buffer",
    "allocate_grid",
    "grid_view",
    "validate_grid",
    "validate_spacing",
    "check_zero_boundary",
    "clear_boundary",
    "grid_subtract",
    "grid_l1norm",
    "resolve_dtype",
]
