"""Unit tests for grid storage and hierarchy layout."""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from poisson_multigrid.core.grid import (
    BoundaryViolationError, GridAllocationError,
    allocate_buffer, allocate_grid, check_zero_boundary, clear_boundary,
    grid_l1norm, grid_size, grid_subtract, grid_view, level_from_size,
    level_offsets, multigrid_size, resolve_dtype, validate_grid, validate_spacing
)


class TestHierarchyLayout:
    """Test cases for grid sizes, hierarchy sizes and offsets."""

    @pytest.mark.parametrize("level", range(1, 11))
    def test_multigrid_size_closed_form(self, level):
        """Sum of (2^i+1)^2 for i = 0..l in closed form."""
        closed_form = (4 ** (level + 1) - 1) // 3 + 2 * (2 ** (level + 1) - 1) + (level + 1)
        assert multigrid_size(level) == closed_form

    def test_multigrid_size_direct_sum(self):
        """Direct sum for small levels."""
        assert multigrid_size(0) == 4
        assert multigrid_size(1) == 4 + 9
        assert multigrid_size(3) == 4 + 9 + 25 + 81

    def test_grid_size(self):
        """n = 2^l + 1."""
        assert [grid_size(l) for l in range(5)] == [2, 3, 5, 9, 17]

        with pytest.raises(ValueError):
            grid_size(-1)

    def test_level_from_size(self):
        """Inverse of grid_size for valid sizes."""
        for level in range(1, 12):
            assert level_from_size(grid_size(level)) == level

        for bad_size in [0, 1, 2, 4, 6, 8, 10, 16, 18]:
            with pytest.raises(ValueError, match="not of the form"):
                level_from_size(bad_size)

    def test_level_offsets(self):
        """Regions of all levels tile the hierarchy buffer without overlap."""
        offsets = level_offsets(3)
        assert offsets == [0, 4, 13, 38]

        for level in range(1, 9):
            offsets = level_offsets(level)
            assert len(offsets) == level + 1
            for k in range(level):
                assert offsets[k + 1] - offsets[k] == grid_size(k) ** 2
            assert offsets[-1] + grid_size(level) ** 2 == multigrid_size(level)


class TestAllocation:
    """Test cases for buffer allocation and views."""

    def test_allocate_buffer_zeroed(self):
        """Buffers are zero initialized with the requested dtype."""
        buffer = allocate_buffer(38, np.float32)
        assert buffer.shape == (38,)
        assert buffer.dtype == np.float32
        assert not np.any(buffer)

    def test_allocate_buffer_invalid_size(self):
        """Non-positive sizes are rejected."""
        with pytest.raises(ValueError):
            allocate_buffer(0)

    def test_allocation_failure_is_reported(self, monkeypatch):
        """A MemoryError from numpy becomes a GridAllocationError."""
        def failing_zeros(*args, **kwargs):
            raise MemoryError("out of memory")

        monkeypatch.setattr(np, "zeros", failing_zeros)

        with pytest.raises(GridAllocationError, match="Cannot allocate 81 scalars"):
            allocate_buffer(81)

        assert issubclass(GridAllocationError, MemoryError)

    @pytest.mark.parametrize("level", [30, 33, 40])
    def test_oversized_hierarchy_is_reported(self, level):
        """Requests beyond the addressable size raise GridAllocationError, not ValueError."""
        with pytest.raises(GridAllocationError, match="Cannot allocate"):
            allocate_buffer(multigrid_size(level))

    def test_numpy_value_error_is_reported(self, monkeypatch):
        """numpy's 'array is too big' ValueError becomes a GridAllocationError."""
        def failing_zeros(*args, **kwargs):
            raise ValueError("array is too big; `arr.size * arr.dtype.itemsize` is larger "
                             "than the maximum possible size.")

        monkeypatch.setattr(np, "zeros", failing_zeros)

        with pytest.raises(GridAllocationError, match="Cannot allocate 25 scalars"):
            allocate_buffer(25, np.float32)

    def test_allocate_grid(self):
        """Grids are (n, n) and n must be 2^l + 1."""
        grid = allocate_grid(9)
        assert grid.shape == (9, 9)
        assert grid.flags['C_CONTIGUOUS']

        with pytest.raises(ValueError):
            allocate_grid(8)

    def test_unsupported_dtype(self):
        """Only float32 and float64 grids are supported."""
        assert resolve_dtype("float64") == np.float64
        assert resolve_dtype(np.float32) == np.float32

        with pytest.raises(ValueError, match="Unsupported dtype"):
            resolve_dtype(np.int32)

    def test_grid_view_shares_memory(self):
        """Writes through a view land at offset + j + i*n of the buffer."""
        buffer = allocate_buffer(multigrid_size(2))
        offsets = level_offsets(2)
        view = grid_view(buffer, offsets[1], 3)

        view[2, 1] = 5.0

        assert view.shape == (3, 3)
        assert np.shares_memory(view, buffer)
        assert buffer[offsets[1] + 1 + 2 * 3] == 5.0
        assert np.count_nonzero(buffer) == 1

    def test_grid_view_out_of_range(self):
        """Regions past the end of the buffer are rejected."""
        buffer = allocate_buffer(20)
        with pytest.raises(ValueError, match="outside buffer"):
            grid_view(buffer, 12, 3)


class TestValidation:
    """Test cases for precondition checks."""

    def test_validate_grid(self):
        """Shape must be (n, n) with a valid n."""
        validate_grid(np.zeros((5, 5)), 5)

        with pytest.raises(ValueError, match="expected"):
            validate_grid(np.zeros((5, 5)), 9)

        with pytest.raises(ValueError, match="expected"):
            validate_grid(np.zeros(25), 5)

        with pytest.raises(ValueError, match="not of the form"):
            validate_grid(np.zeros((6, 6)), 6)

    @pytest.mark.parametrize("h", [0.0, -0.125, np.inf, np.nan])
    def test_validate_spacing(self, h):
        """Degenerate spacing is a precondition violation."""
        with pytest.raises(ValueError, match="spacing"):
            validate_spacing(h)

    def test_check_zero_boundary(self):
        """Any non-zero boundary value is reported."""
        grid = np.zeros((5, 5))
        grid[1:-1, 1:-1] = 3.0
        check_zero_boundary(grid)

        for index in [(0, 2), (4, 1), (3, 0), (2, 4)]:
            corrupted = grid.copy()
            corrupted[index] = 1e-30
            with pytest.raises(BoundaryViolationError, match="non-zero boundary"):
                check_zero_boundary(corrupted, "u")

    def test_clear_boundary(self):
        """Only the edges are cleared."""
        grid = np.ones((5, 5))
        clear_boundary(grid)

        check_zero_boundary(grid)
        assert np.all(grid[1:-1, 1:-1] == 1.0)


class TestGridArithmetic:
    """Test cases for diagnostics helpers."""

    def test_grid_subtract(self):
        """dst := a - b, also when dst aliases b."""
        a = np.full((3, 3), 5.0)
        b = np.full((3, 3), 2.0)

        dst = grid_subtract(np.empty((3, 3)), a, b)
        np.testing.assert_array_equal(dst, 3.0)

        grid_subtract(b, a, b)
        np.testing.assert_array_equal(b, 3.0)

        with pytest.raises(ValueError, match="Shape mismatch"):
            grid_subtract(np.empty((3, 3)), a, np.zeros((5, 5)))

    def test_grid_l1norm(self):
        """L1 norm weighted by hx * hy."""
        grid = np.ones((5, 5))
        grid[2, 2] = -3.0

        assert grid_l1norm(grid, 0.25, 0.25) == pytest.approx((24 + 3) * 0.0625)
        assert grid_l1norm(np.zeros((3, 3)), 0.5, 0.5) == 0.0


if __name__ == "__main__":
    pytest.main([__file__])
