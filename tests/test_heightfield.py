"""
Tests for the double-buffered heightfield.
"""

import pytest
import numpy as np
from py_wavesphere.core.heightfield import HeightfieldGrid


class TestHeightfieldGrid:
    """Test grid construction and buffer handling."""

    def test_initialization(self):
        """Test default grid is allocated to zero."""
        grid = HeightfieldGrid()

        assert grid.shape == (256, 128)
        assert grid.current.shape == (256, 128)
        assert grid.previous.shape == (256, 128)
        assert np.all(grid.current == 0)
        assert np.all(grid.previous == 0)

    @pytest.mark.parametrize("cols,rows", [(0, 10), (-1, 10), (10, 2), (10, 0)])
    def test_invalid_dimensions_fail_fast(self, cols, rows):
        """Test construction rejects unusable dimensions."""
        with pytest.raises(ValueError):
            HeightfieldGrid(cols, rows)

    def test_minimum_dimensions(self):
        """Test one column and three rows is accepted."""
        grid = HeightfieldGrid(1, 3)
        assert grid.shape == (1, 3)

    def test_get_set(self):
        """Test accessors read and write the current buffer."""
        grid = HeightfieldGrid(4, 5)
        grid.set(2, 3, 7.5)

        assert grid.get(2, 3) == 7.5
        assert grid.current[2, 3] == 7.5
        assert grid.get_previous(2, 3) == 0.0

    def test_swap_rotates_roles(self):
        """Test swap exchanges buffers without copying."""
        grid = HeightfieldGrid(4, 5)
        grid.set(1, 1, 1.0)
        grid.set_previous(1, 1, 2.0)
        current_before = grid.current

        grid.swap()

        assert grid.get(1, 1) == 2.0
        assert grid.get_previous(1, 1) == 1.0
        assert np.shares_memory(grid.previous, current_before)

    def test_buffers_never_alias(self):
        """Test current and previous are distinct memory after any number of swaps."""
        grid = HeightfieldGrid(4, 5)
        for _ in range(3):
            assert not np.shares_memory(grid.current, grid.previous)
            grid.swap()

    def test_energy_and_reset(self):
        """Test energy diagnostics and reset."""
        grid = HeightfieldGrid(4, 5)
        grid.set(0, 1, 3.0)
        grid.set_previous(0, 2, 4.0)

        assert grid.energy() == 9.0
        assert grid.total_energy() == 25.0

        grid.reset()
        assert grid.total_energy() == 0.0

    def test_snapshot_is_a_copy(self):
        """Test snapshots do not follow later writes."""
        grid = HeightfieldGrid(4, 5)
        grid.set(1, 1, 1.0)
        snap = grid.snapshot()
        grid.set(1, 1, 5.0)

        assert snap.current[1, 1] == 1.0
        assert not snap.equals(grid.snapshot())
