"""Unit tests for link length and displacement analysis."""

import numpy as np
import pytest

from rigidgrid.core.grid import init_grid
from rigidgrid.core.propagation import propagate
from rigidgrid.analysis.links import (
    link_lengths,
    link_strain,
    displacement_field,
    displaced_nodes,
)


class TestLinkLengths:
    """Tests for link_lengths."""

    def test_shapes(self):
        horizontal, vertical = link_lengths(init_grid(5, 3))
        assert horizontal.shape == (4, 3)
        assert vertical.shape == (5, 2)

    def test_unit_lattice(self):
        horizontal, vertical = link_lengths(init_grid(6, 6))
        assert np.allclose(horizontal, 1.0)
        assert np.allclose(vertical, 1.0)

    def test_single_node_has_no_links(self):
        horizontal, vertical = link_lengths(init_grid(1, 1))
        assert horizontal.size == 0
        assert vertical.size == 0


class TestLinkStrain:
    """Tests for link_strain."""

    def test_unit_lattice_unstrained(self):
        strain = link_strain(init_grid(4, 4))
        assert strain.max_abs == 0.0
        assert strain.rms == 0.0

    def test_single_node(self):
        strain = link_strain(init_grid(1, 1))
        assert strain.max_abs == 0.0

    def test_stretched_link(self):
        grid = init_grid(2, 1)
        grid.positions[1, 0] = (2.5, 1.0)
        strain = link_strain(grid)
        assert strain.horizontal[0, 0] == pytest.approx(0.5)
        assert strain.max_abs == pytest.approx(0.5)

    def test_links_between_drag_and_wave_stay_near_unit(self, small_grid):
        # Each displaced node is exactly unit distance from the node that
        # reached it; other links only carry the small decayed deltas
        result = propagate(small_grid, (1, 1), (0.2, 0.0))
        strain = link_strain(result)
        assert strain.max_abs < 0.05


class TestDisplacement:
    """Tests for displacement_field and displaced_nodes."""

    def test_no_change(self, small_grid):
        assert np.all(displacement_field(small_grid, small_grid.copy()) == 0.0)
        assert displaced_nodes(small_grid, small_grid.copy()) == []

    def test_origin_displacement(self, small_grid):
        result = propagate(small_grid, (1, 1), (0.3, 0.4))
        field = displacement_field(small_grid, result)
        assert field.shape == (3, 3)
        assert field[1, 1] == pytest.approx(0.5)

    def test_displaced_nodes_listed_once(self, medium_grid):
        result = propagate(medium_grid, (10, 10), (0.5, 0.5))
        moved = displaced_nodes(medium_grid, result)
        assert (10, 10) in moved
        assert len(moved) == len(set(moved))
        assert len(moved) <= medium_grid.n_nodes

    def test_atol_filters_small_moves(self, small_grid):
        result = propagate(small_grid, (1, 1), (0.2, 0.0))
        assert len(displaced_nodes(small_grid, result)) == 9
        # Only the center row moves by the full 0.2
        assert displaced_nodes(small_grid, result, atol=0.1) == [(0, 1), (1, 1), (2, 1)]

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            displacement_field(init_grid(2, 2), init_grid(3, 2))
