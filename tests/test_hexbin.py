"""Tests for hexagonal binning and cube rounding."""

import numpy as np
import pytest

from common.types import CubeHex, PlanarPoint
from dggs.hexbin import cube_round, hex_to_cube, hex_to_offset, hexbin


class TestCubeRound:

    def test_exact_cell(self):
        assert cube_round(2.0, -1.0, -1.0) == CubeHex(2, -1, -1)

    def test_largest_residual_absorbs_error(self):
        # z rounds to -1 leaving a sum of -1; x and y tie and x wins
        assert cube_round(0.4, 0.4, -0.8) == CubeHex(1, 0, -1)

    def test_tie_goes_to_y_before_z(self):
        assert cube_round(1.2, -0.6, -0.6) == CubeHex(1, 0, -1)

    @pytest.mark.parametrize("x, y", [
        (0.49, 0.49), (-3.7, 1.2), (10.5, -4.25), (-0.5, -0.5),
    ])
    def test_result_is_on_lattice(self, x, y):
        h = cube_round(x, y, -x - y)
        assert h.x + h.y + h.z == 0


class TestOffsetForm:

    @pytest.mark.parametrize("cell", [
        CubeHex(0, 0, 0), CubeHex(3, -1, -2), CubeHex(-3, 1, 2), CubeHex(-4, 5, -1),
    ])
    def test_cube_offset_cube(self, cell):
        offset = hex_to_offset(cell)
        assert not offset.iso
        assert hex_to_cube(offset) == cell

    def test_negative_column_shift(self):
        offset = hex_to_offset(CubeHex(-3, 1, 2))
        assert (offset.x, offset.y) == (-3, 0)

    def test_same_form_passes_through(self):
        cell = CubeHex(1, 2, 3, iso=False)
        assert hex_to_offset(cell) is cell
        cube = CubeHex(1, -1, 0)
        assert hex_to_cube(cube) is cube

    def test_cube_invariant_enforced(self):
        with pytest.raises(ValueError):
            CubeHex(1, 1, 1)


class TestHexbin:

    def test_origin(self):
        h = hexbin(1.0, PlanarPoint(0.0, 0.0))
        assert not h.iso
        assert hex_to_cube(h) == CubeHex(0, 0, 0)

    def test_lattice_direction(self):
        # one cell width along the rotated x axis
        width = 1.0 / 9.0
        h = hex_to_cube(hexbin(width, PlanarPoint(np.cos(np.pi / 6) * width, 0.5 * width)))
        assert h == CubeHex(1, 0, -1)

    def test_quad_top_corner(self):
        h = hex_to_cube(hexbin(1.0 / 9.0, PlanarPoint(0.0, 1.0)))
        assert h == CubeHex(0, 9, -9)

    def test_nearby_points_share_a_cell(self):
        a = hex_to_cube(hexbin(0.1, PlanarPoint(0.31, 0.42)))
        b = hex_to_cube(hexbin(0.1, PlanarPoint(0.311, 0.419)))
        assert a == b
