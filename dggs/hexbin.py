"""
Hexagonal Binning onto a Cube-Coordinate Lattice.

Snaps a continuous quad-frame position to the nearest hexagon centre of a
lattice whose cells are ``width`` apart.

Cube Rounding
-------------
The point is sheared into the lattice's skewed axes and each of the three
cube axes (x, y, z = -x - y) is rounded independently. Rounding three
dependent values can leave a non-zero sum; the axis whose rounding moved
it furthest absorbs the whole error. Ties go to x, then y, then z, and
that order has to be kept for cell ids to match other implementations.

Offset Form
-----------
Besides cube form the lattice has an offset (column, row) form with the
row axis positive down. The two forms differ by half the column index,
which must be rounded toward negative infinity for the mapping to stay
bijective on negative columns.

References
----------
- Patel, A. (2013). Hexagonal Grids. https://www.redblobgames.com/grids/hex-grids/
"""

from typing import Final

import numpy as np

from common.types import CubeHex, PlanarPoint

_COS30: Final[float] = float(np.cos(np.radians(30.0)))


def _column_shift(x: int) -> int:
    if x >= 0:
        return (x + 1) // 2
    # truncate toward zero, as integer division does for negative x
    return int(x / 2)


def hex_to_offset(h: CubeHex) -> CubeHex:
    """Convert a cube-form cell to offset form. Offset cells pass through."""
    if not h.iso:
        return h
    return CubeHex(x=h.x, y=-h.y - _column_shift(h.x), z=h.z, iso=False)


def hex_to_cube(h: CubeHex) -> CubeHex:
    """Convert an offset-form cell to cube form. Cube cells pass through."""
    if h.iso:
        return h
    y = -h.y - _column_shift(h.x)
    return CubeHex(x=h.x, y=y, z=-h.x - y, iso=True)


def cube_round(x: float, y: float, z: float) -> CubeHex:
    """Round fractional cube coordinates to the nearest lattice cell.

    Parameters
    ----------
    x, y, z : float
        Fractional cube coordinates, x + y + z = 0.

    Returns
    -------
    CubeHex
        Cell in cube form.
    """
    rx = np.floor(x + 0.5)
    ry = np.floor(y + 0.5)
    rz = np.floor(z + 0.5)
    ix, iy, iz = int(rx), int(ry), int(rz)

    s = ix + iy + iz
    if s:
        abs_dx = abs(rx - x)
        abs_dy = abs(ry - y)
        abs_dz = abs(rz - z)

        if abs_dx >= abs_dy and abs_dx >= abs_dz:
            ix -= s
        elif abs_dy >= abs_dx and abs_dy >= abs_dz:
            iy -= s
        else:
            iz -= s

    return CubeHex(x=ix, y=iy, z=iz, iso=True)


def hexbin(width: float, point: PlanarPoint) -> CubeHex:
    """Bin a planar point into the hexagon lattice.

    Parameters
    ----------
    width : float
        Distance between neighbouring cell centres.
    point : PlanarPoint
        Position in the lattice's frame.

    Returns
    -------
    CubeHex
        The containing cell, in OFFSET form.
    """
    x = point.x / _COS30  # rotated X coord
    y = point.y - x / 2.0  # adjustment for rotated X

    x /= width
    y /= width
    z = -x - y

    return hex_to_offset(cube_round(x, y, z))
