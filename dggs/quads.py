"""
Quad Addressing of Lattice Cells.

The unit triangles of the 20 faces are folded into 12 quads: quad 0 and
quad 11 are the single cells at the north and south poles, quads 1-5 are
the northern diamonds and quads 6-10 the southern ones. Quad q (1-5) has
quad q+1 to its upper right and quad q+5 to its lower right; quad q
(6-10) has quad q+1 to its lower right and quad q-4 to its upper right,
both wrapping around the five-quad ring.

A lattice cell binned in a quad's frame may lie on the quad's far edges,
which belong to a neighbour. ``resolve_quad`` moves such cells to the
neighbour and re-expresses them there. Each transition lands on a cell
that its new quad keeps, so resolving twice changes nothing.

Quad Frame
----------
In cube form every quad spans x in [0, s] and z in [-s, 0]. Its corners
are A = (0, 0, 0), B = (s, -s, 0), C = (s, 0, -s) and D = (0, s, -s).
The edges A-B (z = 0) and A-D (x = 0) are owned; B-C (x = s) and C-D
(z = -s) belong to neighbours. Corner C of quad q is corner A of the
next quad in its ring. D is the north pole for quads 1-5 and B the south
pole for quads 6-10.

On the aperture-3 odd lattice a cell may also bin just past an owned
edge; it then goes to the neighbour that owns it (quad q-1 or the
southern quad below for quads 1-5, quad q-5 or q-1 for quads 6-10).

Quad ≤ 5 transitions
--------------------
- apex (north pole)       -> quad 0, cell (0, 0)
- upper-right edge        -> quad q+1
- lower-right edge        -> quad q+5

Quad ≥ 6 transitions
--------------------
- bottom apex (south pole) -> quad 11, cell (0, 0)
- lower-right edge         -> quad q+1
- upper-right edge         -> quad q-4
"""

from dataclasses import dataclass
from typing import Final

import numpy as np

from common.logging_config import get_logger
from common.types import CubeHex, PlanarPoint, QuadLattice
from dggs.config import GridConfig
from dggs.hexbin import hex_to_cube, hexbin
from geospatial.placement import rotate_point

logger = get_logger(__name__)

NORTH_POLE_QUAD: Final[int] = 0
SOUTH_POLE_QUAD: Final[int] = 11

_COS30: Final[float] = float(np.cos(np.pi / 6.0))


def next_in_ring(quad: int) -> int:
    """Right-hand neighbour in the same row of five quads."""
    if quad <= 5:
        return 1 if quad == 5 else quad + 1
    return 6 if quad == 10 else quad + 1


def previous_in_ring(quad: int) -> int:
    """Left-hand neighbour in the same row of five quads."""
    if quad <= 5:
        return 5 if quad == 1 else quad - 1
    return 10 if quad == 6 else quad - 1


def upper_right_of(quad: int) -> int:
    """Northern quad above and to the right of a southern quad."""
    return 1 if quad == 10 else quad - 4


def lower_left_of(quad: int) -> int:
    """Southern quad below and to the left of a northern quad."""
    return 10 if quad == 1 else quad + 4


@dataclass(frozen=True)
class ResolvedCell:
    """A lattice cell together with the quad that owns it."""
    quad: int
    cell: CubeHex


def resolve_quad(quad: int, cell: CubeHex, sidelength: int) -> ResolvedCell:
    """Move a cube-form cell off the far edges of its quad.

    Parameters
    ----------
    quad : int
        Quad the cell was binned in (0..11).
    cell : CubeHex
        Cell in cube form.
    sidelength : int
        Cells along a quad edge.

    Returns
    -------
    ResolvedCell
        The owning quad and the cell in that quad's frame.
    """
    h = hex_to_cube(cell)
    x, y, z = h.x, h.y, h.z

    if quad <= 5:
        if x == 0 and z == -sidelength:
            return ResolvedCell(NORTH_POLE_QUAD, CubeHex(0, 0, 0))
        if z == -sidelength:
            return ResolvedCell(
                next_in_ring(quad),
                CubeHex(x=0, y=sidelength - x, z=x - sidelength)
            )
        if x == sidelength:
            return ResolvedCell(quad + 5, CubeHex(x=0, y=-z, z=z))
    else:
        if z == 0 and x == sidelength:
            return ResolvedCell(SOUTH_POLE_QUAD, CubeHex(0, 0, 0))
        if x == sidelength:
            # lands on the next quad's lower-left edge, which runs to the south pole
            return ResolvedCell(next_in_ring(quad), CubeHex(x=-y, y=y, z=0))
        if z == -sidelength:
            # lands on the northern quad's lower-left edge
            return ResolvedCell(upper_right_of(quad), CubeHex(x=x, y=-x, z=0))

    return ResolvedCell(quad, h)


def resolve_quad_ap3odd(quad: int, d: int, i: int, maxcoord: int) -> QuadLattice:
    """Move a (d, i) cell of the aperture-3 odd lattice into the quad that owns it.

    Parameters
    ----------
    quad : int
        Quad the cell was binned in (0..11).
    d, i : int
        Lattice coordinates in that quad.
    maxcoord : int
        Coordinate value of the quad's far edges.

    Returns
    -------
    QuadLattice
        The owning quad and (d, i) in its frame.

    Notes
    -----
    Cell centres of this lattice lie on the quad edges only at every
    third step, and in between an edge runs along the side shared by
    two cells. A point on or just beside an edge can therefore bin to a
    cell past a far edge (d or i above ``maxcoord``) or past an owned
    edge (d or i below 0). Each case is re-expressed in the neighbour
    across that edge; the maps are the lattice rotations and
    translations that carry one quad's edge onto the other's.

    The next quad in the same row is tested before the quad across the
    row, so a cell on both far edges goes along the row.
    """
    m = maxcoord
    if quad <= 5:
        if d == 0 and i == m:
            return QuadLattice(NORTH_POLE_QUAD, 0, 0)
        if i >= m:
            return QuadLattice(next_in_ring(quad), i - m, i - d)
        if d >= m:
            return QuadLattice(quad + 5, d - m, i)
        if d < 0:
            return QuadLattice(previous_in_ring(quad), d + m - i, d + m)
        if i < 0:
            return QuadLattice(lower_left_of(quad), d, i + m)
    elif quad <= 10:
        if i == 0 and d == m:
            return QuadLattice(SOUTH_POLE_QUAD, 0, 0)
        if d >= m:
            return QuadLattice(next_in_ring(quad), d - i, d - m)
        if i >= m:
            return QuadLattice(upper_right_of(quad), d, i - m)
        if d < 0:
            return QuadLattice(quad - 5, d + m, i)
        if i < 0:
            return QuadLattice(previous_in_ring(quad), i + m, i + m - d)

    return QuadLattice(quad, d, i)


def quad_lattice_ap3odd(config: GridConfig, quad: int, point: PlanarPoint) -> QuadLattice:
    """Bin a quad-frame point on the aperture-3 odd-resolution lattice."""
    sidelength = config.sidelength

    # apex to base is cos(30deg)
    hexwidth = _COS30 / sidelength
    maxcoord = int(sidelength * 2.0 + 0.5)

    h = hex_to_cube(hexbin(hexwidth, point))
    d = h.x - h.z
    i = h.x + h.y + h.y

    return resolve_quad_ap3odd(quad, d, i, maxcoord)


def quad_lattice(config: GridConfig, quad: int, point: PlanarPoint) -> QuadLattice:
    """Bin a quad-frame point and return its (d, i) address.

    Parameters
    ----------
    config : GridConfig
        Supplies aperture and resolution.
    quad : int
        Quad the point was folded into.
    point : PlanarPoint
        Position in that quad's frame.

    Returns
    -------
    QuadLattice
        Owning quad and lattice coordinate.
    """
    if config.is_aperture3_odd:
        return quad_lattice_ap3odd(config, quad, point)

    sidelength = int(config.sidelength)
    hexwidth = 1.0 / sidelength

    v = rotate_point(point, -30.0)
    resolved = resolve_quad(quad, hexbin(hexwidth, v), sidelength)
    return QuadLattice(resolved.quad, resolved.cell.x, -resolved.cell.z)
