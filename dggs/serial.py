"""
Serial Numbering and Hex Packing of Quad Lattice Cells.

Serial numbers run densely from 1 (the north pole cell, quad 0) through
``10 * hexes_per_quad + 2`` (the south pole cell, quad 11). The ten
equatorial quads each take a contiguous block of ``hexes_per_quad``
numbers in quad order, starting at 2.
"""

from common.types import HexAddress, QuadLattice, SerialNumber
from dggs.config import GridConfig
from dggs.quads import NORTH_POLE_QUAD, SOUTH_POLE_QUAD


def serial_number(config: GridConfig, cell: QuadLattice) -> SerialNumber:
    """Linearize a quad lattice cell.

    Parameters
    ----------
    config : GridConfig
        Supplies aperture and resolution.
    cell : QuadLattice
        Resolved (quad, d, i) cell.

    Returns
    -------
    SerialNumber
        The cell's serial number.
    """
    if cell.quad == NORTH_POLE_QUAD:
        return SerialNumber(serial=1, quad=cell.quad)

    hexes = config.hexes_per_quad
    if cell.quad == SOUTH_POLE_QUAD:
        return SerialNumber(serial=1 + 10 * hexes + 1, quad=cell.quad)

    if config.is_aperture3_odd:
        # each d column holds ``height`` cells, spaced 3 apart in i
        height = int(float(config.aperture) ** ((config.resolution - 1) / 2.0) + 0.5)
        sn = cell.d * height
        sn += cell.i // 3
        sn += (cell.quad - 1) * hexes
        sn += 2
    else:
        sidelength = int(config.sidelength)
        sn = (cell.quad - 1) * hexes + sidelength * cell.d + cell.i + 2

    return SerialNumber(serial=int(sn), quad=cell.quad)


def hex_address(cell: QuadLattice) -> HexAddress:
    """Quad-qualified lattice coordinate; see ``HexAddress.packed``."""
    return HexAddress(quad=cell.quad, x=cell.d, y=cell.i)
