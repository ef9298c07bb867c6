"""
ISEA Discrete Global Grid.

Turns geographic points into cell addresses of an icosahedral hexagon
grid: configuration, hexagonal binning, quad resolution, numbering and
the forward transform that ties them together.
"""

from dggs.config import GridConfig
from dggs.hexbin import cube_round, hex_to_cube, hex_to_offset, hexbin
from dggs.quads import resolve_quad, resolve_quad_ap3odd, quad_lattice
from dggs.serial import serial_number, hex_address
from dggs.transform import locate, project, project_many, serials
from dggs.projection import IcosahedralSnyderEqualArea, LastTransform
from dggs.indexing import cell_index_grid

__all__ = [
    "GridConfig",
    "cube_round",
    "hex_to_cube",
    "hex_to_offset",
    "hexbin",
    "resolve_quad",
    "resolve_quad_ap3odd",
    "quad_lattice",
    "serial_number",
    "hex_address",
    "locate",
    "project",
    "project_many",
    "serials",
    "IcosahedralSnyderEqualArea",
    "LastTransform",
    "cell_index_grid",
]
