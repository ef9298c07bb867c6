"""
Type Definitions for the ISEA Discrete Global Grid System.

This module defines the value objects that flow between the stages of the
forward transform. Every type is an immutable dataclass so that a stage can
only hand its result forward, never modify its input in place.

Coordinate Frames
-----------------
The same pair of reals means different things at different stages:

1. ``GeoPoint``: longitude/latitude on the unit sphere, radians.
2. ``PlanarPoint`` in a face frame: offset from the centre of one of the 20
   icosahedron faces in that face's equal-area plane.
3. ``PlanarPoint`` in the global plane: the face frame translated into the
   4 x 5 layout of triangles.
4. ``PlanarPoint`` in a quad frame: the unit triangle folded into one of the
   12 quads.
5. ``CubeHex``: integer lattice cell in cube or offset form.

Address Forms
-------------
The result of a transform is one of the variants collected in ``Address``.
Each variant carries its ``form`` tag so callers can dispatch on it without
``isinstance`` chains.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

import numpy as np


class AddressForm(Enum):
    """Output representation selected by a grid configuration."""
    PLANE = "plane"
    PROJTRI = "projtri"
    VERTEX2DD = "vertex2dd"
    Q2DD = "q2dd"
    Q2DI = "q2di"
    SEQNUM = "seqnum"
    HEX = "hex"


@dataclass(frozen=True)
class GeoPoint:
    """A point on the sphere.

    Attributes
    ----------
    lon : float
        Longitude in RADIANS. Normalized into (-π, π].
    lat : float
        Latitude in RADIANS. Range: [-π/2, π/2].

    Notes
    -----
    Non-finite values are let through unchanged; the face locator rejects
    them with a ``GeometryError`` that names the offending coordinates.

    Examples
    --------
    >>> p = GeoPoint.from_degrees(lon_deg=-80.1918, lat_deg=25.7617)
    >>> round(p.to_degrees()[1], 4)
    25.7617
    """
    lon: float  # radians
    lat: float  # radians

    def __post_init__(self):
        lat = float(self.lat)
        lon = float(self.lon)
        if np.isfinite(lat) and not -np.pi / 2 <= lat <= np.pi / 2:
            raise ValueError(
                f"Latitude {lat} rad out of range [-π/2, π/2]. "
                f"Did you pass degrees instead of radians?"
            )
        if np.isfinite(lon) and not -np.pi < lon <= np.pi:
            lon = float(np.arctan2(np.sin(lon), np.cos(lon)))
            if lon <= -np.pi:
                lon = np.pi
        object.__setattr__(self, "lat", lat)
        object.__setattr__(self, "lon", lon)

    @classmethod
    def from_degrees(cls, lon_deg: float, lat_deg: float) -> 'GeoPoint':
        """Create a point from degrees."""
        return cls(lon=np.radians(lon_deg), lat=np.radians(lat_deg))

    def to_degrees(self) -> Tuple[float, float]:
        """Return (lon_deg, lat_deg) for display."""
        return float(np.degrees(self.lon)), float(np.degrees(self.lat))


@dataclass(frozen=True)
class PlanarPoint:
    """A real-valued plane coordinate. The frame depends on the stage."""
    x: float
    y: float

    def translated(self, dx: float, dy: float) -> 'PlanarPoint':
        return PlanarPoint(self.x + dx, self.y + dy)

    def scaled(self, factor: float) -> 'PlanarPoint':
        return PlanarPoint(self.x * factor, self.y * factor)


@dataclass(frozen=True)
class CubeHex:
    """A hexagonal lattice cell.

    Attributes
    ----------
    x, y, z : int
        Cell coordinates. When ``iso`` is True they are cube coordinates
        and sum to zero. When ``iso`` is False, (x, y) is the offset
        (column, row) form with y positive down, and ``z`` is carried
        along unchanged from the last cube form.
    iso : bool
        True for cube form, False for offset form.
    """
    x: int
    y: int
    z: int
    iso: bool = True

    def __post_init__(self):
        if self.iso and self.x + self.y + self.z != 0:
            raise ValueError(
                f"Cube coordinates must sum to zero, got "
                f"({self.x}, {self.y}, {self.z})"
            )


@dataclass(frozen=True)
class FaceLocation:
    """Result of the Snyder forward step.

    Attributes
    ----------
    triangle : int
        Icosahedron face id, 1..20.
    point : PlanarPoint
        Offset from the face centre in the face's equal-area plane.
    """
    triangle: int
    point: PlanarPoint

    @property
    def is_down(self) -> bool:
        """Faces 6-10 and 16-20 point downward in the planar layout."""
        return (self.triangle - 1) // 5 % 2 == 1


# =============================================================================
# Address variants
# =============================================================================

@dataclass(frozen=True)
class PlanePoint:
    """Continuous position in the global triangle layout."""
    x: float
    y: float
    triangle: int
    form: AddressForm = field(default=AddressForm.PLANE, init=False)


@dataclass(frozen=True)
class ProjectedTrianglePoint:
    """Continuous position inside the rescaled unit triangle of one face."""
    x: float
    y: float
    triangle: int
    form: AddressForm = field(default=AddressForm.PROJTRI, init=False)


@dataclass(frozen=True)
class QuadPoint:
    """Continuous position in a quad frame (``VERTEX2DD`` or ``Q2DD``)."""
    quad: int
    x: float
    y: float
    triangle: int
    form: AddressForm = AddressForm.Q2DD


@dataclass(frozen=True)
class QuadLattice:
    """Integer (d, i) lattice coordinate inside a quad."""
    quad: int
    d: int
    i: int
    form: AddressForm = field(default=AddressForm.Q2DI, init=False)


@dataclass(frozen=True)
class SerialNumber:
    """Dense linear cell number, 1 at the north pole."""
    serial: int
    quad: int
    form: AddressForm = field(default=AddressForm.SEQNUM, init=False)


@dataclass(frozen=True)
class HexAddress:
    """Quad-qualified lattice coordinate, kept unpacked.

    The historical wire form folds the quad into the low four bits of x;
    ``packed`` reproduces it.
    """
    quad: int
    x: int
    y: int
    form: AddressForm = field(default=AddressForm.HEX, init=False)

    @property
    def packed(self) -> Tuple[int, int]:
        return (self.x << 4) + self.quad, self.y

    @classmethod
    def from_packed(cls, packed_x: int, y: int) -> 'HexAddress':
        return cls(quad=packed_x & 0xF, x=packed_x >> 4, y=y)


Address = Union[
    PlanePoint,
    ProjectedTrianglePoint,
    QuadPoint,
    QuadLattice,
    SerialNumber,
    HexAddress,
]
