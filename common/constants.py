"""
Icosahedron and Projection Constants for the ISEA Grid.

This module provides the fixed tables the forward transform is built on:
the 12 icosahedron vertices, the 20 face centres, the per-face first
vertex used for azimuth alignment, Snyder's polyhedral constants and the
planar layout constants. All tables are built once at import and never
mutated.

Angles are in radians unless a name says otherwise.

References
----------
- Snyder, J.P. (1992). An Equal-Area Map Projection for Polyhedral Globes.
  Cartographica 29(1), 10-21.
- Sahr, K., White, D., Kimerling, A.J. (2003). Geodesic Discrete Global
  Grid Systems. Cartography and Geographic Information Science 30(2).
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Final, Tuple

import numpy as np

from common.exceptions import ConfigurationError
from common.types import GeoPoint


@dataclass(frozen=True)
class Constant:
    """A named constant with provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        Representation error of ``value``; zero for exact definitions.
    unit : str
        Unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class IseaConstants:
    """Registry of scalar constants used by the ISEA transform.

    Orientation
    -----------
    The standard ISEA orientation puts one icosahedron vertex at
    58.28252559 N, 11.25 E and an adjacent vertex on the same meridian,
    which leaves every vertex at sea.

    Planar Layout
    -------------
    ``TABLE_G`` and ``TABLE_H`` place the 20 face centres on the global
    plane; ``RPRIME`` is the radius of the sphere with the same area as
    the icosahedron's planar faces.
    """

    ISEA_SCALE: Final[Constant] = Constant(
        value=0.8301572857837594396028083,
        uncertainty=0.0,
        unit="dimensionless",
        source="sqrt(5)/pi",
        description="Scale taking a face of the unit sphere's icosahedron to a unit triangle"
    )

    V_LAT: Final[Constant] = Constant(
        value=0.46364760899944494524,
        uncertainty=0.0,
        unit="rad",
        source="atan(1/2)",
        description="Latitude of the ten non-polar icosahedron vertices (26.565051177°)"
    )

    E_RAD: Final[Constant] = Constant(
        value=0.91843818702186776133,
        uncertainty=0.0,
        unit="rad",
        source="Snyder (1992)",
        description="Latitude of the polar face centres (52.62263186°)"
    )

    F_RAD: Final[Constant] = Constant(
        value=0.18871053072122403508,
        uncertainty=0.0,
        unit="rad",
        source="Snyder (1992)",
        description="Latitude of the equatorial face centres (10.81231696°)"
    )

    TABLE_G: Final[Constant] = Constant(
        value=0.6615845383,
        uncertainty=5e-11,
        unit="dimensionless",
        source="R tan(g) sin(60°)",
        description="Horizontal half spacing of face centres on the global plane"
    )

    TABLE_H: Final[Constant] = Constant(
        value=0.1909830056,
        uncertainty=5e-11,
        unit="dimensionless",
        source="0.25 R tan(g)",
        description="Vertical spacing unit of face centres on the global plane"
    )

    RPRIME: Final[Constant] = Constant(
        value=0.91038328153090290025,
        uncertainty=0.0,
        unit="dimensionless",
        source="Snyder (1992) eq. 5",
        description="Radius of the sphere whose area equals the planar icosahedron's"
    )

    ISEA_STD_LAT: Final[Constant] = Constant(
        value=1.01722196792335072101,
        uncertainty=0.0,
        unit="rad",
        source="Sahr et al. (2003)",
        description="Latitude of the grid pole in the standard ISEA orientation"
    )

    ISEA_STD_LON: Final[Constant] = Constant(
        value=0.19634954084936207740,
        uncertainty=0.0,
        unit="rad",
        source="Sahr et al. (2003)",
        description="Longitude of the grid pole in the standard ISEA orientation (11.25°)"
    )

    FACE_TOLERANCE: Final[Constant] = Constant(
        value=0.000005,
        uncertainty=0.0,
        unit="rad",
        source="PROJ isea",
        description="Slack allowed when testing whether a point lies on a face"
    )

    # Unit triangle centroid sits tan(30°)/2 above its base
    TRIANGLE_CENTER_OFFSET: Final[Tuple[float, float]] = (0.5, 2.0 * .14433756729740644112)

    # cos(30°), the height of the unit triangle
    UNIT_TRIANGLE_HEIGHT: Final[float] = .86602540378443864672

    FACE_COUNT: Final[int] = 20
    QUAD_COUNT: Final[int] = 12


class SnyderPolyhedron(IntEnum):
    """Polyhedra for which Snyder's equal-area projection is tabulated."""
    HEXAGON = 0
    PENTAGON = 1
    TETRAHEDRON = 2
    CUBE = 3
    OCTAHEDRON = 4
    DODECAHEDRON = 5
    ICOSAHEDRON = 6


@dataclass(frozen=True)
class SnyderConstants:
    """Snyder's per-polyhedron constants, in DEGREES as published.

    Attributes
    ----------
    g : float
        Spherical distance from face centre to a vertex.
    G : float
        Spherical angle between the radius to the centre and an adjacent edge.
    theta : float
        Plane angle between the radius to the centre and an adjacent edge.
    ea_w, ea_a, ea_b, g_w, g_a, g_b : float
        Maximum angular and scale distortion figures, informational only.
    """
    g: float
    G: float
    theta: float
    ea_w: float
    ea_a: float
    ea_b: float
    g_w: float
    g_a: float
    g_b: float

    @property
    def g_rad(self) -> float:
        return float(np.radians(self.g))

    @property
    def G_rad(self) -> float:
        return float(np.radians(self.G))

    @property
    def theta_rad(self) -> float:
        return float(np.radians(self.theta))


SNYDER_CONSTANTS: Final[dict] = {
    SnyderPolyhedron.HEXAGON: SnyderConstants(
        23.80018260, 62.15458023, 60.0, 3.75, 1.033, 0.968, 5.09, 1.195, 1.0),
    SnyderPolyhedron.PENTAGON: SnyderConstants(
        20.07675127, 55.69063953, 54.0, 2.65, 1.030, 0.983, 3.59, 1.141, 1.027),
    SnyderPolyhedron.ICOSAHEDRON: SnyderConstants(
        37.37736814, 36.0, 30.0, 17.27, 1.163, 0.860, 13.14, 1.584, 1.0),
}


def snyder_constants(polyhedron: SnyderPolyhedron) -> SnyderConstants:
    """Look up Snyder's constants for a polyhedron.

    Raises
    ------
    ConfigurationError
        If the polyhedron has no tabulated constants.
    """
    try:
        return SNYDER_CONSTANTS[SnyderPolyhedron(polyhedron)]
    except (KeyError, ValueError) as e:
        raise ConfigurationError(
            f"No Snyder constants tabulated for polyhedron {polyhedron!r}"
        ) from e


# =============================================================================
# Icosahedron tables
# =============================================================================

_V_LAT = IseaConstants.V_LAT.value
_E_RAD = IseaConstants.E_RAD.value
_F_RAD = IseaConstants.F_RAD.value

VERTICES: Final[Tuple[GeoPoint, ...]] = (
    GeoPoint(0.0, np.pi / 2),
    GeoPoint(np.pi, _V_LAT),
    GeoPoint(-np.radians(108.0), _V_LAT),
    GeoPoint(-np.radians(36.0), _V_LAT),
    GeoPoint(np.radians(36.0), _V_LAT),
    GeoPoint(np.radians(108.0), _V_LAT),
    GeoPoint(-np.radians(144.0), -_V_LAT),
    GeoPoint(-np.radians(72.0), -_V_LAT),
    GeoPoint(0.0, -_V_LAT),
    GeoPoint(np.radians(72.0), -_V_LAT),
    GeoPoint(np.radians(144.0), -_V_LAT),
    GeoPoint(0.0, -np.pi / 2),
)

# Face centres for triangles 1..20
TRIANGLE_CENTERS: Final[Tuple[GeoPoint, ...]] = (
    GeoPoint(-np.radians(144.0), _E_RAD),
    GeoPoint(-np.radians(72.0), _E_RAD),
    GeoPoint(0.0, _E_RAD),
    GeoPoint(np.radians(72.0), _E_RAD),
    GeoPoint(np.radians(144.0), _E_RAD),
    GeoPoint(-np.radians(144.0), _F_RAD),
    GeoPoint(-np.radians(72.0), _F_RAD),
    GeoPoint(0.0, _F_RAD),
    GeoPoint(np.radians(72.0), _F_RAD),
    GeoPoint(np.radians(144.0), _F_RAD),
    GeoPoint(-np.radians(108.0), -_F_RAD),
    GeoPoint(-np.radians(36.0), -_F_RAD),
    GeoPoint(np.radians(36.0), -_F_RAD),
    GeoPoint(np.radians(108.0), -_F_RAD),
    GeoPoint(np.pi, -_F_RAD),
    GeoPoint(-np.radians(108.0), -_E_RAD),
    GeoPoint(-np.radians(36.0), -_E_RAD),
    GeoPoint(np.radians(36.0), -_E_RAD),
    GeoPoint(np.radians(108.0), -_E_RAD),
    GeoPoint(np.pi, -_E_RAD),
)

# Vertex used to align azimuths on triangles 1..20
TRIANGLE_FIRST_VERTEX: Final[Tuple[int, ...]] = (
    0, 0, 0, 0, 0,
    6, 7, 8, 9, 10,
    2, 3, 4, 5, 1,
    11, 11, 11, 11, 11,
)


def _check_triangle(triangle: int) -> int:
    if not 1 <= triangle <= IseaConstants.FACE_COUNT:
        raise ConfigurationError(
            f"Triangle id {triangle} out of range [1, {IseaConstants.FACE_COUNT}]"
        )
    return triangle - 1


def triangle_center(triangle: int) -> GeoPoint:
    """Spherical centre of face ``triangle`` (1..20)."""
    return TRIANGLE_CENTERS[_check_triangle(triangle)]


def triangle_vertex(triangle: int) -> GeoPoint:
    """The vertex face ``triangle`` measures its azimuths from."""
    return VERTICES[TRIANGLE_FIRST_VERTEX[_check_triangle(triangle)]]
