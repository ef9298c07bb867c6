"""
Snyder Equal-Area Forward Projection onto Icosahedron Faces.

This module finds which of the 20 faces of the icosahedron contains a
point (already expressed in the grid frame) and computes the point's
position in that face's planar equal-area representation.

Scientific Context
------------------
Domain: Polyhedral map projections
Model: Snyder's equal-area projection for polyhedral globes

Each face is split into three congruent sub-triangles meeting at its
centre. A point's azimuth from the face centre, reduced into one 120°
sector, selects a sub-triangle; the spherical area between the centre,
the sector's first vertex and the point is then matched by a planar
triangle of the same area, which fixes the planar azimuth Az' and
radius ρ.

Algorithm (per face, fixed scan order 1..20)
--------------------------------------------
1. z = great-circle distance from face centre to point. Skip the face if
   z exceeds g.
2. Az = azimuth from centre to point, minus the face's vertex azimuth,
   reduced into [0°, 120°] by whole 120° shifts (counted).
3. q = angular distance to the face edge along Az (eq. 9). Skip the face
   if z exceeds q.
4. Equations 5-8 and 10-12 give Az' and ρ; the 120° shifts are added
   back to Az' and (ρ sin Az', ρ cos Az') is returned.

References
----------
- Snyder, J.P. (1992). An Equal-Area Map Projection for Polyhedral Globes.
  Cartographica 29(1), 10-21.
"""

from typing import Final, Optional, Tuple

import numpy as np

from common.constants import (
    IseaConstants,
    SnyderPolyhedron,
    snyder_constants,
    triangle_center,
    triangle_vertex,
)
from common.exceptions import GeometryError
from common.logging_config import get_logger
from common.types import FaceLocation, GeoPoint, PlanarPoint
from geospatial.angles import TWO_PI, great_circle_angle, sph_azimuth, safe_acos

logger = get_logger(__name__)

DEG120: Final[float] = float(np.radians(120.0))
_DBL_EPSILON: Final[float] = float(np.finfo(np.float64).eps)

_ICOSAHEDRON = snyder_constants(SnyderPolyhedron.ICOSAHEDRON)
_G_SMALL = _ICOSAHEDRON.g_rad
_G_LARGE = _ICOSAHEDRON.G_rad
_THETA = _ICOSAHEDRON.theta_rad
_TAN_G = float(np.tan(_G_SMALL))
_COT_THETA = float(1.0 / np.tan(_THETA))
_RPRIME = IseaConstants.RPRIME.value
_TOLERANCE = IseaConstants.FACE_TOLERANCE.value
# floating-point noise on an edge or vertex
_EDGE_EPSILON: Final[float] = 1e-12


def az_adjustment(triangle: int) -> float:
    """Azimuth from the centre of ``triangle`` to the vertex its sectors start at.

    Parameters
    ----------
    triangle : int
        Face id, 1..20.

    Returns
    -------
    float
        Azimuth in radians.
    """
    v = triangle_vertex(triangle)
    c = triangle_center(triangle)
    return sph_azimuth(c.lon, c.lat, v.lon, v.lat)


# Built once; faces never move
AZ_ADJUSTMENTS: Final[Tuple[float, ...]] = tuple(
    az_adjustment(tri) for tri in range(1, IseaConstants.FACE_COUNT + 1)
)


def reduce_azimuth(az: float) -> Tuple[float, int]:
    """Bring an azimuth into the first 120° sector.

    Parameters
    ----------
    az : float
        Azimuth relative to the face's first vertex, radians.

    Returns
    -------
    Tuple[float, int]
        The reduced azimuth and the signed number of 120° steps removed.
    """
    if az < 0.0:
        az += TWO_PI

    multiples = 0
    while az < 0.0:
        az += DEG120
        multiples -= 1
    while az > DEG120 + _DBL_EPSILON:
        az -= DEG120
        multiples += 1
    return az, multiples


def edge_distance(az: float) -> float:
    """Angular distance from a face centre to the face edge along ``az`` (eq. 9)."""
    return float(np.arctan2(_TAN_G, np.cos(az) + np.sin(az) * _COT_THETA))


def planar_polar(az: float, z: float, q: float) -> Tuple[float, float]:
    """Planar azimuth and radius for a point on a face (eqs. 5-8, 10-12).

    Parameters
    ----------
    az : float
        Reduced spherical azimuth from the face centre.
    z : float
        Spherical distance from the face centre.
    q : float
        Spherical distance from the centre to the edge along ``az``.

    Returns
    -------
    Tuple[float, float]
        (Az', ρ) in the face plane.
    """
    # eq 6
    H = safe_acos(np.sin(az) * np.sin(_G_LARGE) * np.cos(_G_SMALL)
                  - np.cos(az) * np.cos(_G_LARGE))

    # eq 7, area on the unit sphere
    Ag = az + _G_LARGE + H - np.pi

    # eq 8
    az_prime = np.arctan2(2.0 * Ag, _RPRIME * _RPRIME * _TAN_G * _TAN_G - 2.0 * Ag * _COT_THETA)

    # eq 10
    d_prime = _RPRIME * _TAN_G / (np.cos(az_prime) + np.sin(az_prime) * _COT_THETA)

    # eq 11
    f = d_prime / (2.0 * _RPRIME * np.sin(q / 2.0))

    # eq 12
    rho = 2.0 * _RPRIME * f * np.sin(z / 2.0)

    return float(az_prime), float(rho)


def _project_on_face(tri: int, point: GeoPoint, tolerance: float) -> Optional[FaceLocation]:
    center = triangle_center(tri)

    # step 1; written so that NaN distances never match
    z = great_circle_angle(center.lon, center.lat, point.lon, point.lat)
    if not z <= _G_SMALL + tolerance:
        return None

    # step 2
    az = sph_azimuth(center.lon, center.lat, point.lon, point.lat)
    az, multiples = reduce_azimuth(az - AZ_ADJUSTMENTS[tri - 1])

    # step 3
    q = edge_distance(az)
    if not z <= q + tolerance:
        return None

    # step 4
    az_prime, rho = planar_polar(az, z, q)
    az_prime += DEG120 * multiples

    return FaceLocation(
        triangle=tri,
        point=PlanarPoint(x=rho * float(np.sin(az_prime)), y=rho * float(np.cos(az_prime))),
    )


def locate_face(point: GeoPoint) -> FaceLocation:
    """Find the face containing ``point`` and its planar position there.

    Parameters
    ----------
    point : GeoPoint
        Point in the grid frame (see ``geospatial.reorientation``).

    Returns
    -------
    FaceLocation
        Face id in 1..20 and the offset from that face's centre.

    Raises
    ------
    GeometryError
        If no face contains the point. This only happens for non-finite
        input or a defect in the tables.

    Notes
    -----
    Faces are scanned twice: first allowing only rounding noise, so a
    point just inside a face is never claimed by an earlier neighbour,
    then with the edge tolerance.
    """
    for tolerance in (_EDGE_EPSILON, _TOLERANCE):
        for tri in range(1, IseaConstants.FACE_COUNT + 1):
            face = _project_on_face(tri, point, tolerance)
            if face is not None:
                return face

    lon_deg, lat_deg = np.degrees(point.lon), np.degrees(point.lat)
    logger.error(f"No face contains point lon={lon_deg} lat={lat_deg}")
    raise GeometryError(point.lon, point.lat)
