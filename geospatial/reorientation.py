"""
Reorientation of Geographic Points into the Grid Frame.

The icosahedron is laid out with vertex 0 at the north pole of its own
frame. A grid configuration chooses where that pole sits on the Earth
(latitude, longitude) and how far the icosahedron is turned about it
(azimuth). Before a point can be located on a face it has to be expressed
in that frame.

Scientific Context
------------------
Domain: Spherical trigonometry
Model: Rotation of spherical coordinates given the old pole's position in
the new frame (Snyder 1987, "oblique aspect" transformation).

The ISEA frame differs from Snyder's by half a turn: Snyder centres on
the down-pointing triangle 3, while ISEA runs the shared edge of the first
triangle from vertex 0 to vertex 1. The pole longitude is shifted by π
before the rotation and the result corrected afterwards.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof.
  Paper 1395, p. 31, eqs. 5-7 and 5-8b.
"""

import numpy as np

from common.types import GeoPoint
from geospatial.angles import normalize_longitude, safe_asin


def rotate_to_pole(pole_lat: float, pole_lon: float, point: GeoPoint) -> GeoPoint:
    """Express ``point`` in the frame whose north pole sits at the given pole.

    Parameters
    ----------
    pole_lat, pole_lon : float
        Position of the old north pole in the new frame, radians. The
        longitude need not be normalized.
    point : GeoPoint
        Point in the old frame.

    Returns
    -------
    GeoPoint
        The point in the new frame, longitude in [-π, π].
    """
    phi = point.lat
    lam = point.lon
    alpha = pole_lat
    beta = pole_lon
    lambda0 = beta

    cos_p = np.cos(phi)
    sin_a = np.sin(alpha)

    # mpawm 5-7
    sin_phip = sin_a * np.sin(phi) - np.cos(alpha) * cos_p * np.cos(lam - lambda0)

    # mpawm 5-8b, two argument form keeps the quadrant
    lp_b = np.arctan2(
        cos_p * np.sin(lam - lambda0),
        sin_a * cos_p * np.cos(lam - lambda0) + np.cos(alpha) * np.sin(phi)
    )

    lambdap = normalize_longitude(lp_b + beta)
    phip = safe_asin(sin_phip)

    return GeoPoint(lon=lambdap, lat=phip)


def reorient(pole_lat: float, pole_lon: float, azimuth: float, point: GeoPoint) -> GeoPoint:
    """Rotate a geographic point into the grid's icosahedron frame.

    Parameters
    ----------
    pole_lat, pole_lon : float
        Grid pole in radians.
    azimuth : float
        Rotation of the grid about its pole, radians.
    point : GeoPoint
        Point to transform.

    Returns
    -------
    GeoPoint
        Point in the grid frame.

    Notes
    -----
    With the pole at (π/2, 0) and zero azimuth this is the identity up to
    rounding.
    """
    npt = rotate_to_pole(pole_lat, pole_lon + np.pi, point)

    lon = npt.lon - (np.pi - azimuth + pole_lon)
    lon += np.pi
    return GeoPoint(lon=normalize_longitude(lon), lat=npt.lat)

