"""
Angle Helpers Shared by the Projection Stages.

Inverse trigonometric functions are fed sums of products that can land a
few ulps outside [-1, 1] for points at a face centre or exactly on a pole.
The safe variants clamp their argument first so those points map to the
boundary angle instead of producing NaN.
"""

import numpy as np

TWO_PI = 2.0 * np.pi


def safe_asin(value: float) -> float:
    """Arc sine with the argument clamped to [-1, 1]."""
    return float(np.arcsin(np.clip(value, -1.0, 1.0)))


def safe_acos(value: float) -> float:
    """Arc cosine with the argument clamped to [-1, 1]."""
    return float(np.arccos(np.clip(value, -1.0, 1.0)))


def normalize_longitude(lon: float) -> float:
    """Wrap a longitude into [-π, π].

    Parameters
    ----------
    lon : float
        Longitude in radians, any magnitude.

    Returns
    -------
    float
        The same direction expressed in [-π, π].
    """
    lon = float(np.fmod(lon, TWO_PI))
    while lon > np.pi:
        lon -= TWO_PI
    while lon < -np.pi:
        lon += TWO_PI
    return lon


def sph_azimuth(f_lon: float, f_lat: float, t_lon: float, t_lat: float) -> float:
    """Azimuth of the great circle from one point to another.

    Snyder (1987) eq. 5-4b, measured clockwise from north.

    Parameters
    ----------
    f_lon, f_lat : float
        Start point in radians.
    t_lon, t_lat : float
        End point in radians.

    Returns
    -------
    float
        Azimuth in radians, in (-π, π].
    """
    return float(np.arctan2(
        np.cos(t_lat) * np.sin(t_lon - f_lon),
        np.cos(f_lat) * np.sin(t_lat)
        - np.sin(f_lat) * np.cos(t_lat) * np.cos(t_lon - f_lon)
    ))


def great_circle_angle(f_lon: float, f_lat: float, t_lon: float, t_lat: float) -> float:
    """Central angle between two points on the unit sphere, in radians."""
    return safe_acos(
        np.sin(f_lat) * np.sin(t_lat)
        + np.cos(f_lat) * np.cos(t_lat) * np.cos(t_lon - f_lon)
    )
