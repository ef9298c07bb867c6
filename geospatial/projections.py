"""
Map Projection Interface with Distortion Tracking.

This module defines the interface every projection in the system
implements and a numerical Tissot indicatrix that works for any of them.
The ISEA projection is equal-area but not conformal; the indicatrix lets
tests and callers confirm the first property and quantify the second.

Input coordinates often arrive in a projected CRS rather than as
longitude/latitude. ``points_from_crs`` uses `pyproj` to bring them to
geographic radians first.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
- Tissot, A. (1859). Mémoire sur la représentation des surfaces.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError

from common.exceptions import ConfigurationError
from common.logging_config import get_logger

logger = get_logger(__name__)

_GEOGRAPHIC_CRS = CRS.from_epsg(4326)


@dataclass
class TissotIndicatrix:
    """Tissot's indicatrix describing local distortion at a point.

    Attributes
    ----------
    semi_major : float
        Semi-major axis of the distortion ellipse (scale factor).
    semi_minor : float
        Semi-minor axis of the distortion ellipse (scale factor).
    area_scale : float
        Area distortion factor (ratio of mapped to spherical area).
    angular_distortion_rad : float
        Maximum angular distortion in radians.

    Notes
    -----
    - For a conformal projection: semi_major = semi_minor
    - For an equal-area projection: area_scale is the same everywhere
    """
    semi_major: float
    semi_minor: float
    area_scale: float
    angular_distortion_rad: float

    @property
    def is_conformal(self) -> bool:
        """Check if projection is locally conformal (circle, no angular distortion)."""
        return np.abs(self.semi_major - self.semi_minor) < 1e-6


class ProjectionAdapter(ABC):
    """Abstract base class for map projection adapters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the projection."""
        pass

    @property
    @abstractmethod
    def proj4_string(self) -> str:
        """PROJ.4 definition string."""
        pass

    @property
    @abstractmethod
    def preserves_angles(self) -> bool:
        """Whether this is a conformal projection."""
        pass

    @property
    @abstractmethod
    def preserves_area(self) -> bool:
        """Whether this is an equal-area projection."""
        pass

    @abstractmethod
    def to_projected(
        self,
        lat_rad: float,
        lon_rad: float
    ) -> Tuple[float, float]:
        """Transform geographic coordinates to projected coordinates.

        Parameters
        ----------
        lat_rad, lon_rad : float
            Geographic coordinates in radians.

        Returns
        -------
        Tuple[float, float]
            (x, y) projected coordinates.
        """
        pass

    @abstractmethod
    def to_geodetic(
        self,
        x: float,
        y: float
    ) -> Tuple[float, float]:
        """Transform projected coordinates back to geographic.

        Parameters
        ----------
        x, y : float
            Projected coordinates.

        Returns
        -------
        Tuple[float, float]
            (lat_rad, lon_rad) in radians.
        """
        pass


def compute_tissot_indicatrix(
    projection: ProjectionAdapter,
    lat_rad: float,
    lon_rad: float,
    radius: float = 1.0,
    delta: float = 1e-6
) -> TissotIndicatrix:
    """Compute Tissot's indicatrix numerically on a sphere.

    Parameters
    ----------
    projection : ProjectionAdapter
        The projection to analyze.
    lat_rad, lon_rad : float
        Location in radians. Keep away from face edges and the poles so
        that the finite differences stay on one face.
    radius : float
        Radius of the sphere being projected.
    delta : float
        Small angular offset for numerical differentiation.

    Returns
    -------
    TissotIndicatrix
        Local distortion characteristics.
    """
    x0, y0 = projection.to_projected(lat_rad, lon_rad)

    # ∂x/∂λ, ∂y/∂λ (east-west)
    x_e, y_e = projection.to_projected(lat_rad, lon_rad + delta)
    dxdl = (x_e - x0) / delta
    dydl = (y_e - y0) / delta

    # ∂x/∂φ, ∂y/∂φ (north-south)
    x_n, y_n = projection.to_projected(lat_rad + delta, lon_rad)
    dxdp = (x_n - x0) / delta
    dydp = (y_n - y0) / delta

    cos_lat = np.cos(lat_rad)

    # Scale along meridian (h) and parallel (k)
    h = np.sqrt(dxdp**2 + dydp**2) / radius
    k = np.sqrt(dxdl**2 + dydl**2) / (radius * cos_lat)

    area_scale = np.abs(dxdp * dydl - dydp * dxdl) / (radius**2 * cos_lat)

    # Principal scales a >= b from h, k and the area scale s = a*b
    sum_ab = np.sqrt(max(h**2 + k**2 + 2.0 * area_scale, 0.0))
    diff_ab = np.sqrt(max(h**2 + k**2 - 2.0 * area_scale, 0.0))
    a = (sum_ab + diff_ab) / 2.0
    b = (sum_ab - diff_ab) / 2.0

    return TissotIndicatrix(
        semi_major=float(a),
        semi_minor=float(b),
        area_scale=float(area_scale),
        angular_distortion_rad=float(2.0 * np.arcsin(np.clip((a - b) / (a + b), -1.0, 1.0)))
    )


def points_from_crs(
    xs: ArrayLike,
    ys: ArrayLike,
    source_crs: Union[str, int, CRS]
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Convert coordinates in any CRS to geographic radians.

    Parameters
    ----------
    xs, ys : array_like
        Coordinates in ``source_crs``, axis order x/y (easting/northing,
        or longitude/latitude for geographic CRSs).
    source_crs : str, int or pyproj.CRS
        Anything ``pyproj.CRS.from_user_input`` accepts.

    Returns
    -------
    Tuple[ndarray, ndarray]
        (lons_rad, lats_rad).

    Raises
    ------
    ConfigurationError
        If the CRS cannot be interpreted.
    """
    try:
        crs = CRS.from_user_input(source_crs)
    except CRSError as e:
        raise ConfigurationError(f"Unrecognized CRS {source_crs!r}: {e}") from e

    transformer = Transformer.from_crs(crs, _GEOGRAPHIC_CRS, always_xy=True)
    lon_deg, lat_deg = transformer.transform(np.asarray(xs, dtype=np.float64),
                                             np.asarray(ys, dtype=np.float64))
    logger.debug(f"Converted {np.size(xs)} point(s) from {crs.name} to geographic")
    return np.radians(np.asarray(lon_deg)), np.radians(np.asarray(lat_deg))
