"""
Exception Hierarchy for the ISEA Discrete Global Grid System.

Two failure classes exist. Configuration problems are detected while a
``GridConfig`` is being built, before any point is transformed. Geometry
problems are detected while a point is being located on the icosahedron
and signal either a projection defect or an out-of-domain input such as
NaN coordinates.

Neither class is recoverable: callers get the exception as soon as the
problem is detected.
"""

from typing import Optional

import numpy as np


class IseaError(Exception):
    """Base class for all errors raised by the grid system."""


class ConfigurationError(IseaError, ValueError):
    """An option or table lookup received a value the grid cannot use.

    Parameters
    ----------
    message : str
        Description of the problem.
    option : str, optional
        Name of the offending option, if the error came from one.
    """

    def __init__(self, message: str, option: Optional[str] = None):
        super().__init__(message)
        self.option = option


class GeometryError(IseaError):
    """No icosahedron face contains the point being transformed.

    Parameters
    ----------
    lon_rad, lat_rad : float
        The (reoriented) coordinates that could not be placed, in radians.
    """

    def __init__(self, lon_rad: float, lat_rad: float):
        self.lon_rad = lon_rad
        self.lat_rad = lat_rad
        super().__init__(
            f"impossible transform: {np.degrees(lon_rad)} {np.degrees(lat_rad)} "
            f"is not on any triangle"
        )
