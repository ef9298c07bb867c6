"""
Planar Placement of Face-Local Coordinates.

After the Snyder step a point is known only relative to the centre of its
face. This module moves it into one of the two frames the address forms
are defined in:

- the global plane, where the 20 faces are laid out as 4 rows of 5
  triangles (rows 1 and 3 point up, rows 2 and 4 point down);
- a quad frame, where each pair of faces sharing an equatorial edge is
  folded into one of ten diamonds, plus the two polar quads.

Rotation Convention
-------------------
``rotate_point`` turns a point COUNTER-CLOCKWISE by the given number of degrees,
which is the sense the layout tables were written in.
"""

from typing import Final, Tuple

import numpy as np

from common.constants import IseaConstants
from common.exceptions import ConfigurationError
from common.types import FaceLocation, PlanarPoint
from geospatial.angles import TWO_PI

_TABLE_G = IseaConstants.TABLE_G.value
_TABLE_H = IseaConstants.TABLE_H.value
_RPRIME = IseaConstants.RPRIME.value
_ISEA_SCALE = IseaConstants.ISEA_SCALE.value

# Row heights of face centres, in TABLE_H units, top row first
_ROW_Y: Final[Tuple[float, ...]] = (5.0, 1.0, -1.0, -5.0)


def is_down_triangle(triangle: int) -> bool:
    """True for faces drawn pointing down in the planar layout."""
    return (triangle - 1) // 5 % 2 == 1


def rotate_point(point: PlanarPoint, degrees: float) -> PlanarPoint:
    """Rotate a planar point counter-clockwise about the origin.

    Parameters
    ----------
    point : PlanarPoint
        Point to rotate.
    degrees : float
        Counter-clockwise rotation in degrees.

    Returns
    -------
    PlanarPoint
        The rotated point.
    """
    rad = -degrees * np.pi / 180.0
    while rad >= TWO_PI:
        rad -= TWO_PI
    while rad <= -TWO_PI:
        rad += TWO_PI

    x = point.x * np.cos(rad) + point.y * np.sin(rad)
    y = -point.x * np.sin(rad) + point.y * np.cos(rad)
    return PlanarPoint(float(x), float(y))


def triangle_plane_center(triangle: int) -> PlanarPoint:
    """Centre of face ``triangle`` on the unit-radius global plane.

    Raises
    ------
    ConfigurationError
        If ``triangle`` is not in 1..20.
    """
    if not 1 <= triangle <= IseaConstants.FACE_COUNT:
        raise ConfigurationError(f"Triangle id {triangle} out of range [1, 20]")

    index = (triangle - 1) % 20
    x = _TABLE_G * ((index % 5) - 2) * 2.0
    if index > 9:
        x += _TABLE_G
    y = _ROW_Y[index // 5] * _TABLE_H
    return PlanarPoint(x * _RPRIME, y * _RPRIME)


def place_on_plane(face: FaceLocation, radius: float) -> PlanarPoint:
    """Move a face-local point (already scaled by ``radius``) onto the global plane."""
    point = face.point
    if face.is_down:
        point = rotate_point(point, 180.0)
    center = triangle_plane_center(face.triangle).scaled(radius)
    return point.translated(center.x, center.y)


def to_unit_triangle(point: PlanarPoint, radius: float) -> PlanarPoint:
    """Rescale a face-local point onto the standard ISEA unit triangle.

    The face centre moves to the unit triangle's centroid, so the base
    runs from (0, 0) to (1, 0).
    """
    dx, dy = IseaConstants.TRIANGLE_CENTER_OFFSET
    return PlanarPoint(
        point.x / radius * _ISEA_SCALE + dx,
        point.y / radius * _ISEA_SCALE + dy,
    )


def quad_of_triangle(triangle: int) -> int:
    """Equatorial quad (1..10) that face ``triangle`` is folded into."""
    return ((triangle - 1) % 5) + ((triangle - 1) // 10) * 5 + 1


def place_in_quad(triangle: int, point: PlanarPoint) -> Tuple[int, PlanarPoint]:
    """Fold a unit-triangle point into its quad frame.

    Parameters
    ----------
    triangle : int
        Face id, 1..20.
    point : PlanarPoint
        Position in the unit triangle of that face.

    Returns
    -------
    Tuple[int, PlanarPoint]
        Quad id (1..10) and the position in the quad frame.
    """
    down = is_down_triangle(triangle)
    quad = quad_of_triangle(triangle)

    point = rotate_point(point, 240.0 if down else 60.0)
    if down:
        point = point.translated(0.5, IseaConstants.UNIT_TRIANGLE_HEIGHT)
    return quad, point
