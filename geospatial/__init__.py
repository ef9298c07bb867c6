"""
Geospatial Module for the ISEA Discrete Global Grid System.

All spherical and planar geometry of the forward transform lives here.
The lattice and addressing layers in ``dggs`` only consume its results.

This module provides:
- Spherical angle helpers
- Reorientation of points into the grid frame
- Snyder equal-area projection onto icosahedron faces
- Placement of face points on the global plane and in quads
- The projection interface with distortion tracking and CRS input
"""

from geospatial.angles import (
    normalize_longitude,
    sph_azimuth,
    great_circle_angle,
)

from geospatial.reorientation import (
    rotate_to_pole,
    reorient,
)

from geospatial.snyder import (
    AZ_ADJUSTMENTS,
    locate_face,
)

from geospatial.placement import (
    rotate_point,
    triangle_plane_center,
    place_on_plane,
    to_unit_triangle,
    place_in_quad,
)

from geospatial.projections import (
    ProjectionAdapter,
    TissotIndicatrix,
    compute_tissot_indicatrix,
    points_from_crs,
)

__all__ = [
    # Angles
    "normalize_longitude",
    "sph_azimuth",
    "great_circle_angle",
    # Reorientation
    "rotate_to_pole",
    "reorient",
    # Snyder forward
    "AZ_ADJUSTMENTS",
    "locate_face",
    # Placement
    "rotate_point",
    "triangle_plane_center",
    "place_on_plane",
    "to_unit_triangle",
    "place_in_quad",
    # Projections
    "ProjectionAdapter",
    "TissotIndicatrix",
    "compute_tissot_indicatrix",
    "points_from_crs",
]
