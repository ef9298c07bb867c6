"""
Forward ISEA Transform: Geographic Point to Grid Address.

Pipeline
--------
1. Reorient the point into the grid frame.
2. Locate its icosahedron face and face-local planar position.
3. PLANE: place it on the global triangle layout and stop.
   Otherwise rescale it into the face's unit triangle.
4. PROJTRI stops there; VERTEX2DD and Q2DD fold it into a quad frame.
5. Q2DI, SEQNUM and HEX bin it into the quad's hexagon lattice, move it
   to the owning quad, and format the cell.

Every step is a pure function of the configuration and the point, so
transforms of different points may run concurrently with one shared
``GridConfig``.
"""

from typing import Callable, Dict, List, Sequence

import numpy as np
from numpy.typing import ArrayLike

from common.logging_config import get_logger
from common.types import (
    Address,
    AddressForm,
    FaceLocation,
    GeoPoint,
    PlanePoint,
    ProjectedTrianglePoint,
    QuadLattice,
    QuadPoint,
)
from dggs.config import GridConfig
from dggs.quads import quad_lattice
from dggs.serial import hex_address, serial_number
from geospatial.placement import place_in_quad, place_on_plane, to_unit_triangle
from geospatial.reorientation import reorient
from geospatial.snyder import locate_face

logger = get_logger(__name__)


def locate(config: GridConfig, point: GeoPoint) -> FaceLocation:
    """Reorient ``point`` and locate it on a face, scaled by the grid radius."""
    grid_point = reorient(config.pole_lat, config.pole_lon, config.azimuth, point)
    face = locate_face(grid_point)
    return FaceLocation(face.triangle, face.point.scaled(config.radius))


def _lattice_cell(config: GridConfig, face: FaceLocation) -> QuadLattice:
    quad, quad_point = place_in_quad(face.triangle, to_unit_triangle(face.point, config.radius))
    return quad_lattice(config, quad, quad_point)


def _plane(config: GridConfig, face: FaceLocation) -> Address:
    p = place_on_plane(face, config.radius)
    return PlanePoint(x=p.x, y=p.y, triangle=face.triangle)


def _projtri(config: GridConfig, face: FaceLocation) -> Address:
    p = to_unit_triangle(face.point, config.radius)
    return ProjectedTrianglePoint(x=p.x, y=p.y, triangle=face.triangle)


def _quad_point(config: GridConfig, face: FaceLocation) -> Address:
    quad, p = place_in_quad(face.triangle, to_unit_triangle(face.point, config.radius))
    return QuadPoint(quad=quad, x=p.x, y=p.y, triangle=face.triangle, form=config.output)


def _q2di(config: GridConfig, face: FaceLocation) -> Address:
    return _lattice_cell(config, face)


def _seqnum(config: GridConfig, face: FaceLocation) -> Address:
    return serial_number(config, _lattice_cell(config, face))


def _hex(config: GridConfig, face: FaceLocation) -> Address:
    return hex_address(_lattice_cell(config, face))


_FORMATTERS: Dict[AddressForm, Callable[[GridConfig, FaceLocation], Address]] = {
    AddressForm.PLANE: _plane,
    AddressForm.PROJTRI: _projtri,
    AddressForm.VERTEX2DD: _quad_point,
    AddressForm.Q2DD: _quad_point,
    AddressForm.Q2DI: _q2di,
    AddressForm.SEQNUM: _seqnum,
    AddressForm.HEX: _hex,
}


def project(config: GridConfig, point: GeoPoint) -> Address:
    """Transform a geographic point into the configured address form.

    Parameters
    ----------
    config : GridConfig
        Grid to address the point in.
    point : GeoPoint
        Point on the sphere, radians.

    Returns
    -------
    Address
        One of the address variants; its ``form`` equals ``config.output``.

    Raises
    ------
    GeometryError
        If the point cannot be placed on any face (non-finite input).
    """
    face = locate(config, point)
    address = _FORMATTERS[config.output](config, face)
    logger.debug(f"{point} -> {address}")
    return address


def project_many(
    config: GridConfig,
    lons_rad: ArrayLike,
    lats_rad: ArrayLike
) -> List[Address]:
    """Transform arrays of coordinates.

    Parameters
    ----------
    config : GridConfig
        Grid to address the points in.
    lons_rad, lats_rad : array_like
        Coordinates in radians, broadcast against each other.

    Returns
    -------
    List[Address]
        One address per broadcast element, in C order.
    """
    lons, lats = np.broadcast_arrays(np.asarray(lons_rad, dtype=np.float64),
                                     np.asarray(lats_rad, dtype=np.float64))
    return [
        project(config, GeoPoint(lon=float(lon), lat=float(lat)))
        for lon, lat in zip(lons.ravel(), lats.ravel())
    ]


def serials(config: GridConfig, points: Sequence[GeoPoint]) -> np.ndarray:
    """Serial numbers of ``points`` as an int64 array, whatever ``config.output`` is."""
    seq_config = config if config.output is AddressForm.SEQNUM else config.with_output(AddressForm.SEQNUM)
    return np.array([project(seq_config, p).serial for p in points], dtype=np.int64)
