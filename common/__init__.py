"""
Common utilities and infrastructure for the ISEA Discrete Global Grid System.

This package provides foundational components used across all modules:
- Icosahedron tables and Snyder constants
- Typed value objects for every coordinate frame and address form
- Angular unit conversion
- Logging and the exception hierarchy
"""

from common.constants import IseaConstants, SnyderPolyhedron, snyder_constants
from common.exceptions import IseaError, ConfigurationError, GeometryError
from common.units import ureg, Q_, angle_to_radians
from common.types import (
    AddressForm,
    GeoPoint,
    PlanarPoint,
    CubeHex,
    FaceLocation,
    PlanePoint,
    ProjectedTrianglePoint,
    QuadPoint,
    QuadLattice,
    SerialNumber,
    HexAddress,
    Address,
)
from common.logging_config import get_logger, config_hash

__all__ = [
    "IseaConstants",
    "SnyderPolyhedron",
    "snyder_constants",
    "IseaError",
    "ConfigurationError",
    "GeometryError",
    "ureg",
    "Q_",
    "angle_to_radians",
    "AddressForm",
    "GeoPoint",
    "PlanarPoint",
    "CubeHex",
    "FaceLocation",
    "PlanePoint",
    "ProjectedTrianglePoint",
    "QuadPoint",
    "QuadLattice",
    "SerialNumber",
    "HexAddress",
    "Address",
    "get_logger",
    "config_hash",
]
