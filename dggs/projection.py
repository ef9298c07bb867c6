"""
ISEA as a Projection Adapter.

Wraps a ``GridConfig`` behind the common ``ProjectionAdapter`` interface so
the grid can be used wherever a projection is expected. ``to_projected``
always returns continuous global-plane coordinates; ``project`` returns
the full address in the configured form.

Diagnostics
-----------
The adapter remembers the triangle, quad and serial number of the last
point each thread projected. The record is advisory: nothing in the
transform reads it back, and it is kept per thread so that concurrent
workers sharing one adapter never see each other's values.
"""

import threading
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from common.constants import IseaConstants
from common.types import Address, AddressForm, GeoPoint
from dggs.config import MODES, GridConfig
from dggs.transform import project
from geospatial.projections import ProjectionAdapter

_MODE_NAMES = {form: name for name, form in MODES.items()}


@dataclass(frozen=True)
class LastTransform:
    """What the calling thread's most recent ``project`` produced."""
    triangle: Optional[int]
    quad: Optional[int]
    serial: Optional[int]


class IcosahedralSnyderEqualArea(ProjectionAdapter):
    """Icosahedral Snyder Equal Area projection and grid.

    Parameters
    ----------
    config : GridConfig, optional
        Grid definition. Defaults to the standard ISEA grid.

    Notes
    -----
    The inverse transform is not supported.
    """

    def __init__(self, config: Optional[GridConfig] = None):
        self._config = config if config is not None else GridConfig()
        self._plane_config = self._config.with_output(AddressForm.PLANE)
        self._local = threading.local()

    @property
    def config(self) -> GridConfig:
        return self._config

    @property
    def name(self) -> str:
        c = self._config
        return f"ISEA (aperture {c.aperture}, resolution {c.resolution})"

    @property
    def proj4_string(self) -> str:
        """PROJ definition; ``GridConfig.from_proj_string`` rebuilds the grid from it.

        Output forms with no PROJ ``mode`` (``SEQNUM``, ``PROJTRI``,
        ``VERTEX2DD``) and radii other than 1 or the ISEA scale are not
        representable and are left out.
        """
        c = self._config
        params = [
            "+proj=isea",
            f"+lat_0={_deg(c.pole_lat)}",
            f"+lon_0={_deg(c.pole_lon)}",
            f"+azi={_deg(c.azimuth)}",
            f"+aperture={c.aperture}",
            f"+resolution={c.resolution}",
        ]
        mode = _MODE_NAMES.get(c.output)
        if mode is not None:
            params.append(f"+mode={mode}")
        if c.radius == IseaConstants.ISEA_SCALE.value:
            params.append("+rescale")
        return " ".join(params)

    @property
    def preserves_angles(self) -> bool:
        return False

    @property
    def preserves_area(self) -> bool:
        return True

    @property
    def last_transform(self) -> LastTransform:
        return getattr(self._local, "last", LastTransform(None, None, None))

    def project(self, point: GeoPoint) -> Address:
        """Address of ``point`` in the configured form."""
        address = project(self._config, point)
        self._local.last = LastTransform(
            triangle=getattr(address, "triangle", None),
            quad=getattr(address, "quad", None),
            serial=getattr(address, "serial", None),
        )
        return address

    def to_projected(self, lat_rad: float, lon_rad: float) -> Tuple[float, float]:
        address = project(self._plane_config, GeoPoint(lon=lon_rad, lat=lat_rad))
        return address.x, address.y

    def to_geodetic(self, x: float, y: float) -> Tuple[float, float]:
        raise NotImplementedError("The ISEA inverse transform is not supported")


def _deg(rad: float) -> str:
    return repr(float(np.degrees(rad)))
