"""
Raster Indexing onto ISEA Cells.

Labels every node of a regular latitude/longitude mesh with the serial
number of the grid cell containing it. The result is an `xarray`
DataArray so it lines up with gridded fields that share the same
coordinates, e.g. for aggregating a reanalysis variable per cell with
``field.groupby(cells)``.
"""

from typing import Sequence

import numpy as np
import xarray as xr

from common.logging_config import get_logger
from common.types import AddressForm, GeoPoint
from dggs.config import GridConfig
from dggs.transform import project

logger = get_logger(__name__)


def cell_index_grid(
    config: GridConfig,
    lats_deg: Sequence[float],
    lons_deg: Sequence[float]
) -> xr.DataArray:
    """Serial numbers of the cells under a lat/lon mesh.

    Parameters
    ----------
    config : GridConfig
        Grid to index against. Its output form is ignored; serial numbers
        are always produced.
    lats_deg, lons_deg : sequence of float
        1D latitude and longitude coordinates in degrees.

    Returns
    -------
    xr.DataArray
        int64 serial numbers with dims ``("lat", "lon")``.
    """
    lats = np.asarray(lats_deg, dtype=np.float64)
    lons = np.asarray(lons_deg, dtype=np.float64)
    if lats.ndim != 1 or lons.ndim != 1:
        raise ValueError("lats_deg and lons_deg must be one-dimensional")

    seq_config = config.with_output(AddressForm.SEQNUM)
    cells = np.empty((lats.size, lons.size), dtype=np.int64)
    for j, lat in enumerate(lats):
        for k, lon in enumerate(lons):
            cells[j, k] = project(seq_config, GeoPoint.from_degrees(lon, lat)).serial

    logger.info(
        f"Indexed {cells.size} nodes onto grid {seq_config.fingerprint()} "
        f"({np.unique(cells).size} distinct cells)"
    )

    return xr.DataArray(
        cells,
        dims=("lat", "lon"),
        coords={"lat": lats, "lon": lons},
        name="cell",
        attrs={
            "long_name": "isea_cell_serial_number",
            "aperture": config.aperture,
            "resolution": config.resolution,
            "max_serial": config.max_serial,
        }
    )
