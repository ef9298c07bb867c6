"""Tests for labelling lat/lon meshes with cell serial numbers."""

import numpy as np
import pytest
import xarray as xr

from common.types import AddressForm
from dggs.config import GridConfig
from dggs.indexing import cell_index_grid


class TestCellIndexGrid:

    def test_poles(self, pole_grid):
        cells = cell_index_grid(pole_grid, [90.0, -90.0], [0.0])
        assert isinstance(cells, xr.DataArray)
        assert cells.dims == ("lat", "lon")
        assert cells.dtype == np.int64
        assert cells.sel(lat=90.0, lon=0.0).item() == 1
        assert cells.sel(lat=-90.0, lon=0.0).item() == pole_grid.max_serial

    def test_coords_and_attrs(self):
        config = GridConfig(aperture=4, resolution=2)
        cells = cell_index_grid(config, [-10.0, 0.0, 10.0], [100.0, 110.0])
        assert cells.shape == (3, 2)
        np.testing.assert_array_equal(cells["lat"].values, [-10.0, 0.0, 10.0])
        np.testing.assert_array_equal(cells["lon"].values, [100.0, 110.0])
        assert cells.attrs["max_serial"] == config.max_serial

    def test_output_form_ignored(self):
        lats, lons = [30.0, 31.0], [-60.0, -61.0]
        a = cell_index_grid(GridConfig(output=AddressForm.PLANE), lats, lons)
        b = cell_index_grid(GridConfig(output=AddressForm.HEX), lats, lons)
        xr.testing.assert_identical(a, b)

    def test_serials_in_range(self):
        config = GridConfig(aperture=4, resolution=1)
        cells = cell_index_grid(config, np.arange(-80.0, 81.0, 20.0), np.arange(-170.0, 171.0, 20.0))
        assert int(cells.min()) >= 1
        assert int(cells.max()) <= config.max_serial

    def test_rejects_2d_coordinates(self):
        with pytest.raises(ValueError):
            cell_index_grid(GridConfig(), [[0.0]], [0.0])
