"""Tests for the projection adapter, distortion tracking and CRS input."""

import threading

import numpy as np
import pytest

from common.exceptions import ConfigurationError
from common.types import AddressForm, GeoPoint
from dggs.config import GridConfig
from dggs.projection import IcosahedralSnyderEqualArea, LastTransform
from dggs.transform import project
from geospatial.projections import (
    ProjectionAdapter,
    compute_tissot_indicatrix,
    points_from_crs,
)

# Interior points of faces 1, 8, 13 and 19 in the pole orientation
INTERIOR_POINTS_DEG = [(-140.0, 50.0), (5.0, 15.0), (40.0, -15.0), (100.0, -55.0)]


@pytest.fixture
def isea():
    return IcosahedralSnyderEqualArea(GridConfig.from_options(orient="pole"))


class TestAdapter:

    def test_is_projection_adapter(self, isea):
        assert isinstance(isea, ProjectionAdapter)
        assert isea.preserves_area
        assert not isea.preserves_angles

    def test_proj4_string(self, isea):
        s = isea.proj4_string
        assert s.startswith("+proj=isea")
        assert "+aperture=3" in s
        assert "+resolution=4" in s

    @pytest.mark.parametrize("options", [
        {"orient": "pole"},
        {"mode": "di", "aperture": 4, "resolution": 2},
        {"mode": "hex", "rescale": True, "azi": 12.5, "lon_0": -30.0},
        {"mode": "dd", "lat_0": 45.0},
    ])
    def test_proj4_string_rebuilds_config(self, options):
        config = GridConfig.from_options(**options)
        rebuilt = GridConfig.from_proj_string(IcosahedralSnyderEqualArea(config).proj4_string)
        assert (rebuilt.aperture, rebuilt.resolution) == (config.aperture, config.resolution)
        assert rebuilt.output is config.output
        assert rebuilt.radius == config.radius
        assert rebuilt.pole_lat == pytest.approx(config.pole_lat, abs=1e-12)
        assert rebuilt.pole_lon == pytest.approx(config.pole_lon, abs=1e-12)
        assert rebuilt.azimuth == pytest.approx(config.azimuth, abs=1e-12)

    def test_proj4_string_omits_unrepresentable_form(self):
        isea = IcosahedralSnyderEqualArea(GridConfig(output=AddressForm.SEQNUM))
        assert "+mode" not in isea.proj4_string
        assert "+rescale" not in isea.proj4_string

    def test_name(self, isea):
        assert "ISEA" in isea.name

    def test_default_config(self):
        assert IcosahedralSnyderEqualArea().config == GridConfig()

    def test_to_projected_is_plane(self, isea):
        x, y = isea.to_projected(np.radians(15.0), np.radians(5.0))
        plane = isea.config.with_output(AddressForm.PLANE)
        p = project(plane, GeoPoint.from_degrees(5.0, 15.0))
        assert (x, y) == (p.x, p.y)

    def test_inverse_not_supported(self, isea):
        with pytest.raises(NotImplementedError):
            isea.to_geodetic(0.0, 0.0)


class TestDiagnostics:

    def test_empty_before_first_transform(self, isea):
        assert isea.last_transform == LastTransform(None, None, None)

    def test_records_last_serial(self):
        isea = IcosahedralSnyderEqualArea(
            GridConfig.from_options(orient="pole").with_output(AddressForm.SEQNUM)
        )
        isea.project(GeoPoint(lon=0.0, lat=np.pi / 2))
        assert isea.last_transform == LastTransform(triangle=None, quad=0, serial=1)

    def test_records_triangle(self, isea):
        isea.project(GeoPoint.from_degrees(5.0, 15.0))
        assert isea.last_transform.triangle == 8

    def test_per_thread(self, isea):
        isea.project(GeoPoint.from_degrees(5.0, 15.0))
        seen = []
        worker = threading.Thread(target=lambda: seen.append(isea.last_transform))
        worker.start()
        worker.join()
        assert seen == [LastTransform(None, None, None)]
        assert isea.last_transform.triangle == 8


class TestTissot:

    def test_equal_area(self, isea):
        scales = [
            compute_tissot_indicatrix(isea, np.radians(lat), np.radians(lon)).area_scale
            for lon, lat in INTERIOR_POINTS_DEG
        ]
        assert np.ptp(scales) / np.mean(scales) < 1e-4

    def test_not_conformal_everywhere(self, isea):
        indicatrices = [
            compute_tissot_indicatrix(isea, np.radians(lat), np.radians(lon))
            for lon, lat in INTERIOR_POINTS_DEG
        ]
        for t in indicatrices:
            assert t.semi_major >= t.semi_minor > 0
        assert max(t.angular_distortion_rad for t in indicatrices) > 1e-3


class TestPointsFromCrs:

    def test_geographic_identity(self):
        lons, lats = points_from_crs([10.0, -80.0], [20.0, 25.0], "EPSG:4326")
        np.testing.assert_allclose(lons, np.radians([10.0, -80.0]), atol=1e-12)
        np.testing.assert_allclose(lats, np.radians([20.0, 25.0]), atol=1e-12)

    def test_web_mercator_origin(self):
        lons, lats = points_from_crs([0.0], [0.0], 3857)
        np.testing.assert_allclose(lons, [0.0], atol=1e-12)
        np.testing.assert_allclose(lats, [0.0], atol=1e-12)

    def test_unknown_crs(self):
        with pytest.raises(ConfigurationError):
            points_from_crs([0.0], [0.0], "not-a-crs")
