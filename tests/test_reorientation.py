"""Tests for rotating points into the grid frame."""

import numpy as np
import pytest

from common.constants import IseaConstants
from common.types import GeoPoint
from geospatial.reorientation import reorient, rotate_to_pole


SAMPLE_POINTS = [
    GeoPoint.from_degrees(20.0, 30.0),
    GeoPoint.from_degrees(-120.0, -45.0),
    GeoPoint.from_degrees(179.0, 5.0),
    GeoPoint.from_degrees(-3.0, -80.0),
]


class TestReorient:

    @pytest.mark.parametrize("point", SAMPLE_POINTS)
    def test_pole_orientation_is_identity(self, point):
        result = reorient(np.pi / 2, 0.0, 0.0, point)
        assert result.lat == pytest.approx(point.lat, abs=1e-12)
        assert result.lon == pytest.approx(point.lon, abs=1e-12)

    def test_azimuth_turns_about_pole(self):
        point = GeoPoint.from_degrees(20.0, 30.0)
        result = reorient(np.pi / 2, 0.0, np.radians(10.0), point)
        assert np.degrees(result.lon) == pytest.approx(30.0, abs=1e-9)
        assert np.degrees(result.lat) == pytest.approx(30.0, abs=1e-9)

    def test_isea_pole_becomes_grid_pole(self):
        lat = IseaConstants.ISEA_STD_LAT.value
        lon = IseaConstants.ISEA_STD_LON.value
        result = reorient(lat, lon, 0.0, GeoPoint(lon=lon, lat=lat))
        assert result.lat == pytest.approx(np.pi / 2, abs=1e-7)

    def test_latitude_stays_in_range(self):
        for point in SAMPLE_POINTS:
            result = reorient(IseaConstants.ISEA_STD_LAT.value,
                              IseaConstants.ISEA_STD_LON.value, 0.3, point)
            assert -np.pi / 2 <= result.lat <= np.pi / 2
            assert -np.pi <= result.lon <= np.pi


class TestRotateToPole:

    def test_preserves_angular_distance(self):
        a = GeoPoint.from_degrees(10.0, 20.0)
        b = GeoPoint.from_degrees(-40.0, 60.0)
        ra = rotate_to_pole(0.8, 1.3, a)
        rb = rotate_to_pole(0.8, 1.3, b)

        def central(p, q):
            return np.arccos(np.clip(
                np.sin(p.lat) * np.sin(q.lat)
                + np.cos(p.lat) * np.cos(q.lat) * np.cos(p.lon - q.lon), -1, 1))

        assert central(ra, rb) == pytest.approx(central(a, b), abs=1e-12)
