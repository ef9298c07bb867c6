"""Tests for the spherical angle helpers."""

import numpy as np
import pytest

from geospatial.angles import (
    great_circle_angle,
    normalize_longitude,
    safe_acos,
    safe_asin,
    sph_azimuth,
)


class TestSafeInverseTrig:

    def test_asin_clamps_overshoot(self):
        assert safe_asin(1.0 + 1e-15) == pytest.approx(np.pi / 2)
        assert safe_asin(-1.0 - 1e-15) == pytest.approx(-np.pi / 2)

    def test_acos_clamps_overshoot(self):
        assert safe_acos(1.0 + 1e-15) == 0.0
        assert safe_acos(-1.0 - 1e-15) == pytest.approx(np.pi)


class TestNormalizeLongitude:

    @pytest.mark.parametrize("lon_deg, expected_deg", [
        (370.0, 10.0),
        (-190.0, 170.0),
        (725.0, 5.0),
        (45.0, 45.0),
    ])
    def test_wraps_into_range(self, lon_deg, expected_deg):
        result = normalize_longitude(np.radians(lon_deg))
        assert result == pytest.approx(np.radians(expected_deg), abs=1e-12)
        assert -np.pi <= result <= np.pi


class TestAzimuthAndDistance:

    def test_azimuth_north(self):
        assert sph_azimuth(0.0, 0.0, 0.0, 0.1) == pytest.approx(0.0, abs=1e-15)

    def test_azimuth_east(self):
        assert sph_azimuth(0.0, 0.0, 0.1, 0.0) == pytest.approx(np.pi / 2)

    def test_azimuth_south(self):
        assert abs(sph_azimuth(0.0, 0.0, 0.0, -0.1)) == pytest.approx(np.pi)

    def test_quarter_circle(self):
        assert great_circle_angle(0.0, 0.0, np.pi / 2, 0.0) == pytest.approx(np.pi / 2)

    def test_pole_to_equator(self):
        assert great_circle_angle(1.0, np.pi / 2, -2.0, 0.0) == pytest.approx(np.pi / 2)
