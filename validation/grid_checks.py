"""
Consistency Tests for the ISEA Grid.

This module provides checks that a configured grid behaves as a discrete
global grid should, over a sample of points on the sphere.

Test Categories
---------------
1. Totality (every point lands on exactly one face)
2. Lattice integrity (binned cells satisfy the cube zero-sum)
3. Numbering (serial numbers stay in [1, max_serial])
4. Determinism (repeated transforms agree)
"""

from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np
from numpy.typing import NDArray

from common.exceptions import GeometryError
from common.logging_config import get_logger
from common.types import AddressForm, GeoPoint
from dggs.config import GridConfig
from dggs.hexbin import hex_to_cube, hexbin
from dggs.transform import locate, project
from geospatial.placement import place_in_quad, rotate_point, to_unit_triangle

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the test.
    passed : bool
        Whether the test passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


def sample_points(lat_step_deg: float = 7.5, lon_step_deg: float = 7.5) -> List[GeoPoint]:
    """Regular lat/lon sample including both poles and the antimeridian."""
    lats = np.arange(-90.0, 90.0 + lat_step_deg / 2, lat_step_deg)
    lons = np.arange(-180.0, 180.0, lon_step_deg)
    return [GeoPoint.from_degrees(lon, lat) for lat in lats for lon in lons]


class GridConsistencyChecker:
    """Checker for structural consistency of an ISEA grid.

    Parameters
    ----------
    config : GridConfig
        Grid under test.
    log_violations : bool
        Whether to log failed checks.
    """

    def __init__(self, config: GridConfig, log_violations: bool = True):
        self.config = config
        self.log_violations = log_violations
        self._logger = get_logger("GridConsistencyChecker")

    def check_all(self, points: List[GeoPoint]) -> List[ValidationResult]:
        """Run all grid checks on a set of sample points.

        Parameters
        ----------
        points : list of GeoPoint
            Sample locations.

        Returns
        -------
        List[ValidationResult]
            Results of all checks.
        """
        results = [
            self.check_face_totality(points),
            self.check_cube_invariant(points),
            self.check_serial_range(points),
            self.check_determinism(points),
        ]

        if self.log_violations:
            for r in results:
                if not r.passed:
                    self._logger.warning(f"{r.test_name} failed: {r.message}")

        return results

    def check_face_totality(self, points: List[GeoPoint]) -> ValidationResult:
        """Check that every finite point is placed on a face 1..20."""
        failures = []
        triangles = np.zeros(20, dtype=np.int64)

        for p in points:
            try:
                face = locate(self.config, p)
            except GeometryError:
                failures.append(p.to_degrees())
                continue
            triangles[face.triangle - 1] += 1

        return ValidationResult(
            test_name="face_totality",
            passed=not failures,
            message=f"Face totality check: {len(failures)} unplaced points",
            details={
                'num_points': len(points),
                'unplaced': failures,
                'faces_hit': int(np.count_nonzero(triangles)),
            }
        )

    def check_cube_invariant(self, points: List[GeoPoint]) -> ValidationResult:
        """Check that binned lattice cells satisfy x + y + z = 0."""
        config = self.config
        if config.is_aperture3_odd:
            width = float(np.cos(np.pi / 6.0)) / config.sidelength
            rotation = 0.0
        else:
            width = 1.0 / int(config.sidelength)
            rotation = -30.0

        sums: List[int] = []
        for p in points:
            face = locate(config, p)
            _, quad_point = place_in_quad(face.triangle, to_unit_triangle(face.point, config.radius))
            if rotation:
                quad_point = rotate_point(quad_point, rotation)
            h = hex_to_cube(hexbin(width, quad_point))
            sums.append(h.x + h.y + h.z)

        num_violations = int(np.count_nonzero(sums))

        return ValidationResult(
            test_name="cube_invariant",
            passed=num_violations == 0,
            message=f"Cube invariant check: {num_violations} violations",
            details={'num_cells': len(sums), 'num_violations': num_violations}
        )

    def check_serial_range(self, points: List[GeoPoint]) -> ValidationResult:
        """Check that serial numbers lie in [1, max_serial]."""
        serials = self._serials(points)
        max_serial = self.config.max_serial

        violations = (serials < 1) | (serials > max_serial)
        num_violations = int(np.sum(violations))

        return ValidationResult(
            test_name="serial_range",
            passed=num_violations == 0,
            message=f"Serial range check: {num_violations} violations",
            details={
                'min_value': int(np.min(serials)) if serials.size else None,
                'max_value': int(np.max(serials)) if serials.size else None,
                'bounds': (1, max_serial),
                'distinct_cells': int(np.unique(serials).size),
            }
        )

    def check_determinism(self, points: List[GeoPoint]) -> ValidationResult:
        """Check that two passes over the same points agree exactly."""
        first = [project(self.config, p) for p in points]
        second = [project(self.config, p) for p in points]
        mismatches = sum(1 for a, b in zip(first, second) if a != b)

        return ValidationResult(
            test_name="determinism",
            passed=mismatches == 0,
            message=f"Determinism check: {mismatches} mismatches",
            details={'num_points': len(points), 'mismatches': mismatches}
        )

    def _serials(self, points: List[GeoPoint]) -> NDArray[np.int64]:
        seq_config = self.config.with_output(AddressForm.SEQNUM)
        return np.array([project(seq_config, p).serial for p in points], dtype=np.int64)
