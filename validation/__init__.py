"""
Validation Framework for the ISEA Discrete Global Grid.

This module provides structural consistency checks over sample points.
"""

from validation.grid_checks import (
    GridConsistencyChecker,
    ValidationResult,
    sample_points,
)

__all__ = [
    "GridConsistencyChecker",
    "ValidationResult",
    "sample_points",
]
