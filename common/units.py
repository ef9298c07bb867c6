"""
Unit Registry for Angular Configuration Values.

Grid orientation options are given in degrees on the command line and in
PROJ strings, while every stage of the transform works in radians. This
module centralizes that conversion on a single `pint` registry so that a
caller may also pass an explicit Quantity (``Q_(11.25, 'degree')``,
``Q_(0.2, 'radian')``, ``Q_(675, 'arcminute')``) and have it converted
correctly, while a non-angular Quantity is rejected.

Example Usage
-------------
>>> from common.units import Q_, angle_to_radians
>>> round(angle_to_radians(Q_(180, 'degree')), 6)
3.141593
>>> angle_to_radians(90.0)
1.5707963267948966
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

from common.exceptions import ConfigurationError

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

AngleLike = Union[float, int, str, pint.Quantity]


def ensure_quantity(value: AngleLike, default_unit: str) -> pint.Quantity:
    """Ensure a value is a pint Quantity, applying default unit if necessary.

    Parameters
    ----------
    value : float, str or pint.Quantity
        The value to convert. Strings are parsed, so ``"30 degree"`` and
        ``"30"`` are both accepted.
    default_unit : str
        The unit to apply if value carries none.

    Returns
    -------
    pint.Quantity
        The value with units.
    """
    if isinstance(value, pint.Quantity):
        return value
    if isinstance(value, str):
        parsed = ureg.parse_expression(value)
        if isinstance(parsed, pint.Quantity):
            # angles are dimensionless in pint, so test for a bare number
            if parsed.unitless:
                return ureg.Quantity(parsed.magnitude, default_unit)
            return parsed
        return ureg.Quantity(float(parsed), default_unit)
    return ureg.Quantity(value, default_unit)


def angle_to_radians(value: AngleLike, default_unit: str = "degree") -> float:
    """Convert an angle to radians.

    Parameters
    ----------
    value : float, str or pint.Quantity
        The angle. Bare numbers are interpreted in ``default_unit``.
    default_unit : str
        Unit for bare numbers.

    Returns
    -------
    float
        The angle in radians.

    Raises
    ------
    ConfigurationError
        If the value cannot be parsed or is not an angle.
    """
    try:
        quantity = ensure_quantity(value, default_unit)
        return float(quantity.to(ureg.radian).magnitude)
    except pint.DimensionalityError as e:
        raise ConfigurationError(
            f"Expected an angle, got {value!r} with units {e.units1}"
        ) from e
    except (pint.UndefinedUnitError, ValueError, TypeError) as e:
        raise ConfigurationError(f"Cannot interpret {value!r} as an angle") from e
