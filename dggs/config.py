"""
Grid Configuration for the ISEA Discrete Global Grid.

A ``GridConfig`` fixes everything a forward transform depends on: where the
icosahedron's pole sits, how it is turned about that pole, the aperture
and resolution of the hexagon lattice, the output address form and the
planar radius. It is immutable, so one instance can be shared read-only
by any number of workers.

Options
-------
``GridConfig.from_options`` accepts the PROJ ``isea`` parameter names:

========== ================================================================
orient     ``"isea"`` (standard ISEA pole) or ``"pole"`` (vertex at the
           geographic north pole)
azi        rotation of the grid about its pole, degrees
lon_0      pole longitude override, degrees
lat_0      pole latitude override, degrees
aperture   3 or 4
resolution subdivision depth, integer >= 0 (default 4)
mode       ``"plane"``, ``"di"``, ``"dd"`` or ``"hex"``
rescale    flag; sets the radius to the ISEA scale constant
========== ================================================================

Angular options may also be `pint` Quantities or strings with units.
The ``SEQNUM``, ``PROJTRI`` and ``VERTEX2DD`` forms are only reachable by
setting ``output`` directly.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Final, Union

import numpy as np

from common.constants import IseaConstants
from common.exceptions import ConfigurationError
from common.logging_config import config_hash, get_logger
from common.types import AddressForm
from common.units import angle_to_radians

logger = get_logger(__name__)

SUPPORTED_APERTURES: Final[tuple] = (3, 4)

ORIENTATIONS: Final[Dict[str, tuple]] = {
    "isea": (IseaConstants.ISEA_STD_LAT.value, IseaConstants.ISEA_STD_LON.value, 0.0),
    "pole": (np.pi / 2, 0.0, 0.0),
}

MODES: Final[Dict[str, AddressForm]] = {
    "plane": AddressForm.PLANE,
    "di": AddressForm.Q2DI,
    "dd": AddressForm.Q2DD,
    "hex": AddressForm.HEX,
}

OPTION_NAMES: Final[frozenset] = frozenset(
    {"orient", "azi", "lon_0", "lat_0", "aperture", "resolution", "mode", "rescale"}
)


@dataclass(frozen=True)
class GridConfig:
    """Immutable description of one ISEA grid.

    Attributes
    ----------
    pole_lat, pole_lon : float
        Grid pole in radians. Defaults to the standard ISEA orientation.
    azimuth : float
        Rotation about the pole in radians.
    aperture : int
        Subdivision branching factor, 3 or 4.
    resolution : int
        Subdivision depth, >= 0.
    output : AddressForm
        Address form produced by the transform.
    radius : float
        Planar scale factor, > 0.

    Notes
    -----
    The polyhedron is always the icosahedron; it is not a field.
    """
    pole_lat: float = IseaConstants.ISEA_STD_LAT.value
    pole_lon: float = IseaConstants.ISEA_STD_LON.value
    azimuth: float = 0.0
    aperture: int = 3
    resolution: int = 4
    output: AddressForm = AddressForm.PLANE
    radius: float = 1.0

    def __post_init__(self):
        for name in ("pole_lat", "pole_lon", "azimuth"):
            value = getattr(self, name)
            if not np.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}", option=name)

        if isinstance(self.aperture, bool) or self.aperture not in SUPPORTED_APERTURES:
            raise ConfigurationError(
                f"Aperture must be one of {SUPPORTED_APERTURES}, got {self.aperture!r}",
                option="aperture"
            )

        if (isinstance(self.resolution, bool) or not isinstance(self.resolution, (int, np.integer))
                or self.resolution < 0):
            raise ConfigurationError(
                f"Resolution must be a non-negative integer, got {self.resolution!r}",
                option="resolution"
            )

        if not np.isfinite(self.radius) or self.radius <= 0:
            raise ConfigurationError(f"Radius must be positive, got {self.radius}", option="radius")

        if not isinstance(self.output, AddressForm):
            try:
                object.__setattr__(self, "output", AddressForm(self.output))
            except ValueError as e:
                raise ConfigurationError(
                    f"Unknown output form {self.output!r}", option="output"
                ) from e

        object.__setattr__(self, "aperture", int(self.aperture))
        object.__setattr__(self, "resolution", int(self.resolution))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_options(cls, **options: Any) -> 'GridConfig':
        """Build a configuration from PROJ-style ``isea`` options.

        Options are applied in a fixed order: ``orient`` first, then the
        ``azi``/``lon_0``/``lat_0`` overrides, then lattice and output
        settings.

        Raises
        ------
        ConfigurationError
            For unknown option names or unsupported values.
        """
        unknown = set(options) - OPTION_NAMES
        if unknown:
            raise ConfigurationError(
                f"Unknown isea option(s): {', '.join(sorted(unknown))}",
                option=sorted(unknown)[0]
            )

        pole_lat, pole_lon, azimuth = ORIENTATIONS["isea"]

        orient = options.get("orient")
        if orient is not None:
            if orient not in ORIENTATIONS:
                raise ConfigurationError(
                    f"Unknown orientation {orient!r}; expected one of {sorted(ORIENTATIONS)}",
                    option="orient"
                )
            pole_lat, pole_lon, azimuth = ORIENTATIONS[orient]

        if options.get("azi") is not None:
            azimuth = angle_to_radians(options["azi"])
        if options.get("lon_0") is not None:
            pole_lon = angle_to_radians(options["lon_0"])
        if options.get("lat_0") is not None:
            pole_lat = angle_to_radians(options["lat_0"])

        output = AddressForm.PLANE
        mode = options.get("mode")
        if mode is not None:
            if mode not in MODES:
                raise ConfigurationError(
                    f"Unknown mode {mode!r}; expected one of {sorted(MODES)}",
                    option="mode"
                )
            output = MODES[mode]

        radius = IseaConstants.ISEA_SCALE.value if options.get("rescale") else 1.0

        config = cls(
            pole_lat=pole_lat,
            pole_lon=pole_lon,
            azimuth=azimuth,
            aperture=_as_int(options.get("aperture", 3), "aperture"),
            resolution=_as_int(options.get("resolution", 4), "resolution"),
            output=output,
            radius=radius,
        )
        logger.info(
            f"Configured ISEA grid {config.fingerprint()} | aperture={config.aperture} "
            f"resolution={config.resolution} output={config.output.value}"
        )
        return config

    @classmethod
    def from_proj_string(cls, definition: str) -> 'GridConfig':
        """Build a configuration from a PROJ definition string.

        Examples
        --------
        >>> cfg = GridConfig.from_proj_string("+proj=isea +mode=di +resolution=3")
        >>> cfg.output.value, cfg.resolution
        ('q2di', 3)
        """
        options: Dict[str, Any] = {}
        for token in definition.split():
            if not token.startswith("+"):
                raise ConfigurationError(f"Malformed PROJ parameter {token!r}")
            key, sep, value = token[1:].partition("=")
            if key == "proj":
                if value != "isea":
                    raise ConfigurationError(
                        f"Expected +proj=isea, got +proj={value}", option="proj"
                    )
                continue
            if key in options:
                raise ConfigurationError(f"Duplicate PROJ parameter +{key}", option=key)
            options[key] = value if sep else True
        return cls.from_options(**options)

    def with_output(self, output: Union[AddressForm, str]) -> 'GridConfig':
        """Copy of this configuration producing a different address form."""
        return replace(self, output=output)

    # -------------------------------------------------------------------------
    # Derived lattice sizes
    # -------------------------------------------------------------------------

    @property
    def is_aperture3_odd(self) -> bool:
        """Aperture 3 at odd resolution uses the rotated (class II) lattice."""
        return self.aperture == 3 and self.resolution % 2 == 1

    @property
    def hexes_per_quad(self) -> int:
        return _rounded_power(self.aperture, self.resolution)

    @property
    def sidelength(self) -> float:
        """Lattice cells along a quad edge.

        Notes
        -----
        For aperture 3 at odd resolution this is 3^((r+1)/2) / 2, always
        a half-integer, and the far edges sit at (d, i) coordinate
        3^((r+1)/2). Otherwise it is aperture^(r/2) rounded to the
        nearest integer. Either way a quad holds ``hexes_per_quad`` cells.
        """
        if self.is_aperture3_odd:
            return _rounded_power(self.aperture, (self.resolution + 1) / 2.0) / 2.0
        return float(_rounded_power(self.aperture, self.resolution / 2.0))

    @property
    def max_serial(self) -> int:
        """Largest serial number; the south pole cell."""
        return 10 * self.hexes_per_quad + 2

    def fingerprint(self) -> str:
        """Short deterministic identifier of this configuration."""
        return config_hash({
            "pole_lat": repr(self.pole_lat),
            "pole_lon": repr(self.pole_lon),
            "azimuth": repr(self.azimuth),
            "aperture": self.aperture,
            "resolution": self.resolution,
            "output": self.output.value,
            "radius": repr(self.radius),
        })


def _rounded_power(base: int, exponent: float) -> int:
    # pow() may land just under an exact integer
    return int(float(base) ** exponent + 0.5)


def _as_int(value: Any, option: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"Option {option} needs an integer value", option=option)
    if isinstance(value, (int, np.integer)):
        return int(value)
    try:
        return int(str(value))
    except ValueError as e:
        raise ConfigurationError(
            f"Option {option} needs an integer value, got {value!r}", option=option
        ) from e
