"""Shared fixtures for the grid tests."""

import pytest

from common.constants import TRIANGLE_CENTERS
from common.types import AddressForm
from dggs.config import GridConfig


@pytest.fixture
def pole_grid() -> GridConfig:
    """Aperture 3, resolution 4 grid with an icosahedron vertex on the north pole."""
    return GridConfig.from_options(orient="pole")


@pytest.fixture
def pole_seqnum(pole_grid) -> GridConfig:
    return pole_grid.with_output(AddressForm.SEQNUM)


@pytest.fixture
def face_centres():
    """The 20 face centres, which are geographic points in the pole orientation."""
    return list(TRIANGLE_CENTERS)
