import os
from datetime import datetime

import pytest
from pytz import utc

# Headless matplotlib for the static renderer
os.environ.setdefault("MPLBACKEND", "Agg")

from solarglobe.models import Location  # noqa: E402


def make_location(name: str, lon: float, lat: float = 0.0, population: float = 0) -> Location:
    return Location(
        name=name,
        lat=lat,
        lon=lon,
        population=population,
        timezone="UTC",
        country="Nowhere",
    )


@pytest.fixture
def noon_utc():
    """An instant whose UTC decimal hour is exactly 12."""
    return datetime(2024, 3, 20, 12, 0, 0, tzinfo=utc)


@pytest.fixture
def midnight_utc():
    return datetime(2024, 3, 20, 0, 0, 0, tzinfo=utc)


@pytest.fixture
def antipodal_cities():
    return (make_location("CityA", 0.0), make_location("CityB", 180.0))
