from datetime import datetime

import pytest
from pytz import utc

from solarglobe.ephemeris import (
    greenwich_sidereal_time,
    lunar_parameters,
    moon_subpoint,
    solar_parameters,
    subsolar_longitude,
    sun_subpoint,
)
from solarglobe.timecalc import days_since_j2000, normalize180


def _n(*args) -> float:
    return days_since_j2000(datetime(*args, tzinfo=utc))


def test_solar_parameters_at_j2000():
    sun = solar_parameters(0.0)
    assert sun.mean_longitude == pytest.approx(280.460)
    assert sun.mean_anomaly == pytest.approx(357.528)
    assert sun.obliquity == pytest.approx(23.439)
    assert sun.ecliptic_longitude == pytest.approx(280.376, abs=0.01)
    assert sun.declination == pytest.approx(-23.03, abs=0.05)
    assert sun.right_ascension == pytest.approx(281.29, abs=0.05)
    assert sun.equation_of_time == pytest.approx(-3.3, abs=0.3)


def test_june_solstice_declination():
    sun = solar_parameters(_n(2024, 6, 20, 20, 51))
    assert sun.declination == pytest.approx(23.44, abs=0.05)


def test_march_equinox_declination_crosses_zero():
    before = solar_parameters(_n(2024, 3, 19, 0, 0)).declination
    after = solar_parameters(_n(2024, 3, 21, 0, 0)).declination
    assert before < 0.0 < after


@pytest.mark.parametrize(
    "when, expected",
    [
        ((2024, 2, 11, 12), -14.2),
        ((2024, 5, 14, 12), 3.7),
        ((2024, 7, 26, 12), -6.5),
        ((2024, 11, 3, 12), 16.4),
    ],
)
def test_equation_of_time_extremes(when, expected):
    assert solar_parameters(_n(*when)).equation_of_time == pytest.approx(expected, abs=0.6)


def test_solar_parameters_stay_in_physical_ranges():
    for n in range(-36525, 36525, 13):
        sun = solar_parameters(n + 0.37)
        assert -23.5 <= sun.declination <= 23.5
        assert 0.0 <= sun.right_ascension < 360.0
        assert 0.0 <= sun.mean_longitude < 360.0
        assert -20.0 <= sun.equation_of_time <= 20.0


def test_equation_of_time_is_continuous_day_to_day():
    start = _n(2023, 12, 1, 0, 0)
    previous = solar_parameters(start).equation_of_time
    for day in range(1, 800):
        current = solar_parameters(start + day).equation_of_time
        assert abs(current - previous) < 1.0
        previous = current


def test_solar_parameters_are_deterministic():
    assert solar_parameters(8765.4321) == solar_parameters(8765.4321)


def test_subsolar_longitude_at_noon_is_equation_of_time_in_degrees():
    assert subsolar_longitude(12.0, 8.0) == pytest.approx(2.0)
    assert subsolar_longitude(0.0, 0.0) == 180.0
    assert subsolar_longitude(18.0, 0.0) == pytest.approx(-90.0)


def test_sun_subpoint_at_noon_utc(noon_utc):
    lat, lon = sun_subpoint(noon_utc)
    sun = solar_parameters(days_since_j2000(noon_utc))
    assert lat == sun.declination
    assert lat == pytest.approx(0.0, abs=0.6)
    assert lon == pytest.approx(sun.equation_of_time / 4.0)


def test_greenwich_sidereal_time_at_j2000_noon():
    assert greenwich_sidereal_time(0.0, 12.0) == pytest.approx(280.46061837)


def test_greenwich_sidereal_time_is_normalized():
    for n in (-5000.25, 0.0, 123.5, 9999.75):
        for h in (0.0, 6.5, 23.99):
            assert 0.0 <= greenwich_sidereal_time(n, h) < 360.0


def test_lunar_parameters_at_j2000():
    moon = lunar_parameters(0.0, 12.0)
    assert moon.mean_longitude == pytest.approx(218.316)
    assert moon.mean_anomaly == pytest.approx(134.963)
    assert moon.argument_of_latitude == pytest.approx(93.272)
    assert moon.ecliptic_latitude == pytest.approx(5.128 * 0.99837, abs=0.01)
    assert moon.sidereal_time == pytest.approx(280.46061837)


def test_lunar_parameters_stay_in_physical_ranges():
    for n in range(-3650, 3650, 3):
        moon = lunar_parameters(n + 0.21, 5.04)
        assert -29.0 <= moon.declination <= 29.0
        assert -5.2 <= moon.ecliptic_latitude <= 5.2
        assert 0.0 <= moon.right_ascension < 360.0
        assert -180.0 < moon.sub_longitude <= 180.0


def test_full_moon_is_opposite_the_sun():
    n = _n(2024, 1, 25, 17, 54)
    sun = solar_parameters(n)
    moon = lunar_parameters(n, 17.9)
    elongation = normalize180(moon.ecliptic_longitude - sun.ecliptic_longitude)
    assert abs(elongation) > 177.0


def test_new_moon_is_conjunct_with_the_sun():
    n = _n(2024, 1, 11, 11, 57)
    sun = solar_parameters(n)
    moon = lunar_parameters(n, 11.95)
    elongation = normalize180(moon.ecliptic_longitude - sun.ecliptic_longitude)
    assert abs(elongation) < 3.0


def test_moon_subpoint_matches_parameters():
    instant = datetime(2025, 9, 7, 18, 11, 30, tzinfo=utc)
    lat, lon = moon_subpoint(instant)
    moon = lunar_parameters(days_since_j2000(instant), 18.0 + 11.5 / 60.0)
    assert lat == pytest.approx(moon.declination)
    assert lon == pytest.approx(moon.sub_longitude)


def test_moon_sub_longitude_moves_west_with_earth_rotation():
    n = _n(2024, 5, 1, 0, 0)
    early = lunar_parameters(n, 0.0).sub_longitude
    later = lunar_parameters(n + 1 / 24, 1.0).sub_longitude
    # Earth turns ~15°/h, the Moon drifts ~0.5°/h eastward
    assert normalize180(later - early) == pytest.approx(-14.5, abs=0.6)
