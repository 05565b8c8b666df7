from datetime import datetime

import pytest
from pytz import utc

import solarglobe.compute as compute
from solarglobe.compute import (
    compute_globe_state,
    lunar_position,
    solar_position,
    sun_direction_unit_vector,
)
from solarglobe.config import MOON_RADIUS, SUN_RADIUS
from solarglobe.ephemeris import moon_subpoint, sun_subpoint
from solarglobe.frame import project, unproject

_INSTANT = datetime(2025, 12, 21, 15, 3, 27, tzinfo=utc)


def test_sun_direction_is_unit_length():
    assert sun_direction_unit_vector(_INSTANT).norm() == pytest.approx(1.0)


def test_positions_use_caller_radius():
    assert solar_position(_INSTANT).norm() == pytest.approx(SUN_RADIUS)
    assert lunar_position(_INSTANT).norm() == pytest.approx(MOON_RADIUS)
    assert solar_position(_INSTANT, radius=3.0).norm() == pytest.approx(3.0)


def test_solar_position_lies_over_the_subsolar_point():
    lat, lon = sun_subpoint(_INSTANT)
    r_lat, r_lon, _ = unproject(solar_position(_INSTANT))
    assert r_lat == pytest.approx(lat, abs=1e-9)
    assert r_lon == pytest.approx(lon, abs=1e-9)
    # December solstice: Sun over the Tropic of Capricorn
    assert lat == pytest.approx(-23.44, abs=0.05)


def test_lunar_position_lies_over_the_sublunar_point():
    lat, lon = moon_subpoint(_INSTANT)
    assert lunar_position(_INSTANT) == project(lat, lon, MOON_RADIUS)


def test_globe_state_is_consistent_with_single_instant():
    state = compute_globe_state(_INSTANT)
    assert state.instant == _INSTANT
    assert state.sun_position == solar_position(_INSTANT)
    assert state.moon_position == lunar_position(_INSTANT)
    assert state.sun_direction == sun_direction_unit_vector(_INSTANT)
    assert (state.sun_lat, state.sun_lon) == sun_subpoint(_INSTANT)
    assert (state.moon_lat, state.moon_lon) == moon_subpoint(_INSTANT)


def test_globe_state_samples_clock_once(monkeypatch):
    calls = []

    def fake_now():
        calls.append(1)
        return _INSTANT

    monkeypatch.setattr(compute, "now_utc", fake_now)
    state = compute_globe_state()
    assert len(calls) == 1
    assert state == compute_globe_state(_INSTANT)


def test_naive_instant_is_utc():
    naive = datetime(2025, 12, 21, 15, 3, 27)
    assert compute_globe_state(naive) == compute_globe_state(_INSTANT)


def test_sun_at_noon_utc_sits_near_greenwich():
    state = compute_globe_state(datetime(2024, 4, 15, 12, 0, 0, tzinfo=utc))
    assert state.sun_lon == pytest.approx(state.sun.equation_of_time / 4.0)
    assert abs(state.sun_lon) < 5.0
    assert state.sun_direction.z > 0.9
