"""Tests for observer position, sky angles, local solar hour, and visibility."""

from __future__ import annotations

import math

import pytest

from orrery.constants import EARTH_RADIUS
from orrery.models import ObserverLocation
from orrery.observer import (
    body_visible,
    local_solar_hour,
    observer_position,
    observer_state,
    solar_angles,
    star_longitude,
)
from orrery.orbits import raw_ephemeris
from orrery.vec_math import ORIGIN, vnorm, vsub


def _approx_vec(actual: tuple[float, float, float], expected: tuple[float, float, float]) -> None:
    for a, e in zip(actual, expected):
        assert a == pytest.approx(e, abs=1e-9)


def test_observer_position_on_surface_sphere() -> None:
    """Observer sits at the Earth radius from the Earth's center."""
    center = (100.0, -3.0, 42.0)
    pos = observer_position(1.234, center, 37.5, -122.0)
    assert vnorm(vsub(pos, center)) == pytest.approx(EARTH_RADIUS, rel=1e-12)


def test_observer_position_equator_and_pole() -> None:
    """Equator/prime meridian is +X at zero rotation; the north pole is +Y."""
    _approx_vec(observer_position(0.0, ORIGIN, 0.0, 0.0), (EARTH_RADIUS, 0.0, 0.0))
    _approx_vec(observer_position(2.0, ORIGIN, 90.0, 77.0), (0.0, EARTH_RADIUS, 0.0))


def test_rotation_and_longitude_compose_additively() -> None:
    """A quarter turn of rotation equals 90 deg more longitude."""
    center = (5.0, 6.0, 7.0)
    _approx_vec(
        observer_position(math.pi / 2, center, 20.0, 0.0),
        observer_position(0.0, center, 20.0, 90.0),
    )


@pytest.mark.parametrize(
    ('star', 'elevation', 'azimuth'),
    [
        ((0.0, 100.0, 0.0), 90.0, 0.0),
        ((0.0, 0.0, 100.0), 0.0, 0.0),
        ((100.0, 0.0, 0.0), 0.0, 90.0),
        ((-100.0, 0.0, 0.0), 0.0, 270.0),
        ((0.0, -50.0, -50.0), -45.0, 180.0),
    ],
)
def test_solar_angles(
    star: tuple[float, float, float], elevation: float, azimuth: float
) -> None:
    """Elevation from the +Y component, azimuth atan2(x, z) in [0, 360)."""
    elev, az = solar_angles(star, ORIGIN)
    assert elev == pytest.approx(elevation, abs=1e-9)
    assert az == pytest.approx(azimuth, abs=1e-9)
    assert 0.0 <= az < 360.0


def test_solar_angles_coincident_positions_are_zero() -> None:
    """Observer coincident with the target yields (0, 0), not NaN."""
    elev, az = solar_angles((1.0, 2.0, 3.0), (1.0, 2.0, 3.0))
    assert (elev, az) == (0.0, 0.0)


@pytest.mark.parametrize(
    ('rotation', 'lon', 'star_lon', 'expected'),
    [
        (0.0, 0.0, 0.0, 12.0),
        (0.0, 15.0, 0.0, 13.0),
        (0.0, -90.0, 0.0, 6.0),
        (math.pi, 0.0, 0.0, 0.0),
        (0.0, 180.0, 0.0, 0.0),
        (0.1, 0.0, 0.1 + 2 * math.pi, 12.0),
    ],
)
def test_local_solar_hour(rotation: float, lon: float, star_lon: float, expected: float) -> None:
    """Noon when the meridian faces the Sun; one hour per 15 deg; wraps to [0, 24)."""
    hour = local_solar_hour(rotation, lon, star_lon)
    assert 0.0 <= hour < 24.0
    assert hour == pytest.approx(expected, abs=1e-9) or hour == pytest.approx(
        expected + 24.0, abs=1e-9
    )


def test_local_solar_hour_noon_at_greenwich_j2000() -> None:
    """J2000 (12:00 UTC) is close to local solar noon at longitude 0."""
    raw = raw_ephemeris(0.0)
    hour = local_solar_hour(raw.central_rotation, 0.0, star_longitude(raw.star, raw.central))
    assert hour == pytest.approx(12.0, abs=0.05)


def test_body_visible_uses_local_horizon() -> None:
    """Bodies above the tangent plane at the observer are visible."""
    observer = (EARTH_RADIUS, 0.0, 0.0)
    assert body_visible((100.0, 0.0, 0.0), observer, ORIGIN)
    assert not body_visible((-100.0, 0.0, 0.0), observer, ORIGIN)
    assert body_visible((100.0, 100.0, 0.0), observer, ORIGIN)


def test_observer_state_fields_in_range() -> None:
    """observer_state fills every field with normalized values."""
    raw = raw_ephemeris(1234.5)
    state = observer_state(raw, ObserverLocation(latitude=51.5, longitude=-0.1))
    assert state.latitude == 51.5
    assert state.longitude == -0.1
    assert vnorm(vsub(state.position, raw.central)) == pytest.approx(EARTH_RADIUS)
    assert -90.0 <= state.solar_elevation_deg <= 90.0
    assert 0.0 <= state.solar_azimuth_deg < 360.0
    assert -90.0 <= state.satellite_elevation_deg <= 90.0
    assert 0.0 <= state.satellite_azimuth_deg < 360.0
    assert 0.0 <= state.local_solar_hour < 24.0


def test_observer_state_day_and_night() -> None:
    """At J2000 noon the Sun is up at Greenwich and down on the antimeridian."""
    raw = raw_ephemeris(0.0)
    noon = observer_state(raw, ObserverLocation(latitude=0.0, longitude=0.0))
    midnight = observer_state(raw, ObserverLocation(latitude=0.0, longitude=180.0))
    assert noon.star_visible
    assert not midnight.star_visible
