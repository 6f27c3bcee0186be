"""Orbital model: Earth orbit, Moon orbit, and Earth rotation from days since J2000.

Low-order series only: a three-term equation of center for the Earth on a
circular orbit, and the leading short-period lunar-theory terms for the Moon.
All functions are total over finite ``days``.
"""

from __future__ import annotations

import math

from orrery.angle_utils import normalize_radians, wrap
from orrery.constants import (
    DEGREES_PER_HOUR,
    EARTH_CENTER_COEFFS,
    EARTH_MEAN_ANOMALY_J2000,
    EARTH_MEAN_ANOMALY_RATE,
    EARTH_PERIHELION_LONGITUDE,
    EARTH_SUN_DISTANCE,
    GMST_J2000_HOURS,
    GMST_RATE_HOURS,
    HOURS_PER_DAY,
    MOON_ARG_LATITUDE_J2000,
    MOON_ARG_LATITUDE_RATE,
    MOON_DISTANCE_PERTURBATION_SCALE,
    MOON_EARTH_DISTANCE,
    MOON_MEAN_ANOMALY_J2000,
    MOON_MEAN_ANOMALY_RATE,
    MOON_MEAN_LONGITUDE_J2000,
    MOON_MEAN_LONGITUDE_RATE,
)
from orrery.models import RawEphemeris
from orrery.vec_math import Vec3, vadd, vminus

RPD = math.pi / 180.0


def _earth_mean_anomaly(days: float) -> float:
    """Mean anomaly of the Earth (radians); also the Sun's mean anomaly for lunar terms."""
    return (EARTH_MEAN_ANOMALY_J2000 + EARTH_MEAN_ANOMALY_RATE * days) * RPD


def spherical_to_cartesian(r: float, lon: float, lat: float) -> Vec3:
    """Scene coordinates from radius, longitude and latitude (radians); +Y is ecliptic north."""
    return (
        r * math.cos(lat) * math.cos(lon),
        r * math.sin(lat),
        r * math.cos(lat) * math.sin(lon),
    )


def earth_ecliptic_longitude(days: float) -> float:
    """Heliocentric ecliptic longitude of the Earth (radians, [0, 2π))."""
    m = _earth_mean_anomaly(days)
    c1, c2, c3 = EARTH_CENTER_COEFFS
    center = (c1 * math.sin(m) + c2 * math.sin(2 * m) + c3 * math.sin(3 * m)) * RPD
    return normalize_radians(m + center + EARTH_PERIHELION_LONGITUDE * RPD)


def central_body_position(days: float) -> Vec3:
    """Heliocentric Earth position on a circular orbit in the ecliptic plane (y = 0)."""
    lam = earth_ecliptic_longitude(days)
    return (EARTH_SUN_DISTANCE * math.cos(lam), 0.0, EARTH_SUN_DISTANCE * math.sin(lam))


def star_position(days: float, central_pos: Vec3) -> Vec3:
    """Sun position: diametrically opposite the Earth's heliocentric position.

    ``days`` is unused; kept so every body shares the same call shape.
    """
    del days
    return vminus(central_pos)


def moon_geocentric_offset(days: float) -> Vec3:
    """Geocentric Moon position (scene units) with short-period perturbations.

    Parameters:
        days: Days since J2000.

    Returns:
        Offset from the Earth's center.
    """
    big_l = (MOON_MEAN_LONGITUDE_J2000 + MOON_MEAN_LONGITUDE_RATE * days) * RPD
    m = (MOON_MEAN_ANOMALY_J2000 + MOON_MEAN_ANOMALY_RATE * days) * RPD
    ms = _earth_mean_anomaly(days)
    f = (MOON_ARG_LATITUDE_J2000 + MOON_ARG_LATITUDE_RATE * days) * RPD
    d2 = 2 * (big_l - ms)

    # Longitude (evection, variation, annual equation, ...), degrees
    delta_l = (
        6.289 * math.sin(m)
        - 1.274 * math.sin(m - d2)
        + 0.658 * math.sin(d2)
        - 0.186 * math.sin(ms)
        - 0.059 * math.sin(2 * m - d2)
        - 0.057 * math.sin(m - d2 + ms)
    ) * RPD

    # Latitude, degrees
    delta_b = (
        5.128 * math.sin(f)
        + 0.281 * math.sin(m + f)
        + 0.278 * math.sin(m - f)
        + 0.173 * math.sin(d2 - f)
    ) * RPD

    # Distance, thousands of km
    delta_r = (
        -20905 * math.cos(m)
        - 3699 * math.cos(d2 - m)
        - 2956 * math.cos(d2)
        - 570 * math.cos(2 * m)
    ) / 1000

    r = MOON_EARTH_DISTANCE + delta_r * MOON_DISTANCE_PERTURBATION_SCALE
    return spherical_to_cartesian(r, big_l + delta_l, delta_b)


def satellite_position(days: float, central_pos: Vec3) -> Vec3:
    """Moon position: geocentric offset added to the Earth's heliocentric position."""
    return vadd(central_pos, moon_geocentric_offset(days))


def central_body_rotation(days: float) -> float:
    """Earth rotation angle (radians, [0, 2π)) from a linear GMST approximation."""
    gmst_hours = wrap(GMST_J2000_HOURS + GMST_RATE_HOURS * days, HOURS_PER_DAY)
    return normalize_radians(gmst_hours * DEGREES_PER_HOUR * RPD)


def raw_ephemeris(days: float) -> RawEphemeris:
    """All physical positions and the Earth rotation for one time."""
    central = central_body_position(days)
    return RawEphemeris(
        central=central,
        satellite=satellite_position(days, central),
        star=star_position(days, central),
        central_rotation=central_body_rotation(days),
    )
