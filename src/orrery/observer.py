"""Observer on the Earth's surface: position, sky angles, local solar time, visibility."""

from __future__ import annotations

import logging
import math

from orrery.angle_utils import normalize_degrees, wrap
from orrery.constants import DEGREES_PER_HOUR, EARTH_RADIUS, HOURS_PER_DAY
from orrery.models import ObserverLocation, ObserverState, RawEphemeris
from orrery.orbits import spherical_to_cartesian
from orrery.vec_math import Vec3, brcktd, unit_direction, vadd, vdot, vsub

logger = logging.getLogger(__name__)

DPR = 180.0 / math.pi


def observer_position(rotation: float, central_pos: Vec3, lat_deg: float, lon_deg: float) -> Vec3:
    """Observer position on the Earth's surface sphere.

    The Earth rotation angle and the observer's longitude add before the
    conversion to Cartesian coordinates.

    Parameters:
        rotation: Earth rotation angle (radians).
        central_pos: Earth center position.
        lat_deg: Latitude in degrees.
        lon_deg: East longitude in degrees.

    Returns:
        Surface point in the same frame as ``central_pos``.
    """
    local_rotation = rotation + math.radians(lon_deg)
    offset = spherical_to_cartesian(EARTH_RADIUS, local_rotation, math.radians(lat_deg))
    return vadd(central_pos, offset)


def solar_angles(star_pos: Vec3, observer_pos: Vec3) -> tuple[float, float]:
    """Elevation and azimuth (degrees) of a body seen from the observer.

    Elevation is the arcsine of the unit direction's +Y component; azimuth is
    atan2(x, z) reduced to [0, 360). A zero-length direction (observer
    coincident with the body) returns (0.0, 0.0).

    Parameters:
        star_pos: Target body position.
        observer_pos: Observer position in the same frame.

    Returns:
        (elevation_deg, azimuth_deg).
    """
    direction = unit_direction(observer_pos, star_pos)
    if direction == (0.0, 0.0, 0.0):
        logger.debug('Observer coincides with target at %s; angles set to zero', observer_pos)
        return (0.0, 0.0)
    elevation = math.asin(brcktd(direction[1], -1.0, 1.0)) * DPR
    azimuth = normalize_degrees(math.atan2(direction[0], direction[2]) * DPR)
    return (elevation, azimuth)


def star_longitude(star_pos: Vec3, central_pos: Vec3) -> float:
    """Direction angle of the Sun as seen from the Earth in the XZ plane (radians)."""
    dx, _, dz = vsub(star_pos, central_pos)
    return math.atan2(dz, dx)


def local_solar_hour(rotation: float, lon_deg: float, star_lon: float) -> float:
    """Local apparent solar time in hours, [0, 24).

    Noon is when the observer's meridian angle (rotation + longitude) equals the
    Sun's direction angle; each further 15° of rotation adds one hour.

    Parameters:
        rotation: Earth rotation angle (radians).
        lon_deg: East longitude in degrees.
        star_lon: Sun direction angle from ``star_longitude`` (radians).
    """
    hour_angle_deg = (rotation - star_lon) * DPR + lon_deg
    return wrap(12.0 + hour_angle_deg / DEGREES_PER_HOUR, HOURS_PER_DAY)


def body_visible(body_pos: Vec3, observer_pos: Vec3, central_pos: Vec3) -> bool:
    """True if the body is above the observer's local horizon."""
    up = unit_direction(central_pos, observer_pos)
    to_body = unit_direction(observer_pos, body_pos)
    return vdot(up, to_body) > 0.0


def observer_state(raw: RawEphemeris, location: ObserverLocation) -> ObserverState:
    """Observer position, solar and lunar angles, local solar hour and visibility."""
    position = observer_position(
        raw.central_rotation, raw.central, location.latitude, location.longitude
    )
    sun_elev, sun_az = solar_angles(raw.star, position)
    moon_elev, moon_az = solar_angles(raw.satellite, position)
    return ObserverState(
        latitude=location.latitude,
        longitude=location.longitude,
        position=position,
        solar_elevation_deg=sun_elev,
        solar_azimuth_deg=sun_az,
        local_solar_hour=local_solar_hour(
            raw.central_rotation, location.longitude, star_longitude(raw.star, raw.central)
        ),
        satellite_elevation_deg=moon_elev,
        satellite_azimuth_deg=moon_az,
        star_visible=body_visible(raw.star, position, raw.central),
        satellite_visible=body_visible(raw.satellite, position, raw.central),
    )
