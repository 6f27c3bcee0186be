"""Value types passed between the time, orbit, observer, phenomena, and frame layers.

Every type is a frozen dataclass holding floats, tuples, and enums only, so a
``State`` can be copied, compared, or serialized without aliasing concerns.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from orrery.angle_utils import clamp_latitude, normalize_longitude
from orrery.constants import DEFAULT_LATITUDE, DEFAULT_LONGITUDE

if TYPE_CHECKING:
    from orrery.frames import FrameSelector
    from orrery.time_utils import Instant
    from orrery.vec_math import Vec3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AstronomicalTime:
    """Continuous time scale derived from an Instant."""

    julian_day: float
    days_since_epoch: float  # days since J2000 (2000-01-01T12:00:00Z)


@dataclass(frozen=True)
class BodyState:
    """Position of one body; rotation (radians, [0, 2π)) only for the central body."""

    position: Vec3
    rotation: float | None = None


@dataclass(frozen=True)
class RawEphemeris:
    """Physical-scale positions before any display-frame projection."""

    central: Vec3  # Earth, heliocentric
    satellite: Vec3  # Moon, Earth position + geocentric offset
    star: Vec3  # Sun, negation of the Earth position
    central_rotation: float  # radians, [0, 2π)


@dataclass(frozen=True)
class ObserverLocation:
    """Ground location of the observer in degrees.

    Out-of-range values are clamped (latitude to [-90, 90]) or wrapped
    (longitude to (-180, 180]) rather than rejected. NaN and infinite values
    raise ValueError.
    """

    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise ValueError(
                f'Observer coordinates must be finite, got ({self.latitude}, {self.longitude})'
            )
        lat = clamp_latitude(float(self.latitude))
        lon = normalize_longitude(float(self.longitude))
        if lat != self.latitude or lon != self.longitude:
            logger.debug(
                'Observer (%s, %s) normalized to (%s, %s)', self.latitude, self.longitude, lat, lon
            )
        object.__setattr__(self, 'latitude', lat)
        object.__setattr__(self, 'longitude', lon)


@dataclass(frozen=True)
class ObserverState:
    """Observer position (physical frame) and derived sky angles."""

    latitude: float
    longitude: float
    position: Vec3
    solar_elevation_deg: float  # [-90, 90]
    solar_azimuth_deg: float  # [0, 360)
    local_solar_hour: float  # [0, 24)
    satellite_elevation_deg: float = 0.0
    satellite_azimuth_deg: float = 0.0
    star_visible: bool = False
    satellite_visible: bool = False


@dataclass(frozen=True)
class PhaseInfo:
    """Lunar phase.

    ``angle_deg`` is the Moon's elongation from the Sun measured around the
    lunation (0 = New, 180 = Full, [0, 360)); ``phase_angle_deg`` is the
    Sun-Moon-Earth angle ([0, 180], 0 = Full). Illumination satisfies
    ``(1 + cos(phase_angle)) / 2 == (1 - cos(angle)) / 2``.
    """

    illumination: float
    angle_deg: float
    name: str
    phase_angle_deg: float


@dataclass(frozen=True)
class EclipseInfo:
    """Eclipse flags and the dot-product alignment scores behind them."""

    solar_eclipse: bool
    lunar_eclipse: bool
    solar_alignment: float
    lunar_alignment: float


@dataclass(frozen=True)
class ProjectedFrame:
    """Body positions re-expressed in a display frame, plus the frame's focal point."""

    frame: FrameSelector
    central: Vec3
    satellite: Vec3
    star: Vec3
    focal_point: Vec3


@dataclass(frozen=True)
class State:
    """Complete snapshot returned by ``orrery.engine.compute_state``."""

    instant: Instant
    time: AstronomicalTime
    frame: FrameSelector
    central: BodyState
    satellite: BodyState
    star: BodyState
    observer: ObserverState
    phase: PhaseInfo
    eclipses: EclipseInfo
    focal_point: Vec3
