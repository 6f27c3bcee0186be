"""Display frames: re-center the physical ephemeris on one body at fixed display distances.

Only directions survive the projection; each non-anchor body is placed at a
tunable display distance from the anchor (or, for the Moon in the
heliocentric frame, from the projected Earth) so that all three bodies stay
visually separated.
"""

from __future__ import annotations

import math
from enum import Enum

from orrery.constants import (
    GEOCENTRIC_MOON_DISTANCE,
    GEOCENTRIC_SUN_DISTANCE,
    HELIOCENTRIC_EARTH_DISTANCE,
    HELIOCENTRIC_MOON_DISTANCE,
    HELIOCENTRIC_MOON_INCLINATION_DEG,
    SELENOCENTRIC_EARTH_DISTANCE,
    SELENOCENTRIC_SUN_DISTANCE,
)
from orrery.models import ProjectedFrame, RawEphemeris
from orrery.vec_math import ORIGIN, Vec3, rotate_x, unit_direction, vadd, vscl


class FrameSelector(str, Enum):
    """Display frame, named by the body at its origin."""

    CENTRAL_BODY = 'geocentric'
    STAR = 'heliocentric'
    SATELLITE = 'selenocentric'

    def anchor(self, raw: RawEphemeris) -> Vec3:
        """Physical position of this frame's anchor body."""
        if self is FrameSelector.CENTRAL_BODY:
            return raw.central
        if self is FrameSelector.STAR:
            return raw.star
        return raw.satellite


def _place(anchor: Vec3, target: Vec3, distance: float) -> Vec3:
    """Origin-relative display position of ``target`` seen from ``anchor``."""
    return vscl(distance, unit_direction(anchor, target))


def _geocentric(raw: RawEphemeris) -> tuple[Vec3, Vec3, Vec3]:
    central = ORIGIN
    satellite = _place(raw.central, raw.satellite, GEOCENTRIC_MOON_DISTANCE)
    star = _place(raw.central, raw.star, GEOCENTRIC_SUN_DISTANCE)
    return (central, satellite, star)


def _heliocentric(raw: RawEphemeris) -> tuple[Vec3, Vec3, Vec3]:
    star = ORIGIN
    central = _place(raw.star, raw.central, HELIOCENTRIC_EARTH_DISTANCE)
    # The Moon stays attached to the projected Earth, with its orbital tilt.
    moon_offset = _place(raw.central, raw.satellite, HELIOCENTRIC_MOON_DISTANCE)
    moon_offset = rotate_x(moon_offset, math.radians(HELIOCENTRIC_MOON_INCLINATION_DEG))
    satellite = vadd(central, moon_offset)
    return (central, satellite, star)


def _selenocentric(raw: RawEphemeris) -> tuple[Vec3, Vec3, Vec3]:
    satellite = ORIGIN
    central = _place(raw.satellite, raw.central, SELENOCENTRIC_EARTH_DISTANCE)
    star = _place(raw.satellite, raw.star, SELENOCENTRIC_SUN_DISTANCE)
    return (central, satellite, star)


_PROJECTIONS = {
    FrameSelector.CENTRAL_BODY: _geocentric,
    FrameSelector.STAR: _heliocentric,
    FrameSelector.SATELLITE: _selenocentric,
}


def project(raw: RawEphemeris, frame: FrameSelector) -> ProjectedFrame:
    """Re-express physical positions in a display frame.

    Parameters:
        raw: Physical ephemeris.
        frame: Display frame; its anchor body is placed at the origin.

    Returns:
        Projected positions; ``focal_point`` is the anchor body's physical
        position before re-centering.
    """
    central, satellite, star = _PROJECTIONS[frame](raw)
    return ProjectedFrame(
        frame=frame,
        central=central,
        satellite=satellite,
        star=star,
        focal_point=frame.anchor(raw),
    )
