"""Lunar phase and eclipse alignment from Sun, Earth and Moon positions."""

from __future__ import annotations

import math

from orrery.angle_utils import normalize_degrees
from orrery.constants import (
    DEGREES_PER_CIRCLE,
    ECLIPSE_ALIGNMENT_THRESHOLD,
    HALF_CIRCLE_DEGREES,
    PHASE_BUCKET_DEGREES,
    PHASE_NAMES,
)
from orrery.models import EclipseInfo, PhaseInfo
from orrery.vec_math import Vec3, brcktd, unit_direction, vcrss, vdot

DPR = 180.0 / math.pi


def phase_name(angle_deg: float) -> str:
    """Name of the phase bucket containing ``angle_deg`` (buckets centered on 0, 45, ..., 315)."""
    shifted = normalize_degrees(angle_deg + PHASE_BUCKET_DEGREES / 2.0)
    index = int(shifted // PHASE_BUCKET_DEGREES) % len(PHASE_NAMES)
    return PHASE_NAMES[index]


def phase(star_pos: Vec3, central_pos: Vec3, satellite_pos: Vec3) -> PhaseInfo:
    """Lunar phase as seen from the Earth.

    The elongation is the angle at the Earth between the Sun and the Moon. The
    Moon is waxing while it trails the Sun eastward (negative Y component of
    sun x moon); on the waning side the lunation angle is 360 - elongation.

    Parameters:
        star_pos: Sun position.
        central_pos: Earth position.
        satellite_pos: Moon position.

    Returns:
        PhaseInfo with lunation angle, Sun-Moon-Earth phase angle,
        illumination, and name.
    """
    to_sun = unit_direction(central_pos, star_pos)
    to_moon = unit_direction(central_pos, satellite_pos)
    elongation = math.acos(brcktd(vdot(to_sun, to_moon), -1.0, 1.0)) * DPR
    if vcrss(to_sun, to_moon)[1] > 0.0:
        angle = normalize_degrees(DEGREES_PER_CIRCLE - elongation)
    else:
        angle = elongation
    phase_angle = HALF_CIRCLE_DEGREES - elongation
    illumination = (1.0 + math.cos(math.radians(phase_angle))) / 2.0
    return PhaseInfo(
        illumination=brcktd(illumination, 0.0, 1.0),
        angle_deg=angle,
        name=phase_name(angle),
        phase_angle_deg=phase_angle,
    )


def is_aligned(score: float, threshold: float = ECLIPSE_ALIGNMENT_THRESHOLD) -> bool:
    """True if an alignment dot product exceeds the eclipse threshold."""
    return score > threshold


def eclipses(star_pos: Vec3, central_pos: Vec3, satellite_pos: Vec3) -> EclipseInfo:
    """Solar and lunar eclipse alignment.

    Solar: the Moon lies in the Sun's direction as seen from the Earth.
    Lunar: the Earth lies in the Sun's direction as seen from the Moon.
    Each is flagged when its score exceeds ECLIPSE_ALIGNMENT_THRESHOLD.
    """
    solar = vdot(unit_direction(central_pos, star_pos), unit_direction(central_pos, satellite_pos))
    lunar = vdot(
        unit_direction(satellite_pos, star_pos), unit_direction(satellite_pos, central_pos)
    )
    solar = brcktd(solar, -1.0, 1.0)
    lunar = brcktd(lunar, -1.0, 1.0)
    return EclipseInfo(
        solar_eclipse=is_aligned(solar),
        lunar_eclipse=is_aligned(lunar),
        solar_alignment=solar,
        lunar_alignment=lunar,
    )
