"""Angle normalization, observer coordinate clamping, and sexagesimal parsing/formatting."""

from __future__ import annotations

import math
import re

from orrery.constants import DEGREES_PER_CIRCLE, HALF_CIRCLE_DEGREES, TWOPI


def wrap(value: float, period: float) -> float:
    """Reduce value into [0, period).

    Python's float modulo can return ``period`` itself for tiny negative inputs
    (e.g. ``-1e-20 % 24.0 == 24.0``); that case folds back to 0.0.
    """
    result = value % period
    if result >= period:
        return 0.0
    return result


def normalize_degrees(angle: float) -> float:
    """Angle in degrees reduced to [0, 360)."""
    return wrap(angle, DEGREES_PER_CIRCLE)


def normalize_radians(angle: float) -> float:
    """Angle in radians reduced to [0, 2π)."""
    return wrap(angle, TWOPI)


def clamp_latitude(lat_deg: float) -> float:
    """Latitude in degrees clamped to [-90, 90]."""
    return max(-90.0, min(90.0, lat_deg))


def normalize_longitude(lon_deg: float) -> float:
    """Longitude in degrees normalized to (-180, 180]; -180 maps to 180."""
    lon = normalize_degrees(lon_deg)
    if lon > HALF_CIRCLE_DEGREES:
        lon -= DEGREES_PER_CIRCLE
    return lon


def parse_angle(string: str) -> float | None:
    """Parse an angle given as degrees, optional minutes, and optional seconds.

    Accepts one to three whitespace- or colon-separated numbers ("45.5",
    "45 30", "-122:15:30"). Minutes and seconds must be non-negative; a leading
    minus makes the whole angle negative.

    Parameters:
        string: Angle text.

    Returns:
        Angle in degrees, or None on parse failure.
    """
    s = string.strip()
    if not s:
        return None
    parts = [p for p in re.split(r'[\s:]+', s) if p]
    if not 1 <= len(parts) <= 3:
        return None
    try:
        values = [float(p) for p in parts]
    except ValueError:
        return None
    if any(v < 0 for v in values[1:]):
        return None
    if any(math.isnan(v) or math.isinf(v) for v in values):
        return None
    angle = abs(values[0])
    for i, v in enumerate(values[1:], start=1):
        angle += v / 60.0**i
    if s.startswith('-'):
        angle = -angle
    return angle


def dms_string(value: float, separator: str = 'dms', ndecimal: int = 1) -> str:
    """Format an angle in degrees (or hours) as degrees, minutes, seconds.

    Parameters:
        value: Angle in degrees or hours.
        separator: 3-character string of unit markers (e.g. 'dms' or 'hms');
            shorter strings use blanks.
        ndecimal: Decimal places for the seconds field.

    Returns:
        Formatted string, e.g. ``'-12d 30m 45.0s'``.
    """
    if len(separator) < 3:
        sep1 = sep2 = sep3 = ' '
    else:
        sep1, sep2, sep3 = separator[0], separator[1], separator[2]
    sign = '-' if value < 0 else ''
    ntens = 10**ndecimal
    total = round(abs(value) * 3600.0 * ntens)
    whole_sec, frac = divmod(total, ntens)
    minutes, sec = divmod(whole_sec, 60)
    degrees, minutes = divmod(minutes, 60)
    sec_text = f'{sec:02d}' if ndecimal <= 0 else f'{sec:02d}.{frac:0{ndecimal}d}'
    return f'{sign}{degrees}{sep1} {minutes:02d}{sep2} {sec_text}{sep3}'.rstrip()
