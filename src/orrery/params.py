"""Parameter parsing for the state and ephemeris commands (frames, columns, observer)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TextIO

from orrery.angle_utils import parse_angle
from orrery.config import get_default_latitude, get_default_longitude
from orrery.constants import DEFAULT_INTERVAL
from orrery.frames import FrameSelector

logger = logging.getLogger(__name__)

# Ephemeris table column IDs
COL_JD = 1
COL_YMDHMS = 2
COL_DAYS = 3
COL_ROTATION = 4
COL_SUNELEV = 5
COL_SUNAZ = 6
COL_SOLARHOUR = 7
COL_MOONELEV = 8
COL_PHASE = 9
COL_ILLUM = 10
COL_PHASENAME = 11
COL_ECLIPSE = 12

DEFAULT_COLUMNS = [COL_YMDHMS, COL_SUNELEV, COL_SUNAZ, COL_PHASE, COL_ILLUM, COL_PHASENAME]

COLUMN_NAME_TO_ID: dict[str, int] = {
    'jd': COL_JD,
    'ymdhms': COL_YMDHMS,
    'days': COL_DAYS,
    'rotation': COL_ROTATION,
    'sunelev': COL_SUNELEV,
    'sunaz': COL_SUNAZ,
    'solar_hour': COL_SOLARHOUR,
    'moonelev': COL_MOONELEV,
    'phase': COL_PHASE,
    'illum': COL_ILLUM,
    'phase_name': COL_PHASENAME,
    'eclipse': COL_ECLIPSE,
}

_FRAME_ALIASES: dict[str, FrameSelector] = {
    'geocentric': FrameSelector.CENTRAL_BODY,
    'geo': FrameSelector.CENTRAL_BODY,
    'earth': FrameSelector.CENTRAL_BODY,
    'central': FrameSelector.CENTRAL_BODY,
    'heliocentric': FrameSelector.STAR,
    'helio': FrameSelector.STAR,
    'sun': FrameSelector.STAR,
    'star': FrameSelector.STAR,
    'selenocentric': FrameSelector.SATELLITE,
    'seleno': FrameSelector.SATELLITE,
    'moon': FrameSelector.SATELLITE,
    'satellite': FrameSelector.SATELLITE,
}


def parse_frame(value: str | FrameSelector) -> FrameSelector:
    """Frame selector from a frame name or body alias (case-insensitive).

    Raises:
        ValueError: If the name is not a known frame.
    """
    if isinstance(value, FrameSelector):
        return value
    key = value.strip().lower().replace('-', '').replace('_', '')
    frame = _FRAME_ALIASES.get(key)
    if frame is None:
        raise ValueError(
            f'Invalid frame {value!r}; expected one of '
            + ', '.join(f.value for f in FrameSelector)
        )
    return frame


def _parse_coordinate(text: str, positive: str, negative: str) -> float:
    """Angle in degrees from decimal or sexagesimal text with optional hemisphere letter."""
    s = text.strip()
    sign = 1.0
    if s and s[-1].upper() in (positive, negative):
        if s[-1].upper() == negative:
            sign = -1.0
        s = s[:-1]
    angle = parse_angle(s)
    if angle is None:
        raise ValueError(f'Invalid angle {text!r}')
    return sign * angle


def parse_latitude(text: str) -> float:
    """Latitude in degrees from '45.5', '45 30', '-33:52:04' or '33 52 04 S'."""
    return _parse_coordinate(text, 'N', 'S')


def parse_longitude(text: str) -> float:
    """East longitude in degrees from '-122.4', '122 25 W', etc."""
    return _parse_coordinate(text, 'E', 'W')


def parse_column_spec(tokens: list[str]) -> list[int]:
    """Column IDs from numeric IDs or names (case-insensitive).

    Unknown names are skipped with a warning; numbers outside the valid range
    raise ValueError.
    """
    out: list[int] = []
    for token in tokens:
        for part in token.replace(',', ' ').split():
            if part.isdigit():
                col = int(part)
                if col not in COLUMN_NAME_TO_ID.values():
                    raise ValueError(f'Invalid column number {col}')
                out.append(col)
                continue
            col_id = COLUMN_NAME_TO_ID.get(part.lower())
            if col_id is None:
                logger.warning('Ignoring unknown column %r', part)
                continue
            out.append(col_id)
    return out


@dataclass
class EphemerisParams:
    """Parameters for an ephemeris table or eclipse search."""

    start_time: str
    stop_time: str
    interval: float = DEFAULT_INTERVAL
    time_unit: str = 'hour'
    latitude_deg: float = field(default_factory=get_default_latitude)
    longitude_deg: float = field(default_factory=get_default_longitude)
    columns: list[int] = field(default_factory=lambda: list(DEFAULT_COLUMNS))
    output: TextIO | None = None
