"""Time base: UTC instants, Julian Day, and days since J2000 (rms-julian for parsing)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import julian

from orrery.config import get_leapsecs_path
from orrery.constants import (
    DEFAULT_MIN_INTERVAL_SECONDS,
    HOURS_PER_DAY,
    MINUTES_PER_DAY,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from orrery.models import AstronomicalTime

logger = logging.getLogger(__name__)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


@dataclass(frozen=True, order=True)
class Instant:
    """A point in civil time, always held as a timezone-aware UTC datetime.

    Naive datetimes are rejected: an instant must never depend on the local
    timezone of the machine evaluating it.
    """

    utc: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.utc, datetime):
            raise TypeError(f'Instant requires a datetime, got {type(self.utc).__name__}')
        if self.utc.tzinfo is None or self.utc.utcoffset() is None:
            raise ValueError(f'Instant requires a timezone-aware datetime, got {self.utc!r}')
        object.__setattr__(self, 'utc', self.utc.astimezone(timezone.utc))

    @classmethod
    def from_unix_ms(cls, ms: int | float) -> Instant:
        """Instant from milliseconds since 1970-01-01T00:00:00Z."""
        return cls(_UNIX_EPOCH + timedelta(milliseconds=ms))

    @classmethod
    def now(cls) -> Instant:
        """Current wall-clock instant."""
        return cls(datetime.now(timezone.utc))

    def shifted(self, seconds: float) -> Instant:
        """New instant offset by ``seconds`` (negative moves backwards)."""
        return Instant(self.utc + timedelta(seconds=seconds))

    def isoformat(self) -> str:
        """ISO-8601 UTC string with millisecond precision and trailing 'Z'."""
        return self.utc.strftime('%Y-%m-%dT%H:%M:%S.') + f'{self.utc.microsecond // 1000:03d}Z'


_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

J2000 = Instant(datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


def _day_number_and_fraction(instant: Instant) -> tuple[int, float]:
    """Split Julian Day into the Gregorian day number and fractional day offset.

    The fraction is measured from noon and may be negative (-0.5 at midnight).
    """
    t = instant.utc
    a = (14 - t.month) // 12
    y = t.year + 4800 - a
    m = t.month + 12 * a - 3
    jdn = t.day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045
    seconds = t.second + t.microsecond / 1e6
    fraction = (t.hour - 12) / HOURS_PER_DAY + t.minute / MINUTES_PER_DAY + seconds / SECONDS_PER_DAY
    return (jdn, fraction)


def julian_day(instant: Instant) -> float:
    """Julian Day of a UTC instant (Gregorian calendar).

    Parameters:
        instant: UTC instant.

    Returns:
        Julian Day as a float; 2451545.0 at J2000.
    """
    jdn, fraction = _day_number_and_fraction(instant)
    return jdn + fraction


def days_since(instant: Instant, reference: Instant) -> float:
    """Days elapsed from ``reference`` to ``instant`` (negative if earlier).

    Integer day numbers are differenced before the fractions so that identical
    instants give exactly 0.0 and precision does not depend on the JD magnitude.
    """
    jdn, fraction = _day_number_and_fraction(instant)
    ref_jdn, ref_fraction = _day_number_and_fraction(reference)
    return (jdn - ref_jdn) + (fraction - ref_fraction)


def days_since_j2000(instant: Instant) -> float:
    """Days since 2000-01-01T12:00:00Z."""
    return days_since(instant, J2000)


def astronomical_time(instant: Instant) -> AstronomicalTime:
    """Julian Day and days since J2000 for an instant, computed together."""
    return AstronomicalTime(
        julian_day=julian_day(instant),
        days_since_epoch=days_since_j2000(instant),
    )


def _ensure_leapsecs() -> None:
    """Load a leap seconds kernel for rms-julian if not already loaded.

    Uses JULIAN_LEAPSECS when set and readable, otherwise rms-julian's bundled LSK.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    path = get_leapsecs_path()
    if path is not None:
        try:
            julian.load_lsk(path)
            _leapsecs_loaded = True
            return
        except (OSError, KeyError, ValueError) as e:
            logger.info('Leap seconds from %s not used (%s); using rms-julian bundled LSK.', path, e)
    julian.load_lsk()
    _leapsecs_loaded = True


def parse_datetime(string: str) -> tuple[int, float] | None:
    """Parse a date/time string to UTC (day, sec) with rms-julian.

    Parameters:
        string: Date/time string (any format accepted by rms-julian); a trailing
            'Z' is accepted as UTC.

    Returns:
        (day, sec) where day counts days since 2000-01-01 and sec is seconds
        into that day; None on parse failure.
    """
    _ensure_leapsecs()
    stripped = string.strip()
    if not stripped:
        return None
    candidate_strings = [stripped]
    if stripped.endswith(('Z', 'z')):
        # rms-julian does not parse the ISO "Z" suffix; the value is UTC anyway.
        candidate_strings.append(stripped[:-1])
    for candidate in candidate_strings:
        try:
            result = julian.day_sec_from_string(candidate)
            return (int(result[0]), float(result[1]))
        except (ValueError, TypeError, LookupError, OSError):
            continue
    return None


def instant_from_day_sec(day: int, sec: float) -> Instant:
    """Instant from UTC (day, sec) as returned by ``parse_datetime``.

    A leap second (sec >= 86400) is held at the last representable microsecond
    of the day, since ``datetime`` has no 23:59:60.
    """
    year, month, dom = julian.ymd_from_day(day)
    sec = min(float(sec), SECONDS_PER_DAY - 1e-6)
    midnight = datetime(int(year), int(month), int(dom), tzinfo=timezone.utc)
    return Instant(midnight + timedelta(seconds=sec))


def instant_from_string(string: str) -> Instant:
    """Parse a UTC date/time string to an Instant.

    Raises:
        ValueError: If the string cannot be parsed.
    """
    parsed = parse_datetime(string)
    if parsed is None:
        raise ValueError(f'Invalid date/time {string!r}')
    return instant_from_day_sec(*parsed)


def interval_seconds(
    interval: float,
    time_unit: str,
    *,
    min_seconds: float = DEFAULT_MIN_INTERVAL_SECONDS,
) -> float:
    """Convert interval and time_unit to seconds.

    Parameters:
        interval: Numeric interval value; sign is ignored.
        time_unit: One of 'sec', 'min', 'hour', 'day' (case-insensitive, first 4 chars).
        min_seconds: Minimum returned value.

    Returns:
        Interval in seconds, at least min_seconds.
    """
    u = time_unit.strip().lower()[:4]
    if u in ('sec', 'seco'):
        dsec = abs(interval)
    elif u in ('min', 'minu'):
        dsec = abs(interval) * SECONDS_PER_MINUTE
    elif u == 'hour':
        dsec = abs(interval) * SECONDS_PER_HOUR
    elif u == 'day':
        dsec = abs(interval) * SECONDS_PER_DAY
    else:
        raise ValueError(f'Invalid time_unit {time_unit!r}; expected one of sec, min, hour, day')
    return max(dsec, min_seconds)
