"""Configuration: observer and frame defaults, leap-second kernel path, from environment."""

import logging
import math
import os

from orrery.constants import DEFAULT_LATITUDE, DEFAULT_LONGITUDE

logger = logging.getLogger(__name__)

DEFAULT_FRAME = 'geocentric'


def _float_from_env(name: str, default: float) -> float:
    """Return float value of environment variable ``name``, or default if unset/invalid."""
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        logger.info('Ignoring %s=%r (not a finite number); using %s.', name, raw, default)
        return default
    return value


def get_default_latitude() -> float:
    """Return default observer latitude in degrees (ORRERY_LATITUDE env var or default)."""
    return _float_from_env('ORRERY_LATITUDE', DEFAULT_LATITUDE)


def get_default_longitude() -> float:
    """Return default observer longitude in degrees (ORRERY_LONGITUDE env var or default)."""
    return _float_from_env('ORRERY_LONGITUDE', DEFAULT_LONGITUDE)


def get_default_frame() -> str:
    """Return default display frame name (ORRERY_FRAME env var or 'geocentric').

    Returns:
        Frame name string; validated by ``orrery.params.parse_frame``.
    """
    return os.environ.get('ORRERY_FRAME', '').strip() or DEFAULT_FRAME


def get_leapsecs_path() -> str | None:
    """Return path to a NAIF LSK leap seconds file for rms-julian, if configured.

    Returns:
        JULIAN_LEAPSECS value, or None to use rms-julian's bundled LSK.
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    return path or None
