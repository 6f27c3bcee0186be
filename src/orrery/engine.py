"""Single entry point: UTC instant + frame + observer -> immutable State snapshot."""

from __future__ import annotations

import logging

from orrery.frames import FrameSelector, project
from orrery.models import BodyState, ObserverLocation, State
from orrery.observer import observer_state
from orrery.orbits import raw_ephemeris
from orrery.phenomena import eclipses, phase
from orrery.time_utils import Instant, astronomical_time

logger = logging.getLogger(__name__)


def _as_location(observer: ObserverLocation | tuple[float, float]) -> ObserverLocation:
    if isinstance(observer, ObserverLocation):
        return observer
    lat, lon = observer
    return ObserverLocation(latitude=lat, longitude=lon)


def compute_state(
    time: Instant,
    frame: FrameSelector = FrameSelector.CENTRAL_BODY,
    observer: ObserverLocation | tuple[float, float] = ObserverLocation(),
) -> State:
    """Compute the Earth-Moon-Sun state at one instant.

    Pure function: identical arguments give identical results, and calls may
    come in any time order (forward, reversed, or random seeks).

    Parameters:
        time: UTC instant.
        frame: Display frame for the body positions.
        observer: ObserverLocation or (latitude, longitude) in degrees; values
            outside the valid ranges are clamped/wrapped. Defaults to
            DEFAULT_LATITUDE, DEFAULT_LONGITUDE (45°N, 45°E).

    Returns:
        State snapshot. Body positions are frame-projected; the observer
        position, phase and eclipses use the physical ephemeris.
    """
    location = _as_location(observer)
    atime = astronomical_time(time)
    raw = raw_ephemeris(atime.days_since_epoch)
    projected = project(raw, frame)
    logger.debug('State at %s (JD %.6f) in %s frame', time.isoformat(), atime.julian_day, frame.value)
    return State(
        instant=time,
        time=atime,
        frame=frame,
        central=BodyState(position=projected.central, rotation=raw.central_rotation),
        satellite=BodyState(position=projected.satellite),
        star=BodyState(position=projected.star),
        observer=observer_state(raw, location),
        phase=phase(raw.star, raw.central, raw.satellite),
        eclipses=eclipses(raw.star, raw.central, raw.satellite),
        focal_point=projected.focal_point,
    )
