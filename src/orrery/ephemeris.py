"""Ephemeris tables and eclipse-window search over a time range."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

import numpy as np

from orrery.constants import MAX_EPHEMERIS_STEPS
from orrery.engine import compute_state
from orrery.frames import FrameSelector
from orrery.models import ObserverLocation, State
from orrery.orbits import raw_ephemeris
from orrery.params import (
    COL_DAYS,
    COL_ECLIPSE,
    COL_ILLUM,
    COL_JD,
    COL_MOONELEV,
    COL_PHASE,
    COL_PHASENAME,
    COL_ROTATION,
    COL_SOLARHOUR,
    COL_SUNAZ,
    COL_SUNELEV,
    COL_YMDHMS,
    EphemerisParams,
)
from orrery.phenomena import eclipses
from orrery.record import Record
from orrery.time_utils import Instant, days_since_j2000, instant_from_string, interval_seconds

logger = logging.getLogger(__name__)


def _eclipse_code(state: State) -> str:
    if state.eclipses.solar_eclipse:
        return 'S'
    if state.eclipses.lunar_eclipse:
        return 'L'
    return '-'


# Column ID -> (header label, width, formatter)
_COLUMNS: dict[int, tuple[str, int, Callable[[State], str]]] = {
    COL_JD: ('jd', 15, lambda s: f'{s.time.julian_day:.6f}'),
    COL_YMDHMS: ('year-mo-dy hr:mi:sc', 19, lambda s: s.instant.utc.strftime('%Y-%m-%d %H:%M:%S')),
    COL_DAYS: ('days', 12, lambda s: f'{s.time.days_since_epoch:.5f}'),
    COL_ROTATION: ('rot_deg', 8, lambda s: f'{math.degrees(s.central.rotation or 0.0):.3f}'),
    COL_SUNELEV: ('sun_el', 7, lambda s: f'{s.observer.solar_elevation_deg:.2f}'),
    COL_SUNAZ: ('sun_az', 7, lambda s: f'{s.observer.solar_azimuth_deg:.2f}'),
    COL_SOLARHOUR: ('lst_h', 6, lambda s: f'{s.observer.local_solar_hour:.3f}'),
    COL_MOONELEV: ('moon_el', 7, lambda s: f'{s.observer.satellite_elevation_deg:.2f}'),
    COL_PHASE: ('phase', 7, lambda s: f'{s.phase.angle_deg:.2f}'),
    COL_ILLUM: ('illum', 6, lambda s: f'{s.phase.illumination:.4f}'),
    COL_PHASENAME: ('phase_name', 15, lambda s: s.phase.name.replace(' ', '_').ljust(15)),
    COL_ECLIPSE: ('ecl', 3, _eclipse_code),
}


@dataclass(frozen=True)
class EclipseWindow:
    """Contiguous run of sample times flagged as one kind of eclipse."""

    kind: str  # 'solar' or 'lunar'
    start: Instant
    stop: Instant
    peak_alignment: float


def sample_instants(start: Instant, stop: Instant, step_seconds: float) -> list[Instant]:
    """Evenly spaced instants from ``start`` through ``stop`` (inclusive when on the grid).

    Raises:
        ValueError: If the range yields fewer than 2 or more than
            MAX_EPHEMERIS_STEPS samples.
    """
    if step_seconds <= 0:
        raise ValueError(f'Step must be positive, got {step_seconds}')
    span = (stop.utc - start.utc).total_seconds()
    ntimes = int(math.floor(span / step_seconds)) + 1
    if ntimes < 2:
        raise ValueError('Time range too short or interval too large')
    if ntimes > MAX_EPHEMERIS_STEPS:
        raise ValueError(f'Number of time steps exceeds limit of {MAX_EPHEMERIS_STEPS}')
    offsets = np.arange(ntimes, dtype=np.float64) * step_seconds
    return [start.shifted(float(dt)) for dt in offsets]


def _instants_from_params(params: EphemerisParams) -> list[Instant]:
    start = instant_from_string(params.start_time)
    stop = instant_from_string(params.stop_time)
    dsec = interval_seconds(params.interval, params.time_unit)
    return sample_instants(start, stop, dsec)


def generate_ephemeris(params: EphemerisParams, output: TextIO | None = None) -> None:
    """Write an ephemeris table, one row per time step, to ``output``.

    If output is None, uses params.output. If both are None, no output is written.

    Raises:
        ValueError: On unparseable times or an invalid time range.
    """
    out = output or params.output
    if out is None:
        return
    instants = _instants_from_params(params)
    location = ObserverLocation(latitude=params.latitude_deg, longitude=params.longitude_deg)
    columns = [c for c in params.columns if c in _COLUMNS] or [COL_YMDHMS]
    logger.info('Generating %d ephemeris rows for %s', len(instants), location)

    rec = Record()
    for col in columns:
        label, width, _ = _COLUMNS[col]
        rec.append(label, width)
    rec.write(out)
    for instant in instants:
        state = compute_state(instant, FrameSelector.CENTRAL_BODY, location)
        for col in columns:
            _, width, fmt = _COLUMNS[col]
            rec.append(fmt(state), width)
        rec.write(out)


def _runs(flags: np.ndarray) -> list[tuple[int, int]]:
    """(first, last) index pairs of consecutive True values."""
    padded = np.concatenate(([0], flags.astype(np.int8), [0]))
    edges = np.diff(padded)
    firsts = np.flatnonzero(edges == 1)
    lasts = np.flatnonzero(edges == -1) - 1
    return [(int(a), int(b)) for a, b in zip(firsts, lasts)]


def eclipse_windows(start: Instant, stop: Instant, step_seconds: float) -> list[EclipseWindow]:
    """Solar and lunar eclipse windows between two instants, sorted by start time.

    Window edges are quantized to the sampling step.
    """
    instants = sample_instants(start, stop, step_seconds)
    solar = np.empty(len(instants), dtype=np.float64)
    lunar = np.empty(len(instants), dtype=np.float64)
    solar_flags = np.zeros(len(instants), dtype=bool)
    lunar_flags = np.zeros(len(instants), dtype=bool)
    for i, instant in enumerate(instants):
        raw = raw_ephemeris(days_since_j2000(instant))
        info = eclipses(raw.star, raw.central, raw.satellite)
        solar[i] = info.solar_alignment
        lunar[i] = info.lunar_alignment
        solar_flags[i] = info.solar_eclipse
        lunar_flags[i] = info.lunar_eclipse

    windows: list[EclipseWindow] = []
    for kind, scores, flags in (('solar', solar, solar_flags), ('lunar', lunar, lunar_flags)):
        for first, last in _runs(flags):
            windows.append(
                EclipseWindow(
                    kind=kind,
                    start=instants[first],
                    stop=instants[last],
                    peak_alignment=float(scores[first : last + 1].max()),
                )
            )
    windows.sort(key=lambda w: w.start)
    logger.info('Found %d eclipse windows', len(windows))
    return windows


def find_eclipses(params: EphemerisParams, output: TextIO | None = None) -> list[EclipseWindow]:
    """Search the params time range for eclipse windows and write them to ``output``."""
    instants = _instants_from_params(params)
    step = interval_seconds(params.interval, params.time_unit)
    windows = eclipse_windows(instants[0], instants[-1], step)
    out = output or params.output
    if out is not None:
        write_eclipse_windows(windows, out)
    return windows


def write_eclipse_windows(windows: list[EclipseWindow], stream: TextIO) -> None:
    """One line per window: kind, first and last flagged sample, peak alignment."""
    rec = Record()
    for window in windows:
        rec.append(window.kind, 5)
        rec.append(window.start.isoformat())
        rec.append(window.stop.isoformat())
        rec.append(f'{window.peak_alignment:.6f}')
        rec.write(stream)
