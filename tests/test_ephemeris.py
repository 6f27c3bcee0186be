"""Tests for ephemeris tables and eclipse-window search."""

from __future__ import annotations

import io
from datetime import datetime, timezone

import numpy as np
import pytest

from orrery.constants import MAX_EPHEMERIS_STEPS
from orrery.ephemeris import (
    EclipseWindow,
    _runs,
    eclipse_windows,
    find_eclipses,
    generate_ephemeris,
    sample_instants,
    write_eclipse_windows,
)
from orrery.params import COL_ECLIPSE, COL_JD, COL_PHASENAME, COL_YMDHMS, EphemerisParams
from orrery.time_utils import Instant


def _utc(*args: int) -> Instant:
    return Instant(datetime(*args, tzinfo=timezone.utc))


def test_sample_instants_inclusive_grid() -> None:
    instants = sample_instants(_utc(2024, 1, 1), _utc(2024, 1, 2), 3600.0)
    assert len(instants) == 25
    assert instants[0] == _utc(2024, 1, 1)
    assert instants[-1] == _utc(2024, 1, 2)


@pytest.mark.parametrize(
    ('stop', 'step'),
    [
        ((2024, 1, 1, 0, 30), 3600.0),
        ((2023, 12, 31), 3600.0),
        ((2024, 1, 2), 0.0),
        ((2030, 1, 1), 60.0),
    ],
)
def test_sample_instants_rejects_bad_ranges(stop: tuple[int, ...], step: float) -> None:
    """Too few, too many, or non-positive steps raise ValueError."""
    with pytest.raises(ValueError):
        sample_instants(_utc(2024, 1, 1), _utc(*stop), step)


def test_sample_instants_limit() -> None:
    start = _utc(2024, 1, 1)
    instants = sample_instants(start, start.shifted(MAX_EPHEMERIS_STEPS - 1), 1.0)
    assert len(instants) == MAX_EPHEMERIS_STEPS


def test_runs() -> None:
    flags = np.array([True, True, False, False, True, False, True])
    assert _runs(flags) == [(0, 1), (4, 4), (6, 6)]
    assert _runs(np.zeros(3, dtype=bool)) == []


def test_generate_ephemeris_table() -> None:
    """Header line plus one row per step."""
    params = EphemerisParams(
        start_time='2024-04-08 00:00',
        stop_time='2024-04-08 03:00',
        interval=1.0,
        time_unit='hour',
        latitude_deg=30.0,
        longitude_deg=-100.0,
        columns=[COL_YMDHMS, COL_JD, COL_PHASENAME, COL_ECLIPSE],
    )
    out = io.StringIO()
    generate_ephemeris(params, out)
    lines = out.getvalue().splitlines()
    assert len(lines) == 5
    assert lines[0].split() == ['year-mo-dy', 'hr:mi:sc', 'jd', 'phase_name', 'ecl']
    assert lines[1].startswith('2024-04-08 00:00:00')
    assert lines[4].startswith('2024-04-08 03:00:00')
    fields = lines[1].split()
    assert float(fields[2]) == pytest.approx(2460408.5)
    assert fields[3] == 'New'


def test_generate_ephemeris_without_output_is_noop() -> None:
    params = EphemerisParams(start_time='not a date', stop_time='2024-01-01')
    generate_ephemeris(params)


def test_generate_ephemeris_bad_time_raises() -> None:
    params = EphemerisParams(start_time='not a date', stop_time='2024-01-01')
    with pytest.raises(ValueError, match='Invalid date/time'):
        generate_ephemeris(params, io.StringIO())


def test_eclipse_windows_2024_solar() -> None:
    """The 2024-04-08 solar eclipse shows up as one window around 18h UTC."""
    windows = eclipse_windows(_utc(2024, 4, 7), _utc(2024, 4, 10), 3600.0)
    solar = [w for w in windows if w.kind == 'solar']
    assert len(solar) == 1
    assert solar[0].start <= _utc(2024, 4, 8, 18) <= solar[0].stop
    assert solar[0].peak_alignment > 0.99
    assert not [w for w in windows if w.kind == 'lunar']


def test_eclipse_windows_quiet_range() -> None:
    """No eclipse around a quarter moon."""
    assert eclipse_windows(_utc(2024, 4, 14), _utc(2024, 4, 16), 3600.0) == []


def test_find_eclipses_writes_windows() -> None:
    params = EphemerisParams(
        start_time='2022-11-07 00:00', stop_time='2022-11-10 00:00', interval=2.0
    )
    out = io.StringIO()
    windows = find_eclipses(params, out)
    assert [w.kind for w in windows] == ['lunar']
    line = out.getvalue().splitlines()[0]
    assert line.split()[0] == 'lunar'
    assert line.split()[1].startswith('2022-11-0')


def test_write_eclipse_windows_format() -> None:
    window = EclipseWindow('solar', _utc(2024, 4, 8, 12), _utc(2024, 4, 9), 0.9987654321)
    out = io.StringIO()
    write_eclipse_windows([window], out)
    assert out.getvalue() == (
        'solar 2024-04-08T12:00:00.000Z 2024-04-09T00:00:00.000Z 0.998765\n'
    )
