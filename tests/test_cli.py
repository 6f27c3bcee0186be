"""Tests for the orrery command line."""

from __future__ import annotations

import json
import sys
from typing import Any

import pytest

from orrery.cli import main as cli_main


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    monkeypatch.setattr(sys, 'argv', ['orrery', *argv])
    return cli_main.main()


def test_state_json_heliocentric(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """state --json prints a State with the Sun at the origin."""
    rc = _run(
        monkeypatch,
        'state',
        '--time',
        '2000-01-01T12:00:00Z',
        '--frame',
        'heliocentric',
        '--latitude',
        '51 28 38 N',
        '--longitude',
        '0',
        '--json',
    )
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data['instant'] == '2000-01-01T12:00:00.000Z'
    assert data['frame'] == 'heliocentric'
    assert data['star']['position'] == [0.0, 0.0, 0.0]
    assert data['time']['days_since_epoch'] == 0.0
    assert data['time']['julian_day'] == 2451545.0
    assert data['observer']['latitude'] == pytest.approx(51.4772, abs=1e-4)
    assert set(data['phase']) == {'illumination', 'angle_deg', 'name', 'phase_angle_deg'}


def test_state_summary_text(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv('ORRERY_FRAME', raising=False)
    rc = _run(monkeypatch, 'state', '--time', '2024-04-08T18:17:00Z')
    assert rc == 0
    out = capsys.readouterr().out
    assert 'Frame:           geocentric' in out
    assert 'Solar eclipse:   True' in out


def test_state_summary_observer_in_dms(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Observer coordinates print as degrees, minutes, seconds."""
    rc = _run(
        monkeypatch,
        'state',
        '--time',
        '2000-01-01T12:00:00Z',
        '--latitude',
        '33 52 04 S',
        '--longitude',
        '151.2E',
    )
    assert rc == 0
    out = capsys.readouterr().out
    assert 'Observer:        -33d 52m 04.0s, 151d 12m 00.0s' in out


def test_state_non_finite_env_observer_uses_default(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """An infinite ORRERY_LONGITUDE falls back to the default observer."""
    monkeypatch.setenv('ORRERY_LONGITUDE', 'inf')
    monkeypatch.delenv('ORRERY_LATITUDE', raising=False)
    rc = _run(monkeypatch, 'state', '--time', '2000-01-01T12:00:00Z', '--json')
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data['observer']['longitude'] == 45.0
    assert data['observer']['latitude'] == 45.0


def test_state_frame_from_env(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv('ORRERY_FRAME', 'moon')
    rc = _run(monkeypatch, 'state', '--time', '2000-01-01T12:00:00Z', '--json')
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data['frame'] == 'selenocentric'
    assert data['satellite']['position'] == [0.0, 0.0, 0.0]


@pytest.mark.parametrize(
    'argv',
    [
        ('state', '--time', '2000-01-01T12:00:00Z', '--frame', 'galactic'),
        ('state', '--time', 'yesterday-ish'),
    ],
)
def test_state_errors_return_1(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], argv: tuple[str, ...]
) -> None:
    assert _run(monkeypatch, *argv) == 1
    assert capsys.readouterr().err.startswith('Error: ')


def test_ephemeris_builds_params(monkeypatch: pytest.MonkeyPatch) -> None:
    """ephemeris subcommand passes parsed options to generate_ephemeris."""
    captured: dict[str, Any] = {}

    def _fake_generate(params, *_args, **_kwargs):  # type: ignore[no-untyped-def]
        captured['value'] = params

    monkeypatch.setattr('orrery.ephemeris.generate_ephemeris', _fake_generate)
    rc = _run(
        monkeypatch,
        'ephemeris',
        '--start',
        '2025-01-01 00:00',
        '--stop',
        '2025-01-02 00:00',
        '--interval',
        '30',
        '--time-unit',
        'min',
        '--latitude',
        '33 52 04 S',
        '--longitude',
        '151.2E',
        '--columns',
        'jd',
        'sunelev,phase_name',
    )
    assert rc == 0
    params = captured['value']
    assert params.interval == 30.0
    assert params.time_unit == 'min'
    assert params.latitude_deg == pytest.approx(-33.867778, abs=1e-6)
    assert params.longitude_deg == pytest.approx(151.2)
    assert params.columns == [1, 5, 11]


def test_ephemeris_eclipses_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(
        'orrery.ephemeris.find_eclipses', lambda params, out: calls.append(params.start_time)
    )
    rc = _run(monkeypatch, 'ephemeris', '--start', '2024-04-01', '--stop', '2024-05-01', '--eclipses')
    assert rc == 0
    assert calls == ['2024-04-01']


def test_ephemeris_invalid_range_returns_1(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    rc = _run(monkeypatch, 'ephemeris', '--start', '2024-04-02', '--stop', '2024-04-01')
    assert rc == 1
    assert 'too short' in capsys.readouterr().err


def test_ephemeris_writes_output_file(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:  # type: ignore[no-untyped-def]
    path = tmp_path / 'moon.tab'
    rc = _run(
        monkeypatch,
        'ephemeris',
        '--start',
        '2024-04-08 00:00',
        '--stop',
        '2024-04-08 06:00',
        '--interval',
        '2',
        '-o',
        str(path),
    )
    assert rc == 0
    assert len(path.read_text().splitlines()) == 5


def test_cli_is_regular_package() -> None:
    """orrery.cli ships as a regular package so wheels include the console script module."""
    import orrery.cli

    assert orrery.cli.__file__ is not None
    assert orrery.cli.__file__.endswith('__init__.py')
