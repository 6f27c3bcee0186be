"""CLI entry point: orrery state|ephemeris subcommands."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from enum import Enum
from typing import Any, TextIO, cast

from orrery.angle_utils import dms_string
from orrery.config import get_default_frame, get_default_latitude, get_default_longitude
from orrery.constants import DEFAULT_INTERVAL
from orrery.engine import compute_state
from orrery.models import ObserverLocation, State
from orrery.params import (
    DEFAULT_COLUMNS,
    EphemerisParams,
    parse_column_spec,
    parse_frame,
    parse_latitude,
    parse_longitude,
)
from orrery.time_utils import Instant, instant_from_string

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or ORRERY_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('ORRERY_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _jsonable(value: Any) -> Any:
    """Convert dataclass dict values (tuples, enums, instants) to JSON types."""
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Instant):
        return value.isoformat()
    return value


def state_to_dict(state: State) -> dict[str, Any]:
    """JSON-ready dictionary of a State."""
    data = asdict(state)
    data['instant'] = state.instant.isoformat()
    return cast(dict[str, Any], _jsonable(data))


def _format_vec(v: tuple[float, float, float]) -> str:
    return f'({v[0]:10.4f}, {v[1]:10.4f}, {v[2]:10.4f})'


def write_state_summary(state: State, stream: TextIO) -> None:
    """Human-readable multi-line summary of a State."""
    obs = state.observer
    lines = [
        f'Time:            {state.instant.isoformat()}',
        f'Julian Day:      {state.time.julian_day:.6f}',
        f'Days since J2000: {state.time.days_since_epoch:.6f}',
        f'Frame:           {state.frame.value}',
        f'Earth:           {_format_vec(state.central.position)}',
        f'Moon:            {_format_vec(state.satellite.position)}',
        f'Sun:             {_format_vec(state.star.position)}',
        f'Focal point:     {_format_vec(state.focal_point)}',
        f'Observer:        {dms_string(obs.latitude)}, {dms_string(obs.longitude)}',
        f'Sun elev/az:     {obs.solar_elevation_deg:.2f} / {obs.solar_azimuth_deg:.2f}'
        f' ({"up" if obs.star_visible else "down"})',
        f'Moon elev/az:    {obs.satellite_elevation_deg:.2f} / {obs.satellite_azimuth_deg:.2f}'
        f' ({"up" if obs.satellite_visible else "down"})',
        f'Local solar hour: {obs.local_solar_hour:.3f}',
        f'Moon phase:      {state.phase.name} ({state.phase.illumination * 100:.1f}% lit,'
        f' {state.phase.angle_deg:.2f} deg)',
        f'Solar eclipse:   {state.eclipses.solar_eclipse}'
        f' (alignment {state.eclipses.solar_alignment:.5f})',
        f'Lunar eclipse:   {state.eclipses.lunar_eclipse}'
        f' (alignment {state.eclipses.lunar_alignment:.5f})',
    ]
    stream.write('\n'.join(lines) + '\n')


def _state_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Compute and print one State (state subcommand).

    Returns:
        Exit code 0 on success, 1 on error.
    """
    del parser
    try:
        instant = instant_from_string(args.time) if args.time else Instant.now()
        frame = parse_frame(args.frame or get_default_frame())
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    location = ObserverLocation(latitude=args.latitude, longitude=args.longitude)
    state = compute_state(instant, frame, location)
    if args.json:
        json.dump(state_to_dict(state), sys.stdout, indent=2)
        sys.stdout.write('\n')
    else:
        write_state_summary(state, sys.stdout)
    return 0


def _ephemeris_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Write an ephemeris table or eclipse list (ephemeris subcommand).

    Returns:
        Exit code 0 on success, 1 on error.
    """
    del parser
    from orrery import ephemeris

    try:
        columns = parse_column_spec([str(x) for x in (args.columns or [])]) or list(
            DEFAULT_COLUMNS
        )
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    params = EphemerisParams(
        start_time=args.start,
        stop_time=args.stop,
        interval=args.interval,
        time_unit=args.time_unit,
        latitude_deg=args.latitude,
        longitude_deg=args.longitude,
        columns=columns,
    )
    run = ephemeris.find_eclipses if args.eclipses else ephemeris.generate_ephemeris
    try:
        if args.output is not None:
            with open(args.output, 'w') as f:
                run(params, f)
        else:
            run(params, sys.stdout)
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def _add_observer_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--latitude',
        type=parse_latitude,
        default=get_default_latitude(),
        help='Observer latitude (deg, "d m s", N/S suffix); env: ORRERY_LATITUDE',
    )
    parser.add_argument(
        '--longitude',
        type=parse_longitude,
        default=get_default_longitude(),
        help='Observer east longitude (deg, "d m s", E/W suffix); env: ORRERY_LONGITUDE',
    )


def main() -> int:
    """Entry point for orrery CLI (state | ephemeris).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='orrery',
        description='Earth-Moon-Sun ephemeris and display-frame engine.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    state_parser = subparsers.add_parser('state', help='State snapshot at one time')
    state_parser.add_argument(
        '--time', type=str, default='', help='UTC time (default: now), e.g. 2024-04-08T18:17:00Z'
    )
    state_parser.add_argument(
        '--frame',
        type=str,
        default='',
        help='geocentric, heliocentric or selenocentric; env: ORRERY_FRAME',
    )
    _add_observer_args(state_parser)
    state_parser.add_argument('--json', action='store_true', help='Print State as JSON')
    state_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    state_parser.set_defaults(func=_state_cmd)

    ephem_parser = subparsers.add_parser('ephemeris', help='Ephemeris table over a time range')
    ephem_parser.add_argument('--start', type=str, required=True, help='Start time (UTC)')
    ephem_parser.add_argument('--stop', type=str, required=True, help='Stop time (UTC)')
    ephem_parser.add_argument(
        '--interval', type=float, default=DEFAULT_INTERVAL, help='Time step'
    )
    ephem_parser.add_argument(
        '--time-unit',
        type=str,
        default='hour',
        choices=['sec', 'min', 'hour', 'day'],
    )
    _add_observer_args(ephem_parser)
    ephem_parser.add_argument(
        '--columns',
        type=str,
        nargs='*',
        default=None,
        help='Column IDs or names (e.g. 1 2 sunelev phase_name)',
    )
    ephem_parser.add_argument(
        '--eclipses', action='store_true', help='List eclipse windows instead of a table'
    )
    ephem_parser.add_argument('-o', '--output', type=str, default=None, help='Output file')
    ephem_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    ephem_parser.set_defaults(func=_ephemeris_cmd)

    args = parser.parse_args()
    _configure_logging(verbose=args.verbose)
    return cast(int, args.func(parser, args))


if __name__ == '__main__':
    sys.exit(main())
