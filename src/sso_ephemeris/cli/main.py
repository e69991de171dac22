"""CLI entry point: sso-ephemeris prints observed positions and photometry of catalog bodies."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from datetime import datetime, timezone
from typing import NoReturn, TextIO

import cspyce

from sso_ephemeris.angle_utils import ra_dec, sexagesimal
from sso_ephemeris.bodies import Body, Catalog, load_catalog
from sso_ephemeris.config import get_log_level
from sso_ephemeris.constants import DR2D
from sso_ephemeris.ephem.light_time import observed_state
from sso_ephemeris.info import Info, get_info
from sso_ephemeris.observer import ObserverState, observer_at, observer_from_utc

logger = logging.getLogger(__name__)

_HEADER = '{:<10} {:>14} {:>14} {:>13} {:>7} {:>6} {:>9}'.format(
    'Body', 'RA (h m s)', 'Dec (d m s)', 'Dist (AU)', 'Vmag', 'Phase', 'Radius"'
)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or SSO_EPHEMERIS_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = get_log_level()
    if env_level is not None:
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _format_float(value: float, width: int, ndecimal: int) -> str:
    if math.isnan(value):
        return f'{"n/a":>{width}}'
    if math.isinf(value):
        return f'{"-":>{width}}'
    return f'{value:{width}.{ndecimal}f}'


def format_row(body: Body, obs: ObserverState, catalog: Catalog, light_time: bool = True) -> str:
    """One table row: name, RA, Dec, distance, magnitude, phase, angular radius.

    Parameters:
        body: Body to report.
        obs: Observer state.
        catalog: Catalog supplying the Sun's occluders.
        light_time: Apply light-time correction to the position.

    Returns:
        Fixed-width text row.
    """
    pvo = observed_state(body, obs, light_time=light_time)
    dist = float(cspyce.vnorm(pvo[0]))
    if dist > 0.0:
        ra_h, dec_d = ra_dec(pvo[0])
        ra_text = sexagesimal(ra_h, 'hms', 2)
        dec_text = sexagesimal(dec_d, 'dms', 1, signed=True)
    else:
        ra_text = dec_text = 'n/a'
    vmag = get_info(body, obs, Info.VMAG, catalog)
    phase = get_info(body, obs, Info.PHASE)
    radius = get_info(body, obs, Info.RADIUS)
    radius_arcsec = radius * DR2D * 3600.0 if not math.isnan(radius) else math.nan
    return (
        f'{body.name:<10} {ra_text:>14} {dec_text:>14} {_format_float(dist, 13, 8)} '
        f'{_format_float(vmag, 7, 2)} {_format_float(phase, 6, 3)} '
        f'{_format_float(radius_arcsec, 9, 3)}'
    )


def write_table(
    out: TextIO,
    catalog: Catalog,
    bodies: list[Body],
    obs: ObserverState,
    light_time: bool = True,
) -> None:
    """Write the header and one row per body to out."""
    out.write(f'TT (MJD) = {obs.tt:.6f}\n')
    out.write(_HEADER + '\n')
    for body in bodies:
        out.write(format_row(body, obs, catalog, light_time=light_time) + '\n')


def _observer_from_args(args: argparse.Namespace) -> ObserverState:
    if args.tt is not None:
        return observer_at(args.tt)
    time = args.time or datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S')
    return observer_from_utc(time)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the sso-ephemeris CLI.

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='sso-ephemeris',
        description='Observed positions, magnitudes and phases of Solar System bodies.',
    )
    when = parser.add_mutually_exclusive_group()
    when.add_argument('--time', type=str, default=None, help='UTC date/time (default: now)')
    when.add_argument('--tt', type=float, default=None, help='TT Modified Julian Date')
    parser.add_argument(
        '--bodies',
        type=str,
        nargs='+',
        default=None,
        help='Body names (default: every catalog body except Earth)',
    )
    parser.add_argument(
        '--catalog', type=str, default=None, help='Body catalog INI; env: SSO_CATALOG_PATH'
    )
    parser.add_argument(
        '--no-light-time',
        action='store_true',
        help='Report geometric positions (photometry stays light-time corrected)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    args = parser.parse_args(argv)
    _configure_logging(verbose=args.verbose)

    try:
        catalog = load_catalog(args.catalog)
        if args.bodies:
            bodies = [catalog.get(name) for name in args.bodies]
        else:
            bodies = [b for b in catalog if b is not catalog.earth]
        obs = _observer_from_args(args)
        logger.debug('Tabulating %d bodies at TT MJD %.6f', len(bodies), obs.tt)
        write_table(sys.stdout, catalog, bodies, obs, light_time=not args.no_light_time)
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
