"""Time conversion wrappers around rms-julian (UTC strings to TT Modified Julian Dates)."""

from __future__ import annotations

import logging
import re

import julian

from sso_ephemeris.config import get_leapsecs_path
from sso_ephemeris.constants import DJM00, SECONDS_PER_DAY

logger = logging.getLogger(__name__)

# MJD of 2000-01-01T00:00 (rms-julian day numbers count from that midnight).
_MJD_OF_DAY_ZERO = DJM00 - 0.5

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def _ensure_leapsecs() -> None:
    """Load leap seconds once; falls back to the LSK bundled with rms-julian."""
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    if path is not None:
        try:
            julian.load_lsk(path)
            _leapsecs_loaded = True
            return
        except (OSError, KeyError, ValueError) as e:
            logger.info('Leap seconds from %s not used (%s); using bundled LSK.', path, e)
    julian.load_lsk()
    _leapsecs_loaded = True


def parse_datetime(string: str) -> tuple[int, float] | None:
    """Parse a UTC date/time string to (day, sec).

    Parameters:
        string: Date/time string in any format accepted by rms-julian; a
            trailing ISO 'Z' is accepted.

    Returns:
        (day, sec) where day counts days since 2000-01-01 and sec is seconds
        within that day; None on parse failure.
    """
    _ensure_leapsecs()
    stripped = string.strip()
    candidates = [stripped]
    if stripped.endswith(('Z', 'z')):
        candidates.append(stripped[:-1])
    if re.fullmatch(r'\d{4}-\d{2}-\d{2}T.*', stripped):
        candidates.append(stripped.replace('T', ' ', 1).rstrip('Zz'))
    for candidate in candidates:
        try:
            day, sec = julian.day_sec_from_string(candidate)[:2]
            return (int(day), float(sec))
        except (ValueError, TypeError, LookupError, OSError):
            continue
    return None


def tdb_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to TDB seconds past J2000."""
    _ensure_leapsecs()
    tai = julian.tai_from_day_sec(day, sec)
    return float(julian.tdb_from_tai(tai))


def mjd_from_tdb(tdb: float) -> float:
    """Convert TDB seconds past J2000 to a dynamical-time MJD.

    TT and TDB differ by less than 2 ms, far below the accuracy of the
    analytic series, so the result is used as TT.
    """
    return DJM00 + tdb / SECONDS_PER_DAY


def utc_mjd_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to a UTC Modified Julian Date."""
    return _MJD_OF_DAY_ZERO + day + sec / SECONDS_PER_DAY


def tt_from_utc(string: str) -> tuple[float, float]:
    """Parse a UTC string and return (tt_mjd, utc_mjd).

    Parameters:
        string: UTC date/time string.

    Returns:
        Tuple of TT MJD and UTC MJD (UTC is used as an approximation of UT1).

    Raises:
        ValueError: If the string cannot be parsed.
    """
    parsed = parse_datetime(string)
    if parsed is None:
        raise ValueError(f'Invalid UTC time: {string!r}')
    day, sec = parsed
    return (mjd_from_tdb(tdb_from_day_sec(day, sec)), utc_mjd_from_day_sec(day, sec))
