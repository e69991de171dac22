"""Configuration: catalog and leap-second paths from environment."""

import os
from pathlib import Path

# Bundled catalog shipped with the package; env var overrides.
DEFAULT_CATALOG_PATH = Path(__file__).parent / 'bodies' / 'data' / 'planets.ini'


def get_catalog_path() -> str:
    """Return the body catalog INI file (SSO_CATALOG_PATH env var or bundled file).

    Returns:
        Path string.
    """
    path = os.environ.get('SSO_CATALOG_PATH', '').strip()
    if path:
        return path
    return str(DEFAULT_CATALOG_PATH)


def get_leapsecs_path() -> str | None:
    """Return path to a NAIF LSK leap seconds file for rms-julian, if configured.

    Returns:
        JULIAN_LEAPSECS value, or None to use the LSK bundled with rms-julian.
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    return path or None


def get_log_level() -> str | None:
    """Return log level name from SSO_EPHEMERIS_LOG, or None when unset/invalid."""
    level = os.environ.get('SSO_EPHEMERIS_LOG', '').strip().upper()
    if level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        return level
    return None
