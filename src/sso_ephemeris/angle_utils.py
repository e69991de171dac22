"""Angle conversion and sexagesimal formatting for display."""

from __future__ import annotations

import erfa
import numpy as np

from sso_ephemeris.constants import DR2D


def ra_dec(pos: np.ndarray) -> tuple[float, float]:
    """Right ascension (hours, 0..24) and declination (degrees) of an ICRF vector."""
    theta, phi = erfa.c2s(np.asarray(pos, dtype=np.float64))
    return (float(erfa.anp(theta)) * DR2D / 15.0, float(phi) * DR2D)


def sexagesimal(value: float, separator: str = '   ', ndecimal: int = 2, signed: bool = False) -> str:
    """Format hours or degrees as units, minutes, seconds.

    Parameters:
        value: Angle in hours or degrees.
        separator: Three characters placed after each field (e.g. 'hms').
        ndecimal: Decimal places of the seconds field.
        signed: Always print a sign (for declinations).

    Returns:
        Formatted string (e.g. '+12d 30m 45.12s').
    """
    sep1, sep2, sep3 = (separator + '   ')[:3]
    negative = value < 0
    ntens = 10**ndecimal
    # Round once on the smallest unit so carries propagate.
    total = round(abs(value) * 3600.0 * ntens)
    frac = total % ntens
    secs = total // ntens
    units, secs = divmod(secs, 3600)
    mins, secs = divmod(secs, 60)
    sign = '-' if negative and total else ('+' if signed else '')
    seconds = f'{secs:02d}.{frac:0{ndecimal}d}' if ndecimal > 0 else f'{secs:02d}'
    return f'{sign}{units:02d}{sep1} {mins:02d}{sep2} {seconds}{sep3}'.rstrip()
