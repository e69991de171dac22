"""Saturn ring opening angle and the ring contribution to Saturn's magnitude."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import erfa
import numpy as np

from sso_ephemeris.bodies.base import Body
from sso_ephemeris.constants import DD2R, DJM0, SATURN_ID
from sso_ephemeris.ephem.solver import heliocentric_state

if TYPE_CHECKING:
    from sso_ephemeris.observer import ObserverState


def _tilt(inc: float, node: float, lon: float, lat: float) -> float:
    s = math.sin(inc) * math.cos(lat) * math.sin(lon - node) - math.cos(inc) * math.sin(lat)
    s = max(-1.0, min(1.0, s))
    return math.asin(s)


def ring_tilt(saturn_hpos: np.ndarray, earth_hpos: np.ndarray, jd: float) -> tuple[float, float]:
    """Tilt of Saturn's ring plane as seen from Earth and from the Sun.

    Parameters:
        saturn_hpos: Heliocentric position of Saturn, ecliptic of date (AU).
        earth_hpos: Heliocentric position of Earth, ecliptic of date (AU).
        jd: Julian Date.

    Returns:
        (earth_tilt, sun_tilt) in radians; positive when the north face is
        visible.
    """
    t = (jd - 2451545.0) / 365250.0
    inc = (28.04922 - 0.13 * t + 0.0004 * t * t) * DD2R
    node = (169.53 + 13.826 * t + 0.04 * t * t) * DD2R

    sl, sb = erfa.c2s(np.asarray(saturn_hpos, dtype=np.float64))
    rel = np.asarray(saturn_hpos, dtype=np.float64) - np.asarray(earth_hpos, dtype=np.float64)
    la, be = erfa.c2s(rel)

    return (_tilt(inc, node, float(la), float(be)), _tilt(inc, node, float(sl), float(sb)))


def rings_vmag(body: Body, obs: ObserverState, pvh: np.ndarray | None = None) -> float:
    """Magnitude correction from Saturn's rings; 0 for every other body.

    Parameters:
        body: Body whose magnitude is being computed.
        obs: Observer state.
        pvh: Heliocentric state of body if already known.
    """
    if body.id != SATURN_ID:
        return 0.0
    if pvh is None:
        pvh = heliocentric_state(body, obs)
    saturn_hpos = obs.ri2e @ pvh[0]
    earth_hpos = obs.ri2e @ obs.earth_pvh[0]
    earth_tilt, _sun_tilt = ring_tilt(saturn_hpos, earth_hpos, obs.ut1 + DJM0)
    s = math.sin(abs(earth_tilt))
    return (-2.60 + 1.25 * s) * s
