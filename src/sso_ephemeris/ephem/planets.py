"""Major planet heliocentric states from the ERFA low-precision analytic series."""

from __future__ import annotations

import warnings

import erfa
import numpy as np

from sso_ephemeris.constants import DJM0, SECONDS_PER_DAY
from sso_ephemeris.ephem.frames import pv_array

# Half-width of the central difference used for velocity (60 s in days).
_VELOCITY_HALF_STEP = 60.0 / SECONDS_PER_DAY


def _plan94_pos(tt: float, planet_num: int) -> np.ndarray:
    with warnings.catch_warnings():
        # Dates outside AD 1000-3000 only degrade accuracy.
        warnings.simplefilter('ignore', erfa.ErfaWarning)
        pv = erfa.plan94(DJM0, tt, planet_num)
    return pv_array(pv)[0]


def planet_pvh(tt: float, planet_num: int) -> np.ndarray:
    """Heliocentric J2000 state of a major planet.

    The velocity is the central difference of the series positions rather
    than the series' own Keplerian velocity, so that it is the derivative
    of the positions the solver returns.

    Parameters:
        tt: TT Modified Julian Date.
        planet_num: 1=Mercury, 2=Venus, 3=Earth-Moon barycentre, 4=Mars ..
            8=Neptune.

    Returns:
        (2, 3) state in AU and AU/day.

    Raises:
        ValueError: If planet_num is outside 1..8.
    """
    if not 1 <= planet_num <= 8:
        raise ValueError(f'planet_num must be in 1..8, got {planet_num}')
    pos = _plan94_pos(tt, planet_num)
    ahead = _plan94_pos(tt + _VELOCITY_HALF_STEP, planet_num)
    behind = _plan94_pos(tt - _VELOCITY_HALF_STEP, planet_num)
    vel = (ahead - behind) / (2.0 * _VELOCITY_HALF_STEP)
    return np.array([pos, vel], dtype=np.float64)
