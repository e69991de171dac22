"""Observer-relative (apparent) states with single-step light-time correction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import cspyce
import numpy as np

from sso_ephemeris.bodies.base import Body, ObservedUpdate
from sso_ephemeris.constants import AU_KM, SECONDS_PER_DAY
from sso_ephemeris.ephem.solver import heliocentric_state

if TYPE_CHECKING:
    from sso_ephemeris.observer import ObserverState

logger = logging.getLogger(__name__)


def _relative(pvh: np.ndarray, obs: ObserverState) -> np.ndarray:
    return pvh + obs.sun_pvb - obs.obs_pvb


def light_time_days(distance_au: float) -> float:
    """Light travel time over distance_au, in days."""
    return distance_au * AU_KM / cspyce.clight() / SECONDS_PER_DAY


def observed_state(body: Body, obs: ObserverState, light_time: bool = True) -> np.ndarray:
    """Observer-centred ICRF state of a body.

    With light_time, the body is re-solved once at tt minus the light travel
    time of the geometric distance, and recombined with the unchanged
    observer terms. Only that corrected result is cached, keyed by obs.hash.

    Parameters:
        body: Body to observe.
        obs: Observer state.
        light_time: False returns the geometric (instantaneous) state.

    Returns:
        (2, 3) position (AU) and velocity (AU/day) relative to the observer.
    """
    cache = body.cache
    if light_time and cache.observed_valid(obs.hash):
        assert cache.observed is not None
        return cache.observed.pvo.copy()

    pvo = _relative(heliocentric_state(body, obs), obs)
    if not light_time:
        return pvo

    ldt = light_time_days(float(cspyce.vnorm(pvo[0])))
    pvo = _relative(heliocentric_state(body, obs, obs.tt - ldt), obs)
    logger.debug('Light-time corrected %s (%.3f s)', body.name, ldt * SECONDS_PER_DAY)
    cache.observed = ObservedUpdate(obs.hash, pvo.copy())
    return pvo


def observed_state4(body: Body, obs: ObserverState) -> np.ndarray:
    """Light-time corrected observed state as homogeneous (2, 4) coordinates (w = 1)."""
    pvo = observed_state(body, obs)
    return np.hstack([pvo, np.ones((2, 1), dtype=np.float64)])
