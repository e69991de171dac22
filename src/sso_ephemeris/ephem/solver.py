"""Heliocentric position solver with hierarchy recursion and the coarse per-body cache."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from sso_ephemeris.bodies.base import Body, BodyKind, FullUpdate
from sso_ephemeris.ephem.galilean import galilean_offset_pv
from sso_ephemeris.ephem.kepler import orbit_pv
from sso_ephemeris.ephem.lunar import moon_geocentric_pv
from sso_ephemeris.ephem.planets import planet_pvh

if TYPE_CHECKING:
    from sso_ephemeris.observer import ObserverState

logger = logging.getLogger(__name__)


def _extrapolate(pvh: np.ndarray, dt: float) -> np.ndarray:
    """Linear (position + velocity) extrapolation of a state over dt days."""
    return np.array([pvh[0] + dt * pvh[1], pvh[1]], dtype=np.float64)


def _parent_pvh(body: Body, obs: ObserverState, tt: float) -> np.ndarray:
    if body.parent is None:
        raise ValueError(f'Body {body.name!r} has no parent; cannot resolve its position')
    return heliocentric_state(body.parent, obs, tt)


def heliocentric_state(body: Body, obs: ObserverState, tt: float | None = None) -> np.ndarray:
    """Heliocentric ICRF state of a body.

    The coarse cache is used when the last full solve is within the body's
    revalidation interval; the state is then linearly extrapolated. Earth,
    Sun and Moon are never cached: they come from (or are tied to) the
    observer's Earth state.

    Parameters:
        body: Body to resolve.
        obs: Observer state; supplies Earth's heliocentric state.
        tt: TT MJD to solve at (defaults to obs.tt).

    Returns:
        (2, 3) position (AU) and velocity (AU/day).

    Raises:
        ValueError: If a body outside the analytic series has no parent or
            no usable orbital elements.
    """
    if tt is None:
        tt = obs.tt
    cache = body.cache
    if cache.full_valid(tt, body.update_delta_s):
        full = cache.full
        assert full is not None
        return _extrapolate(full.pvh, tt - full.tt)

    kind, index = body.kind, body.kind_index
    if kind is BodyKind.EARTH:
        return np.array(obs.earth_pvh, dtype=np.float64)
    if kind is BodyKind.SUN:
        return np.zeros((2, 3), dtype=np.float64)
    if kind is BodyKind.MOON:
        return moon_geocentric_pv(tt) + obs.earth_pvh

    if kind is BodyKind.MAJOR_PLANET:
        pvh = planet_pvh(tt, index)
    elif kind is BodyKind.GIANT_MOON:
        pvh = galilean_offset_pv(tt, index) + _parent_pvh(body, obs, tt)
    else:
        if not body.orbit.is_set():
            raise ValueError(f'Body {body.name!r} has no usable orbital elements')
        parent_mass = body.parent.mass if body.parent is not None else 0.0
        pvh = orbit_pv(body.orbit, tt, parent_mass) + _parent_pvh(body, obs, tt)

    logger.debug('Full update of %s at tt=%.8f', body.name, tt)
    cache.full = FullUpdate(tt, pvh.copy())
    return pvh
