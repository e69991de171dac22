"""Two-body propagation and Cartesian-to-elements conversion (cspyce conics/oscelt)."""

from __future__ import annotations

import logging
import math

import cspyce
import numpy as np

from sso_ephemeris.bodies.base import OrbitElements
from sso_ephemeris.constants import DAU, GRAVITATIONAL_CONSTANT, SECONDS_PER_DAY

logger = logging.getLogger(__name__)


def gm_au_day(mass_kg: float) -> float:
    """Gravitational parameter of a mass in AU^3/day^2."""
    return GRAVITATIONAL_CONSTANT * mass_kg / (DAU * DAU * DAU) * SECONDS_PER_DAY * SECONDS_PER_DAY


def elements_mu(orbit: OrbitElements, parent_mass: float = 0.0) -> float:
    """Gravitational parameter implied by the elements (n^2 a^3), or by the parent mass.

    Raises:
        ValueError: If neither a mean motion nor a parent mass is available.
    """
    if orbit.mean_motion:
        return orbit.mean_motion * orbit.mean_motion * abs(orbit.semi_major_axis) ** 3
    if parent_mass > 0.0:
        return gm_au_day(parent_mass)
    raise ValueError('Orbit has no mean motion and the parent mass is unknown')


def orbit_pv(orbit: OrbitElements, tt: float, parent_mass: float = 0.0) -> np.ndarray:
    """Parent-relative state from Keplerian elements at tt.

    Parameters:
        orbit: Elements (epoch MJD, angles rad, a AU, n rad/day).
        tt: TT Modified Julian Date.
        parent_mass: Used for mu only when the elements carry no mean motion.

    Returns:
        (2, 3) state in AU and AU/day, ICRF.
    """
    mu = elements_mu(orbit, parent_mass)
    rp = orbit.semi_major_axis * (1.0 - orbit.eccentricity)
    elts = [
        abs(rp),
        orbit.eccentricity,
        orbit.inclination,
        orbit.node,
        orbit.perihelion,
        orbit.mean_anomaly,
        orbit.mjd,
        mu,
    ]
    state = cspyce.conics(elts, tt)
    return np.asarray(state, dtype=np.float64).reshape(2, 3)


def elements_from_pv(pv: np.ndarray, tt: float, mu: float) -> OrbitElements:
    """Osculating elements of a parent-relative state.

    Parameters:
        pv: (2, 3) position (AU) and velocity (AU/day).
        tt: Epoch of the state (TT MJD).
        mu: Gravitational parameter in AU^3/day^2.

    Returns:
        OrbitElements at epoch tt.

    Raises:
        ValueError: If mu is not positive or the state is degenerate.
    """
    if mu <= 0.0:
        raise ValueError(f'Gravitational parameter must be positive, got {mu!r}')
    state = np.asarray(pv, dtype=np.float64).reshape(6)
    if cspyce.vnorm(state[:3]) == 0.0:
        raise ValueError('Cannot compute orbit elements of a zero position vector')
    rp, ecc, inc, lnode, argp, m0, _t0, _mu = cspyce.oscelt(state.tolist(), tt, mu)
    if abs(1.0 - ecc) < 1e-12:
        logger.debug('Parabolic orbit; semi-major axis undefined')
        a = math.inf
        n = 0.0
    else:
        a = rp / (1.0 - ecc)
        n = math.sqrt(mu / abs(a) ** 3)
    return OrbitElements(
        mjd=tt,
        inclination=inc,
        node=lnode,
        perihelion=argp,
        semi_major_axis=a,
        mean_motion=n,
        eccentricity=ecc,
        mean_anomaly=m0,
    )


def orbit_path(orbit: OrbitElements, mu: float, n_points: int = 128) -> np.ndarray:
    """Parent-relative positions sampled over one revolution, for orbit display.

    Parameters:
        orbit: Elements (elliptic).
        mu: Gravitational parameter in AU^3/day^2.
        n_points: Number of samples.

    Returns:
        (n_points, 3) positions in AU, starting at the element epoch.

    Raises:
        ValueError: For non-elliptic orbits or n_points < 2.
    """
    if n_points < 2:
        raise ValueError(f'n_points must be at least 2, got {n_points}')
    if not 0.0 <= orbit.eccentricity < 1.0:
        raise ValueError('Orbit path is only defined for elliptic orbits')
    period = 2.0 * math.pi * math.sqrt(orbit.semi_major_axis**3 / mu)
    rp = orbit.semi_major_axis * (1.0 - orbit.eccentricity)
    elts = [
        rp,
        orbit.eccentricity,
        orbit.inclination,
        orbit.node,
        orbit.perihelion,
        orbit.mean_anomaly,
        orbit.mjd,
        mu,
    ]
    times = orbit.mjd + np.linspace(0.0, period, n_points, endpoint=False)
    return np.array([cspyce.conics(elts, float(t))[:3] for t in times], dtype=np.float64)
