"""Apparent visual magnitude, phase and angular radius of catalog bodies.

Magnitude models by body class:

- Sun: absolute magnitude 4.83 moved to the Earth-Sun distance, dimmed by
  the eclipse factor of any occluder (floored to keep the log finite).
- Moon: empirical elongation and distance formula (as used by pyephem).
- Major planets: visual elements of the Explanatory Supplement (1992), a
  phase-angle polynomial plus the distance term, plus Saturn's rings.
- Everything else: absolute magnitude from albedo and diameter.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import TYPE_CHECKING

import cspyce
import numpy as np

from sso_ephemeris.bodies.base import Body, BodyKind
from sso_ephemeris.constants import (
    AU_TO_PARSEC,
    DAU,
    DR2D,
    MIN_ECLIPSE_FACTOR,
    SUN_ABSOLUTE_VMAG,
)
from sso_ephemeris.ephem.light_time import observed_state
from sso_ephemeris.ephem.solver import heliocentric_state
from sso_ephemeris.photometry.rings import rings_vmag
from sso_ephemeris.shadows import sun_eclipse_factor

if TYPE_CHECKING:
    from sso_ephemeris.observer import ObserverState

logger = logging.getLogger(__name__)

# Per planet number: (angular size at 1 AU in arcsec, V(1,0), A, B, C).
# Earth (3) has no entry.
VIS_ELEMENTS: tuple[tuple[float, float, float, float, float], ...] = (
    (0.0, 0.0, 0.0, 0.0, 0.0),
    (6.74, -0.36, 3.8, -2.73, 2.00),  # Mercury
    (16.92, -4.29, 0.09, 2.39, -0.65),  # Venus
    (0.0, 0.0, 0.0, 0.0, 0.0),  # Earth
    (9.36, -1.52, 1.60, 0.0, 0.0),  # Mars
    (196.74, -9.25, 0.50, 0.0, 0.0),  # Jupiter
    (165.6, -8.88, 4.40, 0.0, 0.0),  # Saturn
    (70.481, -7.19, 0.28, 0.0, 0.0),  # Uranus
    (68.294, -6.87, 0.0, 0.0, 0.0),  # Neptune
)


def _norm(vec: np.ndarray) -> float:
    return float(cspyce.vnorm(vec))


def sun_vmag(obs: ObserverState, eclipse: float = 1.0) -> float:
    """Apparent magnitude of the Sun at Earth's distance.

    Parameters:
        obs: Observer state.
        eclipse: Visible fraction of the solar disc.
    """
    dist_pc = _norm(obs.earth_pvh[0]) * AU_TO_PARSEC
    return (
        SUN_ABSOLUTE_VMAG
        + 5.0 * (math.log10(dist_pc) - 1.0)
        - 2.5 * math.log10(max(eclipse, MIN_ECLIPSE_FACTOR))
    )


def moon_vmag(moon_pvo: np.ndarray, sun_pvo: np.ndarray) -> float:
    """Apparent magnitude of the Moon from its elongation and distance.

    Parameters:
        moon_pvo: Observer-relative state of the Moon (AU).
        sun_pvo: Observer-relative state of the Sun (AU).
    """
    el = float(cspyce.vsep(moon_pvo[0], sun_pvo[0]))
    dist = _norm(moon_pvo[0])
    illum = math.pi / 2.0 * (1.0 + 1e-6 - math.cos(el))
    return -12.7 + 2.5 * (math.log10(math.pi) - math.log10(illum)) + 5.0 * math.log10(dist / 0.0025)


def planet_vmag(planet_num: int, pvh: np.ndarray, pvo: np.ndarray) -> float:
    """Magnitude of a major planet without its rings.

    Parameters:
        planet_num: 1 (Mercury) .. 8 (Neptune), not 3.
        pvh: Heliocentric state (AU).
        pvo: Observer-relative state (AU).

    Raises:
        ValueError: For a planet without visual elements.
    """
    if not 0 < planet_num < len(VIS_ELEMENTS) or not VIS_ELEMENTS[planet_num][1]:
        raise ValueError(f'No visual elements for planet number {planet_num}')
    _size, v10, a, b, c = VIS_ELEMENTS[planet_num]
    rho = _norm(pvh[0])
    rp = _norm(pvo[0])
    i = float(cspyce.vsep(pvh[0], pvo[0])) * DR2D / 100.0
    return v10 + 5.0 * math.log10(rho * rp) + i * (a + i * (b + i * c))


def generic_vmag(radius_m: float, albedo: float, pvh: np.ndarray, pvo: np.ndarray) -> float:
    """Absolute-magnitude model for a body of known albedo and radius.

    Returns +inf when either is unknown (zero).
    """
    if albedo <= 0.0 or radius_m <= 0.0:
        return math.inf
    diameter_km = 2.0 * radius_m / 1000.0
    h = -5.0 * math.log10(math.sqrt(albedo) * diameter_km / 1329.0)
    return h + 5.0 * math.log10(_norm(pvh[0]) * _norm(pvo[0]))


def get_vmag(body: Body, obs: ObserverState, occluders: Iterable[Body] = ()) -> float:
    """Apparent visual magnitude of a body.

    Parameters:
        body: Body to evaluate.
        obs: Observer state.
        occluders: Bodies that may eclipse the Sun (used for the Sun only).

    Returns:
        Visual magnitude; NaN for Earth, which the observer stands on.
    """
    kind = body.kind
    if kind is BodyKind.SUN:
        occluders = tuple(occluders)
        if not occluders:
            logger.debug('Sun magnitude without occluders; eclipses ignored')
        return sun_vmag(obs, sun_eclipse_factor(body, obs, occluders))
    if kind is BodyKind.EARTH:
        return math.nan

    pvo = observed_state(body, obs)
    if kind is BodyKind.MOON:
        return moon_vmag(pvo, obs.sun_pvo)

    pvh = heliocentric_state(body, obs)
    if kind is BodyKind.MAJOR_PLANET:
        return planet_vmag(body.kind_index, pvh, pvo) + rings_vmag(body, obs, pvh)
    return generic_vmag(body.radius_m, body.albedo, pvh, pvo)


def get_phase(body: Body, obs: ObserverState) -> float:
    """Illuminated fraction 0.5 + 0.5 cos(Sun-body-observer angle); NaN for Sun and Earth."""
    if body.kind in (BodyKind.SUN, BodyKind.EARTH):
        return math.nan
    pvh = heliocentric_state(body, obs)
    pvo = observed_state(body, obs)
    return 0.5 * math.cos(float(cspyce.vsep(pvh[0], pvo[0]))) + 0.5


def angular_radius(body: Body, obs: ObserverState) -> float:
    """Apparent angular radius (rad, small-angle) of a body."""
    if body.kind is BodyKind.EARTH:
        return math.nan
    dist = _norm(observed_state(body, obs)[0])
    if dist == 0.0:
        return math.nan
    return body.radius_m / DAU / dist
