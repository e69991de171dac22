"""Eclipse and shadow geometry: disc overlap factor and shadow-caster candidates."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import TYPE_CHECKING, NamedTuple

import cspyce
import numpy as np

from sso_ephemeris.bodies.base import Body, BodyKind
from sso_ephemeris.constants import (
    DAU,
    DEFAULT_SHADOW_CANDIDATES,
    EARTH_ID,
    IO_ID,
    JUPITER_ID,
    SUN_RADIUS_M,
)
from sso_ephemeris.ephem.light_time import observed_state
from sso_ephemeris.ephem.solver import heliocentric_state

if TYPE_CHECKING:
    from sso_ephemeris.observer import ObserverState

logger = logging.getLogger(__name__)


class ShadowSphere(NamedTuple):
    """Potential shadow caster: observer-relative centre (AU) and physical radius (AU)."""

    position: np.ndarray
    radius: float
    name: str = ''


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def eclipse_factor(sun_r: float, occ_r: float, sep: float) -> float:
    """Visible fraction of the Sun's disc behind an occulting disc.

    Parameters:
        sun_r: Angular radius of the Sun (rad).
        occ_r: Angular radius of the occluder (rad).
        sep: Angular separation of the two centres (rad).

    Returns:
        Illumination fraction in [0, 1]: 1 when the discs do not overlap, 0
        when a larger occluder covers the Sun, 1 - (r/R)^2 for a smaller
        occluder fully inside the disc, and the complement of the lens
        area otherwise.
    """
    sep = abs(sep)
    if sep >= sun_r + occ_r:
        return 1.0
    if sep <= occ_r - sun_r:
        return 0.0
    if sep <= sun_r - occ_r:
        return _clamp(1.0 - occ_r * occ_r / (sun_r * sun_r), 0.0, 1.0)
    # Partial overlap; sep > |sun_r - occ_r| >= 0 here.
    x = (sun_r * sun_r + sep * sep - occ_r * occ_r) / (2.0 * sep)
    alpha = math.acos(_clamp(x / sun_r, -1.0, 1.0))
    beta = math.acos(_clamp((sep - x) / occ_r, -1.0, 1.0))
    area_sun = sun_r * sun_r * (alpha - 0.5 * math.sin(2.0 * alpha))
    area_occ = occ_r * occ_r * (beta - 0.5 * math.sin(2.0 * beta))
    area_disc = math.pi * sun_r * sun_r
    return _clamp(1.0 - (area_sun + area_occ) / area_disc, 0.0, 1.0)


def sun_eclipse_factor(sun: Body, obs: ObserverState, occluders: Iterable[Body]) -> float:
    """Illumination fraction of the Sun seen by the observer, given occluding bodies.

    The most occulting body wins; bodies other than the Moon are normally not
    passed in since only the Moon covers a meaningful part of the Sun.
    """
    sun_dist = float(cspyce.vnorm(obs.sun_pvo[0]))
    if sun_dist <= 0.0:
        return 1.0
    sun_r = sun.radius_m / DAU / sun_dist
    factor = 1.0
    for body in occluders:
        if body is sun:
            continue
        pvo = observed_state(body, obs)
        dist = float(cspyce.vnorm(pvo[0]))
        if dist <= 0.0:
            continue
        occ_r = body.radius_m / DAU / dist
        sep = float(cspyce.vsep(obs.sun_pvo[0], pvo[0]))
        factor = min(factor, eclipse_factor(sun_r, occ_r, sep))
    return factor


def _in_jupiter_system(body: Body) -> bool:
    return IO_ID <= body.id <= JUPITER_ID


def may_receive_shadow(target: Body) -> bool:
    """False when no body could ever shadow target (only the Moon and Jupiter's system can)."""
    return target.kind is BodyKind.MOON or _in_jupiter_system(target)


def could_cast_shadow(caster: Body, target: Body, obs: ObserverState) -> bool:
    """Test whether caster may shadow target.

    Allowed pairs are Earth on the Moon and bodies of Jupiter's system on one
    another. The caster must be closer to the Sun, and the target must lie
    within the caster's penumbra cone (similar triangles with the Sun's
    radius) widened by the target's radius.
    """
    if caster is target or caster.id == target.id:
        return False
    if _in_jupiter_system(target) and not _in_jupiter_system(caster):
        return False
    if target.kind is BodyKind.MOON and caster.id != EARTH_ID:
        return False
    if not may_receive_shadow(target):
        return False

    apvh = heliocentric_state(caster, obs)
    bpvh = heliocentric_state(target, obs)
    adist = float(cspyce.vnorm(apvh[0]))
    if adist * adist > float(np.dot(bpvh[0], bpvh[0])) or adist == 0.0:
        return False
    sun_radius = SUN_RADIUS_M / DAU
    pp = apvh[0] / adist
    shadow_dist = float(np.dot(pp, bpvh[0]))
    d = adist / (caster.radius_m / DAU / sun_radius + 1.0)
    penumbra_r = (shadow_dist - d) / d * sun_radius
    offset = shadow_dist * pp - bpvh[0]
    return float(cspyce.vnorm(offset)) < penumbra_r + target.radius_m / DAU


def insert_candidate(spheres: list[ShadowSphere], sphere: ShadowSphere, max_count: int) -> bool:
    """Insert sphere into a bounded list kept sorted by decreasing radius.

    When the list is full the smallest entry is evicted, unless the new
    sphere is smaller than it, in which case the list is left unchanged.

    Returns:
        True if the sphere was inserted.
    """
    if max_count <= 0:
        return False
    if len(spheres) >= max_count:
        if sphere.radius < spheres[-1].radius:
            return False
        del spheres[max_count - 1 :]
    spheres.append(sphere)
    spheres.sort(key=lambda s: s.radius, reverse=True)
    return True


def get_shadow_candidates(
    target: Body,
    bodies: Iterable[Body],
    obs: ObserverState,
    max_count: int = DEFAULT_SHADOW_CANDIDATES,
) -> list[ShadowSphere]:
    """Bodies that may cast a shadow on target, biggest first, at most max_count.

    Parameters:
        target: Body being rendered.
        bodies: All candidate casters (typically the whole catalog).
        obs: Observer state.
        max_count: Capacity of the returned list.

    Returns:
        ShadowSphere list with observer-relative positions.
    """
    spheres: list[ShadowSphere] = []
    if not may_receive_shadow(target):
        return spheres
    for other in bodies:
        if not could_cast_shadow(other, target, obs):
            continue
        radius = other.radius_m / DAU
        if len(spheres) >= max_count and radius < spheres[-1].radius:
            continue
        pvo = observed_state(other, obs)
        insert_candidate(spheres, ShadowSphere(pvo[0].copy(), radius, other.name), max_count)
    logger.debug('%d shadow candidates for %s', len(spheres), target.name)
    return spheres


def ring_shadow_candidates(
    planet: Body,
    bodies: Iterable[Body],
    obs: ObserverState,
    max_count: int = DEFAULT_SHADOW_CANDIDATES,
) -> list[ShadowSphere]:
    """Shadow candidates for a planet's rings: the planet's own list plus the planet itself."""
    spheres = get_shadow_candidates(planet, bodies, obs, max_count)
    if len(spheres) < max_count:
        pvo = observed_state(planet, obs)
        insert_candidate(spheres, ShadowSphere(pvo[0].copy(), planet.radius_m / DAU, planet.name), max_count)
    return spheres
