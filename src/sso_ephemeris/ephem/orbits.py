"""Osculating orbit of a body around its parent, for orbit-path display."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from sso_ephemeris.bodies.base import Body, BodyKind, OrbitElements
from sso_ephemeris.constants import MIN_ORBIT_PIXEL_RADIUS
from sso_ephemeris.ephem.kepler import elements_from_pv, gm_au_day, orbit_path
from sso_ephemeris.ephem.solver import heliocentric_state

if TYPE_CHECKING:
    from sso_ephemeris.observer import ObserverState


def _parent_mu(body: Body) -> float:
    if body.parent is None:
        raise ValueError(f'Body {body.name!r} has no parent; no orbit to compute')
    if body.parent.mass <= 0.0:
        raise ValueError(f'Parent {body.parent.name!r} of {body.name!r} has unknown mass')
    return gm_au_day(body.parent.mass)


def compute_orbit_elements(body: Body, obs: ObserverState) -> OrbitElements:
    """Osculating Keplerian elements of body relative to its parent at obs.tt.

    Not cached: it is requested for at most one selected body per frame.

    Raises:
        ValueError: If the body has no parent or the parent mass is unknown.
    """
    mu = _parent_mu(body)
    assert body.parent is not None
    parent_pvh = heliocentric_state(body.parent, obs)
    pvh = heliocentric_state(body, obs)
    return elements_from_pv(pvh - parent_pvh, obs.tt, mu)


def compute_orbit_path(body: Body, obs: ObserverState, n_points: int = 128) -> np.ndarray:
    """Parent-relative orbit samples of body over one revolution (AU)."""
    elements = compute_orbit_elements(body, obs)
    return orbit_path(elements, _parent_mu(body), n_points)


def should_render_orbit(body: Body, selected: Body | None, pixel_radius: float) -> bool:
    """Decide whether the orbit of a moon is worth drawing.

    Parameters:
        body: Candidate body.
        selected: Currently selected body, if any.
        pixel_radius: On-screen radius of body in pixels.

    Returns:
        True for the selected moon itself, or for a moon of the selected planet
        whose on-screen radius reaches the display threshold.
    """
    if selected is None or body.parent is None or body.kind is BodyKind.SUN:
        return False
    if body.parent.kind is BodyKind.SUN:
        return False
    if body is selected:
        return True
    if body.parent is not selected:
        return False
    return pixel_radius >= MIN_ORBIT_PIXEL_RADIUS
