"""Per-body quantities read by a rendering layer, and render ordering."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import TYPE_CHECKING

import cspyce

from sso_ephemeris.bodies.base import Body, BodyKind
from sso_ephemeris.bodies.catalog import get_catalog
from sso_ephemeris.ephem.light_time import observed_state, observed_state4
from sso_ephemeris.photometry.magnitude import angular_radius, get_phase, get_vmag

if TYPE_CHECKING:
    from sso_ephemeris.observer import ObserverState


class Info(enum.Enum):
    """Quantity selector for get_info."""

    PVO = 'pvo'
    VMAG = 'vmag'
    PHASE = 'phase'
    RADIUS = 'radius'


def get_info(body: Body, obs: ObserverState, info: Info, bodies: Iterable[Body] | None = None):
    """Return one observed quantity of a body.

    Parameters:
        body: Body to evaluate.
        obs: Observer state.
        info: Quantity to return.
        bodies: Catalog bodies; the Moon among them is used as the Sun's
            occluder for Info.VMAG. Defaults to the process-wide catalog.

    Returns:
        (2, 4) homogeneous observed state for Info.PVO, otherwise a float.
    """
    if info is Info.PVO:
        return observed_state4(body, obs)
    if info is Info.VMAG:
        if bodies is None:
            bodies = get_catalog() if body.kind is BodyKind.SUN else ()
        occluders = [b for b in bodies if b.kind is BodyKind.MOON]
        return get_vmag(body, obs, occluders)
    if info is Info.PHASE:
        return get_phase(body, obs)
    if info is Info.RADIUS:
        return angular_radius(body, obs)
    raise ValueError(f'Unknown info selector: {info!r}')


def sort_by_distance(bodies: Iterable[Body], obs: ObserverState) -> list[Body]:
    """Bodies ordered farthest first, the order in which they are drawn."""
    return sorted(
        bodies,
        key=lambda body: float(cspyce.vnorm(observed_state(body, obs)[0])),
        reverse=True,
    )
