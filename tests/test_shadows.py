"""Tests for eclipse factors and shadow-caster candidate selection."""

from __future__ import annotations

import math

import numpy as np
import pytest

from sso_ephemeris import shadows
from sso_ephemeris.bodies import Body
from sso_ephemeris.constants import (
    CALLISTO_ID,
    DAU,
    EARTH_ID,
    EUROPA_ID,
    GANYMEDE_ID,
    IO_ID,
    JUPITER_ID,
    MARS_ID,
    MOON_ID,
    SATURN_ID,
    VENUS_ID,
)
from sso_ephemeris.shadows import (
    ShadowSphere,
    could_cast_shadow,
    eclipse_factor,
    get_shadow_candidates,
    insert_candidate,
    ring_shadow_candidates,
    sun_eclipse_factor,
)


def _body(name: str, body_id: int, radius_km: float) -> Body:
    return Body(name=name, id=body_id, radius_m=radius_km * 1000.0)


def _pv(x: float, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    return np.array([[x, y, z], [0.0, 0.0, 0.0]])


def test_eclipse_factor_regimes() -> None:
    """Disjoint discs, total cover, annular and partial overlap."""

    assert eclipse_factor(1.0, 0.5, 2.0) == 1.0
    assert eclipse_factor(1.0, 1.1, 0.0) == 0.0
    assert eclipse_factor(1.0, 1.1, 0.05) == 0.0
    assert eclipse_factor(1.0, 0.5, 0.0) == pytest.approx(0.75)
    # Two equal unit discs one radius apart: lens area 2 pi / 3 - sqrt(3) / 2.
    lens = 2.0 * math.pi / 3.0 - math.sqrt(3.0) / 2.0
    assert eclipse_factor(1.0, 1.0, 1.0) == pytest.approx(1.0 - lens / math.pi)


def test_eclipse_factor_continuous_at_boundaries() -> None:
    """Partial-overlap formula meets the annular and disjoint regimes."""

    eps = 1e-9
    assert eclipse_factor(1.0, 0.5, 0.5 + eps) == pytest.approx(0.75, abs=1e-4)
    assert eclipse_factor(1.0, 0.5, 1.5 - eps) == pytest.approx(1.0, abs=1e-4)
    assert eclipse_factor(1.0, 2.0, 1.0 + eps) == pytest.approx(0.0, abs=1e-4)


def test_eclipse_factor_monotonic_in_range() -> None:
    """Illumination never decreases as the discs separate and stays in [0, 1]."""

    for occ_r in (0.3, 0.99, 1.0, 1.02, 3.0):
        previous = -1.0
        for sep in np.linspace(0.0, 5.0, 501):
            value = eclipse_factor(1.0, occ_r, float(sep))
            assert 0.0 <= value <= 1.0
            assert value >= previous - 1e-12
            previous = value


def test_sun_eclipse_factor_total(make_observer, monkeypatch: pytest.MonkeyPatch) -> None:
    """A Moon centred on the Sun and larger than it blocks the whole disc."""

    obs = make_observer()
    sun = _body('Sun', 10, 695508.0)
    moon = _body('Moon', MOON_ID, 1737.4)
    # Sun is along -x from this observer; at 0.0024 AU the Moon looks larger.
    monkeypatch.setattr(shadows, 'observed_state', lambda body, o: _pv(-0.0024))

    assert sun_eclipse_factor(sun, obs, [moon]) == 0.0
    assert sun_eclipse_factor(sun, obs, []) == 1.0


def test_sun_eclipse_factor_no_overlap(make_observer, monkeypatch: pytest.MonkeyPatch) -> None:
    """A Moon well away from the Sun leaves it fully visible."""

    obs = make_observer()
    sun = _body('Sun', 10, 695508.0)
    moon = _body('Moon', MOON_ID, 1737.4)
    monkeypatch.setattr(shadows, 'observed_state', lambda body, o: _pv(0.0, 0.0025))

    assert sun_eclipse_factor(sun, obs, [moon]) == 1.0


def test_allow_list() -> None:
    """Only Earth shadows the Moon; only Jupiter's system shadows itself."""

    earth = _body('Earth', EARTH_ID, 6371.0)
    moon = _body('Moon', MOON_ID, 1737.4)
    mars = _body('Mars', MARS_ID, 3389.5)
    venus = _body('Venus', VENUS_ID, 6051.8)
    io = _body('Io', IO_ID, 1821.6)

    assert not could_cast_shadow(mars, moon, None)
    assert not could_cast_shadow(moon, moon, None)
    assert not could_cast_shadow(earth, io, None)
    assert not could_cast_shadow(earth, venus, None)
    assert not shadows.may_receive_shadow(venus)
    assert shadows.may_receive_shadow(io)
    assert shadows.may_receive_shadow(_body('Jupiter', JUPITER_ID, 69911.0))


def test_earth_shadow_on_moon_geometry(monkeypatch: pytest.MonkeyPatch) -> None:
    """The Moon inside Earth's penumbra cone is shadowed; beside it or sunward it is not."""

    earth = _body('Earth', EARTH_ID, 6371.0)
    moon = _body('Moon', MOON_ID, 1737.4)
    positions = {'Earth': _pv(1.0)}
    monkeypatch.setattr(shadows, 'heliocentric_state', lambda body, o, tt=None: positions[body.name])

    positions['Moon'] = _pv(1.0025)
    assert could_cast_shadow(earth, moon, None)
    positions['Moon'] = _pv(1.0025, 0.01)
    assert not could_cast_shadow(earth, moon, None)
    positions['Moon'] = _pv(0.9975)
    assert not could_cast_shadow(earth, moon, None)


def test_insert_candidate_bounded_and_sorted() -> None:
    """The list keeps the largest spheres, biggest first, and ignores smaller ones when full."""

    spheres: list[ShadowSphere] = []
    origin = np.zeros(3)
    for radius in (2.0, 5.0, 1.0, 3.0):
        insert_candidate(spheres, ShadowSphere(origin, radius), 3)
    assert [s.radius for s in spheres] == [5.0, 3.0, 2.0]

    assert not insert_candidate(spheres, ShadowSphere(origin, 0.5), 3)
    assert [s.radius for s in spheres] == [5.0, 3.0, 2.0]
    assert insert_candidate(spheres, ShadowSphere(origin, 4.0), 3)
    assert [s.radius for s in spheres] == [5.0, 4.0, 3.0]
    assert not insert_candidate(spheres, ShadowSphere(origin, 9.0), 0)


def test_get_shadow_candidates(monkeypatch: pytest.MonkeyPatch) -> None:
    """Eligible casters come back biggest first, capped at max_count."""

    io = _body('Io', IO_ID, 1821.6)
    casters = [
        _body('Europa', EUROPA_ID, 1560.8),
        _body('Ganymede', GANYMEDE_ID, 2634.1),
        _body('Callisto', CALLISTO_ID, 2410.3),
        _body('Jupiter', JUPITER_ID, 69911.0),
        _body('Mars', MARS_ID, 3389.5),
    ]
    monkeypatch.setattr(
        shadows,
        'could_cast_shadow',
        lambda a, b, o: a is not b and IO_ID <= a.id <= JUPITER_ID,
    )
    monkeypatch.setattr(shadows, 'observed_state', lambda body, o: _pv(float(body.id)))

    spheres = get_shadow_candidates(io, [io, *casters], None, max_count=3)

    assert [s.name for s in spheres] == ['Jupiter', 'Ganymede', 'Callisto']
    assert spheres[0].radius == pytest.approx(69911e3 / DAU)
    assert spheres[0].position[0] == float(JUPITER_ID)
    assert get_shadow_candidates(_body('Mars', MARS_ID, 3389.5), casters, None) == []


def test_ring_shadow_candidates_include_planet(monkeypatch: pytest.MonkeyPatch) -> None:
    """A ringed planet's own body is added to the ring's shadow list."""

    saturn = _body('Saturn', SATURN_ID, 58232.0)
    monkeypatch.setattr(shadows, 'observed_state', lambda body, o: _pv(9.0))

    spheres = ring_shadow_candidates(saturn, [saturn], None)

    assert len(spheres) == 1
    assert spheres[0].name == 'Saturn'
    assert spheres[0].radius == pytest.approx(58232e3 / DAU)
