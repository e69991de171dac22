"""Tests for light-time corrected observed states and the observer-keyed cache."""

from __future__ import annotations

import numpy as np
import pytest

from sso_ephemeris.constants import SECONDS_PER_DAY
from sso_ephemeris.ephem import light_time
from sso_ephemeris.ephem.light_time import light_time_days, observed_state, observed_state4
from sso_ephemeris.ephem.planets import planet_pvh
from sso_ephemeris.observer import observer_at


def test_light_time_of_one_au() -> None:
    """Light crosses 1 AU in about 499 seconds."""

    assert light_time_days(1.0) * SECONDS_PER_DAY == pytest.approx(499.005, abs=1e-3)


def test_observed_cache_hit_skips_solver(catalog, obs, monkeypatch: pytest.MonkeyPatch) -> None:
    """A second query with the same observer identity does not touch the solver."""

    calls: list[float | None] = []
    original = light_time.heliocentric_state

    def _counting(body, o, tt=None):
        calls.append(tt)
        return original(body, o, tt)

    monkeypatch.setattr(light_time, 'heliocentric_state', _counting)
    jupiter = catalog.get('jupiter')
    first = observed_state(jupiter, obs)
    n_first = len(calls)
    second = observed_state(jupiter, obs)

    assert n_first == 2
    assert len(calls) == n_first
    assert np.array_equal(first, second)


def test_new_observer_identity_recomputes(catalog, obs, monkeypatch: pytest.MonkeyPatch) -> None:
    """A different observer state invalidates the observed cache slot."""

    jupiter = catalog.get('jupiter')
    observed_state(jupiter, obs)
    other = observer_at(obs.tt + 1.0)
    assert other.hash != obs.hash

    calls: list[float | None] = []
    original = light_time.heliocentric_state

    def _counting(body, o, tt=None):
        calls.append(tt)
        return original(body, o, tt)

    monkeypatch.setattr(light_time, 'heliocentric_state', _counting)
    observed_state(jupiter, other)

    assert len(calls) == 2
    assert jupiter.cache.observed is not None
    assert jupiter.cache.observed.obs_hash == other.hash


def test_cache_returns_copies(catalog, obs) -> None:
    """Mutating a returned state does not corrupt the cached one."""

    mars = catalog.get('mars')
    first = observed_state(mars, obs)
    first[0, 0] += 1.0
    second = observed_state(mars, obs)

    assert second[0, 0] == pytest.approx(first[0, 0] - 1.0)


def test_retarded_time_solve(catalog, obs) -> None:
    """The corrected state is the body at tt minus the light travel time."""

    jupiter = catalog.get('jupiter')
    geometric = observed_state(jupiter, obs, light_time=False)
    corrected = observed_state(jupiter, obs)
    ldt = light_time_days(float(np.linalg.norm(geometric[0])))

    # Jupiter is 4 to 6.5 AU away: 33 to 54 minutes of light time.
    assert 0.02 < ldt < 0.04
    shift = corrected[0] - geometric[0]
    expected = planet_pvh(obs.tt - ldt, 5)[0] - planet_pvh(obs.tt, 5)[0]
    assert np.allclose(shift, expected, rtol=0.0, atol=1e-12)
    assert np.linalg.norm(shift) > 1e-4


def test_geometric_state_is_not_cached(catalog, obs) -> None:
    """Only the light-time corrected path fills the observed cache."""

    saturn = catalog.get('saturn')
    observed_state(saturn, obs, light_time=False)
    assert saturn.cache.observed is None


def test_homogeneous_state(catalog, obs) -> None:
    """The 4-vector variant appends w = 1 to position and velocity."""

    mars = catalog.get('mars')
    pvo4 = observed_state4(mars, obs)

    assert pvo4.shape == (2, 4)
    assert np.array_equal(pvo4[:, 3], [1.0, 1.0])
    assert np.array_equal(pvo4[:, :3], observed_state(mars, obs))


def test_sun_observed_from_earth(catalog, obs) -> None:
    """The Sun appears opposite Earth's heliocentric position."""

    pvo = observed_state(catalog.sun, obs, light_time=False)
    assert np.allclose(pvo[0], -obs.earth_pvh[0], atol=1e-12)
