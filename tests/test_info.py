"""Tests for the per-body info accessor and render ordering."""

from __future__ import annotations

import math

import numpy as np
import pytest

from sso_ephemeris.ephem.light_time import observed_state
from sso_ephemeris.info import Info, get_info, sort_by_distance
from sso_ephemeris.photometry import angular_radius, get_phase, get_vmag


def test_get_info_dispatch(catalog, obs) -> None:
    """Each selector returns the matching quantity."""

    mars = catalog.get('mars')
    pvo4 = get_info(mars, obs, Info.PVO)

    assert pvo4.shape == (2, 4)
    assert np.array_equal(pvo4[:, :3], observed_state(mars, obs))
    assert get_info(mars, obs, Info.VMAG) == pytest.approx(get_vmag(mars, obs))
    assert get_info(mars, obs, Info.PHASE) == pytest.approx(get_phase(mars, obs))
    assert get_info(mars, obs, Info.RADIUS) == pytest.approx(angular_radius(mars, obs))


def test_get_info_sun_uses_catalog_moon(catalog, obs, monkeypatch: pytest.MonkeyPatch) -> None:
    """For the Sun's magnitude, the Moon among the given bodies is the occluder."""

    seen: list[list[str]] = []

    def _vmag(body, o, occluders=()):
        seen.append([b.name for b in occluders])
        return -26.7

    monkeypatch.setattr('sso_ephemeris.info.get_vmag', _vmag)
    get_info(catalog.sun, obs, Info.VMAG, catalog)

    assert seen == [['Moon']]


def test_get_info_phase_nan_for_sun(catalog, obs) -> None:
    """Undefined phase propagates as NaN."""

    assert math.isnan(get_info(catalog.sun, obs, Info.PHASE))


def test_sort_by_distance_farthest_first(catalog, obs) -> None:
    """Render order puts distant bodies before near ones."""

    bodies = [catalog.moon, catalog.get('neptune'), catalog.sun, catalog.get('jupiter')]
    ordered = sort_by_distance(bodies, obs)

    assert [b.name for b in ordered] == ['Neptune', 'Jupiter', 'Sun', 'Moon']


def test_get_info_sun_defaults_to_catalog_moon(
    catalog, obs, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Without a body list the Sun's magnitude still takes the catalog Moon as occluder."""

    seen: list[list[str]] = []

    def _vmag(body, o, occluders=()):
        seen.append([b.name for b in occluders])
        return -26.7

    monkeypatch.setattr('sso_ephemeris.info.get_vmag', _vmag)
    monkeypatch.setattr('sso_ephemeris.info.get_catalog', lambda: catalog)
    get_info(catalog.sun, obs, Info.VMAG)
    get_info(catalog.get('mars'), obs, Info.VMAG)

    assert seen == [['Moon'], []]
