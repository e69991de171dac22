"""Shared fixtures: a freshly loaded catalog and an observer at a fixed epoch."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest

from sso_ephemeris.bodies import Catalog, load_catalog
from sso_ephemeris.observer import ObserverState, observer_at

# 2023-02-25, a few days after new moon (no solar eclipse).
TT_2023 = 60000.0

ObserverFactory = Callable[..., ObserverState]


@pytest.fixture
def catalog() -> Catalog:
    """Bundled catalog with empty caches and a reproducible revalidation spread."""
    return load_catalog(seed=0)


@pytest.fixture
def obs() -> ObserverState:
    return observer_at(TT_2023)


@pytest.fixture
def make_observer() -> ObserverFactory:
    """Factory for observers with a hand-placed Earth and the Sun at the barycentre."""
    return _make_observer


def _make_observer(
    earth_pos: tuple[float, float, float] = (1.0, 0.0, 0.0),
    tt: float = TT_2023,
) -> ObserverState:
    earth_pvh = np.array([earth_pos, (0.0, 0.0, 0.0)], dtype=np.float64)
    return ObserverState(
        tt=tt,
        ut1=tt,
        earth_pvh=earth_pvh,
        sun_pvb=np.zeros((2, 3)),
        obs_pvb=earth_pvh,
    )
