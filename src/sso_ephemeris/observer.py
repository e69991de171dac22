"""Observer state: time, Earth/Sun/observer states, and the identity hash used as cache key."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from functools import cached_property

import erfa
import numpy as np

from sso_ephemeris.constants import DJM0
from sso_ephemeris.ephem.frames import ecliptic_matrix, pv_array
from sso_ephemeris.time_utils import tt_from_utc


def _frozen_pv(value: np.ndarray) -> np.ndarray:
    arr = np.array(value, dtype=np.float64).reshape(2, 3)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class ObserverState:
    """Read-only observer input for one frame.

    tt and ut1 are MJDs. earth_pvh is Earth's heliocentric state, sun_pvb
    and obs_pvb the barycentric states of the Sun and the observer (AU,
    AU/day, ICRF). hash changes whenever any field changes; two states
    are interchangeable for caching only if their hashes are equal.
    """

    tt: float
    ut1: float
    earth_pvh: np.ndarray
    sun_pvb: np.ndarray
    obs_pvb: np.ndarray
    hash: int = field(init=False)

    def __post_init__(self) -> None:
        for name in ('earth_pvh', 'sun_pvb', 'obs_pvb'):
            object.__setattr__(self, name, _frozen_pv(getattr(self, name)))
        digest = hashlib.blake2b(digest_size=8)
        digest.update(np.array([self.tt, self.ut1], dtype=np.float64).tobytes())
        for arr in (self.earth_pvh, self.sun_pvb, self.obs_pvb):
            digest.update(arr.tobytes())
        object.__setattr__(self, 'hash', int.from_bytes(digest.digest(), 'little'))

    @cached_property
    def sun_pvo(self) -> np.ndarray:
        """Observer-relative state of the Sun (geometric)."""
        return self.sun_pvb - self.obs_pvb

    @cached_property
    def ri2e(self) -> np.ndarray:
        """Rotation from ICRF to the ecliptic of date."""
        return ecliptic_matrix(self.tt)


def observer_at(
    tt: float,
    offset_pv: np.ndarray | None = None,
    ut1: float | None = None,
) -> ObserverState:
    """Build the observer state at Earth's centre (plus optional offset) at tt.

    Parameters:
        tt: TT Modified Julian Date.
        offset_pv: Optional geocentric (2, 3) observer offset in AU and AU/day.
        ut1: UT1 MJD; defaults to tt.

    Returns:
        ObserverState using the ERFA Earth ephemeris (epv00).
    """
    pvh_raw, pvb_raw = erfa.epv00(DJM0, tt)
    earth_pvh = pv_array(pvh_raw)
    earth_pvb = pv_array(pvb_raw)
    sun_pvb = earth_pvb - earth_pvh
    obs_pvb = earth_pvb.copy()
    if offset_pv is not None:
        obs_pvb = obs_pvb + np.asarray(offset_pv, dtype=np.float64).reshape(2, 3)
    return ObserverState(
        tt=tt,
        ut1=tt if ut1 is None else ut1,
        earth_pvh=earth_pvh,
        sun_pvb=sun_pvb,
        obs_pvb=obs_pvb,
    )


def observer_from_utc(utc: str, offset_pv: np.ndarray | None = None) -> ObserverState:
    """Build the observer state for a UTC date/time string.

    Raises:
        ValueError: If the string cannot be parsed.
    """
    tt, utc_mjd = tt_from_utc(utc)
    return observer_at(tt, offset_pv=offset_pv, ut1=utc_mjd)
