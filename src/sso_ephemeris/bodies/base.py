"""Body record dataclasses: physical constants, elements, and per-body caches."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

from sso_ephemeris.constants import (
    DJM00,
    EARTH_ID,
    GALILEAN_MOON_IDS,
    IO_ID,
    MAJOR_PLANET_IDS,
    MERCURY_ID,
    MOON_ID,
    SECONDS_PER_DAY,
    SUN_ID,
)


class BodyKind(enum.Enum):
    """Position/photometry algorithm family of a body."""

    SUN = 'sun'
    EARTH = 'earth'
    MOON = 'moon'
    MAJOR_PLANET = 'major_planet'
    GIANT_MOON = 'giant_moon'
    GENERIC = 'generic'


def classify(body_id: int) -> tuple[BodyKind, int]:
    """Return (kind, index) for a HORIZONS body id.

    index is the planet number (1=Mercury .. 8=Neptune) for major planets,
    the satellite number (1=Io .. 4=Callisto) for Galilean moons, else 0.
    """
    if body_id == SUN_ID:
        return (BodyKind.SUN, 0)
    if body_id == EARTH_ID:
        return (BodyKind.EARTH, 3)
    if body_id == MOON_ID:
        return (BodyKind.MOON, 0)
    if body_id in MAJOR_PLANET_IDS:
        return (BodyKind.MAJOR_PLANET, (body_id - MERCURY_ID) // 100 + 1)
    if body_id in GALILEAN_MOON_IDS:
        return (BodyKind.GIANT_MOON, body_id - IO_ID + 1)
    return (BodyKind.GENERIC, 0)


@dataclass
class OrbitElements:
    """Keplerian elements in the ICRF plane, relative to the parent body."""

    mjd: float = 0.0  # epoch (MJD, TT)
    inclination: float = 0.0  # rad
    node: float = 0.0  # longitude of ascending node (rad)
    perihelion: float = 0.0  # argument of perihelion (rad)
    semi_major_axis: float = 0.0  # AU
    mean_motion: float = 0.0  # rad/day
    eccentricity: float = 0.0
    mean_anomaly: float = 0.0  # rad

    def is_set(self) -> bool:
        """True once an epoch and semi-major axis have been configured."""
        return self.mjd != 0.0 and self.semi_major_axis != 0.0


@dataclass
class RotationElements:
    """Spin model: obliquity or pole direction, period, and offset."""

    obliquity: float = 0.0  # rad
    period: float = 0.0  # days
    offset: float = 0.0  # rad
    pole_ra: float = 0.0  # rad
    pole_de: float = 0.0  # rad


@dataclass
class RingGeometry:
    """Ring extent (m); zero outer radius means no rings."""

    inner_radius: float = 0.0
    outer_radius: float = 0.0

    def __bool__(self) -> bool:
        return self.outer_radius > 0.0


class FullUpdate(NamedTuple):
    """Heliocentric state solved at tt (TT MJD)."""

    tt: float
    pvh: np.ndarray


class ObservedUpdate(NamedTuple):
    """Light-time corrected observer-relative state and the observer hash it belongs to."""

    obs_hash: int
    pvo: np.ndarray


@dataclass
class BodyCache:
    """Per-body cache slots.

    Each slot is replaced whole by a single assignment, so a reader never sees
    a partially written entry.
    """

    full: FullUpdate | None = None
    observed: ObservedUpdate | None = None

    def full_valid(self, tt: float, update_delta_s: float) -> bool:
        """True if the full-update slot may be extrapolated to tt."""
        if self.full is None:
            return False
        return abs(tt - self.full.tt) < update_delta_s / SECONDS_PER_DAY

    def observed_valid(self, obs_hash: int) -> bool:
        """True only for the exact observer identity the slot was computed for."""
        return self.observed is not None and self.observed.obs_hash == obs_hash

    def clear(self) -> None:
        self.full = None
        self.observed = None


@dataclass(eq=False)
class Body:
    """A Solar System body: identity, physical data, elements, and cached state.

    parent is a non-owning back-reference used only to resolve positions;
    the owning container is the catalog.
    """

    name: str
    id: int = 0
    type: str = ''
    parent: Body | None = None
    radius_m: float = 0.0
    albedo: float = 0.0
    color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    shadow_brightness: float = 0.0
    mass: float = 0.0  # kg, 0 if unknown
    rot: RotationElements = field(default_factory=RotationElements)
    orbit: OrbitElements = field(default_factory=OrbitElements)
    rings: RingGeometry = field(default_factory=RingGeometry)
    update_delta_s: float = 1.0
    cache: BodyCache = field(default_factory=BodyCache)

    @property
    def kind(self) -> BodyKind:
        return classify(self.id)[0]

    @property
    def kind_index(self) -> int:
        return classify(self.id)[1]

    def rotation_angle(self, tt: float) -> float:
        """Spin angle about the body axis at tt (TT MJD), radians."""
        if not self.rot.period:
            return 0.0
        return (tt - DJM00) / self.rot.period * 2.0 * math.pi + self.rot.offset

    def __repr__(self) -> str:
        parent = self.parent.name if self.parent is not None else None
        return f'Body(name={self.name!r}, id={self.id}, parent={parent!r})'
