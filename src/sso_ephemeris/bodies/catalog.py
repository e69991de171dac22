"""Body catalog: load bodies from the planets INI file and link the hierarchy."""

from __future__ import annotations

import configparser
import logging
import math
import random
import re
from collections.abc import Iterator
from pathlib import Path

from sso_ephemeris.bodies.base import Body, OrbitElements
from sso_ephemeris.config import get_catalog_path
from sso_ephemeris.constants import (
    DAU,
    DD2R,
    DJM0,
    DJM00,
    EARTH_ID,
    MOON_ID,
    SECONDS_PER_DAY,
    SUN_ID,
    UPDATE_DELTA_MIN_S,
    UPDATE_DELTA_SPREAD_S,
)

logger = logging.getLogger(__name__)

# Orbit epochs further than this from J2000 are assumed to be JD typos.
_MAX_EPOCH_OFFSET_DAYS = 365.25 * 100

_ORBIT_RE = re.compile(r'^horizons:\s*([^,]+),\s*A\.D\.\s+\S+\s+\S+\s*(.*)$')
_NUMBER_UNIT_RE = re.compile(r'^\s*([-+0-9.eE]+)\s*([A-Za-z]*)\s*$')


class CatalogError(ValueError):
    """Fatal configuration integrity fault (missing parent, cycle, missing Sun/Earth)."""


class Catalog:
    """Ordered container owning all bodies; parents are back-references into it."""

    def __init__(self, bodies: list[Body]) -> None:
        self._bodies = list(bodies)
        self._by_name = {b.name.lower(): b for b in self._bodies}
        self._by_id = {b.id: b for b in self._bodies}

    def __iter__(self) -> Iterator[Body]:
        return iter(self._bodies)

    def __len__(self) -> int:
        return len(self._bodies)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_name

    def get(self, name: str) -> Body:
        """Return body by case-insensitive name.

        Raises:
            ValueError: If no body has that name.
        """
        body = self._by_name.get(name.strip().lower())
        if body is None:
            raise ValueError(
                f'Unknown body {name!r}; available: {", ".join(sorted(self._by_name))}'
            )
        return body

    def by_id(self, body_id: int) -> Body | None:
        return self._by_id.get(body_id)

    @property
    def sun(self) -> Body:
        return self._by_id[SUN_ID]

    @property
    def earth(self) -> Body:
        return self._by_id[EARTH_ID]

    @property
    def moon(self) -> Body | None:
        return self._by_id.get(MOON_ID)

    def names(self) -> list[str]:
        return [b.name for b in self._bodies]

    def clear_caches(self) -> None:
        for body in self._bodies:
            body.cache.clear()


def _parse_number(value: str, units: dict[str, float], default_unit: str = '') -> float:
    """Parse '<number> [unit]' and scale by the unit factor.

    Raises:
        ValueError: On malformed number or unknown unit.
    """
    m = _NUMBER_UNIT_RE.match(value)
    if m is None:
        raise ValueError(f'malformed number {value!r}')
    unit = m.group(2) or default_unit
    if unit not in units:
        raise ValueError(f'unknown unit {unit!r} in {value!r}')
    return float(m.group(1)) * units[unit]


def parse_orbit(value: str) -> OrbitElements:
    """Parse a HORIZONS osculating-elements line into OrbitElements.

    Parameters:
        value: 'horizons:JD, A.D. date time, EC, QR, IN, OM, W, Tp, N, MA, TA, A, AD, PR'
            with distances in km and mean motion in deg/s.

    Returns:
        OrbitElements with epoch in MJD, angles in radians, a in AU and n in rad/day.

    Raises:
        ValueError: If the line does not have the 13 expected numbers or the
            epoch is not a plausible Julian Date.
    """
    m = _ORBIT_RE.match(value.strip())
    if m is None:
        raise ValueError(f'Cannot parse orbit line {value!r}')
    fields = [f.strip() for f in m.group(2).split(',') if f.strip()]
    if len(fields) != 12:
        raise ValueError(f'Cannot parse orbit line {value!r}: expected 12 elements, got {len(fields)}')
    jd = float(m.group(1))
    ec, _qr, inc, om, w, _tp, n, ma, _ta, a, _ad, _pr = (float(f) for f in fields)
    mjd = jd - DJM0
    if abs(mjd - DJM00) >= _MAX_EPOCH_OFFSET_DAYS:
        raise ValueError(f'Orbit epoch {jd} is not a Julian Date near J2000')
    return OrbitElements(
        mjd=mjd,
        inclination=inc * DD2R,
        node=om * DD2R,
        perihelion=w * DD2R,
        semi_major_axis=a * 1000.0 / DAU,
        mean_motion=n * DD2R * SECONDS_PER_DAY,
        eccentricity=ec,
        mean_anomaly=ma * DD2R,
    )


def _parse_color(value: str) -> tuple[float, float, float, float]:
    parts = [float(p) for p in value.split(',')]
    if len(parts) != 3:
        raise ValueError(f'expected 3 color components, got {len(parts)}')
    return (parts[0], parts[1], parts[2], 1.0)


def _apply_attribute(body: Body, attr: str, value: str) -> None:
    """Set one non-essential attribute on body.

    Raises:
        ValueError: If the value is malformed.
    """
    if attr == 'type':
        body.type = value.strip()[:4]
    elif attr == 'radius':
        body.radius_m = _parse_number(value, {'km': 1000.0, 'm': 1.0}, 'km')
    elif attr == 'color':
        body.color = _parse_color(value)
    elif attr == 'albedo':
        body.albedo = _parse_number(value, {'': 1.0})
    elif attr == 'shadow_brightness':
        body.shadow_brightness = _parse_number(value, {'': 1.0})
    elif attr == 'mass':
        body.mass = _parse_number(value, {'kg': 1.0}, 'kg')
    elif attr == 'rot_obliquity':
        body.rot.obliquity = _parse_number(value, {'deg': DD2R}, 'deg')
    elif attr == 'rot_period':
        body.rot.period = _parse_number(value, {'d': 1.0, 'h': 1.0 / 24.0}, 'd')
    elif attr == 'rot_offset':
        body.rot.offset = _parse_number(value, {'': DD2R, 'deg': DD2R})
    elif attr == 'rot_pole_ra':
        body.rot.pole_ra = _parse_number(value, {'': DD2R, 'deg': DD2R})
    elif attr == 'rot_pole_de':
        body.rot.pole_de = _parse_number(value, {'': DD2R, 'deg': DD2R})
    elif attr == 'rings_inner_radius':
        body.rings.inner_radius = _parse_number(value, {'km': 1000.0, 'm': 1.0}, 'km')
    elif attr == 'rings_outer_radius':
        body.rings.outer_radius = _parse_number(value, {'km': 1000.0, 'm': 1.0}, 'km')
    elif attr == 'orbit':
        body.orbit = parse_orbit(value)
    else:
        logger.debug('Ignoring unknown planet attribute %s', attr)


def _check_hierarchy(bodies: list[Body]) -> None:
    """Reject missing Sun/Earth, orphan bodies, and parent cycles.

    Raises:
        CatalogError: On any integrity fault.
    """
    ids = {b.id for b in bodies}
    for required, name in ((SUN_ID, 'Sun'), (EARTH_ID, 'Earth')):
        if required not in ids:
            raise CatalogError(f'Catalog has no {name} (horizons_id {required})')
    for body in bodies:
        if body.id == SUN_ID:
            if body.parent is not None:
                raise CatalogError('The Sun cannot have a parent')
            continue
        if body.parent is None:
            raise CatalogError(f'Body {body.name!r} has no parent')
        seen = {id(body)}
        p: Body | None = body.parent
        while p is not None:
            if id(p) in seen:
                raise CatalogError(f'Parent cycle detected at body {body.name!r}')
            seen.add(id(p))
            p = p.parent


def parse_catalog(text: str, seed: int | None = None) -> Catalog:
    """Build a Catalog from planets INI text.

    Malformed non-essential attributes are logged and skipped. A missing or
    malformed horizons_id or parent link is fatal.

    Parameters:
        text: INI content, one section per body.
        seed: Optional seed for the revalidation interval spread.

    Returns:
        Linked and validated Catalog.

    Raises:
        CatalogError: On integrity faults.
    """
    parser = configparser.ConfigParser(delimiters=('=',), interpolation=None)
    try:
        parser.read_string(text)
    except configparser.Error as e:
        raise CatalogError(f'Cannot parse catalog: {e}') from e
    rng = random.Random(seed)
    bodies: list[Body] = []
    parents: dict[str, str] = {}
    seen_ids: set[int] = set()
    for section in parser.sections():
        attrs = parser[section]
        raw_id = attrs.get('horizons_id')
        try:
            body_id = int(raw_id) if raw_id is not None else None
        except ValueError:
            body_id = None
        if body_id is None:
            raise CatalogError(f'[{section}] missing or malformed horizons_id: {raw_id!r}')
        if body_id in seen_ids:
            raise CatalogError(f'[{section}] duplicate horizons_id {body_id}')
        seen_ids.add(body_id)
        body = Body(
            name=section[:1].upper() + section[1:],
            id=body_id,
            update_delta_s=UPDATE_DELTA_MIN_S + UPDATE_DELTA_SPREAD_S * rng.random(),
        )
        for attr, value in attrs.items():
            if attr == 'horizons_id':
                continue
            if attr == 'parent':
                parents[body.name] = value.strip()
                continue
            try:
                _apply_attribute(body, attr, value)
            except ValueError as e:
                logger.warning('Cannot parse planet attribute: [%s] %s = %s (%s)', section, attr, value, e)
        bodies.append(body)

    by_name = {b.name.lower(): b for b in bodies}
    for body in bodies:
        parent_name = parents.get(body.name)
        if parent_name is None:
            continue
        parent = by_name.get(parent_name.lower())
        if parent is None:
            raise CatalogError(f'Body {body.name!r} has unknown parent {parent_name!r}')
        body.parent = parent
    _check_hierarchy(bodies)
    for body in bodies:
        if not math.isfinite(body.radius_m) or body.radius_m < 0:
            logger.warning('Body %s has invalid radius %r; using 0', body.name, body.radius_m)
            body.radius_m = 0.0
    logger.debug('Loaded %d bodies', len(bodies))
    return Catalog(bodies)


def load_catalog(path: str | Path | None = None, seed: int | None = None) -> Catalog:
    """Load a Catalog from an INI file (default: SSO_CATALOG_PATH or bundled catalog).

    Raises:
        CatalogError: If the file is missing or fails integrity checks.
    """
    p = Path(path) if path is not None else Path(get_catalog_path())
    try:
        text = p.read_text(encoding='utf-8')
    except OSError as e:
        raise CatalogError(f'Cannot read catalog {p}: {e}') from e
    return parse_catalog(text, seed=seed)


_catalog: Catalog | None = None


def get_catalog() -> Catalog:
    """Return the process-wide default Catalog, loading it on first use."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog
