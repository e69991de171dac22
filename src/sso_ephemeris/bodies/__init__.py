"""Body records and the catalog that owns them."""

from sso_ephemeris.bodies.base import (
    Body,
    BodyCache,
    BodyKind,
    FullUpdate,
    ObservedUpdate,
    OrbitElements,
    RingGeometry,
    RotationElements,
    classify,
)
from sso_ephemeris.bodies.catalog import (
    Catalog,
    CatalogError,
    get_catalog,
    load_catalog,
    parse_catalog,
    parse_orbit,
)

__all__ = [
    'Body',
    'BodyCache',
    'BodyKind',
    'Catalog',
    'CatalogError',
    'FullUpdate',
    'ObservedUpdate',
    'OrbitElements',
    'RingGeometry',
    'RotationElements',
    'classify',
    'get_catalog',
    'load_catalog',
    'parse_catalog',
    'parse_orbit',
]
