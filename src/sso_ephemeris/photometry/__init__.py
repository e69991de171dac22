"""Photometry: magnitudes, phase, angular size, and ring brightening."""

from sso_ephemeris.photometry.magnitude import (
    VIS_ELEMENTS,
    angular_radius,
    generic_vmag,
    get_phase,
    get_vmag,
    moon_vmag,
    planet_vmag,
    sun_vmag,
)
from sso_ephemeris.photometry.rings import ring_tilt, rings_vmag

__all__ = [
    'VIS_ELEMENTS',
    'angular_radius',
    'generic_vmag',
    'get_phase',
    'get_vmag',
    'moon_vmag',
    'planet_vmag',
    'ring_tilt',
    'rings_vmag',
    'sun_vmag',
]
