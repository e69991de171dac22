"""Position solver, light-time correction, and orbit extraction."""

from sso_ephemeris.ephem.light_time import observed_state, observed_state4
from sso_ephemeris.ephem.orbits import compute_orbit_elements
from sso_ephemeris.ephem.solver import heliocentric_state

__all__ = [
    'compute_orbit_elements',
    'heliocentric_state',
    'observed_state',
    'observed_state4',
]
