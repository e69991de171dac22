"""Jovicentric positions of the Galilean moons from a truncated Lieske E5 theory.

Mean longitudes plus the leading periodic perturbations in longitude,
latitude and radius (Meeus, chapter 44, higher accuracy method). Positions
are placed in Jupiter's equatorial plane, counted from the ascending node of
that plane on the ecliptic, then rotated into ICRF with the IAU pole of
Jupiter.
"""

from __future__ import annotations

import math

import numpy as np

from sso_ephemeris.constants import AU_KM, DD2R, DJC, DJM00, JUPITER_RADIUS_KM, SECONDS_PER_DAY
from sso_ephemeris.ephem.frames import ecliptic_j2000_to_icrf

# Time origin of the theory: JDE 2443000.5 as an MJD.
_EPOCH_MJD = 43000.0

# Semi-major axes in Jupiter equatorial radii (Io, Europa, Ganymede, Callisto).
_SEMI_MAJOR_AXES = (5.90569, 9.39657, 14.98832, 26.36273)

# Half-width of the central difference used for velocity (60 s in days).
_VELOCITY_HALF_STEP = 60.0 / SECONDS_PER_DAY


def _sin_sum(terms: list[tuple[float, float]]) -> float:
    return sum(c * math.sin(a * DD2R) for c, a in terms)


def _cos_sum(terms: list[tuple[float, float]]) -> float:
    return sum(c * math.cos(a * DD2R) for c, a in terms)


def _jupiter_frame(tt: float) -> np.ndarray:
    """Rows: node of Jupiter's equator on the ecliptic, its quadrature, and the pole (ICRF)."""
    t = (tt - DJM00) / DJC
    ra = (268.056595 - 0.006499 * t) * DD2R
    de = (64.495303 + 0.002413 * t) * DD2R
    pole = np.array([math.cos(de) * math.cos(ra), math.cos(de) * math.sin(ra), math.sin(de)])
    ecl_pole = ecliptic_j2000_to_icrf(np.array([0.0, 0.0, 1.0]))
    node = np.cross(ecl_pole, pole)
    node /= np.linalg.norm(node)
    quad = np.cross(pole, node)
    return np.array([node, quad, pole], dtype=np.float64)


def galilean_coordinates(tt: float, sat: int) -> tuple[float, float, float]:
    """Longitude from the equator node, latitude, and radius of a Galilean moon.

    Parameters:
        tt: TT Modified Julian Date.
        sat: 1=Io, 2=Europa, 3=Ganymede, 4=Callisto.

    Returns:
        (longitude rad, latitude rad, radius in Jupiter radii) in Jupiter's
        equatorial plane.

    Raises:
        ValueError: If sat is outside 1..4.
    """
    if not 1 <= sat <= 4:
        raise ValueError(f'Galilean satellite index must be in 1..4, got {sat}')
    t = tt - _EPOCH_MJD

    l1 = 106.07719 + 203.488955790 * t
    l2 = 175.73161 + 101.374724735 * t
    l3 = 120.55883 + 50.317609207 * t
    l4 = 84.44459 + 21.571071177 * t
    p1 = 97.0881 + 0.16138586 * t
    p2 = 154.8663 + 0.04726307 * t
    p3 = 188.1840 + 0.00712734 * t
    p4 = 335.2868 + 0.00184000 * t
    w1 = 312.3346 - 0.13279386 * t
    w2 = 100.4411 - 0.03263064 * t
    w3 = 119.1942 - 0.00717703 * t
    w4 = 322.6186 - 0.00175934 * t
    gamma = 0.33033 * math.sin((163.679 + 0.0010512 * t) * DD2R) + 0.03439 * math.sin(
        (34.486 - 0.0161731 * t) * DD2R
    )
    phi = 199.6766 + 0.17379190 * t
    psi = 316.5182 - 0.00000208 * t
    g = 30.23756 + 0.0830925701 * t + gamma
    gs = 31.97853 + 0.0334597339 * t
    pi_j = 13.469942

    if sat == 1:
        sigma = _sin_sum(
            [
                (0.47259, 2 * (l1 - l2)),
                (-0.03478, p3 - p4),
                (0.01081, l2 - 2 * l3 + p3),
                (0.00738, phi),
                (0.00713, l2 - 2 * l3 + p2),
                (-0.00674, p1 + p3 - 2 * pi_j - 2 * g),
                (0.00666, l2 - 2 * l3 + p4),
                (0.00445, l1 - p3),
                (-0.00354, l1 - l2),
                (-0.00317, 2 * psi - 2 * pi_j),
                (0.00265, l1 - p4),
                (-0.00186, g),
                (0.00162, p2 - p3),
                (0.00158, 4 * (l1 - l2)),
                (-0.00155, l1 - l3),
                (-0.00138, psi + w3 - 2 * pi_j - 2 * g),
                (-0.00115, 2 * (l1 - 2 * l2 + w2)),
                (0.00089, p2 - p4),
                (0.00085, l1 + p3 - 2 * pi_j - 2 * g),
                (0.00083, w2 - w3),
                (0.00053, psi - w2),
            ]
        )
        lon = l1 + sigma
        tan_b = _sin_sum(
            [
                (0.0006393, lon - w1),
                (0.0001825, lon - w2),
                (0.0000329, lon - w3),
                (-0.0000311, lon - psi),
                (0.0000093, lon - w4),
                (0.0000075, 3 * lon - 4 * l2 - 1.9927 * sigma + w2),
                (0.0000046, lon + psi - 2 * pi_j - 2 * g),
            ]
        )
        dr = _cos_sum(
            [
                (-0.0041339, 2 * (l1 - l2)),
                (-0.0000387, l1 - p3),
                (-0.0000214, l1 - p4),
                (0.0000170, l1 - l2),
                (-0.0000131, 4 * (l1 - l2)),
                (0.0000106, l1 - l3),
                (-0.0000066, l1 + p3 - 2 * pi_j - 2 * g),
            ]
        )
    elif sat == 2:
        sigma = _sin_sum(
            [
                (1.06476, 2 * (l2 - l3)),
                (0.04256, l1 - 2 * l2 + p3),
                (0.03581, l2 - p3),
                (0.02395, l1 - 2 * l2 + p4),
                (0.01984, l2 - p4),
                (-0.01778, phi),
                (0.01654, l2 - p2),
                (0.01334, l2 - 2 * l3 + p2),
                (0.01294, p3 - p4),
                (-0.01142, l2 - l3),
                (-0.01057, g),
                (-0.00775, 2 * (psi - pi_j)),
                (0.00524, 2 * (l1 - l2)),
                (-0.00460, l1 - l3),
                (0.00316, psi - 2 * g + w3 - 2 * pi_j),
                (-0.00203, p1 + p3 - 2 * pi_j - 2 * g),
                (0.00146, psi - w3),
                (-0.00145, 2 * g),
                (0.00125, psi - w4),
                (-0.00115, l1 - 2 * l3 + p3),
                (-0.00094, 2 * (l2 - w2)),
                (0.00086, 2 * (l1 - 2 * l2 + w2)),
                (-0.00086, 5 * gs - 2 * g + 52.225),
                (-0.00078, l2 - l4),
                (-0.00064, 3 * l3 - 7 * l4 + 4 * p4),
                (0.00064, p1 - p4),
                (-0.00063, l1 - 2 * l3 + p4),
                (0.00058, w3 - w4),
                (0.00056, 2 * (psi - pi_j - g)),
                (0.00056, 2 * (l2 - l4)),
                (0.00055, 2 * (l1 - l3)),
            ]
        )
        lon = l2 + sigma
        tan_b = _sin_sum(
            [
                (0.0081004, lon - w2),
                (0.0004512, lon - w3),
                (-0.0003284, lon - psi),
                (0.0001160, lon - w4),
                (0.0000272, l1 - 2 * l3 + 1.0146 * sigma + w2),
                (-0.0000144, lon - w1),
                (0.0000143, lon + psi - 2 * pi_j - 2 * g),
                (0.0000035, lon - psi + g),
                (-0.0000028, l1 - 2 * l3 + 1.0146 * sigma + w3),
            ]
        )
        dr = _cos_sum(
            [
                (0.0093848, l1 - l2),
                (-0.0003116, l2 - p3),
                (-0.0001744, l2 - p4),
                (-0.0001442, l2 - p2),
                (0.0000553, l2 - l3),
                (0.0000523, l1 - l3),
                (-0.0000290, 2 * (l1 - l2)),
                (0.0000164, 2 * (l2 - w2)),
                (0.0000107, l1 - 2 * l3 + p3),
                (-0.0000102, l2 - p1),
                (-0.0000091, 2 * (l1 - l3)),
            ]
        )
    elif sat == 3:
        sigma = _sin_sum(
            [
                (0.16490, l3 - p3),
                (0.09081, l3 - p4),
                (-0.06907, l2 - l3),
                (0.03784, p3 - p4),
                (0.01846, 2 * (l3 - l4)),
                (-0.01340, g),
                (-0.01014, 2 * (psi - pi_j)),
                (0.00704, l2 - 2 * l3 + p3),
                (-0.00620, l2 - 2 * l3 + p2),
                (-0.00541, l3 - l4),
                (0.00381, l2 - 2 * l3 + p4),
                (0.00235, psi - w3),
                (0.00198, psi - w4),
                (0.00176, phi),
                (0.00130, 3 * (l3 - l4)),
                (0.00125, l1 - l3),
                (-0.00119, 5 * gs - 2 * g + 52.225),
                (0.00109, l1 - l2),
                (-0.00100, 3 * l3 - 7 * l4 + 4 * p4),
                (0.00091, w3 - w4),
                (0.00080, 3 * l3 - 7 * l4 + p3 + 3 * p4),
                (-0.00075, 2 * l2 - 3 * l3 + p3),
                (0.00072, p1 + p3 - 2 * pi_j - 2 * g),
                (0.00069, p4 - pi_j),
                (-0.00058, 2 * l3 - 3 * l4 + p4),
                (-0.00057, l3 - 2 * l4 + p4),
                (0.00056, l3 + p3 - 2 * pi_j - 2 * g),
                (-0.00052, l2 - 2 * l3 + p1),
                (-0.00050, p2 - p3),
                (0.00048, l3 - 2 * l4 + p3),
            ]
        )
        lon = l3 + sigma
        tan_b = _sin_sum(
            [
                (0.0032402, lon - w3),
                (-0.0016911, lon - psi),
                (0.0006847, lon - w4),
                (-0.0002797, lon - w2),
                (0.0000321, lon + psi - 2 * pi_j - 2 * g),
                (0.0000051, lon - psi + g),
                (-0.0000045, lon - psi - g),
                (-0.0000045, lon + psi - 2 * pi_j),
                (0.0000037, lon + psi - 2 * pi_j - 3 * g),
                (0.0000030, 2 * l2 - 3 * lon + 4.03 * sigma + w2),
                (-0.0000021, 2 * l2 - 3 * lon + 4.03 * sigma + w3),
            ]
        )
        dr = _cos_sum(
            [
                (-0.0014388, l3 - p3),
                (-0.0007919, l3 - p4),
                (0.0006342, l2 - l3),
                (-0.0001761, 2 * (l3 - l4)),
                (0.0000294, l3 - l4),
                (-0.0000156, 3 * (l3 - l4)),
                (0.0000156, l1 - l3),
                (-0.0000153, l1 - l2),
                (0.0000070, 2 * l2 - 3 * l3 + p3),
                (-0.0000051, l3 + p3 - 2 * pi_j - 2 * g),
            ]
        )
    else:
        sigma = _sin_sum(
            [
                (0.84287, l4 - p4),
                (0.03431, p4 - p3),
                (-0.03305, 2 * (psi - pi_j)),
                (-0.03211, g),
                (-0.01862, l4 - p3),
                (0.01186, psi - w4),
                (0.00623, l4 + p4 - 2 * g - 2 * pi_j),
                (0.00387, 2 * (l4 - p4)),
                (-0.00284, 5 * gs - 2 * g + 52.225),
                (-0.00234, 2 * (psi - p4)),
                (-0.00223, l3 - l4),
                (-0.00208, l4 - pi_j),
                (0.00178, psi + w4 - 2 * p4),
                (0.00134, p4 - pi_j),
                (0.00125, 2 * (l4 - g - pi_j)),
                (-0.00117, 2 * g),
                (-0.00112, 2 * (l3 - l4)),
                (0.00107, 3 * l3 - 7 * l4 + 4 * p4),
                (0.00102, l4 - g - pi_j),
                (0.00096, 2 * l4 - psi - w4),
                (0.00087, 2 * (psi - w4)),
                (-0.00085, 3 * l3 - 7 * l4 + p3 + 3 * p4),
                (0.00085, l3 - 2 * l4 + p4),
                (-0.00081, 2 * (l4 - psi)),
                (0.00071, l4 + p4 - 2 * pi_j - 3 * g),
                (0.00061, l1 - l4),
                (-0.00056, psi - w3),
                (-0.00054, l3 - 2 * l4 + p3),
                (0.00051, l2 - l4),
                (0.00042, 2 * (psi - g - pi_j)),
                (0.00039, 2 * (p4 - w4)),
                (0.00036, psi + pi_j - p4 - w4),
                (0.00035, 2 * gs - g + 188.37),
                (-0.00035, l4 - p4 + 2 * pi_j - 2 * psi),
                (-0.00032, l4 + p4 - 2 * pi_j - g),
                (0.00030, 2 * gs - 2 * g + 149.15),
            ]
        )
        lon = l4 + sigma
        tan_b = _sin_sum(
            [
                (-0.0076579, lon - psi),
                (0.0044134, lon - w4),
                (-0.0005112, lon - w3),
                (0.0000773, lon + psi - 2 * pi_j - 2 * g),
                (0.0000104, lon - psi + g),
                (-0.0000102, lon - psi - g),
                (0.0000088, lon + psi - 2 * pi_j - 3 * g),
                (-0.0000038, lon + psi - 2 * pi_j - g),
            ]
        )
        dr = _cos_sum(
            [
                (-0.0073546, l4 - p4),
                (0.0001621, l4 - p3),
                (0.0000974, l3 - l4),
                (-0.0000543, l4 + p4 - 2 * pi_j - 2 * g),
                (-0.0000271, 2 * (l4 - p4)),
                (0.0000182, l4 - pi_j),
                (0.0000177, 2 * (l3 - l4)),
                (-0.0000167, 2 * l4 - psi - w4),
                (0.0000167, psi - w4),
                (-0.0000155, 2 * (l4 - pi_j - g)),
                (0.0000142, 2 * (l4 - psi)),
                (0.0000105, l1 - l4),
                (0.0000092, l2 - l4),
                (-0.0000089, l4 - pi_j - g),
                (-0.0000062, l4 + p4 - 2 * pi_j - 3 * g),
                (0.0000048, 2 * (l4 - w4)),
            ]
        )

    radius = _SEMI_MAJOR_AXES[sat - 1] * (1.0 + dr)
    return (math.fmod(lon - psi, 360.0) * DD2R, math.atan(tan_b), radius)


def galilean_offset_pos(tt: float, sat: int) -> np.ndarray:
    """Jovicentric J2000 equatorial position of a Galilean moon (AU)."""
    lon, lat, radius = galilean_coordinates(tt, sat)
    r_au = radius * JUPITER_RADIUS_KM / AU_KM
    local = np.array(
        [
            r_au * math.cos(lat) * math.cos(lon),
            r_au * math.cos(lat) * math.sin(lon),
            r_au * math.sin(lat),
        ],
        dtype=np.float64,
    )
    return _jupiter_frame(tt).T @ local


def galilean_offset_pv(tt: float, sat: int) -> np.ndarray:
    """Jovicentric state of a Galilean moon (AU, AU/day)."""
    pos = galilean_offset_pos(tt, sat)
    ahead = galilean_offset_pos(tt + _VELOCITY_HALF_STEP, sat)
    behind = galilean_offset_pos(tt - _VELOCITY_HALF_STEP, sat)
    vel = (ahead - behind) / (2.0 * _VELOCITY_HALF_STEP)
    return np.array([pos, vel], dtype=np.float64)
