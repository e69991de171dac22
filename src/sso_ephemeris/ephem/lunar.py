"""Geocentric lunar position from a truncated ELP-2000/82 series (Meeus, chapter 47).

Longitude and distance keep the 32 largest periodic terms, latitude the 20
largest; the result is good to roughly 10 arcseconds, enough for display
and photometry.
"""

from __future__ import annotations

import math

import numpy as np

from sso_ephemeris.constants import AU_KM, DD2R, DJC, DJM00
from sso_ephemeris.ephem.frames import ecliptic_of_date_to_icrf

# D, M, M', F, longitude (1e-6 deg), distance (1e-3 km)
_LR_TERMS: tuple[tuple[int, int, int, int, float, float], ...] = (
    (0, 0, 1, 0, 6288774, -20905355),
    (2, 0, -1, 0, 1274027, -3699111),
    (2, 0, 0, 0, 658314, -2955968),
    (0, 0, 2, 0, 213618, -569925),
    (0, 1, 0, 0, -185116, 48888),
    (0, 0, 0, 2, -114332, -3149),
    (2, 0, -2, 0, 58793, 246158),
    (2, -1, -1, 0, 57066, -152138),
    (2, 0, 1, 0, 53322, -170733),
    (2, -1, 0, 0, 45758, -204586),
    (0, 1, -1, 0, -40923, -129620),
    (1, 0, 0, 0, -34720, 108743),
    (0, 1, 1, 0, -30383, 104755),
    (2, 0, 0, -2, 15327, 10321),
    (0, 0, 1, 2, -12528, 0),
    (0, 0, 1, -2, 10980, 79661),
    (4, 0, -1, 0, 10675, -34782),
    (0, 0, 3, 0, 10034, -23210),
    (4, 0, -2, 0, 8548, -21636),
    (2, 1, -1, 0, -7888, 24208),
    (2, 1, 0, 0, -6766, 30824),
    (1, 0, -1, 0, -5163, -8379),
    (1, 1, 0, 0, 4987, -16675),
    (2, -1, 1, 0, 4036, -12831),
    (2, 0, 2, 0, 3994, -10445),
    (4, 0, 0, 0, 3861, -11650),
    (2, 0, -3, 0, 3665, 14403),
    (0, 1, -2, 0, -2689, -7003),
    (2, 0, -1, 2, -2602, 0),
    (2, -1, -2, 0, 2390, 10056),
    (1, 0, 1, 0, -2348, 6322),
    (2, -2, 0, 0, 2236, -9884),
)

# D, M, M', F, latitude (1e-6 deg)
_B_TERMS: tuple[tuple[int, int, int, int, float], ...] = (
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828),
    (0, 1, 0, 1, -1794),
)

_MEAN_DISTANCE_KM = 385000.56


def moon_ecliptic(tt: float) -> tuple[float, float, float]:
    """Geocentric ecliptic coordinates of the Moon, mean equinox of date.

    Parameters:
        tt: TT Modified Julian Date.

    Returns:
        (longitude rad, latitude rad, distance km).
    """
    t = (tt - DJM00) / DJC
    t2 = t * t
    t3 = t2 * t
    t4 = t3 * t
    lp = 218.3164477 + 481267.88123421 * t - 0.0015786 * t2 + t3 / 538841.0 - t4 / 65194000.0
    d = 297.8501921 + 445267.1114034 * t - 0.0018819 * t2 + t3 / 545868.0 - t4 / 113065000.0
    m = 357.5291092 + 35999.0502909 * t - 0.0001536 * t2 + t3 / 24490000.0
    mp = 134.9633964 + 477198.8675055 * t + 0.0087414 * t2 + t3 / 69699.0 - t4 / 14712000.0
    f = 93.2720950 + 483202.0175233 * t - 0.0036539 * t2 - t3 / 3526000.0 + t4 / 863310000.0
    a1 = (119.75 + 131.849 * t) * DD2R
    a2 = (53.09 + 479264.290 * t) * DD2R
    a3 = (313.45 + 481266.484 * t) * DD2R
    e = 1.0 - 0.002516 * t - 0.0000074 * t2

    lp_r, d_r, m_r, mp_r, f_r = (x * DD2R for x in (lp, d, m, mp, f))

    sum_l = 0.0
    sum_r = 0.0
    for cd, cm, cmp_, cf, coef_l, coef_r in _LR_TERMS:
        arg = cd * d_r + cm * m_r + cmp_ * mp_r + cf * f_r
        ecorr = e ** abs(cm)
        sum_l += coef_l * ecorr * math.sin(arg)
        sum_r += coef_r * ecorr * math.cos(arg)
    sum_b = 0.0
    for cd, cm, cmp_, cf, coef_b in _B_TERMS:
        arg = cd * d_r + cm * m_r + cmp_ * mp_r + cf * f_r
        sum_b += coef_b * e ** abs(cm) * math.sin(arg)

    sum_l += 3958.0 * math.sin(a1) + 1962.0 * math.sin(lp_r - f_r) + 318.0 * math.sin(a2)
    sum_b += (
        -2235.0 * math.sin(lp_r)
        + 382.0 * math.sin(a3)
        + 175.0 * math.sin(a1 - f_r)
        + 175.0 * math.sin(a1 + f_r)
        + 127.0 * math.sin(lp_r - mp_r)
        - 115.0 * math.sin(lp_r + mp_r)
    )

    lon = math.fmod(lp + sum_l / 1e6, 360.0) * DD2R
    lat = (sum_b / 1e6) * DD2R
    dist = _MEAN_DISTANCE_KM + sum_r / 1000.0
    return (lon, lat, dist)


def moon_geocentric_pos(tt: float) -> np.ndarray:
    """Geocentric J2000 equatorial position of the Moon (AU)."""
    lon, lat, dist_km = moon_ecliptic(tt)
    dist = dist_km / AU_KM
    cos_lat = math.cos(lat)
    ecl = np.array(
        [
            dist * cos_lat * math.cos(lon),
            dist * cos_lat * math.sin(lon),
            dist * math.sin(lat),
        ],
        dtype=np.float64,
    )
    return ecliptic_of_date_to_icrf(tt, ecl)


def moon_geocentric_pv(tt: float) -> np.ndarray:
    """Geocentric state of the Moon; velocity is the one-day forward difference (AU/day)."""
    pos = moon_geocentric_pos(tt)
    vel = moon_geocentric_pos(tt + 1.0) - pos
    return np.array([pos, vel], dtype=np.float64)
