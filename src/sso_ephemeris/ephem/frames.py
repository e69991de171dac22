"""Frame and state-vector helpers over pyerfa (precession, obliquity, pv conversion)."""

from __future__ import annotations

import erfa
import numpy as np

from sso_ephemeris.constants import DJM0


def pv_array(pv: np.ndarray) -> np.ndarray:
    """Return an ERFA pv-vector as a plain (2, 3) float array.

    pyerfa returns pv-vectors as a structured dtype with 'p' and 'v' fields.
    """
    pv = np.asarray(pv)
    if pv.dtype.names:
        return np.array([pv['p'], pv['v']], dtype=np.float64).reshape(2, 3)
    return np.array(pv, dtype=np.float64).reshape(2, 3)


def ecliptic_matrix(tt: float) -> np.ndarray:
    """Rotation from ICRF to the mean ecliptic and equinox of date (IAU 2006)."""
    return np.asarray(erfa.ecm06(DJM0, tt), dtype=np.float64)


def ecliptic_of_date_to_icrf(tt: float, pos: np.ndarray) -> np.ndarray:
    """Convert a position on the mean ecliptic of date to the J2000 equatorial frame.

    Rotates by the mean obliquity of date, then removes precession with the
    IAU 1976 precession matrix.
    """
    obl = erfa.obl06(DJM0, tt)
    rmatecl = erfa.rx(-obl, erfa.ir())
    equ = erfa.rxp(rmatecl, np.asarray(pos, dtype=np.float64))
    rmatp = erfa.pmat76(DJM0, tt)
    return np.asarray(erfa.trxp(rmatp, equ), dtype=np.float64)


def ecliptic_j2000_to_icrf(pos: np.ndarray) -> np.ndarray:
    """Rotate a J2000 mean-ecliptic vector into the J2000 equatorial frame."""
    obl = erfa.obl06(DJM0, 51544.5)
    return np.asarray(erfa.rxp(erfa.rx(-obl, erfa.ir()), pos), dtype=np.float64)


def icrf_to_ecliptic_j2000(pos: np.ndarray) -> np.ndarray:
    """Rotate a J2000 equatorial vector onto the J2000 mean ecliptic."""
    obl = erfa.obl06(DJM0, 51544.5)
    return np.asarray(erfa.rxp(erfa.rx(obl, erfa.ir()), pos), dtype=np.float64)
