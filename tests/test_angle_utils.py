"""Tests for RA/Dec conversion and sexagesimal formatting."""

from __future__ import annotations

import numpy as np
import pytest

from sso_ephemeris.angle_utils import ra_dec, sexagesimal


def test_ra_dec_quadrants() -> None:
    """RA is wrapped into 0..24 hours; declination spans +-90 degrees."""

    assert ra_dec(np.array([0.0, 1.0, 0.0])) == pytest.approx((6.0, 0.0))
    assert ra_dec(np.array([0.0, -2.0, 0.0])) == pytest.approx((18.0, 0.0))
    assert ra_dec(np.array([0.0, 0.0, 3.0]))[1] == pytest.approx(90.0)


def test_sexagesimal_fields() -> None:
    """Hours, minutes and seconds with the requested separators."""

    assert sexagesimal(12.5125, 'hms', 2) == '12h 30m 45.00s'
    assert sexagesimal(12.5125) == '12  30  45.00'


def test_sexagesimal_sign() -> None:
    """Negative values below one unit keep their sign; signed forces a plus."""

    assert sexagesimal(-0.5, 'dms', 1, signed=True) == '-00d 30m 00.0s'
    assert sexagesimal(10.0, 'dms', 0, signed=True) == '+10d 00m 00s'


def test_sexagesimal_rounding_carries() -> None:
    """Seconds that round up to 60 carry into minutes and units."""

    assert sexagesimal(0.99999999, 'hms', 2) == '01h 00m 00.00s'
