from __future__ import annotations
import math

import pytest
from hypothesis import given, strategies as st

from sun_altitude.core.angles import (
    angle_to_quadrant,
    asin_deg,
    atan_deg,
    cos_deg,
    sin_deg,
    tan_deg,
    to_angle,
    to_radians,
    wrap_degrees,
    wrap_hours,
    wrap_into,
)


def _finite_float():
    return st.floats(allow_nan=False, allow_infinity=False, width=64)


def test_degree_radian_conversion():
    assert to_radians(180.0) == pytest.approx(math.pi)
    assert to_angle(math.pi / 2) == pytest.approx(90.0)
    assert to_angle(to_radians(123.456)) == pytest.approx(123.456)


def test_degree_domain_trig():
    assert sin_deg(30.0) == pytest.approx(0.5)
    assert cos_deg(60.0) == pytest.approx(0.5)
    assert tan_deg(45.0) == pytest.approx(1.0)
    assert asin_deg(0.5) == pytest.approx(30.0)
    assert atan_deg(1.0) == pytest.approx(45.0)


def test_asin_out_of_domain_is_nan_not_error():
    assert math.isnan(asin_deg(1.0000001))
    assert math.isnan(asin_deg(-2.0))
    assert math.isnan(asin_deg(math.nan))
    assert asin_deg(1.0) == pytest.approx(90.0)


def test_trig_of_non_finite_is_nan():
    for fn in (sin_deg, cos_deg, tan_deg):
        assert math.isnan(fn(math.nan))
        assert math.isnan(fn(math.inf))
        assert math.isnan(fn(-math.inf))


@pytest.mark.parametrize(
    "val, expected",
    [
        (0.0, 0.0),
        (360.0, 0.0),
        (-1.0, 359.0),
        (725.0, 5.0),
        (-725.0, 355.0),
        (359.5, 359.5),
    ],
)
def test_wrap_degrees_examples(val, expected):
    assert wrap_degrees(val) == pytest.approx(expected)


def test_wrap_hours_examples():
    assert wrap_hours(24.0) == 0.0
    assert wrap_hours(-0.5) == pytest.approx(23.5)
    assert wrap_hours(49.25) == pytest.approx(1.25)


def test_wrap_tiny_negative_stays_below_max():
    out = wrap_degrees(-1e-15)
    assert 0.0 <= out < 360.0


@given(val=_finite_float())
def test_wrap_into_range(val):
    out = wrap_into(0.0, 360.0, val)
    assert 0.0 <= out < 360.0


@given(val=st.floats(min_value=-1e6, max_value=1e6, allow_nan=False))
def test_wrap_into_preserves_cycle(val):
    out = wrap_into(-12.0, 12.0, val)
    assert -12.0 <= out < 12.0
    k = (val - out) / 24.0
    assert k == pytest.approx(round(k), abs=1e-6)


@pytest.mark.parametrize("val", [math.nan, math.inf, -math.inf])
def test_wrap_into_non_finite_returns_nan(val):
    assert math.isnan(wrap_into(0.0, 360.0, val))


def test_wrap_into_rejects_empty_interval():
    with pytest.raises(ValueError):
        wrap_into(10.0, 10.0, 3.0)
    with pytest.raises(ValueError):
        wrap_into(24.0, 0.0, 3.0)


@pytest.mark.parametrize(
    "angle, quadrant",
    [
        (0.0, 1),
        (89.9, 1),
        (90.0, 2),
        (180.0, 3),
        (270.0, 4),
        (359.9, 4),
        (-10.0, 4),
        (450.0, 2),
    ],
)
def test_angle_to_quadrant(angle, quadrant):
    q = angle_to_quadrant(angle)
    assert q == quadrant
    assert isinstance(q, int)


def test_angle_to_quadrant_nan():
    assert math.isnan(angle_to_quadrant(math.nan))
    assert math.isnan(angle_to_quadrant(math.inf))
    assert math.isnan(angle_to_quadrant(-math.inf))
