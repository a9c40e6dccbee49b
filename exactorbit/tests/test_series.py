from decimal import Decimal

import mpmath as mp
import pytest

from exactorbit.utils import series
from exactorbit.utils.constants import DECIMAL_PRECISION, SERIES_TERMS, TWO_PI


def _mp_decimal(value):
    return Decimal(mp.nstr(value, DECIMAL_PRECISION, strip_zeros=False))


ANGLES = ["0", "0.5", "-0.5", "1.5707963", "3.14159", "-3", "4.75", "6.2", "-6.2"]


@pytest.mark.parametrize("angle", ANGLES)
def test_sin_matches_mpmath(angle):
    expected = _mp_decimal(mp.sin(mp.mpf(angle)))
    assert abs(series.sin(Decimal(angle), SERIES_TERMS) - expected) < Decimal("1e-35")


@pytest.mark.parametrize("angle", ANGLES)
def test_cos_matches_mpmath(angle):
    expected = _mp_decimal(mp.cos(mp.mpf(angle)))
    assert abs(series.cos(Decimal(angle), SERIES_TERMS) - expected) < Decimal("1e-35")


@pytest.mark.parametrize("angle", ["6.2831853", "-6.2831853"])
def test_truncation_error_near_full_turn(angle):
    x = Decimal(angle)
    assert abs(series.sin(x, SERIES_TERMS) - _mp_decimal(mp.sin(mp.mpf(angle)))) < Decimal("1e-37")
    assert abs(series.cos(x, SERIES_TERMS) - _mp_decimal(mp.cos(mp.mpf(angle)))) < Decimal("1e-37")


def test_zero_angle_is_exact():
    assert series.sin(Decimal(0), SERIES_TERMS) == 0
    assert series.cos(Decimal(0), SERIES_TERMS) == 1


def test_few_terms_truncate():
    # one term of the sine series is the angle itself
    assert series.sin(Decimal("0.25"), 1) == Decimal("0.25")
    assert series.cos(Decimal("0.25"), 1) == 1


def test_fract_keeps_sign():
    assert series.fract(Decimal("5.75")) == Decimal("0.75")
    assert series.fract(Decimal("-1.25")) == Decimal("-0.25")
    assert series.fract(Decimal("12")) == 0
    assert series.fract(Decimal("123123") / Decimal(86400)) == Decimal("123123") / Decimal(86400) - 1


def test_f64_to_decimal():
    assert series.f64_to_decimal(0.1) == Decimal("0.1")
    assert series.f64_to_decimal(149_597_870_691.0) == Decimal("149597870691")
    assert series.f64_to_decimal(1e-11) == Decimal("1e-11")
    for bad in [float("nan"), float("inf"), float("-inf")]:
        with pytest.raises(ValueError):
            series.f64_to_decimal(bad)


def test_two_pi_precision():
    assert abs(TWO_PI - _mp_decimal(2 * mp.pi)) < Decimal("1e-60")
