import math

import pytest

from floatcolors.mathtools import (atan2_turns, barron_spline, clamp, fract, halton3, java_fmod, probit,
                                   radical_inverse, van_der_corput)


class TestBarronSpline:
    @pytest.mark.parametrize('x', [0.0, 0.1, 0.3, 0.5, 0.9, 1.0])
    def test_shape_one_is_identity(self, x):
        assert barron_spline(x, 1.0, 0.3) == pytest.approx(x)

    @pytest.mark.parametrize('shape', [0.8528, 1.1726, 2.0])
    def test_endpoints_fixed(self, shape):
        assert barron_spline(0.0, shape, 0.1) == pytest.approx(0.0)
        assert barron_spline(1.0, shape, 0.1) == pytest.approx(1.0)

    @pytest.mark.parametrize('x', [0.05, 0.1, 0.4, 0.75])
    def test_reciprocal_shape_inverts(self, x):
        assert barron_spline(barron_spline(x, 0.8528, 0.1), 1.1726, 0.1) == pytest.approx(x, abs=1e-4)


class TestProbit:
    def test_median(self):
        assert probit(0.5) == pytest.approx(0.0)

    def test_tail(self):
        assert probit(0.975) == pytest.approx(1.959964, abs=1e-5)

    def test_endpoints_are_finite(self):
        assert math.isfinite(probit(0.0))
        assert math.isfinite(probit(1.0))
        assert probit(0.0) < -7.0 < 7.0 < probit(1.0)


class TestLowDiscrepancy:
    def test_van_der_corput(self):
        assert [van_der_corput(i) for i in range(1, 5)] == [0.5, 0.25, 0.75, 0.125]

    def test_radical_inverse(self):
        assert radical_inverse(1, 3) == pytest.approx(1 / 3)
        assert radical_inverse(2, 3) == pytest.approx(2 / 3)
        assert radical_inverse(3, 3) == pytest.approx(1 / 9)
        assert radical_inverse(0, 5) == 0.0

    def test_halton3(self):
        assert halton3(1) == pytest.approx((0.5, 1 / 3, 0.2))


class TestAngles:
    @pytest.mark.parametrize('y, x, turns', [
        (0.0, 0.0, 0.0),
        (0.0, 1.0, 0.0),
        (1.0, 0.0, 0.25),
        (0.0, -1.0, 0.5),
        (-1.0, 0.0, 0.75),
    ])
    def test_atan2_turns(self, y, x, turns):
        assert atan2_turns(y, x) == pytest.approx(turns)

    def test_atan2_turns_range(self):
        assert 0.0 <= atan2_turns(-1e-12, 1.0) < 1.0


def test_java_fmod_keeps_dividend_sign():
    assert java_fmod(-0.7, 0.5) == pytest.approx(-0.2)
    assert java_fmod(0.7, 0.5) == pytest.approx(0.2)


def test_clamp_and_fract():
    assert clamp(1.5, 0.0, 1.0) == 1.0
    assert clamp(-1.0, 0.0, 1.0) == 0.0
    assert fract(-0.25) == pytest.approx(0.75)
    assert fract(2.5) == pytest.approx(0.5)
