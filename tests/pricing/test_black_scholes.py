"""Tests for Black-Scholes option valuation."""

import math

import pytest

from qsignal_app.config.defaults import OptionParams
from qsignal_app.pricing.black_scholes import (
    OptionPricer,
    bs_call,
    bs_put,
    normal_cdf,
)


class TestNormalCDF:

    def test_midpoint(self):
        assert normal_cdf(0.0) == 0.5

    def test_known_quantile(self):
        assert normal_cdf(1.959964) == pytest.approx(0.975, abs=1e-6)

    def test_symmetry(self):
        for x in (0.1, 0.5, 1.0, 2.5):
            assert normal_cdf(x) + normal_cdf(-x) == pytest.approx(1.0, abs=1e-15)


class TestBlackScholes:

    def test_reference_call_and_put(self):
        """Textbook case: S=K=100, T=1, r=5%, sigma=20%"""
        assert bs_call(100.0, 100.0, 1.0, 0.05, 0.2) == pytest.approx(10.4506, abs=1e-4)
        assert bs_put(100.0, 100.0, 1.0, 0.05, 0.2) == pytest.approx(5.5735, abs=1e-4)

    @pytest.mark.parametrize("spot", [50.0, 95.0, 100.0, 105.0, 200.0])
    @pytest.mark.parametrize("sigma", [0.01, 0.2, 0.8])
    def test_values_never_negative(self, spot, sigma):
        assert bs_call(spot, 100.0, 30 / 365, 0.02, sigma) >= 0.0
        assert bs_put(spot, 100.0, 30 / 365, 0.02, sigma) >= 0.0

    @pytest.mark.parametrize("spot,strike,T,r,sigma", [
        (100.0, 105.0, 30 / 365, 0.02, 0.25),
        (100.0, 95.0, 30 / 365, 0.02, 0.25),
        (400.0, 420.0, 0.5, 0.05, 0.15),
        (50.0, 40.0, 2.0, 0.01, 0.6),
    ])
    def test_put_call_parity(self, spot, strike, T, r, sigma):
        call = bs_call(spot, strike, T, r, sigma)
        put = bs_put(spot, strike, T, r, sigma)

        assert call - put == pytest.approx(spot - strike * math.exp(-r * T), abs=1e-9)

    def test_zero_time_returns_intrinsic(self):
        assert bs_call(110.0, 100.0, 0.0, 0.02, 0.2) == 10.0
        assert bs_call(90.0, 100.0, 0.0, 0.02, 0.2) == 0.0
        assert bs_put(90.0, 100.0, 0.0, 0.02, 0.2) == 10.0
        assert bs_put(110.0, 100.0, 0.0, 0.02, 0.2) == 0.0

    def test_negative_time_returns_intrinsic(self):
        assert bs_call(110.0, 100.0, -0.1, 0.02, 0.2) == 10.0
        assert bs_put(90.0, 100.0, -0.1, 0.02, 0.2) == 10.0

    def test_zero_volatility_returns_undiscounted_intrinsic(self):
        assert bs_call(110.0, 100.0, 0.5, 0.05, 0.0) == 10.0
        assert bs_put(90.0, 100.0, 0.5, 0.05, 0.0) == 10.0
        assert bs_call(100.0, 105.0, 30 / 365, 0.02, 0.0) == 0.0
        assert bs_put(100.0, 95.0, 30 / 365, 0.02, 0.0) == 0.0

    def test_negative_volatility_returns_intrinsic(self):
        assert bs_call(120.0, 100.0, 1.0, 0.02, -0.3) == 20.0

    def test_call_increases_with_volatility(self):
        low = bs_call(100.0, 105.0, 30 / 365, 0.02, 0.1)
        high = bs_call(100.0, 105.0, 30 / 365, 0.02, 0.5)
        assert high > low


class TestOptionPricer:

    def test_time_to_expiry_default(self):
        assert OptionPricer().time_to_expiry == pytest.approx(30 / 365)

    def test_value_uses_otm_strikes(self):
        pricer = OptionPricer()
        valuation = pricer.value(100.0, 0.02, 0.25)

        assert valuation.call_strike == pytest.approx(105.0)
        assert valuation.put_strike == pytest.approx(95.0)
        assert valuation.call_value == pytest.approx(bs_call(100.0, 105.0, 30 / 365, 0.02, 0.25))
        assert valuation.put_value == pytest.approx(bs_put(100.0, 95.0, 30 / 365, 0.02, 0.25))

    def test_value_with_zero_volatility(self):
        valuation = OptionPricer().value(100.0, 0.02, 0.0)

        assert valuation.call_value == 0.0
        assert valuation.put_value == 0.0

    def test_custom_params(self):
        pricer = OptionPricer(OptionParams(expiry_days=60, moneyness_offset=0.10))
        valuation = pricer.value(200.0, 0.02, 0.3)

        assert valuation.call_strike == pytest.approx(220.0)
        assert valuation.put_strike == pytest.approx(180.0)
        assert valuation.time_to_expiry == pytest.approx(60 / 365)

    def test_call_and_put_methods(self):
        pricer = OptionPricer()
        assert pricer.call(100.0, 100.0, 1.0, 0.05, 0.2) == bs_call(100.0, 100.0, 1.0, 0.05, 0.2)
        assert pricer.put(100.0, 100.0, 1.0, 0.05, 0.2) == bs_put(100.0, 100.0, 1.0, 0.05, 0.2)
