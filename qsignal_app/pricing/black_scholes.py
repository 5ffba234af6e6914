"""
Black-Scholes option valuation used as a secondary signal.

Prices European calls and puts in closed form. At the time or volatility
boundary (T <= 0 or sigma <= 0) the formulas would divide by zero, so the
intrinsic value is returned instead.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import OptionParams


def normal_cdf(x: float) -> float:
    """Standard normal CDF via the error function."""
    return 0.5 * (1.0 + math.erf(x / math.sqrt(2.0)))


def _d1_d2(S: float, K: float, T: float, r: float, sigma: float) -> tuple[float, float]:
    sqrt_t = math.sqrt(T)
    d1 = (math.log(S / K) + (r + 0.5 * sigma ** 2) * T) / (sigma * sqrt_t)
    return d1, d1 - sigma * sqrt_t


def bs_call(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Black-Scholes European call price.

    Args:
        S:     Underlying spot price
        K:     Strike price
        T:     Time to expiration in years
        r:     Annual risk-free interest rate (decimal)
        sigma: Annual volatility (decimal)

    Returns:
        Theoretical call price, never negative.
    """
    if T <= 0 or sigma <= 0:
        return max(S - K, 0.0)

    d1, d2 = _d1_d2(S, K, T, r, sigma)
    price = S * normal_cdf(d1) - K * math.exp(-r * T) * normal_cdf(d2)
    return max(price, 0.0)


def bs_put(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """Black-Scholes European put price (same arguments as bs_call)."""
    if T <= 0 or sigma <= 0:
        return max(K - S, 0.0)

    d1, d2 = _d1_d2(S, K, T, r, sigma)
    price = K * math.exp(-r * T) * normal_cdf(-d2) - S * normal_cdf(-d1)
    return max(price, 0.0)


@dataclass(frozen=True)
class OptionValuation:
    """Call and put values at the out-of-the-money strikes."""
    call_value: float
    put_value: float
    call_strike: float
    put_strike: float
    time_to_expiry: float


class OptionPricer:
    """Values the OTM call/put pair around the current price."""

    def __init__(self, params: Optional[OptionParams] = None):
        self.params = params or OptionParams()

    @property
    def time_to_expiry(self) -> float:
        """Expiry in years (30 calendar days by default)."""
        return self.params.expiry_days / self.params.days_per_year

    def call(self, S: float, K: float, T: float, r: float, sigma: float) -> float:
        return bs_call(S, K, T, r, sigma)

    def put(self, S: float, K: float, T: float, r: float, sigma: float) -> float:
        return bs_put(S, K, T, r, sigma)

    def value(self, spot: float, risk_free_rate: float, volatility: float) -> OptionValuation:
        """
        Value the call struck above spot and the put struck below it.

        Args:
            spot: Current underlying price
            risk_free_rate: Annual risk-free rate
            volatility: Annualized volatility estimate

        Returns:
            OptionValuation at spot*(1 + offset) / spot*(1 - offset)
        """
        offset = self.params.moneyness_offset
        call_strike = spot * (1.0 + offset)
        put_strike = spot * (1.0 - offset)
        T = self.time_to_expiry

        return OptionValuation(
            call_value=self.call(spot, call_strike, T, risk_free_rate, volatility),
            put_value=self.put(spot, put_strike, T, risk_free_rate, volatility),
            call_strike=call_strike,
            put_strike=put_strike,
            time_to_expiry=T,
        )
