"""Closed-form option valuation"""

from .black_scholes import OptionPricer, OptionValuation, bs_call, bs_put, normal_cdf

__all__ = [
    "OptionPricer",
    "OptionValuation",
    "bs_call",
    "bs_put",
    "normal_cdf",
]
