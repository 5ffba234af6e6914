"""Historical statistics calculated over the rolling price history"""

from .volatility import (
    VolatilityEstimator,
    calculate_annualized_volatility,
    calculate_drift,
    calculate_log_return,
)

__all__ = [
    "VolatilityEstimator",
    "calculate_annualized_volatility",
    "calculate_drift",
    "calculate_log_return",
]
