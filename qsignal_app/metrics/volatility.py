"""Log return, historical volatility and drift calculations"""

import math
from collections.abc import Sequence
from typing import Optional

from qsignal_app.config.defaults import VolatilityParams
from qsignal_app.data.models import PriceHistory


def calculate_log_return(price: float, previous_price: float) -> float:
    """
    Calculate the log return between two consecutive closes

    r = ln(price / previous_price)
    """
    return math.log(price / previous_price)


def calculate_annualized_volatility(
    returns: Sequence[float],
    trading_days_per_year: int = 252,
    min_returns: int = 10,
    fallback: float = 0.20,
) -> float:
    """
    Calculate annualized volatility from daily log returns

    sigma = sqrt(var(returns, ddof=1) * trading_days_per_year)

    Args:
        returns: Log returns in chronological order
        trading_days_per_year: Annualization factor
        min_returns: Sample size below which the fallback is used
        fallback: Volatility reported for small samples

    Returns:
        Annualized volatility, never negative
    """
    if len(returns) < min_returns:
        return fallback

    mean_return = sum(returns) / len(returns)
    variance = sum((r - mean_return) ** 2 for r in returns) / (len(returns) - 1)

    return math.sqrt(variance * trading_days_per_year)


def calculate_drift(
    returns: Sequence[float],
    window: int = 21,
    trading_days_per_year: int = 252,
) -> float:
    """
    Calculate annualized drift from the most recent returns

    drift = mean(last `window` returns) * trading_days_per_year

    Returns:
        Annualized drift, 0.0 when fewer than `window` returns exist
    """
    if len(returns) < window:
        return 0.0

    recent = list(returns)[-window:]
    return (sum(recent) / len(recent)) * trading_days_per_year


class VolatilityEstimator:
    """Historical volatility estimator over the engine's price history"""

    def __init__(self, history: PriceHistory, params: Optional[VolatilityParams] = None):
        self.history = history
        self.params = params or VolatilityParams()
        self.current_volatility = self.params.fallback_volatility

    def update(self, price: float) -> float:
        """
        Append a close to the history and recompute volatility

        Args:
            price: Validated closing price

        Returns:
            Annualized volatility estimate
        """
        previous = self.history.last_price
        log_return = calculate_log_return(price, previous) if previous is not None else None
        self.history.append(price, log_return)

        self.current_volatility = self.estimate()
        return self.current_volatility

    def estimate(self) -> float:
        """Volatility of the current return series without appending"""
        return calculate_annualized_volatility(
            self.history.returns,
            trading_days_per_year=self.params.trading_days_per_year,
            min_returns=self.params.min_returns,
            fallback=self.params.fallback_volatility,
        )

