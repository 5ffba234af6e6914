"""
Canonical data models for bar input and rolling price history.

The engine owns exactly one PriceHistory; calculators read and extend it
in place rather than keeping their own copies.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Optional

from qsignal_app.config.defaults import EngineParams


@dataclass(frozen=True)
class Bar:
    """Single price bar as delivered by the host platform."""
    open: float
    high: float
    low: float
    close: float        # Only field used in scoring
    volume: float
    index: int          # Host bar number


@dataclass
class PriceHistory:
    """Rolling closing prices and log returns bounded by the lookback period."""

    lookback_period: int = EngineParams.lookback_period
    prices: deque = field(default=None)   # deque[float]
    returns: deque = field(default=None)  # deque[float], ln(p_t / p_t-1)

    def __post_init__(self):
        """Initialize collections if not provided."""
        if self.prices is None:
            self.prices = deque(maxlen=self.lookback_period)
        if self.returns is None:
            self.returns = deque(maxlen=self.lookback_period)

    @property
    def last_price(self) -> Optional[float]:
        """Most recent close, None before the first bar."""
        return self.prices[-1] if self.prices else None

    def append(self, price: float, log_return: Optional[float] = None) -> None:
        """Append a close and, when known, its log return. Oldest values are evicted."""
        self.prices.append(price)
        if log_return is not None:
            self.returns.append(log_return)

    def resize(self, lookback_period: int) -> None:
        """Change the bound, keeping the most recent observations."""
        self.lookback_period = lookback_period
        self.prices = deque(self.prices, maxlen=lookback_period)
        self.returns = deque(self.returns, maxlen=lookback_period)
