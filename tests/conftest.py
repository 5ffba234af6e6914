"""Pytest configuration and shared fixtures."""

import math

import numpy as np
import pytest

from qsignal_app.engine import SignalEngine


def make_price_series(count: int, start: float = 400.0, mean_return: float = 0.0005,
                      daily_volatility: float = 0.015, seed: int = 7) -> list[float]:
    """SPY-like closes: start around 400 with normally distributed daily returns."""
    rng = np.random.default_rng(seed)
    prices = [start]
    for _ in range(count - 1):
        prices.append(prices[-1] * (1.0 + rng.normal(mean_return, daily_volatility)))
    return prices


def make_trend_series(count: int, start: float = 100.0, daily_factor: float = 1.01) -> list[float]:
    """Closes moving by a constant factor each bar."""
    return [start * math.pow(daily_factor, i) for i in range(count)]


def feed(engine: SignalEngine, prices: list[float], start_index: int = 1) -> list:
    """Run each close through analyze_bar and collect the results."""
    results = []
    for offset, price in enumerate(prices):
        results.append(engine.analyze_bar(price, price + 1, price - 1, price, 1_000_000,
                                          start_index + offset))
    return results


@pytest.fixture
def price_series() -> list[float]:
    """100 bars of SPY-like price data."""
    return make_price_series(100)


@pytest.fixture
def seeded_engine(tmp_path) -> SignalEngine:
    """Engine with a fixed seed and no YAML overrides."""
    return SignalEngine(config_dir=tmp_path, seed=1234)


@pytest.fixture
def make_prices():
    return make_price_series


@pytest.fixture
def make_trend():
    return make_trend_series


@pytest.fixture
def feed_engine():
    return feed
