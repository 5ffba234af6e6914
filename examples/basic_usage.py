#!/usr/bin/env python3
"""
Basic Usage Example - QSignal Monte Carlo Signal Engine

This script demonstrates the basic usage of the signal engine with a
synthetic SPY-like daily series. It shows how to:
- Initialize the engine with a fixed seed
- Feed bars and read the per-bar decision
- Track a position against stop-loss / take-profit
- Change parameters between bars

Run: python examples/basic_usage.py
"""

from typing import List

import numpy as np

from qsignal_app.engine import SignalEngine
from qsignal_app.errors import ConfigurationError
from qsignal_app.logging.config import configure_logging
from qsignal_app.models.analysis import BarAnalysis
from qsignal_app.signals.models import TradeAction


def create_price_series(count: int = 100, start: float = 400.0, seed: int = 7) -> List[float]:
    """Closes starting at 400 with N(0.05%, 1.5%) daily returns."""
    rng = np.random.default_rng(seed)
    prices = [start]
    for _ in range(count - 1):
        prices.append(prices[-1] * (1.0 + rng.normal(0.0005, 0.015)))
    return prices


def print_analysis(price: float, analysis: BarAnalysis) -> None:
    """Print one scored bar."""
    marker = {TradeAction.BUY: "BUY ", TradeAction.SELL: "SELL", TradeAction.HOLD: "hold"}
    print(f"  Bar {analysis.bar_index:3d}  close={price:8.2f}  {marker[analysis.action]}"
          f"  buy={analysis.buy_strength:.3f}  sell={analysis.sell_strength:.3f}"
          f"  conf={analysis.confidence:.2f}  vol={analysis.volatility:.3f}")


def main():
    """Main demonstration function."""
    configure_logging(level="WARNING")

    print("QSignal Monte Carlo Signal Engine - Basic Usage Demo")
    print("=" * 60)

    print("1. Initializing the engine...")
    engine = SignalEngine(seed=2024)
    params = engine.params
    print(f"   Lookback: {params.lookback_period} bars, simulations: {params.monte_carlo_simulations}")
    print(f"   Stop loss: {params.stop_loss_percent:.0%}, take profit: {params.take_profit_percent:.0%}")
    print()

    prices = create_price_series()

    print("2. Feeding 100 synthetic daily bars...")
    counts = {action: 0 for action in TradeAction}
    for bar_index, close in enumerate(prices, 1):
        analysis = engine.analyze_bar(close, close * 1.005, close * 0.995, close, 1_000_000, bar_index)
        counts[analysis.action] += 1

        if analysis.action != TradeAction.HOLD:
            print_analysis(close, analysis)

        # Enter on the first buy, the monitor handles the exit
        if analysis.action == TradeAction.BUY and not engine.position.is_open:
            engine.open_position(close, 100)
            print(f"   -> opened 100 @ {close:.2f}")

        if analysis.position_closed:
            print(f"   -> position closed ({engine.get_runtime_stats()['last_close_reason']})")
    print()

    print("3. Decision counts:")
    for action, count in counts.items():
        print(f"   {action.value}: {count}")
    print()

    print("4. Position:")
    position = engine.position
    print(f"   Status: {position.status.value}")
    print(f"   Unrealized P&L: {engine.get_unrealized_pnl():.2f}")
    print(f"   Should close: {engine.should_close_position()}")
    print()

    print("5. Updating parameters...")
    engine.set_monte_carlo_simulations(500)
    print(f"   Simulations now {engine.params.monte_carlo_simulations}")
    try:
        engine.set_lookback_period(0)
    except ConfigurationError as e:
        print(f"   Rejected: {e}")
    print(f"   Lookback still {engine.params.lookback_period}")
    print()

    stats = engine.get_runtime_stats()
    print("6. Final engine stats:")
    print(f"   Bars processed: {stats['bars_processed']}")
    print(f"   Price history: {stats['price_history_size']}")
    print(f"   Current volatility: {stats['current_volatility']:.4f}")
    print()

    print("Demo completed successfully!")


if __name__ == "__main__":
    main()
