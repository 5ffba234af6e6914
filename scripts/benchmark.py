#!/usr/bin/env python3
"""Performance benchmark script for the QSignal engine."""

import sys
import time
from pathlib import Path
from typing import Any, Dict, List

import numpy as np

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from qsignal_app.engine import SignalEngine
from qsignal_app.logging.config import configure_logging


def generate_sample_closes(count: int, seed: int = 7) -> List[float]:
    """Generate SPY-like closes for benchmarking."""
    rng = np.random.default_rng(seed)
    returns = rng.normal(0.0005, 0.015, size=count)
    return list(400.0 * np.cumprod(1.0 + returns))


def benchmark_signal_engine(bars: int = 250, simulations: int = 1000,
                            workers: int = 1) -> Dict[str, Any]:
    """Benchmark per-bar analysis once the warm-up window is filled."""
    print(f"🏃 Benchmarking {bars} bars, {simulations} simulations, {workers} worker(s)...")

    engine = SignalEngine(
        seed=1,
        overrides={
            "engine": {"monte_carlo_simulations": simulations},
            "simulation": {"max_workers": workers},
        },
    )
    closes = generate_sample_closes(bars + engine.params.min_history)

    # Warm up
    for i, close in enumerate(closes[:engine.params.min_history]):
        engine.analyze_bar(close, close, close, close, 0, i)

    start_time = time.perf_counter()

    for i, close in enumerate(closes[engine.params.min_history:]):
        engine.analyze_bar(close, close, close, close, 0, i)

    total_time = time.perf_counter() - start_time

    return {
        "total_time": total_time,
        "avg_time_per_bar": total_time / bars,
        "bars_per_second": bars / total_time,
        "bars": bars,
    }


def main():
    """Main benchmark function."""
    configure_logging(level="WARNING")

    print("⚡ QSignal Engine Performance Benchmark")
    print("=" * 40)

    scenarios = [(1000, 1), (5000, 1), (5000, 4), (20000, 4)]

    for simulations, workers in scenarios:
        results = benchmark_signal_engine(simulations=simulations, workers=workers)

        print(f"\n📊 Results for {simulations} simulations / {workers} worker(s):")
        print(f"   Total time: {results['total_time']:.3f}s")
        print(f"   Avg per bar: {results['avg_time_per_bar']*1000:.3f}ms")
        print(f"   Bars/second: {results['bars_per_second']:.1f}")


if __name__ == "__main__":
    main()
