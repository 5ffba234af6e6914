"""
Monte Carlo simulation of terminal prices under Geometric Brownian Motion.

Each path applies, once per trading day:

    S(t+dt) = S(t) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

with Z ~ N(0, 1) drawn independently per step and per path. A batch is
split into fixed-size chunks and every chunk draws from its own child
stream of the engine's seed sequence. The chunk layout, not the number of
worker threads, decides which draws a path receives, so a seeded batch is
bit-for-bit identical however many workers run it.
"""

import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config.defaults import SimulationParams
from ..errors import SimulationError
from ..logging.config import get_logger

logger = get_logger(__name__)


class RandomSource:
    """
    Seeded source of independent normal-draw streams.

    Wraps a single numpy SeedSequence created once. Every call to spawn()
    hands out fresh child generators, so successive batches differ while a
    fixed seed reproduces the whole sequence of batches.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._seed_sequence = np.random.SeedSequence(seed)

    @property
    def entropy(self) -> int:
        """Root entropy; record it to replay an unseeded run."""
        return self._seed_sequence.entropy

    def spawn(self, count: int) -> list[np.random.Generator]:
        """Create `count` statistically independent generators."""
        return [np.random.default_rng(child) for child in self._seed_sequence.spawn(count)]


@dataclass(frozen=True)
class SimulationBatch:
    """Terminal prices of one Monte Carlo batch."""
    terminal_prices: np.ndarray
    initial_price: float
    drift: float
    volatility: float
    days: int

    @property
    def size(self) -> int:
        return int(self.terminal_prices.size)

    def mean_price(self) -> float:
        return float(np.mean(self.terminal_prices))

    def expected_return(self) -> float:
        """(mean terminal price - initial price) / initial price"""
        return (self.mean_price() - self.initial_price) / self.initial_price

    def probability_above(self, threshold: float) -> float:
        """Share of outcomes strictly above threshold."""
        return int(np.count_nonzero(self.terminal_prices > threshold)) / self.size

    def probability_below(self, threshold: float) -> float:
        """Share of outcomes strictly below threshold."""
        return int(np.count_nonzero(self.terminal_prices < threshold)) / self.size


class PathSimulator:
    """Generates GBM terminal price batches from an injected RandomSource."""

    def __init__(self, random_source: Optional[RandomSource] = None,
                 params: Optional[SimulationParams] = None):
        self.random_source = random_source or RandomSource()
        self.params = params or SimulationParams()

    def simulate(self, initial_price: float, drift: float, volatility: float,
                 days: int, n_sims: int) -> SimulationBatch:
        """
        Simulate `n_sims` independent paths of `days` daily steps.

        Args:
            initial_price: Starting price S0
            drift: Annualized drift
            volatility: Annualized volatility, 0 gives a deterministic path
            days: Number of daily steps
            n_sims: Number of paths

        Returns:
            SimulationBatch holding only the terminal prices

        Raises:
            SimulationError: If any terminal price is not finite
        """
        if n_sims <= 0:
            raise ValueError(f"n_sims must be positive, got {n_sims}")

        chunk_sizes = self._chunk_sizes(n_sims)
        generators = self.random_source.spawn(len(chunk_sizes))
        jobs = list(zip(generators, chunk_sizes))

        def run(job: tuple[np.random.Generator, int]) -> np.ndarray:
            rng, size = job
            return self._simulate_chunk(rng, size, initial_price, drift, volatility, days)

        workers = min(self.params.max_workers, len(jobs))
        if workers > 1:
            # map() yields in submission order, keeping chunk order stable
            with ThreadPoolExecutor(max_workers=workers) as executor:
                chunks = list(executor.map(run, jobs))
        else:
            chunks = [run(job) for job in jobs]

        terminal_prices = np.concatenate(chunks)

        non_finite = int(np.count_nonzero(~np.isfinite(terminal_prices)))
        if non_finite:
            raise SimulationError(
                "Simulation produced non-finite terminal prices",
                simulations=n_sims,
                non_finite_count=non_finite,
                context={"drift": drift, "volatility": volatility, "days": days}
            )

        logger.debug(
            "Simulated price paths",
            simulations=n_sims,
            chunks=len(jobs),
            workers=max(workers, 1),
            days=days,
            drift=drift,
            volatility=volatility
        )

        return SimulationBatch(
            terminal_prices=terminal_prices,
            initial_price=initial_price,
            drift=drift,
            volatility=volatility,
            days=days,
        )

    def _chunk_sizes(self, n_sims: int) -> list[int]:
        chunk_size = self.params.chunk_size
        full, remainder = divmod(n_sims, chunk_size)
        sizes = [chunk_size] * full
        if remainder:
            sizes.append(remainder)
        return sizes

    def _simulate_chunk(self, rng: np.random.Generator, size: int, initial_price: float,
                        drift: float, volatility: float, days: int) -> np.ndarray:
        dt = 1.0 / self.params.trading_days_per_year
        drift_term = (drift - 0.5 * volatility ** 2) * dt
        shock_scale = volatility * math.sqrt(dt)

        # One row per path, one column per day
        shocks = rng.standard_normal((size, days))

        prices = np.full(size, initial_price, dtype=np.float64)
        for day in range(days):
            prices = prices * np.exp(drift_term + shock_scale * shocks[:, day])
        return prices
