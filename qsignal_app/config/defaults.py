"""Default configuration parameters for the signal engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineParams:
    """Caller-facing engine parameters."""
    risk_free_rate: float = 0.02                     # Annual rate used for option pricing
    max_position_size: float = 0.10                  # Recorded only, sizing happens downstream

    # Position exits
    stop_loss_percent: float = 0.05
    take_profit_percent: float = 0.15

    # Rolling window and simulation size
    lookback_period: int = 252                       # Bars kept in price/return history
    monte_carlo_simulations: int = 1000              # Paths per bar

    min_history: int = 30                            # Prices required before scoring


@dataclass(frozen=True)
class VolatilityParams:
    """Historical volatility estimation parameters."""
    fallback_volatility: float = 0.20                # Used until min_returns observed
    min_returns: int = 10
    trading_days_per_year: int = 252


@dataclass(frozen=True)
class SimulationParams:
    """Monte Carlo path simulation parameters."""
    horizon_days: int = 21                           # Trading days simulated per path
    drift_window: int = 21                           # Returns averaged for the drift
    trading_days_per_year: int = 252
    chunk_size: int = 250                            # Paths per independent random stream
    max_workers: int = 1                             # Threads used to run chunks


@dataclass(frozen=True)
class OptionParams:
    """Option valuation parameters for the secondary signal."""
    expiry_days: int = 30
    days_per_year: int = 365
    moneyness_offset: float = 0.05                   # Strikes at spot*(1 +/- offset)


@dataclass(frozen=True)
class SignalParams:
    """Decision fusion thresholds."""
    # Outcome bands around the current price
    profit_band: float = 0.05
    loss_band: float = 0.05

    # Buy gates (all must pass)
    buy_min_expected_return: float = 0.08
    buy_min_profit_probability: float = 0.6
    buy_max_volatility: float = 0.4
    buy_min_call_signal: float = 0.3

    # Sell gates (any one fires)
    sell_max_expected_return: float = -0.05
    sell_min_loss_probability: float = 0.6
    sell_min_volatility: float = 0.6
    sell_min_put_signal: float = 0.4

    strength_scale: float = 0.15                     # Raw strength divisor
    confidence_saturation: int = 1000                # Paths needed for full confidence


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    engine: EngineParams
    volatility: VolatilityParams
    simulation: SimulationParams
    options: OptionParams
    signal: SignalParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        engine=EngineParams(),
        volatility=VolatilityParams(),
        simulation=SimulationParams(),
        options=OptionParams(),
        signal=SignalParams(),
    )
