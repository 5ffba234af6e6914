"""
Main signal engine coordinator.

Owns the rolling price history, the volatility estimate and the single
tracked position, and drives the per-bar pipeline:
Bar → Volatility → Monte Carlo + Option values → Decision → Position update.

Each engine is an explicitly constructed, caller-owned instance. Calls
must not overlap: the history and position state are mutated in place.
"""

from collections import deque
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.defaults import EngineParams
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator, ValidationError
from .data.models import PriceHistory
from .data.validators import build_bar
from .errors import ConfigurationError, MalformedDataError, SimulationError
from .metrics.volatility import VolatilityEstimator
from .models.analysis import BarAnalysis
from .pricing.black_scholes import OptionPricer
from .signals.generator import SignalGenerator
from .signals.models import TradingSignal
from .simulation.gbm import PathSimulator, RandomSource
from .state.models import PositionState
from .state.position import PositionMonitor

logger = structlog.get_logger(__name__)

ENGINE_PARAM_NAMES = frozenset(f.name for f in fields(EngineParams))


class SignalEngine:
    """
    Per-bar Monte Carlo / Black-Scholes signal engine for one instrument.

    Manages the evaluation pipeline:
    Bar → PriceHistory → VolatilityEstimator → SignalGenerator → PositionMonitor
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        seed: Optional[int] = None,
        random_source: Optional[RandomSource] = None,
    ) -> None:
        """
        Initialize the signal engine.

        Args:
            config_dir: Directory holding engine.yaml overrides
            overrides: Nested config overrides, e.g. {"engine": {"lookback_period": 100}}
            seed: Seed for the Monte Carlo random source (non-reproducible if None)
            random_source: Pre-built random source, takes precedence over seed

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        self.logger = logger

        self.config_loader = ConfigLoader.create(config_dir)
        self.config = self.config_loader.build_config(overrides)
        engine_params = self.config.engine

        self.random_source = random_source or RandomSource(seed)

        # Rolling state owned by the engine
        self.history = PriceHistory(lookback_period=engine_params.lookback_period)
        self.volatility_history: deque = deque(maxlen=engine_params.lookback_period)

        # Components
        self.volatility_estimator = VolatilityEstimator(self.history, self.config.volatility)
        self.simulator = PathSimulator(self.random_source, self.config.simulation)
        self.pricer = OptionPricer(self.config.options)
        self.signal_generator = SignalGenerator(
            simulator=self.simulator,
            pricer=self.pricer,
            engine_params=engine_params,
            simulation_params=self.config.simulation,
            signal_params=self.config.signal,
        )
        self.position_monitor = PositionMonitor(
            stop_loss_percent=engine_params.stop_loss_percent,
            take_profit_percent=engine_params.take_profit_percent,
        )

        self.bars_processed = 0
        self.bars_rejected = 0

        self.logger.info(
            "Signal engine initialized",
            seed=seed,
            entropy=self.random_source.entropy,
            **self._params_dict(engine_params)
        )

    @property
    def params(self) -> EngineParams:
        """Current caller-facing parameters."""
        return self.config.engine

    @property
    def current_volatility(self) -> float:
        return self.volatility_estimator.current_volatility

    @property
    def position(self) -> PositionState:
        return self.position_monitor.state

    def analyze_bar(
        self,
        open_: float,
        high: float,
        low: float,
        close: float,
        volume: float,
        bar_index: int,
    ) -> BarAnalysis:
        """
        Analyze a single price bar.

        Only `close` is scored; the other fields are accepted for
        compatibility with bar-oriented callers.

        Args:
            open_, high, low, close, volume: Bar values
            bar_index: Host bar number

        Returns:
            BarAnalysis with action, strengths and confidence
        """
        try:
            bar = build_bar(open_, high, low, close, volume, bar_index)
        except MalformedDataError as e:
            self.bars_rejected += 1
            self.logger.warning(
                "Rejected bar with unusable close",
                bar_index=bar_index,
                error=str(e),
                error_type=type(e).__name__,
                field=e.field,
                value=e.value
            )
            return BarAnalysis.rejected(bar_index)

        volatility = self.volatility_estimator.update(bar.close)
        self.volatility_history.append(volatility)

        try:
            signal = self.signal_generator.generate(
                bar.close, self.history.prices, self.history.returns, volatility
            )
        except SimulationError as e:
            self.logger.error(
                "Simulation failed, holding for this bar",
                bar_index=bar_index,
                error=str(e),
                simulations=e.simulations,
                non_finite_count=e.non_finite_count,
                context=e.context
            )
            signal = TradingSignal.hold()

        position_closed = self.position_monitor.on_price_update(bar.close)
        self.bars_processed += 1

        analysis = BarAnalysis.from_signal(signal, bar_index, volatility, position_closed)
        self.logger.debug(
            "Analyzed bar",
            close=bar.close,
            history_size=len(self.history.prices),
            **analysis.to_dict()
        )
        return analysis

    # Position interface

    def open_position(self, entry_price: float, quantity: float) -> PositionState:
        """Open (or replace) the tracked position; sign of quantity gives direction."""
        return self.position_monitor.open(entry_price, quantity)

    def reset_position(self) -> None:
        """Drop the tracked position."""
        self.position_monitor.reset()

    def get_unrealized_pnl(self) -> float:
        """Unrealized P&L in currency (price delta times quantity)."""
        return self.position_monitor.unrealized_pnl

    def should_close_position(self) -> bool:
        return self.position_monitor.should_close()

    # Configuration interface

    def configure(self, **params: Any) -> EngineParams:
        """
        Update engine parameters between bars.

        All parameters are validated together; on any error nothing is
        applied and the previous settings stay in effect.

        Raises:
            ConfigurationError: If any parameter is unknown or invalid
        """
        errors = [
            ValidationError(field=name, message="Unknown parameter", value=value)
            for name, value in params.items() if name not in ENGINE_PARAM_NAMES
        ]
        errors.extend(ConfigValidator.validate_engine_params(params))

        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            self.logger.error(
                "Engine parameter update rejected",
                errors=error_msgs
            )
            raise ConfigurationError("Invalid engine parameters", validation_errors=errors)

        new_params = replace(self.config.engine, **params)
        self._apply_engine_params(new_params)

        self.logger.info(
            "Engine parameters updated",
            changed=sorted(params),
            **self._params_dict(new_params)
        )
        return new_params

    def set_risk_free_rate(self, rate: float) -> None:
        self.configure(risk_free_rate=rate)

    def set_max_position_size(self, size: float) -> None:
        self.configure(max_position_size=size)

    def set_stop_loss(self, percent: float) -> None:
        self.configure(stop_loss_percent=percent)

    def set_take_profit(self, percent: float) -> None:
        self.configure(take_profit_percent=percent)

    def set_lookback_period(self, period: int) -> None:
        self.configure(lookback_period=period)

    def set_monte_carlo_simulations(self, simulations: int) -> None:
        self.configure(monte_carlo_simulations=simulations)

    def set_parameters(
        self,
        risk_free_rate: float,
        max_position_size: float,
        stop_loss: float,
        take_profit: float,
        lookback_period: int,
        monte_carlo_simulations: int,
    ) -> None:
        """Set all six caller parameters at once (all or nothing)."""
        self.configure(
            risk_free_rate=risk_free_rate,
            max_position_size=max_position_size,
            stop_loss_percent=stop_loss,
            take_profit_percent=take_profit,
            lookback_period=lookback_period,
            monte_carlo_simulations=monte_carlo_simulations,
        )

    def _apply_engine_params(self, new_params: EngineParams) -> None:
        old_params = self.config.engine
        self.config = replace(self.config, engine=new_params)

        if new_params.lookback_period != old_params.lookback_period:
            self.history.resize(new_params.lookback_period)
            self.volatility_history = deque(self.volatility_history, maxlen=new_params.lookback_period)

        self.signal_generator.engine_params = new_params
        self.position_monitor.stop_loss_percent = new_params.stop_loss_percent
        self.position_monitor.take_profit_percent = new_params.take_profit_percent

    @staticmethod
    def _params_dict(params: EngineParams) -> dict[str, Any]:
        return {name: getattr(params, name) for name in sorted(ENGINE_PARAM_NAMES)}

    def get_runtime_stats(self) -> dict[str, Any]:
        """Get runtime statistics."""
        position = self.position_monitor.state
        return {
            'bars_processed': self.bars_processed,
            'bars_rejected': self.bars_rejected,
            'price_history_size': len(self.history.prices),
            'return_history_size': len(self.history.returns),
            'volatility_history_size': len(self.volatility_history),
            'current_volatility': self.current_volatility,
            'position_status': position.status.value,
            'position_quantity': position.quantity,
            'unrealized_pnl': position.unrealized_pnl,
            'last_close_reason': (
                self.position_monitor.last_close_reason.value
                if self.position_monitor.last_close_reason else None
            ),
        }
