"""
Signal generation from Monte Carlo statistics and option values.

Per bar the generator estimates drift from recent returns, simulates a
batch of terminal prices, values the OTM call/put pair and fuses these
into a TradingSignal. Buy gates all have to pass; any single sell trigger
fires a sell when the buy gates fail.
"""

from collections.abc import Sequence
from typing import Optional

from ..config.defaults import EngineParams, OptionParams, SignalParams, SimulationParams
from ..logging.config import get_signal_logger, log_signal_decision
from ..metrics.volatility import calculate_drift
from ..pricing.black_scholes import OptionPricer
from ..simulation.gbm import PathSimulator
from .models import SignalInputs, TradeAction, TradingSignal

signal_logger = get_signal_logger(__name__)


def buy_gates_pass(inputs: SignalInputs, params: SignalParams) -> bool:
    """All buy conditions hold."""
    return (
        inputs.expected_return > params.buy_min_expected_return
        and inputs.profit_probability > params.buy_min_profit_probability
        and inputs.volatility < params.buy_max_volatility
        and inputs.call_signal > params.buy_min_call_signal
    )


def sell_triggers(inputs: SignalInputs, params: SignalParams) -> list[str]:
    """Names of the sell conditions that fired."""
    fired = []
    if inputs.expected_return < params.sell_max_expected_return:
        fired.append("expected_return")
    if inputs.loss_probability > params.sell_min_loss_probability:
        fired.append("loss_probability")
    if inputs.volatility > params.sell_min_volatility:
        fired.append("volatility")
    if inputs.put_signal > params.sell_min_put_signal:
        fired.append("put_signal")
    return fired


def calculate_confidence(simulations: int, params: SignalParams) -> float:
    """Simulation adequacy proxy: saturates at 1.0 once enough paths ran."""
    return min(1.0, simulations / float(params.confidence_saturation))


def fuse_signal(inputs: SignalInputs, params: Optional[SignalParams] = None) -> TradingSignal:
    """
    Apply the decision rule to already computed inputs.

    Buy is checked first. Sell is only considered when a buy gate fails.

    Returns:
        TradingSignal with the strength of the chosen side, Hold otherwise
    """
    params = params or SignalParams()
    confidence = calculate_confidence(inputs.simulations, params)

    if buy_gates_pass(inputs, params):
        raw = inputs.expected_return * inputs.profit_probability * inputs.call_signal
        return TradingSignal(
            action=TradeAction.BUY,
            buy_strength=min(1.0, raw / params.strength_scale),
            confidence=confidence,
            inputs=inputs,
        )

    if sell_triggers(inputs, params):
        raw = abs(inputs.expected_return) * inputs.loss_probability * inputs.put_signal
        return TradingSignal(
            action=TradeAction.SELL,
            sell_strength=min(1.0, raw / params.strength_scale),
            confidence=confidence,
            inputs=inputs,
        )

    return TradingSignal.hold(confidence=confidence, inputs=inputs)


class SignalGenerator:
    """Combines volatility, simulated outcomes and option values into a decision."""

    def __init__(
        self,
        simulator: PathSimulator,
        pricer: Optional[OptionPricer] = None,
        engine_params: Optional[EngineParams] = None,
        simulation_params: Optional[SimulationParams] = None,
        signal_params: Optional[SignalParams] = None,
    ) -> None:
        self.simulator = simulator
        self.pricer = pricer or OptionPricer(OptionParams())
        self.engine_params = engine_params or EngineParams()
        self.simulation_params = simulation_params or SimulationParams()
        self.signal_params = signal_params or SignalParams()

    def generate(
        self,
        current_price: float,
        prices: Sequence[float],
        returns: Sequence[float],
        volatility: float,
    ) -> TradingSignal:
        """
        Produce the trading signal for the current bar.

        Args:
            current_price: Latest close
            prices: Rolling price series (including current_price)
            returns: Rolling log-return series
            volatility: Current annualized volatility estimate

        Returns:
            TradingSignal; zero Hold when history is shorter than min_history
        """
        if len(prices) < self.engine_params.min_history:
            signal_logger.debug(
                "Insufficient history for signal",
                available=len(prices),
                required=self.engine_params.min_history
            )
            return TradingSignal.hold()

        inputs = self.compute_inputs(current_price, returns, volatility)
        signal = fuse_signal(inputs, self.signal_params)

        if signal.action == TradeAction.BUY:
            reason = "buy_gates_passed"
        elif signal.action == TradeAction.SELL:
            reason = "sell_triggered:" + ",".join(sell_triggers(inputs, self.signal_params))
        else:
            reason = "no_rule_matched"

        log_signal_decision(
            signal_logger,
            action=signal.action.value,
            buy_strength=signal.buy_strength,
            sell_strength=signal.sell_strength,
            confidence=signal.confidence,
            reason=reason,
            context=inputs.as_dict()
        )
        return signal

    def compute_inputs(self, current_price: float, returns: Sequence[float],
                       volatility: float) -> SignalInputs:
        """Run the simulation and option valuation behind a decision."""
        drift = calculate_drift(
            returns,
            window=self.simulation_params.drift_window,
            trading_days_per_year=self.simulation_params.trading_days_per_year,
        )

        n_sims = self.engine_params.monte_carlo_simulations
        batch = self.simulator.simulate(
            current_price, drift, volatility, self.simulation_params.horizon_days, n_sims
        )

        valuation = self.pricer.value(current_price, self.engine_params.risk_free_rate, volatility)
        normalizer = current_price * self.pricer.params.moneyness_offset

        return SignalInputs(
            expected_return=batch.expected_return(),
            profit_probability=batch.probability_above(current_price * (1.0 + self.signal_params.profit_band)),
            loss_probability=batch.probability_below(current_price * (1.0 - self.signal_params.loss_band)),
            volatility=volatility,
            call_signal=valuation.call_value / normalizer,
            put_signal=valuation.put_value / normalizer,
            simulations=batch.size,
            drift=drift,
            mean_price=batch.mean_price(),
        )
