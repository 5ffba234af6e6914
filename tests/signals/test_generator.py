"""Tests for signal generation and decision fusion."""

from unittest.mock import Mock

import numpy as np
import pytest

from qsignal_app.config.defaults import EngineParams, OptionParams, SignalParams
from qsignal_app.pricing.black_scholes import OptionPricer, OptionValuation
from qsignal_app.signals.generator import (
    SignalGenerator,
    buy_gates_pass,
    calculate_confidence,
    fuse_signal,
    sell_triggers,
)
from qsignal_app.signals.models import SignalInputs, TradeAction
from qsignal_app.simulation.gbm import PathSimulator, RandomSource, SimulationBatch


def make_inputs(**overrides) -> SignalInputs:
    values = {
        "expected_return": 0.0,
        "profit_probability": 0.3,
        "loss_probability": 0.3,
        "volatility": 0.2,
        "call_signal": 0.2,
        "put_signal": 0.2,
        "simulations": 1000,
    }
    values.update(overrides)
    return SignalInputs(**values)


def engineered_batch(current_price: float = 100.0) -> SimulationBatch:
    """1000 outcomes: 70% at +15%, the rest placed so the mean is +10%."""
    upside = [current_price * 1.15] * 700
    rest = [(current_price * 1.10 * 1000 - sum(upside)) / 300] * 300
    return SimulationBatch(
        terminal_prices=np.array(upside + rest),
        initial_price=current_price,
        drift=0.0,
        volatility=0.30,
        days=21,
    )


def stub_pricer(call_value: float, put_value: float) -> Mock:
    pricer = Mock(spec=OptionPricer)
    pricer.params = OptionParams()
    pricer.value.return_value = OptionValuation(
        call_value=call_value,
        put_value=put_value,
        call_strike=105.0,
        put_strike=95.0,
        time_to_expiry=30 / 365,
    )
    return pricer


class TestFuseSignal:
    """Test the decision rule on engineered inputs"""

    def test_engineered_buy(self):
        inputs = make_inputs(
            expected_return=0.10,
            profit_probability=0.70,
            loss_probability=0.0,
            volatility=0.30,
            call_signal=0.35,
        )

        signal = fuse_signal(inputs)

        assert signal.action == TradeAction.BUY
        assert signal.buy_strength == pytest.approx(min(1.0, (0.10 * 0.70 * 0.35) / 0.15))
        assert signal.buy_strength == pytest.approx(0.163, abs=5e-4)
        assert signal.sell_strength == 0.0
        assert signal.confidence == 1.0

    def test_buy_checked_before_sell(self):
        """A sell trigger does not matter when every buy gate passes"""
        inputs = make_inputs(
            expected_return=0.10,
            profit_probability=0.70,
            volatility=0.30,
            call_signal=0.35,
            put_signal=0.5,
        )

        assert fuse_signal(inputs).action == TradeAction.BUY

    def test_buy_strength_clamped(self):
        inputs = make_inputs(
            expected_return=0.5,
            profit_probability=0.9,
            volatility=0.3,
            call_signal=1.0,
        )

        assert fuse_signal(inputs).buy_strength == 1.0

    @pytest.mark.parametrize("field,value", [
        ("expected_return", 0.08),
        ("profit_probability", 0.6),
        ("volatility", 0.4),
        ("call_signal", 0.3),
    ])
    def test_buy_gates_are_strict(self, field, value):
        values = {
            "expected_return": 0.10,
            "profit_probability": 0.70,
            "volatility": 0.30,
            "call_signal": 0.35,
        }
        values[field] = value

        assert not buy_gates_pass(make_inputs(**values), SignalParams())

    def test_sell_on_negative_expected_return(self):
        inputs = make_inputs(expected_return=-0.10, loss_probability=0.7, put_signal=0.5)

        signal = fuse_signal(inputs)

        assert signal.action == TradeAction.SELL
        assert signal.sell_strength == pytest.approx(0.10 * 0.7 * 0.5 / 0.15)
        assert signal.buy_strength == 0.0

    def test_sell_strength_clamped(self):
        inputs = make_inputs(expected_return=-0.5, loss_probability=0.9, put_signal=1.0)
        assert fuse_signal(inputs).sell_strength == 1.0

    def test_sell_on_high_volatility_with_zero_strength(self):
        """A sell can fire with zero strength when no outcome falls below the band"""
        inputs = make_inputs(volatility=0.7, loss_probability=0.0)

        signal = fuse_signal(inputs)

        assert signal.action == TradeAction.SELL
        assert signal.sell_strength == 0.0
        assert signal.buy_strength == 0.0

    def test_sell_triggers_listed(self):
        inputs = make_inputs(expected_return=-0.06, loss_probability=0.61,
                             volatility=0.61, put_signal=0.41)

        assert sell_triggers(inputs, SignalParams()) == [
            "expected_return", "loss_probability", "volatility", "put_signal"
        ]

    def test_hold_when_no_rule_matches(self):
        signal = fuse_signal(make_inputs())

        assert signal.action == TradeAction.HOLD
        assert signal.buy_strength == 0.0
        assert signal.sell_strength == 0.0
        assert signal.confidence == 1.0

    def test_confidence_from_simulation_count(self):
        params = SignalParams()
        assert calculate_confidence(500, params) == 0.5
        assert calculate_confidence(1000, params) == 1.0
        assert calculate_confidence(5000, params) == 1.0

    def test_inputs_attached_to_signal(self):
        inputs = make_inputs()
        assert fuse_signal(inputs).inputs is inputs


class TestSignalGenerator:
    """Test the SignalGenerator pipeline"""

    def test_insufficient_history_returns_zero_hold(self):
        simulator = Mock(spec=PathSimulator)
        generator = SignalGenerator(simulator, stub_pricer(1.0, 1.0))

        signal = generator.generate(100.0, [100.0] * 29, [0.0] * 28, 0.2)

        assert signal.action == TradeAction.HOLD
        assert (signal.buy_strength, signal.sell_strength, signal.confidence) == (0.0, 0.0, 0.0)
        simulator.simulate.assert_not_called()

    def test_engineered_batch_and_valuation_give_buy(self):
        simulator = Mock(spec=PathSimulator)
        simulator.simulate.return_value = engineered_batch(100.0)
        # call_signal = 1.75 / (100 * 0.05) = 0.35
        generator = SignalGenerator(simulator, stub_pricer(call_value=1.75, put_value=0.5))

        signal = generator.generate(100.0, [100.0] * 30, [0.0] * 29, 0.30)

        assert signal.action == TradeAction.BUY
        assert signal.inputs.expected_return == pytest.approx(0.10)
        assert signal.inputs.profit_probability == 0.7
        assert signal.inputs.loss_probability == 0.0
        assert signal.inputs.call_signal == pytest.approx(0.35)
        assert signal.inputs.put_signal == pytest.approx(0.1)
        assert signal.buy_strength == pytest.approx(0.10 * 0.70 * 0.35 / 0.15, rel=1e-9)
        assert signal.confidence == 1.0

    def test_simulation_request(self):
        simulator = Mock(spec=PathSimulator)
        simulator.simulate.return_value = engineered_batch(100.0)
        pricer = stub_pricer(0.0, 0.0)
        generator = SignalGenerator(simulator, pricer,
                                    engine_params=EngineParams(monte_carlo_simulations=400,
                                                               risk_free_rate=0.03))

        returns = [0.5] * 10 + [0.001] * 21
        generator.generate(100.0, [100.0] * 32, returns, 0.25)

        simulator.simulate.assert_called_once()
        price, drift, volatility, days, n_sims = simulator.simulate.call_args.args
        assert price == 100.0
        assert drift == pytest.approx(0.001 * 252)
        assert volatility == 0.25
        assert days == 21
        assert n_sims == 400
        pricer.value.assert_called_once_with(100.0, 0.03, 0.25)

    def test_drift_zero_with_short_return_history(self):
        simulator = Mock(spec=PathSimulator)
        simulator.simulate.return_value = engineered_batch(100.0)
        generator = SignalGenerator(simulator, stub_pricer(0.0, 0.0),
                                    engine_params=EngineParams(min_history=5))

        generator.generate(100.0, [100.0] * 10, [0.01] * 9, 0.25)

        assert simulator.simulate.call_args.args[1] == 0.0

    def test_zero_volatility_uptrend_holds(self):
        """sigma = 0: deterministic paths and intrinsic option values"""
        generator = SignalGenerator(PathSimulator(RandomSource(1)), OptionPricer())

        returns = [0.004] * 29
        signal = generator.generate(100.0, [100.0] * 30, returns, 0.0)

        assert signal.inputs.profit_probability == 1.0
        assert signal.inputs.call_signal == 0.0
        assert signal.inputs.put_signal == 0.0
        assert signal.action == TradeAction.HOLD

    def test_seeded_generators_agree(self):
        prices = [100.0 + i * 0.5 for i in range(40)]
        returns = [0.004] * 39

        first = SignalGenerator(PathSimulator(RandomSource(8))).generate(prices[-1], prices, returns, 0.25)
        second = SignalGenerator(PathSimulator(RandomSource(8))).generate(prices[-1], prices, returns, 0.25)

        assert first == second
