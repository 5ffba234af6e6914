"""Integration tests for the complete bar-to-decision pipeline."""

import pytest

from qsignal_app.engine import SignalEngine
from qsignal_app.signals.models import TradeAction
from qsignal_app.state.models import PositionStatus


class TestFullPipeline:
    """Feed realistic series through analyze_bar and check the outputs."""

    def test_spy_like_series(self, seeded_engine, price_series, feed_engine) -> None:
        results = feed_engine(seeded_engine, price_series)

        assert len(results) == 100
        for analysis in results[:29]:
            assert analysis.as_legacy_tuple() == (0, 0.0, 0.0, 0.0)

        for analysis in results[29:]:
            code, buy, sell, confidence = analysis.as_legacy_tuple()
            assert code in (1, -1, 0)
            assert 0.0 <= buy <= 1.0
            assert 0.0 <= sell <= 1.0
            assert confidence == 1.0
            if code == 1:
                assert sell == 0.0
            elif code == -1:
                assert buy == 0.0
            else:
                assert buy == 0.0 and sell == 0.0

        stats = seeded_engine.get_runtime_stats()
        assert stats['bars_processed'] == 100
        assert stats['price_history_size'] == 100

    def test_volatility_reflects_series(self, seeded_engine, price_series, feed_engine) -> None:
        feed_engine(seeded_engine, price_series)

        # 1.5% daily volatility annualizes to roughly 24%
        assert 0.15 < seeded_engine.current_volatility < 0.35

    def test_steady_uptrend_holds(self, seeded_engine, make_trend, feed_engine) -> None:
        """Zero volatility makes both OTM options worthless, so the buy gate fails"""
        results = feed_engine(seeded_engine, make_trend(60, daily_factor=1.01))

        for analysis in results[29:]:
            assert analysis.action == TradeAction.HOLD
            assert analysis.confidence == 1.0
        assert seeded_engine.current_volatility == pytest.approx(0.0, abs=1e-9)

    def test_steady_downtrend_sells(self, seeded_engine, make_trend, feed_engine) -> None:
        results = feed_engine(seeded_engine, make_trend(60, daily_factor=0.99))

        for analysis in results[29:]:
            assert analysis.action == TradeAction.SELL
            assert analysis.buy_strength == 0.0
            assert analysis.as_legacy_tuple()[0] == -1

    def test_position_managed_alongside_signals(self, seeded_engine, make_prices, feed_engine) -> None:
        prices = make_prices(60, start=400.0, seed=11)
        feed_engine(seeded_engine, prices[:40])

        seeded_engine.open_position(prices[39], 100)
        assert seeded_engine.position.status == PositionStatus.OPEN

        entry = prices[39]
        crash = feed_engine(seeded_engine, [entry * 0.97, entry * 0.94], start_index=41)

        assert crash[0].position_closed is False
        assert crash[1].position_closed is True
        assert seeded_engine.position.status == PositionStatus.FLAT
        assert seeded_engine.get_runtime_stats()['last_close_reason'] == 'stop_loss'

    def test_runtime_reconfiguration(self, tmp_path, price_series, feed_engine) -> None:
        engine = SignalEngine(config_dir=tmp_path, seed=21)
        feed_engine(engine, price_series[:40])

        engine.set_monte_carlo_simulations(500)
        results = feed_engine(engine, price_series[40:45], start_index=41)

        assert all(r.confidence == 0.5 for r in results)

    def test_yaml_configuration(self, tmp_path, price_series, feed_engine) -> None:
        (tmp_path / "engine.yaml").write_text(
            "engine:\n"
            "  monte_carlo_simulations: 200\n"
            "  lookback_period: 60\n"
        )
        engine = SignalEngine(config_dir=tmp_path, seed=8)

        results = feed_engine(engine, price_series)

        assert results[-1].confidence == 0.2
        assert len(engine.history.prices) == 60
