# tests/analytics/test_metrics_calculator.py
"""Tests for MetricsCalculator."""
import math
from datetime import datetime, timedelta

import pytest

from tradejournal.analytics.equity_curve_builder import EquityCurveBuilder
from tradejournal.analytics.metrics_calculator import (
    MetricsCalculator,
    guarded_ratio,
    win_rate,
)
from tradejournal.analytics.models import Direction, NormalizedTrade, Trade
from tradejournal.analytics.settings import AnalyticsSettings
from tradejournal.analytics.trade_normalizer import TradeNormalizer

START = datetime(2026, 1, 5, 9, 30)


def make_closed_trades(pnls: list[float], risk: float | None = None) -> list[NormalizedTrade]:
    """Create one normalized trade per P&L value, one day apart."""
    normalizer = TradeNormalizer()
    trades = []
    for i, pnl in enumerate(pnls):
        entry_time = START + timedelta(days=i)
        trades.append(
            normalizer.normalize(
                Trade(
                    trade_id=str(i + 1),
                    symbol="NVDA",
                    direction=Direction.LONG,
                    entry_price=100.0,
                    exit_price=110.0,
                    quantity=10.0,
                    entry_time=entry_time,
                    exit_time=entry_time + timedelta(hours=1),
                    profit_loss=pnl,
                    risk=risk,
                )
            )
        )
    return trades


class TestHelpers:
    """Tests for the ratio helpers."""

    def test_win_rate_ignores_breakeven(self) -> None:
        assert win_rate(3, 1) == 75.0
        assert win_rate(0, 0) == 0.0

    def test_guarded_ratio(self) -> None:
        assert guarded_ratio(300.0, 150.0, 999.0) == 2.0
        assert guarded_ratio(300.0, 0.0, 999.0) == 999.0
        assert guarded_ratio(0.0, 0.0, 999.0) == 0.0
        assert guarded_ratio(0.0, 50.0, 999.0) == 0.0


class TestMetricsCalculator:
    """Tests for MetricsCalculator."""

    def test_calculate_with_no_trades(self) -> None:
        """calculate should return zero metrics when no trades are provided."""
        metrics = MetricsCalculator().calculate([])

        assert metrics.total_trades == 0
        assert metrics.winning_trades == 0
        assert metrics.losing_trades == 0
        assert metrics.win_rate == 0.0
        assert metrics.profit_factor == 0.0
        assert metrics.average_win == 0.0
        assert metrics.average_loss == 0.0
        assert metrics.total_pnl == 0.0
        assert metrics.max_drawdown == 0.0
        assert metrics.max_drawdown_percent == 0.0

    def test_single_winning_trade(self) -> None:
        """One win gives 100% win rate and the no-loss sentinel."""
        metrics = MetricsCalculator().calculate(make_closed_trades([100.0]))

        assert metrics.win_rate == 100.0
        assert metrics.profit_factor == 999.0
        assert metrics.risk_reward_ratio == 999.0
        assert metrics.max_drawdown == 0.0

    def test_sentinel_is_configurable(self) -> None:
        calculator = MetricsCalculator(AnalyticsSettings(no_loss_ratio=100.0))

        metrics = calculator.calculate(make_closed_trades([10.0, 20.0]))

        assert metrics.profit_factor == 100.0

    def test_equal_win_and_loss(self) -> None:
        """+50 then -50 gives 50% win rate, profit factor 1 and drawdown 50."""
        metrics = MetricsCalculator().calculate(make_closed_trades([50.0, -50.0]))

        assert metrics.win_rate == 50.0
        assert metrics.profit_factor == 1.0
        assert metrics.max_drawdown == 50.0

    def test_drawdown_depends_on_order(self) -> None:
        """-50 then +50 recovers and the maximum drawdown is read off the curve."""
        metrics = MetricsCalculator().calculate(
            make_closed_trades([-50.0, 50.0]), initial_capital=10000.0
        )

        assert metrics.max_drawdown == 50.0
        assert metrics.current_drawdown == 0.0
        assert metrics.max_drawdown_percent == pytest.approx(0.5)

    def test_drawdown_matches_equity_curve(self) -> None:
        trades = make_closed_trades([100.0, -300.0, 50.0, -20.0, 400.0])
        builder = EquityCurveBuilder()

        metrics = MetricsCalculator(equity_builder=builder).calculate(trades, 1000.0)
        summary = builder.summarize(builder.build(trades, 1000.0))

        assert metrics.max_drawdown == summary.max_drawdown
        assert metrics.max_drawdown_percent == summary.max_drawdown_percent

    def test_breakeven_trades_counted_in_neither(self) -> None:
        metrics = MetricsCalculator().calculate(make_closed_trades([100.0, 0.0, -50.0, 0.0]))

        assert metrics.total_trades == 4
        assert metrics.winning_trades == 1
        assert metrics.losing_trades == 1
        assert metrics.breakeven_trades == 2
        assert metrics.win_rate == 50.0

    def test_profit_factor(self) -> None:
        """Gross profit 300 over gross loss 150 is 2.0."""
        metrics = MetricsCalculator().calculate(make_closed_trades([100.0, 200.0, -50.0, -100.0]))

        assert metrics.gross_profit == 300.0
        assert metrics.gross_loss == 150.0
        assert metrics.profit_factor == 2.0

    def test_average_win_and_loss_use_absolute_losses(self) -> None:
        """Wins 100/200/300 average 200; losses -50/-150 average 100."""
        metrics = MetricsCalculator().calculate(
            make_closed_trades([100.0, 200.0, 300.0, -50.0, -150.0])
        )

        assert metrics.average_win == 200.0
        assert metrics.average_loss == 100.0
        assert metrics.risk_reward_ratio == 2.0
        assert metrics.largest_win == 300.0
        assert metrics.largest_loss == -150.0

    def test_no_wins_gives_zero_ratios(self) -> None:
        metrics = MetricsCalculator().calculate(make_closed_trades([-10.0, -20.0]))

        assert metrics.win_rate == 0.0
        assert metrics.profit_factor == 0.0
        assert metrics.risk_reward_ratio == 0.0

    def test_total_pnl_and_expected_value(self) -> None:
        metrics = MetricsCalculator().calculate(make_closed_trades([100.0, 200.0, -50.0]))

        assert metrics.total_pnl == 250.0
        assert metrics.expected_value == pytest.approx(250.0 / 3)

    def test_streaks(self) -> None:
        metrics = MetricsCalculator().calculate(
            make_closed_trades([1.0, 2.0, 3.0, -1.0, -2.0, 0.0, -3.0, 4.0])
        )

        assert metrics.max_consecutive_wins == 3
        assert metrics.max_consecutive_losses == 2

    def test_average_r_multiple(self) -> None:
        metrics = MetricsCalculator().calculate(make_closed_trades([100.0, -50.0], risk=50.0))

        assert metrics.average_r_multiple == pytest.approx(0.5)

    def test_average_holding_days(self) -> None:
        metrics = MetricsCalculator().calculate(make_closed_trades([1.0, 2.0]))

        assert metrics.average_holding_days == 1.0

    def test_risk_adjusted_ratios_need_two_days(self) -> None:
        metrics = MetricsCalculator().calculate(make_closed_trades([100.0]))

        assert metrics.sharpe_ratio == 0.0
        assert metrics.sortino_ratio == 0.0

    def test_sortino_sentinel_without_losing_days(self) -> None:
        metrics = MetricsCalculator().calculate(make_closed_trades([100.0, 200.0, 50.0]))

        assert metrics.sortino_ratio == 999.0
        assert metrics.sharpe_ratio > 0

    def test_ratios_are_finite(self) -> None:
        metrics = MetricsCalculator().calculate(make_closed_trades([100.0, -40.0, 60.0, -80.0]))

        assert math.isfinite(metrics.sharpe_ratio)
        assert math.isfinite(metrics.sortino_ratio)

    @pytest.mark.parametrize(
        "pnls",
        [[], [0.0], [5.0, -5.0, 0.0], [-1.0] * 5, [3.0, 7.0, -2.0, 0.0, 11.0]],
    )
    def test_invariants(self, pnls) -> None:
        metrics = MetricsCalculator().calculate(make_closed_trades(pnls))

        assert 0.0 <= metrics.win_rate <= 100.0
        assert metrics.winning_trades + metrics.losing_trades <= metrics.total_trades
        assert metrics.average_loss >= 0.0

    def test_calculate_is_deterministic(self) -> None:
        trades = make_closed_trades([10.0, -5.0, 7.5])
        calculator = MetricsCalculator()

        assert calculator.calculate(trades) == calculator.calculate(trades)
