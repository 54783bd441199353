# src/tradejournal/analytics/metrics_calculator.py
"""Calculator for trading performance metrics."""
import math
from typing import Sequence

from tradejournal.analytics.equity_curve_builder import EquityCurveBuilder
from tradejournal.analytics.models import (
    EquityCurvePolicy,
    NormalizedTrade,
    PerformanceMetrics,
)
from tradejournal.analytics.settings import AnalyticsSettings


def win_rate(winning_trades: int, losing_trades: int) -> float:
    """Win rate in percent over decided trades, 0 when none are decided."""
    decided = winning_trades + losing_trades
    return winning_trades / decided * 100 if decided > 0 else 0.0


def guarded_ratio(numerator: float, denominator: float, no_loss_ratio: float) -> float:
    """Divide two non-negative amounts without producing inf or NaN.

    Returns no_loss_ratio when there is a numerator but no denominator,
    and 0 when the numerator is 0.
    """
    if numerator <= 0:
        return 0.0
    if denominator <= 0:
        return no_loss_ratio
    return numerator / denominator


class MetricsCalculator:
    """Calculates summary performance metrics from normalized trades."""

    def __init__(
        self,
        settings: AnalyticsSettings | None = None,
        equity_builder: EquityCurveBuilder | None = None,
    ) -> None:
        """Initialize the calculator.

        Args:
            settings: Analytics configuration, defaults when omitted.
            equity_builder: Source of drawdown figures, built from settings
                when omitted.
        """
        self._settings = settings or AnalyticsSettings()
        self._equity_builder = equity_builder or EquityCurveBuilder(self._settings)

    def calculate(
        self,
        trades: Sequence[NormalizedTrade],
        initial_capital: float | None = None,
    ) -> PerformanceMetrics:
        """Calculate performance metrics.

        Args:
            trades: Normalized trades to analyze.
            initial_capital: Starting equity for drawdown figures.

        Returns:
            PerformanceMetrics with all calculated values.
        """
        if not trades:
            return self._empty_metrics()

        capital = self._settings.initial_capital if initial_capital is None else initial_capital
        no_loss_ratio = self._settings.no_loss_ratio

        winners = [t for t in trades if t.is_win]
        losers = [t for t in trades if t.is_loss]

        total_trades = len(trades)
        winning_trades = len(winners)
        losing_trades = len(losers)
        breakeven_trades = total_trades - winning_trades - losing_trades

        gross_profit = sum(t.profit_loss for t in winners)
        gross_loss = abs(sum(t.profit_loss for t in losers))

        average_win = gross_profit / winning_trades if winning_trades > 0 else 0.0
        average_loss = gross_loss / losing_trades if losing_trades > 0 else 0.0

        total_pnl = sum(t.profit_loss for t in trades)

        # Drawdown comes from the equity curve so both views agree.
        curve = self._equity_builder.build(trades, capital)
        drawdown = self._equity_builder.summarize(curve)

        r_values = [t.r_multiple for t in trades if t.r_multiple is not None]
        average_r = sum(r_values) / len(r_values) if r_values else 0.0

        max_wins, max_losses = self._max_streaks(trades)
        sharpe_ratio, sortino_ratio = self._risk_adjusted_ratios(trades, capital)

        return PerformanceMetrics(
            total_trades=total_trades,
            winning_trades=winning_trades,
            losing_trades=losing_trades,
            breakeven_trades=breakeven_trades,
            win_rate=win_rate(winning_trades, losing_trades),
            profit_factor=guarded_ratio(gross_profit, gross_loss, no_loss_ratio),
            risk_reward_ratio=guarded_ratio(average_win, average_loss, no_loss_ratio),
            expected_value=total_pnl / total_trades,
            total_pnl=total_pnl,
            gross_profit=gross_profit,
            gross_loss=gross_loss,
            average_win=average_win,
            average_loss=average_loss,
            largest_win=max((t.profit_loss for t in winners), default=0.0),
            largest_loss=min((t.profit_loss for t in losers), default=0.0),
            average_r_multiple=average_r,
            max_drawdown=drawdown.max_drawdown,
            max_drawdown_percent=drawdown.max_drawdown_percent,
            max_drawdown_duration_days=drawdown.max_drawdown_duration_days,
            current_drawdown=drawdown.current_drawdown,
            sharpe_ratio=sharpe_ratio,
            sortino_ratio=sortino_ratio,
            average_holding_days=sum(t.holding_days for t in trades) / total_trades,
            max_consecutive_wins=max_wins,
            max_consecutive_losses=max_losses,
        )

    def _empty_metrics(self) -> PerformanceMetrics:
        """Return metrics with zero values for an empty trade list."""
        return PerformanceMetrics(
            total_trades=0,
            winning_trades=0,
            losing_trades=0,
            breakeven_trades=0,
            win_rate=0.0,
            profit_factor=0.0,
            risk_reward_ratio=0.0,
            expected_value=0.0,
            total_pnl=0.0,
            gross_profit=0.0,
            gross_loss=0.0,
            average_win=0.0,
            average_loss=0.0,
            largest_win=0.0,
            largest_loss=0.0,
            average_r_multiple=0.0,
            max_drawdown=0.0,
            max_drawdown_percent=0.0,
            max_drawdown_duration_days=0,
            current_drawdown=0.0,
            sharpe_ratio=0.0,
            sortino_ratio=0.0,
            average_holding_days=0.0,
            max_consecutive_wins=0,
            max_consecutive_losses=0,
        )

    def _max_streaks(self, trades: Sequence[NormalizedTrade]) -> tuple[int, int]:
        """Longest runs of wins and losses in realization order.

        A break-even trade ends both runs.
        """
        max_wins = max_losses = 0
        current_wins = current_losses = 0

        for trade in sorted(trades, key=lambda t: t.exit_time):
            if trade.is_win:
                current_wins += 1
                current_losses = 0
            elif trade.is_loss:
                current_losses += 1
                current_wins = 0
            else:
                current_wins = current_losses = 0
            max_wins = max(max_wins, current_wins)
            max_losses = max(max_losses, current_losses)

        return max_wins, max_losses

    def _daily_returns(
        self, trades: Sequence[NormalizedTrade], capital: float
    ) -> list[float]:
        """Daily returns as day P&L over the equity at the start of the day."""
        daily_curve = self._equity_builder.build(
            trades, capital, policy=EquityCurvePolicy.PER_DAY
        )

        returns: list[float] = []
        for point in daily_curve:
            start_equity = point.equity - point.daily_pnl
            returns.append(point.daily_pnl / start_equity if start_equity > 0 else 0.0)

        return returns

    def _risk_adjusted_ratios(
        self, trades: Sequence[NormalizedTrade], capital: float
    ) -> tuple[float, float]:
        """Calculate annualized Sharpe and Sortino ratios from daily returns.

        Args:
            trades: Normalized trades.
            capital: Starting equity.

        Returns:
            Tuple of (sharpe_ratio, sortino_ratio). Both are 0 with fewer
            than two trading days; Sortino reports the no-loss sentinel
            when no day lost money and the average excess return is positive.
        """
        returns = self._daily_returns(trades, capital)
        if len(returns) < 2:
            return 0.0, 0.0

        periods = self._settings.trading_days_per_year
        daily_risk_free = self._settings.risk_free_rate / periods
        annualization_factor = math.sqrt(periods)

        avg_return = sum(returns) / len(returns)
        excess_return = avg_return - daily_risk_free

        variance = sum((r - avg_return) ** 2 for r in returns) / (len(returns) - 1)
        std_dev = math.sqrt(variance)
        sharpe = excess_return / std_dev * annualization_factor if std_dev > 0 else 0.0

        negative_returns = [r for r in returns if r < 0]
        if not negative_returns:
            sortino = self._settings.no_loss_ratio if excess_return > 0 else 0.0
        else:
            downside_deviation = math.sqrt(
                sum(r**2 for r in negative_returns) / len(negative_returns)
            )
            sortino = excess_return / downside_deviation * annualization_factor

        return sharpe, sortino
