# src/tradejournal/analytics/equity_curve_builder.py
"""Builder for the equity curve and its drawdown profile."""
import logging
from datetime import datetime, time
from typing import Sequence

from tradejournal.analytics.models import (
    DrawdownSummary,
    EquityCurvePolicy,
    EquityPoint,
    NormalizedTrade,
)
from tradejournal.analytics.settings import AnalyticsSettings

logger = logging.getLogger(__name__)


class EquityCurveBuilder:
    """Walks trades in realization order accumulating equity and drawdown.

    Trades are ordered by exit_time, the moment their P&L is realized.
    Trades sharing an exit_time keep their input order.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        """Initialize the builder.

        Args:
            settings: Analytics configuration, defaults when omitted.
        """
        self._settings = settings or AnalyticsSettings()

    def build(
        self,
        trades: Sequence[NormalizedTrade],
        initial_capital: float | None = None,
        policy: EquityCurvePolicy | None = None,
    ) -> list[EquityPoint]:
        """Build the equity curve.

        Args:
            trades: Normalized trades in any order.
            initial_capital: Starting equity, settings default when omitted.
            policy: One point per trade or per day, settings default when omitted.

        Returns:
            Equity points in ascending date order, empty for no trades.
        """
        if not trades:
            return []

        capital = self._settings.initial_capital if initial_capital is None else initial_capital
        policy = policy or self._settings.equity_curve_policy

        ordered = sorted(trades, key=lambda t: t.exit_time)

        if policy == EquityCurvePolicy.PER_DAY:
            steps = self._daily_steps(ordered)
        else:
            steps = [(t.exit_time, t.profit_loss, 1) for t in ordered]

        curve: list[EquityPoint] = []
        equity = capital
        peak = capital

        for step_date, pnl, trade_count in steps:
            equity += pnl
            if equity > peak:
                peak = equity
            drawdown = peak - equity
            drawdown_percent = drawdown / peak * 100 if peak > 0 else 0.0

            curve.append(
                EquityPoint(
                    date=step_date,
                    equity=equity,
                    cumulative_pnl=equity - capital,
                    daily_pnl=pnl,
                    drawdown=drawdown,
                    drawdown_percent=drawdown_percent,
                    trade_count=trade_count,
                )
            )

        logger.debug(f"Built equity curve with {len(curve)} points ({policy.value})")
        return curve

    def summarize(self, curve: Sequence[EquityPoint]) -> DrawdownSummary:
        """Read drawdown figures off an equity curve.

        max_drawdown_percent is the percentage at the point where the
        absolute drawdown peaks (first such point), not an independent max.

        Args:
            curve: Output of build().

        Returns:
            DrawdownSummary, all zeros for an empty curve.
        """
        if not curve:
            return DrawdownSummary(
                max_drawdown=0.0,
                max_drawdown_percent=0.0,
                max_drawdown_duration_days=0,
                current_drawdown=0.0,
            )

        max_index = 0
        for index, point in enumerate(curve):
            if point.drawdown > curve[max_index].drawdown:
                max_index = index

        return DrawdownSummary(
            max_drawdown=curve[max_index].drawdown,
            max_drawdown_percent=curve[max_index].drawdown_percent,
            max_drawdown_duration_days=self._max_duration_days(curve),
            current_drawdown=curve[-1].drawdown,
        )

    def _daily_steps(
        self, ordered: list[NormalizedTrade]
    ) -> list[tuple[datetime, float, int]]:
        """Collapse chronologically ordered trades into one step per exit date."""
        steps: list[tuple[datetime, float, int]] = []

        for trade in ordered:
            day = datetime.combine(trade.exit_time.date(), time.min)
            if steps and steps[-1][0] == day:
                _, pnl, count = steps[-1]
                steps[-1] = (day, pnl + trade.profit_loss, count + 1)
            else:
                steps.append((day, trade.profit_loss, 1))

        return steps

    def _max_duration_days(self, curve: Sequence[EquityPoint]) -> int:
        """Longest span in days from a running peak to recovery or curve end."""
        peak_date = curve[0].date
        longest = 0

        for point in curve:
            if point.drawdown == 0:
                peak_date = point.date
                continue
            longest = max(longest, (point.date - peak_date).days)

        return longest
