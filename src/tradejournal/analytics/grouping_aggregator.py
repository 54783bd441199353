# src/tradejournal/analytics/grouping_aggregator.py
"""Group-by-key performance breakdowns."""
from datetime import datetime, time
from typing import Any, Callable, Iterable, Sequence

from tradejournal.analytics.metrics_calculator import guarded_ratio, win_rate
from tradejournal.analytics.models import Direction, GroupedPerformance, NormalizedTrade
from tradejournal.analytics.settings import AnalyticsSettings, SessionBucket

KeyFn = Callable[[NormalizedTrade], str]


def summarize_group(
    key: str,
    trades: Sequence[NormalizedTrade],
    no_loss_ratio: float,
) -> GroupedPerformance:
    """Reduce the trades of one group to a GroupedPerformance record."""
    if not trades:
        return GroupedPerformance(
            key=key,
            trades=0,
            winning_trades=0,
            losing_trades=0,
            win_rate=0.0,
            pnl=0.0,
            average_return=0.0,
            profit_factor=0.0,
            trading_days=0,
            avg_daily_pnl=0.0,
        )

    winners = [t for t in trades if t.is_win]
    losers = [t for t in trades if t.is_loss]
    gross_profit = sum(t.profit_loss for t in winners)
    gross_loss = abs(sum(t.profit_loss for t in losers))

    pnl = sum(t.profit_loss for t in trades)
    trading_days = len({t.exit_time.date() for t in trades})

    return GroupedPerformance(
        key=key,
        trades=len(trades),
        winning_trades=len(winners),
        losing_trades=len(losers),
        win_rate=win_rate(len(winners), len(losers)),
        pnl=pnl,
        average_return=sum(t.return_pct for t in trades) / len(trades),
        profit_factor=guarded_ratio(gross_profit, gross_loss, no_loss_ratio),
        trading_days=trading_days,
        avg_daily_pnl=pnl / trading_days,
    )


def group_performance(
    trades: Iterable[NormalizedTrade],
    key_fn: KeyFn,
    *,
    no_loss_ratio: float,
    required_keys: Sequence[str] = (),
    omit_empty: bool = True,
    sort_key: Callable[[str], Any] | None = None,
) -> list[GroupedPerformance]:
    """Group trades by key and reduce each group.

    Args:
        trades: Normalized trades.
        key_fn: Extracts the group key from a trade.
        no_loss_ratio: Profit factor reported for groups without losses.
        required_keys: Keys always present in the output, in this order,
            ahead of any other keys.
        omit_empty: Drop groups with no trades. Required keys are
            zero-filled when this is False.
        sort_key: Orders the output by group key. Without it groups keep
            the order of their first occurrence.

    Returns:
        One GroupedPerformance per group.
    """
    groups: dict[str, list[NormalizedTrade]] = {key: [] for key in required_keys}

    for trade in trades:
        groups.setdefault(key_fn(trade), []).append(trade)

    keys = list(groups)
    if sort_key is not None:
        keys.sort(key=sort_key)

    return [
        summarize_group(key, groups[key], no_loss_ratio)
        for key in keys
        if groups[key] or not omit_empty
    ]


MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def month_label(moment: datetime) -> str:
    """Format a timestamp as "Mon YYYY" with English month names in any locale."""
    return f"{MONTH_NAMES[moment.month - 1]} {moment.year}"


def month_sort_key(label: str) -> tuple[int, int]:
    name, year = label.split()
    return int(year), MONTH_NAMES.index(name)


def session_for(moment: time, sessions: Sequence[SessionBucket]) -> str:
    """Find the session containing a time of day.

    Sessions are ordered by start; each runs until the next one starts and
    the last wraps past midnight to the first, so every time has exactly
    one session.
    """
    label = sessions[-1].label
    for session in sessions:
        if moment >= session.start:
            label = session.label
        else:
            break
    return label


class GroupingAggregator:
    """Performance breakdowns by month, strategy, symbol, direction and session."""

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or AnalyticsSettings()

    def by_month(self, trades: Sequence[NormalizedTrade]) -> list[GroupedPerformance]:
        """Group by calendar month of exit_time, in chronological order."""
        return group_performance(
            trades,
            lambda t: month_label(t.exit_time),
            no_loss_ratio=self._settings.no_loss_ratio,
            sort_key=month_sort_key,
        )

    def by_strategy(self, trades: Sequence[NormalizedTrade]) -> list[GroupedPerformance]:
        """Group by strategy tag; untagged trades share the unlabeled key."""
        unlabeled = self._settings.unlabeled_strategy

        def strategy_key(trade: NormalizedTrade) -> str:
            strategy = (trade.strategy or "").strip()
            return strategy or unlabeled

        return group_performance(
            trades,
            strategy_key,
            no_loss_ratio=self._settings.no_loss_ratio,
        )

    def by_symbol(self, trades: Sequence[NormalizedTrade]) -> list[GroupedPerformance]:
        """Group by ticker symbol."""
        return group_performance(
            trades,
            lambda t: t.symbol,
            no_loss_ratio=self._settings.no_loss_ratio,
        )

    def by_trade_type(self, trades: Sequence[NormalizedTrade]) -> list[GroupedPerformance]:
        """Group by direction. Long and Short are always both reported."""
        return group_performance(
            trades,
            lambda t: t.direction.value,
            no_loss_ratio=self._settings.no_loss_ratio,
            required_keys=[direction.value for direction in Direction],
            omit_empty=False,
        )

    def by_time_of_day(self, trades: Sequence[NormalizedTrade]) -> list[GroupedPerformance]:
        """Group by the session containing entry_time, in session order."""
        sessions = self._settings.time_of_day_buckets
        order = {session.label: index for index, session in enumerate(sessions)}

        return group_performance(
            trades,
            lambda t: session_for(t.entry_time.time(), sessions),
            no_loss_ratio=self._settings.no_loss_ratio,
            sort_key=order.__getitem__,
        )
