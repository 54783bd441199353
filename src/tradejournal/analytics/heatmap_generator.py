# src/tradejournal/analytics/heatmap_generator.py
"""Weekday x hour heatmap of trade performance."""
from typing import Sequence

from tradejournal.analytics.metrics_calculator import win_rate
from tradejournal.analytics.models import HeatmapCell, NormalizedTrade
from tradejournal.analytics.settings import AnalyticsSettings

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def hour_label(hour: int) -> str:
    """Format an hour of day as "12am", "9am", "3pm"."""
    suffix = "am" if hour < 12 else "pm"
    return f"{hour % 12 or 12}{suffix}"


class HeatmapGenerator:
    """Cross-tabulates trades by entry weekday and entry hour bucket.

    Timestamps are taken as already being in the reporting timezone.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or AnalyticsSettings()

    def build(self, trades: Sequence[NormalizedTrade]) -> list[HeatmapCell]:
        """Build the heatmap.

        Args:
            trades: Normalized trades.

        Returns:
            Exactly 7 x (24 / heatmap_hour_bucket_size) cells ordered by
            weekday (0=Sunday) then hour; cells without trades are zeroed.
        """
        bucket_size = self._settings.heatmap_hour_bucket_size
        bucket_starts = list(range(0, 24, bucket_size))

        counts = {(day, hour): 0 for day in range(7) for hour in bucket_starts}
        wins = dict.fromkeys(counts, 0)
        losses = dict.fromkeys(counts, 0)
        pnl = dict.fromkeys(counts, 0.0)

        for trade in trades:
            # weekday() counts from Monday
            weekday = (trade.entry_time.weekday() + 1) % 7
            hour = trade.entry_time.hour // bucket_size * bucket_size
            cell = (weekday, hour)

            counts[cell] += 1
            pnl[cell] += trade.profit_loss
            if trade.is_win:
                wins[cell] += 1
            elif trade.is_loss:
                losses[cell] += 1

        return [
            HeatmapCell(
                weekday=weekday,
                day=DAY_NAMES[weekday],
                hour=hour,
                hour_label=hour_label(hour),
                trades=counts[(weekday, hour)],
                wins=wins[(weekday, hour)],
                pnl=pnl[(weekday, hour)],
                win_rate=win_rate(wins[(weekday, hour)], losses[(weekday, hour)]),
            )
            for weekday, hour in counts
        ]
