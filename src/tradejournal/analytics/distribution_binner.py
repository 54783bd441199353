# src/tradejournal/analytics/distribution_binner.py
"""Histogram of trade P&L over equal-width buckets."""
from bisect import bisect_right
from typing import Sequence

from tradejournal.analytics.models import DistributionBucket, NormalizedTrade
from tradejournal.analytics.settings import AnalyticsSettings


class DistributionBinner:
    """Buckets trade P&L into equal-width ranges.

    Each bucket includes its lower bound and excludes its upper bound,
    except the last which includes both.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or AnalyticsSettings()

    def build(
        self,
        trades: Sequence[NormalizedTrade],
        bucket_count: int | None = None,
    ) -> list[DistributionBucket]:
        """Build the P&L distribution.

        Args:
            trades: Normalized trades.
            bucket_count: Number of buckets, settings default when omitted.

        Returns:
            bucket_count buckets covering the observed P&L range, or an
            empty list for no trades.

        Raises:
            ValueError: If bucket_count is less than 1.
        """
        count = self._settings.bucket_count if bucket_count is None else bucket_count
        if count < 1:
            raise ValueError(f"bucket_count must be at least 1, got {count}")

        if not trades:
            return []

        values = [t.profit_loss for t in trades]
        low = min(values)
        high = max(values)

        if low == high:
            epsilon = self._settings.bucket_epsilon
            low -= epsilon
            high += epsilon

        # Divide before subtracting so extreme finite values cannot overflow.
        width = high / count - low / count
        lowers = [low + i * width for i in range(count)]
        uppers = lowers[1:] + [high]

        counts = [0] * count
        for value in values:
            index = min(max(bisect_right(lowers, value) - 1, 0), count - 1)
            counts[index] += 1

        total = len(values)
        return [
            DistributionBucket(
                lower=lower,
                upper=upper,
                label=f"{lower:.2f} to {upper:.2f}",
                count=bucket_hits,
                percentage=bucket_hits / total * 100,
                is_profit_range=lower / 2 + upper / 2 > 0,
            )
            for lower, upper, bucket_hits in zip(lowers, uppers, counts)
        ]
