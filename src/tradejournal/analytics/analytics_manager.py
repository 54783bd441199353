# src/tradejournal/analytics/analytics_manager.py
"""Manager for orchestrating all analytics components."""
import logging
from typing import Any, Iterable, Mapping

from tradejournal.analytics.distribution_binner import DistributionBinner
from tradejournal.analytics.equity_curve_builder import EquityCurveBuilder
from tradejournal.analytics.grouping_aggregator import GroupingAggregator
from tradejournal.analytics.heatmap_generator import HeatmapGenerator
from tradejournal.analytics.metrics_calculator import MetricsCalculator
from tradejournal.analytics.models import (
    AnalyticsReport,
    DistributionBucket,
    EquityPoint,
    GroupedPerformance,
    HeatmapCell,
    NormalizationResult,
    PerformanceMetrics,
    Trade,
)
from tradejournal.analytics.settings import AnalyticsSettings
from tradejournal.analytics.trade_normalizer import TradeNormalizer

logger = logging.getLogger(__name__)

TradeRecords = Iterable[Trade | Mapping[str, Any]]


class AnalyticsManager:
    """Orchestrates all analytics components for a set of closed trades.

    Every call normalizes its input and recomputes from scratch; invalid
    records are skipped and counted, never fatal.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        """Initialize the analytics manager with all components.

        Args:
            settings: Analytics configuration settings.
        """
        self._settings = settings or AnalyticsSettings()
        self._normalizer = TradeNormalizer()
        self._equity_builder = EquityCurveBuilder(self._settings)
        self._metrics_calculator = MetricsCalculator(self._settings, self._equity_builder)
        self._distribution_binner = DistributionBinner(self._settings)
        self._grouping_aggregator = GroupingAggregator(self._settings)
        self._heatmap_generator = HeatmapGenerator(self._settings)

    @property
    def settings(self) -> AnalyticsSettings:
        return self._settings

    def normalize(self, records: TradeRecords) -> NormalizationResult:
        """Normalize raw records, skipping the invalid ones."""
        return self._normalizer.normalize_all(records)

    def calculate_metrics(
        self, records: TradeRecords, initial_capital: float | None = None
    ) -> PerformanceMetrics:
        normalized = self.normalize(records)
        return self._metrics_calculator.calculate(normalized.trades, initial_capital)

    def equity_curve(
        self, records: TradeRecords, initial_capital: float | None = None
    ) -> list[EquityPoint]:
        normalized = self.normalize(records)
        return self._equity_builder.build(normalized.trades, initial_capital)

    def distribution(
        self, records: TradeRecords, bucket_count: int | None = None
    ) -> list[DistributionBucket]:
        normalized = self.normalize(records)
        return self._distribution_binner.build(normalized.trades, bucket_count)

    def heatmap(self, records: TradeRecords) -> list[HeatmapCell]:
        normalized = self.normalize(records)
        return self._heatmap_generator.build(normalized.trades)

    def group(self, records: TradeRecords, dimension: str) -> list[GroupedPerformance]:
        """Break performance down along one dimension.

        Args:
            records: Trades or raw trade records.
            dimension: One of "month", "strategy", "symbol", "trade_type",
                "time_of_day".

        Returns:
            Grouped performance records.

        Raises:
            ValueError: If the dimension is unknown.
        """
        aggregators = {
            "month": self._grouping_aggregator.by_month,
            "strategy": self._grouping_aggregator.by_strategy,
            "symbol": self._grouping_aggregator.by_symbol,
            "trade_type": self._grouping_aggregator.by_trade_type,
            "time_of_day": self._grouping_aggregator.by_time_of_day,
        }
        if dimension not in aggregators:
            raise ValueError(
                f"Unknown dimension: {dimension}. Must be one of {sorted(aggregators)}"
            )

        normalized = self.normalize(records)
        return aggregators[dimension](normalized.trades)

    def build_report(
        self,
        records: TradeRecords,
        initial_capital: float | None = None,
        bucket_count: int | None = None,
    ) -> AnalyticsReport:
        """Build every analytics view from one normalization pass.

        Args:
            records: Trades or raw trade records.
            initial_capital: Starting equity, settings default when omitted.
            bucket_count: Distribution buckets, settings default when omitted.

        Returns:
            AnalyticsReport with all views and the skipped record count.
        """
        normalized = self.normalize(records)
        trades = normalized.trades

        report = AnalyticsReport(
            metrics=self._metrics_calculator.calculate(trades, initial_capital),
            equity_curve=self._equity_builder.build(trades, initial_capital),
            distribution=self._distribution_binner.build(trades, bucket_count),
            monthly=self._grouping_aggregator.by_month(trades),
            by_strategy=self._grouping_aggregator.by_strategy(trades),
            by_symbol=self._grouping_aggregator.by_symbol(trades),
            by_trade_type=self._grouping_aggregator.by_trade_type(trades),
            by_time_of_day=self._grouping_aggregator.by_time_of_day(trades),
            heatmap=self._heatmap_generator.build(trades),
            skipped_trades=normalized.skipped,
        )

        logger.info(
            f"Built analytics report: {len(trades)} trades, "
            f"{normalized.skipped} skipped, total P&L {report.metrics.total_pnl:.2f}"
        )
        return report
