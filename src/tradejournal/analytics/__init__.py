# src/tradejournal/analytics/__init__.py
"""Analytics engine for closed-trade performance."""

from .analytics_manager import AnalyticsManager
from .distribution_binner import DistributionBinner
from .equity_curve_builder import EquityCurveBuilder
from .grouping_aggregator import GroupingAggregator, group_performance
from .heatmap_generator import HeatmapGenerator
from .metrics_calculator import MetricsCalculator
from .models import (
    AnalyticsReport,
    Direction,
    DistributionBucket,
    DrawdownSummary,
    EquityCurvePolicy,
    EquityPoint,
    GroupedPerformance,
    HeatmapCell,
    InvalidTradeError,
    NormalizationResult,
    NormalizedTrade,
    PerformanceMetrics,
    Trade,
)
from .settings import AnalyticsSettings, SessionBucket
from .trade_normalizer import TradeNormalizer, check_trade, parse_trade

__all__ = [
    "AnalyticsManager",
    "AnalyticsReport",
    "AnalyticsSettings",
    "Direction",
    "DistributionBinner",
    "DistributionBucket",
    "DrawdownSummary",
    "EquityCurveBuilder",
    "EquityCurvePolicy",
    "EquityPoint",
    "GroupedPerformance",
    "GroupingAggregator",
    "HeatmapCell",
    "HeatmapGenerator",
    "InvalidTradeError",
    "MetricsCalculator",
    "NormalizationResult",
    "NormalizedTrade",
    "PerformanceMetrics",
    "SessionBucket",
    "Trade",
    "TradeNormalizer",
    "check_trade",
    "group_performance",
    "parse_trade",
]
