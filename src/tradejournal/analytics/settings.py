# src/tradejournal/analytics/settings.py
"""Settings for the analytics engine."""
from datetime import time

from pydantic import BaseModel, Field, field_validator, model_validator

from tradejournal.analytics.models import EquityCurvePolicy


class SessionBucket(BaseModel):
    """A time-of-day session that starts at `start` and runs until the next one."""

    label: str = Field(min_length=1)
    start: time


def default_sessions() -> list[SessionBucket]:
    return [
        SessionBucket(label="Morning", start=time(4, 0)),
        SessionBucket(label="Midday", start=time(11, 0)),
        SessionBucket(label="Afternoon", start=time(14, 0)),
        SessionBucket(label="Evening", start=time(17, 0)),
    ]


class AnalyticsSettings(BaseModel):
    """Configuration settings for the analytics engine.

    Attributes:
        initial_capital: Starting account value for the equity curve.
        bucket_count: Number of P&L distribution buckets.
        bucket_epsilon: Half-width used when every P&L value is identical.
        no_loss_ratio: Value reported for profit factor and risk/reward
            when there are wins but no losses.
        equity_curve_policy: One equity point per trade or per day.
        unlabeled_strategy: Group key for trades without a strategy.
        time_of_day_buckets: Session buckets for time-of-day grouping.
            Each runs from its start to the next start; the last wraps
            around midnight to the first.
        heatmap_hour_bucket_size: Hours per heatmap column, must divide 24.
        risk_free_rate: Annual risk-free rate for Sharpe/Sortino.
        trading_days_per_year: Annualization factor for Sharpe/Sortino.
    """

    initial_capital: float = Field(default=10000.0, gt=0)
    bucket_count: int = Field(default=10, ge=1, le=100)
    bucket_epsilon: float = Field(default=0.5, gt=0)
    no_loss_ratio: float = Field(default=999.0, gt=0)
    equity_curve_policy: EquityCurvePolicy = EquityCurvePolicy.PER_TRADE
    unlabeled_strategy: str = Field(default="Unlabeled", min_length=1)
    time_of_day_buckets: list[SessionBucket] = Field(default_factory=default_sessions)
    heatmap_hour_bucket_size: int = Field(default=1, ge=1, le=24)
    risk_free_rate: float = Field(default=0.02, ge=0.0, le=1.0)
    trading_days_per_year: int = Field(default=252, ge=1, le=366)

    @field_validator("heatmap_hour_bucket_size")
    @classmethod
    def validate_hour_bucket_size(cls, v: int) -> int:
        """Validate that the hour bucket size divides a day evenly."""
        if 24 % v != 0:
            raise ValueError(f"heatmap_hour_bucket_size must divide 24, got {v}")
        return v

    @model_validator(mode="after")
    def validate_sessions(self) -> "AnalyticsSettings":
        """Validate that session buckets have unique labels and start times."""
        if not self.time_of_day_buckets:
            raise ValueError("time_of_day_buckets must define at least one session")

        labels = [bucket.label for bucket in self.time_of_day_buckets]
        if len(set(labels)) != len(labels):
            raise ValueError(f"Duplicate session labels: {labels}")

        starts = [bucket.start for bucket in self.time_of_day_buckets]
        if len(set(starts)) != len(starts):
            raise ValueError("Session buckets must have distinct start times")

        if starts != sorted(starts):
            raise ValueError("Session buckets must be ordered by start time")

        return self
