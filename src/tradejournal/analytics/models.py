# src/tradejournal/analytics/models.py
"""Data models for the trade analytics engine."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Direction(str, Enum):
    """Trade direction enumeration."""

    LONG = "Long"
    SHORT = "Short"

    @classmethod
    def parse(cls, value: "str | Direction") -> "Direction":
        """Parse a direction from a case-insensitive string.

        Args:
            value: "long", "Long", "SHORT", or a Direction.

        Returns:
            The matching Direction.

        Raises:
            ValueError: If the value names no direction.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for direction in cls:
            if direction.value.lower() == normalized:
                return direction
        raise ValueError(f"Invalid direction: {value!r}")

    @property
    def sign(self) -> int:
        """+1 for long trades, -1 for short trades."""
        return 1 if self is Direction.LONG else -1


class EquityCurvePolicy(str, Enum):
    """How trades are turned into equity curve points."""

    PER_TRADE = "per_trade"
    PER_DAY = "per_day"


class InvalidTradeError(ValueError):
    """Raised when a trade record is structurally invalid."""


@dataclass(frozen=True)
class Trade:
    """A closed trade as supplied by the trade store.

    Attributes:
        trade_id: Unique trade identifier.
        symbol: Ticker symbol.
        direction: LONG or SHORT.
        entry_price: Entry price (positive).
        exit_price: Exit price (positive).
        quantity: Position size (positive).
        entry_time: When the position was opened.
        exit_time: When the position was closed (>= entry_time).
        profit_loss: Realized P&L after fees, not recomputed from prices.
        strategy: Optional strategy tag.
        tags: Free-form tags.
        notes: Free-form notes.
        risk: Amount risked on the trade.
        r_multiple: profit_loss / risk, when supplied.
    """

    trade_id: str
    symbol: str
    direction: Direction
    entry_price: float
    exit_price: float
    quantity: float
    entry_time: datetime
    exit_time: datetime
    profit_loss: float
    strategy: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    notes: str | None = None
    risk: float | None = None
    r_multiple: float | None = None


@dataclass(frozen=True)
class NormalizedTrade:
    """A trade with the derived per-trade fields used by every aggregate."""

    trade: Trade
    holding_days: int
    return_pct: float
    direction_sign: int
    is_win: bool
    is_loss: bool
    r_multiple: float | None

    @property
    def trade_id(self) -> str:
        return self.trade.trade_id

    @property
    def symbol(self) -> str:
        return self.trade.symbol

    @property
    def direction(self) -> Direction:
        return self.trade.direction

    @property
    def strategy(self) -> str | None:
        return self.trade.strategy

    @property
    def entry_time(self) -> datetime:
        return self.trade.entry_time

    @property
    def exit_time(self) -> datetime:
        return self.trade.exit_time

    @property
    def profit_loss(self) -> float:
        return self.trade.profit_loss

    @property
    def is_breakeven(self) -> bool:
        return not self.is_win and not self.is_loss


@dataclass
class NormalizationResult:
    """Outcome of normalizing a batch of raw trade records."""

    trades: list[NormalizedTrade]
    skipped: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class PerformanceMetrics:
    """Summary performance metrics for a set of trades.

    average_loss, gross_loss and the ratios built on them use absolute
    values; largest_loss keeps its sign.
    """

    total_trades: int
    winning_trades: int
    losing_trades: int
    breakeven_trades: int

    win_rate: float
    profit_factor: float
    risk_reward_ratio: float
    expected_value: float

    total_pnl: float
    gross_profit: float
    gross_loss: float
    average_win: float
    average_loss: float
    largest_win: float
    largest_loss: float
    average_r_multiple: float

    max_drawdown: float
    max_drawdown_percent: float
    max_drawdown_duration_days: int
    current_drawdown: float

    sharpe_ratio: float
    sortino_ratio: float

    average_holding_days: float
    max_consecutive_wins: int
    max_consecutive_losses: int


@dataclass
class EquityPoint:
    """One point on the equity curve.

    Attributes:
        date: Exit time of the trade, or midnight of the day under the
            per-day policy.
        equity: Running account value.
        cumulative_pnl: Running sum of P&L.
        daily_pnl: P&L realized at this point.
        drawdown: Currency units below the running peak (>= 0).
        drawdown_percent: Drawdown as a percentage of the running peak.
        trade_count: Trades realized at this point.
    """

    date: datetime
    equity: float
    cumulative_pnl: float
    daily_pnl: float
    drawdown: float
    drawdown_percent: float
    trade_count: int


@dataclass
class DrawdownSummary:
    """Drawdown figures read off an equity curve."""

    max_drawdown: float
    max_drawdown_percent: float
    max_drawdown_duration_days: int
    current_drawdown: float


@dataclass
class DistributionBucket:
    """One bucket of the P&L histogram."""

    lower: float
    upper: float
    label: str
    count: int
    percentage: float
    is_profit_range: bool


@dataclass
class GroupedPerformance:
    """Performance of the trades sharing one group key."""

    key: str
    trades: int
    winning_trades: int
    losing_trades: int
    win_rate: float
    pnl: float
    average_return: float
    profit_factor: float
    trading_days: int
    avg_daily_pnl: float


@dataclass
class HeatmapCell:
    """Aggregated performance for one weekday x hour bucket."""

    weekday: int  # 0=Sunday .. 6=Saturday
    day: str
    hour: int
    hour_label: str
    trades: int
    wins: int
    pnl: float
    win_rate: float


@dataclass
class AnalyticsReport:
    """Every derived view for one set of trades."""

    metrics: PerformanceMetrics
    equity_curve: list[EquityPoint]
    distribution: list[DistributionBucket]
    monthly: list[GroupedPerformance]
    by_strategy: list[GroupedPerformance]
    by_symbol: list[GroupedPerformance]
    by_trade_type: list[GroupedPerformance]
    by_time_of_day: list[GroupedPerformance]
    heatmap: list[HeatmapCell]
    skipped_trades: int = 0
