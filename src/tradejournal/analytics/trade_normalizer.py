# src/tradejournal/analytics/trade_normalizer.py
"""Normalizer that derives per-trade fields from closed trades."""
import logging
import math
from dataclasses import replace
from datetime import datetime
from typing import Any, Iterable, Mapping

from tradejournal.analytics.models import (
    Direction,
    InvalidTradeError,
    NormalizationResult,
    NormalizedTrade,
    Trade,
)

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


def _parse_timestamp(value: Any, field_name: str) -> datetime:
    """Parse a datetime or ISO-8601 string into a naive wall-clock datetime.

    Timestamps are expected in the reporting timezone already, so an offset
    is dropped rather than converted.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidTradeError(f"Unparsable {field_name}: {value!r}") from e
    else:
        raise InvalidTradeError(f"Unparsable {field_name}: {value!r}")

    return parsed.replace(tzinfo=None)


def _parse_number(value: Any, field_name: str) -> float:
    """Parse a finite float, rejecting booleans and non-numeric strings."""
    if isinstance(value, bool) or value is None:
        raise InvalidTradeError(f"Non-numeric {field_name}: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidTradeError(f"Non-numeric {field_name}: {value!r}") from e
    if not math.isfinite(number):
        raise InvalidTradeError(f"Non-finite {field_name}: {value!r}")
    return number


def _parse_optional_number(value: Any, field_name: str) -> float | None:
    if value is None or value == "":
        return None
    return _parse_number(value, field_name)


def parse_trade(record: Mapping[str, Any]) -> Trade:
    """Build a Trade from a raw record.

    Accepts the trade store's field names ("id"/"trade_id",
    "direction"/"type") with timestamps as datetimes or ISO-8601 strings.

    Args:
        record: Raw trade record.

    Returns:
        The parsed Trade.

    Raises:
        InvalidTradeError: If a required field is missing or malformed.
    """
    if not isinstance(record, Mapping):
        raise InvalidTradeError(f"Trade record is not a mapping: {record!r}")

    trade_id = record.get("trade_id", record.get("id"))
    if trade_id is None or str(trade_id) == "":
        raise InvalidTradeError("Trade record has no id")

    symbol = record.get("symbol")
    if not symbol:
        raise InvalidTradeError(f"Trade {trade_id} has no symbol")

    raw_direction = record.get("direction", record.get("type"))
    try:
        direction = Direction.parse(raw_direction)
    except ValueError as e:
        raise InvalidTradeError(f"Trade {trade_id}: {e}") from e

    raw_tags = record.get("tags") or ()
    if isinstance(raw_tags, str):
        raw_tags = [tag.strip() for tag in raw_tags.split(",") if tag.strip()]

    strategy = record.get("strategy")
    notes = record.get("notes")

    return Trade(
        trade_id=str(trade_id),
        symbol=str(symbol),
        direction=direction,
        entry_price=_parse_number(record.get("entry_price"), "entry_price"),
        exit_price=_parse_number(record.get("exit_price"), "exit_price"),
        quantity=_parse_number(record.get("quantity"), "quantity"),
        entry_time=_parse_timestamp(record.get("entry_time"), "entry_time"),
        exit_time=_parse_timestamp(record.get("exit_time"), "exit_time"),
        profit_loss=_parse_number(record.get("profit_loss"), "profit_loss"),
        strategy=str(strategy) if strategy else None,
        tags=frozenset(str(tag) for tag in raw_tags),
        notes=str(notes) if notes else None,
        risk=_parse_optional_number(record.get("risk"), "risk"),
        r_multiple=_parse_optional_number(record.get("r_multiple"), "r_multiple"),
    )


def check_trade(trade: Trade) -> Trade:
    """Apply the parse_trade field rules to an already constructed Trade.

    Args:
        trade: Trade built in code rather than parsed from a record.

    Returns:
        An equal Trade with a Direction, float fields and naive timestamps.

    Raises:
        InvalidTradeError: If a field has the wrong type or is non-finite.
    """
    try:
        direction = Direction.parse(trade.direction)
    except ValueError as e:
        raise InvalidTradeError(f"Trade {trade.trade_id}: {e}") from e

    for field_name in ("entry_time", "exit_time"):
        if not isinstance(getattr(trade, field_name), datetime):
            raise InvalidTradeError(
                f"Trade {trade.trade_id} {field_name} is not a datetime: "
                f"{getattr(trade, field_name)!r}"
            )

    return replace(
        trade,
        direction=direction,
        entry_price=_parse_number(trade.entry_price, "entry_price"),
        exit_price=_parse_number(trade.exit_price, "exit_price"),
        quantity=_parse_number(trade.quantity, "quantity"),
        entry_time=trade.entry_time.replace(tzinfo=None),
        exit_time=trade.exit_time.replace(tzinfo=None),
        profit_loss=_parse_number(trade.profit_loss, "profit_loss"),
        risk=_parse_optional_number(trade.risk, "risk"),
        r_multiple=_parse_optional_number(trade.r_multiple, "r_multiple"),
    )


class TradeNormalizer:
    """Derives holding duration, direction-aware return and outcome per trade."""

    def normalize(self, trade: Trade | Mapping[str, Any]) -> NormalizedTrade:
        """Normalize a single trade.

        Args:
            trade: A Trade or a raw trade record.

        Returns:
            NormalizedTrade wrapping the checked trade.

        Raises:
            InvalidTradeError: If the trade is structurally invalid.
        """
        if not isinstance(trade, Trade):
            trade = parse_trade(trade)
        else:
            trade = check_trade(trade)

        self._validate(trade)

        duration_seconds = (trade.exit_time - trade.entry_time).total_seconds()
        holding_days = math.ceil(duration_seconds / SECONDS_PER_DAY)

        sign = trade.direction.sign
        return_pct = sign * (trade.exit_price - trade.entry_price) / trade.entry_price * 100

        r_multiple = trade.r_multiple
        if r_multiple is None and trade.risk:
            r_multiple = trade.profit_loss / abs(trade.risk)

        return NormalizedTrade(
            trade=trade,
            holding_days=holding_days,
            return_pct=return_pct,
            direction_sign=sign,
            is_win=trade.profit_loss > 0,
            is_loss=trade.profit_loss < 0,
            r_multiple=r_multiple,
        )

    def normalize_all(
        self, records: Iterable[Trade | Mapping[str, Any]]
    ) -> NormalizationResult:
        """Normalize a batch, skipping invalid records instead of failing.

        Args:
            records: Trades or raw trade records.

        Returns:
            NormalizationResult with the valid trades in input order and
            the number of records skipped.
        """
        result = NormalizationResult(trades=[])

        for index, record in enumerate(records):
            try:
                result.trades.append(self.normalize(record))
            except InvalidTradeError as e:
                result.skipped += 1
                result.errors.append(f"record {index}: {e}")
                logger.warning(f"Skipping trade record {index}: {e}")

        if result.skipped:
            logger.info(
                f"Normalized {len(result.trades)} trades, skipped {result.skipped}"
            )

        return result

    def _validate(self, trade: Trade) -> None:
        """Check the invariants every closed trade must satisfy."""
        if trade.exit_time < trade.entry_time:
            raise InvalidTradeError(
                f"Trade {trade.trade_id} exits before it enters"
            )
        if trade.quantity <= 0:
            raise InvalidTradeError(
                f"Trade {trade.trade_id} has non-positive quantity {trade.quantity}"
            )
        if trade.entry_price <= 0:
            raise InvalidTradeError(
                f"Trade {trade.trade_id} has non-positive entry price {trade.entry_price}"
            )
        if trade.exit_price <= 0:
            raise InvalidTradeError(
                f"Trade {trade.trade_id} has non-positive exit price {trade.exit_price}"
            )
