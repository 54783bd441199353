"""Readers that load raw trade records for analysis."""

from .trade_file_reader import TradeFileReader

__all__ = ["TradeFileReader"]
