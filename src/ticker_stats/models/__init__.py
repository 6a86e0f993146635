"""Data models for ticker stats."""

from ticker_stats.models.records import TradingRecord, coerce_record
from ticker_stats.models.results import AggregationResult, ReturnStatus, TickerSummary

__all__ = ["AggregationResult", "ReturnStatus", "TickerSummary", "TradingRecord", "coerce_record"]
