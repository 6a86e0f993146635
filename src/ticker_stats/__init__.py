"""Single-pass per-ticker return and volume aggregation."""

from ticker_stats.aggregation import TickerAggregator, aggregate_frame, aggregate_tickers, scan_positional
from ticker_stats.errors import (
    MalformedRecordError,
    OrderViolationError,
    TickerStatsError,
    UnknownTickerError,
)
from ticker_stats.models import AggregationResult, ReturnStatus, TickerSummary, TradingRecord

__version__ = "0.1.0"

__all__ = [
    "AggregationResult",
    "MalformedRecordError",
    "OrderViolationError",
    "ReturnStatus",
    "TickerAggregator",
    "TickerStatsError",
    "TickerSummary",
    "TradingRecord",
    "UnknownTickerError",
    "aggregate_frame",
    "aggregate_tickers",
    "scan_positional",
]
