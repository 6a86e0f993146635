"""Single-pass ticker aggregators."""

from ticker_stats.aggregation.base import Aggregator
from ticker_stats.aggregation.positional import PositionalScanner, scan_positional
from ticker_stats.aggregation.single_pass import TickerAggregator, aggregate_frame, aggregate_tickers

__all__ = [
    "Aggregator",
    "PositionalScanner",
    "TickerAggregator",
    "aggregate_frame",
    "aggregate_tickers",
    "scan_positional",
]
