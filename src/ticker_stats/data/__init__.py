"""In-memory record sources."""

from ticker_stats.data.frame_source import normalize_tickers, records_from_frame, tickers_in_order

__all__ = ["normalize_tickers", "records_from_frame", "tickers_in_order"]
