"""Record and ticker-list adapters for pandas DataFrames."""

from typing import Any, Iterable, Iterator

import pandas as pd
import structlog

from ticker_stats.config import ColumnMap
from ticker_stats.models.records import RECORD_FIELDS, TradingRecord

logger = structlog.get_logger()


def normalize_tickers(tickers: Iterable[str]) -> list[str]:
    """
    Normalize a list of tickers.

    Args:
        tickers: List of ticker symbols

    Returns:
        Normalized list of tickers (uppercase, stripped)
    """
    return [t.upper().strip() for t in tickers if t and t.strip()]


def _normalize_value(value: Any) -> Any:
    return value.upper().strip() if isinstance(value, str) else value


def records_from_frame(
    df: pd.DataFrame,
    columns: ColumnMap | None = None,
    normalize: bool = True,
) -> Iterator[dict[str, Any]]:
    """
    Yield one record mapping per DataFrame row, in row order.

    Values are passed through unvalidated; the aggregator coerces each
    record and reports bad fields with the row position. The date may live
    in the index (as in OHLCV frames with a DatetimeIndex) instead of a
    column.

    Args:
        df: DataFrame with ticker, date, open, close and volume data
        columns: Column names for each record field. If None, uses defaults.
        normalize: Uppercase and strip ticker symbols

    Returns:
        Iterator of mappings keyed by record field name

    Raises:
        ValueError: If a required column is absent
    """
    columns = columns or ColumnMap()

    if columns.date not in df.columns and df.index.name == columns.date:
        df = df.reset_index()

    names = {field: getattr(columns, field) for field in RECORD_FIELDS}
    missing = [name for name in names.values() if name not in df.columns]
    if missing:
        raise ValueError(f"DataFrame is missing columns: {', '.join(missing)}")

    logger.debug("Reading records from frame", rows=len(df))

    series = [df[names[field]].tolist() for field in RECORD_FIELDS]
    for values in zip(*series):
        row = dict(zip(RECORD_FIELDS, values))
        if normalize:
            row["ticker"] = _normalize_value(row["ticker"])
        yield row


def tickers_in_order(
    source: pd.DataFrame | Iterable[TradingRecord | dict[str, Any]],
    columns: ColumnMap | None = None,
    normalize: bool = True,
) -> list[str]:
    """
    Build the ticker list from the order tickers first appear in the data.

    Args:
        source: DataFrame, or iterable of records or record mappings
        columns: Column names when source is a DataFrame
        normalize: Uppercase and strip DataFrame tickers, matching records_from_frame

    Returns:
        Unique tickers in first-appearance order
    """
    if isinstance(source, pd.DataFrame):
        col = (columns or ColumnMap()).ticker
        if col not in source.columns:
            raise ValueError(f"DataFrame is missing column: {col}")
        values = source[col].dropna().tolist()
        if normalize:
            values = [_normalize_value(v) for v in values]
        return list(dict.fromkeys(values))

    seen: dict[str, None] = {}
    for record in source:
        ticker = record["ticker"] if isinstance(record, dict) else record.ticker
        if ticker is not None:
            seen.setdefault(ticker, None)
    return list(seen)
