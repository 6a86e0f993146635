"""Keyed single-pass aggregation."""

from typing import Iterable, Sequence

import pandas as pd
import structlog

from ticker_stats.aggregation.base import Aggregator, RawRecord, RunAccumulator
from ticker_stats.config import AggregationConfig, Settings, get_settings
from ticker_stats.data.frame_source import normalize_tickers, records_from_frame, tickers_in_order
from ticker_stats.errors import UnknownTickerError
from ticker_stats.models.results import AggregationResult, TickerSummary

logger = structlog.get_logger()


class TickerAggregator(Aggregator):
    """
    Fold closed runs into a mapping keyed by ticker.

    Results are projected onto the ticker list only when the scan finishes,
    so each summary stays with its own ticker even if the data arrives in a
    different run order than the list. Order problems are still reported:
    in strict mode they raise OrderViolationError, otherwise they are logged
    and a ticker that reappears keeps only its last run.
    """

    def __init__(self, tickers: Sequence[str], config: AggregationConfig | None = None):
        super().__init__(tickers, config)
        self._summaries: dict[str, TickerSummary] = {}
        self._last_list_position = -1
        self._skipping: str | None = None

    def _on_run_start(self, ticker: str, position: int) -> None:
        self._skipping = None

        list_position = self._positions.get(ticker)
        if list_position is None:
            if self.config.strict_order:
                raise UnknownTickerError(ticker, position)
            logger.warning("Skipping run for unlisted ticker", ticker=ticker, position=position)
            self._skipping = ticker
            return

        # A reappearing ticker was already reported by the base scan
        if ticker not in self._closed and list_position < self._last_list_position:
            self._violation(
                ticker,
                position,
                f"run arrives after {self.tickers[self._last_list_position]} "
                "but precedes it in the ticker list",
            )

        self._last_list_position = max(self._last_list_position, list_position)

    def _store(self, run: RunAccumulator, summary: TickerSummary) -> None:
        if run.ticker == self._skipping:
            return
        if run.ticker in self._summaries:
            logger.warning("Overwriting earlier run", ticker=run.ticker, position=run.start_position)
        self._summaries[run.ticker] = summary

    def _build_summaries(self) -> list[TickerSummary]:
        return [self._summaries.get(t) or TickerSummary.missing(t) for t in self.tickers]


def aggregate_tickers(
    records: Iterable[RawRecord],
    tickers: Sequence[str],
    config: AggregationConfig | None = None,
) -> AggregationResult:
    """
    Compute year open, year close, total volume and return for each ticker.

    Args:
        records: Trading records, contiguous per ticker and date-ascending
        tickers: Ticker list in run order
        config: Aggregation configuration. If None, uses defaults.

    Returns:
        AggregationResult aligned with the ticker list
    """
    return TickerAggregator(tickers, config).aggregate(records)


def aggregate_frame(
    df: pd.DataFrame,
    tickers: Sequence[str] | None = None,
    settings: Settings | None = None,
) -> AggregationResult:
    """
    Aggregate the rows of a DataFrame.

    Args:
        df: Rows ordered by ticker run, then date
        tickers: Ticker list. If None, uses first-appearance order of the frame.
        settings: Settings for column names and aggregation. If None, uses global settings.

    Returns:
        AggregationResult aligned with the ticker list
    """
    settings = settings or get_settings()
    data_config = settings.data

    if tickers is None:
        tickers = tickers_in_order(df, data_config.columns, normalize=data_config.normalize_tickers)
    elif data_config.normalize_tickers:
        tickers = normalize_tickers(tickers)

    records = records_from_frame(df, data_config.columns, normalize=data_config.normalize_tickers)
    return aggregate_tickers(records, tickers, settings.aggregation)
