"""Index-in-lockstep scan over the ticker list."""

from dataclasses import replace
from typing import Iterable, Sequence

import structlog

from ticker_stats.aggregation.base import Aggregator, RawRecord, RunAccumulator
from ticker_stats.config import AggregationConfig
from ticker_stats.models.results import AggregationResult, TickerSummary

logger = structlog.get_logger()


class PositionalScanner(Aggregator):
    """
    Write each closed run into the slot at a running ticker index.

    The index advances once per run, so slot i holds the i-th run of the
    data whatever its ticker is. Results are only meaningful when the ticker
    list matches the run order exactly. In strict mode a mismatch raises
    OrderViolationError; otherwise it is logged and the data lands in the
    slot of whichever listed ticker is at that index.
    """

    def __init__(self, tickers: Sequence[str], config: AggregationConfig | None = None):
        super().__init__(tickers, config)
        self._slots: list[TickerSummary | None] = [None] * len(self.tickers)
        self._index = 0

    def _on_run_start(self, ticker: str, position: int) -> None:
        # A reappearing ticker was already reported by the base scan
        if ticker in self._closed:
            return
        if self._index >= len(self.tickers):
            self._violation(ticker, position, f"more runs than the {len(self.tickers)} listed tickers")
        elif self.tickers[self._index] != ticker:
            self._violation(ticker, position, f"run lands in the slot for {self.tickers[self._index]}")

    def _store(self, run: RunAccumulator, summary: TickerSummary) -> None:
        index = self._index
        self._index += 1

        if index >= len(self._slots):
            logger.debug("Dropping run with no slot", ticker=run.ticker, position=run.start_position)
            return

        self._slots[index] = replace(summary, ticker=self.tickers[index])

    def _build_summaries(self) -> list[TickerSummary]:
        return [
            slot if slot is not None else TickerSummary.missing(ticker)
            for ticker, slot in zip(self.tickers, self._slots)
        ]


def scan_positional(
    records: Iterable[RawRecord],
    tickers: Sequence[str],
    config: AggregationConfig | None = None,
) -> AggregationResult:
    """
    Aggregate records by advancing a ticker index at each run boundary.

    Args:
        records: Trading records, contiguous per ticker and date-ascending
        tickers: Ticker list, which must match the run order of the records
        config: Aggregation configuration. If None, uses defaults.

    Returns:
        AggregationResult whose slot i holds the i-th run of the data
    """
    return PositionalScanner(tickers, config).aggregate(records)
