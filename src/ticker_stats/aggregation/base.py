"""Base single-pass aggregator."""

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping, Sequence

import structlog

from ticker_stats.config import AggregationConfig
from ticker_stats.errors import OrderViolationError
from ticker_stats.models.records import TradingRecord, coerce_record
from ticker_stats.models.results import AggregationResult, ReturnStatus, TickerSummary
from ticker_stats.utils.calculations import summarize_run

logger = structlog.get_logger()

RawRecord = TradingRecord | Mapping[str, Any]


@dataclass
class RunAccumulator:
    """Running totals for the ticker currently being scanned."""

    ticker: str
    start_position: int
    year_open: float
    year_close: float
    total_volume: int
    record_count: int
    first_date: date
    last_date: date

    @classmethod
    def open(cls, record: TradingRecord, position: int) -> "RunAccumulator":
        return cls(
            ticker=record.ticker,
            start_position=position,
            year_open=record.open_price,
            year_close=record.close_price,
            total_volume=record.volume,
            record_count=1,
            first_date=record.date,
            last_date=record.date,
        )

    def add(self, record: TradingRecord) -> None:
        self.year_close = record.close_price
        self.total_volume += record.volume
        self.record_count += 1
        self.last_date = record.date

    def finalize(self) -> TickerSummary:
        return summarize_run(
            ticker=self.ticker,
            year_open=self.year_open,
            year_close=self.year_close,
            total_volume=self.total_volume,
            record_count=self.record_count,
            first_date=self.first_date,
            last_date=self.last_date,
        )


class Aggregator(ABC):
    """
    Scan an ordered record stream once, closing a run at each ticker change.

    Records may be delivered in any number of chunks through feed(); the run
    open at the end of a chunk stays open until a record with another ticker
    arrives or finish() is called. Subclasses decide where a closed run's
    summary is stored.
    """

    def __init__(self, tickers: Sequence[str], config: AggregationConfig | None = None):
        """
        Initialize the aggregator.

        Args:
            tickers: Ticker list, in the order the tickers' runs appear in the data
            config: Aggregation configuration. If None, uses defaults.

        Raises:
            ValueError: If the ticker list contains duplicates
        """
        self.tickers = list(tickers)
        self.config = config or AggregationConfig()

        duplicates = sorted(t for t, count in Counter(self.tickers).items() if count > 1)
        if duplicates:
            raise ValueError(f"Duplicate tickers in ticker list: {', '.join(duplicates)}")

        self._positions = {ticker: i for i, ticker in enumerate(self.tickers)}
        self._run: RunAccumulator | None = None
        self._closed: set[str] = set()
        self._records_seen = 0
        self._result: AggregationResult | None = None
        self._failed = False

    @property
    def records_seen(self) -> int:
        return self._records_seen

    def feed(self, records: Iterable[RawRecord]) -> None:
        """
        Consume the next chunk of records.

        Raises:
            MalformedRecordError: On the first record with a bad field
            OrderViolationError: On an order violation when strict_order is set
            RuntimeError: If the scan already finished or failed
        """
        self._check_usable()
        try:
            for raw in records:
                position = self._records_seen
                record = coerce_record(raw, position)
                self._consume(record, position)
                self._records_seen += 1
        except Exception:
            self._failed = True
            raise

    def finish(self) -> AggregationResult:
        """Close the last open run and build the result."""
        if self._result is not None:
            return self._result
        self._check_usable()

        try:
            if self._run is not None:
                self._close(self._run)
                self._run = None
        except Exception:
            self._failed = True
            raise

        self._result = AggregationResult(tickers=list(self.tickers), summaries=self._build_summaries())

        logger.info(
            "Aggregation complete",
            records=self._records_seen,
            tickers=len(self.tickers),
            missing=len(self._result.missing_tickers()),
            undefined_returns=sum(
                1 for s in self._result if s.status is ReturnStatus.UNDEFINED_RETURN
            ),
        )
        return self._result

    def aggregate(self, records: Iterable[RawRecord]) -> AggregationResult:
        """Feed every record and finish in one call."""
        logger.info("Starting aggregation", tickers=len(self.tickers), strict=self.config.strict_order)
        self.feed(records)
        return self.finish()

    def _check_usable(self) -> None:
        if self._failed:
            raise RuntimeError("Aggregation failed; start a new aggregator")
        if self._result is not None:
            raise RuntimeError("Aggregation already finished")

    def _consume(self, record: TradingRecord, position: int) -> None:
        run = self._run

        if run is not None and record.ticker == run.ticker:
            if self.config.check_dates and record.date < run.last_date:
                self._violation(
                    record.ticker,
                    position,
                    f"date {record.date.isoformat()} precedes {run.last_date.isoformat()}",
                )
            run.add(record)
            return

        # Ticker boundary: the previous run is complete
        if run is not None:
            self._close(run)

        if record.ticker in self._closed:
            self._violation(record.ticker, position, "ticker reappears after its run closed")

        self._on_run_start(record.ticker, position)
        self._run = RunAccumulator.open(record, position)

    def _close(self, run: RunAccumulator) -> None:
        summary = run.finalize()
        self._closed.add(run.ticker)
        logger.debug(
            "Closed run",
            ticker=run.ticker,
            records=run.record_count,
            total_volume=run.total_volume,
            status=summary.status.value,
        )
        self._store(run, summary)

    def _violation(self, ticker: str, position: int, reason: str) -> None:
        """Raise in strict mode, otherwise log and carry on."""
        if self.config.strict_order:
            raise OrderViolationError(ticker, position, reason)
        logger.warning("Order violation", ticker=ticker, position=position, reason=reason)

    def _on_run_start(self, ticker: str, position: int) -> None:
        """Hook called when a new run begins, before any accumulation."""

    @abstractmethod
    def _store(self, run: RunAccumulator, summary: TickerSummary) -> None:
        """Store the summary of a closed run."""

    @abstractmethod
    def _build_summaries(self) -> list[TickerSummary]:
        """Return summaries aligned with the ticker list."""
