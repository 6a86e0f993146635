"""Per-ticker summaries and the aligned aggregation result."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

import pandas as pd


class ReturnStatus(str, Enum):
    """Outcome of one ticker slot."""

    OK = "ok"
    UNDEFINED_RETURN = "undefined_return"  # year open price was zero
    MISSING_TICKER = "missing_ticker"  # listed ticker had no records


@dataclass(frozen=True)
class TickerSummary:
    """
    Finalized statistics for one ticker.

    Attributes:
        ticker: Ticker symbol
        status: OK, UNDEFINED_RETURN or MISSING_TICKER
        year_open: Open price of the first record in the run
        year_close: Close price of the last record in the run
        total_volume: Sum of volumes over the run
        percent_return: (year_close - year_open) / year_open, None unless status is OK
        record_count: Number of records in the run
        first_date: Date of the first record
        last_date: Date of the last record
    """

    ticker: str
    status: ReturnStatus
    year_open: float | None = None
    year_close: float | None = None
    total_volume: int | None = None
    percent_return: float | None = None
    record_count: int = 0
    first_date: date | None = None
    last_date: date | None = None

    @classmethod
    def missing(cls, ticker: str) -> "TickerSummary":
        """Placeholder for a listed ticker with no records."""
        return cls(ticker=ticker, status=ReturnStatus.MISSING_TICKER)

    @property
    def has_data(self) -> bool:
        return self.status is not ReturnStatus.MISSING_TICKER

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "ticker": self.ticker,
            "status": self.status.value,
            "year_open": self.year_open,
            "year_close": self.year_close,
            "total_volume": self.total_volume,
            "percent_return": self.percent_return,
            "record_count": self.record_count,
            "first_date": self.first_date.isoformat() if self.first_date else None,
            "last_date": self.last_date.isoformat() if self.last_date else None,
        }


@dataclass
class AggregationResult:
    """
    Summaries index-aligned with the ticker list.

    summaries[i] always describes tickers[i] for the keyed aggregator. The
    positional scan only guarantees this when the ticker list matches the
    run order of the data.
    """

    tickers: list[str]
    summaries: list[TickerSummary] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.summaries) != len(self.tickers):
            raise ValueError(
                f"Got {len(self.summaries)} summaries for {len(self.tickers)} tickers"
            )

    def __len__(self) -> int:
        return len(self.summaries)

    def __iter__(self):
        return iter(self.summaries)

    def __getitem__(self, ticker: str) -> TickerSummary:
        return self.by_ticker()[ticker]

    @property
    def total_volumes(self) -> list[int | None]:
        return [s.total_volume for s in self.summaries]

    @property
    def percent_returns(self) -> list[float | None]:
        return [s.percent_return for s in self.summaries]

    @property
    def statuses(self) -> list[ReturnStatus]:
        return [s.status for s in self.summaries]

    def by_ticker(self) -> dict[str, TickerSummary]:
        """Map ticker symbol to its summary."""
        return {s.ticker: s for s in self.summaries}

    def missing_tickers(self) -> list[str]:
        """Listed tickers that had no records."""
        return [s.ticker for s in self.summaries if s.status is ReturnStatus.MISSING_TICKER]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "tickers": list(self.tickers),
            "summaries": [s.to_dict() for s in self.summaries],
        }

    def to_frame(self) -> pd.DataFrame:
        """
        Render the summaries as a DataFrame, one row per listed ticker.

        Returns:
            DataFrame indexed by position in the ticker list
        """
        rows = [s.to_dict() for s in self.summaries]
        columns = [
            "ticker",
            "status",
            "year_open",
            "year_close",
            "total_volume",
            "percent_return",
            "record_count",
            "first_date",
            "last_date",
        ]
        return pd.DataFrame(rows, columns=columns)
