"""Shared test fixtures."""

from datetime import date, timedelta

import pandas as pd
import pytest

from ticker_stats.config import AggregationConfig
from ticker_stats.models.records import TradingRecord


def make_run(
    ticker: str,
    prices: list[tuple[float, float]],
    volumes: list[int] | None = None,
    start: date = date(2018, 1, 2),
) -> list[TradingRecord]:
    """
    Build a contiguous run of records for one ticker.

    Args:
        ticker: Ticker symbol
        prices: (open, close) pairs, one per trading day
        volumes: Volume per day. Defaults to 100 each.
        start: Date of the first record
    """
    volumes = volumes or [100] * len(prices)
    return [
        TradingRecord(
            ticker=ticker,
            date=start + timedelta(days=i),
            open_price=open_price,
            close_price=close_price,
            volume=volume,
        )
        for i, ((open_price, close_price), volume) in enumerate(zip(prices, volumes))
    ]


@pytest.fixture
def scenario_records() -> list[TradingRecord]:
    """Two tickers: AAA gains 50%, BBB loses 20%."""
    return make_run("AAA", [(10, 12), (12, 15)], [100, 50]) + make_run("BBB", [(5, 4)], [10])


@pytest.fixture
def scenario_tickers() -> list[str]:
    return ["AAA", "BBB"]


@pytest.fixture
def year_records() -> list[TradingRecord]:
    """Three tickers with a few days each, ordered by ticker then date."""
    return (
        make_run("DQ", [(37.0, 36.5), (36.5, 38.0), (38.0, 40.2), (40.1, 39.9)], [1000, 2000, 1500, 500])
        + make_run("ENPH", [(2.4, 2.5), (2.5, 2.9), (2.9, 3.1)], [300, 400, 500])
        + make_run("FSLR", [(70.0, 68.0), (68.0, 66.5)], [250, 750])
    )


@pytest.fixture
def lenient_config() -> AggregationConfig:
    """Log order violations instead of raising."""
    return AggregationConfig(strict_order=False)


@pytest.fixture
def records_frame() -> pd.DataFrame:
    """Records as a DataFrame with the default column names."""
    return pd.DataFrame(
        {
            "Ticker": ["aaa", "aaa", "bbb"],
            "Date": pd.to_datetime(["2018-01-02", "2018-01-03", "2018-01-02"]),
            "Open": [10.0, 12.0, 5.0],
            "Close": [12.0, 15.0, 4.0],
            "Volume": [100, 50, 10],
        }
    )


@pytest.fixture
def run_factory():
    """Factory for contiguous single-ticker runs."""
    return make_run
