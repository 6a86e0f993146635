"""Pure calculation functions for ticker summaries."""

from datetime import date

from ticker_stats.models.results import ReturnStatus, TickerSummary


def percent_return(year_open: float, year_close: float) -> float | None:
    """
    Calculate the return from the year open to the year close.

    Args:
        year_open: Open price of the first trading day
        year_close: Close price of the last trading day

    Returns:
        Return as a fraction (0.5 = 50%), or None when year_open is zero
    """
    if year_open == 0:
        return None
    return (year_close - year_open) / year_open


def summarize_run(
    ticker: str,
    year_open: float,
    year_close: float,
    total_volume: int,
    record_count: int,
    first_date: date | None = None,
    last_date: date | None = None,
) -> TickerSummary:
    """
    Finalize the accumulator of one closed run into a TickerSummary.

    A zero year open yields UNDEFINED_RETURN with no numeric return.
    """
    pct = percent_return(year_open, year_close)
    return TickerSummary(
        ticker=ticker,
        status=ReturnStatus.OK if pct is not None else ReturnStatus.UNDEFINED_RETURN,
        year_open=year_open,
        year_close=year_close,
        total_volume=total_volume,
        percent_return=pct,
        record_count=record_count,
        first_date=first_date,
        last_date=last_date,
    )
