"""Exceptions raised while aggregating trading records."""

from typing import Any


class TickerStatsError(Exception):
    """Base class for aggregation errors."""


class MalformedRecordError(TickerStatsError):
    """A record is missing a required field or holds a non-numeric value."""

    def __init__(self, position: int, field: str, value: Any = None, reason: str | None = None):
        self.position = position
        self.field = field
        self.value = value
        self.reason = reason or "invalid value"
        super().__init__(f"Malformed record at row {position}: field '{field}' {self.reason} ({value!r})")


class OrderViolationError(TickerStatsError):
    """
    Records do not follow the ticker-list order.

    Raised when a ticker reappears after its run was closed, when runs arrive
    in a different order than the ticker list, or when dates step backwards
    within a run.
    """

    def __init__(self, ticker: str, position: int, reason: str):
        self.ticker = ticker
        self.position = position
        self.reason = reason
        super().__init__(f"Order violation at row {position} for {ticker}: {reason}")


class UnknownTickerError(OrderViolationError):
    """A record names a ticker that is not in the ticker list."""

    def __init__(self, ticker: str, position: int):
        super().__init__(ticker, position, "ticker is not in the ticker list")
