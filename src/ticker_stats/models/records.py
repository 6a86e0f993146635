"""Trading record type and field coercion."""

import math
import operator
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

import pandas as pd

from ticker_stats.errors import MalformedRecordError

RECORD_FIELDS = ("ticker", "date", "open_price", "close_price", "volume")


@dataclass(frozen=True)
class TradingRecord:
    """One trading day for one ticker."""

    ticker: str
    date: date
    open_price: float
    close_price: float
    volume: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "ticker": self.ticker,
            "date": self.date.isoformat(),
            "open_price": self.open_price,
            "close_price": self.close_price,
            "volume": self.volume,
        }


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _get_field(raw: Any, field: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(field)
    return getattr(raw, field, None)


def _coerce_ticker(value: Any, position: int) -> str:
    if _is_missing(value):
        raise MalformedRecordError(position, "ticker", value, "is missing")
    if not isinstance(value, str):
        raise MalformedRecordError(position, "ticker", value, "is not a string")
    return value.strip()


def _coerce_date(value: Any, position: int) -> date:
    if _is_missing(value):
        raise MalformedRecordError(position, "date", value, "is missing")

    # datetime (and pd.Timestamp) before date: datetime is a date subclass
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    try:
        if isinstance(value, int) and not isinstance(value, bool):
            # Compact yyyymmdd ordinals, e.g. 20180102
            return datetime.strptime(str(value), "%Y%m%d").date()
        if isinstance(value, str):
            parsed = pd.Timestamp(value.strip())
            # "nan" and "NaT" parse to NaT rather than raising
            if pd.isna(parsed):
                raise ValueError(value)
            return parsed.date()
    except ValueError:
        raise MalformedRecordError(position, "date", value, "is not a valid date") from None

    raise MalformedRecordError(position, "date", value, "is not a date")


def _coerce_price(value: Any, field: str, position: int) -> float:
    if _is_missing(value):
        raise MalformedRecordError(position, field, value, "is missing")
    if isinstance(value, bool):
        raise MalformedRecordError(position, field, value, "is not numeric")

    try:
        price = float(value)
    except (TypeError, ValueError):
        raise MalformedRecordError(position, field, value, "is not numeric") from None

    if not math.isfinite(price):
        raise MalformedRecordError(position, field, value, "is not finite")
    return price


def _coerce_volume(value: Any, position: int) -> int:
    if _is_missing(value):
        raise MalformedRecordError(position, "volume", value, "is missing")
    if isinstance(value, bool):
        raise MalformedRecordError(position, "volume", value, "is not numeric")

    # Integral types (int, numpy integers) stay exact; float() rounds above 2**53
    try:
        exact = operator.index(value)
    except TypeError:
        exact = None
    if exact is not None:
        if exact < 0:
            raise MalformedRecordError(position, "volume", value, "is negative")
        return exact

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise MalformedRecordError(position, "volume", value, "is not numeric") from None

    if not math.isfinite(number) or not number.is_integer():
        raise MalformedRecordError(position, "volume", value, "is not a whole number")
    if number < 0:
        raise MalformedRecordError(position, "volume", value, "is negative")

    return int(number)


def coerce_record(raw: TradingRecord | Mapping[str, Any], position: int) -> TradingRecord:
    """
    Validate a raw record and return a TradingRecord.

    Accepts either a TradingRecord (re-validated, since dataclasses do not
    check their field types) or a mapping with the record field names.

    Args:
        raw: Record or mapping to validate
        position: Zero-based position of the record in the input stream

    Returns:
        Validated TradingRecord

    Raises:
        MalformedRecordError: If a field is missing or of the wrong kind
    """
    return TradingRecord(
        ticker=_coerce_ticker(_get_field(raw, "ticker"), position),
        date=_coerce_date(_get_field(raw, "date"), position),
        open_price=_coerce_price(_get_field(raw, "open_price"), "open_price", position),
        close_price=_coerce_price(_get_field(raw, "close_price"), "close_price", position),
        volume=_coerce_volume(_get_field(raw, "volume"), position),
    )
