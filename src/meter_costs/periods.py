"""Canonical period keys ("YYYY" / "YYYY-MM") and their calendar ranges."""

from __future__ import annotations

import re
from datetime import date, datetime

import pandas as pd

from meter_costs.errors import InvalidPeriodKey
from meter_costs.models import Granularity

_MONTH_KEY = re.compile(r"^(\d{4})-(\d{2})$")
_YEAR_KEY = re.compile(r"^(\d{4})$")


def ensure_granularity(value: Granularity | str) -> Granularity:
    if isinstance(value, Granularity):
        return value
    try:
        return Granularity(str(value).lower())
    except ValueError as exc:
        raise ValueError(f"Unknown granularity: {value!r}") from exc


def period_key_of(target: date | datetime | str, granularity: Granularity | str) -> str:
    timestamp = pd.Timestamp(target)
    if ensure_granularity(granularity) is Granularity.MONTHLY:
        return f"{timestamp.year:04d}-{timestamp.month:02d}"
    return f"{timestamp.year:04d}"


def to_period(key: str, granularity: Granularity | str) -> pd.Period:
    granularity = ensure_granularity(granularity)
    if granularity is Granularity.MONTHLY:
        match = _MONTH_KEY.match(key)
        if not match or not 1 <= int(match.group(2)) <= 12:
            raise InvalidPeriodKey(f"Invalid monthly period key: {key!r}")
        return pd.Period(year=int(match.group(1)), month=int(match.group(2)), freq="M")
    match = _YEAR_KEY.match(key)
    if not match:
        raise InvalidPeriodKey(f"Invalid yearly period key: {key!r}")
    return pd.Period(year=int(match.group(1)), freq=granularity.freq)


def key_of_period(period: pd.Period, granularity: Granularity | str) -> str:
    return period_key_of(period.start_time, granularity)


def period_range_of(
    key: str, granularity: Granularity | str
) -> tuple[pd.Timestamp, pd.Timestamp]:
    """Return the first and last instant of the calendar month or year."""
    period = to_period(key, granularity)
    return period.start_time, period.end_time


def next_period_key(key: str, granularity: Granularity | str) -> str:
    return key_of_period(to_period(key, granularity) + 1, granularity)


def previous_period_key(key: str, granularity: Granularity | str) -> str:
    return key_of_period(to_period(key, granularity) - 1, granularity)


def period_keys_between(
    first: str, last: str, granularity: Granularity | str
) -> list[str]:
    """Inclusive, contiguous list of keys from first to last."""
    start = to_period(first, granularity)
    end = to_period(last, granularity)
    keys = []
    current = start
    while current <= end:
        keys.append(key_of_period(current, granularity))
        current += 1
    return keys
