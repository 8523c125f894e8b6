"""Consumption derived from cumulative meter readings."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from meter_costs.models import Granularity, MeterReading
from meter_costs.periods import period_range_of

logger = logging.getLogger(__name__)


def consumption_between_periods(
    readings: Sequence[MeterReading],
    period_key: str,
    previous_key: str | None,
    granularity: Granularity | str = Granularity.MONTHLY,
) -> float:
    """Meter delta between the end of the previous period and this one.

    ``readings`` are the readings of a single energy type, from any period.
    The reading for a period is the latest one inside it; when a period has
    no reading the nearest one outside it is used instead (the earliest after
    the previous period for the current side, the latest before the current
    period for the previous side).
    """
    if previous_key is None:
        return 0.0

    ordered = sorted(readings, key=lambda reading: reading.date)
    start, end = period_range_of(period_key, granularity)
    previous_start, previous_end = period_range_of(previous_key, granularity)

    current = _latest_between(ordered, start, end)
    if current is None:
        current = next((r for r in ordered if r.date > previous_end), None)

    previous = _latest_between(ordered, previous_start, previous_end)
    if previous is None:
        previous = next((r for r in reversed(ordered) if r.date < start), None)

    if current is None or previous is None or current is previous:
        return 0.0
    return current.amount - previous.amount


def consumption_within_period(
    readings: Sequence[MeterReading],
    period_start: pd.Timestamp,
    period_end: pd.Timestamp,
) -> float:
    """Consumption of the period, scaled up from the span its readings cover.

    Readings outside ``[period_start, period_end]`` are ignored. With fewer
    than two readings no rate can be derived and the result is 0. Readings
    that all share one timestamp return their raw delta.
    """
    inside = sorted(
        (r for r in readings if period_start <= r.date <= period_end),
        key=lambda reading: reading.date,
    )
    if len(inside) < 2:
        return 0.0

    first, last = inside[0], inside[-1]
    actual = last.amount - first.amount
    actual_span = last.date - first.date
    if actual_span == pd.Timedelta(0):
        return actual

    period_span = period_end - period_start
    extrapolated = actual / actual_span.value * period_span.value
    logger.debug(
        "Scaled %.3f over %s to %.3f over %s",
        actual,
        actual_span,
        extrapolated,
        period_span,
    )
    return extrapolated


def _latest_between(
    ordered: Sequence[MeterReading], start: pd.Timestamp, end: pd.Timestamp
) -> MeterReading | None:
    found = None
    for reading in ordered:
        if reading.date > end:
            break
        if reading.date >= start:
            found = reading
    return found
