"""Daily-rate helpers for estimating future consumption and cost."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from meter_costs.models import Contract, MeterReading

_ONE_DAY = pd.Timedelta(days=1)
DAYS_PER_YEAR = 365


def daily_average(readings: Sequence[MeterReading]) -> float:
    """Average consumption per day between the earliest and latest reading.

    Readings must belong to one energy type. Returns 0 for fewer than two
    readings or when all readings share a timestamp.
    """
    if len(readings) < 2:
        return 0.0
    ordered = sorted(readings, key=lambda reading: reading.date)
    first, last = ordered[0], ordered[-1]
    span = last.date - first.date
    if span == pd.Timedelta(0):
        return 0.0
    return (last.amount - first.amount) / (span / _ONE_DAY)


def monthly_daily_averages(readings: Sequence[MeterReading]) -> list[float]:
    """Average daily consumption for each calendar month, January first.

    Every interval between consecutive readings is spread evenly over the
    days it covers, split at midnight, and credited to the month each piece
    falls in. Months no interval touches report 0.
    """
    if len(readings) < 2:
        return [0.0] * 12
    ordered = sorted(readings, key=lambda reading: reading.date)

    chunks = []
    for start, end in zip(ordered, ordered[1:]):
        span = end.date - start.date
        if span <= pd.Timedelta(0):
            continue
        rate = (end.amount - start.amount) / (span / _ONE_DAY)
        midnights = pd.date_range(start.date.normalize() + _ONE_DAY, end.date, freq="D")
        edges = pd.DatetimeIndex([start.date, *midnights[midnights < end.date], end.date])
        days = (edges[1:] - edges[:-1]) / _ONE_DAY
        chunks.append(
            pd.DataFrame(
                {
                    "month": edges[:-1].month,
                    "days": days,
                    "consumption": days * rate,
                }
            )
        )
    if not chunks:
        return [0.0] * 12

    totals = pd.concat(chunks, ignore_index=True).groupby("month")[
        ["days", "consumption"]
    ].sum()
    averages = []
    for month in range(1, 13):
        if month in totals.index and totals.at[month, "days"] > 0:
            averages.append(
                float(totals.at[month, "consumption"] / totals.at[month, "days"])
            )
        else:
            averages.append(0.0)
    return averages


def projected_cost(units: float, days: float, contract: Contract) -> float:
    """Working price for ``units`` plus the base price prorated over ``days``."""
    return units * contract.working_price + contract.base_price / DAYS_PER_YEAR * days
