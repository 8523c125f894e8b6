"""Cost calculation pipeline: aggregation, padding, interpolation, extrapolation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import pandas as pd

from meter_costs.aggregation import aggregate_costs
from meter_costs.errors import InvalidCostOptions
from meter_costs.extrapolation import (
    DEFAULT_EXTRAPOLATION_PERIODS,
    DEFAULT_LOOKBACK_PERIODS,
    extrapolate_costs,
)
from meter_costs.filling import interpolate_gaps, pad_year, pad_year_range
from meter_costs.models import (
    Contract,
    CostDataPoint,
    EnergyType,
    Granularity,
    MeterReading,
)
from meter_costs.periods import ensure_granularity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearRange:
    """Years to show before the first reading and after the current year."""

    past: int = 0
    future: int = 0


@dataclass
class CostOptions:
    include_extrapolation: bool = True
    year: int | None = None
    year_range: YearRange | None = None
    extrapolation_periods: int = DEFAULT_EXTRAPOLATION_PERIODS
    lookback_periods: int = DEFAULT_LOOKBACK_PERIODS

    def applies_to(self, granularity: Granularity) -> bool:
        """Whether a padding option matches the granularity.

        ``year`` pads monthly results and ``year_range`` pads yearly ones; an
        option given for the other granularity is ignored.
        """
        if granularity is Granularity.MONTHLY:
            return self.year is not None
        return self.year_range is not None


def calculate_costs(
    readings: Iterable[MeterReading | Mapping[str, Any]],
    contracts: Iterable[Contract | Mapping[str, Any]],
    granularity: Granularity | str,
    options: CostOptions | None = None,
    *,
    as_of: date | datetime | None = None,
    energy_types: Sequence[EnergyType] | None = None,
) -> list[CostDataPoint]:
    """Calculate per-period costs from cumulative meter readings.

    Args:
        readings: Meter readings (or mappings with date/type/amount), any order.
        contracts: Contracts (or mappings) used to price consumption.
        granularity: "monthly" or "yearly".
        options: Padding and extrapolation settings. ``year`` pads a monthly
            result to the twelve months of that year; ``year_range`` pads a
            yearly result from the first reading's year minus ``past`` to the
            current year plus ``future``. An option that does not match the
            granularity is ignored, and the result is extrapolated by
            appending periods as if no option were given.
        as_of: Date that defines the current year for ``year_range``.
            Defaults to today.
        energy_types: Energy types to report. Defaults to all known types.

    Returns:
        CostDataPoint list sorted by period start.
    """
    options = options or CostOptions()
    granularity = ensure_granularity(granularity)
    energy_types = tuple(energy_types or EnergyType)
    _validate_options(options)

    reading_list = [_coerce(item, MeterReading) for item in readings]
    contract_list = [_coerce(item, Contract) for item in contracts]

    logger.debug(
        "Calculating %s costs for %d readings and %d contracts",
        granularity.value,
        len(reading_list),
        len(contract_list),
    )

    padded = options.applies_to(granularity)
    if not reading_list and not padded:
        return []

    points = aggregate_costs(reading_list, contract_list, granularity, energy_types)

    if padded and options.year is not None:
        points = pad_year(points, options.year, energy_types)
    elif padded and options.year_range is not None:
        current_year = pd.Timestamp(as_of or date.today()).year
        if reading_list:
            start_year = min(r.date for r in reading_list).year
        else:
            start_year = current_year
        points = pad_year_range(
            points,
            start_year - options.year_range.past,
            current_year + options.year_range.future,
            energy_types,
        )

    points = interpolate_gaps(points, granularity, energy_types)

    if options.include_extrapolation:
        points = extrapolate_costs(
            points,
            granularity,
            energy_types,
            fill_existing=padded,
            periods=options.extrapolation_periods,
            lookback=options.lookback_periods,
        )

    return sorted(points, key=lambda point: point.period_start)


def get_available_years(
    readings: Iterable[MeterReading | Mapping[str, Any]],
) -> list[int]:
    """Distinct calendar years present in the readings, newest first."""
    years = {_coerce(item, MeterReading).date.year for item in readings}
    return sorted(years, reverse=True)


def cost_frame(points: Sequence[CostDataPoint]) -> pd.DataFrame:
    """Tabulate cost points, one row per period."""
    rows = []
    for point in points:
        row: dict[str, Any] = {
            "period": point.period,
            "period_start": point.period_start,
            "period_end": point.period_end,
        }
        for energy_type, cost in point.costs.items():
            row[f"{energy_type.value}_cost"] = cost
        row["total_cost"] = point.total_cost
        for energy_type, item in point.breakdown.items():
            row[f"{energy_type.value}_consumption"] = item.consumption
        row["is_interpolated"] = point.is_interpolated
        row["is_extrapolated"] = point.is_extrapolated
        rows.append(row)
    frame = pd.DataFrame(rows)
    if frame.empty:
        return frame
    return frame.set_index("period")


def _validate_options(options: CostOptions) -> None:
    if options.year_range is not None and (
        options.year_range.past < 0 or options.year_range.future < 0
    ):
        raise InvalidCostOptions("year_range offsets must not be negative")
    if options.extrapolation_periods < 0:
        raise InvalidCostOptions("extrapolation_periods must not be negative")
    if options.lookback_periods < 1:
        raise InvalidCostOptions("lookback_periods must be at least 1")


def _coerce(item: Any, model: type) -> Any:
    if isinstance(item, model):
        return item
    return model.from_dict(item)
