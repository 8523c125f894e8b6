"""Per-period cost aggregation of meter readings."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from meter_costs.consumption import (
    consumption_between_periods,
    consumption_within_period,
)
from meter_costs.contracts import contract_cost, find_contract_for_period
from meter_costs.models import (
    Contract,
    CostBreakdown,
    CostDataPoint,
    EnergyType,
    Granularity,
    MeterReading,
)
from meter_costs.periods import (
    ensure_granularity,
    key_of_period,
    period_range_of,
    previous_period_key,
)

logger = logging.getLogger(__name__)


def aggregate_costs(
    readings: Sequence[MeterReading],
    contracts: Sequence[Contract],
    granularity: Granularity | str,
    energy_types: Sequence[EnergyType] | None = None,
) -> list[CostDataPoint]:
    """Compute one CostDataPoint for every period that holds a reading."""
    granularity = ensure_granularity(granularity)
    energy_types = tuple(energy_types or EnergyType)
    if not readings:
        return []

    frame = _readings_frame(readings, granularity)
    readings_by_type = {
        energy_type: [r for r in readings if r.energy_type is energy_type]
        for energy_type in energy_types
    }

    points = []
    for period, group in frame.groupby("period", sort=True):
        key = key_of_period(period, granularity)
        logger.debug(
            "Period %s holds readings %s",
            key,
            group["energy_type"].value_counts().to_dict(),
        )
        points.append(
            _period_cost(
                key,
                granularity,
                readings_by_type,
                contracts,
            )
        )
    return sorted(points, key=lambda point: point.period_start)


def _readings_frame(
    readings: Sequence[MeterReading], granularity: Granularity
) -> pd.DataFrame:
    frame = pd.DataFrame(
        {
            "date": pd.DatetimeIndex([r.date for r in readings]),
            "energy_type": [r.energy_type.value for r in readings],
        }
    )
    frame["period"] = frame["date"].dt.to_period(granularity.freq)
    return frame


def _period_cost(
    key: str,
    granularity: Granularity,
    readings_by_type: dict[EnergyType, list[MeterReading]],
    contracts: Sequence[Contract],
) -> CostDataPoint:
    start, end = period_range_of(key, granularity)
    costs: dict[EnergyType, float] = {}
    breakdown: dict[EnergyType, CostBreakdown] = {}

    for energy_type, type_readings in readings_by_type.items():
        if granularity is Granularity.MONTHLY:
            consumption = consumption_between_periods(
                type_readings,
                key,
                previous_period_key(key, granularity),
                granularity,
            )
        else:
            consumption = consumption_within_period(type_readings, start, end)

        contract = find_contract_for_period(start, end, energy_type, contracts)
        cost = 0.0
        if contract is not None and consumption > 0:
            cost = contract_cost(consumption, contract)
        logger.debug(
            "Period %s %s: consumption=%s contract=%s cost=%s",
            key,
            energy_type.value,
            consumption,
            "found" if contract is not None else "none",
            cost,
        )

        costs[energy_type] = cost
        breakdown[energy_type] = CostBreakdown(
            consumption=consumption,
            base_price=contract.base_price if contract is not None else 0.0,
            working_price=contract.working_price if contract is not None else 0.0,
            total_cost=cost,
        )

    return CostDataPoint(
        period=key,
        period_start=start,
        period_end=end,
        costs=costs,
        breakdown=breakdown,
    )
