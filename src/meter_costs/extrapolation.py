"""Projection of costs beyond the last period with known data."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import numpy as np

from meter_costs.filling import placeholder_point
from meter_costs.models import (
    CostBreakdown,
    CostDataPoint,
    EnergyType,
    Granularity,
    PointStatus,
)
from meter_costs.periods import ensure_granularity, next_period_key

logger = logging.getLogger(__name__)

DEFAULT_EXTRAPOLATION_PERIODS = 3
DEFAULT_LOOKBACK_PERIODS = 3

_Projection = Callable[[int], tuple[dict[EnergyType, float], dict[EnergyType, CostBreakdown]]]


def linear_regression(
    xs: Sequence[float], ys: Sequence[float]
) -> tuple[float, float]:
    """Ordinary least squares fit, returned as ``(slope, intercept)``.

    No points give a zero line and a single point gives a flat line through it.
    """
    if len(xs) == 0:
        return 0.0, 0.0
    if len(xs) == 1:
        return 0.0, float(ys[0])
    slope, intercept = np.polyfit(
        np.asarray(xs, dtype=float), np.asarray(ys, dtype=float), 1
    )
    return float(slope), float(intercept)


def extrapolate_costs(
    points: Sequence[CostDataPoint],
    granularity: Granularity | str,
    energy_types: Sequence[EnergyType] | None = None,
    fill_existing: bool = False,
    periods: int = DEFAULT_EXTRAPOLATION_PERIODS,
    lookback: int = DEFAULT_LOOKBACK_PERIODS,
) -> list[CostDataPoint]:
    """Project costs for the periods after the last period with real data.

    When ``fill_existing`` is true, zero-valued periods after the last real
    period are rewritten in place and nothing is appended. Otherwise existing
    periods are kept as they are and ``periods`` new periods are appended
    after the last point. Monthly data, and yearly data with a single real
    period, get the flat average of the last ``lookback`` real periods; yearly
    data with two or more real periods follows a per-type linear trend.
    """
    granularity = ensure_granularity(granularity)
    energy_types = tuple(energy_types or EnergyType)
    ordered = sorted(points, key=lambda point: point.period_start)

    real = [
        index
        for index, point in enumerate(ordered)
        if point.status is PointStatus.REAL
    ]
    if not real:
        logger.debug("No period with real data, skipping extrapolation")
        return ordered

    if granularity is Granularity.YEARLY and len(real) >= 2:
        project = _trend_projection(ordered, real, energy_types, lookback)
    else:
        project = _average_projection(ordered, real, energy_types, lookback)

    result = []
    for index, point in enumerate(ordered):
        if fill_existing and index > real[-1] and point.total_cost == 0:
            result.append(_extrapolated(point, *project(index)))
        else:
            result.append(point)

    if not fill_existing:
        key = ordered[-1].period
        for offset in range(periods):
            key = next_period_key(key, granularity)
            placeholder = placeholder_point(key, granularity, energy_types)
            result.append(_extrapolated(placeholder, *project(len(ordered) + offset)))

    logger.debug(
        "Extrapolated %d periods after %s",
        sum(point.is_extrapolated for point in result),
        ordered[real[-1]].period,
    )
    return result


def _extrapolated(
    point: CostDataPoint,
    costs: dict[EnergyType, float],
    breakdown: dict[EnergyType, CostBreakdown],
) -> CostDataPoint:
    return CostDataPoint(
        period=point.period,
        period_start=point.period_start,
        period_end=point.period_end,
        costs=dict(costs),
        breakdown=dict(breakdown),
        is_extrapolated=True,
    )


def _recent_means(
    recent: Sequence[CostDataPoint], energy_type: EnergyType
) -> CostBreakdown:
    rows = [point.breakdown.get(energy_type, CostBreakdown()) for point in recent]
    return CostBreakdown(
        consumption=float(np.mean([row.consumption for row in rows])),
        base_price=float(np.mean([row.base_price for row in rows])),
        working_price=float(np.mean([row.working_price for row in rows])),
        total_cost=float(np.mean([point.costs.get(energy_type, 0.0) for point in recent])),
    )


def _average_projection(
    ordered: Sequence[CostDataPoint],
    real: Sequence[int],
    energy_types: Sequence[EnergyType],
    lookback: int,
) -> _Projection:
    recent = [ordered[index] for index in real[-lookback:]]
    means = {energy_type: _recent_means(recent, energy_type) for energy_type in energy_types}
    costs = {energy_type: means[energy_type].total_cost for energy_type in energy_types}

    def project(position: int) -> tuple[dict[EnergyType, float], dict[EnergyType, CostBreakdown]]:
        return costs, means

    return project


def _trend_projection(
    ordered: Sequence[CostDataPoint],
    real: Sequence[int],
    energy_types: Sequence[EnergyType],
    lookback: int,
) -> _Projection:
    recent = [ordered[index] for index in real[-lookback:]]
    prices = {energy_type: _recent_means(recent, energy_type) for energy_type in energy_types}
    cost_lines = {}
    consumption_lines = {}
    for energy_type in energy_types:
        xs, costs, consumptions = [], [], []
        for index in real:
            point = ordered[index]
            cost = point.costs.get(energy_type, 0.0)
            consumption = point.breakdown.get(energy_type, CostBreakdown()).consumption
            if cost == 0 and consumption == 0:
                continue
            xs.append(index)
            costs.append(cost)
            consumptions.append(consumption)
        cost_lines[energy_type] = linear_regression(xs, costs)
        consumption_lines[energy_type] = linear_regression(xs, consumptions)
        logger.debug(
            "%s trend over %d periods: cost=%s consumption=%s",
            energy_type.value,
            len(xs),
            cost_lines[energy_type],
            consumption_lines[energy_type],
        )

    def project(position: int) -> tuple[dict[EnergyType, float], dict[EnergyType, CostBreakdown]]:
        costs = {}
        breakdown = {}
        for energy_type in energy_types:
            slope, intercept = cost_lines[energy_type]
            cost = max(0.0, slope * position + intercept)
            slope, intercept = consumption_lines[energy_type]
            consumption = max(0.0, slope * position + intercept)
            costs[energy_type] = cost
            breakdown[energy_type] = CostBreakdown(
                consumption=consumption,
                base_price=prices[energy_type].base_price,
                working_price=prices[energy_type].working_price,
                total_cost=cost,
            )
        return costs, breakdown

    return project
