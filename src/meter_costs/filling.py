"""Padding of requested ranges and interpolation of gaps between known periods."""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections.abc import Sequence

from meter_costs.models import CostBreakdown, CostDataPoint, EnergyType, Granularity
from meter_costs.periods import (
    ensure_granularity,
    period_keys_between,
    period_range_of,
)

logger = logging.getLogger(__name__)


def placeholder_point(
    key: str,
    granularity: Granularity | str,
    energy_types: Sequence[EnergyType] | None = None,
    with_breakdown: bool = True,
) -> CostDataPoint:
    """Zero-valued point for a period without data."""
    energy_types = tuple(energy_types or EnergyType)
    start, end = period_range_of(key, granularity)
    breakdown = (
        {energy_type: CostBreakdown() for energy_type in energy_types}
        if with_breakdown
        else {}
    )
    return CostDataPoint(
        period=key,
        period_start=start,
        period_end=end,
        costs={energy_type: 0.0 for energy_type in energy_types},
        breakdown=breakdown,
    )


def pad_year(
    points: Sequence[CostDataPoint],
    year: int,
    energy_types: Sequence[EnergyType] | None = None,
) -> list[CostDataPoint]:
    """Return exactly the twelve monthly points of ``year``."""
    keys = period_keys_between(f"{year:04d}-01", f"{year:04d}-12", Granularity.MONTHLY)
    return _pad(points, keys, Granularity.MONTHLY, energy_types)


def pad_year_range(
    points: Sequence[CostDataPoint],
    start_year: int,
    end_year: int,
    energy_types: Sequence[EnergyType] | None = None,
) -> list[CostDataPoint]:
    """Return one yearly point for every year from start_year to end_year."""
    if end_year < start_year:
        return []
    keys = period_keys_between(f"{start_year:04d}", f"{end_year:04d}", Granularity.YEARLY)
    return _pad(points, keys, Granularity.YEARLY, energy_types)


def _pad(
    points: Sequence[CostDataPoint],
    keys: list[str],
    granularity: Granularity,
    energy_types: Sequence[EnergyType] | None,
) -> list[CostDataPoint]:
    existing = {point.period: point for point in points}
    dropped = set(existing) - set(keys)
    if dropped:
        logger.debug("Dropping %d periods outside the requested range", len(dropped))
    return [
        existing.get(key) or placeholder_point(key, granularity, energy_types)
        for key in keys
    ]


def interpolate_gaps(
    points: Sequence[CostDataPoint],
    granularity: Granularity | str,
    energy_types: Sequence[EnergyType] | None = None,
) -> list[CostDataPoint]:
    """Fill zero-valued periods that lie between periods with known costs.

    The sequence is first made contiguous from its first to its last key.
    Each zero-total period strictly between the first and last period with a
    positive total receives, per energy type, the mean of the nearest prior
    and next periods with a positive total. Periods at the edges keep their
    zero values.
    """
    if not points:
        return []
    granularity = ensure_granularity(granularity)
    energy_types = tuple(energy_types or EnergyType)

    ordered = sorted(points, key=lambda point: point.period_start)
    by_key = {point.period: point for point in ordered}
    dense = [
        by_key.get(key)
        or placeholder_point(key, granularity, energy_types, with_breakdown=False)
        for key in period_keys_between(ordered[0].period, ordered[-1].period, granularity)
    ]

    known = [index for index, point in enumerate(dense) if point.total_cost > 0]
    if len(known) < 2:
        return dense

    result = []
    for index, point in enumerate(dense):
        if not (known[0] < index < known[-1]) or point.total_cost != 0:
            result.append(point)
            continue
        position = bisect_left(known, index)
        prior = dense[known[position - 1]]
        following = dense[known[position]]
        costs = {
            energy_type: (
                prior.costs.get(energy_type, 0.0)
                + following.costs.get(energy_type, 0.0)
            )
            / 2
            for energy_type in energy_types
        }
        logger.debug(
            "Interpolated %s between %s and %s",
            point.period,
            prior.period,
            following.period,
        )
        result.append(
            CostDataPoint(
                period=point.period,
                period_start=point.period_start,
                period_end=point.period_end,
                costs=costs,
                breakdown=dict(point.breakdown),
                is_interpolated=True,
            )
        )
    return result
