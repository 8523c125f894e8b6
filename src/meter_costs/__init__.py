"""Public package entry point for the meter cost engine."""

from __future__ import annotations

import logging

from meter_costs.aggregation import aggregate_costs
from meter_costs.billing import (
    CostOptions,
    YearRange,
    calculate_costs,
    cost_frame,
    get_available_years,
)
from meter_costs.consumption import (
    consumption_between_periods,
    consumption_within_period,
)
from meter_costs.contracts import contract_cost, find_contract_for_period
from meter_costs.errors import (
    InvalidContractInput,
    InvalidCostOptions,
    InvalidPeriodKey,
    InvalidReadingInput,
    MeterCostError,
)
from meter_costs.extrapolation import extrapolate_costs, linear_regression
from meter_costs.filling import interpolate_gaps, pad_year, pad_year_range
from meter_costs.models import (
    Contract,
    CostBreakdown,
    CostDataPoint,
    EnergyType,
    Granularity,
    MeterReading,
    PointStatus,
)
from meter_costs.periods import (
    next_period_key,
    period_key_of,
    period_keys_between,
    period_range_of,
    previous_period_key,
)
from meter_costs.projections import (
    daily_average,
    monthly_daily_averages,
    projected_cost,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "aggregate_costs",
    "calculate_costs",
    "consumption_between_periods",
    "consumption_within_period",
    "Contract",
    "contract_cost",
    "cost_frame",
    "CostBreakdown",
    "CostDataPoint",
    "CostOptions",
    "daily_average",
    "EnergyType",
    "extrapolate_costs",
    "find_contract_for_period",
    "get_available_years",
    "Granularity",
    "interpolate_gaps",
    "InvalidContractInput",
    "InvalidCostOptions",
    "InvalidPeriodKey",
    "InvalidReadingInput",
    "linear_regression",
    "MeterCostError",
    "MeterReading",
    "monthly_daily_averages",
    "next_period_key",
    "pad_year",
    "pad_year_range",
    "period_key_of",
    "period_keys_between",
    "period_range_of",
    "PointStatus",
    "previous_period_key",
    "projected_cost",
    "YearRange",
]
