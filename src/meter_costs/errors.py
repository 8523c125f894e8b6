"""Exception hierarchy for the meter cost engine."""

from __future__ import annotations


class MeterCostError(Exception):
    """Base class for all errors raised by meter_costs."""


class InvalidReadingInput(MeterCostError, ValueError):
    pass


class InvalidContractInput(MeterCostError, ValueError):
    pass


class InvalidPeriodKey(MeterCostError, ValueError):
    """Raised for period keys that were not produced by period_key_of."""


class InvalidCostOptions(MeterCostError, ValueError):
    pass
