"""Shared data structures for the meter cost engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import pandas as pd

from meter_costs.errors import InvalidContractInput, InvalidReadingInput

FAR_FUTURE = pd.Timestamp.max


class EnergyType(Enum):
    POWER = "power"
    GAS = "gas"


class Granularity(Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def freq(self) -> str:
        return "M" if self is Granularity.MONTHLY else "Y"


class PointStatus(Enum):
    """Where the numbers of a CostDataPoint came from."""

    EMPTY = "empty"
    REAL = "real"
    INTERPOLATED = "interpolated"
    EXTRAPOLATED = "extrapolated"


@dataclass(frozen=True)
class MeterReading:
    """A single cumulative meter observation."""

    date: pd.Timestamp
    energy_type: EnergyType
    amount: float

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "date", _ensure_timestamp(self.date, InvalidReadingInput)
        )
        object.__setattr__(
            self,
            "energy_type",
            _ensure_energy_type(self.energy_type, InvalidReadingInput),
        )
        try:
            object.__setattr__(self, "amount", float(self.amount))
        except (TypeError, ValueError) as exc:
            raise InvalidReadingInput(
                f"Reading amount must be numeric, got {self.amount!r}"
            ) from exc

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> MeterReading:
        try:
            return cls(
                date=row["date"],
                energy_type=_first_present(row, "type", "energy_type", "energyType"),
                amount=row["amount"],
            )
        except KeyError as exc:
            raise InvalidReadingInput(f"Reading is missing field {exc}") from exc


@dataclass(frozen=True)
class Contract:
    """Pricing agreement for one energy type over a time interval.

    base_price is a flat charge per period, working_price is charged per
    consumption unit. A missing end_date means the contract is open-ended.
    """

    energy_type: EnergyType
    start_date: pd.Timestamp
    base_price: float
    working_price: float
    end_date: pd.Timestamp | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "energy_type",
            _ensure_energy_type(self.energy_type, InvalidContractInput),
        )
        object.__setattr__(
            self,
            "start_date",
            _ensure_timestamp(self.start_date, InvalidContractInput),
        )
        if self.end_date is not None:
            end = _ensure_timestamp(self.end_date, InvalidContractInput)
            if end < self.start_date:
                raise InvalidContractInput(
                    f"Contract ends ({end.isoformat()}) before it starts "
                    f"({self.start_date.isoformat()})"
                )
            object.__setattr__(self, "end_date", end)
        try:
            object.__setattr__(self, "base_price", float(self.base_price))
            object.__setattr__(self, "working_price", float(self.working_price))
        except (TypeError, ValueError) as exc:
            raise InvalidContractInput("Contract prices must be numeric") from exc

    @property
    def effective_end(self) -> pd.Timestamp:
        return FAR_FUTURE if self.end_date is None else self.end_date

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> Contract:
        try:
            return cls(
                energy_type=_first_present(row, "type", "energy_type", "energyType"),
                start_date=_first_present(row, "start_date", "startDate"),
                end_date=_first_present(row, "end_date", "endDate", default=None),
                base_price=_first_present(row, "base_price", "basePrice"),
                working_price=_first_present(row, "working_price", "workingPrice"),
            )
        except KeyError as exc:
            raise InvalidContractInput(f"Contract is missing field {exc}") from exc


@dataclass(frozen=True)
class CostBreakdown:
    consumption: float = 0.0
    base_price: float = 0.0
    working_price: float = 0.0
    total_cost: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "consumption": self.consumption,
            "basePrice": self.base_price,
            "workingPrice": self.working_price,
            "totalCost": self.total_cost,
        }


@dataclass
class CostDataPoint:
    period: str
    period_start: pd.Timestamp
    period_end: pd.Timestamp
    costs: dict[EnergyType, float] = field(default_factory=dict)
    breakdown: dict[EnergyType, CostBreakdown] = field(default_factory=dict)
    is_interpolated: bool = False
    is_extrapolated: bool = False

    def __post_init__(self) -> None:
        if self.is_interpolated and self.is_extrapolated:
            raise ValueError(
                f"Period {self.period} cannot be both interpolated and extrapolated"
            )

    @property
    def total_cost(self) -> float:
        return sum(self.costs.values(), 0.0)

    @property
    def status(self) -> PointStatus:
        if self.is_interpolated:
            return PointStatus.INTERPOLATED
        if self.is_extrapolated:
            return PointStatus.EXTRAPOLATED
        if self.total_cost > 0:
            return PointStatus.REAL
        return PointStatus.EMPTY

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "periodStart": self.period_start.isoformat(),
            "periodEnd": self.period_end.isoformat(),
            "costs": {_label_value(k): v for k, v in self.costs.items()},
            "totalCost": self.total_cost,
            "breakdown": {
                _label_value(k): v.to_dict() for k, v in self.breakdown.items()
            },
            "isInterpolated": self.is_interpolated,
            "isExtrapolated": self.is_extrapolated,
        }


def _ensure_timestamp(value: object, error: type[Exception]) -> pd.Timestamp:
    try:
        timestamp = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise error(f"Unsupported timestamp value: {value!r}") from exc
    if timestamp is pd.NaT:
        raise error(f"Unsupported timestamp value: {value!r}")
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert(None)
    return timestamp


def _ensure_energy_type(value: object, error: type[Exception]) -> EnergyType:
    if isinstance(value, EnergyType):
        return value
    try:
        return EnergyType(str(value).lower())
    except ValueError as exc:
        raise error(f"Unknown energy type: {value!r}") from exc


_MISSING = object()


def _first_present(row: Mapping[str, Any], *keys: str, default: Any = _MISSING) -> Any:
    for key in keys:
        if key in row:
            return row[key]
    if default is _MISSING:
        raise KeyError(keys[0])
    return default


def _label_value(value: Any) -> str:
    if isinstance(value, Enum):
        return value.value
    return str(value)
