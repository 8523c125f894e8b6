from datetime import datetime

import pandas as pd
import pytest

from meter_costs.aggregation import aggregate_costs
from meter_costs.models import Contract, EnergyType, Granularity, MeterReading


def test_monthly_deltas_and_costs(monthly_readings, power_contract) -> None:
    points = aggregate_costs(monthly_readings, [power_contract], Granularity.MONTHLY)

    assert [p.period for p in points] == ["2023-12", "2024-01", "2024-02"]
    december, january, february = points
    assert december.costs[EnergyType.POWER] == 0.0
    assert january.breakdown[EnergyType.POWER].consumption == 100.0
    assert january.costs[EnergyType.POWER] == 35.0
    assert february.costs[EnergyType.POWER] == 35.0
    assert january.costs[EnergyType.GAS] == 0.0
    assert january.total_cost == 35.0


def test_breakdown_records_contract_prices(monthly_readings, power_contract) -> None:
    january = aggregate_costs(monthly_readings, [power_contract], "monthly")[1]
    item = january.breakdown[EnergyType.POWER]
    assert item.base_price == 10.0
    assert item.working_price == 0.25
    assert item.total_cost == 35.0


def test_missing_contract_keeps_consumption(monthly_readings) -> None:
    points = aggregate_costs(monthly_readings, [], Granularity.MONTHLY)
    assert all(p.costs[EnergyType.POWER] == 0.0 for p in points)
    assert points[1].breakdown[EnergyType.POWER].consumption == 100.0
    assert points[1].breakdown[EnergyType.POWER].base_price == 0.0


def test_unsorted_input_gives_sorted_output(monthly_readings, power_contract) -> None:
    shuffled = [monthly_readings[2], monthly_readings[0], monthly_readings[1]]
    points = aggregate_costs(shuffled, [power_contract], Granularity.MONTHLY)
    starts = [p.period_start for p in points]
    assert starts == sorted(starts)
    assert points[1].costs[EnergyType.POWER] == 35.0


def test_yearly_scales_consumption_to_full_year() -> None:
    readings = [
        MeterReading(datetime(2023, 1, 1), EnergyType.GAS, 0.0),
        MeterReading(datetime(2023, 7, 2), EnergyType.GAS, 500.0),
    ]
    contract = Contract(
        energy_type="gas",
        start_date="2022-01-01",
        base_price=120.0,
        working_price=0.1,
    )
    points = aggregate_costs(readings, [contract], Granularity.YEARLY)

    assert len(points) == 1
    point = points[0]
    span = pd.Timestamp("2023-07-02") - pd.Timestamp("2023-01-01")
    expected = 500.0 / span.value * (point.period_end - point.period_start).value
    assert point.breakdown[EnergyType.GAS].consumption == pytest.approx(expected)
    assert point.costs[EnergyType.GAS] == pytest.approx(120.0 + expected * 0.1)
    assert point.costs[EnergyType.POWER] == 0.0


def test_mixed_energy_types(power_contract) -> None:
    readings = [
        MeterReading(datetime(2024, 1, 31), EnergyType.POWER, 100.0),
        MeterReading(datetime(2024, 2, 29), EnergyType.POWER, 300.0),
        MeterReading(datetime(2024, 1, 31), EnergyType.GAS, 50.0),
        MeterReading(datetime(2024, 2, 29), EnergyType.GAS, 70.0),
    ]
    gas = Contract(
        energy_type=EnergyType.GAS,
        start_date=datetime(2024, 1, 1),
        base_price=5.0,
        working_price=1.0,
    )
    february = aggregate_costs(readings, [power_contract, gas], "monthly")[-1]
    assert february.costs[EnergyType.POWER] == 60.0
    assert february.costs[EnergyType.GAS] == 25.0
    assert february.total_cost == 85.0


def test_empty_readings() -> None:
    assert aggregate_costs([], [], Granularity.MONTHLY) == []
