from datetime import datetime

import pytest

from meter_costs import Contract, EnergyType, MeterReading


@pytest.fixture
def monthly_readings() -> list[MeterReading]:
    return [
        MeterReading(datetime(2023, 12, 31), EnergyType.POWER, 1000.0),
        MeterReading(datetime(2024, 1, 31), EnergyType.POWER, 1100.0),
        MeterReading(datetime(2024, 2, 29), EnergyType.POWER, 1200.0),
    ]


@pytest.fixture
def power_contract() -> Contract:
    return Contract(
        energy_type=EnergyType.POWER,
        start_date=datetime(2023, 1, 1),
        base_price=10.0,
        working_price=0.25,
    )
