from datetime import datetime

from meter_costs.contracts import contract_cost, find_contract_for_period
from meter_costs.models import Contract, EnergyType, Granularity
from meter_costs.periods import period_range_of


def _contract(start, end=None, energy_type=EnergyType.POWER, base=10.0, working=0.3):
    return Contract(
        energy_type=energy_type,
        start_date=start,
        end_date=end,
        base_price=base,
        working_price=working,
    )


def test_no_candidates_returns_none() -> None:
    start, end = period_range_of("2024-01", Granularity.MONTHLY)
    gas = _contract(datetime(2023, 1, 1), energy_type=EnergyType.GAS)
    expired = _contract(datetime(2022, 1, 1), datetime(2022, 12, 31))
    assert find_contract_for_period(start, end, EnergyType.POWER, [gas, expired]) is None
    assert find_contract_for_period(start, end, EnergyType.POWER, []) is None


def test_single_candidate_open_ended() -> None:
    start, end = period_range_of("2030-06", Granularity.MONTHLY)
    contract = _contract(datetime(2023, 1, 1))
    assert find_contract_for_period(start, end, EnergyType.POWER, [contract]) is contract


def test_closed_interval_touching_boundary_is_candidate() -> None:
    start, end = period_range_of("2024-02", Granularity.MONTHLY)
    contract = _contract(datetime(2023, 1, 1), datetime(2024, 2, 1))
    assert find_contract_for_period(start, end, EnergyType.POWER, [contract]) is contract


def test_greatest_overlap_wins_regardless_of_order() -> None:
    start, end = period_range_of("2024-01", Granularity.MONTHLY)
    old = _contract(datetime(2023, 1, 1), datetime(2024, 1, 10), base=1.0)
    new = _contract(datetime(2024, 1, 10), base=2.0)
    assert find_contract_for_period(start, end, EnergyType.POWER, [old, new]) is new
    assert find_contract_for_period(start, end, EnergyType.POWER, [new, old]) is new


def test_ties_keep_first_contract() -> None:
    start, end = period_range_of("2024-05", Granularity.MONTHLY)
    first = _contract(datetime(2024, 1, 1), base=1.0)
    second = _contract(datetime(2023, 1, 1), base=2.0)
    assert find_contract_for_period(start, end, EnergyType.POWER, [first, second]) is first


def test_contract_cost() -> None:
    contract = _contract(datetime(2024, 1, 1), base=10.0, working=0.25)
    assert contract_cost(100.0, contract) == 35.0
    assert contract_cost(0.0, contract) == 10.0
