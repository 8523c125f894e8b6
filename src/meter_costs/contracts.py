"""Contract selection for a billing period."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from meter_costs.models import Contract, EnergyType

logger = logging.getLogger(__name__)


def find_contract_for_period(
    period_start: pd.Timestamp,
    period_end: pd.Timestamp,
    energy_type: EnergyType,
    contracts: Sequence[Contract],
) -> Contract | None:
    """Pick the contract of ``energy_type`` that covers most of the period.

    A contract is a candidate when its closed interval overlaps the period.
    Among several candidates the one with the strictly greatest overlap wins;
    ties keep the candidate listed first.
    """
    candidates = [
        contract
        for contract in contracts
        if contract.energy_type is energy_type
        and contract.start_date <= period_end
        and contract.effective_end >= period_start
    ]
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0]

    best = candidates[0]
    best_overlap = _overlap(best, period_start, period_end)
    for contract in candidates[1:]:
        overlap = _overlap(contract, period_start, period_end)
        if overlap > best_overlap:
            best, best_overlap = contract, overlap
    logger.debug(
        "Resolved %d overlapping %s contracts for %s..%s",
        len(candidates),
        energy_type.value,
        period_start,
        period_end,
    )
    return best


def contract_cost(consumption: float, contract: Contract) -> float:
    return contract.base_price + consumption * contract.working_price


def _overlap(
    contract: Contract, period_start: pd.Timestamp, period_end: pd.Timestamp
) -> pd.Timedelta:
    overlap_start = max(contract.start_date, period_start)
    overlap_end = min(contract.effective_end, period_end)
    return overlap_end - overlap_start
