"""Quick start: monthly and yearly cost reports from meter readings."""

from __future__ import annotations

from datetime import date

import meter_costs as mc


def main() -> None:
    readings = [
        {"date": "2023-12-31", "type": "power", "amount": 1000},
        {"date": "2024-01-31", "type": "power", "amount": 1100},
        {"date": "2024-02-29", "type": "power", "amount": 1200},
        {"date": "2024-04-30", "type": "power", "amount": 1400},
        {"date": "2024-01-31", "type": "gas", "amount": 400},
        {"date": "2024-04-30", "type": "gas", "amount": 520},
    ]
    contracts = [
        {"type": "power", "startDate": "2023-01-01", "basePrice": 10, "workingPrice": 0.25},
        {"type": "gas", "startDate": "2023-01-01", "basePrice": 8, "workingPrice": 0.1},
    ]

    # Monthly view of one year, missing months interpolated, future extrapolated
    monthly = mc.calculate_costs(
        readings, contracts, "monthly", mc.CostOptions(year=2024)
    )
    print("monthly:")
    print(mc.cost_frame(monthly))

    # Yearly view with a trend over the following years
    yearly = mc.calculate_costs(
        readings,
        contracts,
        "yearly",
        mc.CostOptions(year_range=mc.YearRange(past=1, future=2)),
        as_of=date(2024, 6, 1),
    )
    print("yearly:")
    print(mc.cost_frame(yearly))

    print("available years:", mc.get_available_years(readings))


if __name__ == "__main__":
    main()
