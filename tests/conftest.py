"""Canonical test fixtures used across all engine tests.

Fixture loan: $200K, 6%, $1,199.10/mo (30yr fixed), first scheduled from Jan 2024.
Fixture property: $300K rental bought Jun 2022 with a $240K 6.5% mortgage.
"""

import pytest
from datetime import date
from decimal import Decimal

from src.models.loan import LoanTerms
from src.models.portfolio import (
    MonthlyFinancialRecord,
    OccupancyStatus,
    PortfolioEntry,
    PortfolioMortgage,
    Valuation,
)


@pytest.fixture
def canonical_terms() -> LoanTerms:
    """$200K at 6% with the 30-year payment."""
    return LoanTerms(
        principal=Decimal("200000"),
        annual_interest_rate_percent=Decimal("6"),
        monthly_payment=Decimal("1199.10"),
        start_date=date(2024, 1, 1),
    )


@pytest.fixture
def canonical_entry() -> PortfolioEntry:
    return PortfolioEntry(
        property_id="prop-123",
        acquisition_date=date(2022, 6, 1),
        acquisition_price=Decimal("300000"),
        closing_costs=Decimal("6000"),
        monthly_rent=Decimal("2400"),
        monthly_expenses=Decimal("600"),
    )


@pytest.fixture
def canonical_mortgage() -> PortfolioMortgage:
    """$240K at 6.5%, 30yr payment $1,516.96."""
    return PortfolioMortgage(
        original_balance=Decimal("240000"),
        current_balance=Decimal("231000"),
        annual_interest_rate_percent=Decimal("6.5"),
        monthly_payment=Decimal("1516.96"),
        start_date=date(2022, 6, 1),
        is_primary=True,
    )


@pytest.fixture
def canonical_records() -> list[MonthlyFinancialRecord]:
    """2025: $2,400 rent and $600 expenses monthly, vacant in March."""
    records = []
    for month in range(1, 13):
        vacant = month == 3
        records.append(MonthlyFinancialRecord(
            month=date(2025, month, 1),
            rent_collected=Decimal("0") if vacant else Decimal("2400"),
            expense_total=Decimal("600"),
            occupancy_status=OccupancyStatus.VACANT if vacant else OccupancyStatus.OCCUPIED,
        ))
    return records


@pytest.fixture
def canonical_valuations() -> list[Valuation]:
    return [
        Valuation(valuation_date=date(2023, 6, 1), estimated_value=Decimal("315000")),
        Valuation(valuation_date=date(2025, 6, 1), estimated_value=Decimal("330000")),
    ]
