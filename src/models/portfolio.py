"""Portfolio records supplied by the record stores. Read-only inputs to the engine."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from src.models.loan import LoanTerms


class OccupancyStatus(Enum):
    OCCUPIED = "occupied"
    VACANT = "vacant"
    TURNOVER = "turnover"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class MonthlyFinancialRecord:
    month: date  # First of month
    rent_collected: Decimal = Decimal("0")
    expense_total: Decimal = Decimal("0")
    occupancy_status: OccupancyStatus = OccupancyStatus.UNKNOWN

    @property
    def cash_flow(self) -> Decimal:
        return self.rent_collected - self.expense_total


@dataclass(frozen=True)
class Valuation:
    valuation_date: date
    estimated_value: Decimal


@dataclass(frozen=True)
class PortfolioMortgage:
    original_balance: Decimal
    current_balance: Decimal
    annual_interest_rate_percent: Decimal
    monthly_payment: Decimal  # P&I only, escrow excluded
    start_date: date
    is_primary: bool = False

    def remaining_terms(self, as_of: date) -> LoanTerms:
        """Terms for the outstanding balance, scheduled from `as_of`."""
        return LoanTerms(
            principal=self.current_balance,
            annual_interest_rate_percent=self.annual_interest_rate_percent,
            monthly_payment=self.monthly_payment,
            start_date=as_of,
        )

    def original_terms(self) -> LoanTerms:
        return LoanTerms(
            principal=self.original_balance,
            annual_interest_rate_percent=self.annual_interest_rate_percent,
            monthly_payment=self.monthly_payment,
            start_date=self.start_date,
        )

    @property
    def principal_paid(self) -> Decimal:
        return self.original_balance - self.current_balance


@dataclass(frozen=True)
class PortfolioEntry:
    property_id: str
    acquisition_date: date
    acquisition_price: Decimal
    closing_costs: Decimal = Decimal("0")  # Buyer closing costs paid in cash
    rehab_costs: Decimal = Decimal("0")
    # Fallback when there are no monthly records yet
    monthly_rent: Decimal = Decimal("0")
    monthly_expenses: Decimal = Decimal("0")
