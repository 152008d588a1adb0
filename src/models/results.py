from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class RecordSummary:
    month_count: int = 0
    total_rent: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    total_cash_flow: Decimal = Decimal("0")
    average_monthly_rent: Decimal = Decimal("0")
    average_monthly_expenses: Decimal = Decimal("0")
    average_monthly_cash_flow: Decimal = Decimal("0")
    occupancy_rate: Decimal = Decimal("0")  # Fraction of occupied months


@dataclass(frozen=True)
class PerformanceMetrics:
    # Percentages. None = not applicable (zero denominator)
    cash_on_cash_return: Decimal | None = None
    cap_rate: Decimal | None = None
    total_roi: Decimal | None = None
    annualized_return: Decimal | None = None

    # Projections
    projected_equity_5yr: Decimal = Decimal("0")
    projected_equity_10yr: Decimal = Decimal("0")
    projected_value_5yr: Decimal = Decimal("0")
    projected_value_10yr: Decimal = Decimal("0")


@dataclass(frozen=True)
class CashFlowPoint:
    month: date
    rent: Decimal
    expenses: Decimal
    amount: Decimal


@dataclass(frozen=True)
class EquityPoint:
    date: date
    value: Decimal
    mortgage: Decimal
    equity: Decimal  # Value - mortgage balance


@dataclass(frozen=True)
class PortfolioPerformance:
    property_id: str
    acquisition_date: date
    months_owned: int

    # Cash flow
    records: RecordSummary = field(default_factory=RecordSummary)
    average_monthly_cash_flow: Decimal = Decimal("0")
    cash_flow_history: list[CashFlowPoint] = field(default_factory=list)

    # Current snapshot
    current_value: Decimal = Decimal("0")
    current_mortgage_balance: Decimal = Decimal("0")
    current_equity: Decimal = Decimal("0")
    cash_invested: Decimal = Decimal("0")
    annual_noi: Decimal = Decimal("0")
    equity_history: list[EquityPoint] = field(default_factory=list)

    metrics: PerformanceMetrics = field(default_factory=PerformanceMetrics)


@dataclass(frozen=True)
class Benchmark:
    """Portfolio property vs S&P 500 buy-and-hold of the same cash."""

    sp500_annual_return: Decimal = Decimal("0")  # Percent
    sp500_equivalent_value: Decimal = Decimal("0")
    portfolio_average_cash_flow: Decimal = Decimal("0")
    portfolio_cap_rate: Decimal | None = None
    comparison_period_months: int = 0
