"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


# ---- Request schemas ----

class BreakdownRequest(BaseModel):
    balance: Decimal
    annual_interest_rate_percent: Decimal = Field(..., description="e.g. 6.875 for 6.875%")
    monthly_payment: Decimal


class ScheduleRequest(BaseModel):
    principal: Decimal
    annual_interest_rate_percent: Decimal
    monthly_payment: Decimal
    start_date: date
    max_periods: int | None = Field(None, description="Defaults to the configured 600-month cap")


class RemainingScheduleRequest(BaseModel):
    """An existing loan, scheduled from its current balance."""
    current_balance: Decimal
    annual_interest_rate_percent: Decimal
    monthly_payment: Decimal
    as_of: date | None = Field(None, description="Defaults to today")


class PayoffScenariosRequest(RemainingScheduleRequest):
    extra_amounts: list[Decimal] = Field(default_factory=list)


class LoanBalanceRequest(BaseModel):
    current_balance: Decimal
    annual_interest_rate_percent: Decimal
    monthly_payment: Decimal


class MonthlyRecordRequest(BaseModel):
    month: date
    rent_collected: Decimal = Decimal("0")
    expense_total: Decimal = Decimal("0")
    occupancy_status: str = "unknown"


class RecordsSummaryRequest(BaseModel):
    records: list[MonthlyRecordRequest] = Field(default_factory=list)


class ReturnsRequest(BaseModel):
    acquisition_price: Decimal
    cash_invested: Decimal
    current_value: Decimal
    current_equity: Decimal
    annual_noi: Decimal
    monthly_cash_flow_history: list[Decimal] = Field(default_factory=list)
    months_owned: int
    principal_paydown: Decimal = Decimal("0")
    loans: list[LoanBalanceRequest] = Field(default_factory=list)
    appreciation_rate: Decimal | None = None


class MortgageRequest(BaseModel):
    original_balance: Decimal
    current_balance: Decimal
    annual_interest_rate_percent: Decimal
    monthly_payment: Decimal
    start_date: date
    is_primary: bool = False


class ValuationRequest(BaseModel):
    valuation_date: date
    estimated_value: Decimal


class PropertyPerformanceRequest(BaseModel):
    property_id: str
    acquisition_date: date
    acquisition_price: Decimal
    closing_costs: Decimal = Decimal("0")
    rehab_costs: Decimal = Decimal("0")
    monthly_rent: Decimal = Decimal("0")
    monthly_expenses: Decimal = Decimal("0")
    records: list[MonthlyRecordRequest] = Field(default_factory=list)
    mortgages: list[MortgageRequest] = Field(default_factory=list)
    valuations: list[ValuationRequest] = Field(default_factory=list)
    as_of: date | None = None


# ---- Response schemas ----

class BreakdownResponse(BaseModel):
    principal: Decimal
    interest: Decimal


class AmortizationEntryResponse(BaseModel):
    period: int
    date: date
    payment: Decimal
    principal: Decimal
    interest: Decimal
    remaining_balance: Decimal
    cumulative_principal: Decimal
    cumulative_interest: Decimal


class ScheduleSummaryResponse(BaseModel):
    total_payments: int
    total_principal: Decimal
    total_interest: Decimal
    total_paid: Decimal
    payoff_date: date

    # Echoed terms
    principal: Decimal
    annual_interest_rate_percent: Decimal
    monthly_payment: Decimal
    start_date: date


class ScheduleResponse(BaseModel):
    entries: list[AmortizationEntryResponse]
    summary: ScheduleSummaryResponse


class YearlyDebtResponse(BaseModel):
    year: int
    principal: Decimal
    interest: Decimal
    debt_service: Decimal
    ending_balance: Decimal


class PayoffScenarioResponse(BaseModel):
    extra_monthly_amount: Decimal
    new_payoff_date: date
    months_saved: int
    interest_saved: Decimal
    total_interest_with_extra: Decimal


class RecordSummaryResponse(BaseModel):
    month_count: int
    total_rent: Decimal
    total_expenses: Decimal
    total_cash_flow: Decimal
    average_monthly_rent: Decimal
    average_monthly_expenses: Decimal
    average_monthly_cash_flow: Decimal
    occupancy_rate: Decimal


class PerformanceMetricsResponse(BaseModel):
    # Percentages; null when not applicable (e.g. no cash invested)
    cash_on_cash_return: Decimal | None = None
    cap_rate: Decimal | None = None
    total_roi: Decimal | None = None
    annualized_return: Decimal | None = None
    projected_equity_5yr: Decimal
    projected_equity_10yr: Decimal
    projected_value_5yr: Decimal
    projected_value_10yr: Decimal


class CashFlowPointResponse(BaseModel):
    month: date
    rent: Decimal
    expenses: Decimal
    amount: Decimal


class EquityPointResponse(BaseModel):
    date: date
    value: Decimal
    mortgage: Decimal
    equity: Decimal


class BenchmarkResponse(BaseModel):
    sp500_annual_return: Decimal
    sp500_equivalent_value: Decimal
    portfolio_average_cash_flow: Decimal
    portfolio_cap_rate: Decimal | None = None
    comparison_period_months: int


class PropertyPerformanceResponse(BaseModel):
    property_id: str
    acquisition_date: date
    months_owned: int
    records: RecordSummaryResponse
    average_monthly_cash_flow: Decimal
    cash_flow_history: list[CashFlowPointResponse]
    current_value: Decimal
    current_mortgage_balance: Decimal
    current_equity: Decimal
    cash_invested: Decimal
    annual_noi: Decimal
    equity_history: list[EquityPointResponse]
    metrics: PerformanceMetricsResponse
    benchmark: BenchmarkResponse
