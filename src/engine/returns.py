"""Investor return metrics: cash-on-cash, cap rate, ROI, annualized return, projections.

Pure functions: Decimal in, Decimal out. No I/O.

Ratio metrics are percentages (Decimal("8.25") for 8.25%) and are None when
their denominator is not positive, so nothing downstream sees Infinity.
"""

from collections.abc import Sequence
from decimal import Decimal, ROUND_HALF_UP

from src.engine.appreciation import project_value
from src.engine.debt import balance_after
from src.models.loan import LoanTerms
from src.models.portfolio import MonthlyFinancialRecord, OccupancyStatus
from src.models.results import PerformanceMetrics, RecordSummary

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
ZERO = Decimal("0")


def _cents(amount: Decimal) -> Decimal:
    return amount.quantize(TWO_PLACES, ROUND_HALF_UP)


def _pct(numerator: Decimal, denominator: Decimal) -> Decimal | None:
    if denominator <= 0:
        return None
    return (numerator / denominator * 100).quantize(TWO_PLACES, ROUND_HALF_UP)


def summarize_monthly_records(records: Sequence[MonthlyFinancialRecord]) -> RecordSummary:
    """Totals, per-month averages and occupancy rate.

    No records is a normal state for a newly added property: all zeros.
    """
    if not records:
        return RecordSummary()

    count = len(records)
    total_rent = sum((r.rent_collected for r in records), ZERO)
    total_expenses = sum((r.expense_total for r in records), ZERO)
    total_cash_flow = total_rent - total_expenses
    occupied = sum(1 for r in records if r.occupancy_status is OccupancyStatus.OCCUPIED)

    return RecordSummary(
        month_count=count,
        total_rent=total_rent,
        total_expenses=total_expenses,
        total_cash_flow=total_cash_flow,
        average_monthly_rent=_cents(total_rent / count),
        average_monthly_expenses=_cents(total_expenses / count),
        average_monthly_cash_flow=_cents(total_cash_flow / count),
        occupancy_rate=(Decimal(occupied) / count).quantize(FOUR_PLACES, ROUND_HALF_UP),
    )


def cash_on_cash(annual_cash_flow: Decimal, cash_invested: Decimal) -> Decimal | None:
    """Cash-on-cash return = annual cash flow / total cash invested."""
    return _pct(annual_cash_flow, cash_invested)


def cap_rate(annual_noi: Decimal, value: Decimal) -> Decimal | None:
    """Cap rate = annual NOI / current value."""
    return _pct(annual_noi, value)


def total_roi(total_returns: Decimal, cash_invested: Decimal) -> Decimal | None:
    return _pct(total_returns, cash_invested)


def annualized_return(total_roi_percent: Decimal | None, months_owned: int) -> Decimal | None:
    """Compound annual return equivalent to `total_roi_percent` over `months_owned`.

    Holdings under a year report the simple ROI instead of extrapolating it.
    """
    if total_roi_percent is None:
        return None
    if months_owned < 12:
        return total_roi_percent

    growth = 1 + total_roi_percent / 100
    if growth <= 0:
        return Decimal("-100.00")
    years = Decimal(months_owned) / 12
    annual = growth ** (1 / years) - 1
    return (annual * 100).quantize(TWO_PLACES, ROUND_HALF_UP)


def project_equity(
    current_value: Decimal,
    current_equity: Decimal,
    years: int,
    loans: Sequence[LoanTerms] = (),
    appreciation_rate: Decimal | None = None,
) -> tuple[Decimal, Decimal]:
    """Projected (value, equity) `years` from now.

    Debt follows each loan's amortization schedule. Without loan terms the
    current debt (value - equity) is held flat.
    """
    future_value = project_value(current_value, years, appreciation_rate)
    if loans:
        future_debt = sum((balance_after(loan, years * 12) for loan in loans), ZERO)
    else:
        future_debt = max(ZERO, current_value - current_equity)
    return future_value, future_value - future_debt


def compute_return_metrics(
    acquisition_price: Decimal,
    cash_invested: Decimal,
    current_value: Decimal,
    current_equity: Decimal,
    annual_noi: Decimal,
    monthly_cash_flow_history: Sequence[Decimal],
    months_owned: int,
    *,
    principal_paydown: Decimal = ZERO,
    loans: Sequence[LoanTerms] = (),
    appreciation_rate: Decimal | None = None,
) -> PerformanceMetrics:
    """Investor-facing yield metrics and 5/10-year projections.

    Total returns = cash flow to date + appreciation + principal paydown.
    `loans` are the outstanding mortgages as of today; a non-amortizing
    loan raises InvalidLoanTermsError.
    """
    history = list(monthly_cash_flow_history)
    total_cash_flow = sum(history, ZERO)
    average_monthly = total_cash_flow / len(history) if history else ZERO
    annual_cash_flow = _cents(average_monthly * 12)

    appreciation = current_value - acquisition_price
    total_returns = total_cash_flow + appreciation + principal_paydown
    roi = total_roi(total_returns, cash_invested)

    value_5yr, equity_5yr = project_equity(
        current_value, current_equity, 5, loans, appreciation_rate
    )
    value_10yr, equity_10yr = project_equity(
        current_value, current_equity, 10, loans, appreciation_rate
    )

    return PerformanceMetrics(
        cash_on_cash_return=cash_on_cash(annual_cash_flow, cash_invested),
        cap_rate=cap_rate(annual_noi, current_value),
        total_roi=roi,
        annualized_return=annualized_return(roi, months_owned),
        projected_equity_5yr=equity_5yr,
        projected_equity_10yr=equity_10yr,
        projected_value_5yr=value_5yr,
        projected_value_10yr=value_10yr,
    )
