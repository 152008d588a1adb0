"""Portfolio performance orchestrator: composes the engine sub-modules for one property.

Pure computation. No I/O. Records in, PortfolioPerformance out.
"""

import logging
import math
from collections.abc import Sequence
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from dateutil.relativedelta import relativedelta

from src.config import settings
from src.engine.appreciation import estimate_current_value, value_as_of
from src.engine.debt import balance_at, generate_schedule
from src.engine.returns import compute_return_metrics, summarize_monthly_records
from src.models.loan import AmortizationSchedule
from src.models.portfolio import (
    MonthlyFinancialRecord,
    PortfolioEntry,
    PortfolioMortgage,
    Valuation,
)
from src.models.results import CashFlowPoint, EquityPoint, PortfolioPerformance

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def months_between(start: date, end: date) -> int:
    """Whole calendar months from `start` to `end` (day of month ignored)."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def _current_value(entry: PortfolioEntry, valuations: Sequence[Valuation], as_of: date, months_owned: int) -> Decimal:
    latest = value_as_of(valuations, as_of)
    if latest is not None:
        return latest.estimated_value
    logger.debug("No valuation for %s, estimating from acquisition price", entry.property_id)
    return estimate_current_value(entry.acquisition_price, months_owned)


def build_equity_history(
    entry: PortfolioEntry,
    mortgages: Sequence[PortfolioMortgage],
    valuations: Sequence[Valuation],
    months_owned: int,
    max_points: int | None = None,
    as_of: date | None = None,
) -> list[EquityPoint]:
    """Value, debt and equity from acquisition to today.

    One point every `step` months, where step keeps the history within
    `max_points` (default `settings.equity_history_max_points`) plus the
    acquisition point. Debt is each mortgage's scheduled balance; a
    mortgage contributes nothing before its start date. Points are never
    dated after `as_of`.
    """
    max_points = max_points or settings.equity_history_max_points
    step = max(1, math.ceil(months_owned / max_points))

    schedules: list[tuple[PortfolioMortgage, AmortizationSchedule]] = [
        (m, generate_schedule(m.original_terms())) for m in mortgages if m.original_balance > 0
    ]

    history: list[EquityPoint] = []
    for offset in range(0, months_owned + 1, step):
        point_date = entry.acquisition_date + relativedelta(months=offset)
        if as_of is not None and point_date > as_of:
            point_date = as_of

        valuation = value_as_of(valuations, point_date)
        value = (
            valuation.estimated_value
            if valuation is not None
            else estimate_current_value(entry.acquisition_price, offset)
        )

        debt = ZERO
        for mortgage, schedule in schedules:
            elapsed = months_between(mortgage.start_date, point_date)
            if elapsed >= 0:
                debt += balance_at(schedule, elapsed)

        history.append(EquityPoint(date=point_date, value=value, mortgage=debt, equity=value - debt))

    return history


def calculate_performance(
    entry: PortfolioEntry,
    records: Sequence[MonthlyFinancialRecord],
    mortgages: Sequence[PortfolioMortgage],
    valuations: Sequence[Valuation],
    as_of: date,
) -> PortfolioPerformance:
    """Run the full performance analysis for one portfolio property."""
    months_owned = max(1, months_between(entry.acquisition_date, as_of))

    # Cash flow
    ordered = sorted(records, key=lambda r: r.month)
    summary = summarize_monthly_records(ordered)
    if ordered:
        average_cash_flow = summary.average_monthly_cash_flow
    else:
        logger.debug("No monthly records for %s, using entry rent/expenses", entry.property_id)
        average_cash_flow = entry.monthly_rent - entry.monthly_expenses

    cash_flow_history = [
        CashFlowPoint(
            month=r.month,
            rent=r.rent_collected,
            expenses=r.expense_total,
            amount=r.cash_flow,
        )
        for r in ordered
    ]

    # Current snapshot
    current_value = _current_value(entry, valuations, as_of, months_owned)
    current_balance = sum((m.current_balance for m in mortgages), ZERO)
    current_equity = current_value - current_balance

    financed = sum((m.original_balance for m in mortgages), ZERO)
    down_payment = max(ZERO, entry.acquisition_price - financed)
    cash_invested = down_payment + entry.closing_costs + entry.rehab_costs

    # NOI excludes debt service, so add it back to cash flow
    annual_debt_service = sum((m.monthly_payment for m in mortgages), ZERO) * 12
    annual_noi = (average_cash_flow * 12 + annual_debt_service).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )

    metrics = compute_return_metrics(
        acquisition_price=entry.acquisition_price,
        cash_invested=cash_invested,
        current_value=current_value,
        current_equity=current_equity,
        annual_noi=annual_noi,
        monthly_cash_flow_history=[p.amount for p in cash_flow_history],
        months_owned=months_owned,
        principal_paydown=sum((m.principal_paid for m in mortgages), ZERO),
        loans=[m.remaining_terms(as_of) for m in mortgages if m.current_balance > 0],
    )

    return PortfolioPerformance(
        property_id=entry.property_id,
        acquisition_date=entry.acquisition_date,
        months_owned=months_owned,
        records=summary,
        average_monthly_cash_flow=average_cash_flow,
        cash_flow_history=cash_flow_history,
        current_value=current_value,
        current_mortgage_balance=current_balance,
        current_equity=current_equity,
        cash_invested=cash_invested,
        annual_noi=annual_noi,
        equity_history=build_equity_history(
            entry, mortgages, valuations, months_owned, as_of=as_of
        ),
        metrics=metrics,
    )
