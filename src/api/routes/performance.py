"""Performance routes: record summaries, return metrics, full property analysis."""

import logging
from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_today
from src.api.schemas import (
    MonthlyRecordRequest,
    RecordsSummaryRequest,
    ReturnsRequest,
    PropertyPerformanceRequest,
    RecordSummaryResponse,
    PerformanceMetricsResponse,
    PropertyPerformanceResponse,
    BenchmarkResponse,
)
from src.engine.benchmark import build_benchmark
from src.engine.errors import InvalidLoanTermsError
from src.engine.performance import calculate_performance
from src.engine.returns import compute_return_metrics, summarize_monthly_records
from src.models.loan import LoanTerms
from src.models.portfolio import (
    MonthlyFinancialRecord,
    OccupancyStatus,
    PortfolioEntry,
    PortfolioMortgage,
    Valuation,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/performance", tags=["performance"])


def _to_records(rows: list[MonthlyRecordRequest]) -> list[MonthlyFinancialRecord]:
    try:
        return [
            MonthlyFinancialRecord(
                month=r.month,
                rent_collected=r.rent_collected,
                expense_total=r.expense_total,
                occupancy_status=OccupancyStatus(r.occupancy_status),
            )
            for r in rows
        ]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/records-summary", response_model=RecordSummaryResponse)
async def records_summary(req: RecordsSummaryRequest):
    """Totals, averages and occupancy across monthly records."""
    summary = summarize_monthly_records(_to_records(req.records))
    return RecordSummaryResponse(**asdict(summary))


@router.post("/returns", response_model=PerformanceMetricsResponse)
async def returns(req: ReturnsRequest, today: date = Depends(get_today)):
    """Return metrics and projections from already-aggregated figures."""
    loans = [
        LoanTerms(
            principal=loan.current_balance,
            annual_interest_rate_percent=loan.annual_interest_rate_percent,
            monthly_payment=loan.monthly_payment,
            start_date=today,
        )
        for loan in req.loans
    ]
    try:
        metrics = compute_return_metrics(
            acquisition_price=req.acquisition_price,
            cash_invested=req.cash_invested,
            current_value=req.current_value,
            current_equity=req.current_equity,
            annual_noi=req.annual_noi,
            monthly_cash_flow_history=req.monthly_cash_flow_history,
            months_owned=req.months_owned,
            principal_paydown=req.principal_paydown,
            loans=loans,
            appreciation_rate=req.appreciation_rate,
        )
    except InvalidLoanTermsError as e:
        logger.warning("Rejected loan terms: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return PerformanceMetricsResponse(**asdict(metrics))


@router.post("/property", response_model=PropertyPerformanceResponse)
async def property_performance(req: PropertyPerformanceRequest, today: date = Depends(get_today)):
    """Primary endpoint: portfolio entry + history → full performance report.

    Orchestrates: records summary → current snapshot → metrics → benchmark.
    """
    entry = PortfolioEntry(
        property_id=req.property_id,
        acquisition_date=req.acquisition_date,
        acquisition_price=req.acquisition_price,
        closing_costs=req.closing_costs,
        rehab_costs=req.rehab_costs,
        monthly_rent=req.monthly_rent,
        monthly_expenses=req.monthly_expenses,
    )
    mortgages = [PortfolioMortgage(**m.model_dump()) for m in req.mortgages]
    valuations = [Valuation(**v.model_dump()) for v in req.valuations]

    try:
        performance = calculate_performance(
            entry, _to_records(req.records), mortgages, valuations, req.as_of or today
        )
    except InvalidLoanTermsError as e:
        logger.warning("Rejected mortgage terms for %s: %s", req.property_id, e)
        raise HTTPException(status_code=400, detail=str(e))

    benchmark = build_benchmark(performance)
    return PropertyPerformanceResponse(
        **asdict(performance),
        benchmark=BenchmarkResponse(**asdict(benchmark)),
    )
