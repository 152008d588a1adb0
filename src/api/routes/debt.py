"""Debt routes: amortization schedules and extra-payment scenarios."""

import logging
from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_today
from src.api.schemas import (
    BreakdownRequest,
    BreakdownResponse,
    ScheduleRequest,
    RemainingScheduleRequest,
    PayoffScenariosRequest,
    ScheduleResponse,
    ScheduleSummaryResponse,
    AmortizationEntryResponse,
    YearlyDebtResponse,
    PayoffScenarioResponse,
)
from src.engine.debt import (
    payment_breakdown,
    generate_schedule,
    generate_remaining_schedule,
    yearly_debt_summary,
)
from src.engine.errors import InvalidLoanTermsError
from src.engine.payoff import simulate_extra_payments
from src.models.loan import AmortizationSchedule, LoanTerms

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/debt", tags=["debt"])


def _invalid_terms(e: InvalidLoanTermsError) -> HTTPException:
    logger.warning("Rejected loan terms: %s", e)
    return HTTPException(status_code=400, detail=str(e))


def _schedule_to_response(schedule: AmortizationSchedule) -> ScheduleResponse:
    s = schedule.summary
    return ScheduleResponse(
        entries=[AmortizationEntryResponse(**asdict(e)) for e in schedule.entries],
        summary=ScheduleSummaryResponse(
            total_payments=s.total_payments,
            total_principal=s.total_principal,
            total_interest=s.total_interest,
            total_paid=s.total_paid,
            payoff_date=s.payoff_date,
            principal=s.terms.principal,
            annual_interest_rate_percent=s.terms.annual_interest_rate_percent,
            monthly_payment=s.terms.monthly_payment,
            start_date=s.terms.start_date,
        ),
    )


def _remaining(req: RemainingScheduleRequest, today: date) -> AmortizationSchedule:
    return generate_remaining_schedule(
        req.current_balance,
        req.annual_interest_rate_percent,
        req.monthly_payment,
        req.as_of or today,
    )


@router.post("/breakdown", response_model=BreakdownResponse)
async def breakdown(req: BreakdownRequest):
    """Principal/interest split of the next payment."""
    try:
        result = payment_breakdown(req.balance, req.annual_interest_rate_percent, req.monthly_payment)
    except InvalidLoanTermsError as e:
        raise _invalid_terms(e)
    return BreakdownResponse(principal=result.principal, interest=result.interest)


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule(req: ScheduleRequest):
    """Full amortization schedule from the given principal."""
    terms = LoanTerms(
        principal=req.principal,
        annual_interest_rate_percent=req.annual_interest_rate_percent,
        monthly_payment=req.monthly_payment,
        start_date=req.start_date,
    )
    try:
        result = generate_schedule(terms, max_periods=req.max_periods)
    except InvalidLoanTermsError as e:
        raise _invalid_terms(e)
    return _schedule_to_response(result)


@router.post("/remaining-schedule", response_model=ScheduleResponse)
async def remaining_schedule(req: RemainingScheduleRequest, today: date = Depends(get_today)):
    """Schedule for an existing loan from its current balance."""
    try:
        result = _remaining(req, today)
    except InvalidLoanTermsError as e:
        raise _invalid_terms(e)
    return _schedule_to_response(result)


@router.post("/yearly-summary", response_model=list[YearlyDebtResponse])
async def yearly_summary(req: RemainingScheduleRequest, today: date = Depends(get_today)):
    """Remaining schedule rolled up by loan year."""
    try:
        result = _remaining(req, today)
    except InvalidLoanTermsError as e:
        raise _invalid_terms(e)
    return [YearlyDebtResponse(**row) for row in yearly_debt_summary(result)]


@router.post("/payoff-scenarios", response_model=list[PayoffScenarioResponse])
async def payoff_scenarios(req: PayoffScenariosRequest, today: date = Depends(get_today)):
    """Months and interest saved by each extra monthly payment."""
    terms = LoanTerms(
        principal=req.current_balance,
        annual_interest_rate_percent=req.annual_interest_rate_percent,
        monthly_payment=req.monthly_payment,
        start_date=req.as_of or today,
    )
    try:
        scenarios = simulate_extra_payments(terms, req.extra_amounts, terms.start_date)
    except InvalidLoanTermsError as e:
        raise _invalid_terms(e)
    return [PayoffScenarioResponse(**asdict(s)) for s in scenarios]
