"""Amortization schedule computation.

Pure functions: Decimal in, dataclass out. No I/O.

Rates are annual percentages (Decimal("6.875") for 6.875%). Money is
quantized to cents on entry and stays in cents, so the principal portions
of a schedule always sum exactly to the starting balance.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from dateutil.relativedelta import relativedelta

from src.config import settings
from src.engine.errors import InvalidLoanTermsError
from src.models.loan import (
    AmortizationEntry,
    AmortizationSchedule,
    LoanTerms,
    PaymentBreakdown,
    ScheduleSummary,
)

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def _cents(amount: Decimal) -> Decimal:
    return amount.quantize(TWO_PLACES, ROUND_HALF_UP)


def _monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return annual_rate_percent / 100 / 12


def _validate(balance: Decimal, annual_rate_percent: Decimal, payment: Decimal) -> None:
    if balance <= 0:
        raise InvalidLoanTermsError(f"Loan balance must be positive, got {balance}")
    if annual_rate_percent < 0:
        raise InvalidLoanTermsError(
            f"Interest rate cannot be negative, got {annual_rate_percent}%"
        )
    if payment <= 0:
        raise InvalidLoanTermsError(f"Monthly payment must be positive, got {payment}")


def monthly_payment(principal: Decimal, annual_rate_percent: Decimal, term_months: int) -> Decimal:
    """Fixed monthly P&I payment that retires `principal` in `term_months`."""
    if principal <= 0 or term_months <= 0:
        return Decimal("0")
    if annual_rate_percent <= 0:
        return _cents(principal / term_months)

    r = _monthly_rate(annual_rate_percent)
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** term_months
    return _cents(principal * (r * factor) / (factor - 1))


def payment_breakdown(
    balance: Decimal, annual_rate_percent: Decimal, monthly_payment: Decimal
) -> PaymentBreakdown:
    """Split one period's payment into principal and interest.

    Principal is floored at 0 when the payment does not cover the interest.
    """
    balance, payment = _cents(balance), _cents(monthly_payment)
    _validate(balance, annual_rate_percent, payment)
    interest = _cents(balance * _monthly_rate(annual_rate_percent))
    principal = max(ZERO, payment - interest)
    return PaymentBreakdown(principal=principal, interest=interest)


def generate_schedule(terms: LoanTerms, max_periods: int | None = None) -> AmortizationSchedule:
    """Amortize `terms.principal` one month at a time until the balance is 0.

    Entry n is dated `start_date + n months`. The final payment is reduced
    to remaining balance plus interest so the balance never goes negative.

    Raises:
        InvalidLoanTermsError: non-positive balance or payment, negative
            rate, a payment that does not exceed first-period interest, or
            a payoff longer than `max_periods` (default
            `settings.max_schedule_periods`).
    """
    balance = _cents(terms.principal)
    payment = _cents(terms.monthly_payment)
    # Amounts under half a cent round to zero and are rejected with the rest
    _validate(balance, terms.annual_interest_rate_percent, payment)
    limit = max_periods if max_periods is not None else settings.max_schedule_periods

    rate = terms.monthly_rate

    first_interest = _cents(balance * rate)
    if payment <= first_interest:
        logger.debug(
            "Rejecting non-amortizing loan: payment %s <= first interest %s",
            payment, first_interest,
        )
        raise InvalidLoanTermsError(
            f"Monthly payment {payment} does not exceed first-period interest "
            f"{first_interest}; the loan would never amortize"
        )

    entries: list[AmortizationEntry] = []
    cumulative_principal = ZERO
    cumulative_interest = ZERO
    period = 0

    while balance > 0:
        if period >= limit:
            raise InvalidLoanTermsError(
                f"Loan does not pay off within {limit} periods "
                f"(balance {balance} remaining at payment {payment})"
            )
        period += 1

        interest = _cents(balance * rate)
        principal_paid = payment - interest

        # Final payment adjustment
        if principal_paid > balance:
            principal_paid = balance

        balance -= principal_paid
        cumulative_principal += principal_paid
        cumulative_interest += interest

        entries.append(AmortizationEntry(
            period=period,
            date=terms.start_date + relativedelta(months=period),
            payment=principal_paid + interest,
            principal=principal_paid,
            interest=interest,
            remaining_balance=balance,
            cumulative_principal=cumulative_principal,
            cumulative_interest=cumulative_interest,
        ))

    summary = ScheduleSummary(
        total_payments=len(entries),
        total_principal=cumulative_principal,
        total_interest=cumulative_interest,
        total_paid=cumulative_principal + cumulative_interest,
        payoff_date=entries[-1].date,
        terms=terms,
    )
    return AmortizationSchedule(entries=tuple(entries), summary=summary)


def generate_remaining_schedule(
    current_balance: Decimal,
    annual_rate_percent: Decimal,
    monthly_payment: Decimal,
    as_of: date,
    max_periods: int | None = None,
) -> AmortizationSchedule:
    """Schedule for an existing loan from its current balance, dated from `as_of`."""
    terms = LoanTerms(
        principal=current_balance,
        annual_interest_rate_percent=annual_rate_percent,
        monthly_payment=monthly_payment,
        start_date=as_of,
    )
    return generate_schedule(terms, max_periods=max_periods)


def balance_at(schedule: AmortizationSchedule, months: int) -> Decimal:
    """Remaining balance after `months` payments of an existing schedule."""
    if months <= 0:
        return _cents(schedule.summary.terms.principal)
    if months >= len(schedule.entries):
        return ZERO
    return schedule.entries[months - 1].remaining_balance


def balance_after(terms: LoanTerms, months: int) -> Decimal:
    """Projected remaining balance `months` payments after `terms.start_date`."""
    if months <= 0:
        return _cents(terms.principal)
    return balance_at(generate_schedule(terms), months)


def estimate_current_balance(
    original_balance: Decimal,
    annual_rate_percent: Decimal,
    term_months: int,
    months_elapsed: int,
    start_date: date,
) -> Decimal:
    """Balance of a loan paid as scheduled since origination."""
    pmt = monthly_payment(original_balance, annual_rate_percent, term_months)
    if pmt <= 0:
        return ZERO
    terms = LoanTerms(
        principal=original_balance,
        annual_interest_rate_percent=annual_rate_percent,
        monthly_payment=pmt,
        start_date=start_date,
    )
    return balance_after(terms, months_elapsed)


def payoff_date(
    current_balance: Decimal,
    annual_rate_percent: Decimal,
    monthly_payment: Decimal,
    as_of: date,
) -> date:
    schedule = generate_remaining_schedule(
        current_balance, annual_rate_percent, monthly_payment, as_of
    )
    return schedule.summary.payoff_date


def yearly_debt_summary(schedule: AmortizationSchedule) -> list[dict]:
    """Aggregate amortization schedule by loan year.

    Returns list of dicts with keys: year, principal, interest, debt_service, ending_balance
    """
    yearly: list[dict] = []
    year_principal = ZERO
    year_interest = ZERO
    year_debt_service = ZERO

    for entry in schedule.entries:
        year_principal += entry.principal
        year_interest += entry.interest
        year_debt_service += entry.payment

        if entry.period % 12 == 0 or entry.period == len(schedule.entries):
            yearly.append({
                "year": (entry.period - 1) // 12 + 1,
                "principal": year_principal,
                "interest": year_interest,
                "debt_service": year_debt_service,
                "ending_balance": entry.remaining_balance,
            })
            year_principal = ZERO
            year_interest = ZERO
            year_debt_service = ZERO

    return yearly
