"""Extra-payment payoff scenarios.

Pure functions. No I/O. Every scenario is diffed against one zero-extra
baseline, so scenarios never interact with each other.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from src.engine.debt import generate_remaining_schedule
from src.engine.errors import InvalidLoanTermsError
from src.models.loan import AmortizationSchedule, LoanTerms, PayoffScenario


def _scenario(
    extra: Decimal, baseline: AmortizationSchedule, with_extra: AmortizationSchedule
) -> PayoffScenario:
    base, scen = baseline.summary, with_extra.summary
    return PayoffScenario(
        extra_monthly_amount=extra,
        new_payoff_date=scen.payoff_date,
        months_saved=base.total_payments - scen.total_payments,
        interest_saved=base.total_interest - scen.total_interest,
        total_interest_with_extra=scen.total_interest,
    )


def simulate_extra_payments(
    terms: LoanTerms,
    extra_amounts: Iterable[Decimal],
    as_of: date,
) -> list[PayoffScenario]:
    """Payoff impact of adding each extra amount to every monthly payment.

    `terms.principal` is the current balance; schedules are dated from
    `as_of`. Output order follows `extra_amounts`.
    """
    extras = list(extra_amounts)
    for extra in extras:
        if extra < 0:
            raise InvalidLoanTermsError(f"Extra payment cannot be negative, got {extra}")

    baseline = generate_remaining_schedule(
        terms.principal, terms.annual_interest_rate_percent, terms.monthly_payment, as_of
    )

    scenarios: list[PayoffScenario] = []
    for extra in extras:
        if extra == 0:
            scenarios.append(_scenario(extra, baseline, baseline))
            continue
        with_extra = generate_remaining_schedule(
            terms.principal,
            terms.annual_interest_rate_percent,
            terms.monthly_payment + extra,
            as_of,
        )
        scenarios.append(_scenario(extra, baseline, with_extra))
    return scenarios
