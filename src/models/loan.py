from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class LoanTerms:
    principal: Decimal  # Current outstanding balance
    annual_interest_rate_percent: Decimal  # e.g. Decimal("6.875")
    monthly_payment: Decimal  # Fixed P&I payment
    start_date: date

    @property
    def monthly_rate(self) -> Decimal:
        return self.annual_interest_rate_percent / 100 / 12


@dataclass(frozen=True)
class PaymentBreakdown:
    principal: Decimal
    interest: Decimal


@dataclass(frozen=True)
class AmortizationEntry:
    period: int  # 1-based
    date: date
    payment: Decimal
    principal: Decimal
    interest: Decimal
    remaining_balance: Decimal
    cumulative_principal: Decimal
    cumulative_interest: Decimal


@dataclass(frozen=True)
class ScheduleSummary:
    total_payments: int
    total_principal: Decimal
    total_interest: Decimal
    total_paid: Decimal
    payoff_date: date
    terms: LoanTerms


@dataclass(frozen=True)
class AmortizationSchedule:
    entries: tuple[AmortizationEntry, ...]
    summary: ScheduleSummary


@dataclass(frozen=True)
class PayoffScenario:
    extra_monthly_amount: Decimal
    new_payoff_date: date
    months_saved: int
    interest_saved: Decimal
    total_interest_with_extra: Decimal
