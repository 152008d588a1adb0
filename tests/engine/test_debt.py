import math
from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from src.engine.debt import (
    monthly_payment,
    payment_breakdown,
    generate_schedule,
    generate_remaining_schedule,
    balance_after,
    estimate_current_balance,
    payoff_date,
    yearly_debt_summary,
)
from src.engine.errors import InvalidLoanTermsError
from src.models.loan import LoanTerms


class TestMonthlyPayment:
    def test_standard_mortgage(self):
        """$200K loan at 6% for 30 years."""
        pmt = monthly_payment(Decimal("200000"), Decimal("6"), 360)
        assert pmt == Decimal("1199.10")

    def test_seven_percent(self):
        pmt = monthly_payment(Decimal("400000"), Decimal("7"), 360)
        assert pmt == Decimal("2661.21")

    def test_zero_rate(self):
        pmt = monthly_payment(Decimal("360000"), Decimal("0"), 360)
        assert pmt == Decimal("1000.00")

    def test_zero_principal(self):
        assert monthly_payment(Decimal("0"), Decimal("6"), 360) == Decimal("0")


class TestPaymentBreakdown:
    def test_first_period(self):
        result = payment_breakdown(Decimal("200000"), Decimal("6"), Decimal("1199.10"))
        # 200000 * 0.06 / 12 = $1,000.00
        assert result.interest == Decimal("1000.00")
        assert result.principal == Decimal("199.10")

    def test_principal_floored_at_zero(self):
        """Payment below interest never produces negative principal."""
        result = payment_breakdown(Decimal("200000"), Decimal("6"), Decimal("900"))
        assert result.interest == Decimal("1000.00")
        assert result.principal == Decimal("0")

    def test_zero_rate_all_principal(self):
        result = payment_breakdown(Decimal("12000"), Decimal("0"), Decimal("1000"))
        assert result.interest == Decimal("0")
        assert result.principal == Decimal("1000")

    def test_rejects_non_positive_balance(self):
        with pytest.raises(InvalidLoanTermsError, match="balance must be positive"):
            payment_breakdown(Decimal("0"), Decimal("6"), Decimal("1000"))

    def test_rejects_negative_rate(self):
        with pytest.raises(InvalidLoanTermsError, match="cannot be negative"):
            payment_breakdown(Decimal("1000"), Decimal("-1"), Decimal("100"))

    def test_rejects_non_positive_payment(self):
        with pytest.raises(InvalidLoanTermsError, match="payment must be positive"):
            payment_breakdown(Decimal("1000"), Decimal("6"), Decimal("0"))
        with pytest.raises(InvalidLoanTermsError, match="payment must be positive"):
            payment_breakdown(Decimal("1000"), Decimal("6"), Decimal("-100"))

    def test_rejects_sub_cent_balance(self):
        with pytest.raises(InvalidLoanTermsError, match="balance must be positive"):
            payment_breakdown(Decimal("0.004"), Decimal("6"), Decimal("100"))


class TestGenerateSchedule:
    def test_first_payment_mostly_interest(self, canonical_terms):
        first = generate_schedule(canonical_terms).entries[0]
        assert first.period == 1
        assert first.interest == Decimal("1000.00")
        assert first.principal == Decimal("199.10")
        assert first.remaining_balance == Decimal("199800.90")

    def test_pays_off_to_exactly_zero(self, canonical_terms):
        schedule = generate_schedule(canonical_terms)
        assert schedule.entries[-1].remaining_balance == Decimal("0")

    def test_principal_ties_out_to_original(self, canonical_terms):
        schedule = generate_schedule(canonical_terms)
        total = sum(e.principal for e in schedule.entries)
        assert total == Decimal("200000.00")
        assert schedule.summary.total_principal == Decimal("200000.00")
        assert schedule.entries[-1].cumulative_principal == Decimal("200000.00")

    def test_about_thirty_years(self, canonical_terms):
        """$1,199.10 is a fraction of a cent short of the exact payment,
        leaving about a dollar for one final payment after month 360."""
        # Payment is rounded down to the cent, so about $1 is left after month 360
        schedule = generate_schedule(canonical_terms)
        assert 360 <= len(schedule.entries) <= 361
        assert schedule.entries[359].remaining_balance < Decimal("2.00")

    def test_balance_never_increases(self, canonical_terms):
        entries = generate_schedule(canonical_terms).entries
        for i in range(1, len(entries)):
            assert entries[i].remaining_balance <= entries[i - 1].remaining_balance

    def test_payment_identity(self, canonical_terms):
        entries = generate_schedule(canonical_terms).entries
        for e in entries:
            assert e.principal + e.interest == e.payment
        for e in entries[:-1]:
            assert e.payment == Decimal("1199.10")
        assert entries[-1].payment <= Decimal("1199.10")

    def test_summary_totals(self, canonical_terms):
        schedule = generate_schedule(canonical_terms)
        s = schedule.summary
        assert s.total_payments == len(schedule.entries)
        assert s.total_interest == sum(e.interest for e in schedule.entries)
        assert s.total_paid == s.total_principal + s.total_interest
        assert s.payoff_date == schedule.entries[-1].date
        assert s.terms == canonical_terms

    def test_idempotent(self, canonical_terms):
        assert generate_schedule(canonical_terms) == generate_schedule(canonical_terms)

    def test_monthly_dates(self, canonical_terms):
        entries = generate_schedule(canonical_terms).entries
        assert entries[0].date == date(2024, 2, 1)
        assert entries[11].date == date(2025, 1, 1)
        for i in range(1, len(entries)):
            assert entries[i].date > entries[i - 1].date

    def test_month_end_start_date_does_not_drift(self, canonical_terms):
        terms = replace(canonical_terms, start_date=date(2024, 1, 31))
        entries = generate_schedule(terms).entries
        assert entries[0].date == date(2024, 2, 29)
        assert entries[1].date == date(2024, 3, 31)

    def test_zero_rate_loan(self):
        terms = LoanTerms(Decimal("12000"), Decimal("0"), Decimal("1000"), date(2024, 1, 1))
        schedule = generate_schedule(terms)
        assert len(schedule.entries) == 12
        assert schedule.summary.total_interest == Decimal("0")

    def test_short_final_payment(self):
        terms = LoanTerms(Decimal("2500"), Decimal("0"), Decimal("1000"), date(2024, 1, 1))
        entries = generate_schedule(terms).entries
        assert [e.payment for e in entries] == [Decimal("1000"), Decimal("1000"), Decimal("500")]

    def test_non_amortizing_fails_fast(self, canonical_terms):
        """Payment equal to the monthly interest would never pay the loan down."""
        terms = replace(canonical_terms, monthly_payment=Decimal("1000.00"))
        with pytest.raises(InvalidLoanTermsError, match="never amortize"):
            generate_schedule(terms)

    def test_exceeds_max_periods(self, canonical_terms):
        with pytest.raises(InvalidLoanTermsError, match="within 120 periods"):
            generate_schedule(canonical_terms, max_periods=120)

    def test_default_cap_is_600_periods(self, canonical_terms):
        """Barely amortizing: $1,000.50 on $1,000.00 of interest takes centuries."""
        terms = replace(canonical_terms, monthly_payment=Decimal("1000.50"))
        with pytest.raises(InvalidLoanTermsError, match="within 600 periods"):
            generate_schedule(terms)

    def test_rejects_non_positive_principal(self, canonical_terms):
        with pytest.raises(InvalidLoanTermsError):
            generate_schedule(replace(canonical_terms, principal=Decimal("0")))

    def test_rejects_principal_rounding_to_zero(self, canonical_terms):
        with pytest.raises(InvalidLoanTermsError, match="balance must be positive"):
            generate_schedule(replace(canonical_terms, principal=Decimal("0.004")))

    def test_rejects_payment_rounding_to_zero(self, canonical_terms):
        with pytest.raises(InvalidLoanTermsError, match="payment must be positive"):
            generate_schedule(replace(canonical_terms, monthly_payment=Decimal("0.004")))


class TestRemainingSchedule:
    def test_starts_from_current_balance(self):
        schedule = generate_remaining_schedule(
            Decimal("150000"), Decimal("6.5"), Decimal("1516.96"), date(2026, 1, 1)
        )
        assert schedule.summary.terms.principal == Decimal("150000")
        assert schedule.entries[0].date == date(2026, 2, 1)
        assert schedule.entries[0].interest == Decimal("812.50")
        assert schedule.summary.total_principal == Decimal("150000.00")

    def test_matches_generate_schedule(self, canonical_terms):
        remaining = generate_remaining_schedule(
            canonical_terms.principal,
            canonical_terms.annual_interest_rate_percent,
            canonical_terms.monthly_payment,
            canonical_terms.start_date,
        )
        assert remaining == generate_schedule(canonical_terms)


class TestBalanceHelpers:
    def test_balance_after_zero_months(self, canonical_terms):
        assert balance_after(canonical_terms, 0) == Decimal("200000.00")

    def test_balance_after_one_year(self, canonical_terms):
        schedule = generate_schedule(canonical_terms)
        assert balance_after(canonical_terms, 12) == schedule.entries[11].remaining_balance

    def test_balance_after_payoff(self, canonical_terms):
        assert balance_after(canonical_terms, 1000) == Decimal("0")

    def test_estimate_current_balance(self):
        start = date(2020, 1, 1)
        bal = estimate_current_balance(Decimal("200000"), Decimal("6"), 360, 12, start)
        assert Decimal("197000") < bal < Decimal("198000")

    def test_estimate_current_balance_at_origination(self):
        bal = estimate_current_balance(Decimal("200000"), Decimal("6"), 360, 0, date(2020, 1, 1))
        assert bal == Decimal("200000.00")

    def test_payoff_date(self, canonical_terms):
        schedule = generate_schedule(canonical_terms)
        result = payoff_date(
            canonical_terms.principal,
            canonical_terms.annual_interest_rate_percent,
            canonical_terms.monthly_payment,
            canonical_terms.start_date,
        )
        assert result == schedule.summary.payoff_date


class TestYearlyDebtSummary:
    def test_year_count(self, canonical_terms):
        schedule = generate_schedule(canonical_terms)
        yearly = yearly_debt_summary(schedule)
        assert len(yearly) == math.ceil(len(schedule.entries) / 12)
        assert [y["year"] for y in yearly] == list(range(1, len(yearly) + 1))

    def test_yearly_totals_match(self, canonical_terms):
        schedule = generate_schedule(canonical_terms)
        yearly = yearly_debt_summary(schedule)
        assert sum(y["interest"] for y in yearly) == schedule.summary.total_interest
        assert sum(y["principal"] for y in yearly) == schedule.summary.total_principal

    def test_debt_service_equals_12_payments(self, canonical_terms):
        schedule = generate_schedule(canonical_terms)
        yearly = yearly_debt_summary(schedule)
        for y in yearly[:-1]:
            assert y["debt_service"] == canonical_terms.monthly_payment * 12

    def test_last_year_ends_at_zero(self, canonical_terms):
        yearly = yearly_debt_summary(generate_schedule(canonical_terms))
        assert yearly[-1]["ending_balance"] == Decimal("0")
