"""Benchmark comparison: portfolio property vs S&P 500.

Pure functions. No I/O.
"""

from decimal import Decimal

from src.config import settings
from src.engine.appreciation import project_value
from src.models.results import Benchmark, PortfolioPerformance


def sp500_equivalent_value(
    cash_invested: Decimal,
    months_owned: int,
    annual_return: Decimal | None = None,
) -> Decimal:
    """What `cash_invested` would be worth in an S&P 500 buy-and-hold today."""
    if cash_invested <= 0:
        return Decimal("0")
    rate = settings.sp500_annual_return if annual_return is None else annual_return
    return project_value(cash_invested, Decimal(months_owned) / 12, rate)


def build_benchmark(
    performance: PortfolioPerformance | None,
    annual_return: Decimal | None = None,
) -> Benchmark:
    rate = settings.sp500_annual_return if annual_return is None else annual_return
    if performance is None:
        return Benchmark(sp500_annual_return=rate * 100)

    return Benchmark(
        sp500_annual_return=rate * 100,
        sp500_equivalent_value=sp500_equivalent_value(
            performance.cash_invested, performance.months_owned, rate
        ),
        portfolio_average_cash_flow=performance.average_monthly_cash_flow,
        portfolio_cap_rate=performance.metrics.cap_rate,
        comparison_period_months=performance.months_owned,
    )
