"""Property value appreciation at a fixed annual rate.

Used to project values forward and to estimate a current value when a
property has no valuation on record yet.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from src.config import settings
from src.models.portfolio import Valuation

TWO_PLACES = Decimal("0.01")


def project_value(value: Decimal, years: Decimal | int, rate: Decimal | None = None) -> Decimal:
    """Value after compounding `rate` annually for `years` (fractional allowed)."""
    rate = settings.default_appreciation_rate if rate is None else rate
    growth = (1 + rate) ** Decimal(years)
    return (value * growth).quantize(TWO_PLACES, ROUND_HALF_UP)


def estimate_current_value(
    acquisition_price: Decimal, months_owned: int, rate: Decimal | None = None
) -> Decimal:
    return project_value(acquisition_price, Decimal(months_owned) / 12, rate)


def value_as_of(valuations: Sequence[Valuation], on_date: date) -> Valuation | None:
    """Latest valuation dated on or before `on_date`."""
    eligible = [v for v in valuations if v.valuation_date <= on_date]
    if not eligible:
        return None
    return max(eligible, key=lambda v: v.valuation_date)
