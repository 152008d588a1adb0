from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Projections
    default_appreciation_rate: Decimal = Decimal("0.03")  # Annual, as a fraction
    sp500_annual_return: Decimal = Decimal("0.10")  # ~10% nominal historical average

    # Amortization guard: 600 months = 50 years
    max_schedule_periods: int = 600

    # Equity history chart resolution
    equity_history_max_points: int = 60

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
