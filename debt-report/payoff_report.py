"""CLI client for the Portfolio Analytics API: posts a loan and prints a payoff report.

Usage:
    python debt-report/payoff_report.py 200000 6.0 1199.10
    python debt-report/payoff_report.py 312450.18 6.875 2312.00 --extra 100 250 500 --as-of 2026-01-01
"""

import argparse
import asyncio
import sys
from decimal import Decimal

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    return f"${float(v):,.0f}"


def _cents(v) -> str:
    return f"${float(v):,.2f}"


def _years_months(total_months: int) -> str:
    years, months = divmod(total_months, 12)
    if years == 0:
        return f"{months} month{'s' if months != 1 else ''}"
    if months == 0:
        return f"{years} year{'s' if years != 1 else ''}"
    return f"{years}y {months}m"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_loan_summary(schedule: dict) -> None:
    s = schedule["summary"]
    _header("Loan Summary")
    print(f"  Current Balance:  {_cents(s['principal'])}")
    print(f"  Interest Rate:    {float(s['annual_interest_rate_percent']):.3f}%")
    print(f"  Monthly P&I:      {_cents(s['monthly_payment'])}")
    print(f"  Payments Left:    {s['total_payments']} ({_years_months(s['total_payments'])})")
    print(f"  Payoff Date:      {s['payoff_date']}")
    print(f"  Interest Left:    {_dollar(s['total_interest'])}")

    first = schedule["entries"][0]
    print()
    print(f"  Next Payment:     {_cents(first['principal'])} principal / {_cents(first['interest'])} interest")


def print_yearly_table(yearly: list[dict]) -> None:
    if not yearly:
        return
    _header("Yearly Debt Service")
    print(f"  {'Yr':>3}  {'Principal':>11}  {'Interest':>11}  {'Paid':>11}  {'Balance':>11}")
    print(f"  {'---':>3}  {'-' * 11}  {'-' * 11}  {'-' * 11}  {'-' * 11}")
    for yr in yearly:
        print(
            f"  {yr['year']:>3}  {_dollar(yr['principal']):>11}  "
            f"{_dollar(yr['interest']):>11}  {_dollar(yr['debt_service']):>11}  "
            f"{_dollar(yr['ending_balance']):>11}"
        )


def print_scenarios(scenarios: list[dict]) -> None:
    if not scenarios:
        return
    _header("Extra Payment Scenarios")
    print(f"  {'Extra/mo':>10}  {'Payoff':>10}  {'Time Saved':>12}  {'Interest Saved':>15}")
    print(f"  {'-' * 10}  {'-' * 10}  {'-' * 12}  {'-' * 15}")
    for sc in scenarios:
        print(
            f"  {_dollar(sc['extra_monthly_amount']):>10}  {sc['new_payoff_date']:>10}  "
            f"{_years_months(sc['months_saved']):>12}  {_dollar(sc['interest_saved']):>15}"
        )


# ── Main ─────────────────────────────────────────────────────────────────────

async def _post(client: httpx.AsyncClient, url: str, payload: dict):
    resp = await client.post(url, json=payload)
    if resp.status_code != 200:
        print(f"Error: API returned {resp.status_code}", file=sys.stderr)
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        print(f"  {detail}", file=sys.stderr)
        sys.exit(1)
    return resp.json()


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Mortgage payoff report via the Portfolio Analytics API"
    )
    parser.add_argument("balance", type=Decimal, help="Current loan balance")
    parser.add_argument("rate", type=Decimal, help="Annual interest rate in percent, e.g. 6.875")
    parser.add_argument("payment", type=Decimal, help="Monthly principal & interest payment")
    parser.add_argument(
        "--extra",
        type=Decimal,
        nargs="*",
        default=[Decimal("100"), Decimal("250"), Decimal("500")],
        help="Extra monthly amounts to simulate (default: 100 250 500)",
    )
    parser.add_argument("--as-of", help="Schedule start date YYYY-MM-DD (default: today)")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )

    args = parser.parse_args()

    loan: dict = {
        "current_balance": str(args.balance),
        "annual_interest_rate_percent": str(args.rate),
        "monthly_payment": str(args.payment),
    }
    if args.as_of:
        loan["as_of"] = args.as_of

    base = f"{args.api_url}/api/v1/debt"

    async with httpx.AsyncClient(timeout=30) as client:
        try:
            schedule = await _post(client, f"{base}/remaining-schedule", loan)
            yearly = await _post(client, f"{base}/yearly-summary", loan)
            scenarios = await _post(
                client,
                f"{base}/payoff-scenarios",
                {**loan, "extra_amounts": [str(x) for x in args.extra]},
            )
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn src.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

    print_loan_summary(schedule)
    print_yearly_table(yearly)
    print_scenarios(scenarios)
    print()


if __name__ == "__main__":
    asyncio.run(main())
