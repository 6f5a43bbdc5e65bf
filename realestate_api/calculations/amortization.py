"""
Loan Amortization Calculations

Implements the fixed monthly payment of a fully amortizing loan and the
month-by-month amortization schedule.
"""

import math
import sys
from typing import List, Dict, Optional
from datetime import date
from dateutil.relativedelta import relativedelta

from realestate_api.calculations.validation import round_currency

# Largest final-balance rounding drift (in dollars) a schedule may carry
MAX_BALANCE_DRIFT = 0.002

# math.exp overflows just above 709
MAX_EXPONENT = 700


def calculate_monthly_rate(annual_rate: float) -> float:
    """Convert an annual percentage rate (e.g., 6 for 6%) to a monthly decimal rate."""
    return annual_rate / 12 / 100


def calculate_payment(principal: float, annual_rate: float, months: int) -> float:
    """
    Calculate the fixed monthly payment of a fully amortizing loan.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as a percentage (e.g., 6 for 6%)
        months: Number of monthly payments

    Returns:
        Monthly payment amount (unrounded)
    """
    if principal <= 0 or months <= 0:
        return 0.0

    monthly_rate = calculate_monthly_rate(annual_rate)
    if monthly_rate == 0:
        return principal / months

    # 1 - (1 + r) ** -n, without cancellation for small r
    discount = -math.expm1(-months * math.log1p(monthly_rate))
    if discount == 0:
        # Rate underflows
        return principal / months

    return principal * monthly_rate / discount


def estimate_balance_drift(loan_amount: float, annual_rate: float, months: int) -> float:
    """
    Upper bound on the floating point error left in the final balance.

    A rounding error made in month k compounds at the loan rate for the
    remaining months, so the bound grows with (1 + r) ** months. Schedules
    whose bound exceeds MAX_BALANCE_DRIFT cannot be trusted to pay off to
    the cent.
    """
    monthly_rate = calculate_monthly_rate(annual_rate)
    if monthly_rate == 0:
        return loan_amount * sys.float_info.epsilon * months

    exponent = months * math.log1p(monthly_rate)
    if exponent > MAX_EXPONENT:
        return math.inf

    # sum of (1 + r) ** k for k < months
    growth = math.expm1(exponent) / monthly_rate
    return loan_amount * sys.float_info.epsilon * growth


def generate_amortization_schedule(
    loan_amount: float,
    annual_rate: float,
    term_years: float,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a full monthly amortization schedule.

    Only the outstanding balance is carried from one month to the next.
    Every value is rounded to cents as it is written to the row; the
    running balance itself is never rounded.

    Args:
        loan_amount: Loan principal amount
        annual_rate: Annual interest rate as a percentage
        term_years: Loan term in years
        start_date: Date of the first payment; adds a "date" to each row

    Returns:
        List of schedule rows, one per month
    """
    months = int(round(term_years * 12))
    monthly_rate = calculate_monthly_rate(annual_rate)
    payment = calculate_payment(loan_amount, annual_rate, months)

    schedule = []
    balance = loan_amount

    for month in range(1, months + 1):
        interest = balance * monthly_rate
        principal = payment - interest
        balance -= principal

        row = {
            "month": month,
            "principal": round_currency(principal),
            "interest": round_currency(interest),
            "payment": round_currency(payment),
            "balance": round_currency(max(balance, 0.0)),
        }
        if start_date is not None:
            row["date"] = (start_date + relativedelta(months=month - 1)).isoformat()

        schedule.append(row)

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over the schedule."""
    return round_currency(sum(row["interest"] for row in schedule))


def calculate_total_principal(schedule: List[Dict]) -> float:
    """Calculate total principal repaid over the schedule."""
    return round_currency(sum(row["principal"] for row in schedule))
