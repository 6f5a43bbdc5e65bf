"""
Leverage Ratios

Debt coverage and loan sizing ratios: DSCR, loan-to-value and loan-to-cost.
"""

from typing import Optional

from realestate_api.calculations.validation import round_currency


def calculate_dscr(noi: float, annual_debt_service: float) -> Optional[float]:
    """
    Calculate Debt Service Coverage Ratio (DSCR).

    Args:
        noi: Annual Net Operating Income
        annual_debt_service: Annual debt service (principal + interest)

    Returns:
        DSCR rounded to 2 decimals, or None when there is no debt service
    """
    if not annual_debt_service:
        return None
    return round_currency(noi / annual_debt_service)


def calculate_ltv(loan_amount: float, property_value: float) -> float:
    """Loan amount as a percentage of property value."""
    return round_currency(loan_amount / property_value * 100)


def calculate_ltc(loan_amount: float, total_cost: float) -> float:
    """Loan amount as a percentage of total project cost."""
    return round_currency(loan_amount / total_cost * 100)
