"""
Income Calculations

Property-level income metrics: cap rate, monthly rental cash flow and
development yield on cost.
"""

from typing import Dict

from realestate_api.calculations.validation import round_currency


def calculate_cap_rate(noi: float, purchase_price: float) -> float:
    """
    Calculate capitalization rate.

    Args:
        noi: Annual Net Operating Income
        purchase_price: Purchase price of the property

    Returns:
        Cap rate as a percentage (e.g., 6.0 for 6%)
    """
    return round_currency(noi / purchase_price * 100)


def calculate_rental_cashflow(
    monthly_rent: float = 0.0,
    vacancy_rate: float = 0.0,
    taxes: float = 0.0,
    insurance: float = 0.0,
    maintenance: float = 0.0,
    management: float = 0.0,
    utilities: float = 0.0,
    mortgage_payment: float = 0.0,
) -> Dict[str, float]:
    """
    Calculate monthly cash flow of a rental property.

    Args:
        monthly_rent: Gross scheduled monthly rent
        vacancy_rate: Vacancy as a decimal (e.g., 0.05 for 5%)
        taxes: Monthly property taxes
        insurance: Monthly insurance
        maintenance: Monthly maintenance
        management: Monthly management fees
        utilities: Monthly owner-paid utilities
        mortgage_payment: Monthly mortgage payment

    Returns:
        Dictionary with effective_rent, operating_expenses, noi and cashflow
    """
    effective_rent = monthly_rent * (1 - vacancy_rate)
    operating_expenses = taxes + insurance + maintenance + management + utilities
    noi = effective_rent - operating_expenses
    cashflow = noi - mortgage_payment

    return {
        "effective_rent": round_currency(effective_rent),
        "operating_expenses": round_currency(operating_expenses),
        "noi": round_currency(noi),
        "cashflow": round_currency(cashflow),
    }


def calculate_yield_on_cost(stabilized_noi: float, total_project_cost: float) -> float:
    """Stabilized NOI as a percentage of total project cost."""
    return round_currency(stabilized_noi / total_project_cost * 100)
