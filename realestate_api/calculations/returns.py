"""
Investment Return Calculations

Deal-level return metrics: fix-and-flip profit, cash-on-cash return and
BRRRR (Buy, Rehab, Rent, Refinance, Repeat) analysis.
"""

from typing import Dict, Optional

from realestate_api.calculations.leverage import calculate_dscr
from realestate_api.calculations.validation import round_currency

DEFAULT_REFI_LTV = 0.75


def calculate_flip_profit(
    purchase_price: float = 0.0,
    rehab_cost: float = 0.0,
    arv: float = 0.0,
    closing_costs_buy: float = 0.0,
    closing_costs_sell: float = 0.0,
    holding_costs: float = 0.0,
) -> Dict[str, Optional[float]]:
    """
    Calculate profit on a fix-and-flip.

    Args:
        purchase_price: Acquisition price
        rehab_cost: Renovation budget
        arv: After-repair value (expected sale price)
        closing_costs_buy: Closing costs on purchase
        closing_costs_sell: Closing costs on sale
        holding_costs: Carrying costs during the project

    Returns:
        Dictionary with total_cost, gross_profit, net_profit and roi.
        roi is a percentage of total cost, or None when total cost is zero.
    """
    total_cost = (
        purchase_price + rehab_cost + closing_costs_buy + closing_costs_sell + holding_costs
    )
    gross_profit = arv - purchase_price
    net_profit = arv - total_cost
    roi = net_profit / total_cost * 100 if total_cost > 0 else None

    return {
        "total_cost": round_currency(total_cost),
        "gross_profit": round_currency(gross_profit),
        "net_profit": round_currency(net_profit),
        "roi": round_currency(roi),
    }


def calculate_cash_on_cash(annual_cashflow: float, total_cash_invested: float) -> float:
    """Annual pre-tax cash flow as a percentage of total cash invested."""
    return round_currency(annual_cashflow / total_cash_invested * 100)


def calculate_brrrr(
    purchase_price: float,
    rehab_cost: float,
    arv: float,
    rent: float,
    expenses: float,
    refi_ltv: float = DEFAULT_REFI_LTV,
    annual_debt_service: Optional[float] = None,
) -> Dict[str, Optional[float]]:
    """
    Analyze a BRRRR deal after the cash-out refinance.

    Cash-on-cash return is measured against the cash left in the deal.
    When the refinance returns all invested cash (cash out >= 0) the
    return is reported as 0.

    Args:
        purchase_price: Acquisition price
        rehab_cost: Renovation budget
        arv: After-repair value used for the refinance appraisal
        rent: Monthly rent
        expenses: Monthly operating expenses
        refi_ltv: Refinance loan-to-value as a decimal
        annual_debt_service: Annual debt service on the new loan

    Returns:
        Dictionary with total_cost, new_loan, equity, cash_out, noi,
        cashflow, cash_on_cash_return_percent and dscr
    """
    total_cost = purchase_price + rehab_cost
    new_loan = arv * refi_ltv
    equity = arv - new_loan
    cash_out = new_loan - total_cost
    noi = (rent - expenses) * 12
    cashflow = noi - (annual_debt_service or 0)

    if cash_out < 0:
        coc = cashflow / abs(cash_out) * 100
    else:
        coc = 0.0

    return {
        "total_cost": round_currency(total_cost),
        "new_loan": round_currency(new_loan),
        "equity": round_currency(equity),
        "cash_out": round_currency(cash_out),
        "noi": round_currency(noi),
        "cashflow": round_currency(cashflow),
        "cash_on_cash_return_percent": round_currency(coc),
        "dscr": calculate_dscr(noi, annual_debt_service),
    }
