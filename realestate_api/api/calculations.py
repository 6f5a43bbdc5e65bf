"""
Calculation API endpoints.

Each endpoint validates a flat JSON body, runs one formula from
realestate_api.calculations and echoes the inputs alongside the results.
Field names follow the camelCase JSON wire format.
"""

import logging
import math
import sys
from datetime import date
from typing import Annotated, List, Optional, Union

from fastapi import APIRouter
from pydantic import AfterValidator, BaseModel, StrictFloat, StrictInt

from realestate_api.calculations import amortization, income, leverage, returns
from realestate_api.calculations.validation import (
    ValidationError,
    require_fields,
    require_positive,
    round_currency,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_TERM_YEARS = 100


def check_finite(value: Union[int, float]) -> Union[int, float]:
    """Reject NaN, Infinity and integers beyond the float range."""
    if isinstance(value, int):
        if abs(value) > sys.float_info.max:
            raise ValueError("number is out of range")
    elif not math.isfinite(value):
        raise ValueError("number must be finite")
    return value


# JSON numbers only: no numeric strings, booleans, NaN or Infinity.
# Integers stay integers so they echo back as received.
Number = Annotated[Union[StrictInt, StrictFloat], AfterValidator(check_finite)]


class CalculationInput(BaseModel):
    """Base for calculation request bodies."""

    def require(self, *fields: str, message: Optional[str] = None) -> None:
        """Reject the request if any of the fields is missing or zero."""
        require_fields(self.model_dump(), fields, message)

    def require_positive(self, *fields: str, message: Optional[str] = None) -> None:
        """Reject the request if any of the fields is not greater than zero."""
        require_positive(self.model_dump(), fields, message)


# === Cap Rate ===

class CapRateInput(CalculationInput):
    noi: Optional[Number] = None
    purchasePrice: Optional[Number] = None


class CapRateResponse(CapRateInput):
    capRate: float


@router.post("/cap-rate", response_model=CapRateResponse)
async def calculate_cap_rate(inputs: CapRateInput):
    """Cap rate as a percentage of purchase price."""
    message = "noi and purchasePrice are required and purchasePrice must be > 0"
    inputs.require("noi", "purchasePrice", message=message)
    inputs.require_positive("purchasePrice", message=message)

    cap_rate = income.calculate_cap_rate(inputs.noi, inputs.purchasePrice)
    logger.debug(f"cap-rate: {cap_rate}")

    return CapRateResponse(**inputs.model_dump(), capRate=cap_rate)


# === Flip Profit ===

class FlipProfitInput(CalculationInput):
    purchasePrice: Number = 0.0
    rehabCost: Number = 0.0
    arv: Number = 0.0
    closingCostsBuy: Number = 0.0
    closingCostsSell: Number = 0.0
    holdingCosts: Number = 0.0


class FlipProfitResponse(FlipProfitInput):
    totalCost: float
    grossProfit: float
    netProfit: float
    roi: Optional[float] = None


@router.post("/flip-profit", response_model=FlipProfitResponse)
async def calculate_flip_profit(inputs: FlipProfitInput):
    """Profit and ROI of a fix-and-flip. Every input defaults to 0."""
    result = returns.calculate_flip_profit(
        purchase_price=inputs.purchasePrice,
        rehab_cost=inputs.rehabCost,
        arv=inputs.arv,
        closing_costs_buy=inputs.closingCostsBuy,
        closing_costs_sell=inputs.closingCostsSell,
        holding_costs=inputs.holdingCosts,
    )
    logger.debug(f"flip-profit: {result}")

    return FlipProfitResponse(
        **inputs.model_dump(),
        totalCost=result["total_cost"],
        grossProfit=result["gross_profit"],
        netProfit=result["net_profit"],
        roi=result["roi"],
    )


# === Rental Cash Flow ===

class RentalCashflowInput(CalculationInput):
    monthlyRent: Number = 0.0
    vacancyRate: Number = 0.0  # decimal, e.g. 0.05 for 5%
    taxes: Number = 0.0
    insurance: Number = 0.0
    maintenance: Number = 0.0
    management: Number = 0.0
    utilities: Number = 0.0
    mortgagePayment: Number = 0.0


class RentalCashflowResponse(RentalCashflowInput):
    effectiveRent: float
    operatingExpenses: float
    noi: float
    cashflow: float


@router.post("/rental-cashflow", response_model=RentalCashflowResponse)
async def calculate_rental_cashflow(inputs: RentalCashflowInput):
    """Monthly NOI and cash flow of a rental. Every input defaults to 0."""
    result = income.calculate_rental_cashflow(
        monthly_rent=inputs.monthlyRent,
        vacancy_rate=inputs.vacancyRate,
        taxes=inputs.taxes,
        insurance=inputs.insurance,
        maintenance=inputs.maintenance,
        management=inputs.management,
        utilities=inputs.utilities,
        mortgage_payment=inputs.mortgagePayment,
    )
    logger.debug(f"rental-cashflow: {result}")

    return RentalCashflowResponse(
        **inputs.model_dump(),
        effectiveRent=result["effective_rent"],
        operatingExpenses=result["operating_expenses"],
        noi=result["noi"],
        cashflow=result["cashflow"],
    )


# === DSCR ===

class DSCRInput(CalculationInput):
    noi: Optional[Number] = None
    annualDebtService: Optional[Number] = None


class DSCRResponse(DSCRInput):
    dscr: float


@router.post("/dscr", response_model=DSCRResponse)
async def calculate_dscr(inputs: DSCRInput):
    """Debt service coverage ratio."""
    inputs.require("noi", "annualDebtService")

    dscr = leverage.calculate_dscr(inputs.noi, inputs.annualDebtService)
    logger.debug(f"dscr: {dscr}")

    return DSCRResponse(**inputs.model_dump(), dscr=dscr)


# === Cash-on-Cash Return ===

class CashOnCashInput(CalculationInput):
    annualCashflow: Optional[Number] = None
    totalCashInvested: Optional[Number] = None


class CashOnCashResponse(CashOnCashInput):
    cashOnCashReturnPercent: float


@router.post("/cash-on-cash", response_model=CashOnCashResponse)
async def calculate_cash_on_cash(inputs: CashOnCashInput):
    """Annual cash flow as a percentage of cash invested."""
    inputs.require("annualCashflow", "totalCashInvested")

    coc = returns.calculate_cash_on_cash(inputs.annualCashflow, inputs.totalCashInvested)
    logger.debug(f"cash-on-cash: {coc}")

    return CashOnCashResponse(**inputs.model_dump(), cashOnCashReturnPercent=coc)


# === BRRRR ===

class BRRRRInput(CalculationInput):
    purchasePrice: Optional[Number] = None
    rehabCost: Optional[Number] = None
    arv: Optional[Number] = None
    refiLTV: Number = returns.DEFAULT_REFI_LTV
    rent: Optional[Number] = None  # monthly
    expenses: Optional[Number] = None  # monthly
    annualDebtService: Optional[Number] = None


class BRRRRResponse(BRRRRInput):
    totalCost: float
    newLoan: float
    equity: float
    cashOut: float
    noi: float
    cashflow: float
    cashOnCashReturnPercent: float
    dscr: Optional[float] = None


@router.post("/brrrr", response_model=BRRRRResponse)
async def calculate_brrrr(inputs: BRRRRInput):
    """Equity, cash out, cash flow, cash-on-cash and DSCR after a refinance."""
    required = ("purchasePrice", "rehabCost", "arv", "rent", "expenses")
    inputs.require(
        *required,
        message=f"Missing required BRRRR inputs ({', '.join(required)})",
    )

    result = returns.calculate_brrrr(
        purchase_price=inputs.purchasePrice,
        rehab_cost=inputs.rehabCost,
        arv=inputs.arv,
        rent=inputs.rent,
        expenses=inputs.expenses,
        refi_ltv=inputs.refiLTV,
        annual_debt_service=inputs.annualDebtService,
    )
    logger.debug(f"brrrr: {result}")

    return BRRRRResponse(
        **inputs.model_dump(),
        totalCost=result["total_cost"],
        newLoan=result["new_loan"],
        equity=result["equity"],
        cashOut=result["cash_out"],
        noi=result["noi"],
        cashflow=result["cashflow"],
        cashOnCashReturnPercent=result["cash_on_cash_return_percent"],
        dscr=result["dscr"],
    )


# === Loan Amortization ===

class AmortizationInput(CalculationInput):
    loanAmount: Optional[Number] = None
    annualRate: Optional[Number] = None  # percent, e.g. 6 for 6%
    termYears: Optional[Number] = None
    startDate: Optional[date] = None


class ScheduleEntry(BaseModel):
    month: int
    principal: float
    interest: float
    payment: float
    balance: float
    date: Optional[str] = None


class AmortizationResponse(AmortizationInput):
    monthlyPayment: float
    totalPayments: float
    totalInterest: float
    totalPrincipal: float
    schedule: List[ScheduleEntry]


@router.post(
    "/amortization",
    response_model=AmortizationResponse,
    response_model_exclude_none=True,
)
async def calculate_amortization(inputs: AmortizationInput):
    """Fixed monthly payment and full monthly amortization schedule."""
    fields = ("loanAmount", "annualRate", "termYears")
    inputs.require(*fields)
    inputs.require_positive(*fields)
    if inputs.termYears > MAX_TERM_YEARS:
        raise ValidationError(
            f"termYears must be at most {MAX_TERM_YEARS}", fields=["termYears"]
        )

    months = inputs.termYears * 12
    if abs(months - round(months)) > 1e-9:
        raise ValidationError(
            "termYears must cover a whole number of months", fields=["termYears"]
        )
    months = int(round(months))

    drift = amortization.estimate_balance_drift(inputs.loanAmount, inputs.annualRate, months)
    if drift > amortization.MAX_BALANCE_DRIFT:
        raise ValidationError(
            "loanAmount, annualRate and termYears are too large to amortize to the cent",
            fields=list(fields),
        )

    payment = amortization.calculate_payment(
        inputs.loanAmount, inputs.annualRate, months
    )
    schedule = amortization.generate_amortization_schedule(
        loan_amount=inputs.loanAmount,
        annual_rate=inputs.annualRate,
        term_years=inputs.termYears,
        start_date=inputs.startDate,
    )
    logger.debug(f"amortization: {months} months, payment {payment}")

    return AmortizationResponse(
        **inputs.model_dump(),
        monthlyPayment=round_currency(payment),
        totalPayments=round_currency(payment * months),
        totalInterest=amortization.calculate_total_interest(schedule),
        totalPrincipal=amortization.calculate_total_principal(schedule),
        schedule=schedule,
    )


# === Yield on Cost ===

class YieldOnCostInput(CalculationInput):
    stabilizedNOI: Optional[Number] = None
    totalProjectCost: Optional[Number] = None


class YieldOnCostResponse(YieldOnCostInput):
    yieldOnCostPercent: float


@router.post("/yield-on-cost", response_model=YieldOnCostResponse)
async def calculate_yield_on_cost(inputs: YieldOnCostInput):
    """Stabilized NOI as a percentage of total project cost."""
    inputs.require(
        "stabilizedNOI",
        "totalProjectCost",
        message="Missing fields (stabilizedNOI, totalProjectCost)",
    )

    yoc = income.calculate_yield_on_cost(inputs.stabilizedNOI, inputs.totalProjectCost)
    logger.debug(f"yield-on-cost: {yoc}")

    return YieldOnCostResponse(**inputs.model_dump(), yieldOnCostPercent=yoc)


# === LTV / LTC ===

class LTVInput(CalculationInput):
    loanAmount: Optional[Number] = None
    propertyValue: Optional[Number] = None


class LTVResponse(LTVInput):
    ltvPercent: float


@router.post("/ltv", response_model=LTVResponse)
async def calculate_ltv(inputs: LTVInput):
    """Loan-to-value percentage."""
    inputs.require(
        "loanAmount", "propertyValue", message="Missing fields (loanAmount, propertyValue)"
    )

    ltv = leverage.calculate_ltv(inputs.loanAmount, inputs.propertyValue)
    logger.debug(f"ltv: {ltv}")

    return LTVResponse(**inputs.model_dump(), ltvPercent=ltv)


class LTCInput(CalculationInput):
    loanAmount: Optional[Number] = None
    totalCost: Optional[Number] = None


class LTCResponse(LTCInput):
    ltcPercent: float


@router.post("/ltc", response_model=LTCResponse)
async def calculate_ltc(inputs: LTCInput):
    """Loan-to-cost percentage."""
    inputs.require("loanAmount", "totalCost", message="Missing fields (loanAmount, totalCost)")

    ltc = leverage.calculate_ltc(inputs.loanAmount, inputs.totalCost)
    logger.debug(f"ltc: {ltc}")

    return LTCResponse(**inputs.model_dump(), ltcPercent=ltc)
