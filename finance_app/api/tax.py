"""
Tax planning API endpoints.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from finance_app.api.formatting import limit, money
from finance_app.calculations.tax import calculate_deductions, estimate_tax, resolve_brackets

router = APIRouter()


class TaxModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TaxEstimateInput(TaxModel):
    """Input for a tax estimate."""

    income: float
    filing_status: Optional[str] = Field("single", alias="filingStatus")
    deductions: float = 0.0


class TaxEstimateResponse(BaseModel):
    grossIncome: float
    taxableIncome: float
    totalTax: float
    effectiveRate: float
    takeHomePay: float


@router.post("/estimate", response_model=TaxEstimateResponse)
async def estimate(inputs: TaxEstimateInput):
    """Estimate federal income tax and take-home pay."""
    result = estimate_tax(
        income=inputs.income,
        filing_status=inputs.filing_status,
        deductions=inputs.deductions,
    )

    return TaxEstimateResponse(
        grossIncome=money(result.gross_income),
        taxableIncome=money(result.taxable_income),
        totalTax=money(result.total_tax),
        effectiveRate=money(result.effective_rate_percent),
        takeHomePay=money(result.take_home_pay),
    )


class DeductionsInput(TaxModel):
    """Input for itemized deduction comparison."""

    mortgage_interest: float = Field(0.0, alias="mortgageInterest")
    property_tax: float = Field(0.0, alias="propertyTax")
    charitable_contributions: float = Field(0.0, alias="charitableContributions")
    student_loan_interest: float = Field(0.0, alias="studentLoanInterest")
    retirement_contributions: float = Field(0.0, alias="retirementContributions")
    healthcare_costs: float = Field(0.0, alias="healthcareCosts")
    agi: float = 0.0
    filing_status: Optional[str] = Field("single", alias="filingStatus")


class DeductionsResponse(BaseModel):
    itemizedDeductions: Dict[str, float]
    totalItemized: float
    standardDeduction: float
    recommendedDeduction: float
    retirementContributions: float


@router.post("/deductions", response_model=DeductionsResponse)
async def deductions(inputs: DeductionsInput):
    """Compare itemized deductions against the standard deduction."""
    result = calculate_deductions(
        mortgage_interest=inputs.mortgage_interest,
        property_tax=inputs.property_tax,
        charitable_contributions=inputs.charitable_contributions,
        student_loan_interest=inputs.student_loan_interest,
        retirement_contributions=inputs.retirement_contributions,
        healthcare_costs=inputs.healthcare_costs,
        agi=inputs.agi,
        filing_status=inputs.filing_status,
    )

    return DeductionsResponse(
        itemizedDeductions={name: money(amount) for name, amount in result.itemized.items()},
        totalItemized=money(result.total_itemized),
        standardDeduction=money(result.standard_deduction),
        recommendedDeduction=money(result.recommended_deduction),
        retirementContributions=money(result.retirement_contributions),
    )


class BracketResponse(BaseModel):
    rate: float
    limit: Optional[float]


@router.get("/brackets", response_model=List[BracketResponse])
async def brackets(filingStatus: str = "single"):
    """List the tax brackets for a filing status."""
    return [
        BracketResponse(rate=bracket.rate, limit=limit(bracket.upper_limit))
        for bracket in resolve_brackets(filingStatus)
    ]
