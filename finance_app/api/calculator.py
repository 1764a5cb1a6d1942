"""
Financial calculator API endpoints.

These endpoints accept inputs and return calculated results,
with monetary values rounded to cents.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from finance_app.api.formatting import money
from finance_app.calculations.amortization import (
    LoanTerms,
    calculate_total_interest,
    compute_amortization,
    generate_monthly_schedule,
)
from finance_app.calculations.compound import compound_interest, project_sip
from finance_app.calculations.retirement import RetirementPlan, project_retirement
from finance_app.config import get_settings

router = APIRouter()


class CalculatorModel(BaseModel):
    """Base for calculator schemas, accepting camelCase or snake_case."""

    model_config = ConfigDict(populate_by_name=True)


class CompoundInterestInput(CalculatorModel):
    """Input for compound interest calculation."""

    principal: float
    rate: float
    time: float
    compounding_frequency: int = Field(1, alias="compoundingFrequency")


class CompoundInterestResponse(BaseModel):
    principal: float
    totalAmount: float
    interestEarned: float
    annualRate: float
    timeInYears: float
    compoundingFrequency: int


@router.post("/compound-interest", response_model=CompoundInterestResponse)
async def calculate_compound_interest(inputs: CompoundInterestInput):
    """Calculate lump-sum compound growth."""
    result = compound_interest(
        principal=inputs.principal,
        annual_rate_percent=inputs.rate,
        years=inputs.time,
        compounding_frequency=inputs.compounding_frequency,
    )

    return CompoundInterestResponse(
        principal=result.principal,
        totalAmount=money(result.total_amount),
        interestEarned=money(result.interest_earned),
        annualRate=inputs.rate,
        timeInYears=inputs.time,
        compoundingFrequency=inputs.compounding_frequency,
    )


class LoanInput(CalculatorModel):
    """Input for loan calculation."""

    principal: float
    rate: float
    term: float
    down_payment: float = Field(0.0, alias="downPayment")
    loan_type: Optional[str] = Field(None, alias="loanType")


class LoanResponse(BaseModel):
    loanAmount: float
    monthlyPayment: float
    totalPayment: float
    totalInterest: float
    annualRate: float
    termInYears: float
    loanType: Optional[str] = None


@router.post("/loan", response_model=LoanResponse)
async def calculate_loan(inputs: LoanInput):
    """Calculate monthly payment and loan totals."""
    terms = LoanTerms(
        principal=inputs.principal,
        annual_rate_percent=inputs.rate,
        term_years=inputs.term,
    )
    result = compute_amortization(terms, down_payment=inputs.down_payment, schedule_years=0)

    return LoanResponse(
        loanAmount=money(result.loan_amount),
        monthlyPayment=money(result.periodic_payment),
        totalPayment=money(result.total_payment),
        totalInterest=money(result.total_interest),
        annualRate=inputs.rate,
        termInYears=inputs.term,
        loanType=inputs.loan_type,
    )


class EMIInput(CalculatorModel):
    """Input for the EMI calculator."""

    loan_amount: float = Field(alias="loanAmount")
    interest_rate: float = Field(alias="interestRate")
    tenure: float
    down_payment: float = Field(0.0, alias="downPayment")
    schedule_years: Optional[int] = Field(None, alias="scheduleYears")


class YearlyBreakdownRow(BaseModel):
    year: int
    principal: float
    interest: float


class EMIResponse(BaseModel):
    loanAmount: float
    emi: float
    totalPayment: float
    totalInterest: float
    breakdown: List[YearlyBreakdownRow]


@router.post("/emi", response_model=EMIResponse)
async def calculate_emi(inputs: EMIInput):
    """Calculate EMI with an annual principal/interest breakdown."""
    schedule_years = inputs.schedule_years
    if schedule_years is None:
        schedule_years = get_settings().amortization_schedule_years

    terms = LoanTerms(
        principal=inputs.loan_amount,
        annual_rate_percent=inputs.interest_rate,
        term_years=inputs.tenure,
    )
    result = compute_amortization(
        terms, down_payment=inputs.down_payment, schedule_years=schedule_years
    )

    return EMIResponse(
        loanAmount=money(result.loan_amount),
        emi=money(result.periodic_payment),
        totalPayment=money(result.total_payment),
        totalInterest=money(result.total_interest),
        breakdown=[
            YearlyBreakdownRow(
                year=row.year,
                principal=money(row.principal_paid),
                interest=money(row.interest_paid),
            )
            for row in result.schedule
        ],
    )


class ScheduleInput(CalculatorModel):
    """Input for a monthly amortization table."""

    principal: float
    rate: float
    term: float
    down_payment: float = Field(0.0, alias="downPayment")
    start_date: Optional[date] = Field(None, alias="startDate")


@router.post("/amortization-schedule")
async def calculate_amortization_schedule(inputs: ScheduleInput):
    """Generate a month-by-month amortization table."""
    terms = LoanTerms(
        principal=inputs.principal,
        annual_rate_percent=inputs.rate,
        term_years=inputs.term,
    )
    schedule = generate_monthly_schedule(
        terms, down_payment=inputs.down_payment, start_date=inputs.start_date
    )

    return {
        "schedule": schedule,
        "totalInterest": money(calculate_total_interest(schedule)),
        "totalPrincipal": money(sum(row["principal"] for row in schedule)),
    }


class SIPInput(CalculatorModel):
    """Input for the SIP calculator."""

    amount: float
    years: int
    return_rate: float = Field(alias="returnRate")


class SIPProjectionRow(BaseModel):
    year: int
    invested: float
    value: float


class SIPResponse(BaseModel):
    futureValue: float
    totalInvestment: float
    totalReturns: float
    projection: List[SIPProjectionRow]


@router.post("/sip", response_model=SIPResponse)
async def calculate_sip(inputs: SIPInput):
    """Project a monthly investment plan year by year."""
    result = project_sip(
        monthly_investment=inputs.amount,
        years=inputs.years,
        annual_return_percent=inputs.return_rate,
    )

    return SIPResponse(
        futureValue=money(result.future_value),
        totalInvestment=money(result.total_investment),
        totalReturns=money(result.total_returns),
        projection=[
            SIPProjectionRow(year=row.year, invested=money(row.invested), value=money(row.value))
            for row in result.produce_yearly_projection()
        ],
    )


class RetirementInput(CalculatorModel):
    """Input for retirement projection."""

    current_age: float = Field(alias="currentAge")
    retirement_age: float = Field(alias="retirementAge")
    current_savings: float = Field(alias="currentSavings")
    monthly_contribution: float = Field(alias="monthlyContribution")
    expected_return: float = Field(alias="expectedReturn")
    inflation_rate: float = Field(alias="inflationRate")


class RetirementResponse(BaseModel):
    futureValue: float
    realValue: float
    yearsToRetirement: float
    totalContributions: float
    expectedReturn: float
    inflationAdjusted: float


@router.post("/retirement", response_model=RetirementResponse)
async def calculate_retirement(inputs: RetirementInput):
    """Project savings at retirement in nominal and today's money."""
    plan = RetirementPlan(
        current_age=inputs.current_age,
        retirement_age=inputs.retirement_age,
        current_savings=inputs.current_savings,
        monthly_contribution=inputs.monthly_contribution,
        expected_annual_return_percent=inputs.expected_return,
        inflation_rate_percent=inputs.inflation_rate,
    )
    result = project_retirement(plan)

    return RetirementResponse(
        futureValue=money(result.future_value),
        realValue=money(result.real_value),
        yearsToRetirement=result.years_to_retirement,
        totalContributions=money(result.total_contributions),
        expectedReturn=inputs.expected_return,
        inflationAdjusted=inputs.inflation_rate,
    )
