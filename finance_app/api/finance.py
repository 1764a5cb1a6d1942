"""
Financial planning API endpoints.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from finance_app.api.formatting import money
from finance_app.calculations.planning import recommend_allocation
from finance_app.calculations.tax import plan_slab_tax

router = APIRouter()


class SlabTaxInput(BaseModel):
    """Income with deductions keyed by section (e.g., 80C, 80D)."""

    income: float
    deductions: Dict[str, float] = {}


class SlabTaxResponse(BaseModel):
    grossIncome: float
    totalDeductions: float
    taxableIncome: float
    estimatedTax: float
    taxSavings: float


@router.post("/tax-calculation", response_model=SlabTaxResponse)
async def tax_calculation(inputs: SlabTaxInput):
    """Calculate slab tax after deductions."""
    plan = plan_slab_tax(inputs.income, inputs.deductions)

    return SlabTaxResponse(
        grossIncome=money(plan.gross_income),
        totalDeductions=money(plan.total_deductions),
        taxableIncome=money(plan.taxable_income),
        estimatedTax=money(plan.tax),
        taxSavings=money(plan.estimated_savings),
    )


class RecommendationInput(BaseModel):
    """Risk profile for an allocation recommendation."""

    model_config = ConfigDict(populate_by_name=True)

    risk_tolerance: float = Field(alias="riskTolerance")
    investment_goals: Optional[List[str]] = Field(None, alias="investmentGoals")
    time_horizon: Optional[float] = Field(None, alias="timeHorizon")


@router.post("/investment-recommendation")
async def investment_recommendation(inputs: RecommendationInput):
    """Recommend an asset allocation for a risk tolerance."""
    recommendation = recommend_allocation(
        risk_tolerance=inputs.risk_tolerance,
        goals=inputs.investment_goals,
        time_horizon=inputs.time_horizon,
    )

    return {
        "recommendations": {
            "assetAllocation": recommendation.asset_allocation,
            "suggestions": recommendation.suggestions,
        }
    }
