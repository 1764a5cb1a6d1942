"""
Retirement Projection

Grows current savings and monthly contributions to retirement age and
discounts the result for inflation.
"""

from dataclasses import dataclass

from finance_app.calculations.validation import (
    InvalidParameter,
    growth_factor,
    require_finite_result,
    require_number,
)


@dataclass(frozen=True)
class RetirementPlan:
    """Savings plan inputs. Rates are annual percentages."""

    current_age: float
    retirement_age: float
    current_savings: float
    monthly_contribution: float
    expected_annual_return_percent: float
    inflation_rate_percent: float

    def __post_init__(self):
        current_age = require_number("current_age", self.current_age, minimum=0)
        retirement_age = require_number("retirement_age", self.retirement_age)
        if retirement_age <= current_age:
            raise InvalidParameter("retirement_age", "must be greater than current_age")
        require_number("current_savings", self.current_savings, minimum=0)
        require_number("monthly_contribution", self.monthly_contribution, minimum=0)
        require_number(
            "expected_annual_return_percent",
            self.expected_annual_return_percent,
            minimum=-100,
            exclusive=True,
        )
        require_number(
            "inflation_rate_percent",
            self.inflation_rate_percent,
            minimum=-100,
            exclusive=True,
        )


@dataclass(frozen=True)
class RetirementProjection:
    """Projected balance at retirement, nominal and in today's money."""

    future_value: float
    real_value: float
    years_to_retirement: float
    total_contributions: float


def project_retirement(plan: RetirementPlan) -> RetirementProjection:
    """
    Project the savings balance at retirement age.

    Contributions are made at the end of each month. A zero expected
    return leaves the contributions as their plain sum.
    """
    years_to_retirement = plan.retirement_age - plan.current_age
    monthly_rate = plan.expected_annual_return_percent / 100 / 12
    total_months = years_to_retirement * 12

    growth = growth_factor(1 + monthly_rate, total_months)
    future_value = plan.current_savings * growth
    if monthly_rate == 0:
        future_value += plan.monthly_contribution * total_months
    else:
        future_value += plan.monthly_contribution * (growth - 1) / monthly_rate

    future_value = require_finite_result("future_value", future_value)

    inflation_factor = growth_factor(1 + plan.inflation_rate_percent / 100, years_to_retirement)
    if inflation_factor == 0:
        raise InvalidParameter("inflation_rate_percent", "deflation is too large to calculate")
    real_value = require_finite_result("real_value", future_value / inflation_factor)

    return RetirementProjection(
        future_value=future_value,
        real_value=real_value,
        years_to_retirement=years_to_retirement,
        total_contributions=require_finite_result(
            "total_contributions", plan.monthly_contribution * total_months + plan.current_savings
        ),
    )
