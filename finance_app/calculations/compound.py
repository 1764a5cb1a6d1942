"""
Compound Growth Calculations

Lump-sum compound interest and SIP (systematic investment plan)
projections. Rates are annual percentages.
"""

from dataclasses import dataclass
from typing import Iterator

from finance_app.calculations.validation import (
    InvalidParameter,
    growth_factor,
    require_finite_result,
    require_number,
)


@dataclass(frozen=True)
class CompoundInterestResult:
    """Result of a lump-sum compound interest calculation."""

    principal: float
    total_amount: float
    interest_earned: float


@dataclass(frozen=True)
class YearlyProjection:
    """Amount invested and accumulated value at the end of a year."""

    year: int
    invested: float
    value: float


def compound_interest(
    principal: float,
    annual_rate_percent: float,
    years: float,
    compounding_frequency: int = 1,
) -> CompoundInterestResult:
    """
    Calculate lump-sum growth, A = P * (1 + r/n) ** (n*t).

    Args:
        principal: Amount invested
        annual_rate_percent: Annual interest rate in percent
        years: Investment period in years
        compounding_frequency: Compounding periods per year

    Returns:
        CompoundInterestResult
    """
    principal = require_number("principal", principal, minimum=0)
    rate = require_number("annual_rate_percent", annual_rate_percent, minimum=0) / 100
    years = require_number("years", years, minimum=0)
    n = require_number("compounding_frequency", compounding_frequency, minimum=1)

    amount = require_finite_result(
        "total_amount", principal * growth_factor(1 + rate / n, n * years)
    )

    return CompoundInterestResult(
        principal=principal,
        total_amount=amount,
        interest_earned=amount - principal,
    )


def sip_future_value(monthly_investment: float, monthly_rate: float, months: float) -> float:
    """
    Future value of monthly contributions invested at the start of each month.

    A zero rate returns the plain sum of contributions.
    """
    if monthly_rate == 0:
        return require_finite_result("future_value", monthly_investment * months)
    growth = growth_factor(1 + monthly_rate, months)
    return require_finite_result(
        "future_value", monthly_investment * (growth - 1) / monthly_rate * (1 + monthly_rate)
    )


@dataclass(frozen=True)
class SIPProjection:
    """Future value of a SIP with a per-year projection."""

    monthly_investment: float
    years: int
    annual_return_percent: float
    future_value: float
    total_investment: float
    total_returns: float

    @property
    def monthly_rate(self) -> float:
        return self.annual_return_percent / 12 / 100

    def value_at(self, year: int) -> YearlyProjection:
        """Invested amount and value after a given number of years."""
        if not 0 <= year <= self.years:
            raise InvalidParameter("year", f"must be between 0 and {self.years}")
        months = year * 12
        return YearlyProjection(
            year=year,
            invested=self.monthly_investment * months,
            value=sip_future_value(self.monthly_investment, self.monthly_rate, months),
        )

    def produce_yearly_projection(self) -> Iterator[YearlyProjection]:
        """Yield the projection for years 0 through the full term."""
        return (self.value_at(year) for year in range(self.years + 1))


def project_sip(
    monthly_investment: float,
    years: int,
    annual_return_percent: float,
) -> SIPProjection:
    """
    Project the value of a monthly investment plan.

    Args:
        monthly_investment: Amount invested each month
        years: Investment period in whole years
        annual_return_percent: Expected annual return in percent

    Returns:
        SIPProjection
    """
    monthly_investment = require_number("monthly_investment", monthly_investment, minimum=0)
    annual_return_percent = require_number("annual_return_percent", annual_return_percent, minimum=0)
    if isinstance(years, bool) or not isinstance(years, int) or years < 0:
        raise InvalidParameter("years", "must be a non-negative integer")

    months = years * 12
    monthly_rate = annual_return_percent / 12 / 100
    future_value = sip_future_value(monthly_investment, monthly_rate, months)
    total_investment = monthly_investment * months

    return SIPProjection(
        monthly_investment=monthly_investment,
        years=years,
        annual_return_percent=annual_return_percent,
        future_value=future_value,
        total_investment=total_investment,
        total_returns=future_value - total_investment,
    )
