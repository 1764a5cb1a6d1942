"""
Loan Amortization Calculations

Implements the EMI (equated monthly installment) payment, loan totals,
the annual principal/interest breakdown shown by the EMI calculator,
and a month-by-month amortization table.

Rates are annual percentages (e.g., 8.5 for 8.5%).
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from dateutil.relativedelta import relativedelta

from finance_app.calculations.validation import (
    InvalidParameter,
    growth_factor,
    require_finite_result,
    require_number,
)

logger = logging.getLogger(__name__)

DEFAULT_SCHEDULE_YEARS = 5


@dataclass(frozen=True)
class LoanTerms:
    """Loan principal, annual rate in percent and term in years."""

    principal: float
    annual_rate_percent: float
    term_years: float

    def __post_init__(self):
        require_number("principal", self.principal, minimum=0, exclusive=True)
        require_number("annual_rate_percent", self.annual_rate_percent, minimum=0)
        require_number("term_years", self.term_years, minimum=0, exclusive=True)

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate_percent / 100 / 12

    @property
    def number_of_payments(self) -> float:
        return self.term_years * 12


@dataclass(frozen=True)
class YearlyBreakdown:
    """Principal and interest paid in one loan year."""

    year: int
    principal_paid: float
    interest_paid: float


@dataclass(frozen=True)
class AmortizationResult:
    """EMI, loan totals and the capped annual breakdown."""

    loan_amount: float
    periodic_payment: float
    total_payment: float
    total_interest: float
    schedule: List[YearlyBreakdown] = field(default_factory=list)


def calculate_payment(loan_amount: float, monthly_rate: float, number_of_payments: float) -> float:
    """
    Calculate the fixed monthly payment that fully amortizes a loan.

    Args:
        loan_amount: Amount borrowed
        monthly_rate: Monthly interest rate as decimal (e.g., 0.005)
        number_of_payments: Total number of monthly payments

    Returns:
        Monthly payment amount
    """
    if loan_amount <= 0:
        return 0.0

    if monthly_rate == 0:
        return loan_amount / number_of_payments

    growth = growth_factor(1 + monthly_rate, number_of_payments)
    return require_finite_result("payment", loan_amount * monthly_rate * growth / (growth - 1))


def compute_amortization(
    terms: LoanTerms,
    down_payment: float = 0.0,
    schedule_years: int = DEFAULT_SCHEDULE_YEARS,
) -> AmortizationResult:
    """
    Calculate EMI, total payment and total interest for a loan.

    The annual breakdown covers years 1 through min(schedule_years,
    term_years). Each year's interest is charged on the balance at the
    start of the year, not recomputed monthly.

    Args:
        terms: Loan terms
        down_payment: Amount paid up front, deducted from the principal
        schedule_years: Number of years in the breakdown

    Returns:
        AmortizationResult
    """
    down_payment = require_number("down_payment", down_payment, minimum=0)
    if down_payment > terms.principal:
        raise InvalidParameter("down_payment", "cannot exceed the principal")
    if isinstance(schedule_years, bool) or not isinstance(schedule_years, int) or schedule_years < 0:
        raise InvalidParameter("schedule_years", "must be a non-negative integer")

    loan_amount = terms.principal - down_payment
    monthly_rate = terms.monthly_rate
    n = terms.number_of_payments

    payment = calculate_payment(loan_amount, monthly_rate, n)
    total_payment = require_finite_result("total_payment", payment * n)
    total_interest = total_payment - loan_amount

    schedule = []
    remaining_principal = loan_amount
    for year in range(1, int(min(schedule_years, terms.term_years)) + 1):
        yearly_interest = remaining_principal * monthly_rate * 12
        yearly_principal = payment * 12 - yearly_interest
        remaining_principal -= yearly_principal
        schedule.append(
            YearlyBreakdown(
                year=year,
                principal_paid=yearly_principal,
                interest_paid=yearly_interest,
            )
        )

    logger.debug(
        f"Amortized {loan_amount:.2f} over {n:g} payments: EMI {payment:.2f}"
    )

    return AmortizationResult(
        loan_amount=loan_amount,
        periodic_payment=payment,
        total_payment=total_payment,
        total_interest=total_interest,
        schedule=schedule,
    )


def generate_monthly_schedule(
    terms: LoanTerms,
    down_payment: float = 0.0,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a month-by-month amortization table.

    Unlike the annual breakdown, interest is charged on the balance each
    month. Amounts in the rows are rounded to cents.

    Args:
        terms: Loan terms
        down_payment: Amount paid up front
        start_date: Date of first payment (defaults to today)

    Returns:
        List of amortization rows
    """
    down_payment = require_number("down_payment", down_payment, minimum=0)
    if down_payment > terms.principal:
        raise InvalidParameter("down_payment", "cannot exceed the principal")

    balance = terms.principal - down_payment
    monthly_rate = terms.monthly_rate
    # A partial final month still gets a row
    total_months = max(1, math.ceil(round(terms.number_of_payments, 6)))
    payment = calculate_payment(balance, monthly_rate, terms.number_of_payments)

    if start_date is None:
        start_date = date.today()

    schedule = []
    for period in range(1, total_months + 1):
        if balance <= 0:
            break

        period_date = start_date + relativedelta(months=period - 1)
        interest = balance * monthly_rate

        if period == total_months:
            # Final payment clears whatever rounding left behind
            principal_pmt = balance
        else:
            principal_pmt = min(payment - interest, balance)

        ending_balance = balance - principal_pmt

        schedule.append(
            {
                "period": period,
                "date": period_date.isoformat(),
                "beginning_balance": round(balance, 2),
                "payment": round(principal_pmt + interest, 2),
                "interest": round(interest, 2),
                "principal": round(principal_pmt, 2),
                "ending_balance": round(max(0.0, ending_balance), 2),
            }
        )

        balance = max(0.0, ending_balance)

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over a monthly schedule."""
    return sum(row["interest"] for row in schedule)
