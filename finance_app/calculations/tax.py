"""
Progressive Tax Calculations

Bracket-based income tax, the flat slab schedule, itemized deductions
and the slab tax planner.

Rates are percentages (e.g., 22 for 22%). Bracket tables are immutable
tuples passed in explicitly; the module-level tables are only defaults.
"""

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from finance_app.calculations.validation import InvalidParameter, require_number

logger = logging.getLogger(__name__)

DEFAULT_FILING_STATUS = "single"

# 2023 standard deductions
STANDARD_DEDUCTION_SINGLE = 13850
STANDARD_DEDUCTION_MARRIED = 27700

SALT_CAP = 10000
STUDENT_LOAN_INTEREST_CAP = 2500
MEDICAL_AGI_THRESHOLD = 0.075

# Marginal rate used to estimate what deductions save under the slab schedule
SLAB_SAVINGS_RATE = 30


@dataclass(frozen=True)
class TaxBracket:
    """A single income band taxed at one marginal rate."""

    rate: float  # Marginal rate in percent
    upper_limit: float  # Ceiling of the band, math.inf for the top band


TaxBracketTable = Tuple[TaxBracket, ...]


@dataclass(frozen=True)
class TaxResult:
    """Tax owed on a taxable income."""

    total_tax: float
    effective_rate_percent: float


@dataclass(frozen=True)
class TaxEstimate:
    """Full tax estimate for a gross income after deductions."""

    gross_income: float
    taxable_income: float
    total_tax: float
    effective_rate_percent: float
    take_home_pay: float


@dataclass(frozen=True)
class DeductionSummary:
    """Itemized deductions compared against the standard deduction."""

    itemized: Dict[str, float]
    total_itemized: float
    standard_deduction: float
    recommended_deduction: float
    retirement_contributions: float


@dataclass(frozen=True)
class SlabTaxPlan:
    """Slab tax on an income after named deductions."""

    gross_income: float
    total_deductions: float
    taxable_income: float
    tax: float
    estimated_savings: float


def validate_brackets(brackets: TaxBracketTable) -> TaxBracketTable:
    """
    Check that a bracket table is usable.

    Ceilings must be strictly increasing, rates non-decreasing and
    between 0 and 100, and the last band must be unbounded.
    """
    if not brackets:
        raise InvalidParameter("brackets", "must contain at least one bracket")

    previous_limit = 0.0
    previous_rate = 0.0
    for bracket in brackets:
        if not 0 <= bracket.rate <= 100:
            raise InvalidParameter("brackets", f"rate {bracket.rate} outside 0-100")
        if bracket.rate < previous_rate:
            raise InvalidParameter("brackets", "rates must be non-decreasing")
        if bracket.upper_limit <= previous_limit:
            raise InvalidParameter("brackets", "upper limits must be strictly increasing")
        previous_limit = bracket.upper_limit
        previous_rate = bracket.rate

    if not math.isinf(brackets[-1].upper_limit):
        raise InvalidParameter("brackets", "last bracket must be unbounded")

    return tuple(brackets)


SINGLE_BRACKETS_2023: TaxBracketTable = validate_brackets(
    (
        TaxBracket(rate=10, upper_limit=11000),
        TaxBracket(rate=12, upper_limit=44725),
        TaxBracket(rate=22, upper_limit=95375),
        TaxBracket(rate=24, upper_limit=182100),
        TaxBracket(rate=32, upper_limit=231250),
        TaxBracket(rate=35, upper_limit=578125),
        TaxBracket(rate=37, upper_limit=math.inf),
    )
)

MARRIED_BRACKETS_2023: TaxBracketTable = validate_brackets(
    (
        TaxBracket(rate=10, upper_limit=22000),
        TaxBracket(rate=12, upper_limit=89450),
        TaxBracket(rate=22, upper_limit=190750),
        TaxBracket(rate=24, upper_limit=364200),
        TaxBracket(rate=32, upper_limit=462500),
        TaxBracket(rate=35, upper_limit=693750),
        TaxBracket(rate=37, upper_limit=math.inf),
    )
)

# Slab schedule: 250,000 wide bands from 0% up to 30% above 1,500,000
SLAB_BRACKETS: TaxBracketTable = validate_brackets(
    (
        TaxBracket(rate=0, upper_limit=250000),
        TaxBracket(rate=5, upper_limit=500000),
        TaxBracket(rate=10, upper_limit=750000),
        TaxBracket(rate=15, upper_limit=1000000),
        TaxBracket(rate=20, upper_limit=1250000),
        TaxBracket(rate=25, upper_limit=1500000),
        TaxBracket(rate=30, upper_limit=math.inf),
    )
)

BRACKET_TABLES: Mapping[str, TaxBracketTable] = MappingProxyType(
    {
        "single": SINGLE_BRACKETS_2023,
        "married": MARRIED_BRACKETS_2023,
    }
)


def resolve_brackets(
    filing_status: Optional[str],
    tables: Mapping[str, TaxBracketTable] = BRACKET_TABLES,
) -> TaxBracketTable:
    """
    Look up the bracket table for a filing status.

    Matching is case-insensitive. Unknown or missing statuses fall back
    to the single table.
    """
    status = (filing_status or "").strip().lower()
    if status in tables:
        return tables[status]
    if status:
        logger.debug(f"Unknown filing status {filing_status!r}, using single brackets")
    return tables[DEFAULT_FILING_STATUS]


def compute_tax(
    taxable_income: float,
    brackets: TaxBracketTable,
    gross_income: Optional[float] = None,
) -> TaxResult:
    """
    Calculate progressive tax owed on a taxable income.

    Args:
        taxable_income: Income after deductions (>= 0)
        brackets: Bracket table in ascending order of upper limit
        gross_income: Income used for the effective rate, defaults to
            taxable_income

    Returns:
        TaxResult with total tax and effective rate in percent
    """
    brackets = validate_brackets(brackets)
    taxable_income = require_number("taxable_income", taxable_income, minimum=0)
    if gross_income is None:
        gross_income = taxable_income
    else:
        gross_income = require_number("gross_income", gross_income, minimum=0)

    total_tax = 0.0
    remaining_income = taxable_income
    previous_limit = 0.0

    for bracket in brackets:
        taxable_in_bracket = min(remaining_income, bracket.upper_limit - previous_limit)
        if taxable_in_bracket <= 0:
            break

        total_tax += taxable_in_bracket * bracket.rate / 100
        remaining_income -= taxable_in_bracket
        previous_limit = bracket.upper_limit

        if remaining_income <= 0:
            break

    if gross_income == 0:
        effective_rate = 0.0
    else:
        effective_rate = total_tax / gross_income * 100

    return TaxResult(total_tax=total_tax, effective_rate_percent=effective_rate)


def estimate_tax(
    income: float,
    filing_status: Optional[str] = DEFAULT_FILING_STATUS,
    deductions: float = 0.0,
    tables: Mapping[str, TaxBracketTable] = BRACKET_TABLES,
) -> TaxEstimate:
    """Estimate tax and take-home pay for a gross income and filing status."""
    income = require_number("income", income, minimum=0)
    # Negative deductions are the caller's responsibility
    deductions = require_number("deductions", deductions)

    taxable_income = max(income - deductions, 0.0)
    brackets = resolve_brackets(filing_status, tables)
    result = compute_tax(taxable_income, brackets, gross_income=income)

    return TaxEstimate(
        gross_income=income,
        taxable_income=taxable_income,
        total_tax=result.total_tax,
        effective_rate_percent=result.effective_rate_percent,
        take_home_pay=income - result.total_tax,
    )


def calculate_slab_tax(taxable_income: float) -> float:
    """Tax under the flat slab schedule."""
    return compute_tax(taxable_income, SLAB_BRACKETS).total_tax


def plan_slab_tax(income: float, deductions: Mapping[str, float]) -> SlabTaxPlan:
    """
    Apply named deductions to an income and compute slab tax.

    Args:
        income: Gross annual income
        deductions: Deduction amounts keyed by section name

    Returns:
        SlabTaxPlan including the estimated saving from the deductions
    """
    income = require_number("income", income, minimum=0)
    total_deductions = sum(
        require_number(f"deductions.{name}", amount) for name, amount in deductions.items()
    )

    taxable_income = max(income - total_deductions, 0.0)
    tax = calculate_slab_tax(taxable_income)

    return SlabTaxPlan(
        gross_income=income,
        total_deductions=total_deductions,
        taxable_income=taxable_income,
        tax=tax,
        estimated_savings=max(total_deductions * SLAB_SAVINGS_RATE / 100, 0.0),
    )


def calculate_deductions(
    mortgage_interest: float = 0.0,
    property_tax: float = 0.0,
    charitable_contributions: float = 0.0,
    student_loan_interest: float = 0.0,
    retirement_contributions: float = 0.0,
    healthcare_costs: float = 0.0,
    agi: float = 0.0,
    filing_status: Optional[str] = DEFAULT_FILING_STATUS,
) -> DeductionSummary:
    """
    Compare itemized deductions with the 2023 standard deduction.

    Property tax is capped at the SALT limit, student loan interest at
    2,500, and only medical costs above 7.5% of AGI count.
    Retirement contributions are reported but not itemized.
    """
    itemized = {
        "mortgage_interest": require_number("mortgage_interest", mortgage_interest, minimum=0),
        "property_tax": min(require_number("property_tax", property_tax, minimum=0), SALT_CAP),
        "charitable_contributions": require_number(
            "charitable_contributions", charitable_contributions, minimum=0
        ),
        "student_loan_interest": min(
            require_number("student_loan_interest", student_loan_interest, minimum=0),
            STUDENT_LOAN_INTEREST_CAP,
        ),
        "healthcare_costs": max(
            require_number("healthcare_costs", healthcare_costs, minimum=0)
            - require_number("agi", agi, minimum=0) * MEDICAL_AGI_THRESHOLD,
            0.0,
        ),
    }
    total_itemized = sum(itemized.values())

    if (filing_status or "").strip().lower() == "married":
        standard = STANDARD_DEDUCTION_MARRIED
    else:
        standard = STANDARD_DEDUCTION_SINGLE

    return DeductionSummary(
        itemized=itemized,
        total_itemized=total_itemized,
        standard_deduction=float(standard),
        recommended_deduction=max(total_itemized, float(standard)),
        retirement_contributions=require_number(
            "retirement_contributions", retirement_contributions, minimum=0
        ),
    )
