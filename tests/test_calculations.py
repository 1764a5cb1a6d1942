"""
Tests for the loan, growth and retirement calculators.
"""

import pytest
from datetime import date

from finance_app.calculations import InvalidParameter
from finance_app.calculations.amortization import (
    LoanTerms,
    calculate_payment,
    calculate_total_interest,
    compute_amortization,
    generate_monthly_schedule,
)
from finance_app.calculations.compound import compound_interest, project_sip
from finance_app.calculations.planning import recommend_allocation
from finance_app.calculations.retirement import RetirementPlan, project_retirement
from finance_app.calculations.validation import require_number


class TestAmortization:
    """Test EMI and loan totals."""

    def test_home_loan_payment(self, home_loan):
        """Test 300k at 8.5% over 20 years."""
        result = compute_amortization(home_loan)
        r = 0.085 / 12
        expected = 300000 * r * (1 + r) ** 240 / ((1 + r) ** 240 - 1)
        assert result.periodic_payment == pytest.approx(expected)
        assert 2600 < result.periodic_payment < 2606

    def test_totals(self, home_loan):
        """Test total payment and interest are consistent with the EMI."""
        result = compute_amortization(home_loan)
        assert result.total_payment == pytest.approx(result.periodic_payment * 240)
        assert result.total_interest == pytest.approx(result.total_payment - 300000)

    def test_zero_rate(self):
        """Test a zero-interest loan splits the principal evenly."""
        result = compute_amortization(LoanTerms(principal=12000, annual_rate_percent=0, term_years=1))
        assert result.periodic_payment == pytest.approx(1000)
        assert result.total_interest == pytest.approx(0)

    def test_down_payment(self, home_loan):
        """Test down payment reduces the financed amount."""
        full = compute_amortization(home_loan)
        reduced = compute_amortization(home_loan, down_payment=60000)
        assert reduced.loan_amount == 240000
        assert reduced.periodic_payment == pytest.approx(full.periodic_payment * 0.8)
        assert reduced.total_interest == pytest.approx(reduced.total_payment - 240000)

    def test_full_down_payment(self, home_loan):
        result = compute_amortization(home_loan, down_payment=300000)
        assert result.periodic_payment == 0
        assert result.total_interest == 0

    def test_schedule_capped(self, home_loan):
        """Test the breakdown stops at the cap or the loan term."""
        assert len(compute_amortization(home_loan).schedule) == 5
        assert len(compute_amortization(home_loan, schedule_years=10).schedule) == 10
        assert compute_amortization(home_loan, schedule_years=0).schedule == []

        short = LoanTerms(principal=50000, annual_rate_percent=10, term_years=3)
        assert [row.year for row in compute_amortization(short).schedule] == [1, 2, 3]

    def test_schedule_first_year(self, home_loan):
        """Test year one interest is charged on the opening balance."""
        result = compute_amortization(home_loan)
        first = result.schedule[0]
        assert first.interest_paid == pytest.approx(300000 * 0.085)
        assert first.principal_paid == pytest.approx(result.periodic_payment * 12 - first.interest_paid)

    def test_schedule_interest_declines(self, home_loan):
        schedule = compute_amortization(home_loan).schedule
        interest = [row.interest_paid for row in schedule]
        assert interest == sorted(interest, reverse=True)

    def test_invalid_terms(self, home_loan):
        with pytest.raises(InvalidParameter):
            LoanTerms(principal=0, annual_rate_percent=5, term_years=10)
        with pytest.raises(InvalidParameter):
            LoanTerms(principal=1000, annual_rate_percent=-1, term_years=10)
        with pytest.raises(InvalidParameter):
            LoanTerms(principal=1000, annual_rate_percent=5, term_years=0)
        with pytest.raises(InvalidParameter):
            compute_amortization(home_loan, down_payment=400000)
        with pytest.raises(InvalidParameter):
            compute_amortization(home_loan, down_payment=-1)

    def test_calculate_payment_no_loan(self):
        assert calculate_payment(0, 0.01, 12) == 0.0


class TestMonthlySchedule:
    """Test the month-by-month amortization table."""

    def test_schedule_length(self):
        terms = LoanTerms(principal=100000, annual_rate_percent=6, term_years=5)
        schedule = generate_monthly_schedule(terms, start_date=date(2025, 1, 1))
        assert len(schedule) == 60

    def test_final_balance(self):
        """Test the loan is paid off by the last row."""
        terms = LoanTerms(principal=100000, annual_rate_percent=6, term_years=5)
        schedule = generate_monthly_schedule(terms, start_date=date(2025, 1, 1))
        assert schedule[-1]["ending_balance"] == 0
        assert abs(sum(row["principal"] for row in schedule) - 100000) < 1

    def test_first_row(self):
        terms = LoanTerms(principal=100000, annual_rate_percent=6, term_years=5)
        schedule = generate_monthly_schedule(terms, start_date=date(2025, 1, 1))
        assert schedule[0]["interest"] == 500.0
        assert schedule[0]["beginning_balance"] == 100000

    def test_dates_clamp_to_month_end(self):
        terms = LoanTerms(principal=12000, annual_rate_percent=0, term_years=1)
        schedule = generate_monthly_schedule(terms, start_date=date(2025, 1, 31))
        assert schedule[0]["date"] == "2025-01-31"
        assert schedule[1]["date"] == "2025-02-28"

    def test_total_interest_close_to_summary(self, home_loan):
        """Test monthly interest totals agree with the EMI totals."""
        schedule = generate_monthly_schedule(home_loan, start_date=date(2025, 1, 1))
        summary = compute_amortization(home_loan)
        assert calculate_total_interest(schedule) == pytest.approx(summary.total_interest, abs=5)


class TestCompoundInterest:
    """Test lump-sum compounding."""

    def test_annual_compounding(self):
        """Test 10k at 12% for 5 years compounded annually."""
        result = compound_interest(10000, 12, 5, 1)
        assert result.total_amount == pytest.approx(17623.42, abs=0.01)
        assert result.interest_earned == pytest.approx(result.total_amount - 10000)

    def test_monthly_compounding(self):
        result = compound_interest(10000, 12, 1, 12)
        assert result.total_amount == pytest.approx(10000 * 1.01 ** 12)

    def test_zero_years(self):
        """Test no time elapsed returns the principal."""
        result = compound_interest(10000, 12, 0, 1)
        assert result.total_amount == 10000
        assert result.interest_earned == 0

    def test_invalid_frequency(self):
        with pytest.raises(InvalidParameter):
            compound_interest(10000, 12, 5, 0)


class TestSIP:
    """Test SIP projections."""

    def test_future_value(self):
        result = project_sip(5000, 10, 12)
        i = 0.01
        expected = 5000 * ((1 + i) ** 120 - 1) / i * (1 + i)
        assert result.future_value == pytest.approx(expected)
        assert result.total_investment == 600000
        assert result.total_returns == pytest.approx(expected - 600000)

    def test_yearly_projection(self):
        """Test projection covers year 0 through the full term."""
        result = project_sip(5000, 10, 12)
        rows = list(result.produce_yearly_projection())
        assert [row.year for row in rows] == list(range(11))
        assert rows[0].invested == 0
        assert rows[0].value == 0
        assert rows[-1].value == pytest.approx(result.future_value)
        assert rows[-1].invested == result.total_investment

    def test_projection_is_restartable(self):
        result = project_sip(1000, 3, 8)
        assert list(result.produce_yearly_projection()) == list(result.produce_yearly_projection())

    def test_zero_return(self):
        """Test a zero return is the plain sum of contributions."""
        result = project_sip(1000, 2, 0)
        assert result.future_value == 24000
        assert result.total_returns == 0
        assert [row.value for row in result.produce_yearly_projection()] == [0, 12000, 24000]

    def test_invalid_years(self):
        with pytest.raises(InvalidParameter):
            project_sip(1000, -1, 8)
        with pytest.raises(InvalidParameter):
            project_sip(1000, 2.5, 8)


class TestRetirement:
    """Test retirement projections."""

    def test_projection(self, retirement_plan):
        """Test 30 years of saving at 7% with 3% inflation."""
        result = project_retirement(retirement_plan)
        i = 0.07 / 12
        growth = (1 + i) ** 360
        expected = 50000 * growth + 500 * (growth - 1) / i

        assert result.years_to_retirement == 30
        assert result.future_value == pytest.approx(expected)
        assert 1000000 < result.future_value < 1030000
        assert result.real_value == pytest.approx(expected / 1.03 ** 30)
        assert result.total_contributions == 230000

    def test_zero_return(self):
        plan = RetirementPlan(
            current_age=40,
            retirement_age=50,
            current_savings=10000,
            monthly_contribution=100,
            expected_annual_return_percent=0,
            inflation_rate_percent=0,
        )
        result = project_retirement(plan)
        assert result.future_value == pytest.approx(22000)
        assert result.real_value == pytest.approx(22000)

    def test_retirement_age_must_follow_current_age(self):
        with pytest.raises(InvalidParameter):
            RetirementPlan(
                current_age=60,
                retirement_age=60,
                current_savings=0,
                monthly_contribution=0,
                expected_annual_return_percent=7,
                inflation_rate_percent=3,
            )


class TestPlanning:
    """Test allocation recommendations."""

    def test_aggressive(self):
        assert recommend_allocation(8).asset_allocation == {"stocks": 70, "bonds": 20, "cash": 10}

    def test_balanced(self):
        recommendation = recommend_allocation(7, ["retirement"], 20)
        assert recommendation.asset_allocation == {"stocks": 50, "bonds": 40, "cash": 10}
        assert len(recommendation.suggestions) == 3

    def test_invalid_risk(self):
        with pytest.raises(InvalidParameter):
            recommend_allocation(-1)


class TestValidation:
    """Test input checks."""

    def test_rejects_missing_and_bool(self):
        with pytest.raises(InvalidParameter, match="is required"):
            require_number("principal", None)
        with pytest.raises(InvalidParameter):
            require_number("principal", True)

    def test_exclusive_minimum(self):
        assert require_number("rate", 0, minimum=0) == 0.0
        with pytest.raises(InvalidParameter):
            require_number("rate", 0, minimum=0, exclusive=True)


class TestOverflow:
    """Test inputs whose results are too large for a float are rejected."""

    def test_compound_interest_power_overflow(self):
        with pytest.raises(InvalidParameter):
            compound_interest(10000, 1000, 1000, 365)

    def test_compound_interest_infinite_amount(self):
        """Test a finite growth factor on a huge principal is rejected."""
        with pytest.raises(InvalidParameter, match="total_amount"):
            compound_interest(1e308, 100, 10, 1)

    def test_sip_overflow(self):
        with pytest.raises(InvalidParameter):
            project_sip(1000, 1000, 100000)

    def test_retirement_overflow(self):
        plan = RetirementPlan(
            current_age=20,
            retirement_age=120,
            current_savings=1000,
            monthly_contribution=100,
            expected_annual_return_percent=5000,
            inflation_rate_percent=3,
        )
        with pytest.raises(InvalidParameter):
            project_retirement(plan)

    def test_retirement_deflation_underflow(self):
        plan = RetirementPlan(
            current_age=20,
            retirement_age=120,
            current_savings=1000,
            monthly_contribution=100,
            expected_annual_return_percent=5,
            inflation_rate_percent=-99.9999999,
        )
        with pytest.raises(InvalidParameter):
            project_retirement(plan)

    def test_loan_overflow(self):
        with pytest.raises(InvalidParameter):
            compute_amortization(LoanTerms(principal=1000, annual_rate_percent=100000, term_years=1000))
        with pytest.raises(InvalidParameter):
            generate_monthly_schedule(LoanTerms(principal=1000, annual_rate_percent=100000, term_years=1000))

    def test_overflow_is_a_value_error(self):
        """Test callers catching ValueError still see overflow rejections."""
        with pytest.raises(ValueError):
            compound_interest(10000, 1000, 1000, 365)


class TestShortLoanSchedule:
    """Test loans shorter than a month."""

    def test_term_under_one_month(self):
        """Test a term shorter than one payment still gets a single payoff row."""
        terms = LoanTerms(principal=1000, annual_rate_percent=5, term_years=0.04)
        schedule = generate_monthly_schedule(terms, start_date=date(2025, 1, 1))
        assert len(schedule) == 1
        assert schedule[0]["principal"] == 1000
        assert schedule[0]["ending_balance"] == 0

    def test_partial_final_month(self):
        """Test a fractional term rounds up to cover the last partial month."""
        terms = LoanTerms(principal=1000, annual_rate_percent=0, term_years=0.25 + 1 / 24)
        schedule = generate_monthly_schedule(terms, start_date=date(2025, 1, 1))
        assert len(schedule) == 4
        assert schedule[-1]["ending_balance"] == 0
