"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from finance_app.main import app
from finance_app.calculations.amortization import LoanTerms
from finance_app.calculations.retirement import RetirementPlan


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def home_loan():
    """300k loan at 8.5% over 20 years."""
    return LoanTerms(principal=300000, annual_rate_percent=8.5, term_years=20)


@pytest.fixture
def retirement_plan():
    """Saver aged 30 retiring at 60."""
    return RetirementPlan(
        current_age=30,
        retirement_age=60,
        current_savings=50000,
        monthly_contribution=500,
        expected_annual_return_percent=7,
        inflation_rate_percent=3,
    )
