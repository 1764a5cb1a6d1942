"""
Financial Calculation Engine

Pure calculation modules for the personal-finance calculators.
Every function is stateless and returns full-precision floats;
rounding happens at the API boundary.
"""

from finance_app.calculations import amortization, compound, planning, retirement, tax
from finance_app.calculations.validation import InvalidParameter

__all__ = ["amortization", "compound", "planning", "retirement", "tax", "InvalidParameter"]
