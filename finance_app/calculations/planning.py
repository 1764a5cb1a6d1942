"""
Investment allocation recommendations based on a risk profile.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from finance_app.calculations.validation import require_number

# Risk tolerance above this (on a 0-10 scale) gets the growth allocation
AGGRESSIVE_RISK_THRESHOLD = 7

GROWTH_ALLOCATION = {"stocks": 70, "bonds": 20, "cash": 10}
BALANCED_ALLOCATION = {"stocks": 50, "bonds": 40, "cash": 10}

STANDARD_SUGGESTIONS = [
    "Consider diversifying your portfolio across multiple asset classes",
    "Regular review and rebalancing of your portfolio is recommended",
    "Maintain an emergency fund of 3-6 months of expenses",
]


@dataclass(frozen=True)
class Recommendation:
    asset_allocation: Dict[str, int]
    suggestions: List[str] = field(default_factory=list)


def recommend_allocation(
    risk_tolerance: float,
    goals: Optional[List[str]] = None,
    time_horizon: Optional[float] = None,
) -> Recommendation:
    """
    Suggest an asset allocation in percent for a risk tolerance.

    Goals and time horizon are accepted for the request shape but do not
    change the allocation yet.
    """
    risk_tolerance = require_number("risk_tolerance", risk_tolerance, minimum=0)
    if time_horizon is not None:
        require_number("time_horizon", time_horizon, minimum=0)

    if risk_tolerance > AGGRESSIVE_RISK_THRESHOLD:
        allocation = GROWTH_ALLOCATION
    else:
        allocation = BALANCED_ALLOCATION

    return Recommendation(
        asset_allocation=dict(allocation),
        suggestions=list(STANDARD_SUGGESTIONS),
    )
