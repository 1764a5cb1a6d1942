"""
Presentation rounding for API responses.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

CENTS = Decimal("0.01")


def money(value: float) -> float:
    """Round to 2 decimal places, half-up, as shown to users."""
    return float(Decimal(repr(value)).quantize(CENTS, rounding=ROUND_HALF_UP))


def limit(value: float) -> Optional[float]:
    """Render a bracket ceiling, with the unbounded top band as None."""
    if math.isinf(value):
        return None
    return value
