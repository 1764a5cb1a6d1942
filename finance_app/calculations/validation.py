"""
Input validation for the calculation engine.

Every public calculator checks its inputs here before doing any arithmetic,
so bad input is rejected with InvalidParameter instead of leaking NaN or
infinity into the results.
"""

import math
from numbers import Real
from typing import Optional


class InvalidParameter(ValueError):
    """Raised when a calculator receives a missing, non-numeric or out-of-range input."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(f"{name}: {message}")


def require_number(
    name: str,
    value,
    minimum: Optional[float] = None,
    exclusive: bool = False,
) -> float:
    """
    Validate a numeric input and return it as a float.

    Args:
        name: Parameter name used in the error message
        value: Value to check
        minimum: Optional lower bound
        exclusive: If True the value must be strictly greater than minimum

    Returns:
        The value as a float

    Raises:
        InvalidParameter: If the value is missing, not a finite number, or
            below the allowed minimum
    """
    if value is None:
        raise InvalidParameter(name, "is required")
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParameter(name, f"must be a number, got {type(value).__name__}")

    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameter(name, "must be finite")

    if minimum is not None:
        if exclusive and value <= minimum:
            raise InvalidParameter(name, f"must be greater than {minimum:g}")
        if not exclusive and value < minimum:
            raise InvalidParameter(name, f"must be at least {minimum:g}")

    return value


def growth_factor(base: float, exponent: float) -> float:
    """
    Raise a growth base to a power, rejecting results too large for a float.

    Raises:
        InvalidParameter: If the power overflows
    """
    try:
        return base ** exponent
    except OverflowError:
        raise InvalidParameter("inputs", "growth is too large to calculate") from None


def require_finite_result(name: str, value: float) -> float:
    """Reject a calculated amount that overflowed to infinity or NaN."""
    if not math.isfinite(value):
        raise InvalidParameter(name, "result is too large to calculate")
    return value
