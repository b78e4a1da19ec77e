"""
Budget coverage.

Works out how many months a fixed budget lasts at a given monthly cost.
"""

import math

DEFAULT_BUDGET = 100.0


def months_covered(budget: float, total: float) -> float:
    """Months a budget covers at a monthly cost.

    Args:
        budget: Budget in USD
        total: Monthly cost in USD

    Returns:
        budget / total when both are positive, otherwise ``math.inf``
        meaning the budget lasts indefinitely
    """
    if budget > 0 and total > 0:
        return budget / total
    return math.inf


def is_indefinite(months: float) -> bool:
    """True when a months-covered value is the 'lasts indefinitely' sentinel."""
    return math.isinf(months)
