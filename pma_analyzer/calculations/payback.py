"""
Payback Period Calculation

Years until cumulative cash flow recovers the year 0 investment, with
linear interpolation inside the breakeven year.
"""

import math
from typing import Sequence


def calculate_payback(cash_flows: Sequence[float]) -> float:
    """
    Calculate payback period in (fractional) years.

    Args:
        cash_flows: Cash flows, index 0 = -initial investment

    Returns:
        Payback period in years; inf if the investment is not recovered
        within the horizon; NaN if there is no positive investment to recover
    """
    initial = -cash_flows[0]
    if not initial > 0:
        return math.nan

    cumulative = 0.0
    for year in range(1, len(cash_flows)):
        cash_flow = cash_flows[year]
        previous = cumulative
        cumulative += cash_flow

        if cumulative >= initial:
            # A non-positive breakeven flow would give a nonsensical fraction
            fraction = (initial - previous) / cash_flow if cash_flow > 0 else 1.0
            return (year - 1) + fraction

    return math.inf
