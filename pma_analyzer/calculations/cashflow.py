"""
Cash Flow Calculations

Builds the six-period (year 0-5) cash flow projection for a PMA part.
Year 0 carries the NRE outflow; years 1-5 carry the annual margin scaled
by that year's ramp rate.
"""

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pma_analyzer.calculations.inputs import RAMP_YEARS


def ramp_fraction(ramp_rates: Sequence[Optional[float]], year: int) -> float:
    """
    Fraction of steady-state margin realized in a given year.

    Args:
        ramp_rates: Ramp rates in percent for years 1..5
        year: Projection year (1-based)

    Returns:
        Ramp rate as decimal; missing, None or NaN entries count as 0
    """
    if year < 1 or year > len(ramp_rates):
        return 0.0
    rate = ramp_rates[year - 1]
    if rate is None or math.isnan(rate):
        return 0.0
    return rate / 100


def project_cash_flows(
    nre: float,
    annual_margin: float,
    ramp_rates: Sequence[Optional[float]],
) -> Tuple[float, ...]:
    """
    Generate the yearly cash flow sequence.

    Args:
        nre: Total non-recurring engineering cost
        annual_margin: Steady-state annual margin dollars
        ramp_rates: Ramp rates in percent for years 1..5

    Returns:
        Tuple of exactly 6 cash flows, index 0 = -NRE
    """
    flows = [-nre]
    for year in range(1, RAMP_YEARS + 1):
        flows.append(annual_margin * ramp_fraction(ramp_rates, year))
    return tuple(flows)


def calculate_terminal_value(
    cash_flows: Sequence[float], terminal_multiple: float
) -> float:
    """Terminal value as a multiple of the final year cash flow."""
    return cash_flows[-1] * terminal_multiple


def cumulative_cash_flows(cash_flows: Sequence[float]) -> List[float]:
    """Running total of cash flows, period by period."""
    return np.cumsum(np.asarray(cash_flows, dtype=float)).tolist()
