"""
IRR and NPV Calculations

NPV is a discounted cash flow sum evaluated with numpy so that degenerate
discount rates (at or below -100%) produce inf/nan instead of raising.

IRR uses bracketed bisection rather than Newton-Raphson: slower, but it
cannot diverge on non-smooth or pathological cash flow streams. Failure to
bracket a root is reported as NaN, never raised.
"""

import math
from typing import Optional, Sequence

import numpy as np

IRR_LOWER_BOUND = -0.99
IRR_UPPER_BOUND = 10.0
IRR_WIDENED_UPPER_BOUND = 100.0
MAX_ITERATIONS = 200
TOLERANCE = 1e-6


def calculate_npv(
    rate: float,
    cash_flows: Sequence[float],
    terminal_value: Optional[float] = None,
) -> float:
    """
    Calculate NPV (Net Present Value) of cash flows.

    Period 0 is undiscounted. A terminal value, when given and finite, is
    discounted at the same period as the final cash flow.

    Args:
        rate: Periodic discount rate as decimal (e.g., 0.10 for 10%)
        cash_flows: Cash flows, index 0 = initial investment
        terminal_value: Optional value of flows beyond the horizon

    Returns:
        NPV value (inf/nan when the rate makes a discount factor zero)
    """
    if len(cash_flows) == 0:
        raise ValueError("At least 1 cash flow required")

    flows = np.asarray(cash_flows, dtype=float)
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        discount_factors = np.power(1.0 + rate, np.arange(len(flows), dtype=float))
        npv = flows[0] + np.sum(flows[1:] / discount_factors[1:])
        if terminal_value is not None and math.isfinite(terminal_value):
            npv += terminal_value / discount_factors[-1]
    return float(npv)


def calculate_irr(cash_flows: Sequence[float]) -> float:
    """
    Calculate IRR (Internal Rate of Return) using bisection.

    Search starts on [-0.99, 10.0]; if the NPV has the same sign at both
    ends the upper bound is widened once to 100.0.

    Args:
        cash_flows: Periodic cash flows (no terminal value)

    Returns:
        IRR as decimal (e.g., 0.15 for 15%), or NaN when no root is bracketed
    """
    flows = [float(cf) for cf in cash_flows]

    lo, hi = IRR_LOWER_BOUND, IRR_UPPER_BOUND
    f_lo = calculate_npv(lo, flows)
    f_hi = calculate_npv(hi, flows)

    if not (math.isfinite(f_lo) and math.isfinite(f_hi)):
        return math.nan

    if f_lo * f_hi > 0:
        hi = IRR_WIDENED_UPPER_BOUND
        f_hi = calculate_npv(hi, flows)
        if f_lo * f_hi > 0:
            return math.nan

    for _ in range(MAX_ITERATIONS):
        mid = (lo + hi) / 2
        f_mid = calculate_npv(mid, flows)

        if abs(f_mid) < TOLERANCE:
            return mid

        # Keep the half whose endpoints still straddle the root
        if f_lo * f_mid <= 0:
            hi = mid
        else:
            lo, f_lo = mid, f_mid

    return (lo + hi) / 2
