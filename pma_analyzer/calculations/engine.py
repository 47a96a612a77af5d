"""
Feasibility Engine

Turns one InputParameters value into a CalculationResult: NRE and margin
build-up, cash flow projection, NPV/IRR/payback and the pass/fail status.

The engine is a pure function. Failure modes are encoded as non-finite
numbers (NaN IRR, NaN or infinite payback) rather than exceptions.
"""

import enum
import math
from dataclasses import dataclass
from typing import Tuple

from pma_analyzer.calculations.cashflow import calculate_terminal_value, project_cash_flows
from pma_analyzer.calculations.costs import calculate_costs, calculate_margins
from pma_analyzer.calculations.inputs import InputParameters
from pma_analyzer.calculations.irr import calculate_irr, calculate_npv
from pma_analyzer.calculations.payback import calculate_payback


class Status(str, enum.Enum):
    """Overall go/no-go status."""

    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"

    @property
    def message(self) -> str:
        return STATUS_MESSAGES[self]


STATUS_MESSAGES = {
    Status.GREEN: "All criteria passed - Proceed with development",
    Status.YELLOW: "2/3 criteria passed - Review marginal metrics",
    Status.RED: "Insufficient performance - Consider alternatives",
}


@dataclass(frozen=True)
class CalculationResult:
    """Derived figures for one evaluation."""

    # Intermediate
    oem_investment: float
    labor_cost: float
    nre: float
    annual_revenue: float
    unit_margin: float
    annual_margin: float

    # Projection (years 0-5; terminal value is never part of cash_flows)
    cash_flows: Tuple[float, ...]
    year5_cash_flow: float
    terminal_value: float

    # Metrics
    npv: float
    irr: float
    payback_period: float

    # Pass/fail
    pass_npv: bool
    pass_irr: bool
    pass_pbp: bool
    pass_count: int
    status: Status


def classify(pass_npv: bool, pass_irr: bool, pass_pbp: bool) -> Tuple[int, Status]:
    """
    Reduce the three criteria to a pass count and status.

    GREEN = 3 passes, YELLOW = 2, RED = 1 or 0.
    """
    pass_count = int(pass_npv) + int(pass_irr) + int(pass_pbp)
    if pass_count == 3:
        return pass_count, Status.GREEN
    if pass_count == 2:
        return pass_count, Status.YELLOW
    return pass_count, Status.RED


def evaluate(params: InputParameters) -> CalculationResult:
    """
    Run the full feasibility analysis.

    Args:
        params: Analysis inputs

    Returns:
        CalculationResult; always produced, however degenerate the inputs
    """
    costs = calculate_costs(params)
    margins = calculate_margins(params)

    cash_flows = project_cash_flows(costs.nre, margins.annual_margin, params.ramp_rates)
    terminal_value = calculate_terminal_value(cash_flows, params.terminal_multiple)

    discount_rate = params.discount_rate / 100
    npv = calculate_npv(
        discount_rate,
        cash_flows,
        terminal_value if params.use_terminal_value else None,
    )
    # IRR is on the explicit 5-year horizon only, no terminal value
    irr = calculate_irr(cash_flows)
    payback_period = calculate_payback(cash_flows)

    pass_npv = npv >= params.threshold_npv
    pass_irr = math.isfinite(irr) and irr >= params.threshold_irr / 100
    pass_pbp = math.isfinite(payback_period) and payback_period <= params.threshold_pbp
    pass_count, status = classify(pass_npv, pass_irr, pass_pbp)

    return CalculationResult(
        oem_investment=costs.oem_investment,
        labor_cost=costs.labor_cost,
        nre=costs.nre,
        annual_revenue=margins.annual_revenue,
        unit_margin=margins.unit_margin,
        annual_margin=margins.annual_margin,
        cash_flows=cash_flows,
        year5_cash_flow=cash_flows[5],
        terminal_value=terminal_value,
        npv=npv,
        irr=irr,
        payback_period=payback_period,
        pass_npv=pass_npv,
        pass_irr=pass_irr,
        pass_pbp=pass_pbp,
        pass_count=pass_count,
        status=status,
    )
