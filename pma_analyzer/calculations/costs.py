"""
Cost & Margin Calculations

Non-recurring engineering (NRE) cost build-up and steady-state margin.
Straight arithmetic: negative or zero inputs are passed through unchanged.
"""

from dataclasses import dataclass

from pma_analyzer.calculations.inputs import InputParameters


@dataclass(frozen=True)
class CostBreakdown:
    """One-time development costs."""

    oem_investment: float
    labor_cost: float
    nre: float


@dataclass(frozen=True)
class MarginBreakdown:
    """Steady-state annual revenue and margin."""

    annual_revenue: float
    unit_margin: float
    annual_margin: float


def calculate_costs(params: InputParameters) -> CostBreakdown:
    """
    Calculate total NRE cost.

    NRE = OEM parts investment + materials inspection + in-house labor
          + PMA application fee + DER fee

    Args:
        params: Analysis inputs

    Returns:
        CostBreakdown with the OEM investment, labor cost and total NRE
    """
    oem_investment = params.oem_unit_cost * params.oem_unit_qty
    labor_cost = params.labor_hours * params.labor_rate
    nre = (
        oem_investment
        + params.materials_inspection_cost
        + labor_cost
        + params.pma_fee
        + params.der_fee
    )
    return CostBreakdown(oem_investment=oem_investment, labor_cost=labor_cost, nre=nre)


def calculate_margins(params: InputParameters) -> MarginBreakdown:
    """Calculate annual sales, unit margin and annual margin dollars."""
    unit_margin = params.sell_price - params.unit_cost
    return MarginBreakdown(
        annual_revenue=params.sell_price * params.annual_qty,
        unit_margin=unit_margin,
        annual_margin=unit_margin * params.annual_qty,
    )
