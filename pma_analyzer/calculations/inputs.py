"""
Analysis Inputs

Immutable parameter set supplied by the caller on every evaluation.
Percent-valued fields (ramp rates, discount rate, IRR threshold) are kept
as entered, e.g. 10 for 10%.
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

RAMP_YEARS = 5
DEFAULT_RAMP_RATES: Tuple[float, ...] = (23.0, 35.0, 53.0, 55.0, 55.0)


@dataclass(frozen=True)
class InputParameters:
    """Cost, revenue, ramp and threshold assumptions for one PMA part."""

    # Cost breakdown (NRE)
    oem_unit_cost: float = 3715.0
    oem_unit_qty: float = 3.0
    materials_inspection_cost: float = 1400.0
    labor_hours: float = 24.0
    labor_rate: float = 100.0
    pma_fee: float = 8000.0
    der_fee: float = 0.0

    # Revenue & margin
    sell_price: float = 1875.0
    unit_cost: float = 1125.0
    annual_qty: float = 30.0

    # Ramp & terminal
    ramp_rates: Sequence[Optional[float]] = DEFAULT_RAMP_RATES
    terminal_multiple: float = 7.0
    use_terminal_value: bool = True
    discount_rate: float = 10.0

    # Pass/fail criteria
    threshold_npv: float = 0.0
    threshold_irr: float = 20.0
    threshold_pbp: float = 4.3

    # Project metadata (not used in calculation)
    part_number: str = ""
    partner: str = ""
    sales_director: str = ""
    notes: str = ""

    def __post_init__(self):
        # Freeze the ramp sequence so a caller's list cannot change under us
        object.__setattr__(self, "ramp_rates", tuple(self.ramp_rates))

    def with_changes(self, **changes) -> "InputParameters":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DEFAULT_INPUTS = InputParameters()
