"""
Request and response schemas for the calculation and export endpoints.

JSON has no NaN or Infinity, so every engine float goes through
``finite_or_none`` on the way out; the formatted ``display`` block keeps
the distinction between "no payback" and "undefined".
"""

import math
from typing import List, Mapping, Optional

from pydantic import BaseModel, Field

from pma_analyzer.calculations import CalculationResult, InputParameters
from pma_analyzer.calculations.formatting import (
    format_currency,
    format_percentage,
    format_years,
)
from pma_analyzer.calculations.inputs import DEFAULT_INPUTS, DEFAULT_RAMP_RATES, RAMP_YEARS


def finite_or_none(value: Optional[float]) -> Optional[float]:
    """Map NaN and +/-inf to None for JSON output."""
    if value is None or not math.isfinite(value):
        return None
    return value


def _form_number(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


class FeasibilityInput(BaseModel):
    """Analysis inputs. Omitted fields take the default parameter set."""

    # Project metadata
    part_number: str = ""
    partner: str = ""
    sales_director: str = ""
    notes: str = ""

    # Cost breakdown (NRE)
    oem_unit_cost: float = DEFAULT_INPUTS.oem_unit_cost
    oem_unit_qty: float = DEFAULT_INPUTS.oem_unit_qty
    materials_inspection_cost: float = DEFAULT_INPUTS.materials_inspection_cost
    labor_hours: float = DEFAULT_INPUTS.labor_hours
    labor_rate: float = DEFAULT_INPUTS.labor_rate
    pma_fee: float = DEFAULT_INPUTS.pma_fee
    der_fee: float = DEFAULT_INPUTS.der_fee

    # Revenue & margin
    sell_price: float = DEFAULT_INPUTS.sell_price
    unit_cost: float = DEFAULT_INPUTS.unit_cost
    annual_qty: float = DEFAULT_INPUTS.annual_qty

    # Ramp & terminal (percent values, e.g. 23 for 23%)
    ramp_rates: List[Optional[float]] = Field(
        default_factory=lambda: list(DEFAULT_RAMP_RATES), max_length=RAMP_YEARS
    )
    terminal_multiple: float = DEFAULT_INPUTS.terminal_multiple
    use_terminal_value: bool = DEFAULT_INPUTS.use_terminal_value
    discount_rate: float = DEFAULT_INPUTS.discount_rate

    # Criteria
    threshold_npv: float = DEFAULT_INPUTS.threshold_npv
    threshold_irr: float = DEFAULT_INPUTS.threshold_irr
    threshold_pbp: float = DEFAULT_INPUTS.threshold_pbp

    def to_parameters(self) -> InputParameters:
        """Convert to the engine's immutable parameter set."""
        return InputParameters(**self.model_dump())

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> "FeasibilityInput":
        """
        Build inputs from HTML form fields (query string).

        Numeric fields that are blank or not a finite number read as 0, like
        the calculator's input boxes. Ramp rates arrive as rr1..rr5. Once the
        form has been submitted, an absent checkbox means "don't use TV".
        """
        data = {}
        for name, model_field in cls.model_fields.items():
            if name not in form:
                continue
            if model_field.annotation is float:
                data[name] = _form_number(form[name])
            elif model_field.annotation is str:
                data[name] = form[name]

        ramp_keys = [f"rr{year}" for year in range(1, RAMP_YEARS + 1)]
        if any(key in form for key in ramp_keys):
            data["ramp_rates"] = [_form_number(form.get(key, "")) for key in ramp_keys]

        if "submitted" in form:
            data["use_terminal_value"] = "use_terminal_value" in form

        return cls(**data)


class CashFlowRow(BaseModel):
    """One line of the cash flow table."""

    year: str
    cash_flow: Optional[float]
    note: str
    cumulative: Optional[float]


class DisplayValues(BaseModel):
    """Pre-formatted strings for the headline figures."""

    nre: str
    annual_margin: str
    terminal_value: str
    npv: str
    irr: str
    payback_period: str


class FeasibilityResponse(BaseModel):
    """Full evaluation result."""

    inputs: FeasibilityInput

    # Intermediate
    oem_investment: Optional[float]
    labor_cost: Optional[float]
    nre: Optional[float]
    annual_revenue: Optional[float]
    unit_margin: Optional[float]
    annual_margin: Optional[float]

    # Projection
    cash_flows: List[Optional[float]]
    year5_cash_flow: Optional[float]
    terminal_value: Optional[float]
    cash_flow_table: List[CashFlowRow]

    # Metrics
    npv: Optional[float]
    irr: Optional[float]
    payback_period: Optional[float]

    # Pass/fail
    pass_npv: bool
    pass_irr: bool
    pass_pbp: bool
    pass_count: int
    status: str
    status_message: str

    display: DisplayValues

    @classmethod
    def from_result(
        cls,
        inputs: FeasibilityInput,
        result: CalculationResult,
        cash_flow_table: List[dict],
    ) -> "FeasibilityResponse":
        return cls(
            inputs=inputs,
            oem_investment=finite_or_none(result.oem_investment),
            labor_cost=finite_or_none(result.labor_cost),
            nre=finite_or_none(result.nre),
            annual_revenue=finite_or_none(result.annual_revenue),
            unit_margin=finite_or_none(result.unit_margin),
            annual_margin=finite_or_none(result.annual_margin),
            cash_flows=[finite_or_none(cf) for cf in result.cash_flows],
            year5_cash_flow=finite_or_none(result.year5_cash_flow),
            terminal_value=finite_or_none(result.terminal_value),
            cash_flow_table=[
                CashFlowRow(
                    year=row["year"],
                    cash_flow=finite_or_none(row["cash_flow"]),
                    note=row["note"],
                    cumulative=finite_or_none(row["cumulative"]),
                )
                for row in cash_flow_table
            ],
            npv=finite_or_none(result.npv),
            irr=finite_or_none(result.irr),
            payback_period=finite_or_none(result.payback_period),
            pass_npv=result.pass_npv,
            pass_irr=result.pass_irr,
            pass_pbp=result.pass_pbp,
            pass_count=result.pass_count,
            status=result.status.value,
            status_message=result.status.message,
            display=DisplayValues(
                nre=format_currency(result.nre),
                annual_margin=format_currency(result.annual_margin),
                terminal_value=format_currency(result.terminal_value),
                npv=format_currency(result.npv),
                irr=format_percentage(result.irr),
                payback_period=format_years(result.payback_period),
            ),
        )


class CashFlowSeriesInput(BaseModel):
    """A bare cash flow series, index 0 = initial investment."""

    cash_flows: List[float] = Field(..., min_length=2)


class NPVInput(CashFlowSeriesInput):
    """Input for NPV calculation."""

    rate: float
    terminal_value: Optional[float] = None


class NPVResponse(BaseModel):
    npv: Optional[float]


class IRRResponse(BaseModel):
    """IRR result; irr is null when no root could be bracketed."""

    irr: Optional[float]
    converged: bool


class PaybackResponse(BaseModel):
    """Payback result; payback_period is null unless recovered."""

    payback_period: Optional[float]
    outcome: str
