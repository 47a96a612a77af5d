"""
Financial calculation API endpoints.

These endpoints accept inputs and return calculated results.
The page and the exports call the same engine, so figures always agree.
"""

import logging
import math

from fastapi import APIRouter

from pma_analyzer.api.schemas import (
    CashFlowSeriesInput,
    FeasibilityInput,
    FeasibilityResponse,
    IRRResponse,
    NPVInput,
    NPVResponse,
    PaybackResponse,
    finite_or_none,
)
from pma_analyzer.calculations import evaluate, irr, payback
from pma_analyzer.services.reports import build_cash_flow_rows

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/defaults", response_model=FeasibilityInput)
async def get_defaults():
    """Return the default input set."""
    return FeasibilityInput()


@router.post("/feasibility", response_model=FeasibilityResponse)
async def calculate_feasibility(inputs: FeasibilityInput):
    """Evaluate NPV, IRR and payback against the thresholds."""
    params = inputs.to_parameters()
    result = evaluate(params)

    logger.info(
        f"Feasibility evaluated: status={result.status.value} "
        f"passes={result.pass_count}/3 part={params.part_number or '-'}"
    )

    return FeasibilityResponse.from_result(
        inputs, result, build_cash_flow_rows(params, result)
    )


@router.post("/npv", response_model=NPVResponse)
async def calculate_npv_endpoint(inputs: NPVInput):
    """Calculate NPV for given cash flows at a decimal rate."""
    npv = irr.calculate_npv(inputs.rate, inputs.cash_flows, inputs.terminal_value)
    return NPVResponse(npv=finite_or_none(npv))


@router.post("/irr", response_model=IRRResponse)
async def calculate_irr_endpoint(inputs: CashFlowSeriesInput):
    """Calculate IRR for given cash flows."""
    irr_val = irr.calculate_irr(inputs.cash_flows)
    return IRRResponse(irr=finite_or_none(irr_val), converged=math.isfinite(irr_val))


@router.post("/payback", response_model=PaybackResponse)
async def calculate_payback_endpoint(inputs: CashFlowSeriesInput):
    """Calculate payback period for given cash flows."""
    pbp = payback.calculate_payback(inputs.cash_flows)

    if math.isnan(pbp):
        outcome = "undefined"
    elif math.isinf(pbp):
        outcome = "not_recovered"
    else:
        outcome = "recovered"

    return PaybackResponse(payback_period=finite_or_none(pbp), outcome=outcome)
