"""
Financial Calculation Engine

Pure functions for PMA part feasibility: NRE build-up, cash flow
projection, NPV, IRR, payback period and the GREEN/YELLOW/RED status.
"""

from pma_analyzer.calculations import cashflow, costs, formatting, irr, payback
from pma_analyzer.calculations.engine import CalculationResult, Status, classify, evaluate
from pma_analyzer.calculations.inputs import DEFAULT_INPUTS, InputParameters

__all__ = [
    "cashflow",
    "costs",
    "formatting",
    "irr",
    "payback",
    "CalculationResult",
    "InputParameters",
    "DEFAULT_INPUTS",
    "Status",
    "classify",
    "evaluate",
]
