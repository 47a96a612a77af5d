"""
Report export endpoints (CSV and PDF downloads).
"""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from pma_analyzer.api.schemas import FeasibilityInput
from pma_analyzer.calculations import InputParameters, evaluate
from pma_analyzer.services.reports import build_csv_report, build_pdf_report, report_filename

logger = logging.getLogger(__name__)

router = APIRouter()


def _attachment(content, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def csv_response(params: InputParameters) -> Response:
    """Evaluate and return the CSV report as a download."""
    result = evaluate(params)
    return _attachment(
        build_csv_report(params, result), "text/csv; charset=utf-8", report_filename("csv")
    )


def pdf_response(params: InputParameters) -> Response:
    """Evaluate and return the PDF report as a download."""
    result = evaluate(params)
    try:
        content = build_pdf_report(params, result)
    except Exception as e:
        logger.error(f"PDF export failed: {str(e)}")
        raise HTTPException(status_code=500, detail="PDF generation failed")
    return _attachment(content, "application/pdf", report_filename("pdf"))


@router.post("/csv")
async def export_csv(inputs: FeasibilityInput):
    """Download the full analysis as CSV."""
    return csv_response(inputs.to_parameters())


@router.post("/pdf")
async def export_pdf(inputs: FeasibilityInput):
    """Download the full analysis as PDF."""
    return pdf_response(inputs.to_parameters())
