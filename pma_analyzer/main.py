"""
Main FastAPI application entry point.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from pma_analyzer import __version__
from pma_analyzer.api import router as api_router
from pma_analyzer.api.exports import csv_response, pdf_response
from pma_analyzer.api.schemas import FeasibilityInput
from pma_analyzer.calculations import evaluate
from pma_analyzer.calculations.cashflow import ramp_fraction
from pma_analyzer.calculations.inputs import RAMP_YEARS
from pma_analyzer.calculations.formatting import format_currency, format_percentage, format_years
from pma_analyzer.config import get_settings
from pma_analyzer.services.reports import build_cash_flow_rows

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

UI_DIR = Path(__file__).resolve().parent / "ui"

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Financial feasibility calculator for PMA parts development",
    version=__version__,
    debug=settings.debug,
)

# Mount static files
app.mount("/static", StaticFiles(directory=UI_DIR / "static"), name="static")

# Set up templates
templates = Jinja2Templates(directory=UI_DIR / "templates")
templates.env.filters["currency"] = format_currency
templates.env.filters["percentage"] = format_percentage
templates.env.filters["years"] = format_years

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/", response_class=HTMLResponse)
async def home(request: Request):
    """Render the calculator page; query parameters override the defaults."""
    inputs = FeasibilityInput.from_form(request.query_params)
    params = inputs.to_parameters()
    result = evaluate(params)

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": settings.app_name,
            "company_name": settings.company_name,
            "inputs": params,
            "ramp_percentages": [
                ramp_fraction(params.ramp_rates, year) * 100 for year in range(1, RAMP_YEARS + 1)
            ],
            "result": result,
            "cash_flow_rows": build_cash_flow_rows(params, result),
            "query": request.url.query,
        },
    )


@app.get("/report.csv")
async def report_csv(request: Request):
    """Download the CSV report for the page's current inputs."""
    return csv_response(FeasibilityInput.from_form(request.query_params).to_parameters())


@app.get("/report.pdf")
async def report_pdf(request: Request):
    """Download the PDF report for the page's current inputs."""
    return pdf_response(FeasibilityInput.from_form(request.query_params).to_parameters())


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": __version__}
