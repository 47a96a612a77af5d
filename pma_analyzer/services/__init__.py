"""
Application services module.
"""

from pma_analyzer.services.reports import (
    build_cash_flow_rows,
    build_csv_report,
    build_pdf_report,
    report_filename,
)

__all__ = ["build_cash_flow_rows", "build_csv_report", "build_pdf_report", "report_filename"]
