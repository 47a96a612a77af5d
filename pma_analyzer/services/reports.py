"""
Report generation (CSV and PDF).

Both formats are rendered from the same list of report sections so the
exported figures always agree with each other and with the page.
"""

import csv
import io
import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from pma_analyzer.calculations import CalculationResult, InputParameters
from pma_analyzer.calculations.cashflow import cumulative_cash_flows, ramp_fraction
from pma_analyzer.calculations.formatting import (
    PLACEHOLDER,
    format_currency,
    format_percentage,
    format_years,
)
from pma_analyzer.calculations.inputs import RAMP_YEARS
from pma_analyzer.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

NOT_SPECIFIED = "Not specified"


@dataclass
class ReportSection:
    """A titled table in the exported report."""

    title: str
    header: List[str]
    rows: List[List[str]] = field(default_factory=list)


def report_filename(extension: str, export_date: Optional[date] = None) -> str:
    """Download filename, e.g. pma_financial_analysis_2025-01-31.csv."""
    export_date = export_date or date.today()
    return f"pma_financial_analysis_{export_date.isoformat()}.{extension}"


def build_cash_flow_rows(params: InputParameters, result: CalculationResult) -> List[dict]:
    """
    Build the year-by-year cash flow table.

    Returns one dict per row with keys year, cash_flow, note, cumulative.
    A "5 (TV)" row is appended when terminal value is included in NPV.
    """
    cumulative = cumulative_cash_flows(result.cash_flows)
    rows = [
        {
            "year": "0",
            "cash_flow": result.cash_flows[0],
            "note": "Initial NRE (outflow)",
            "cumulative": cumulative[0],
        }
    ]
    for year in range(1, len(result.cash_flows)):
        rows.append(
            {
                "year": str(year),
                "cash_flow": result.cash_flows[year],
                "note": f"Y{year} = EstMargin × RR{year}",
                "cumulative": cumulative[year],
            }
        )

    if params.use_terminal_value:
        rows.append(
            {
                "year": "5 (TV)",
                "cash_flow": result.terminal_value,
                "note": "Terminal Value (Y5 × Multiple)",
                "cumulative": cumulative[-1] + result.terminal_value,
            }
        )
    return rows


def _pass_fail(passed: bool) -> str:
    return "PASS" if passed else "FAIL"


def _number(value: float) -> str:
    if not math.isfinite(value):
        return PLACEHOLDER
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.6g}"


def build_report_sections(
    params: InputParameters, result: CalculationResult
) -> List[ReportSection]:
    """Assemble every report section, values already formatted."""
    metadata = ReportSection(
        title="PROJECT METADATA",
        header=["Field", "Value"],
        rows=[
            ["OEM PN", params.part_number.strip() or NOT_SPECIFIED],
            ["Development Partner", params.partner.strip() or NOT_SPECIFIED],
            ["Sales Director", params.sales_director.strip() or NOT_SPECIFIED],
        ],
    )

    costs = ReportSection(
        title="COST BREAKDOWN INPUTS (NRE)",
        header=["Parameter", "Value", "Calculated Result"],
        rows=[
            ["OEM Parts Cost (per unit)", format_currency(params.oem_unit_cost), ""],
            ["OEM Parts Qty", _number(params.oem_unit_qty), ""],
            ["OEM Parts Investment", "", format_currency(result.oem_investment)],
            ["Materials Inspection", format_currency(params.materials_inspection_cost), ""],
            ["In-house Labor Hours", _number(params.labor_hours), ""],
            ["Labor Rate ($/hr)", format_currency(params.labor_rate), ""],
            ["Labor Cost Total", "", format_currency(result.labor_cost)],
            ["PMA Application Fee", format_currency(params.pma_fee), ""],
            ["DER Fee", format_currency(params.der_fee), ""],
            ["TOTAL NRE COST", "", format_currency(result.nre)],
        ],
    )

    revenue = ReportSection(
        title="REVENUE & MARGIN INPUTS",
        header=["Parameter", "Value", "Calculated Result"],
        rows=[
            ["PMA Part SP (sell price)", format_currency(params.sell_price), ""],
            ["PMA Part CP (cost)", format_currency(params.unit_cost), ""],
            ["Unit Margin", "", format_currency(result.unit_margin)],
            ["Est Sales Qty (annual)", _number(params.annual_qty), ""],
            ["Est Annual Sales", "", format_currency(result.annual_revenue)],
            ["Est Annual Margin Dollars", "", format_currency(result.annual_margin)],
        ],
    )

    ramp = ReportSection(
        title="RAMP & TERMINAL INPUTS",
        header=["Parameter", "Value", "Notes"],
    )
    for year in range(1, RAMP_YEARS + 1):
        rate = ramp_fraction(params.ramp_rates, year) * 100
        ramp.rows.append([f"RR Y{year} (%)", f"{_number(rate)}%", f"Ramp Rate Year {year}"])
    ramp.rows.extend(
        [
            ["Y5 Cash Flow", "", format_currency(result.year5_cash_flow)],
            ["Terminal Multiple × Y5 CF", _number(params.terminal_multiple), ""],
            ["Terminal Value", "", format_currency(result.terminal_value)],
            ["Use Terminal Value in NPV", "Yes" if params.use_terminal_value else "No", ""],
            ["Discount Rate (%)", f"{_number(params.discount_rate)}%", "WACC or required return"],
        ]
    )

    analysis = ReportSection(
        title="ANALYSIS RESULTS",
        header=["Metric", "Result", "Threshold", "Status"],
        rows=[
            [
                "NPV (with TV if enabled)",
                format_currency(result.npv),
                format_currency(params.threshold_npv),
                _pass_fail(result.pass_npv),
            ],
            [
                "IRR (5y, no TV)",
                format_percentage(result.irr),
                f"{_number(params.threshold_irr)}%",
                _pass_fail(result.pass_irr),
            ],
            [
                "Payback Period",
                format_years(result.payback_period),
                f"{_number(params.threshold_pbp)} years",
                _pass_fail(result.pass_pbp),
            ],
            [
                "Overall Status",
                result.status.value,
                f"{result.pass_count}/3 criteria passed",
                result.status.message,
            ],
        ],
    )

    cash_flow = ReportSection(
        title="CASH FLOW ANALYSIS",
        header=["Year", "Cash Flow", "Calculation Notes", "Cumulative"],
        rows=[
            [
                row["year"],
                format_currency(row["cash_flow"]),
                row["note"],
                format_currency(row["cumulative"]),
            ]
            for row in build_cash_flow_rows(params, result)
        ],
    )

    sections = [metadata, costs, revenue, ramp, analysis, cash_flow]
    if params.notes.strip():
        sections.append(
            ReportSection(title="ANALYSIS NOTES", header=[], rows=[[params.notes.strip()]])
        )
    return sections


def _report_heading() -> str:
    return f"{settings.company_name} {settings.report_title}"


def build_csv_report(
    params: InputParameters,
    result: CalculationResult,
    export_date: Optional[date] = None,
) -> str:
    """
    Render the full analysis as CSV text.

    Every cell is quoted; sections are separated by a blank row.
    """
    export_date = export_date or date.today()
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")

    writer.writerow([_report_heading()])
    writer.writerow(["Export Date", export_date.isoformat()])
    writer.writerow([])

    for section in build_report_sections(params, result):
        writer.writerow([section.title])
        if section.header:
            writer.writerow(section.header)
        writer.writerows(section.rows)
        writer.writerow([])

    logger.info(f"CSV report generated ({result.status.value})")
    return buf.getvalue()


def _pdf_text(text: str) -> str:
    # Core PDF fonts are latin-1 only
    return text.replace(PLACEHOLDER, "-").encode("latin-1", "replace").decode("latin-1")


class AnalysisPDF(FPDF):
    """A4 portrait report with a running footer."""

    def footer(self):
        self.set_y(-15)
        self.set_font("helvetica", "I", 8)
        self.cell(0, 10, f"Page {self.page_no()}", align="C")

    def column_widths(self, section: ReportSection) -> List[float]:
        """
        Size each column to its widest cell, then stretch to the page width.

        Columns that would not fit even at their widest are scaled down and
        left to wrap inside the table.
        """
        padding = 2 * self.c_margin + 1
        self.set_font("helvetica", "B", 8)
        widths = [self.get_string_width(_pdf_text(h)) + padding for h in section.header]
        self.set_font("helvetica", "", 8)
        for row in section.rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], self.get_string_width(_pdf_text(cell)) + padding)

        total = sum(widths)
        if total > self.epw:
            return [w * self.epw / total for w in widths]
        spare = (self.epw - total) / len(widths)
        return [w + spare for w in widths]

    def section(self, section: ReportSection):
        self.set_font("helvetica", "B", 11)
        self.cell(0, 8, _pdf_text(section.title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        if not section.header:
            self.set_font("helvetica", "", 9)
            for row in section.rows:
                self.multi_cell(0, 5, _pdf_text(" ".join(row)), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            self.ln(4)
            return

        widths = self.column_widths(section)
        self.set_font("helvetica", "", 8)
        with self.table(col_widths=tuple(widths), text_align="LEFT", line_height=6) as table:
            for cells in [section.header] + section.rows:
                row = table.row()
                for cell in cells:
                    row.cell(_pdf_text(cell))
        self.ln(4)


def build_pdf_report(
    params: InputParameters,
    result: CalculationResult,
    export_date: Optional[date] = None,
) -> bytes:
    """Render the full analysis as a PDF document."""
    export_date = export_date or date.today()

    pdf = AnalysisPDF(orientation="P", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    pdf.set_font("helvetica", "B", 16)
    pdf.cell(0, 10, _pdf_text(_report_heading()), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("helvetica", "", 10)
    pdf.cell(0, 6, f"Export Date: {export_date.isoformat()}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.cell(
        0,
        6,
        _pdf_text(f"Status: {result.status.value} - {result.status.message}"),
        new_x=XPos.LMARGIN,
        new_y=YPos.NEXT,
    )
    pdf.ln(4)

    for section in build_report_sections(params, result):
        pdf.section(section)

    logger.info(f"PDF report generated ({result.status.value}), {pdf.page_no()} page(s)")
    return bytes(pdf.output())
