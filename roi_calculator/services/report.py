"""
PDF report export.

Renders the two-page investment analysis report. The report is built from
the same DerivedMetrics and formatting helpers as the live calculator and
never recomputes anything on its own.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from roi_calculator.calculations.formatting import (
    format_currency,
    format_currency_compact,
    format_hours,
    format_months,
    format_number,
    format_percent,
    format_years,
)
from roi_calculator.calculations.roi import Assumptions, DerivedMetrics
from roi_calculator.config import get_settings

REPORT_TITLE = "PowerShops Investment Analysis Report"
REPORT_FILENAME = "PowerShops_ROI_Report.pdf"
NO_INSIGHTS_TEXT = "Insights not generated."

CARMINE = (175, 34, 42)
CRIMSON = (237, 47, 72)
DARK_TEXT = (64, 64, 65)
MEDIUM_TEXT = (110, 110, 112)
LIGHT_GRAY = (241, 241, 242)


@dataclass
class ReportContact:
    """Lead details printed in the client information block."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    company: str = ""
    telephone: str = ""


@dataclass
class ReportContent:
    """Every string that appears in the report, in page order."""

    title: str
    company_name: str
    client_info: List[Tuple[str, str]]
    assumptions: List[Tuple[str, str]]
    annual_cost: str
    executive_summary: List[Tuple[str, str]]
    benefits: List[Tuple[str, str, float]]  # label, value, bar width percent
    total_benefit_label: str
    total_benefit: str
    cash_flow_rows: List[Tuple[str, str, str, str]]
    insights: str
    footer: List[str] = field(default_factory=list)


def format_report_date(report_date: date) -> str:
    """Long US date, e.g. 'October 19, 2026'."""
    return f"{report_date:%B} {report_date.day}, {report_date.year}"


def build_report_content(
    contact: ReportContact,
    assumptions: Assumptions,
    metrics: DerivedMetrics,
    insights: Optional[str] = None,
    report_date: Optional[date] = None,
) -> ReportContent:
    """
    Lay out the report text for a set of metrics.

    Args:
        contact: Lead details
        assumptions: Assumptions the metrics were computed from
        metrics: Metrics shown on the live calculator
        insights: Narrative text, if it was generated
        report_date: Date printed on the report (defaults to today)

    Returns:
        ReportContent ready to be rendered
    """
    settings = get_settings()
    if report_date is None:
        report_date = date.today()

    benefit_values = [
        ("Productivity Gains", metrics.productivity_gains),
        ("Turnover Reduction Savings", metrics.turnover_reduction_savings),
        ("Training Time Savings", metrics.training_time_savings),
    ]
    # Bars are scaled against the largest component
    max_benefit = max([value for _, value in benefit_values] + [1])

    return ReportContent(
        title=REPORT_TITLE,
        company_name=settings.company_name,
        client_info=[
            ("Company:", contact.company),
            ("Contact:", f"{contact.first_name} {contact.last_name}".strip()),
            ("Email:", contact.email),
            ("Phone:", contact.telephone),
            ("Report Date:", format_report_date(report_date)),
            ("Analysis Period:", f"{assumptions.term} Years"),
        ],
        assumptions=[
            ("Number of Employees", format_number(assumptions.employees)),
            ("Average Employee Annual Salary", format_currency(assumptions.salary)),
            ("Annual Employee Training Hours", format_hours(assumptions.training_hours)),
            ("Annual Employee Turnover Rate", format_percent(assumptions.turnover)),
            ("Replacement Cost per Employee", format_currency(assumptions.replace_cost)),
            ("Subscription Term", format_years(assumptions.term)),
        ],
        annual_cost=format_currency(metrics.annual_cost),
        executive_summary=[
            ("Total ROI", format_percent(metrics.total_roi_percent)),
            ("Net Benefit", format_currency_compact(metrics.net_benefit)),
            ("Break-Even", format_months(metrics.months_to_break_even)),
        ],
        benefits=[
            (label, format_currency(value), value / max_benefit * 100)
            for label, value in benefit_values
        ],
        total_benefit_label=f"Total Benefits Over {assumptions.term} Years",
        total_benefit=format_currency(metrics.total_benefit),
        cash_flow_rows=[
            (
                point.year_label,
                format_currency(point.cumulative_benefit),
                format_currency(point.cumulative_cost),
                format_currency(point.net_cash_flow),
            )
            for point in metrics.cash_flow_series
        ],
        insights=insights or NO_INSIGHTS_TEXT,
        footer=[
            settings.company_website,
            f"Contact: {settings.contact_email}",
            f"(c) {report_date.year} PowerShops by {settings.company_name} - All Rights Reserved",
        ],
    )


# Typographic punctuation common in model output, mapped to Latin-1 friendly text
_PUNCTUATION = str.maketrans(
    {
        "—": "-",  # em dash
        "–": "-",  # en dash
        "−": "-",  # minus sign
        "“": '"',
        "”": '"',
        "„": '"',
        "‘": "'",
        "’": "'",
        "‚": "'",
        "•": "-",  # bullet
        "…": "...",
        "\u00a0": " ",  # no-break space
        "\u2009": " ",  # thin space
        "\u202f": " ",  # narrow no-break space
    }
)


def _pdf_text(text: str) -> str:
    """Core PDF fonts only cover Latin-1."""
    text = text.translate(_PUNCTUATION)
    return text.encode("latin-1", "replace").decode("latin-1")


class ReportPDF(FPDF):
    """A4 report with the brand heading and label/value grid helpers."""

    def heading(self, text: str):
        self.set_font("Helvetica", "B", 14)
        self.set_text_color(*CARMINE)
        self.cell(0, 10, _pdf_text(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(2)

    def label_grid(self, rows: List[Tuple[str, str]]):
        """Two-column grid of small labels over bold values."""
        column_width = self.epw / 2
        for index in range(0, len(rows), 2):
            y = self.get_y()
            for column, (label, value) in enumerate(rows[index:index + 2]):
                x = self.l_margin + column * column_width
                self.set_xy(x, y)
                self.set_font("Helvetica", "", 9)
                self.set_text_color(*MEDIUM_TEXT)
                self.cell(column_width, 5, _pdf_text(label))
                self.set_xy(x, y + 5)
                self.set_font("Helvetica", "B", 11)
                self.set_text_color(*DARK_TEXT)
                self.cell(column_width, 6, _pdf_text(value))
            self.set_xy(self.l_margin, y + 14)


def _render_first_page(pdf: ReportPDF, content: ReportContent):
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 26)
    pdf.set_text_color(*CARMINE)
    pdf.cell(0, 12, _pdf_text(content.company_name), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_text_color(*DARK_TEXT)
    pdf.set_font("Helvetica", "B", 20)
    pdf.cell(0, 12, _pdf_text(content.title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(6)

    pdf.heading("Client Information")
    pdf.label_grid(content.client_info)
    pdf.ln(4)

    pdf.heading("Analysis Assumptions")
    pdf.label_grid(content.assumptions)

    y = pdf.get_y() + 2
    pdf.set_fill_color(*LIGHT_GRAY)
    pdf.rect(pdf.l_margin, y, pdf.epw, 26, style="F")
    pdf.set_xy(pdf.l_margin + 4, y + 3)
    pdf.set_font("Helvetica", "B", 11)
    pdf.set_text_color(*DARK_TEXT)
    pdf.cell(0, 6, "PowerShops Annual Cost", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_x(pdf.l_margin + 4)
    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 8, _pdf_text(content.annual_cost), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_x(pdf.l_margin + 4)
    pdf.set_font("Helvetica", "", 8)
    pdf.set_text_color(*MEDIUM_TEXT)
    pdf.cell(0, 5, "*Discounts apply for multi-year terms.", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_y(y + 32)

    pdf.heading("Executive Summary")
    y = pdf.get_y()
    column_width = pdf.epw / len(content.executive_summary)
    pdf.rect(pdf.l_margin, y, pdf.epw, 30, style="F")
    for column, (label, value) in enumerate(content.executive_summary):
        x = pdf.l_margin + column * column_width
        pdf.set_xy(x, y + 5)
        pdf.set_font("Helvetica", "B", 10)
        pdf.set_text_color(*DARK_TEXT)
        pdf.cell(column_width, 6, label.upper(), align="C")
        pdf.set_xy(x, y + 13)
        pdf.set_font("Helvetica", "B", 22)
        pdf.set_text_color(*CRIMSON)
        pdf.cell(column_width, 12, _pdf_text(value), align="C")
    pdf.set_y(y + 36)


def _render_second_page(pdf: ReportPDF, content: ReportContent):
    pdf.add_page()

    pdf.heading("Benefit Analysis")
    for label, value, percentage in content.benefits:
        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(*DARK_TEXT)
        pdf.cell(pdf.epw / 2, 6, _pdf_text(label))
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(pdf.epw / 2, 6, _pdf_text(value), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        y = pdf.get_y()
        pdf.set_fill_color(*LIGHT_GRAY)
        pdf.rect(pdf.l_margin, y, pdf.epw, 3, style="F")
        if percentage > 0:
            pdf.set_fill_color(*CRIMSON)
            pdf.rect(pdf.l_margin, y, pdf.epw * percentage / 100, 3, style="F")
        pdf.set_y(y + 7)

    y = pdf.get_y() + 2
    pdf.set_fill_color(*CRIMSON)
    pdf.rect(pdf.l_margin, y, pdf.epw, 14, style="F")
    pdf.set_xy(pdf.l_margin + 4, y + 4)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font("Helvetica", "B", 11)
    pdf.cell(pdf.epw / 2, 6, _pdf_text(content.total_benefit_label))
    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(pdf.epw / 2 - 8, 6, _pdf_text(content.total_benefit), align="R")
    pdf.set_y(y + 22)

    pdf.heading("Cash Flow Analysis")
    widths = [pdf.epw * share for share in (0.16, 0.28, 0.28, 0.28)]
    headers = ("Year", "Cumulative Benefits", "Cumulative Costs", "Net Cash Flow")
    pdf.set_font("Helvetica", "B", 9)
    pdf.set_text_color(*DARK_TEXT)
    pdf.set_fill_color(*LIGHT_GRAY)
    for width, header in zip(widths, headers):
        pdf.cell(width, 7, header, border="B", fill=True, align="C")
    pdf.ln(7)
    pdf.set_font("Helvetica", "", 9)
    for row in content.cash_flow_rows:
        for index, (width, value) in enumerate(zip(widths, row)):
            pdf.cell(width, 6, _pdf_text(value), align="L" if index == 0 else "R")
        pdf.ln(6)
    pdf.ln(6)

    pdf.heading("AI-Powered Investment Insights")
    pdf.set_font("Helvetica", "", 10)
    pdf.set_text_color(*DARK_TEXT)
    pdf.multi_cell(
        0,
        5,
        _pdf_text(content.insights),
        markdown=True,
        new_x=XPos.LMARGIN,
        new_y=YPos.NEXT,
    )
    pdf.ln(8)

    pdf.set_draw_color(*LIGHT_GRAY)
    pdf.line(pdf.l_margin, pdf.get_y(), pdf.l_margin + pdf.epw, pdf.get_y())
    pdf.ln(3)
    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(*MEDIUM_TEXT)
    website, contact, copyright_line = content.footer
    pdf.cell(pdf.epw / 2, 5, _pdf_text(website))
    pdf.cell(pdf.epw / 2, 5, _pdf_text(contact), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", "", 7)
    pdf.cell(0, 5, _pdf_text(copyright_line), align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def render_report_pdf(content: ReportContent) -> bytes:
    """Render report content to PDF bytes."""
    pdf = ReportPDF(orientation="P", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.set_title(content.title)
    pdf.set_author(content.company_name)

    _render_first_page(pdf, content)
    _render_second_page(pdf, content)

    return bytes(pdf.output())
