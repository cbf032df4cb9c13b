"""
Report export API endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import Response
from pydantic import BaseModel

from roi_calculator.api.schemas import AssumptionsInput, LeadInput
from roi_calculator.calculations import roi
from roi_calculator.services import report

logger = logging.getLogger(__name__)

router = APIRouter()


class ReportInput(BaseModel):
    """Everything shown on the report at export time."""

    lead: LeadInput
    assumptions: AssumptionsInput
    insights: Optional[str] = None


def build_report(inputs: ReportInput) -> report.ReportContent:
    """Compute metrics from the current assumptions and lay out the report."""
    assumptions = inputs.assumptions.to_assumptions()
    lead = inputs.lead
    contact = report.ReportContact(
        first_name=lead.first_name,
        last_name=lead.last_name,
        email=lead.business_email,
        company=lead.company,
        telephone=lead.telephone,
    )
    return report.build_report_content(
        contact, assumptions, roi.compute(assumptions), insights=inputs.insights
    )


@router.post("/pdf")
async def export_pdf(inputs: ReportInput):
    """Download the investment analysis report as a PDF."""
    pdf_bytes = report.render_report_pdf(build_report(inputs))
    logger.info(f"Generated ROI report for {inputs.lead.company or 'unknown company'}")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{report.REPORT_FILENAME}"'
        },
    )


@router.post("/content", response_model=report.ReportContent)
async def report_content(inputs: ReportInput):
    """Return the report text without rendering it, for preview."""
    return build_report(inputs)
