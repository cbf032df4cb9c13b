"""
Lead-capture API endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from roi_calculator.api.schemas import AssumptionsInput, LeadInput
from roi_calculator.calculations import formatting, roi
from roi_calculator.db.database import get_db
from roi_calculator.services import lead_tracking

logger = logging.getLogger(__name__)

router = APIRouter()


class LeadResponse(BaseModel):
    """Response to a lead submission."""

    message: str
    lead_id: str
    forwarded: bool


class DemoRequestInput(BaseModel):
    """Lead details and the assumptions behind the quoted ROI."""

    lead: LeadInput
    assumptions: AssumptionsInput


class DemoRequestResponse(BaseModel):
    """Prefilled demo request link."""

    mailto: str


@router.post("", response_model=LeadResponse)
async def submit_lead(inputs: LeadInput, db: Session = Depends(get_db)):
    """Store a lead and forward it to the leads spreadsheet."""
    try:
        result = await lead_tracking.track_lead(
            db,
            first_name=inputs.first_name,
            last_name=inputs.last_name,
            email=inputs.business_email,
            company=inputs.company,
            telephone=inputs.telephone,
        )
    except Exception as e:
        db.rollback()
        logger.error(f"Error processing submission: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail="There was an error processing your submission.",
        )

    return LeadResponse(
        message=result.message,
        lead_id=result.lead.id,
        forwarded=result.forwarded,
    )


@router.post("/demo-request", response_model=DemoRequestResponse)
async def demo_request(inputs: DemoRequestInput):
    """Build the mailto: link for the 'Schedule a demo' button."""
    metrics = roi.compute(inputs.assumptions.to_assumptions())
    lead = inputs.lead

    return DemoRequestResponse(
        mailto=lead_tracking.build_demo_request_link(
            first_name=lead.first_name,
            last_name=lead.last_name,
            email=lead.business_email,
            company=lead.company,
            telephone=lead.telephone,
            total_roi=formatting.format_percent(metrics.total_roi_percent),
            net_benefit=formatting.format_currency(metrics.net_benefit),
        )
    )
