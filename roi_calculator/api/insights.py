"""
AI insights API endpoint.

Failures here only affect the insights panel; the calculator endpoints keep
working without a Gemini key.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from roi_calculator.api.schemas import AssumptionsInput
from roi_calculator.calculations import roi
from roi_calculator.services import insights as insights_service

router = APIRouter()


class InsightsResponse(BaseModel):
    """Narrative summary of the ROI results."""

    insights: str


@router.post("", response_model=InsightsResponse)
async def generate_insights(inputs: AssumptionsInput):
    """Generate a narrative summary for a set of assumptions."""
    assumptions = inputs.to_assumptions()
    metrics = roi.compute(assumptions)

    try:
        text = await insights_service.generate_insights(assumptions, metrics)
    except insights_service.InsightsError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return InsightsResponse(insights=text)
