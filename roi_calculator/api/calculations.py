"""
ROI calculation API endpoints.

The calculator front end calls these on every slider change, so they only
run the pure engine and never touch the database.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import Dict, List, Optional

from roi_calculator.api.schemas import AssumptionsInput
from roi_calculator.calculations import formatting, roi

router = APIRouter()


class CashFlowPointResponse(BaseModel):
    """One year of the cumulative cash-flow series."""

    year: str
    cumulative_benefit: float
    cumulative_cost: float
    net_cash_flow: float


class BenefitShare(BaseModel):
    """Benefit component with its share of the total."""

    label: str
    value: float
    percentage: float
    formatted_value: str


class ROIMetrics(BaseModel):
    """Calculated ROI metrics."""

    annual_cost: float
    total_investment: float
    annual_benefit: float
    productivity_gains: float
    turnover_reduction_savings: float
    training_time_savings: float
    total_benefit: float
    net_benefit: float
    total_roi_percent: float
    months_to_break_even: Optional[float] = None
    cash_flow_series: List[CashFlowPointResponse]


class ROIResponse(BaseModel):
    """Metrics plus the display strings the calculator shows."""

    assumptions: AssumptionsInput
    metrics: ROIMetrics
    formatted: Dict[str, str]
    benefit_breakdown: List[BenefitShare]
    productivity_share_percent: int


class AssumptionRange(BaseModel):
    """Slider configuration for one assumption."""

    min: int
    max: int
    step: int


class AssumptionsConfigResponse(BaseModel):
    """Slider ranges, starting values and model constants."""

    ranges: Dict[str, AssumptionRange]
    defaults: AssumptionsInput
    annual_cost_per_employee_by_year: List[int]
    productivity_boost_rate: float
    turnover_reduction_rate: float
    training_hours_saved_per_employee: int
    working_hours_per_year: int


def build_roi_response(inputs: AssumptionsInput) -> ROIResponse:
    """Run the engine and shape its output for the calculator."""
    metrics = roi.compute(inputs.to_assumptions())

    return ROIResponse(
        assumptions=inputs,
        metrics=ROIMetrics(**metrics.to_dict()),
        formatted=formatting.format_metrics(metrics),
        benefit_breakdown=[
            BenefitShare(
                formatted_value=formatting.format_currency(row["value"]), **row
            )
            for row in metrics.benefit_breakdown()
        ],
        productivity_share_percent=metrics.productivity_share_percent,
    )


@router.post("/roi", response_model=ROIResponse)
async def calculate_roi(inputs: AssumptionsInput):
    """Calculate ROI metrics and cash-flow series for a set of assumptions."""
    return build_roi_response(inputs)


@router.get("/assumptions", response_model=AssumptionsConfigResponse)
async def get_assumptions_config():
    """Return slider ranges and the fixed model constants."""
    return AssumptionsConfigResponse(
        ranges={
            name: AssumptionRange(min=low, max=high, step=step)
            for name, (low, high, step) in roi.ASSUMPTION_RANGES.items()
        },
        defaults=AssumptionsInput(),
        annual_cost_per_employee_by_year=list(roi.ANNUAL_COST_PER_EMPLOYEE_BY_YEAR),
        productivity_boost_rate=roi.PRODUCTIVITY_BOOST_RATE,
        turnover_reduction_rate=roi.TURNOVER_REDUCTION_RATE,
        training_hours_saved_per_employee=roi.TRAINING_HOURS_SAVED_PER_EMPLOYEE,
        working_hours_per_year=roi.WORKING_HOURS_PER_YEAR,
    )
