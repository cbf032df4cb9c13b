"""
API routes for the ROI calculator.
"""

from fastapi import APIRouter

from roi_calculator.api import calculations, insights, leads, reports

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(leads.router, prefix="/leads", tags=["leads"])
router.include_router(insights.router, prefix="/insights", tags=["insights"])
router.include_router(reports.router, prefix="/reports", tags=["reports"])
