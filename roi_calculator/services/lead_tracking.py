"""
Lead tracking.

Every lead-capture submission is stored locally, forwarded to the leads
spreadsheet through a Google Apps Script web app, and announced to the sales
inbox. Forwarding problems are logged but never block the visitor from
reaching the calculator.
"""

import logging
from dataclasses import dataclass
from typing import Dict
from urllib.parse import quote

import httpx
from sqlalchemy.orm import Session

from roi_calculator.config import get_settings
from roi_calculator.db.models import Lead
from roi_calculator.services.email import get_email_service

logger = logging.getLogger(__name__)

MESSAGE_RECEIVED = "Data received successfully."
MESSAGE_NOT_FORWARDED = "Data logged but could not be sent to Google Sheets."


@dataclass
class LeadTrackingResult:
    """Outcome of a lead submission."""

    lead: Lead
    forwarded: bool
    message: str


def sheet_query_params(lead: Lead) -> Dict[str, str]:
    """
    Query parameters understood by the Apps Script web app.

    The script only answers GET requests reliably (POSTs get redirected
    into GETs), so the lead travels in the query string.
    """
    return {
        "firstName": lead.first_name or "",
        "lastName": lead.last_name or "",
        "email": lead.email or "",
        "company": lead.company or "",
        "phone": lead.telephone or "",
    }


def record_lead(
    db: Session,
    first_name: str,
    last_name: str,
    email: str,
    company: str,
    telephone: str,
) -> Lead:
    """Store a submission so it survives a failed forward."""
    lead = Lead(
        first_name=first_name,
        last_name=last_name,
        email=email,
        company=company,
        telephone=telephone,
    )
    db.add(lead)
    db.commit()
    db.refresh(lead)
    return lead


async def forward_to_sheet(lead: Lead, webhook_url: str, timeout: float) -> bool:
    """
    Send a lead to the spreadsheet webhook.

    Returns:
        True if the webhook answered with a success status
    """
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.get(webhook_url, params=sheet_query_params(lead))
    except httpx.HTTPError as e:
        logger.error(f"Error calling Google Apps Script: {str(e)}")
        return False

    if response.is_success:
        return True

    logger.error(
        f"Error from Google Apps Script: {response.status_code} "
        f"{response.reason_phrase} - {response.text}"
    )
    return False


async def track_lead(
    db: Session,
    first_name: str,
    last_name: str,
    email: str,
    company: str,
    telephone: str,
) -> LeadTrackingResult:
    """
    Record, forward and announce a new lead.

    Args:
        db: Database session
        first_name, last_name, email, company, telephone: Form fields

    Returns:
        LeadTrackingResult with the message to show the visitor
    """
    settings = get_settings()

    lead = record_lead(db, first_name, last_name, email, company, telephone)
    logger.info(f"New ROI Calculator Lead: {lead.email} ({lead.company})")

    lead.notification_sent = get_email_service().send_lead_notification(
        first_name=lead.first_name,
        last_name=lead.last_name,
        email=lead.email,
        company=lead.company,
        telephone=lead.telephone,
    )

    if not settings.google_apps_script_url:
        logger.error("Configuration error: GOOGLE_APPS_SCRIPT_URL is not set.")
        db.commit()
        return LeadTrackingResult(
            lead=lead, forwarded=False, message=MESSAGE_NOT_FORWARDED
        )

    lead.forwarded_to_sheet = await forward_to_sheet(
        lead, settings.google_apps_script_url, settings.webhook_timeout_seconds
    )
    db.commit()

    # The visitor always moves on to the calculator once the lead is stored
    return LeadTrackingResult(
        lead=lead, forwarded=lead.forwarded_to_sheet, message=MESSAGE_RECEIVED
    )


def build_demo_request_link(
    first_name: str,
    last_name: str,
    email: str,
    company: str,
    telephone: str,
    total_roi: str,
    net_benefit: str,
) -> str:
    """
    mailto: link that opens a prefilled demo request.

    Args:
        total_roi, net_benefit: Already formatted display values
    """
    settings = get_settings()
    subject = "PowerShops Demo Request"
    body = (
        f"Hi, I'm {first_name} {last_name} from {company}. "
        f"I'd like to schedule a demo of PowerShops.\n\n"
        f"My calculated ROI is {total_roi} with a net benefit of {net_benefit}.\n\n"
        f"Please contact me at {email} or {telephone} to schedule a time."
    )
    return (
        f"mailto:{settings.contact_email}"
        f"?subject={quote(subject, safe='')}&body={quote(body, safe='')}"
    )
