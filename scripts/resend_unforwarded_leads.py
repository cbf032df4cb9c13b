"""
Re-send leads that never reached the leads spreadsheet.
"""
import asyncio
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from roi_calculator.config import get_settings
from roi_calculator.db.database import SessionLocal, init_db
from roi_calculator.db.models import Lead
from roi_calculator.services.lead_tracking import forward_to_sheet


async def resend(db, webhook_url: str, timeout: float) -> int:
    leads = (
        db.query(Lead)
        .filter(Lead.forwarded_to_sheet.is_(False))
        .order_by(Lead.created_at)
        .all()
    )
    print(f"Unforwarded leads: {len(leads)}")

    sent = 0
    for lead in leads:
        if await forward_to_sheet(lead, webhook_url, timeout):
            lead.forwarded_to_sheet = True
            sent += 1
            print(f"  - {lead.email} ({lead.company}) -> sent")
        else:
            print(f"  - {lead.email} ({lead.company}) -> failed")

    db.commit()
    return sent


def main():
    settings = get_settings()
    if not settings.google_apps_script_url:
        print("GOOGLE_APPS_SCRIPT_URL is not set!")
        return

    init_db()
    db = SessionLocal()

    try:
        sent = asyncio.run(
            resend(db, settings.google_apps_script_url, settings.webhook_timeout_seconds)
        )
        print(f"\nForwarded {sent} leads to Google Sheets.")
    finally:
        db.close()

if __name__ == "__main__":
    main()
