"""
Email service using SendGrid.

Falls back to console logging if SendGrid is not configured.
"""

import html
import logging
from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, Email, To, Content

from roi_calculator.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class EmailService:
    """Email service with SendGrid integration."""

    def __init__(self):
        self.api_key = settings.sendgrid_api_key
        self.from_email = settings.sendgrid_from_email
        self.from_name = settings.sendgrid_from_name
        self.notification_email = settings.lead_notification_email
        self.client = None

        if self.api_key:
            self.client = SendGridAPIClient(self.api_key)

    def _send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
    ) -> bool:
        """
        Send an email.

        Args:
            to_email: Recipient email address
            subject: Email subject
            html_content: HTML email body

        Returns:
            True if sent successfully, False otherwise
        """
        if not self.client:
            logger.info(
                f"[EMAIL - Console Mode]\n"
                f"To: {to_email}\n"
                f"Subject: {subject}\n"
                f"Content:\n{html_content}\n"
            )
            return True

        try:
            message = Mail(
                from_email=Email(self.from_email, self.from_name),
                to_emails=To(to_email),
                subject=subject,
                html_content=Content("text/html", html_content),
            )

            response = self.client.send(message)

            if 200 <= response.status_code < 300:
                logger.info(f"Email sent successfully to {to_email}")
                return True

            logger.error(
                f"Failed to send email: {response.status_code} - {response.body}"
            )
            return False

        except Exception as e:
            logger.error(f"Error sending email: {str(e)}")
            return False

    def send_lead_notification(
        self,
        first_name: str,
        last_name: str,
        email: str,
        company: str,
        telephone: str,
    ) -> bool:
        """
        Tell the sales inbox that someone unlocked the calculator.

        Skipped (returns False) when no notification address is configured.
        """
        if not self.notification_email:
            return False

        name = html.escape(f"{first_name} {last_name}".strip())
        rows = [
            ("Name", name),
            ("Company", html.escape(company)),
            ("Email", html.escape(email)),
            ("Phone", html.escape(telephone)),
        ]
        table_rows = "".join(
            f"<tr><td class=\"label\">{label}</td><td>{value}</td></tr>"
            for label, value in rows
        )

        subject = f"New ROI Calculator Lead: {company or name}"
        html_content = f"""
        <!DOCTYPE html>
        <html>
        <head>
            <style>
                body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #404041; }}
                .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
                h1 {{ color: #AF222A; }}
                .label {{ color: #666; padding-right: 16px; }}
                .footer {{ margin-top: 30px; font-size: 12px; color: #666; }}
            </style>
        </head>
        <body>
            <div class="container">
                <h1>New ROI Calculator Lead</h1>
                <p>A visitor filled out the lead form and unlocked the {settings.app_name}.</p>
                <table>{table_rows}</table>
                <p class="footer">Sent automatically by {settings.app_name}.</p>
            </div>
        </body>
        </html>
        """

        return self._send_email(self.notification_email, subject, html_content)


# Singleton instance
_email_service: Optional[EmailService] = None


def get_email_service() -> EmailService:
    """Get the email service singleton."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
