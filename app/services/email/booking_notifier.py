"""
Booking notification emails sent to mentees
"""

import logging
from datetime import datetime
from html import escape
from typing import Any, Dict, Optional

from app.core.config import settings
from app.services.email.email_service import EmailService

logger = logging.getLogger(__name__)

_STYLE = """
    body { font-family: Arial, sans-serif; color: #333333; line-height: 1.6; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; border: 1px solid #eeeeee;
                 border-radius: 8px; background-color: #f9f9f9; }
    .header { font-size: 24px; font-weight: bold; color: #2E86C1; margin-bottom: 10px; }
    .content { font-size: 16px; margin-bottom: 20px; }
    .footer { font-size: 14px; color: #888888; border-top: 1px solid #dddddd; padding-top: 10px;
              text-align: center; }
"""


def _format_date(value: Any) -> str:
    if isinstance(value, datetime):
        return value.strftime("%d %B %Y")
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace('Z', '+00:00')).strftime("%d %B %Y")
        except ValueError:
            return value
    return "To be scheduled"


class BookingNotifier:
    """Renders booking emails and hands them to an EmailService.

    Notification is best effort: every failure is logged and reported as False,
    never raised to the caller.
    """

    def __init__(self, email_service: EmailService, support_email: Optional[str] = None):
        self.email_service = email_service
        self.support_email = support_email or settings.support_email

    def _wrap(self, header: str, body: str) -> str:
        return f"""
        <!DOCTYPE html>
        <html>
        <head><style>{_STYLE}</style></head>
        <body>
            <div class="container">
                <div class="header">{header}</div>
                <div class="content">{body}</div>
                <div class="footer">
                    {escape(settings.from_name)} &bull; Empowering futures through guidance<br>
                    <a href="mailto:{escape(self.support_email)}">{escape(self.support_email)}</a>
                </div>
            </div>
        </body>
        </html>
        """

    async def send_booking_accepted(self, booking: Dict[str, Any], mentor_name: Optional[str]) -> bool:
        """Tell the mentee that a mentor accepted their booking"""
        to_email = booking.get("mentee_email")
        try:
            body = f"""
                Dear {escape(booking.get("mentee_name") or "there")},<br><br>
                We are pleased to inform you that your mentorship booking with
                <strong>{escape(mentor_name or "your mentor")}</strong> has been accepted.<br><br>
                <strong>Booking Details:</strong><br>
                - Date: {_format_date(booking.get("date"))}<br>
                - Time: {escape(str(booking.get("time") or "To be scheduled"))}<br>
                - Duration: {booking.get("duration")} minutes<br>
                - Topic: {escape(str(booking.get("topic") or ""))}<br><br>
                Please be ready and make sure to attend the session on time.<br><br>
                If you have any questions or need to reschedule, feel free to contact us.
            """
            html_content = self._wrap("Mentorship Booking Confirmed", body)
            sent = await self.email_service.send_email(
                to_email, "Your Mentorship Booking Has Been Accepted", html_content
            )
            if not sent:
                logger.error(f"Acceptance email for booking {booking.get('id')} was not delivered")
            return sent
        except Exception as e:
            logger.error(f"Error sending acceptance email for booking {booking.get('id')}: {e}")
            return False

    async def send_booking_rejected(self, booking: Dict[str, Any]) -> bool:
        """Tell the mentee that their booking request was declined"""
        to_email = booking.get("mentee_email")
        try:
            body = f"""
                Dear {escape(booking.get("mentee_name") or "there")},<br><br>
                Unfortunately your mentorship booking request on
                <strong>{escape(str(booking.get("topic") or ""))}</strong> could not be accepted.<br><br>
                You are welcome to submit a new request at any time from
                <a href="{escape(settings.frontend_url)}">your dashboard</a>.
            """
            html_content = self._wrap("Mentorship Booking Update", body)
            sent = await self.email_service.send_email(
                to_email, "Update on Your Mentorship Booking", html_content
            )
            if not sent:
                logger.error(f"Rejection email for booking {booking.get('id')} was not delivered")
            return sent
        except Exception as e:
            logger.error(f"Error sending rejection email for booking {booking.get('id')}: {e}")
            return False
