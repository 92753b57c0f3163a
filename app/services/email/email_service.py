"""
Email Service for sending transactional emails over SMTP
"""

import asyncio
import logging
import smtplib
import ssl
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr
from typing import Optional

from app.core.config import settings

logger = logging.getLogger(__name__)

class EmailService:
    """Sends HTML emails. Never raises: delivery problems are logged and reported as False."""

    def __init__(self, smtp_server: Optional[str], smtp_port: int, smtp_username: Optional[str],
                 smtp_password: Optional[str], from_email: Optional[str],
                 from_name: Optional[str] = None, smtp_use_tls: bool = True):
        self.smtp_server = smtp_server
        self.smtp_port = smtp_port
        self.smtp_username = smtp_username
        self.smtp_password = smtp_password
        self.smtp_use_tls = smtp_use_tls
        self.from_email = from_email
        self.from_name = from_name

    @classmethod
    def from_settings(cls) -> "EmailService":
        return cls(
            smtp_server=settings.smtp_server,
            smtp_port=settings.smtp_port,
            smtp_username=settings.smtp_username,
            smtp_password=settings.smtp_password,
            from_email=settings.from_email or settings.smtp_username,
            from_name=settings.from_name,
            smtp_use_tls=settings.smtp_use_tls,
        )

    @property
    def is_configured(self) -> bool:
        return all([self.smtp_server, self.smtp_username, self.smtp_password, self.from_email])

    async def send_email(self, to_email: str, subject: str, html_content: str, text_content: str = None) -> bool:
        """Send an email without blocking the event loop"""
        try:
            return await asyncio.to_thread(self._send_email_sync, to_email, subject, html_content, text_content)
        except Exception as e:
            logger.error(f"Failed to send email to {to_email}: {str(e)}")
            return False

    def _send_email_sync(self, to_email: str, subject: str, html_content: str, text_content: str = None) -> bool:
        """Synchronous email sending (run in a worker thread)"""
        try:
            if not self.is_configured:
                logger.error("Email configuration incomplete")
                return False

            # Create message
            msg = MIMEMultipart('alternative')
            msg['Subject'] = subject
            msg['From'] = formataddr((self.from_name, self.from_email)) if self.from_name else self.from_email
            msg['To'] = to_email

            # Add text and HTML parts
            if text_content:
                msg.attach(MIMEText(text_content, 'plain'))
            msg.attach(MIMEText(html_content, 'html'))

            # Create SMTP session
            context = ssl.create_default_context()
            with smtplib.SMTP(self.smtp_server, self.smtp_port) as server:
                if self.smtp_use_tls:
                    server.starttls(context=context)
                server.login(self.smtp_username, self.smtp_password)
                server.send_message(msg)

            logger.info(f"Email sent successfully to {to_email}")
            return True

        except Exception as e:
            logger.error(f"Failed to send email to {to_email}: {str(e)}")
            return False


def get_email_service() -> EmailService:
    """FastAPI dependency providing the SMTP email service"""
    return EmailService.from_settings()
