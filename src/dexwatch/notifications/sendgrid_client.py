"""
SendGrid Email Notification Sink

Sends plain text alerts by email. Supports a mock mode that records emails
instead of sending them.
"""

import os
import logging
import asyncio
from typing import Dict, Any, List, Optional
from datetime import datetime, timezone

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail
from python_http_client.exceptions import HTTPError

from .base import NotificationSink

logger = logging.getLogger(__name__)


class MockSendGridClient:
    """
    Mock SendGrid client for testing without sending real emails.

    Logs all email attempts instead of actually sending them.
    """

    status_code = 202

    def __init__(self):
        self.sent_emails: List[Dict[str, Any]] = []
        logger.info("Initialized MockSendGridClient (no real emails will be sent)")

    def send(self, message: Mail) -> 'MockSendGridClient':
        body = message.get()
        email_data = {
            'to': [
                to.get('email')
                for personalization in body.get('personalizations', [])
                for to in personalization.get('to', [])
            ],
            'from': body.get('from', {}).get('email', 'unknown'),
            'subject': body.get('subject', 'No Subject'),
            'timestamp': datetime.now(timezone.utc).isoformat(),
        }
        self.sent_emails.append(email_data)
        logger.info(f"[MOCK EMAIL] To: {email_data['to']}, Subject: {email_data['subject']}")
        return self

    def get_sent_emails(self) -> List[Dict[str, Any]]:
        """Get list of all mock sent emails"""
        return self.sent_emails.copy()


class SendGridNotifier(NotificationSink):
    """
    SendGrid-based email sink.

    A missing API key (outside mock mode) or an empty recipient list turns
    the sink into a no-op.
    """

    def __init__(
        self,
        from_email: str,
        to_emails: Optional[List[str]] = None,
        api_key: Optional[str] = None,
        api_key_env: str = "SENDGRID_API_KEY",
        mock_mode: bool = False,
        subject_prefix: str = "[dexwatch]"
    ):
        """
        Initialize SendGrid sink.

        Args:
            from_email: Sender email address
            to_emails: List of recipient emails
            api_key: SendGrid API key (defaults to the api_key_env variable)
            api_key_env: Environment variable holding the API key
            mock_mode: If True, use mock client instead of real SendGrid
            subject_prefix: Prefix added to every subject
        """
        super().__init__("sendgrid")
        self.mock_mode = mock_mode
        self.from_email = from_email
        self.to_emails = [email.strip() for email in (to_emails or []) if email.strip()]
        self.subject_prefix = subject_prefix

        if mock_mode:
            self.client = MockSendGridClient()
            logger.info("SendGrid sink initialized in MOCK mode")
        else:
            key = api_key or os.getenv(api_key_env)
            self.client = SendGridAPIClient(key) if key else None
            if key:
                logger.info("SendGrid sink initialized in PRODUCTION mode")

    @property
    def is_configured(self) -> bool:
        return self.client is not None and bool(self.to_emails)

    async def _deliver(self, message: str) -> bool:
        subject = f"{self.subject_prefix} {message.splitlines()[0][:120]}"
        mail = Mail(
            from_email=self.from_email,
            to_emails=self.to_emails,
            subject=subject,
            plain_text_content=message,
        )

        try:
            response = await asyncio.to_thread(self.client.send, mail)
        except HTTPError as e:
            logger.error(f"SendGrid HTTP error: {e}")
            return False
        except Exception as e:
            logger.error(f"Error sending email: {e}")
            return False

        if response.status_code in (200, 202):
            logger.debug(f"Email sent: {subject}")
            return True

        logger.warning(f"Unexpected status code {response.status_code} for email: {subject}")
        return False
