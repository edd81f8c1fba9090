"""
SendGrid implementation of the EmailService port.
"""

import logging
from typing import Optional

from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from ...application.ports.services.email_service import EmailService
from ...core.config import SendGridSettings
from ...core.exceptions import EmailDeliveryError
from ...core.utils import run_blocking

logger = logging.getLogger("docintro")


class SendGridEmailService(EmailService):
    """Plain-text email delivery through the SendGrid v3 API."""

    def __init__(self, settings: SendGridSettings, client: Optional[SendGridAPIClient] = None):
        self.settings = settings
        self._client = client
        if self._client is None and settings.api_key:
            self._client = SendGridAPIClient(api_key=settings.api_key)

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def send_email(self, to_email: str, subject: str, text: str) -> None:
        if self._client is None:
            raise EmailDeliveryError("SendGrid API key is not configured")

        message = Mail(
            from_email=self.settings.from_email,
            to_emails=to_email,
            subject=subject,
            plain_text_content=text,
        )

        try:
            response = await run_blocking(self._client.send, message)
        except HTTPError as e:
            raise EmailDeliveryError(
                f"HTTP {e.status_code}", {"to": to_email, "body": str(e.body)[:500]}
            ) from e
        except OSError as e:
            raise EmailDeliveryError(str(e), {"to": to_email}) from e

        if response.status_code >= 300:
            raise EmailDeliveryError(f"HTTP {response.status_code}", {"to": to_email})

        logger.info(f"Email '{subject}' accepted by SendGrid for {to_email} (status={response.status_code})")
