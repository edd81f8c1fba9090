"""
Email service interface for outbound notifications.
"""

from abc import ABC, abstractmethod


class EmailService(ABC):
    """Abstract service for sending plain-text email."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the provider has credentials to send mail."""
        pass

    @abstractmethod
    async def send_email(self, to_email: str, subject: str, text: str) -> None:
        """
        Send one email.

        Raises:
            EmailDeliveryError: if the provider rejects or fails the send
        """
        pass
