"""Email notifier port."""

from abc import ABC, abstractmethod


class EmailDeliveryError(Exception):
    """Raised when an email could not be handed to the email provider."""


class EmailNotifier(ABC):
    """Port interface for transactional email."""

    @abstractmethod
    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        """
        Send an HTML email.

        Args:
            to_address: Recipient email address
            subject: Email subject
            html_body: HTML email body

        Raises:
            EmailDeliveryError: If the email could not be sent
        """
        pass
