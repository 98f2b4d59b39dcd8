"""SendGrid email notifier adapter."""

from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Email, Mail, To

from app.application.ports.email_notifier import EmailDeliveryError, EmailNotifier
from app.infrastructure.config.settings import settings


class SendGridEmailNotifier(EmailNotifier):
    """SendGrid implementation of the email notifier. One attempt per email."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_email: Optional[str] = None,
        from_name: Optional[str] = None,
    ) -> None:
        """
        Initialize SendGrid notifier.

        Args:
            api_key: SendGrid API key (defaults to settings.sendgrid_api_key)
            from_email: Sender address (defaults to settings.email_from)
            from_name: Sender display name (defaults to settings.email_from_name)
        """
        self._api_key = api_key or settings.sendgrid_api_key
        self._from_email = from_email or settings.email_from
        self._from_name = from_name or settings.email_from_name
        self._client = SendGridAPIClient(self._api_key) if self._api_key else None

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        """
        Send an HTML email through SendGrid.

        Args:
            to_address: Recipient email address
            subject: Email subject
            html_body: HTML email body

        Raises:
            EmailDeliveryError: If SendGrid is not configured or rejects the email
        """
        if self._client is None:
            raise EmailDeliveryError("SendGrid is not configured (SENDGRID_API_KEY missing)")

        message = Mail(
            from_email=Email(self._from_email, self._from_name),
            to_emails=To(to_address),
            subject=subject,
            html_content=html_body,
        )

        try:
            response = self._client.send(message)
        except Exception as e:
            # SendGrid raises python_http_client errors for 4xx/5xx responses
            raise EmailDeliveryError(f"SendGrid send failed: {str(e)}") from e

        if response.status_code not in (200, 201, 202):
            raise EmailDeliveryError(f"SendGrid returned status {response.status_code}")
