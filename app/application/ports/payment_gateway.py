"""Payment gateway port."""

from abc import ABC, abstractmethod

from app.application.dtos.payment import CheckoutSession, WebhookEvent


class PaymentGatewayError(Exception):
    """Raised when the payment provider cannot be reached or errors out."""


class PaymentSessionNotFoundError(PaymentGatewayError):
    """Raised when the payment provider does not know the session."""


class InvalidWebhookSignatureError(Exception):
    """Raised when a webhook payload fails signature verification."""


class PaymentGateway(ABC):
    """Port interface for the payment provider."""

    @abstractmethod
    def verify_webhook(self, payload: bytes, signature: str) -> WebhookEvent:
        """
        Verify a webhook signature and parse the event.

        Args:
            payload: Raw request body
            signature: Signature header sent by the provider

        Returns:
            Verified webhook event

        Raises:
            InvalidWebhookSignatureError: If the signature or payload is invalid
        """
        pass

    @abstractmethod
    async def retrieve_session(self, session_id: str) -> CheckoutSession:
        """
        Fetch a checkout session and its payment status.

        Args:
            session_id: Checkout session identifier

        Returns:
            Checkout session

        Raises:
            PaymentSessionNotFoundError: If the session does not exist
            PaymentGatewayError: If the provider call fails
        """
        pass
