"""Stripe payment gateway adapter."""

from typing import Any, Optional

import stripe

from app.application.dtos.payment import (
    CHECKOUT_SESSION_COMPLETED,
    CheckoutSession,
    WebhookEvent,
)
from app.application.ports.payment_gateway import (
    InvalidWebhookSignatureError,
    PaymentGateway,
    PaymentGatewayError,
    PaymentSessionNotFoundError,
)
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import logger


class StripePaymentGateway(PaymentGateway):
    """Stripe payment gateway implementation using the official SDK."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        webhook_secret: Optional[str] = None,
    ) -> None:
        """
        Initialize Stripe payment gateway.

        Args:
            api_key: Stripe secret key (defaults to settings.stripe_secret_key)
            webhook_secret: Webhook signing secret (defaults to settings.stripe_webhook_secret)
        """
        self._api_key = api_key or settings.stripe_secret_key
        self._webhook_secret = webhook_secret or settings.stripe_webhook_secret

        if not self._api_key:
            logger.warning("STRIPE_SECRET_KEY is not set; checkout sessions cannot be verified")

    @staticmethod
    def _to_checkout_session(data: dict[str, Any]) -> CheckoutSession:
        """
        Map a Stripe checkout session payload to a CheckoutSession DTO.

        Args:
            data: Checkout session as a plain dictionary

        Returns:
            CheckoutSession DTO
        """
        customer_details = data.get("customer_details") or {}
        return CheckoutSession(
            id=data["id"],
            paid=data.get("payment_status") == "paid",
            amount_total=data.get("amount_total"),
            customer_email=customer_details.get("email") or data.get("customer_email"),
        )

    def verify_webhook(self, payload: bytes, signature: str) -> WebhookEvent:
        """
        Verify the Stripe-Signature header and parse the event.

        Args:
            payload: Raw request body
            signature: Stripe-Signature header value

        Returns:
            Verified webhook event

        Raises:
            InvalidWebhookSignatureError: If the signature or payload is invalid
        """
        if not self._webhook_secret:
            raise InvalidWebhookSignatureError("Webhook signing secret is not configured")

        try:
            event = stripe.Webhook.construct_event(payload, signature, self._webhook_secret)
        except ValueError as e:
            raise InvalidWebhookSignatureError(f"Invalid payload: {str(e)}") from e
        except stripe.SignatureVerificationError as e:
            raise InvalidWebhookSignatureError(f"Invalid signature: {str(e)}") from e

        data = event.to_dict()
        checkout_session = None
        if data["type"] == CHECKOUT_SESSION_COMPLETED:
            checkout_session = self._to_checkout_session(data["data"]["object"])

        return WebhookEvent(id=data["id"], type=data["type"], checkout_session=checkout_session)

    async def retrieve_session(self, session_id: str) -> CheckoutSession:
        """
        Retrieve a checkout session from Stripe.

        Args:
            session_id: Checkout session identifier

        Returns:
            Checkout session

        Raises:
            PaymentSessionNotFoundError: If Stripe does not know the session
            PaymentGatewayError: If the key is missing or the Stripe call fails
        """
        if not self._api_key:
            raise PaymentGatewayError("Stripe secret key is not configured")

        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self._api_key)
        except stripe.InvalidRequestError as e:
            raise PaymentSessionNotFoundError(f"Checkout session not found: {session_id}") from e
        except stripe.StripeError as e:
            raise PaymentGatewayError(f"Stripe API call failed: {str(e)}") from e

        return self._to_checkout_session(session.to_dict())
