"""Payment provider DTOs."""

from typing import Optional

from app.application.dtos.base import DTO

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


class CheckoutSession(DTO):
    """Checkout session as reported by the payment provider."""

    id: str
    paid: bool
    amount_total: Optional[int] = None  # cents
    customer_email: Optional[str] = None


class WebhookEvent(DTO):
    """Verified payment provider webhook event."""

    id: str
    type: str
    checkout_session: Optional[CheckoutSession] = None

    @property
    def is_checkout_completed(self) -> bool:
        """Check if the event confirms a completed checkout."""
        return self.type == CHECKOUT_SESSION_COMPLETED and self.checkout_session is not None
