"""Consultation entity."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from app.domain.value_objects.service_offer import ServiceOffer


class ConsultationStatus(str, Enum):
    """Consultation lifecycle status."""

    PAID = "paid"
    SUBMITTED = "submitted"
    ANSWERED = "answered"


# Forward-only transitions. Re-answering an answered consultation overwrites its response.
_ALLOWED_TRANSITIONS: dict[ConsultationStatus, frozenset[ConsultationStatus]] = {
    ConsultationStatus.PAID: frozenset({ConsultationStatus.SUBMITTED}),
    ConsultationStatus.SUBMITTED: frozenset({ConsultationStatus.ANSWERED}),
    ConsultationStatus.ANSWERED: frozenset({ConsultationStatus.ANSWERED}),
}

# Statuses visible in the admin dashboard
DASHBOARD_STATUSES = (ConsultationStatus.SUBMITTED, ConsultationStatus.ANSWERED)


class InvalidStatusTransition(ValueError):
    """Raised when a consultation is asked to move backwards or skip a status."""

    def __init__(self, current: ConsultationStatus, target: ConsultationStatus) -> None:
        super().__init__(f"Cannot move consultation from {current.value} to {target.value}")
        self.current = current
        self.target = target


def can_transition(current: ConsultationStatus, target: ConsultationStatus) -> bool:
    """
    Check whether a status change is legal.

    Args:
        current: Current status
        target: Requested status

    Returns:
        True if the transition is allowed
    """
    return target in _ALLOWED_TRANSITIONS[current]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Consultation:
    """Consultation entity: one paid request for guidance."""

    stripe_session_id: str
    service: str
    amount: Decimal
    status: ConsultationStatus = ConsultationStatus.PAID
    id: str = field(default_factory=lambda: str(uuid4()))
    customer_email: Optional[str] = None
    # Submission fields (set on paid -> submitted)
    name: Optional[str] = None
    email: Optional[str] = None
    birthdate: Optional[date] = None
    person_concerned: Optional[str] = None
    message: Optional[str] = None
    submitted_at: Optional[datetime] = None
    # Answer fields (set on submitted -> answered)
    response: Optional[str] = None
    answered_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_checkout(
        cls,
        session_id: str,
        amount_total: Optional[int],
        customer_email: Optional[str] = None,
    ) -> "Consultation":
        """
        Create a paid consultation from a completed checkout session.

        Args:
            session_id: Stripe checkout session identifier
            amount_total: Paid amount in cents
            customer_email: Email entered at checkout, if any

        Returns:
            New consultation in paid status
        """
        offer = ServiceOffer.from_amount_total(amount_total)
        return cls(
            stripe_session_id=session_id,
            service=offer.label,
            amount=offer.amount,
            status=ConsultationStatus.PAID,
            customer_email=customer_email or None,
        )

    def submit(
        self,
        name: str,
        email: str,
        message: str,
        birthdate: Optional[date] = None,
        person_concerned: Optional[str] = None,
        submitted_at: Optional[datetime] = None,
    ) -> None:
        """
        Record the customer's question (paid -> submitted).

        Raises:
            InvalidStatusTransition: If the consultation is not in paid status
        """
        self._ensure_can_move_to(ConsultationStatus.SUBMITTED)
        self.name = name
        self.email = email
        self.message = message
        self.birthdate = birthdate
        self.person_concerned = person_concerned or None
        self.submitted_at = submitted_at or _utcnow()
        self.status = ConsultationStatus.SUBMITTED

    def answer(self, response: str, answered_at: Optional[datetime] = None) -> None:
        """
        Record the admin's response (submitted -> answered).

        Raises:
            InvalidStatusTransition: If the consultation has not been submitted
        """
        self._ensure_can_move_to(ConsultationStatus.ANSWERED)
        self.response = response
        self.answered_at = answered_at or _utcnow()
        self.status = ConsultationStatus.ANSWERED

    def is_awaiting_submission(self) -> bool:
        """Check if the customer may still submit the form."""
        return self.status == ConsultationStatus.PAID

    def _ensure_can_move_to(self, target: ConsultationStatus) -> None:
        if not can_transition(self.status, target):
            raise InvalidStatusTransition(self.status, target)
