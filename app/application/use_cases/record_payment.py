"""Record payment use case (absent -> paid)."""

import logging
from typing import Any, Callable, Optional

from app.application.dtos.payment import WebhookEvent
from app.application.errors import PersistenceError
from app.application.ports.consultation_repository import (
    ConsultationRepository,
    ConsultationStoreError,
)
from app.domain.entities.consultation import Consultation


class RecordPaymentUseCase:
    """Use case for recording a completed checkout as a paid consultation."""

    COMPONENT = "webhook"

    def __init__(
        self,
        repository: ConsultationRepository,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize record payment use case.

        Args:
            repository: Consultation repository
            logger: Optional logger function (component, event, level=..., **kwargs)
        """
        self._repository = repository
        self._logger = logger

    def _log(self, event: str, level: int = logging.INFO, **kwargs: Any) -> None:
        if self._logger:
            self._logger(self.COMPONENT, event, level=level, **kwargs)

    async def execute(self, event: WebhookEvent) -> Optional[Consultation]:
        """
        Record the payment carried by a verified webhook event.

        Args:
            event: Verified webhook event

        Returns:
            The new paid consultation, or None if the event was ignored or
            its session was already recorded

        Raises:
            PersistenceError: If the consultation could not be stored
        """
        if not event.is_checkout_completed:
            self._log("event_ignored", event_id=event.id, event_type=event.type)
            return None

        checkout = event.checkout_session
        consultation = Consultation.from_checkout(
            session_id=checkout.id,
            amount_total=checkout.amount_total,
            customer_email=checkout.customer_email,
        )

        try:
            inserted = await self._repository.add_paid(consultation)
        except ConsultationStoreError as err:
            self._log(
                "insert_failed",
                level=logging.ERROR,
                session_id=checkout.id,
                error=str(err),
            )
            raise PersistenceError() from err

        if not inserted:
            self._log("session_already_recorded", event_id=event.id, session_id=checkout.id)
            return None

        self._log(
            "consultation_paid",
            consultation_id=consultation.id,
            session_id=consultation.stripe_session_id,
            service=consultation.service,
            amount=str(consultation.amount),
        )
        return consultation
