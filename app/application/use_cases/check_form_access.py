"""Check form access use case (GET form gate)."""

import logging
from enum import Enum
from typing import Any, Callable, Optional

from app.application.ports.consultation_repository import (
    ConsultationRepository,
    ConsultationStoreError,
)
from app.application.ports.payment_gateway import PaymentGateway, PaymentGatewayError


class FormAccess(str, Enum):
    """What the customer gets when opening the question form."""

    FORM = "form"
    ALREADY_SUBMITTED = "already_submitted"
    REDIRECT = "redirect"


class CheckFormAccessUseCase:
    """Use case deciding whether a checkout session may open the question form."""

    COMPONENT = "form_gate"

    def __init__(
        self,
        repository: ConsultationRepository,
        payment_gateway: PaymentGateway,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize check form access use case.

        Args:
            repository: Consultation repository
            payment_gateway: Payment provider, asked when the webhook has not arrived yet
            logger: Optional logger function (component, event, level=..., **kwargs)
        """
        self._repository = repository
        self._payment_gateway = payment_gateway
        self._logger = logger

    def _log(self, event: str, level: int = logging.INFO, **kwargs: Any) -> None:
        if self._logger:
            self._logger(self.COMPONENT, event, level=level, **kwargs)

    async def execute(self, session_id: Optional[str]) -> FormAccess:
        """
        Decide form access for a checkout session.

        Lookup failures redirect the customer away instead of raising.

        Args:
            session_id: Checkout session identifier from the query string

        Returns:
            Form access decision
        """
        if not session_id:
            return FormAccess.REDIRECT

        try:
            consultation = await self._repository.get_by_session_id(session_id)
        except ConsultationStoreError as err:
            self._log("lookup_failed", level=logging.ERROR, session_id=session_id, error=str(err))
            return FormAccess.REDIRECT

        if consultation is not None:
            if consultation.is_awaiting_submission():
                return FormAccess.FORM
            return FormAccess.ALREADY_SUBMITTED

        # Webhook may not have arrived yet: ask the payment provider
        try:
            checkout = await self._payment_gateway.retrieve_session(session_id)
        except PaymentGatewayError as err:
            self._log(
                "payment_verification_failed",
                level=logging.WARNING,
                session_id=session_id,
                error=str(err),
            )
            return FormAccess.REDIRECT

        if not checkout.paid:
            self._log("payment_not_completed", session_id=session_id)
            return FormAccess.REDIRECT

        return FormAccess.FORM
