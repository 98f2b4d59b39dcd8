"""Submit consultation use case (paid -> submitted)."""

import logging
from typing import Any, Callable, Optional

from app.application.dtos.consultation import SubmitConsultationRequest
from app.application.errors import (
    AlreadySubmittedError,
    InvalidPaymentSessionError,
    MissingFieldsError,
    PaymentNotVerifiedError,
    PersistenceError,
)
from app.application.ports.consultation_repository import (
    ConsultationRepository,
    ConsultationStoreError,
)
from app.application.ports.payment_gateway import PaymentGateway, PaymentGatewayError
from app.domain.entities.consultation import Consultation


class SubmitConsultationUseCase:
    """Use case for storing the customer's question on a paid consultation."""

    COMPONENT = "submit"

    def __init__(
        self,
        repository: ConsultationRepository,
        payment_gateway: PaymentGateway,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize submit consultation use case.

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

    async def execute(self, request: SubmitConsultationRequest) -> Consultation:
        """
        Submit the customer's question.

        Args:
            request: Form submission

        Returns:
            The consultation in submitted status

        Raises:
            MissingFieldsError: If a required field is blank
            AlreadySubmittedError: If the consultation already left paid status
            InvalidPaymentSessionError: If the payment provider cannot confirm the session
            PaymentNotVerifiedError: If the session is not paid
            PersistenceError: If the store fails
        """
        missing = request.missing_required_fields()
        if missing:
            raise MissingFieldsError()

        session_id = request.session_id.strip()

        try:
            consultation = await self._repository.get_by_session_id(session_id)
        except ConsultationStoreError as err:
            self._log("lookup_failed", level=logging.ERROR, session_id=session_id, error=str(err))
            raise PersistenceError() from err

        if consultation is None:
            status_before = None
            consultation = await self._consultation_from_payment_provider(
                session_id, request.email.strip()
            )
        elif not consultation.is_awaiting_submission():
            self._log(
                "duplicate_submission",
                level=logging.WARNING,
                session_id=session_id,
                status=consultation.status.value,
            )
            raise AlreadySubmittedError()
        else:
            status_before = consultation.status.value

        consultation.submit(
            name=request.name.strip(),
            email=request.email.strip(),
            message=request.message,
            birthdate=request.birthdate,
            person_concerned=request.person_concerned,
        )

        try:
            saved = await self._repository.save_submission(consultation)
        except ConsultationStoreError as err:
            self._log("save_failed", level=logging.ERROR, session_id=session_id, error=str(err))
            raise PersistenceError() from err

        if not saved:
            # A concurrent submission moved the row out of paid status first
            self._log("duplicate_submission", level=logging.WARNING, session_id=session_id)
            raise AlreadySubmittedError()

        self._log(
            "consultation_submitted",
            consultation_id=consultation.id,
            session_id=session_id,
            status_before=status_before,
            status_after=consultation.status.value,
        )
        return consultation

    async def _consultation_from_payment_provider(
        self, session_id: str, fallback_email: str
    ) -> Consultation:
        """
        Build a paid consultation from the payment provider's view of the session.

        Args:
            session_id: Checkout session identifier
            fallback_email: Submitted email, used when checkout collected none

        Returns:
            New consultation in paid status

        Raises:
            InvalidPaymentSessionError: If the session cannot be retrieved
            PaymentNotVerifiedError: If the session is not paid
        """
        try:
            checkout = await self._payment_gateway.retrieve_session(session_id)
        except PaymentGatewayError as err:
            self._log(
                "payment_verification_failed",
                level=logging.WARNING,
                session_id=session_id,
                error=str(err),
            )
            raise InvalidPaymentSessionError() from err

        if not checkout.paid:
            self._log("payment_not_completed", level=logging.WARNING, session_id=session_id)
            raise PaymentNotVerifiedError()

        self._log("webhook_not_received_yet", session_id=session_id)
        return Consultation.from_checkout(
            session_id=session_id,
            amount_total=checkout.amount_total,
            customer_email=checkout.customer_email or fallback_email,
        )
