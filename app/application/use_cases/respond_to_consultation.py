"""Respond to consultation use case (submitted -> answered)."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from app.application.dtos.consultation import (
    RespondToConsultationRequest,
    RespondToConsultationResult,
)
from app.application.errors import (
    ConsultationNotFoundError,
    MissingFieldsError,
    NotYetSubmittedError,
    PersistenceError,
)
from app.application.ports.consultation_repository import (
    ConsultationRepository,
    ConsultationStoreError,
)
from app.application.ports.email_notifier import EmailNotifier
from app.application.use_cases.response_email_formatter import render_response_email
from app.application.use_cases.user_messages_fr import UserMessagesFR
from app.domain.entities.consultation import Consultation, ConsultationStatus, can_transition


class RespondToConsultationUseCase:
    """Use case for saving the admin's response and emailing it to the customer."""

    COMPONENT = "respond"

    def __init__(
        self,
        repository: ConsultationRepository,
        email_notifier: EmailNotifier,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize respond to consultation use case.

        Args:
            repository: Consultation repository
            email_notifier: Transactional email sender
            logger: Optional logger function (component, event, level=..., **kwargs)
        """
        self._repository = repository
        self._email_notifier = email_notifier
        self._logger = logger

    def _log(self, event: str, level: int = logging.INFO, **kwargs: Any) -> None:
        if self._logger:
            self._logger(self.COMPONENT, event, level=level, **kwargs)

    async def execute(self, request: RespondToConsultationRequest) -> RespondToConsultationResult:
        """
        Answer a consultation, then try once to email the response.

        The answer is committed before the email attempt and is kept whatever
        the email outcome.

        Args:
            request: Admin response

        Returns:
            Result telling whether the email was sent

        Raises:
            MissingFieldsError: If the id or response is blank
            ConsultationNotFoundError: If no consultation has this id
            NotYetSubmittedError: If the customer has not submitted the form yet
            PersistenceError: If the store fails
        """
        consultation_id = request.id.strip()
        if not consultation_id or not request.response.strip():
            raise MissingFieldsError(UserMessagesFR.MISSING_FIELDS)

        try:
            consultation = await self._repository.get(consultation_id)
        except ConsultationStoreError as err:
            self._log("lookup_failed", level=logging.ERROR, consultation_id=consultation_id, error=str(err))
            raise PersistenceError(UserMessagesFR.UPDATE_FAILED) from err

        if consultation is None:
            raise ConsultationNotFoundError()

        if not can_transition(consultation.status, ConsultationStatus.ANSWERED):
            raise NotYetSubmittedError()

        try:
            answered = await self._repository.save_answer(
                consultation_id, request.response, datetime.now(timezone.utc)
            )
        except ConsultationStoreError as err:
            self._log("update_failed", level=logging.ERROR, consultation_id=consultation_id, error=str(err))
            raise PersistenceError(UserMessagesFR.UPDATE_FAILED) from err

        if answered is None:
            # Deleted between the lookup and the update
            raise ConsultationNotFoundError()

        self._log(
            "consultation_answered",
            consultation_id=consultation_id,
            status_before=consultation.status.value,
            status_after=answered.status.value,
        )

        email_sent = await self._send_response_email(answered)
        return RespondToConsultationResult(
            success=True,
            email_sent=email_sent,
            message=(
                UserMessagesFR.RESPONSE_SAVED_EMAIL_SENT
                if email_sent
                else UserMessagesFR.RESPONSE_SAVED_EMAIL_FAILED
            ),
        )

    async def _send_response_email(self, consultation: Consultation) -> bool:
        """
        Email the response to the customer, once.

        Args:
            consultation: Answered consultation

        Returns:
            True if the email was handed to the provider, False otherwise
        """
        if not consultation.email:
            self._log("email_skipped", level=logging.WARNING, consultation_id=consultation.id)
            return False

        try:
            await self._email_notifier.send(
                to_address=consultation.email,
                subject=UserMessagesFR.response_email_subject(consultation.service),
                html_body=render_response_email(consultation, consultation.response or ""),
            )
        except Exception as err:
            # The answer is already committed; a failed email only changes the reply
            self._log(
                "email_failed",
                level=logging.WARNING,
                consultation_id=consultation.id,
                error=str(err),
            )
            return False

        self._log("email_sent", consultation_id=consultation.id)
        return True
