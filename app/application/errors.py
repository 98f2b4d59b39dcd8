"""Application errors surfaced to callers with a localized message."""

from typing import Optional

from app.application.use_cases.user_messages_fr import UserMessagesFR


class ConsultationError(Exception):
    """Base class for errors reported to the customer or the admin."""

    default_message = "Erreur."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFieldsError(ConsultationError):
    """A required field is missing or blank."""

    default_message = UserMessagesFR.MISSING_REQUIRED_FIELDS


class AlreadySubmittedError(ConsultationError):
    """The consultation already left the paid status."""

    default_message = UserMessagesFR.ALREADY_SUBMITTED


class NotYetSubmittedError(ConsultationError):
    """The consultation cannot be answered before the customer submits it."""

    default_message = UserMessagesFR.NOT_YET_SUBMITTED


class PaymentNotVerifiedError(ConsultationError):
    """The payment provider reports the session as unpaid."""

    default_message = UserMessagesFR.PAYMENT_NOT_VERIFIED


class InvalidPaymentSessionError(ConsultationError):
    """The payment provider could not confirm the session."""

    default_message = UserMessagesFR.INVALID_PAYMENT_SESSION


class ConsultationNotFoundError(ConsultationError):
    """No consultation with the requested identifier."""

    default_message = UserMessagesFR.CONSULTATION_NOT_FOUND


class AdminUnauthorizedError(ConsultationError):
    """The request lacks the admin session flag or the password is wrong."""

    default_message = UserMessagesFR.UNAUTHORIZED


class PersistenceError(ConsultationError):
    """The record store failed; details are logged, never returned."""

    default_message = UserMessagesFR.SAVE_FAILED
