"""Dependency injection factory functions and FastAPI providers."""

from functools import lru_cache

from fastapi import Depends

from app.adapters.outbound.consultation import (
    InMemoryConsultationRepository,
    PostgresConsultationRepository,
)
from app.adapters.outbound.email.sendgrid_email_notifier import SendGridEmailNotifier
from app.adapters.outbound.idempotency.noop_idempotency_store import NoOpIdempotencyStore
from app.adapters.outbound.idempotency.redis_idempotency_store import RedisIdempotencyStore
from app.adapters.outbound.payment.stripe_payment_gateway import StripePaymentGateway
from app.application.ports.consultation_repository import ConsultationRepository
from app.application.ports.email_notifier import EmailNotifier
from app.application.ports.idempotency_store import IdempotencyStore
from app.application.ports.payment_gateway import PaymentGateway
from app.application.use_cases.admin_dashboard import AdminDashboardUseCase
from app.application.use_cases.check_form_access import CheckFormAccessUseCase
from app.application.use_cases.record_payment import RecordPaymentUseCase
from app.application.use_cases.respond_to_consultation import RespondToConsultationUseCase
from app.application.use_cases.submit_consultation import SubmitConsultationUseCase
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import log_event


def create_consultation_repository() -> ConsultationRepository:
    """
    Factory function to create consultation repository.

    Returns:
        ConsultationRepository instance
    """
    if settings.consultation_repository == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when CONSULTATION_REPOSITORY=postgres")
        return PostgresConsultationRepository()
    else:
        return InMemoryConsultationRepository()


def create_payment_gateway() -> PaymentGateway:
    """
    Factory function to create the payment gateway.

    Without STRIPE_SECRET_KEY every session lookup fails, which the form
    gate treats as unpaid.

    Returns:
        PaymentGateway instance
    """
    return StripePaymentGateway()


def create_email_notifier() -> EmailNotifier:
    """
    Factory function to create the email notifier.

    Without SENDGRID_API_KEY every send fails, which the respond flow
    reports as emailSent=false.

    Returns:
        EmailNotifier instance
    """
    return SendGridEmailNotifier()


def create_idempotency_store() -> IdempotencyStore:
    """
    Factory function to create the webhook event idempotency store.

    Returns:
        IdempotencyStore instance (Redis or NoOp)
    """
    if not settings.stripe_event_idempotency_enabled or not settings.redis_url:
        return NoOpIdempotencyStore()

    return RedisIdempotencyStore(settings.redis_url)


# Providers: one collaborator per process, swapped in tests via app.dependency_overrides


@lru_cache
def get_consultation_repository() -> ConsultationRepository:
    """Provide the process-wide consultation repository."""
    return create_consultation_repository()


@lru_cache
def get_payment_gateway() -> PaymentGateway:
    """Provide the process-wide payment gateway."""
    return create_payment_gateway()


@lru_cache
def get_email_notifier() -> EmailNotifier:
    """Provide the process-wide email notifier."""
    return create_email_notifier()


@lru_cache
def get_idempotency_store() -> IdempotencyStore:
    """Provide the process-wide webhook idempotency store."""
    return create_idempotency_store()


def get_record_payment_use_case(
    repository: ConsultationRepository = Depends(get_consultation_repository),
) -> RecordPaymentUseCase:
    return RecordPaymentUseCase(repository, logger=log_event)


def get_check_form_access_use_case(
    repository: ConsultationRepository = Depends(get_consultation_repository),
    payment_gateway: PaymentGateway = Depends(get_payment_gateway),
) -> CheckFormAccessUseCase:
    return CheckFormAccessUseCase(repository, payment_gateway, logger=log_event)


def get_submit_consultation_use_case(
    repository: ConsultationRepository = Depends(get_consultation_repository),
    payment_gateway: PaymentGateway = Depends(get_payment_gateway),
) -> SubmitConsultationUseCase:
    return SubmitConsultationUseCase(repository, payment_gateway, logger=log_event)


def get_respond_to_consultation_use_case(
    repository: ConsultationRepository = Depends(get_consultation_repository),
    email_notifier: EmailNotifier = Depends(get_email_notifier),
) -> RespondToConsultationUseCase:
    return RespondToConsultationUseCase(repository, email_notifier, logger=log_event)


def get_admin_dashboard_use_case(
    repository: ConsultationRepository = Depends(get_consultation_repository),
) -> AdminDashboardUseCase:
    return AdminDashboardUseCase(repository, logger=log_event)
