"""HTTP routes: payment webhook, question form and submission."""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse

from app.adapters.inbound.http.schemas import (
    ErrorResponse,
    SuccessResponse,
    WebhookAcknowledgement,
)
from app.application.dtos.consultation import SubmitConsultationRequest
from app.application.errors import PersistenceError
from app.application.ports.consultation_repository import (
    ConsultationRepository,
    ConsultationStoreError,
)
from app.application.ports.idempotency_store import IdempotencyStore
from app.application.ports.payment_gateway import InvalidWebhookSignatureError, PaymentGateway
from app.application.use_cases.check_form_access import CheckFormAccessUseCase, FormAccess
from app.application.use_cases.record_payment import RecordPaymentUseCase
from app.application.use_cases.submit_consultation import SubmitConsultationUseCase
from app.domain.entities.consultation import Consultation
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import log_event
from app.infrastructure.wiring.dependencies import (
    get_check_form_access_use_case,
    get_consultation_repository,
    get_idempotency_store,
    get_payment_gateway,
    get_record_payment_use_case,
    get_submit_consultation_use_case,
)

router = APIRouter()

SERVICES_URL = "/#services"


def _public_page(filename: str) -> FileResponse:
    """Serve an HTML page from PUBLIC_DIR."""
    return FileResponse(Path(settings.public_dir) / filename, media_type="text/html")


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.post(
    "/api/webhook",
    response_model=WebhookAcknowledgement,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def stripe_webhook(
    request: Request,
    payment_gateway: PaymentGateway = Depends(get_payment_gateway),
    record_payment: RecordPaymentUseCase = Depends(get_record_payment_use_case),
    idempotency_store: IdempotencyStore = Depends(get_idempotency_store),
) -> Union[WebhookAcknowledgement, JSONResponse]:
    """
    Handle Stripe webhook events.

    Once the signature is verified the event is always acknowledged;
    processing and de-duplication failures are logged, never returned.

    Args:
        request: FastAPI request object (raw body is needed for the signature)

    Returns:
        {"received": true}, or a 400 error when the signature is missing or invalid
    """
    signature = request.headers.get("stripe-signature")
    if not signature:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Missing stripe-signature header"},
        )

    payload = await request.body()
    try:
        event = payment_gateway.verify_webhook(payload, signature)
    except InvalidWebhookSignatureError as err:
        log_event("webhook", "signature_verification_failed", level=logging.WARNING, error=str(err))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": f"Webhook Error: {err}"},
        )

    try:
        already_processed = await idempotency_store.is_processed(event.id)
    except Exception as err:
        # Redeliveries are still absorbed by the unique session id
        log_event(
            "webhook",
            "idempotency_check_failed",
            level=logging.ERROR,
            event_id=event.id,
            error_type=type(err).__name__,
        )
        already_processed = False

    if already_processed:
        log_event("webhook", "event_already_processed", event_id=event.id, event_type=event.type)
        return WebhookAcknowledgement()

    try:
        await record_payment.execute(event)
    except Exception as err:
        log_event(
            "webhook",
            "event_processing_failed",
            level=logging.ERROR,
            event_id=event.id,
            event_type=event.type,
            error_type=type(err).__name__,
        )
        return WebhookAcknowledgement()

    try:
        await idempotency_store.mark_processed(
            event.id, settings.stripe_event_idempotency_ttl_seconds
        )
    except Exception as err:
        log_event(
            "webhook",
            "idempotency_mark_failed",
            level=logging.ERROR,
            event_id=event.id,
            error_type=type(err).__name__,
        )
    return WebhookAcknowledgement()


@router.get("/form", response_model=None)
async def question_form(
    session_id: Optional[str] = None,
    check_form_access: CheckFormAccessUseCase = Depends(get_check_form_access_use_case),
) -> Union[FileResponse, RedirectResponse]:
    """
    Serve the question form for a paid checkout session.

    Args:
        session_id: Stripe checkout session identifier

    Returns:
        The form, the "already submitted" page, or a redirect to the services section
    """
    access = await check_form_access.execute(session_id)

    if access == FormAccess.REDIRECT:
        return RedirectResponse(SERVICES_URL, status_code=status.HTTP_302_FOUND)
    if access == FormAccess.ALREADY_SUBMITTED:
        return _public_page("already-submitted.html")
    return _public_page("form.html")


@router.post(
    "/api/submit",
    response_model=SuccessResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def submit_consultation(
    request: SubmitConsultationRequest,
    use_case: SubmitConsultationUseCase = Depends(get_submit_consultation_use_case),
) -> SuccessResponse:
    """
    Submit the customer's question for a paid consultation.

    Args:
        request: Form submission

    Returns:
        {"success": true}; errors are rendered as {"error": ...} with 400/403/500
    """
    await use_case.execute(request)
    return SuccessResponse()


@router.get("/admin", response_model=None)
async def admin_page() -> FileResponse:
    """Serve the admin dashboard page."""
    return _public_page("admin.html")


@router.get("/test", response_model=None)
async def create_test_consultation(
    repository: ConsultationRepository = Depends(get_consultation_repository),
) -> RedirectResponse:
    """
    Create a fake paid consultation and open its form (only enabled if DEBUG_MODE=true).

    Returns:
        Redirect to the question form of the fake consultation

    Raises:
        HTTPException: 404 if DEBUG_MODE is disabled
    """
    if not settings.debug_mode:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Debug endpoint is disabled",
        )

    consultation = Consultation.from_checkout(
        session_id=f"test_{int(time.time() * 1000)}",
        amount_total=1000,
        customer_email="test@test.com",
    )
    try:
        await repository.add_paid(consultation)
    except ConsultationStoreError as err:
        raise PersistenceError() from err

    log_event("debug", "test_consultation_created", session_id=consultation.stripe_session_id)
    return RedirectResponse(
        f"/form?session_id={consultation.stripe_session_id}",
        status_code=status.HTTP_302_FOUND,
    )
