"""Admin HTTP routes: login, dashboard, responses and deletion."""

import logging

from fastapi import APIRouter, Depends, Request, status

from app.adapters.inbound.http.admin_session import (
    ADMIN_SESSION_KEY,
    check_admin_password,
    require_admin,
)
from app.adapters.inbound.http.schemas import ErrorResponse, SuccessResponse
from app.application.dtos.consultation import (
    AdminLoginRequest,
    ConsultationStats,
    ConsultationView,
    RespondToConsultationRequest,
    RespondToConsultationResult,
)
from app.application.errors import AdminUnauthorizedError
from app.application.use_cases.admin_dashboard import AdminDashboardUseCase
from app.application.use_cases.respond_to_consultation import RespondToConsultationUseCase
from app.application.use_cases.user_messages_fr import UserMessagesFR
from app.infrastructure.logging.logger import log_event
from app.infrastructure.wiring.dependencies import (
    get_admin_dashboard_use_case,
    get_respond_to_consultation_use_case,
)

router = APIRouter(
    prefix="/api/admin",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)


@router.post("/login", response_model=SuccessResponse)
async def login(request: Request, body: AdminLoginRequest) -> SuccessResponse:
    """
    Open an admin session when the shared password matches.

    Raises:
        AdminUnauthorizedError: 401 if the password is wrong
    """
    if not check_admin_password(body.password):
        log_event("admin", "login_failed", level=logging.WARNING)
        raise AdminUnauthorizedError(UserMessagesFR.WRONG_PASSWORD)

    request.session[ADMIN_SESSION_KEY] = True
    log_event("admin", "login_succeeded")
    return SuccessResponse()


@router.post("/logout", response_model=SuccessResponse)
async def logout(request: Request) -> SuccessResponse:
    """Clear the admin session."""
    request.session.clear()
    return SuccessResponse()


@router.get("/stats", response_model=ConsultationStats, dependencies=[Depends(require_admin)])
async def stats(
    dashboard: AdminDashboardUseCase = Depends(get_admin_dashboard_use_case),
) -> ConsultationStats:
    """
    Get dashboard counters over submitted and answered consultations.

    Returns:
        {total, pending, answered, revenue}
    """
    return await dashboard.stats()


@router.get(
    "/consultations",
    response_model=list[ConsultationView],
    dependencies=[Depends(require_admin)],
)
async def list_consultations(
    dashboard: AdminDashboardUseCase = Depends(get_admin_dashboard_use_case),
) -> list[ConsultationView]:
    """
    List submitted and answered consultations, latest submission first.

    Returns:
        Consultations
    """
    return await dashboard.list_consultations()


@router.post(
    "/respond",
    response_model=RespondToConsultationResult,
    dependencies=[Depends(require_admin)],
)
async def respond(
    body: RespondToConsultationRequest,
    use_case: RespondToConsultationUseCase = Depends(get_respond_to_consultation_use_case),
) -> RespondToConsultationResult:
    """
    Save the admin's response, then try to email it.

    Returns:
        {success, emailSent, message}
    """
    return await use_case.execute(body)


@router.delete(
    "/consultations/{consultation_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_consultation(
    consultation_id: str,
    dashboard: AdminDashboardUseCase = Depends(get_admin_dashboard_use_case),
) -> SuccessResponse:
    """
    Delete a consultation. Unknown ids succeed without touching other rows.

    Returns:
        {"success": true}
    """
    await dashboard.delete(consultation_id)
    return SuccessResponse()
