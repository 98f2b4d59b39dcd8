"""Admin dashboard use case: stats, listing and deletion."""

import logging
from decimal import Decimal
from typing import Any, Callable, Optional

from app.application.dtos.consultation import ConsultationStats, ConsultationView
from app.application.errors import PersistenceError
from app.application.ports.consultation_repository import (
    ConsultationRepository,
    ConsultationStoreError,
)
from app.application.use_cases.user_messages_fr import UserMessagesFR
from app.domain.entities.consultation import DASHBOARD_STATUSES, ConsultationStatus


class AdminDashboardUseCase:
    """Use case for the admin dashboard over submitted and answered consultations."""

    COMPONENT = "admin"

    def __init__(
        self,
        repository: ConsultationRepository,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize admin dashboard use case.

        Args:
            repository: Consultation repository
            logger: Optional logger function (component, event, level=..., **kwargs)
        """
        self._repository = repository
        self._logger = logger

    def _log(self, event: str, level: int = logging.INFO, **kwargs: Any) -> None:
        if self._logger:
            self._logger(self.COMPONENT, event, level=level, **kwargs)

    async def stats(self) -> ConsultationStats:
        """
        Count pending and answered consultations and sum their revenue.

        Returns:
            Dashboard counters

        Raises:
            PersistenceError: If the store fails
        """
        consultations = await self._list_dashboard_consultations()
        pending = sum(1 for c in consultations if c.status == ConsultationStatus.SUBMITTED)
        answered = sum(1 for c in consultations if c.status == ConsultationStatus.ANSWERED)
        revenue = sum((c.amount for c in consultations), Decimal("0"))

        return ConsultationStats(
            total=len(consultations),
            pending=pending,
            answered=answered,
            revenue=float(revenue),
        )

    async def list_consultations(self) -> list[ConsultationView]:
        """
        List submitted and answered consultations, latest submission first.

        Returns:
            Consultation views

        Raises:
            PersistenceError: If the store fails
        """
        consultations = await self._list_dashboard_consultations()
        return [ConsultationView.from_entity(c) for c in consultations]

    async def delete(self, consultation_id: str) -> bool:
        """
        Delete a consultation. Deleting an unknown id is not an error.

        Args:
            consultation_id: Consultation identifier

        Returns:
            True if a consultation was deleted

        Raises:
            PersistenceError: If the store fails
        """
        try:
            deleted = await self._repository.delete(consultation_id)
        except ConsultationStoreError as err:
            self._log("delete_failed", level=logging.ERROR, consultation_id=consultation_id, error=str(err))
            raise PersistenceError(UserMessagesFR.DELETE_FAILED) from err

        self._log("consultation_deleted", consultation_id=consultation_id, deleted=deleted)
        return deleted

    async def _list_dashboard_consultations(self):
        try:
            return await self._repository.list_by_status(DASHBOARD_STATUSES)
        except ConsultationStoreError as err:
            self._log("list_failed", level=logging.ERROR, error=str(err))
            raise PersistenceError(UserMessagesFR.DATABASE_ERROR) from err
