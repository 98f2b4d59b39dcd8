"""Consultation repository port."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional

from app.domain.entities.consultation import Consultation, ConsultationStatus


class ConsultationStoreError(Exception):
    """Raised when the record store cannot complete an operation."""


class ConsultationRepository(ABC):
    """Port interface for consultation repository."""

    @abstractmethod
    async def get(self, consultation_id: str) -> Optional[Consultation]:
        """
        Get a consultation by identifier.

        Args:
            consultation_id: Consultation identifier

        Returns:
            Consultation entity, or None if not found

        Raises:
            ConsultationStoreError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def get_by_session_id(self, session_id: str) -> Optional[Consultation]:
        """
        Get a consultation by Stripe checkout session identifier.

        Args:
            session_id: Checkout session identifier

        Returns:
            Consultation entity, or None if not found

        Raises:
            ConsultationStoreError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def add_paid(self, consultation: Consultation) -> bool:
        """
        Insert a paid consultation unless its session is already recorded.

        Args:
            consultation: Consultation in paid status

        Returns:
            True if inserted, False if the session already had a row

        Raises:
            ConsultationStoreError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def save_submission(self, consultation: Consultation) -> bool:
        """
        Insert or update a submitted consultation keyed by its session id.

        The row is inserted when the session is unknown, and its submission
        fields are written when the stored row is still paid. A stored row in
        any other status is left untouched.

        Args:
            consultation: Consultation in submitted status

        Returns:
            True if a row was inserted or updated, False otherwise

        Raises:
            ConsultationStoreError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def save_answer(
        self, consultation_id: str, response: str, answered_at: datetime
    ) -> Optional[Consultation]:
        """
        Mark a submitted (or already answered) consultation as answered.

        Args:
            consultation_id: Consultation identifier
            response: Admin response text
            answered_at: Answer timestamp

        Returns:
            Updated consultation, or None if no submitted/answered row matched

        Raises:
            ConsultationStoreError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def list_by_status(self, statuses: Iterable[ConsultationStatus]) -> list[Consultation]:
        """
        List consultations in the given statuses, latest submission first.

        Args:
            statuses: Statuses to include

        Returns:
            List of consultations

        Raises:
            ConsultationStoreError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def delete(self, consultation_id: str) -> bool:
        """
        Delete a consultation.

        Args:
            consultation_id: Consultation identifier

        Returns:
            True if a row was deleted, False if none matched

        Raises:
            ConsultationStoreError: If the store is unavailable
        """
        pass
