"""In-memory consultation repository adapter."""

from copy import deepcopy
from datetime import datetime, timezone
from typing import Iterable, Optional

from app.application.ports.consultation_repository import ConsultationRepository
from app.domain.entities.consultation import (
    Consultation,
    ConsultationStatus,
    can_transition,
)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryConsultationRepository(ConsultationRepository):
    """In-memory implementation of consultation repository.

    Entities are copied in and out so callers never mutate stored rows.
    """

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, Consultation] = {}

    def _find_by_session_id(self, session_id: str) -> Optional[Consultation]:
        for consultation in self._storage.values():
            if consultation.stripe_session_id == session_id:
                return consultation
        return None

    async def get(self, consultation_id: str) -> Optional[Consultation]:
        consultation = self._storage.get(consultation_id)
        return deepcopy(consultation) if consultation else None

    async def get_by_session_id(self, session_id: str) -> Optional[Consultation]:
        consultation = self._find_by_session_id(session_id)
        return deepcopy(consultation) if consultation else None

    async def add_paid(self, consultation: Consultation) -> bool:
        if self._find_by_session_id(consultation.stripe_session_id) is not None:
            return False
        self._storage[consultation.id] = deepcopy(consultation)
        return True

    async def save_submission(self, consultation: Consultation) -> bool:
        stored = self._find_by_session_id(consultation.stripe_session_id)
        if stored is None:
            self._storage[consultation.id] = deepcopy(consultation)
            return True

        if not can_transition(stored.status, ConsultationStatus.SUBMITTED):
            return False

        stored.submit(
            name=consultation.name,
            email=consultation.email,
            message=consultation.message,
            birthdate=consultation.birthdate,
            person_concerned=consultation.person_concerned,
            submitted_at=consultation.submitted_at,
        )
        return True

    async def save_answer(
        self, consultation_id: str, response: str, answered_at: datetime
    ) -> Optional[Consultation]:
        stored = self._storage.get(consultation_id)
        if stored is None or not can_transition(stored.status, ConsultationStatus.ANSWERED):
            return None

        stored.answer(response, answered_at=answered_at)
        return deepcopy(stored)

    async def list_by_status(self, statuses: Iterable[ConsultationStatus]) -> list[Consultation]:
        wanted = set(statuses)
        matching = [deepcopy(c) for c in self._storage.values() if c.status in wanted]
        return sorted(matching, key=lambda c: c.submitted_at or _OLDEST, reverse=True)

    async def delete(self, consultation_id: str) -> bool:
        return self._storage.pop(consultation_id, None) is not None
