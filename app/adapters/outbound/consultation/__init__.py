"""Consultation repository adapters."""

from app.adapters.outbound.consultation.consultation_repository import (
    InMemoryConsultationRepository,
)
from app.adapters.outbound.consultation.postgres_consultation_repository import (
    PostgresConsultationRepository,
)

__all__ = [
    "InMemoryConsultationRepository",
    "PostgresConsultationRepository",
]
