"""Consultation DTOs."""

from datetime import date, datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from app.application.dtos.base import DTO
from app.domain.entities.consultation import Consultation


class SubmitConsultationRequest(DTO):
    """Customer form submission DTO."""

    session_id: str = ""
    name: str = ""
    email: str = ""
    message: str = ""
    birthdate: Optional[date] = None
    person_concerned: Optional[str] = None

    @field_validator("birthdate", "person_concerned", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        """Treat empty optional form fields as absent."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def missing_required_fields(self) -> list[str]:
        """
        List required fields left blank.

        Returns:
            Names of the missing fields (empty when the form is complete)
        """
        required = {
            "session_id": self.session_id,
            "name": self.name,
            "email": self.email,
            "message": self.message,
        }
        return [name for name, value in required.items() if not value.strip()]

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "session_id": "cs_123",
                "name": "Camille",
                "email": "camille@example.com",
                "birthdate": "1990-04-12",
                "person_concerned": "Julien",
                "message": "Est-ce que ce nouveau travail est fait pour moi ?",
            }
        },
    )


class RespondToConsultationRequest(DTO):
    """Admin response DTO."""

    id: str = ""
    response: str = ""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "3f6d2d0e-4b9c-4a57-9d55-1c2b7b0f8f10",
                "response": "Voici ma guidance",
            }
        },
    )


class RespondToConsultationResult(DTO):
    """Outcome of an admin response: saved, and whether the email went out."""

    success: bool = True
    email_sent: bool = Field(serialization_alias="emailSent")
    message: str


class ConsultationStats(DTO):
    """Admin dashboard counters over submitted and answered consultations."""

    total: int
    pending: int
    answered: int
    revenue: float


class ConsultationView(DTO):
    """Consultation as listed in the admin dashboard."""

    id: str
    stripe_session_id: str
    service: str
    amount: float
    status: str
    customer_email: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    birthdate: Optional[date] = None
    person_concerned: Optional[str] = None
    message: Optional[str] = None
    response: Optional[str] = None
    submitted_at: Optional[datetime] = None
    answered_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, consultation: Consultation) -> "ConsultationView":
        """
        Build the view from a consultation entity.

        Args:
            consultation: Consultation entity

        Returns:
            Consultation view DTO
        """
        return cls(
            id=consultation.id,
            stripe_session_id=consultation.stripe_session_id,
            service=consultation.service,
            amount=float(consultation.amount),
            status=consultation.status.value,
            customer_email=consultation.customer_email,
            name=consultation.name,
            email=consultation.email,
            birthdate=consultation.birthdate,
            person_concerned=consultation.person_concerned,
            message=consultation.message,
            response=consultation.response,
            submitted_at=consultation.submitted_at,
            answered_at=consultation.answered_at,
            created_at=consultation.created_at,
        )


class AdminLoginRequest(DTO):
    """Admin login DTO."""

    password: str = ""
