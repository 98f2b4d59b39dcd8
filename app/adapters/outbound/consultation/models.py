"""SQLAlchemy ORM models for consultations."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Numeric, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ConsultationModel(Base):
    """SQLAlchemy model for consultations table."""

    __tablename__ = "consultations"
    __table_args__ = (
        CheckConstraint(
            "status IN ('paid', 'submitted', 'answered')",
            name="ck_consultations_status",
        ),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    stripe_session_id = Column(String, nullable=False, unique=True, index=True)
    service = Column(String, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(String, nullable=False, default="paid", index=True)
    customer_email = Column(String, nullable=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    birthdate = Column(Date, nullable=True)
    person_concerned = Column(String, nullable=True)
    message = Column(Text, nullable=True)
    response = Column(Text, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    answered_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
