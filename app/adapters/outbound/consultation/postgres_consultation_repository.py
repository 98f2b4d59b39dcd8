"""Postgres-backed consultation repository adapter."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, Optional

from sqlalchemy import delete, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.ports.consultation_repository import (
    ConsultationRepository,
    ConsultationStoreError,
)
from app.domain.entities.consultation import (
    Consultation,
    ConsultationStatus,
    can_transition,
)
from app.infrastructure.db import SessionFactory, get_db_session
from app.infrastructure.logging.logger import logger

from .models import ConsultationModel

_TABLE = ConsultationModel.__table__

# Columns written on paid -> submitted
_SUBMISSION_COLUMNS = (
    "status",
    "name",
    "email",
    "birthdate",
    "person_concerned",
    "message",
    "submitted_at",
)

# Statuses from which a consultation may be answered
_ANSWERABLE_STATUSES = [
    status.value
    for status in ConsultationStatus
    if can_transition(status, ConsultationStatus.ANSWERED)
]


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """Ensure datetimes are timezone-aware (SQLite returns naive datetimes)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PostgresConsultationRepository(ConsultationRepository):
    """Postgres implementation of consultation repository.

    Status changes are single conditional statements, so the database's
    row-level atomicity and the unique session id arbitrate concurrent
    webhook and form submissions.
    """

    def __init__(self, session_factory: Optional[SessionFactory] = None) -> None:
        """
        Initialize Postgres repository.

        Args:
            session_factory: Callable returning a new session (defaults to get_db_session)
        """
        self._session_factory = session_factory or get_db_session

    def _to_entity(self, record: Any) -> Consultation:
        """
        Convert a model instance or result row to a Consultation entity.

        Args:
            record: ConsultationModel instance or row with the same attribute names

        Returns:
            Consultation entity
        """
        return Consultation(
            id=record.id,
            stripe_session_id=record.stripe_session_id,
            service=record.service,
            amount=Decimal(record.amount).quantize(Decimal("0.01")),
            status=ConsultationStatus(record.status),
            customer_email=record.customer_email,
            name=record.name,
            email=record.email,
            birthdate=record.birthdate,
            person_concerned=record.person_concerned,
            message=record.message,
            submitted_at=_aware(record.submitted_at),
            response=record.response,
            answered_at=_aware(record.answered_at),
            created_at=_aware(record.created_at),
        )

    def _to_row(self, consultation: Consultation) -> dict[str, Any]:
        """
        Convert a Consultation entity to column values.

        Args:
            consultation: Consultation entity

        Returns:
            Column name to value mapping
        """
        return {
            "id": consultation.id,
            "stripe_session_id": consultation.stripe_session_id,
            "service": consultation.service,
            "amount": consultation.amount,
            "status": consultation.status.value,
            "customer_email": consultation.customer_email,
            "name": consultation.name,
            "email": consultation.email,
            "birthdate": consultation.birthdate,
            "person_concerned": consultation.person_concerned,
            "message": consultation.message,
            "response": consultation.response,
            "submitted_at": consultation.submitted_at,
            "answered_at": consultation.answered_at,
            "created_at": consultation.created_at,
        }

    def _insert_for(self, db: Session):
        """Return a dialect-specific INSERT supporting ON CONFLICT."""
        dialect = db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(_TABLE)
        if dialect == "sqlite":
            return sqlite.insert(_TABLE)
        raise ConsultationStoreError(f"Unsupported database dialect: {dialect}")

    def _fail(self, db: Session, action: str, err: SQLAlchemyError) -> ConsultationStoreError:
        db.rollback()
        logger.error(f"Database error while {action}: {str(err)}")
        return ConsultationStoreError(f"Database error while {action}")

    async def get(self, consultation_id: str) -> Optional[Consultation]:
        """
        Get a consultation by identifier.

        Args:
            consultation_id: Consultation identifier

        Returns:
            Consultation entity, or None if not found
        """
        db: Session = self._session_factory()
        try:
            model = db.query(ConsultationModel).filter(ConsultationModel.id == consultation_id).first()
            return self._to_entity(model) if model else None
        except SQLAlchemyError as e:
            raise self._fail(db, f"getting consultation {consultation_id}", e) from e
        finally:
            db.close()

    async def get_by_session_id(self, session_id: str) -> Optional[Consultation]:
        """
        Get a consultation by checkout session identifier.

        Args:
            session_id: Checkout session identifier

        Returns:
            Consultation entity, or None if not found
        """
        db: Session = self._session_factory()
        try:
            model = (
                db.query(ConsultationModel)
                .filter(ConsultationModel.stripe_session_id == session_id)
                .first()
            )
            return self._to_entity(model) if model else None
        except SQLAlchemyError as e:
            raise self._fail(db, f"getting consultation for session {session_id}", e) from e
        finally:
            db.close()

    async def add_paid(self, consultation: Consultation) -> bool:
        """
        Insert a paid consultation; a known session id is left untouched.

        Args:
            consultation: Consultation in paid status

        Returns:
            True if inserted, False if the session already had a row
        """
        db: Session = self._session_factory()
        try:
            stmt = (
                self._insert_for(db)
                .values(**self._to_row(consultation))
                .on_conflict_do_nothing(index_elements=["stripe_session_id"])
                .returning(_TABLE.c.id)
            )
            inserted = db.execute(stmt).first() is not None
            db.commit()
            return inserted
        except SQLAlchemyError as e:
            raise self._fail(db, f"inserting session {consultation.stripe_session_id}", e) from e
        finally:
            db.close()

    async def save_submission(self, consultation: Consultation) -> bool:
        """
        Upsert a submitted consultation keyed by its session id.

        The update branch only applies while the stored row is still paid.

        Args:
            consultation: Consultation in submitted status

        Returns:
            True if a row was inserted or updated
        """
        db: Session = self._session_factory()
        try:
            stmt = self._insert_for(db).values(**self._to_row(consultation))
            stmt = stmt.on_conflict_do_update(
                index_elements=["stripe_session_id"],
                set_={column: stmt.excluded[column] for column in _SUBMISSION_COLUMNS},
                where=_TABLE.c.status == ConsultationStatus.PAID.value,
            ).returning(_TABLE.c.id)
            saved = db.execute(stmt).first() is not None
            db.commit()
            return saved
        except SQLAlchemyError as e:
            raise self._fail(db, f"saving submission for session {consultation.stripe_session_id}", e) from e
        finally:
            db.close()

    async def save_answer(
        self, consultation_id: str, response: str, answered_at: datetime
    ) -> Optional[Consultation]:
        """
        Mark a submitted or answered consultation as answered.

        Args:
            consultation_id: Consultation identifier
            response: Admin response text
            answered_at: Answer timestamp

        Returns:
            Updated consultation, or None if no answerable row matched
        """
        db: Session = self._session_factory()
        try:
            stmt = (
                update(_TABLE)
                .where(_TABLE.c.id == consultation_id)
                .where(_TABLE.c.status.in_(_ANSWERABLE_STATUSES))
                .values(
                    status=ConsultationStatus.ANSWERED.value,
                    response=response,
                    answered_at=answered_at,
                )
                .returning(*_TABLE.c)
            )
            row = db.execute(stmt).first()
            db.commit()
            return self._to_entity(row) if row else None
        except SQLAlchemyError as e:
            raise self._fail(db, f"answering consultation {consultation_id}", e) from e
        finally:
            db.close()

    async def list_by_status(self, statuses: Iterable[ConsultationStatus]) -> list[Consultation]:
        """
        List consultations in the given statuses, latest submission first.

        Args:
            statuses: Statuses to include

        Returns:
            List of consultations
        """
        db: Session = self._session_factory()
        try:
            models = (
                db.query(ConsultationModel)
                .filter(ConsultationModel.status.in_([s.value for s in statuses]))
                .order_by(ConsultationModel.submitted_at.desc())
                .all()
            )
            return [self._to_entity(model) for model in models]
        except SQLAlchemyError as e:
            raise self._fail(db, "listing consultations", e) from e
        finally:
            db.close()

    async def delete(self, consultation_id: str) -> bool:
        """
        Delete a consultation.

        Args:
            consultation_id: Consultation identifier

        Returns:
            True if a row was deleted
        """
        db: Session = self._session_factory()
        try:
            result = db.execute(delete(_TABLE).where(_TABLE.c.id == consultation_id))
            db.commit()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            raise self._fail(db, f"deleting consultation {consultation_id}", e) from e
        finally:
            db.close()
