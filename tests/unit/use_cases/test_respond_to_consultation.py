"""Unit tests for RespondToConsultationUseCase."""

import pytest

from app.application.dtos.consultation import RespondToConsultationRequest
from app.application.errors import (
    ConsultationNotFoundError,
    MissingFieldsError,
    NotYetSubmittedError,
    PersistenceError,
)
from app.application.use_cases.respond_to_consultation import RespondToConsultationUseCase
from app.application.use_cases.user_messages_fr import UserMessagesFR
from app.domain.entities.consultation import Consultation, ConsultationStatus


async def _submitted(repository, session_id="cs_123", email="camille@example.com"):
    consultation = Consultation.from_checkout(session_id, 1500)
    consultation.submit(name="Camille", email=email, message="Q")
    await repository.save_submission(consultation)
    return consultation


@pytest.mark.asyncio
async def test_answer_is_saved_and_emailed(repository, email_notifier):
    """Test submitted -> answered and the guidance email sent to the submitted address."""
    consultation = await _submitted(repository)
    use_case = RespondToConsultationUseCase(repository, email_notifier)

    result = await use_case.execute(
        RespondToConsultationRequest(id=consultation.id, response="Voici ma guidance")
    )

    stored = await repository.get(consultation.id)
    assert result.success is True
    assert result.email_sent is True
    assert result.message == UserMessagesFR.RESPONSE_SAVED_EMAIL_SENT
    assert stored.status == ConsultationStatus.ANSWERED
    assert stored.response == "Voici ma guidance"
    assert stored.answered_at is not None
    assert len(email_notifier.sent) == 1
    assert email_notifier.sent[0]["to"] == "camille@example.com"
    assert email_notifier.sent[0]["subject"] == (
        "🔮 Votre guidance Aura Intuitive — Consultation Ressenti"
    )
    assert "Voici ma guidance" in email_notifier.sent[0]["html"]


@pytest.mark.asyncio
async def test_answer_survives_email_failure(repository, failing_email_notifier):
    """Test that a failed email still leaves the consultation answered."""
    consultation = await _submitted(repository)
    use_case = RespondToConsultationUseCase(repository, failing_email_notifier)

    result = await use_case.execute(
        RespondToConsultationRequest(id=consultation.id, response="Voici ma guidance")
    )

    stored = await repository.get(consultation.id)
    assert result.success is True
    assert result.email_sent is False
    assert result.message == UserMessagesFR.RESPONSE_SAVED_EMAIL_FAILED
    assert stored.status == ConsultationStatus.ANSWERED
    assert stored.response == "Voici ma guidance"


@pytest.mark.asyncio
async def test_reanswer_overwrites_response(repository, email_notifier):
    consultation = await _submitted(repository)
    use_case = RespondToConsultationUseCase(repository, email_notifier)

    await use_case.execute(RespondToConsultationRequest(id=consultation.id, response="Première"))
    await use_case.execute(RespondToConsultationRequest(id=consultation.id, response="Corrigée"))

    stored = await repository.get(consultation.id)
    assert stored.status == ConsultationStatus.ANSWERED
    assert stored.response == "Corrigée"
    assert len(email_notifier.sent) == 2


@pytest.mark.asyncio
async def test_paid_consultation_cannot_be_answered(repository, email_notifier):
    """Test that the admin cannot answer before the customer submits."""
    consultation = Consultation.from_checkout("cs_123", 1500)
    await repository.add_paid(consultation)
    use_case = RespondToConsultationUseCase(repository, email_notifier)

    with pytest.raises(NotYetSubmittedError):
        await use_case.execute(RespondToConsultationRequest(id=consultation.id, response="R"))

    stored = await repository.get(consultation.id)
    assert stored.status == ConsultationStatus.PAID
    assert email_notifier.sent == []


@pytest.mark.asyncio
@pytest.mark.parametrize("consultation_id,response", [("", "R"), ("some-id", "   "), ("", "")])
async def test_blank_fields_are_rejected(repository, email_notifier, consultation_id, response):
    use_case = RespondToConsultationUseCase(repository, email_notifier)

    with pytest.raises(MissingFieldsError) as exc_info:
        await use_case.execute(
            RespondToConsultationRequest(id=consultation_id, response=response)
        )

    assert exc_info.value.message == UserMessagesFR.MISSING_FIELDS


@pytest.mark.asyncio
async def test_unknown_id_is_not_found(repository, email_notifier):
    use_case = RespondToConsultationUseCase(repository, email_notifier)

    with pytest.raises(ConsultationNotFoundError):
        await use_case.execute(RespondToConsultationRequest(id="missing", response="R"))


@pytest.mark.asyncio
async def test_store_failure_raises_persistence_error(failing_repository, email_notifier):
    use_case = RespondToConsultationUseCase(failing_repository, email_notifier)

    with pytest.raises(PersistenceError) as exc_info:
        await use_case.execute(RespondToConsultationRequest(id="some-id", response="R"))

    assert exc_info.value.message == UserMessagesFR.UPDATE_FAILED
    assert email_notifier.sent == []
