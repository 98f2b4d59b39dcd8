"""Unit tests for admin HTTP routes."""

from datetime import datetime, timezone

import pytest
from fastapi import status

from app.domain.entities.consultation import Consultation, ConsultationStatus


async def _submitted(repository, session_id="cs_123", amount_total=1500):
    consultation = Consultation.from_checkout(session_id, amount_total)
    consultation.submit(
        name="Camille",
        email="camille@example.com",
        message="Est-ce le bon moment ?",
        submitted_at=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc),
    )
    await repository.save_submission(consultation)
    return consultation


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/admin/stats"),
        ("get", "/api/admin/consultations"),
        ("post", "/api/admin/respond"),
        ("delete", "/api/admin/consultations/some-id"),
    ],
)
async def test_admin_routes_require_session(client, method, path):
    """Test that admin routes answer 401 without the admin session."""
    response = client.request(method, path)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Non autorisé."}


@pytest.mark.asyncio
async def test_login_with_wrong_password(client):
    response = client.post("/api/admin/login", json={"password": "nope"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Mot de passe incorrect."}
    assert client.get("/api/admin/stats").status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_login_sets_session_cookie(client):
    response = client.post("/api/admin/login", json={"password": "s3cret"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True}
    assert "aura_admin" in response.cookies


@pytest.mark.asyncio
async def test_logout_ends_session(admin_client):
    assert admin_client.get("/api/admin/stats").status_code == status.HTTP_200_OK

    response = admin_client.post("/api/admin/logout")

    assert response.json() == {"success": True}
    assert admin_client.get("/api/admin/stats").status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_stats(admin_client, repository):
    await repository.add_paid(Consultation.from_checkout("cs_paid", 1500))
    await _submitted(repository, "cs_a", 500)
    answered = await _submitted(repository, "cs_b", 1500)
    await repository.save_answer(answered.id, "R", datetime.now(timezone.utc))

    response = admin_client.get("/api/admin/stats")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"total": 2, "pending": 1, "answered": 1, "revenue": 20.0}


@pytest.mark.asyncio
async def test_list_consultations(admin_client, repository):
    consultation = await _submitted(repository)

    response = admin_client.get("/api/admin/consultations")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert len(body) == 1
    assert body[0]["id"] == consultation.id
    assert body[0]["status"] == "submitted"
    assert body[0]["service"] == "Consultation Ressenti"
    assert body[0]["amount"] == 15.0
    assert body[0]["message"] == "Est-ce le bon moment ?"


@pytest.mark.asyncio
async def test_respond_saves_and_emails(admin_client, repository, email_notifier):
    consultation = await _submitted(repository)

    response = admin_client.post(
        "/api/admin/respond", json={"id": consultation.id, "response": "Voici ma guidance"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "success": True,
        "emailSent": True,
        "message": "Réponse enregistrée et email envoyé !",
    }
    stored = await repository.get(consultation.id)
    assert stored.status == ConsultationStatus.ANSWERED
    assert email_notifier.sent[0]["to"] == "camille@example.com"


@pytest.mark.asyncio
async def test_respond_reports_email_failure(admin_client, repository, email_notifier):
    """Test that the answer is kept and emailSent is false when the email fails."""
    consultation = await _submitted(repository)
    email_notifier.fail = True

    response = admin_client.post(
        "/api/admin/respond", json={"id": consultation.id, "response": "Voici ma guidance"}
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["success"] is True
    assert body["emailSent"] is False
    assert "manuellement" in body["message"]
    stored = await repository.get(consultation.id)
    assert stored.status == ConsultationStatus.ANSWERED
    assert stored.response == "Voici ma guidance"


@pytest.mark.asyncio
async def test_respond_missing_fields(admin_client):
    response = admin_client.post("/api/admin/respond", json={"id": "", "response": "R"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Champs manquants."}


@pytest.mark.asyncio
async def test_respond_unknown_consultation(admin_client):
    response = admin_client.post("/api/admin/respond", json={"id": "missing", "response": "R"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Consultation introuvable."}


@pytest.mark.asyncio
async def test_respond_to_paid_consultation(admin_client, repository):
    consultation = Consultation.from_checkout("cs_123", 1500)
    await repository.add_paid(consultation)

    response = admin_client.post(
        "/api/admin/respond", json={"id": consultation.id, "response": "R"}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert (await repository.get(consultation.id)).status == ConsultationStatus.PAID


@pytest.mark.asyncio
async def test_delete_consultation(admin_client, repository):
    keep = await _submitted(repository, "cs_keep")
    drop = await _submitted(repository, "cs_drop")

    response = admin_client.delete(f"/api/admin/consultations/{drop.id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True}
    assert await repository.get(drop.id) is None
    assert await repository.get(keep.id) is not None


@pytest.mark.asyncio
async def test_delete_unknown_consultation_succeeds(admin_client, repository):
    keep = await _submitted(repository)

    response = admin_client.delete("/api/admin/consultations/does-not-exist")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True}
    assert await repository.get(keep.id) is not None
