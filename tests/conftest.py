"""Shared fixtures: in-memory store and fake payment/email collaborators."""

from typing import Iterable, Optional
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.adapters.outbound.consultation import InMemoryConsultationRepository
from app.application.dtos.payment import CheckoutSession, WebhookEvent
from app.application.ports.consultation_repository import (
    ConsultationRepository,
    ConsultationStoreError,
)
from app.application.ports.email_notifier import EmailDeliveryError, EmailNotifier
from app.application.ports.idempotency_store import IdempotencyStore
from app.application.ports.payment_gateway import (
    InvalidWebhookSignatureError,
    PaymentGateway,
    PaymentGatewayError,
    PaymentSessionNotFoundError,
)
from app.domain.entities.consultation import ConsultationStatus
from app.infrastructure.config.settings import settings
from app.infrastructure.wiring.dependencies import (
    get_consultation_repository,
    get_email_notifier,
    get_idempotency_store,
    get_payment_gateway,
)
from app.main import create_app

VALID_SIGNATURE = "t=1700000000,v1=valid"


class FakePaymentGateway(PaymentGateway):
    """Payment gateway double: events are JSON WebhookEvent payloads."""

    def __init__(self) -> None:
        self.sessions: dict[str, CheckoutSession] = {}
        self.retrieve_error: Optional[Exception] = None
        self.retrieved: list[str] = []

    def add_session(
        self,
        session_id: str,
        amount_total: Optional[int],
        paid: bool = True,
        customer_email: Optional[str] = None,
    ) -> CheckoutSession:
        checkout = CheckoutSession(
            id=session_id, paid=paid, amount_total=amount_total, customer_email=customer_email
        )
        self.sessions[session_id] = checkout
        return checkout

    def verify_webhook(self, payload: bytes, signature: str) -> WebhookEvent:
        if signature != VALID_SIGNATURE:
            raise InvalidWebhookSignatureError("No signatures found matching the expected signature")
        return WebhookEvent.model_validate_json(payload)

    async def retrieve_session(self, session_id: str) -> CheckoutSession:
        self.retrieved.append(session_id)
        if self.retrieve_error is not None:
            raise self.retrieve_error
        if session_id not in self.sessions:
            raise PaymentSessionNotFoundError(f"No such checkout.session: {session_id}")
        return self.sessions[session_id]


class FakeEmailNotifier(EmailNotifier):
    """Email notifier double recording sent emails."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[dict[str, str]] = []

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        if self.fail:
            raise EmailDeliveryError("SendGrid returned status 401")
        self.sent.append({"to": to_address, "subject": subject, "html": html_body})


class FailingConsultationRepository(ConsultationRepository):
    """Repository whose every call fails like an unreachable database."""

    async def get(self, consultation_id: str):
        raise ConsultationStoreError("connection refused")

    async def get_by_session_id(self, session_id: str):
        raise ConsultationStoreError("connection refused")

    async def add_paid(self, consultation) -> bool:
        raise ConsultationStoreError("connection refused")

    async def save_submission(self, consultation) -> bool:
        raise ConsultationStoreError("connection refused")

    async def save_answer(self, consultation_id, response, answered_at):
        raise ConsultationStoreError("connection refused")

    async def list_by_status(self, statuses: Iterable[ConsultationStatus]):
        raise ConsultationStoreError("connection refused")

    async def delete(self, consultation_id: str) -> bool:
        raise ConsultationStoreError("connection refused")


def checkout_completed_event(
    session_id: str,
    amount_total: Optional[int],
    customer_email: Optional[str] = None,
    event_id: str = "evt_1",
) -> WebhookEvent:
    """Build a verified checkout.session.completed event."""
    return WebhookEvent(
        id=event_id,
        type="checkout.session.completed",
        checkout_session=CheckoutSession(
            id=session_id, paid=True, amount_total=amount_total, customer_email=customer_email
        ),
    )


@pytest.fixture
def repository():
    """In-memory consultation repository."""
    return InMemoryConsultationRepository()


@pytest.fixture
def failing_repository():
    """Consultation repository failing on every call."""
    return FailingConsultationRepository()


@pytest.fixture
def payment_gateway():
    """Fake payment gateway."""
    return FakePaymentGateway()


@pytest.fixture
def email_notifier():
    """Fake email notifier that accepts every email."""
    return FakeEmailNotifier()


@pytest.fixture
def failing_email_notifier():
    """Fake email notifier that rejects every email."""
    return FakeEmailNotifier(fail=True)


@pytest.fixture
def make_checkout_event():
    """Factory for checkout.session.completed events."""
    return checkout_completed_event


class MemoryIdempotencyStore(IdempotencyStore):
    """Idempotency store double remembering event ids in a set."""

    def __init__(self) -> None:
        self.processed: set[str] = set()
        self.closed = False

    async def is_processed(self, event_id: str) -> bool:
        return event_id in self.processed

    async def mark_processed(self, event_id: str, ttl_seconds: int) -> None:
        self.processed.add(event_id)

    async def close(self) -> None:
        self.closed = True


PUBLIC_PAGES = {
    "index.html": "<h1 id=\"services\">Aura Intuitive</h1>",
    "form.html": "<form id=\"question-form\"></form>",
    "already-submitted.html": "<p>Question déjà envoyée</p>",
    "admin.html": "<div id=\"admin-dashboard\"></div>",
}

ADMIN_PASSWORD = "s3cret"


@pytest.fixture
def idempotency_store():
    return MemoryIdempotencyStore()


@pytest.fixture
def public_dir(tmp_path):
    """Static site directory with minimal pages."""
    directory = tmp_path / "public"
    directory.mkdir()
    for filename, content in PUBLIC_PAGES.items():
        (directory / filename).write_text(content, encoding="utf-8")
    return directory


@pytest.fixture
def app(repository, payment_gateway, email_notifier, idempotency_store, public_dir):
    """Application wired to in-memory collaborators."""
    with patch.object(settings, "public_dir", str(public_dir)), patch.object(
        settings, "admin_password", ADMIN_PASSWORD
    ), patch.object(settings, "session_secret", "test-session-secret"), patch.object(
        settings, "app_url", "http://testserver"
    ), patch.object(settings, "debug_mode", False):
        application = create_app()
        application.dependency_overrides[get_consultation_repository] = lambda: repository
        application.dependency_overrides[get_payment_gateway] = lambda: payment_gateway
        application.dependency_overrides[get_email_notifier] = lambda: email_notifier
        application.dependency_overrides[get_idempotency_store] = lambda: idempotency_store
        yield application


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def admin_client(client):
    """Test client holding an admin session."""
    response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def stripe_signature():
    """Signature header value accepted by the fake payment gateway."""
    return VALID_SIGNATURE
