"""Unit tests for the SendGrid email notifier adapter."""

from unittest.mock import MagicMock, patch

import pytest

from app.adapters.outbound.email.sendgrid_email_notifier import SendGridEmailNotifier
from app.application.ports.email_notifier import EmailDeliveryError


@pytest.fixture
def sendgrid_client():
    client = MagicMock()
    client.send.return_value = MagicMock(status_code=202)
    return client


@pytest.fixture
def notifier(sendgrid_client):
    with patch(
        "app.adapters.outbound.email.sendgrid_email_notifier.SendGridAPIClient",
        return_value=sendgrid_client,
    ):
        return SendGridEmailNotifier(
            api_key="SG.test", from_email="sarah@aura-intuitive.fr", from_name="Aura Intuitive"
        )


@pytest.mark.asyncio
async def test_send_builds_html_mail(notifier, sendgrid_client):
    """Test that one HTML mail is sent from the configured sender."""
    await notifier.send("camille@example.com", "🔮 Votre guidance", "<p>Bonjour</p>")

    sendgrid_client.send.assert_called_once()
    mail = sendgrid_client.send.call_args.args[0].get()
    assert mail["from"] == {"email": "sarah@aura-intuitive.fr", "name": "Aura Intuitive"}
    assert mail["subject"] == "🔮 Votre guidance"
    assert mail["personalizations"][0]["to"] == [{"email": "camille@example.com"}]
    assert mail["content"] == [{"type": "text/html", "value": "<p>Bonjour</p>"}]


@pytest.mark.asyncio
async def test_send_rejected_status_raises(notifier, sendgrid_client):
    sendgrid_client.send.return_value = MagicMock(status_code=400)

    with pytest.raises(EmailDeliveryError):
        await notifier.send("camille@example.com", "Sujet", "<p>Bonjour</p>")


@pytest.mark.asyncio
async def test_send_client_error_raises(notifier, sendgrid_client):
    """Test that SendGrid client exceptions become EmailDeliveryError."""
    sendgrid_client.send.side_effect = RuntimeError("HTTP Error 401: Unauthorized")

    with pytest.raises(EmailDeliveryError):
        await notifier.send("camille@example.com", "Sujet", "<p>Bonjour</p>")

    assert sendgrid_client.send.call_count == 1


@pytest.mark.asyncio
async def test_send_without_api_key_raises():
    with patch(
        "app.adapters.outbound.email.sendgrid_email_notifier.settings.sendgrid_api_key", None
    ):
        notifier = SendGridEmailNotifier(api_key=None, from_email="sarah@aura-intuitive.fr")

    with pytest.raises(EmailDeliveryError):
        await notifier.send("camille@example.com", "Sujet", "<p>Bonjour</p>")
