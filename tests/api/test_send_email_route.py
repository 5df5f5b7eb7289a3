import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.presentation.dependencies import get_email_port, get_rate_limiter
from tests.fakes import (
    FakeEmailBroken,
    FakeEmailOK,
    FakeEmailVendorError,
    FakeRateLimiter,
)

MISSING = {"error": "Missing required fields: to, subject, and text/html"}


def test_send_email_happy_path(client, app_and_deps):
    _, email, limiter = app_and_deps

    response = client.post(
        "/api/send-email",
        json={"to": "reader@example.com", "subject": "Hi", "text": "Hello there"},
    )

    assert response.status_code == 200, response.text
    assert response.json() == {
        "success": True,
        "messageId": "msg-123",
        "message": "Email sent successfully",
    }
    assert len(email.calls) == 1
    sent = email.calls[0]
    assert sent.to == "reader@example.com"
    assert sent.sender.email == "default@relay.test"
    assert sent.sender.name == "Relay Default"
    assert sent.html == "Hello there"
    assert sent.tracking.click is True and sent.tracking.open is True
    assert limiter.keys == ["send-email:testclient"]
    assert response.headers["X-RateLimit-Limit"] == "100"


def test_send_email_sender_override(client, app_and_deps):
    _, email, _ = app_and_deps

    response = client.post(
        "/api/send-email",
        json={
            "to": "reader@example.com",
            "subject": "Hi",
            "html": "<p>Hello</p>",
            "fromEmail": "shop@example.com",
            "fromName": "The Shop",
        },
    )

    assert response.status_code == 200
    sent = email.calls[0]
    assert sent.sender.email == "shop@example.com"
    assert sent.sender.name == "The Shop"
    assert sent.text is None
    assert sent.html == "<p>Hello</p>"


@pytest.mark.parametrize(
    "payload",
    [
        {"subject": "Hi", "text": "Hello"},
        {"to": "reader@example.com", "text": "Hello"},
        {"to": "reader@example.com", "subject": "Hi"},
        {"to": "", "subject": "Hi", "text": "Hello"},
        {"to": "reader@example.com", "subject": "Hi", "text": "", "html": ""},
        {},
    ],
)
def test_send_email_missing_fields(client, app_and_deps, payload):
    _, email, _ = app_and_deps

    response = client.post("/api/send-email", json=payload)

    assert response.status_code == 400
    assert response.json() == MISSING
    assert email.calls == []


def test_send_email_vendor_error_passes_status_and_details(client, app_and_deps):
    app, _, _ = app_and_deps
    errors = [{"message": "Permission denied", "field": None, "help": None}]
    app.dependency_overrides[get_email_port] = lambda: FakeEmailVendorError(
        status_code=403, errors=errors
    )

    response = client.post(
        "/api/send-email",
        json={"to": "reader@example.com", "subject": "Hi", "text": "Hello"},
    )

    assert response.status_code == 403
    assert response.json() == {"error": "SendGrid API error", "details": errors}


def test_send_email_vendor_error_without_status_is_500(client, app_and_deps):
    app, _, _ = app_and_deps
    app.dependency_overrides[get_email_port] = lambda: FakeEmailVendorError(
        status_code=None, errors=None, message="vendor exploded"
    )

    response = client.post(
        "/api/send-email",
        json={"to": "reader@example.com", "subject": "Hi", "text": "Hello"},
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": "SendGrid API error",
        "details": "vendor exploded",
    }


def test_send_email_plain_error_is_server_error(client, app_and_deps):
    app, _, _ = app_and_deps
    app.dependency_overrides[get_email_port] = lambda: FakeEmailBroken(
        "connection reset"
    )

    response = client.post(
        "/api/send-email",
        json={"to": "reader@example.com", "subject": "Hi", "text": "Hello"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Server error", "details": "connection reset"}


def test_send_email_recipient_validation_when_enabled(settings):
    strict = settings.model_copy(update={"validate_recipient": True})
    app = create_app(strict)
    email = FakeEmailOK()
    app.dependency_overrides[get_email_port] = lambda: email
    app.dependency_overrides[get_rate_limiter] = lambda: FakeRateLimiter()
    client = TestClient(app)

    response = client.post(
        "/api/send-email",
        json={"to": "not-an-address", "subject": "Hi", "text": "Hello"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid recipient email address"}
    assert email.calls == []


def test_send_email_cors_preflight(client):
    response = client.options(
        "/api/send-email",
        headers={
            "Origin": "http://dashboard.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"content": b"not json", "headers": {"Content-Type": "application/json"}},
        {"json": ["reader@example.com"]},
        {"json": {"to": 42, "subject": "Hi", "text": "x"}},
    ],
)
def test_send_email_unparseable_body_is_missing_fields(client, app_and_deps, kwargs):
    _, email, _ = app_and_deps

    response = client.post("/api/send-email", **kwargs)

    assert response.status_code == 400
    assert response.json() == MISSING
    assert email.calls == []


def test_send_email_without_vendor_message_id_omits_key(client, app_and_deps):
    app, _, _ = app_and_deps
    app.dependency_overrides[get_email_port] = lambda: FakeEmailOK(message_id=None)

    response = client.post(
        "/api/send-email",
        json={"to": "reader@example.com", "subject": "Hi", "text": "Hello"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Email sent successfully"}
