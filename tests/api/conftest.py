import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.presentation.dependencies import get_email_port, get_rate_limiter
from app.settings import Settings
from tests.fakes import FakeEmailOK, FakeRateLimiter


@pytest.fixture()
def settings():
    return Settings(
        sendgrid_api_key="SG.test-key",
        from_email="default@relay.test",
        from_name="Relay Default",
        _env_file=None,
    )


@pytest.fixture()
def app_and_deps(settings):
    app = create_app(settings)
    email = FakeEmailOK(message_id="msg-123")
    limiter = FakeRateLimiter()

    app.dependency_overrides[get_email_port] = lambda: email
    app.dependency_overrides[get_rate_limiter] = lambda: limiter

    try:
        yield app, email, limiter
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app, _, _ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)
