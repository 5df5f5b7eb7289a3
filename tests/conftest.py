import os

# app.main builds the app at import time and the API key is required
os.environ.setdefault("SENDGRID_API_KEY", "SG.test-key")

import pytest

from app.domain.entities import SendDefaults, Sender, TrackingSettings
from tests.fakes import FakeEmailBroken, FakeEmailOK, FakeEmailVendorError


@pytest.fixture()
def defaults():
    return SendDefaults(
        sender=Sender(email="default@relay.test", name="Relay Default"),
        tracking=TrackingSettings(click=True, open=True),
    )


@pytest.fixture()
def email_ok():
    return FakeEmailOK(message_id="msg-123")


@pytest.fixture()
def email_vendor_error():
    return FakeEmailVendorError(
        status_code=403,
        errors=[
            {
                "message": "The from address does not match a verified Sender Identity.",
                "field": "from.email",
                "help": None,
            }
        ],
    )


@pytest.fixture()
def email_broken():
    return FakeEmailBroken("connection reset")
