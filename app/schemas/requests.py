from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class SendEmailIn(BaseModel):
    """Every field is optional; presence rules live in the send_email use case."""

    model_config = ConfigDict(populate_by_name=True)

    to: str | None = Field(None, description="Recipient address")
    subject: str | None = None
    text: str | None = Field(None, description="Plain-text body")
    html: str | None = Field(None, description="HTML body; defaults to text")
    from_email: str | None = Field(None, alias="fromEmail")
    from_name: str | None = Field(None, alias="fromName")


class WebhookEventIn(BaseModel):
    """
    One entry of a SendGrid Event Webhook POST. Only the object shape is
    enforced; field values pass through as the vendor sent them.
    """

    model_config = ConfigDict(extra="allow")

    email: Any = None
    event: Any = None
    timestamp: Any = None
    sg_message_id: Any = None


webhook_events_adapter = TypeAdapter(list[WebhookEventIn])
