import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from app.application.process_webhook import process_webhook_events
from app.domain.entities import WebhookEvent
from app.schemas.requests import webhook_events_adapter

router = APIRouter(tags=["Webhooks"])
logger = logging.getLogger(__name__)


@router.post("/sendgrid-webhook", response_class=PlainTextResponse)
async def post_sendgrid_webhook(request: Request) -> PlainTextResponse:
    raw = await request.body()
    try:
        parsed = webhook_events_adapter.validate_json(raw)
    except ValidationError as exc:
        logger.warning(
            "invalid sendgrid webhook payload",
            extra={"errors": exc.error_count(), "size": len(raw)},
        )
        return PlainTextResponse(
            "Invalid webhook payload", status_code=status.HTTP_400_BAD_REQUEST
        )

    events = [
        WebhookEvent(
            email=item.email,
            event=item.event,
            timestamp=item.timestamp,
            message_id=item.sg_message_id,
        )
        for item in parsed
    ]
    process_webhook_events(events)
    return PlainTextResponse("OK")
