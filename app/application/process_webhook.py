import logging
from typing import Callable, Iterable, Mapping

from app.domain.entities import EventKind, WebhookEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[WebhookEvent], None]


# Nothing stores message state yet; each handler is the hook for it.
def on_delivered(event: WebhookEvent) -> None:
    return None


def on_open(event: WebhookEvent) -> None:
    return None


def on_click(event: WebhookEvent) -> None:
    return None


def on_failed_delivery(event: WebhookEvent) -> None:
    """Shared by bounce and dropped."""
    return None


DEFAULT_EVENT_HANDLERS: Mapping[EventKind, EventHandler] = {
    EventKind.DELIVERED: on_delivered,
    EventKind.OPEN: on_open,
    EventKind.CLICK: on_click,
    EventKind.BOUNCE: on_failed_delivery,
    EventKind.DROPPED: on_failed_delivery,
}


def process_webhook_events(
    events: Iterable[WebhookEvent],
    handlers: Mapping[EventKind, EventHandler] | None = None,
) -> int:
    """
    Log every event and route the known kinds to their handler.
    Returns how many events were dispatched; unknown kinds are skipped.
    """
    handlers = DEFAULT_EVENT_HANDLERS if handlers is None else handlers
    dispatched = 0

    for event in events:
        logger.info(
            "sendgrid event",
            extra={
                "email": event.email,
                "event": event.event,
                "timestamp": event.timestamp,
                "message_id": event.message_id,
            },
        )
        kind = event.kind
        handler = handlers.get(kind) if kind is not None else None
        if handler is None:
            continue
        handler(event)
        dispatched += 1

    return dispatched
