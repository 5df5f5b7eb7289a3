from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventKind(str, Enum):
    DELIVERED = "delivered"
    OPEN = "open"
    CLICK = "click"
    BOUNCE = "bounce"
    DROPPED = "dropped"


@dataclass(frozen=True)
class Sender:
    email: str
    name: str | None = None


@dataclass(frozen=True)
class TrackingSettings:
    click: bool = True
    open: bool = True


@dataclass(frozen=True)
class SendDefaults:
    """Process-wide values applied to every outgoing email."""

    sender: Sender
    tracking: TrackingSettings = field(default_factory=TrackingSettings)
    validate_recipient: bool = False


@dataclass(frozen=True)
class OutgoingEmail:
    to: str
    subject: str
    sender: Sender
    text: str | None = None
    html: str | None = None
    tracking: TrackingSettings = field(default_factory=TrackingSettings)

    def __post_init__(self):
        if not self.text and not self.html:
            raise ValueError("either text or html body is required")


@dataclass(frozen=True)
class SendResult:
    message_id: str | None
    status_code: int = 202


@dataclass(frozen=True)
class WebhookEvent:
    """Values are untyped: the vendor payload is logged, not validated."""

    email: Any = None
    event: Any = None
    timestamp: Any = None
    message_id: Any = None

    @property
    def kind(self) -> EventKind | None:
        try:
            return EventKind(self.event)
        except (ValueError, TypeError):
            return None


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after_seconds: int

    def headers(self) -> dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.reset_after_seconds)
        return headers
