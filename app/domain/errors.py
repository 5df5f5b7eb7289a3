from typing import Any

from app.domain.entities import RateLimitDecision


class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class MissingRequiredFields(DomainError):
    """Recipient, subject, or both bodies are absent."""

    def __init__(
        self, message: str = "Missing required fields: to, subject, and text/html"
    ) -> None:
        super().__init__(message)


class InvalidRecipient(DomainError):
    """Recipient address does not look like an email address."""

    def __init__(self, recipient: str) -> None:
        super().__init__("Invalid recipient email address")
        self.recipient = recipient


class VendorApiError(DomainError):
    """The vendor answered the send call with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors

    @property
    def details(self) -> list[dict[str, Any]] | str:
        return self.errors or str(self)


class RateLimitExceeded(DomainError):
    """Caller went over the send quota for the current window."""

    def __init__(self, decision: RateLimitDecision) -> None:
        super().__init__("rate limit exceeded")
        self.decision = decision
