import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from app.domain.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> PlainTextResponse:
    logger.warning(
        "send rate limit exceeded",
        extra={"path": request.url.path, "retry_after": exc.decision.reset_after_seconds},
    )
    return PlainTextResponse(
        request.app.state.settings.rate_limit_message,
        status_code=429,
        headers=exc.decision.headers(),
    )


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
