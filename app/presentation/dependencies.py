import logging

from fastapi import Depends, Request, Response
from pydantic import ValidationError

from app.domain.entities import SendDefaults, Sender, TrackingSettings
from app.domain.errors import RateLimitExceeded
from app.domain.ports.email_port import EmailPort
from app.domain.ports.rate_limiter import RateLimiterPort
from app.schemas.requests import SendEmailIn
from app.settings import Settings

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    # Set once in app.main create_app()
    return request.app.state.settings


def get_email_port(request: Request) -> EmailPort:
    # This is set in app.main lifespan()
    return request.app.state.email_adapter


def get_rate_limiter(request: Request) -> RateLimiterPort:
    return request.app.state.rate_limiter


def get_send_defaults(settings: Settings = Depends(get_app_settings)) -> SendDefaults:
    return SendDefaults(
        sender=Sender(email=settings.from_email, name=settings.from_name),
        tracking=TrackingSettings(
            click=settings.click_tracking, open=settings.open_tracking
        ),
        validate_recipient=settings.validate_recipient,
    )


def client_address(request: Request, *, trust_proxy: bool = False) -> str:
    if trust_proxy:
        forwarded = request.headers.get("X-Forwarded-For", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else "unknown"


async def enforce_send_rate_limit(
    request: Request,
    response: Response,
    limiter: RateLimiterPort = Depends(get_rate_limiter),
    settings: Settings = Depends(get_app_settings),
) -> None:
    source = client_address(request, trust_proxy=settings.rate_limit_trust_proxy)
    decision = await limiter.hit(f"send-email:{source}")
    if not decision.allowed:
        raise RateLimitExceeded(decision)
    response.headers.update(decision.headers())


async def read_send_request(request: Request) -> SendEmailIn:
    """
    A body that does not parse into SendEmailIn counts as one with every
    field absent, so send_email answers it with the missing-fields error.
    """
    raw = await request.body()
    if not raw.strip():
        return SendEmailIn()
    try:
        return SendEmailIn.model_validate_json(raw)
    except ValidationError as exc:
        logger.info(
            "unparseable send request body",
            extra={"errors": exc.error_count(), "size": len(raw)},
        )
        return SendEmailIn()
