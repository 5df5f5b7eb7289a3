import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.asyncio import Redis

from app.infrastructure.email.sendgrid_adapter import SendGridEmailAdapter
from app.infrastructure.rate_limit.memory_limiter import InMemoryRateLimiter
from app.infrastructure.redis_cache.rate_limiter import RedisRateLimiter
from app.logging import setup_logging
from app.presentation.api import api
from app.presentation.exception_handlers import add_exception_handlers
from app.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    # startup
    # ONE vendor adapter per process; it owns its HTTP client
    email_adapter = SendGridEmailAdapter(
        api_key=settings.sendgrid_api_key.get_secret_value(),
        base_url=settings.sendgrid_base_url,
        timeout=settings.http_timeout_seconds,
    )
    app.state.email_adapter = email_adapter  # expose to dependencies

    redis: Redis | None = None
    if settings.rate_limit_backend == "redis":
        redis = Redis.from_url(
            settings.redis_url, encoding="utf-8", decode_responses=True
        )
        app.state.rate_limiter = RedisRateLimiter(
            redis,
            limit=settings.rate_limit_max,
            window_seconds=settings.rate_limit_window_seconds,
        )
    else:
        app.state.rate_limiter = InMemoryRateLimiter(
            limit=settings.rate_limit_max,
            window_seconds=settings.rate_limit_window_seconds,
        )
    logger.info(
        "mail relay ready",
        extra={
            "rate_limit_backend": settings.rate_limit_backend,
            "sendgrid_base_url": settings.sendgrid_base_url,
        },
    )

    try:
        yield
    finally:
        # shutdown
        await email_adapter.aclose()
        if redis is not None:
            await redis.aclose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    app = FastAPI(title="Mail Relay API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    add_exception_handlers(app)
    app.include_router(api)
    return app


app = create_app()
