from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = ["*"]

    # Vendor
    sendgrid_api_key: SecretStr
    sendgrid_base_url: str = "https://api.sendgrid.com"
    http_timeout_seconds: float = 10.0

    # Sending defaults
    from_email: str = "noreply@example.com"
    from_name: str = "Mail Relay"
    click_tracking: bool = True
    open_tracking: bool = True
    validate_recipient: bool = False

    # Throttle on /api/send-email
    rate_limit_max: int = 100
    rate_limit_window_seconds: int = 15 * 60
    rate_limit_backend: Literal["memory", "redis"] = "memory"
    rate_limit_trust_proxy: bool = False
    rate_limit_message: str = "Too many email requests, please try again later."
    redis_url: str = "redis://localhost:6379/0"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
