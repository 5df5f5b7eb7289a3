from __future__ import annotations

import logging

import uvicorn

from app.logging import setup_logging
from app.settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info(
        "backend server starting",
        extra={"host": settings.host, "port": settings.port},
    )
    # log_config=None keeps the JSON handler installed above
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
