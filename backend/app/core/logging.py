"""
Logging setup for the API process.
"""

import logging
import sys
from typing import Optional

from app.core.config import settings


ACCESS_LOGGER_NAME = "app.access"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging to stdout.

    Access lines from the request logger go through the ``app.access``
    logger and inherit this configuration.
    """
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # uvicorn's own access log would duplicate ours
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info("Logging configured", extra={"environment": settings.ENVIRONMENT})


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module."""
    return logging.getLogger(name)
