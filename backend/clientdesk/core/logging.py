"""
Logging setup for the API process.
"""

import logging
import sys

from clientdesk.core.config import settings


def setup_logging() -> None:
    """
    Configure root logging once at startup.
    """
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # Set log levels for specific libraries
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured",
        extra={"level": settings.LOG_LEVEL, "backend_url": settings.BACKEND_API_URL},
    )
