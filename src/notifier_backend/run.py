"""
Module runner to start the FastAPI server.

Usage:
    python -m notifier_backend.run
"""
import uvicorn

from notifier_backend.core.logging import get_logger
from notifier_backend.core.settings import get_settings

logger = get_logger(__name__)


# PUBLIC_INTERFACE
def main():
    """Entry point to start the FastAPI server with environment-based configuration."""
    settings = get_settings()
    logger.info("Starting notifier backend", extra={"host": settings.api.HOST, "port": settings.api.PORT})
    uvicorn.run(
        "notifier_backend.api.main:app",
        host=settings.api.HOST,
        port=settings.api.PORT,
        log_level=settings.logging.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
