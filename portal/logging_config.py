import logging

from portal.config import settings


def configure_logging() -> logging.Logger:
    """configure root logging once from settings.LOG_LEVEL and return the package logger"""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger("portal")
