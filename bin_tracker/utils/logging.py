"""
Logging helpers shared by the API routers.
"""
import logging
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger instance with consistent configuration.

    Args:
        name: Logger name (typically __name__)
        level: Optional logging level override
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def _format_context(context: Optional[dict]) -> str:
    if not context:
        return ""
    return f" [{', '.join(f'{k}={v}' for k, v in context.items())}]"


def log_api_error(logger: logging.Logger, operation: str, error: Exception, context: Optional[dict] = None) -> None:
    """Log a failed API operation with its context."""
    logger.warning(f"❌ {operation} failed{_format_context(context)}: {error}")


def log_api_success(logger: logging.Logger, operation: str, context: Optional[dict] = None) -> None:
    """Log a completed API operation with its context."""
    logger.info(f"✅ {operation} completed successfully{_format_context(context)}")
