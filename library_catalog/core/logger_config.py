"""
Logging configuration.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from library_catalog.core.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


class InterceptHandler(logging.Handler):
    """Routes stdlib logging records (uvicorn, SQLAlchemy) into loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller so loguru reports the right file and line
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(settings: Settings) -> None:
    """Configure loguru sinks and intercept stdlib logging."""
    logger.remove()

    logger.add(sys.stdout, level=settings.LOG_LEVEL.upper(), colorize=True, format=CONSOLE_FORMAT)

    if settings.LOG_FILE:
        Path(settings.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            settings.LOG_FILE,
            level=settings.LOG_LEVEL.upper(),
            rotation=settings.LOG_ROTATION,
            retention=settings.LOG_RETENTION,
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=settings.DEBUG,
            format=FILE_FORMAT,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.getLogger("uvicorn.access").handlers = [InterceptHandler()]


def log_info(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    logger.bind(context=context or {}).info(message)


def log_warning(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    logger.bind(context=context or {}).warning(message)


def log_db_error(error: Exception, operation: str = None, context: dict = None):
    """Log a failed store operation."""
    error_msg = f"Database error: {str(error)}"
    if operation:
        error_msg += f" Operation: {operation}"
    if context:
        error_msg += f" Context: {context}"

    logger.bind(
        error_type="database",
        operation=operation,
        error_class=error.__class__.__name__,
        error_module=error.__class__.__module__,
    ).opt(exception=error).error(error_msg)


def log_business_error(message: str, context: dict = None):
    """Log an application-level (non-critical) error."""
    logger.bind(context=context or {}).warning(f"Business error: {message}")


def log_performance(operation: str, duration: float, context: dict = None):
    logger.bind(operation=operation, duration=duration, context=context or {}).debug(
        f"Performance: {operation} took {duration:.4f} seconds"
    )


__all__ = [
    "logger",
    "setup_logging",
    "log_info",
    "log_warning",
    "log_db_error",
    "log_business_error",
    "log_performance",
]
