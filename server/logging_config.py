"""Centralized logging configuration for the config studio server."""

import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Generator, Optional

# Log format constants
SIMPLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
)

# Environment variable names
LOG_LEVEL_ENV = "LOG_LEVEL"

# Default values
DEFAULT_LOG_LEVEL = "INFO"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging for the entire application.

    Args:
        level: Log level override. If not provided, uses LOG_LEVEL env var or INFO.
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    # Line numbers only when debugging
    fmt = DETAILED_FORMAT if log_level == logging.DEBUG else SIMPLE_FORMAT

    logging.basicConfig(
        level=log_level,
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # Requests are already logged by RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)

    if not isinstance(getattr(logging, level_name, None), int):
        logging.getLogger(__name__).warning(
            "Unknown %s %r, using INFO", LOG_LEVEL_ENV, level_name
        )


@contextmanager
def log_timing(
    logger: logging.Logger, operation: str, level: int = logging.DEBUG
) -> Generator[None, None, None]:
    """Context manager for timing operations.

    A failing operation is logged at WARNING with the exception type, and
    the exception is re-raised.

    Args:
        logger: Logger instance to use.
        operation: Name of the operation being timed.
        level: Log level for the success message (default: DEBUG).

    Example:
        with log_timing(logger, "opencode models"):
            output = await run_models_command()
    """
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.warning("%s failed after %.1fms (%s)", operation, duration_ms, type(e).__name__)
        raise
    duration_ms = (time.perf_counter() - start) * 1000
    logger.log(level, "%s completed in %.1fms", operation, duration_ms)
