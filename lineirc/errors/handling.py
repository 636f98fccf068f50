from __future__ import annotations

import logging

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    FramingError,
    InternalError,
    NetworkError,
    ParsingError,
)


def classify_error(error: BaseException) -> str:
    """Return the structured-log category for ``error``."""
    if isinstance(error, ParsingError):
        return "parsing"
    if isinstance(error, FramingError):
        return "framing"
    if isinstance(error, NetworkError | OSError | ConnectionError):
        return "network"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(
    message: str,
    error: Exception,
    context: dict | None = None,
    level: int = logging.ERROR,
) -> None:
    """Logs an error message with the associated exception details.

    The exception's own ``data`` (for internal errors) is merged under the
    caller's context so dropped lines can be traced back.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
        level: Logging level for the record.
    """
    merged: dict = {}
    if isinstance(error, InternalError):
        merged.update(error.data)
    if context:
        merged.update(context)

    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
        level=level,
    )
