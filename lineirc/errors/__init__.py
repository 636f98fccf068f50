"""Error hierarchy and error logging helpers."""

from .internal import (  # noqa: F401
    ConfigError,
    EmptyMessageError,
    FramingError,
    InternalError,
    InvalidCommandError,
    LineBreakError,
    LineTooLongError,
    MissingCrlfError,
    NetworkError,
    ParsingError,
)

__all__ = [
    "InternalError",
    "ParsingError",
    "EmptyMessageError",
    "InvalidCommandError",
    "LineBreakError",
    "FramingError",
    "MissingCrlfError",
    "LineTooLongError",
    "NetworkError",
    "ConfigError",
]
