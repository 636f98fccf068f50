"""Centralized internal error hierarchy.

These exceptions give semantic categories to everything that can go wrong
between the socket and the operator. Protocol-level errors are recoverable
per line; transport errors end the loop that hit them.

Classes:
  InternalError        – Base for all internal errors.
  ParsingError         – A protocol line could not be turned into a message.
  EmptyMessageError    – Blank first token or missing command token.
  InvalidCommandError  – Command token is neither a keyword nor an integer.
  LineBreakError       – Outgoing text carries a CR or LF inside the line.
  FramingError         – The byte stream violated CRLF line framing.
  MissingCrlfError     – Carriage return without line feed, or EOF mid-line.
  LineTooLongError     – A line exceeded the configured maximum length.
  NetworkError         – Connecting to or talking to the server failed.
  ConfigError          – Configuration could not be loaded or validated.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ParsingError(InternalError):
    """Exception raised when a protocol line cannot be parsed into a message."""


class EmptyMessageError(ParsingError):
    """The line starts with a space, or a prefix is not followed by a command."""


class InvalidCommandError(ParsingError):
    """The command token is neither a known keyword nor a decimal code."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid command: {token!r}", data={"token": token})
        self.token = token


class LineBreakError(ParsingError):
    """Outgoing text contains a carriage return or line feed."""


class FramingError(InternalError):
    """Exception raised when the inbound byte stream breaks line framing."""


class MissingCrlfError(FramingError):
    """A line was not terminated by CRLF."""


class LineTooLongError(FramingError):
    """A line grew past the maximum allowed length and was discarded."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"Line exceeds maximum length of {limit} bytes", data={"limit": limit}
        )
        self.limit = limit


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors."""


class ConfigError(InternalError):
    """Exception raised when configuration is missing, malformed or invalid."""


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
