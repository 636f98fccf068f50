"""
Configuration constants for the lineirc client

This module contains the tunable defaults used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Server defaults
DEFAULT_SERVER_HOST = os.getenv("LINEIRC_SERVER_HOST", "127.0.0.1")
DEFAULT_SERVER_PORT = _get_env_int("LINEIRC_SERVER_PORT", 6697)

# Connection establishment
CONNECT_TIMEOUT_SECONDS = _get_env_float(
    "LINEIRC_CONNECT_TIMEOUT", 10.0
)  # Per-attempt TCP connect timeout
CONNECT_MAX_ATTEMPTS = _get_env_int(
    "LINEIRC_CONNECT_ATTEMPTS", 3
)  # Initial connect attempts before giving up
CONNECT_BACKOFF_MAX_SECONDS = _get_env_int(
    "LINEIRC_CONNECT_BACKOFF_MAX", 10
)  # Ceiling for the exponential wait between connect attempts

# Line framing
MAX_LINE_LENGTH = _get_env_int(
    "LINEIRC_MAX_LINE_LENGTH", 5120
)  # Longest accepted inbound line, CRLF excluded
READ_CHUNK_SIZE = _get_env_int(
    "LINEIRC_READ_CHUNK_SIZE", 4096
)  # Bytes requested from the transport per read

# Config file
DEFAULT_CONFIG_FILE = os.getenv("LINEIRC_CONF_FILE", "lineirc.conf")
