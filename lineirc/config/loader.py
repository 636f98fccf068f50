"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..constants import DEFAULT_CONFIG_FILE
from ..errors.internal import ConfigError
from ..logs.logger import logger
from .model import ClientConfig


def load_raw(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read the JSON object stored at ``path``.

    A missing file yields an empty dict so defaults apply.

    Raises:
        ConfigError: The file cannot be read or does not hold a JSON object.
    """
    config_path = Path(path)
    try:
        with config_path.open(encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.log_event(
            "config", "file_missing", level=logging.DEBUG, path=str(config_path)
        )
        return {}
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in {config_path}: {e}", data={"path": str(config_path)}
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Cannot read {config_path}: {e}", data={"path": str(config_path)}
        ) from e
    if not isinstance(data, dict):
        raise ConfigError(
            f"{config_path} must contain a JSON object",
            data={"path": str(config_path)},
        )
    return data


def load_config(
    path: str | os.PathLike[str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ClientConfig:
    """Load, merge and validate the client configuration.

    Args:
        path: Config file; defaults to ``LINEIRC_CONF_FILE`` or ``lineirc.conf``.
        overrides: Values that win over the file, ``None`` entries are ignored.

    Raises:
        ConfigError: The file is malformed or the merged values are invalid.
    """
    config_path = path if path is not None else DEFAULT_CONFIG_FILE
    data = load_raw(config_path)
    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        config = ClientConfig.from_dict(data)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid configuration: {e.error_count()} error(s)",
            data={"path": str(config_path), "errors": e.errors(include_url=False)},
        ) from e
    logger.log_event(
        "config",
        "loaded",
        level=logging.DEBUG,
        host=config.host,
        port=config.port,
        nick=config.nick,
    )
    return config
