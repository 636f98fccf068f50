"""Event logger used across the client."""

from __future__ import annotations

import logging
import os

from .event_catalog import render_event


class ClientLogger:
    """Logs named events (``domain_action``) with human-readable text.

    Handlers are not installed here; :mod:`lineirc.logging_config` configures
    the root logger and records propagate to it.
    """

    def __init__(self, name: str = "lineirc") -> None:
        # Fixed width for event name column when in debug (alignment)
        self._event_name_width = 28
        self.logger = logging.getLogger(name)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        event_name = f"{domain}_{action}".lower()
        human_text = human
        if human_text is None:
            human_text = render_event(domain, action, **kwargs)
        if human_text is None:
            human_text = f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
            kwargs.setdefault("derived", True)
        self._log(level, event_name, human_text, exc_info=exc_info, **kwargs)

    def _log(
        self,
        level: int,
        event_name: str,
        human_text: str,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        if self._is_debug_enabled():
            msg = self._build_debug_message(event_name, human_text, kwargs)
        else:
            msg = human_text
        self.logger.log(level, msg, exc_info=exc_info)

    @staticmethod
    def _is_debug_enabled() -> bool:
        return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")

    def _build_debug_message(
        self, event_name: str, human_text: str, kwargs: dict[str, object]
    ) -> str:
        width = self._event_name_width
        if len(event_name) <= width:
            ev = event_name.ljust(width)
        else:  # truncate but keep rightmost indicator
            ev = event_name[: width - 1] + "…"
        base = f"{ev} {human_text}"
        context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        if context:
            base = f"{base} ({context})"
        return base


logger = ClientLogger()
