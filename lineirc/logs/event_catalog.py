"""Event template catalog: ``(domain, action)`` -> human-readable format string."""

from __future__ import annotations

import json
from collections.abc import Mapping
from importlib import resources
from typing import Any

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}
_JSON_FILENAME = "event_templates.json"  # shipped as package data next to this module


def _flatten(raw: Mapping[str, Any]) -> dict[tuple[str, str], str]:
    templates: dict[tuple[str, str], str] = {}
    for domain, actions in raw.items():
        if not isinstance(actions, Mapping):
            continue
        for action, template in actions.items():
            if isinstance(template, str):
                templates[(str(domain), str(action))] = template
    return templates


def _load_event_templates() -> dict[tuple[str, str], str]:
    try:
        text = resources.files(__package__).joinpath(_JSON_FILENAME).read_text(
            encoding="utf-8"
        )
        raw: Any = json.loads(text)
    except FileNotFoundError:
        return {("app", "load_error"): "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}
    return _flatten(raw) if isinstance(raw, Mapping) else {}


def reload_event_templates() -> None:
    # Updated in place so re-exported references stay current.
    EVENT_TEMPLATES.clear()
    EVENT_TEMPLATES.update(_load_event_templates())


def render_event(domain: str, action: str, **kwargs: object) -> str | None:
    """Fill the template for ``domain``/``action``; ``None`` when there is none.

    A template referencing a field the caller did not pass is returned as is.
    """
    template = EVENT_TEMPLATES.get((domain, action))
    if template is None:
        return None
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return template


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "reload_event_templates", "render_event"]
