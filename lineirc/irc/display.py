"""Human-readable rendering of received messages."""

from __future__ import annotations

from ..logs.logger import logger
from .command import command_to_text
from .message import IRCMessage


def render_message(message: IRCMessage) -> str:
    """Render as ``:prefix COMMAND 'arg' 'arg'`` for the operator console."""
    head = command_to_text(message.command)
    if message.prefix is not None:
        head = f":{message.prefix} {head}"
    args = "".join(f" '{arg}'" for arg in message.args)
    return f"{head}{args}"


def log_message_sink(message: IRCMessage) -> None:
    logger.log_event("irc", "received", human=render_message(message))
