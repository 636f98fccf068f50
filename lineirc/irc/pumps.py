"""The two long-running loops that move lines between server and operator.

Malformed lines are logged and skipped; transport errors end the loop and
propagate to the caller.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from ..errors.handling import log_error
from ..errors.internal import FramingError, LineBreakError, ParsingError
from ..logs.logger import logger
from .display import render_message
from .framing import LineReader, LineWriter
from .message import IRCMessage, parse_message

MessageSink = Callable[[IRCMessage], Awaitable[None] | None]


class LineSource(Protocol):
    async def read_line(self) -> str | None: ...


async def _deliver(sink: MessageSink, message: IRCMessage) -> None:
    try:
        result = sink(message)
        if inspect.isawaitable(result):
            await result
    except Exception as e:  # noqa: BLE001
        logger.log_event(
            "irc",
            "sink_error",
            level=logging.ERROR,
            error=str(e),
            error_type=type(e).__name__,
        )


async def reader_loop(reader: LineReader, sink: MessageSink) -> None:
    """Read, parse and hand inbound messages to ``sink`` until end of stream."""
    while True:
        try:
            line = await reader.read_line()
        except FramingError as e:
            log_error("Dropped inbound line", e, level=logging.WARNING)
            continue
        if line is None:
            logger.log_event("irc", "reader_eof", level=logging.WARNING)
            return
        try:
            message = parse_message(line)
        except ParsingError as e:
            log_error(
                "Failed to parse message",
                e,
                context={"line": line[:128]},
                level=logging.WARNING,
            )
            continue
        if message is not None:
            await _deliver(sink, message)


def _parse_operator_line(text: str) -> IRCMessage | None:
    if "\r" in text or "\n" in text:
        raise LineBreakError("Input contains a line break")
    return parse_message(text)


async def writer_loop(source: LineSource, writer: LineWriter) -> None:
    """Parse operator lines from ``source`` and send them until it runs dry."""
    while True:
        try:
            text = await source.read_line()
        except FramingError as e:
            log_error("Dropped operator input", e, level=logging.WARNING)
            continue
        if text is None:
            logger.log_event("console", "eof", level=logging.INFO)
            return
        try:
            message = _parse_operator_line(text)
        except ParsingError as e:
            log_error(
                "Failed to parse input as message",
                e,
                context={"input": text[:128]},
                level=logging.WARNING,
            )
            continue
        if message is None:
            continue
        logger.log_event(
            "irc", "send", level=logging.DEBUG, human=render_message(message)
        )
        await writer.write_line(message)
