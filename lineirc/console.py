"""Operator console input that does not block the event loop."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TextIO

from .constants import MAX_LINE_LENGTH
from .errors.internal import LineTooLongError
from .logs.logger import logger


class ConsoleInput:
    """Line source reading operator input from a text stream (stdin by default).

    Pipes, sockets and terminals are watched by the event loop directly;
    anything the loop cannot watch (e.g. a redirected regular file) is read
    from a worker thread instead. A line longer than ``max_line_length`` is
    skipped and reported as :class:`LineTooLongError`.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        reader: asyncio.StreamReader | None = None,
        max_line_length: int = MAX_LINE_LENGTH,
    ) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._reader = reader
        self._attached = reader is not None
        self.max_line_length = max_line_length

    async def _attach(self) -> None:
        self._attached = True
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=self.max_line_length)
        protocol = asyncio.StreamReaderProtocol(reader)
        try:
            await loop.connect_read_pipe(lambda: protocol, self._stream)
        except (ValueError, OSError, NotImplementedError) as e:
            logger.log_event(
                "console", "thread_fallback", level=logging.DEBUG, error=str(e)
            )
            return
        self._reader = reader

    async def read_line(self) -> str | None:
        """Return the next line without its line ending, or ``None`` at EOF.

        Raises:
            LineTooLongError: The line was too long; it has been consumed.
        """
        if not self._attached:
            await self._attach()
        if self._reader is None:
            return await self._read_from_thread()
        return await self._read_from_reader(self._reader)

    async def _read_from_thread(self) -> str | None:
        raw = await asyncio.to_thread(self._stream.readline)
        if not raw:
            return None
        line = raw.rstrip("\r\n")
        if len(line) > self.max_line_length:
            raise LineTooLongError(self.max_line_length)
        return line

    async def _read_from_reader(self, reader: asyncio.StreamReader) -> str | None:
        try:
            data = await reader.readuntil(b"\n")
        except asyncio.IncompleteReadError as e:
            data = e.partial
        except asyncio.LimitOverrunError as e:
            await self._skip_rest_of_line(reader, e.consumed)
            raise LineTooLongError(self.max_line_length) from e
        if not data:
            return None
        line = data.decode("utf-8", "surrogateescape").rstrip("\r\n")
        if len(line) > self.max_line_length:
            raise LineTooLongError(self.max_line_length)
        return line

    @staticmethod
    async def _skip_rest_of_line(reader: asyncio.StreamReader, consumed: int) -> None:
        # The overrun bytes are still buffered; drop them up to the next newline.
        while True:
            await reader.readexactly(consumed)
            try:
                await reader.readuntil(b"\n")
                return
            except asyncio.IncompleteReadError:
                return
            except asyncio.LimitOverrunError as e:
                consumed = e.consumed
