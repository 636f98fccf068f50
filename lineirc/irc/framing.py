"""CRLF line framing over an asyncio byte stream."""

from __future__ import annotations

import logging
from typing import Protocol

from ..constants import MAX_LINE_LENGTH, READ_CHUNK_SIZE
from ..errors.internal import LineTooLongError, MissingCrlfError
from ..logs.logger import logger
from .message import IRCMessage, serialize_message

CR = 0x0D
LF = 0x0A


class ByteSource(Protocol):
    async def read(self, n: int = -1) -> bytes: ...


class ByteSink(Protocol):
    def write(self, data: bytes) -> None: ...

    async def drain(self) -> None: ...


class LineReader:
    """Delivers one CRLF-terminated line at a time from a byte source.

    Bytes are accumulated across reads, so a line may span several transport
    reads and one read may carry several lines.

    Attributes:
        max_line_length (int): Longest line accepted, terminator excluded.
    """

    def __init__(
        self,
        source: ByteSource,
        *,
        max_line_length: int = MAX_LINE_LENGTH,
        chunk_size: int = READ_CHUNK_SIZE,
    ) -> None:
        self._source = source
        self._buffer = bytearray()
        self._scanned = 0
        self._discarding = False
        self._eof = False
        self.max_line_length = max_line_length
        self.chunk_size = chunk_size

    async def read_line(self) -> bytes | None:
        """Return the next line without its CRLF, or ``None`` at end of stream.

        Raises:
            MissingCrlfError: A carriage return was not followed by a line
                feed, or the stream ended in the middle of a line.
            LineTooLongError: The line exceeded ``max_line_length``.
        """
        while True:
            line = self._extract_line()
            if line is not None:
                return line
            if self._eof:
                return None
            chunk = await self._source.read(self.chunk_size)
            if not chunk:
                self._eof = True
                self._handle_eof()
                return None
            self._buffer.extend(chunk)

    def _handle_eof(self) -> None:
        discarding = self._discarding
        partial = bytes(self._buffer)
        self._reset_buffer()
        self._discarding = False
        if partial and not discarding:
            raise MissingCrlfError(
                "Stream ended in the middle of a line",
                data={"partial": partial[:64]},
            )

    def _reset_buffer(self) -> None:
        self._buffer.clear()
        self._scanned = 0

    def _extract_line(self) -> bytes | None:
        buf = self._buffer
        while True:
            idx = buf.find(CR, self._scanned)
            if idx == -1:
                self._scanned = len(buf)
                self._check_overflow()
                return None
            if idx + 1 == len(buf):
                # CR is the last byte seen so far; wait for the next read.
                self._scanned = idx
                return None
            if buf[idx + 1] != LF:
                dropped = bytes(buf[: idx + 1])
                del buf[: idx + 1]
                self._scanned = 0
                if self._discarding:
                    continue
                raise MissingCrlfError(
                    "Carriage return not followed by line feed",
                    data={"partial": dropped[:64]},
                )
            line = bytes(buf[:idx])
            del buf[: idx + 2]
            self._scanned = 0
            if self._discarding:
                self._discarding = False
                logger.log_event(
                    "framing", "discard_end", level=logging.DEBUG, size=len(line)
                )
                continue
            if len(line) > self.max_line_length:
                raise LineTooLongError(self.max_line_length)
            return line

    def _check_overflow(self) -> None:
        if len(self._buffer) <= self.max_line_length:
            return
        self._reset_buffer()
        if self._discarding:
            return
        # Skip the remainder of this line up to its terminator.
        self._discarding = True
        raise LineTooLongError(self.max_line_length)


class LineWriter:
    """Serializes messages onto a byte sink, one line per write."""

    def __init__(self, sink: ByteSink) -> None:
        self._sink = sink

    async def write_line(self, message: IRCMessage) -> None:
        data = serialize_message(message)
        self._sink.write(data)
        await self._sink.drain()
        logger.log_event(
            "framing", "line_written", level=logging.DEBUG, size=len(data)
        )
