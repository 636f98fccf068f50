"""TCP connection to an IRC server, split into reader and writer halves."""

from __future__ import annotations

import asyncio
import logging

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import (
    CONNECT_BACKOFF_MAX_SECONDS,
    CONNECT_MAX_ATTEMPTS,
    CONNECT_TIMEOUT_SECONDS,
    MAX_LINE_LENGTH,
    READ_CHUNK_SIZE,
)
from ..errors.internal import NetworkError
from ..logs.logger import logger
from .framing import LineReader, LineWriter


class IRCConnection:
    """A connected byte stream exposed as two independent line halves.

    ``reader`` and ``writer`` can be handed to separate tasks; the read and
    write sides of the transport do not share state.
    """

    def __init__(
        self,
        stream_reader: asyncio.StreamReader,
        stream_writer: asyncio.StreamWriter,
        *,
        max_line_length: int = MAX_LINE_LENGTH,
        chunk_size: int = READ_CHUNK_SIZE,
    ) -> None:
        self._stream_writer = stream_writer
        self.reader = LineReader(
            stream_reader, max_line_length=max_line_length, chunk_size=chunk_size
        )
        self.writer = LineWriter(stream_writer)

    @classmethod
    async def open(
        cls,
        host: str,
        port: int,
        *,
        timeout: float = CONNECT_TIMEOUT_SECONDS,
        attempts: int = CONNECT_MAX_ATTEMPTS,
        max_line_length: int = MAX_LINE_LENGTH,
        chunk_size: int = READ_CHUNK_SIZE,
    ) -> IRCConnection:
        """Open a TCP connection, retrying the initial connect with backoff.

        Raises:
            NetworkError: Every attempt failed or timed out.
        """

        def before_attempt(retry_state) -> None:  # type: ignore[no-untyped-def]
            logger.log_event(
                "irc",
                "connect_attempt",
                level=logging.DEBUG,
                server=host,
                port=port,
                attempt=retry_state.attempt_number,
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(max(1, attempts)),
            wait=wait_exponential(multiplier=1, max=CONNECT_BACKOFF_MAX_SECONDS),
            retry=retry_if_exception_type((OSError, TimeoutError)),
            before=before_attempt,
        )
        async def attempt() -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
            return await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=timeout
            )

        try:
            stream_reader, stream_writer = await retrying(attempt)
        except RetryError as e:
            cause = e.last_attempt.exception()
            raise NetworkError(
                f"Could not connect to {host}:{port}: {cause}",
                data={"host": host, "port": port, "attempts": attempts},
            ) from cause
        logger.log_event(
            "irc", "connection_established", server=host, port=port
        )
        return cls(
            stream_reader,
            stream_writer,
            max_line_length=max_line_length,
            chunk_size=chunk_size,
        )

    async def close(self) -> None:
        writer = self._stream_writer
        if writer.is_closing():
            return
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.log_event(
                "irc", "close_error", level=logging.WARNING, error=str(e)
            )
