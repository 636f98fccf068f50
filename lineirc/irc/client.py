"""Client session: connect, register, then pump lines both ways."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum, auto

from ..config.model import ClientConfig
from ..console import ConsoleInput
from ..errors.internal import NetworkError
from ..logs.logger import logger
from .command import Keyword
from .connection import IRCConnection
from .display import log_message_sink
from .message import IRCMessage
from .pumps import LineSource, MessageSink, reader_loop, writer_loop


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    REGISTERING = auto()
    READY = auto()


class IRCClient:
    def __init__(
        self,
        config: ClientConfig,
        *,
        sink: MessageSink = log_message_sink,
        console: LineSource | None = None,
    ) -> None:
        self.config = config
        self.sink = sink
        self.console = (
            console
            if console is not None
            else ConsoleInput(max_line_length=config.max_line_length)
        )
        self.connection: IRCConnection | None = None
        self.state = ConnectionState.DISCONNECTED

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    def _require_connection(self) -> IRCConnection:
        if self.connection is None:
            raise NetworkError("Not connected")
        return self.connection

    async def connect(self) -> None:
        config = self.config
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event(
            "irc", "connect_start", server=config.host, port=config.port
        )
        try:
            self.connection = await IRCConnection.open(
                config.host,
                config.port,
                timeout=config.connect_timeout,
                attempts=config.connect_attempts,
                max_line_length=config.max_line_length,
                chunk_size=config.read_chunk_size,
            )
        except NetworkError:
            self._set_state(ConnectionState.DISCONNECTED)
            raise

    def registration_messages(self) -> list[IRCMessage]:
        """PASS (when configured), NICK and USER, in sending order."""
        config = self.config
        messages: list[IRCMessage] = []
        if config.password:
            messages.append(IRCMessage(Keyword.PASS, (config.password,)))
        messages.append(IRCMessage(Keyword.NICK, (config.nick,)))
        messages.append(
            IRCMessage(
                Keyword.USER,
                (
                    config.username,
                    config.hostname,
                    config.servername,
                    config.realname,
                ),
                trailing=True,
            )
        )
        return messages

    async def register(self) -> None:
        connection = self._require_connection()
        self._set_state(ConnectionState.REGISTERING)
        for message in self.registration_messages():
            await connection.writer.write_line(message)
        logger.log_event("irc", "registration_sent", nick=self.config.nick)
        self._set_state(ConnectionState.READY)

    async def run(self) -> None:
        """Run the reader and writer loops until the server side ends.

        Console EOF stops only the writer. The first loop error propagates
        after the other loop is cancelled.
        """
        connection = self._require_connection()
        reader_task = asyncio.create_task(
            reader_loop(connection.reader, self.sink), name="irc-reader"
        )
        writer_task = asyncio.create_task(
            writer_loop(self.console, connection.writer), name="irc-writer"
        )
        pending: set[asyncio.Task[None]] = {reader_task, writer_task}
        try:
            while pending:
                done, pending = await asyncio.wait(
                    pending, return_when=asyncio.FIRST_COMPLETED
                )
                for task in done:
                    task.result()
                if reader_task in done:
                    break
        finally:
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

    async def disconnect(self) -> None:
        if self.connection is not None:
            await self.connection.close()
            self.connection = None
        if self.state != ConnectionState.DISCONNECTED:
            self._set_state(ConnectionState.DISCONNECTED)
            logger.log_event("irc", "disconnected", level=logging.WARNING)

    async def run_session(self) -> None:
        """Connect, register and run until the server closes the connection."""
        try:
            await self.connect()
            await self.register()
            await self.run()
        finally:
            await self.disconnect()
