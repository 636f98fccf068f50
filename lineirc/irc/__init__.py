"""IRC subsystem package.

Contains the command and message model, CRLF line framing, the TCP
connection halves, the reader/writer pump loops and the client session.
"""

from .client import ConnectionState, IRCClient  # noqa: F401
from .command import Command, Keyword, NumericReply, command_to_text, parse_command  # noqa: F401
from .connection import IRCConnection  # noqa: F401
from .display import log_message_sink, render_message  # noqa: F401
from .framing import LineReader, LineWriter  # noqa: F401
from .message import IRCMessage, parse_message, serialize_message  # noqa: F401
from .pumps import reader_loop, writer_loop  # noqa: F401

__all__ = [
    "Command",
    "ConnectionState",
    "IRCClient",
    "IRCConnection",
    "IRCMessage",
    "Keyword",
    "LineReader",
    "LineWriter",
    "NumericReply",
    "command_to_text",
    "log_message_sink",
    "parse_command",
    "parse_message",
    "reader_loop",
    "render_message",
    "serialize_message",
    "writer_loop",
]
