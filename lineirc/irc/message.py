"""IRC message parsing and wire serialization."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors.internal import EmptyMessageError
from .command import Command, command_to_text, parse_command

CRLF = b"\r\n"
# Keeps arbitrary bytes intact through a decode/encode round trip.
_WIRE_ENCODING = "utf-8"
_WIRE_ERRORS = "surrogateescape"


@dataclass(frozen=True, slots=True)
class IRCMessage:
    """One protocol line: ``[':' prefix ' '] command *(' ' arg) [' :' trailing]``.

    ``prefix`` is stored without its leading colon. Only the last element of
    ``args`` may contain spaces, and only when it is the trailing argument.
    ``trailing`` records that the last argument was introduced by a colon on
    the wire; it does not take part in equality.
    """

    command: Command
    args: tuple[str, ...] = ()
    prefix: str | None = None
    trailing: bool = field(default=False, compare=False)

    def to_bytes(self) -> bytes:
        return serialize_message(self)


def _split_token(raw: str) -> tuple[str, str]:
    text, _, rest = raw.partition(" ")
    return text, rest


def _parse_args(raw: str) -> tuple[list[str], bool]:
    args: list[str] = []
    i = 0
    while i < len(raw):
        if raw[i] == ":":
            args.append(raw[i + 1 :])
            return args, True
        end = raw.find(" ", i)
        if end == -1:
            end = len(raw)
        # Consecutive spaces produce an empty argument.
        args.append(raw[i:end])
        i = end + 1
    return args, False


def parse_message(line: bytes | str) -> IRCMessage | None:
    """Parse one protocol line (CRLF already stripped).

    Returns ``None`` for an empty line.

    Raises:
        EmptyMessageError: The line starts with a space, or has a prefix but
            no command.
        InvalidCommandError: The command token is not a known keyword or a
            numeric code.
    """
    if isinstance(line, bytes):
        line = line.decode(_WIRE_ENCODING, _WIRE_ERRORS)
    if not line:
        return None

    first, rest = _split_token(line)
    if not first:
        raise EmptyMessageError("Line starts with a space")

    prefix: str | None = None
    if first.startswith(":"):
        prefix = first[1:]
        command_token, rest = _split_token(rest)
    else:
        command_token = first

    if not command_token:
        raise EmptyMessageError("Missing command after prefix", data={"prefix": prefix})

    command = parse_command(command_token)
    args, trailing = _parse_args(rest)
    return IRCMessage(
        prefix=prefix, command=command, args=tuple(args), trailing=trailing
    )


def _needs_colon(arg: str) -> bool:
    return not arg or " " in arg or arg.startswith(":")


def serialize_message(message: IRCMessage) -> bytes:
    """Render ``message`` in wire format, CRLF included.

    Arguments are written verbatim. The last one gets a leading colon when it
    was parsed as trailing or could not otherwise be read back as a single
    argument. Earlier arguments must not contain spaces or start with a colon.
    """
    parts: list[str] = []
    if message.prefix is not None:
        parts.append(f":{message.prefix} ")
    parts.append(command_to_text(message.command))
    last = len(message.args) - 1
    for i, arg in enumerate(message.args):
        if i == last and (message.trailing or _needs_colon(arg)):
            parts.append(f" :{arg}")
        else:
            parts.append(f" {arg}")
    return "".join(parts).encode(_WIRE_ENCODING, _WIRE_ERRORS) + CRLF
