"""IRC command verbs: known keywords or numeric reply codes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from ..errors.internal import InvalidCommandError

_NUMERIC_RE = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class Keyword(Enum):
    NOTICE = "NOTICE"
    NICK = "NICK"
    USER = "USER"
    PASS = "PASS"
    PING = "PING"
    PONG = "PONG"
    PRIVMSG = "PRIVMSG"
    JOIN = "JOIN"
    PART = "PART"
    QUIT = "QUIT"
    MODE = "MODE"
    TOPIC = "TOPIC"
    KICK = "KICK"
    INVITE = "INVITE"
    ERROR = "ERROR"
    CAP = "CAP"


@dataclass(frozen=True, slots=True)
class NumericReply:
    """Server reply identified by a decimal code, e.g. 001 or 433."""

    code: int


Command = Keyword | NumericReply

_KEYWORDS: dict[str, Keyword] = {kw.value: kw for kw in Keyword}


def parse_command(token: str) -> Command:
    """Turn a single command token into a :data:`Command`.

    Keywords are matched exactly (case-sensitive) before the token is tried as
    a signed base-10 integer that fits in 32 bits.

    Raises:
        InvalidCommandError: The token is neither a keyword nor a number.
    """
    keyword = _KEYWORDS.get(token)
    if keyword is not None:
        return keyword
    if _NUMERIC_RE.fullmatch(token):
        code = int(token)
        if _INT32_MIN <= code <= _INT32_MAX:
            return NumericReply(code)
    raise InvalidCommandError(token)


def command_to_text(command: Command) -> str:
    # Reply codes travel as three digits on the wire ("001", "433").
    if isinstance(command, NumericReply):
        if 0 <= command.code <= 999:
            return f"{command.code:03d}"
        return str(command.code)
    return command.value
