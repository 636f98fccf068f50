from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..constants import (
    CONNECT_MAX_ATTEMPTS,
    CONNECT_TIMEOUT_SECONDS,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    MAX_LINE_LENGTH,
    READ_CHUNK_SIZE,
)


class ClientConfig(BaseModel):
    """Connection and registration settings for one client session.

    Attributes:
        host: Server address.
        port: Server TCP port.
        nick: Nickname sent with NICK.
        username: Username sent as the first USER parameter.
        realname: Free-form real name, sent as the USER trailing parameter.
        hostname: Second USER parameter.
        servername: Third USER parameter.
        password: Optional connection password sent with PASS.
        connect_timeout: Seconds allowed for each connect attempt.
        connect_attempts: Initial connect attempts before giving up.
        max_line_length: Longest accepted inbound line in bytes.
        read_chunk_size: Bytes requested per transport read.
    """

    host: str = Field(default=DEFAULT_SERVER_HOST, min_length=1)
    port: int = Field(default=DEFAULT_SERVER_PORT, ge=1, le=65535)
    nick: str = Field(default="lineirc", min_length=1)
    username: str | None = None
    realname: str = Field(default="lineirc user", min_length=1)
    hostname: str = "localhost"
    servername: str = "localhost"
    password: str | None = None
    connect_timeout: float = Field(default=CONNECT_TIMEOUT_SECONDS, gt=0)
    connect_attempts: int = Field(default=CONNECT_MAX_ATTEMPTS, ge=1)
    max_line_length: int = Field(default=MAX_LINE_LENGTH, ge=16)
    read_chunk_size: int = Field(default=READ_CHUNK_SIZE, ge=1)

    @field_validator("nick", "username", "hostname", "servername", "password")
    @classmethod
    def validate_single_token(cls, v: str | None) -> str | None:
        """Values sent as middle parameters must be one wire token."""
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        if " " in v or v.startswith(":") or "\r" in v or "\n" in v:
            raise ValueError("must not contain spaces, line breaks or a leading ':'")
        return v

    @field_validator("realname")
    @classmethod
    def validate_realname(cls, v: str) -> str:
        if "\r" in v or "\n" in v:
            raise ValueError("realname must not contain line breaks")
        return v

    @model_validator(mode="after")
    def default_username(self) -> ClientConfig:
        """Fall back to the nickname when no username is given."""
        if self.username is None:
            self.username = self.nick
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        return cls.model_validate(dict(data))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
