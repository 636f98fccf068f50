import os

import pytest

# Keep event log lines in their concise form regardless of the caller's shell.
os.environ.setdefault("DEBUG", "false")

from lineirc.logging_config import error_aggregator  # noqa: E402


class ChunkedSource:
    """Async byte source that returns one prepared chunk per read call."""

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.read_sizes = []

    async def read(self, n=-1):
        self.read_sizes.append(n)
        if not self.chunks:
            return b""
        return self.chunks.pop(0)


class RecordingSink:
    """Byte sink collecting every write, mimicking asyncio.StreamWriter."""

    def __init__(self):
        self.writes = []
        self.drain_count = 0

    def write(self, data):
        self.writes.append(data)

    async def drain(self):
        self.drain_count += 1

    @property
    def data(self):
        return b"".join(self.writes)


class ScriptedConsole:
    """Line source replaying prepared operator input, then EOF."""

    def __init__(self, lines):
        self.lines = list(lines)

    async def read_line(self):
        if not self.lines:
            return None
        return self.lines.pop(0)


@pytest.fixture
def chunked_source():
    return ChunkedSource


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def scripted_console():
    return ScriptedConsole


@pytest.fixture(autouse=True)
def _reset_error_aggregator():
    """Start every test with an empty error summary."""
    error_aggregator.clear()
    yield
    error_aggregator.clear()
