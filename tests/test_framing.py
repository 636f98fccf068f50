"""Tests for lineirc/irc/framing.py."""

import asyncio

import pytest

from lineirc.errors.internal import LineTooLongError, MissingCrlfError
from lineirc.irc.command import Keyword
from lineirc.irc.framing import LineReader, LineWriter
from lineirc.irc.message import IRCMessage


class TestLineReader:
    """Incremental CRLF framing over fragmented reads."""

    @pytest.mark.asyncio
    async def test_single_line(self, chunked_source):
        reader = LineReader(chunked_source([b"PING :123\r\n"]))
        assert await reader.read_line() == b"PING :123"
        assert await reader.read_line() is None

    @pytest.mark.asyncio
    async def test_crlf_split_across_reads(self, chunked_source):
        """CR at the end of one read and LF at the start of the next."""
        reader = LineReader(chunked_source([b"PING :123\r", b"\n"]))
        assert await reader.read_line() == b"PING :123"
        assert await reader.read_line() is None

    @pytest.mark.asyncio
    async def test_line_spanning_many_reads(self, chunked_source):
        chunks = [b":srv NOT", b"ICE * :hel", b"lo th", b"ere\r\n"]
        reader = LineReader(chunked_source(chunks))
        assert await reader.read_line() == b":srv NOTICE * :hello there"

    @pytest.mark.asyncio
    async def test_several_lines_in_one_read(self, chunked_source):
        source = chunked_source([b"NICK a\r\nPING :1\r\nPONG :2\r\n"])
        reader = LineReader(source)
        assert await reader.read_line() == b"NICK a"
        assert await reader.read_line() == b"PING :1"
        assert await reader.read_line() == b"PONG :2"
        assert await reader.read_line() is None
        # All three lines came out of a single transport read plus the EOF read.
        assert len(source.read_sizes) == 2

    @pytest.mark.asyncio
    async def test_mixed_fragments_do_not_lose_or_duplicate_bytes(self, chunked_source):
        chunks = [b"A 1\r\nB", b" 2\r", b"\nC 3", b"\r\n"]
        reader = LineReader(chunked_source(chunks))
        lines = []
        while (line := await reader.read_line()) is not None:
            lines.append(line)
        assert lines == [b"A 1", b"B 2", b"C 3"]

    @pytest.mark.asyncio
    async def test_empty_line_is_returned(self, chunked_source):
        reader = LineReader(chunked_source([b"\r\nPING x\r\n"]))
        assert await reader.read_line() == b""
        assert await reader.read_line() == b"PING x"

    @pytest.mark.asyncio
    async def test_clean_eof_returns_none(self, chunked_source):
        reader = LineReader(chunked_source([]))
        assert await reader.read_line() is None
        assert await reader.read_line() is None

    @pytest.mark.asyncio
    async def test_eof_mid_line_raises_once(self, chunked_source):
        reader = LineReader(chunked_source([b"PING :12"]))
        with pytest.raises(MissingCrlfError) as exc_info:
            await reader.read_line()
        assert exc_info.value.data["partial"] == b"PING :12"
        assert await reader.read_line() is None

    @pytest.mark.asyncio
    async def test_eof_after_carriage_return_raises(self, chunked_source):
        reader = LineReader(chunked_source([b"PING :12\r"]))
        with pytest.raises(MissingCrlfError):
            await reader.read_line()

    @pytest.mark.asyncio
    async def test_carriage_return_without_line_feed(self, chunked_source):
        """The broken segment is dropped and reading resumes after the CR."""
        reader = LineReader(chunked_source([b"BAD\rPING x\r\n"]))
        with pytest.raises(MissingCrlfError):
            await reader.read_line()
        assert await reader.read_line() == b"PING x"

    @pytest.mark.asyncio
    async def test_bare_cr_detected_across_reads(self, chunked_source):
        reader = LineReader(chunked_source([b"BAD\r", b"PING x\r\n"]))
        with pytest.raises(MissingCrlfError):
            await reader.read_line()
        assert await reader.read_line() == b"PING x"

    @pytest.mark.asyncio
    async def test_lone_line_feed_is_line_content(self, chunked_source):
        reader = LineReader(chunked_source([b"A\nB\r\n"]))
        assert await reader.read_line() == b"A\nB"

    @pytest.mark.asyncio
    async def test_complete_overlong_line_is_rejected(self, chunked_source):
        reader = LineReader(
            chunked_source([b"X" * 20 + b"\r\nPING x\r\n"]), max_line_length=16
        )
        with pytest.raises(LineTooLongError) as exc_info:
            await reader.read_line()
        assert exc_info.value.limit == 16
        assert await reader.read_line() == b"PING x"

    @pytest.mark.asyncio
    async def test_unterminated_overlong_line_is_skipped(self, chunked_source):
        """The rest of an overflowing line is discarded up to its CRLF."""
        chunks = [b"X" * 20, b"Y" * 20, b"ZZ\r\nPING x\r\n"]
        reader = LineReader(chunked_source(chunks), max_line_length=16)
        with pytest.raises(LineTooLongError):
            await reader.read_line()
        assert await reader.read_line() == b"PING x"
        assert await reader.read_line() is None

    @pytest.mark.asyncio
    async def test_eof_while_skipping_overlong_line_is_clean(self, chunked_source):
        reader = LineReader(chunked_source([b"X" * 20, b"Y" * 4]), max_line_length=16)
        with pytest.raises(LineTooLongError):
            await reader.read_line()
        assert await reader.read_line() is None

    @pytest.mark.asyncio
    async def test_chunk_size_is_passed_to_source(self, chunked_source):
        source = chunked_source([b"PING x\r\n"])
        reader = LineReader(source, chunk_size=512)
        await reader.read_line()
        assert source.read_sizes == [512]

    @pytest.mark.asyncio
    async def test_works_with_asyncio_stream_reader(self):
        stream = asyncio.StreamReader()
        stream.feed_data(b":srv 001 me :Welcome\r")
        stream.feed_data(b"\nPING :1\r\n")
        stream.feed_eof()
        reader = LineReader(stream)
        assert await reader.read_line() == b":srv 001 me :Welcome"
        assert await reader.read_line() == b"PING :1"
        assert await reader.read_line() is None


class TestLineWriter:
    """Serialization onto the byte sink."""

    @pytest.mark.asyncio
    async def test_write_line_serializes_and_drains(self, recording_sink):
        writer = LineWriter(recording_sink)
        await writer.write_line(IRCMessage(Keyword.NICK, ("tuser",)))
        assert recording_sink.writes == [b"NICK tuser\r\n"]
        assert recording_sink.drain_count == 1

    @pytest.mark.asyncio
    async def test_each_message_is_one_write(self, recording_sink):
        writer = LineWriter(recording_sink)
        await writer.write_line(IRCMessage(Keyword.PING, ("a",)))
        await writer.write_line(
            IRCMessage(Keyword.PRIVMSG, ("#c", "hi there"), prefix="me")
        )
        assert recording_sink.writes == [
            b"PING a\r\n",
            b":me PRIVMSG #c :hi there\r\n",
        ]
