"""Server transports — newline-delimited JSON over a pair of byte streams.

Each transport satisfies the :class:`ServerTransport` protocol, providing
``connect``, ``receive_line``, ``send``, and ``close`` methods.  Decoding of
the received lines is left to the caller so that a malformed line can be
reported without tearing the transport down.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, BinaryIO, Protocol, runtime_checkable

from coderabbit_mcp.protocol.errors import DecodeError

DEFAULT_LINE_LIMIT = 16 * 1024 * 1024


@runtime_checkable
class ServerTransport(Protocol):
    """Abstract transport for server-side MCP JSON-RPC communication."""

    async def connect(self) -> None: ...
    async def receive_line(self) -> bytes | None: ...
    async def send(self, data: dict[str, Any]) -> None: ...
    async def close(self) -> None: ...


class ByteWriter(Protocol):
    """The subset of :class:`asyncio.StreamWriter` the transport writes through."""

    def write(self, data: bytes) -> None: ...
    async def drain(self) -> None: ...


class StreamTransport:
    """Reads request lines from a :class:`asyncio.StreamReader` and writes
    one JSON document per line to a :class:`ByteWriter`.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader | None = None,
        writer: ByteWriter | None = None,
    ) -> None:
        self._reader = reader
        self._writer = writer

    async def connect(self) -> None:
        """Nothing to open; the streams are supplied by the caller."""
        if self._reader is None or self._writer is None:
            msg = "StreamTransport requires both a reader and a writer"
            raise RuntimeError(msg)

    async def receive_line(self) -> bytes | None:
        """Return the next line, or ``None`` once the stream is closed.

        Raises:
            DecodeError: The line exceeded the reader's limit.  The whole line
                is discarded, through its newline, before this is raised.
        """
        if self._reader is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        try:
            return await self._reader.readuntil(b"\n")
        except asyncio.IncompleteReadError as exc:
            return exc.partial or None
        except asyncio.LimitOverrunError as exc:
            await self._skip_line(self._reader, exc.consumed)
            raise DecodeError(f"line too long ({exc})") from exc

    @staticmethod
    async def _skip_line(reader: asyncio.StreamReader, consumed: int) -> None:
        # The line may still be arriving, so keep dropping until its newline or EOF
        while True:
            try:
                await reader.readexactly(consumed)
                await reader.readuntil(b"\n")
                return
            except asyncio.IncompleteReadError:
                return
            except asyncio.LimitOverrunError as exc:
                consumed = exc.consumed

    async def send(self, data: dict[str, Any]) -> None:
        """Write a JSON line to the output stream."""
        if self._writer is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        line = json.dumps(data) + "\n"
        self._writer.write(line.encode())
        await self._writer.drain()

    async def close(self) -> None:
        self._reader = None
        self._writer = None


class _FileWriter:
    """Adapts a blocking binary file (stdout) to :class:`ByteWriter`."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def write(self, data: bytes) -> None:
        self._stream.write(data)

    async def drain(self) -> None:
        self._stream.flush()


class StdioTransport(StreamTransport):
    """Communicates with the client over this process's stdin/stdout."""

    def __init__(self, *, line_limit: int = DEFAULT_LINE_LIMIT) -> None:
        super().__init__()
        self._line_limit = line_limit
        self._pipes: list[asyncio.BaseTransport] = []

    async def connect(self) -> None:
        """Attach an asyncio reader to stdin and a non-blocking writer to stdout.

        Falls back to a flushing file writer when stdout is redirected to a
        regular file, which cannot be driven as a pipe.
        """
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=self._line_limit)
        protocol = asyncio.StreamReaderProtocol(reader)
        stdin_pipe, _ = await loop.connect_read_pipe(lambda: protocol, sys.stdin)
        self._pipes.append(stdin_pipe)
        self._reader = reader
        try:
            stdout_pipe, flow = await loop.connect_write_pipe(
                asyncio.streams.FlowControlMixin, sys.stdout
            )
        except ValueError:
            self._writer = _FileWriter(sys.stdout.buffer)
        else:
            self._pipes.append(stdout_pipe)
            self._writer = asyncio.StreamWriter(stdout_pipe, flow, reader, loop)

    async def close(self) -> None:
        """Close the pipes; queued output is written out before stdout closes."""
        for pipe in self._pipes:
            pipe.close()
        self._pipes.clear()
        await super().close()
