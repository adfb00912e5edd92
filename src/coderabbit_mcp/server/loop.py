"""TransportLoop — reads request lines, routes them, and writes responses.

A single reader drives the transport.  Each decoded request is routed in
its own task, so a slow tool call does not stop further lines from being
read; responses are written as they complete and correlate by ``id`` only.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING

from coderabbit_mcp.protocol.errors import DecodeError
from coderabbit_mcp.server import envelope

if TYPE_CHECKING:
    from coderabbit_mcp.protocol.models import JsonRpcResponse
    from coderabbit_mcp.protocol.transport import ServerTransport
    from coderabbit_mcp.server.router import RequestRouter

logger = logging.getLogger(__name__)


class TransportLoop:
    """Serve one client over one transport until the input stream closes."""

    def __init__(self, transport: ServerTransport, router: RequestRouter) -> None:
        self._transport = transport
        self._router = router
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def in_flight(self) -> int:
        return len(self._pending)

    async def run(self) -> None:
        """Connect, serve until EOF, wait for in-flight calls, then close.

        If serving stops on an error instead of EOF, in-flight calls are
        cancelled before the transport closes and the error propagates.
        """
        await self._transport.connect()
        try:
            await self._serve()
            if self._pending:
                logger.debug("Waiting for %d in-flight request(s)", len(self._pending))
                await asyncio.gather(*self._pending)
        finally:
            await self._cancel_pending()
            await self._transport.close()

    async def _cancel_pending(self) -> None:
        if not self._pending:
            return
        logger.warning("Cancelling %d in-flight request(s)", len(self._pending))
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    async def _serve(self) -> None:
        while True:
            try:
                line = await self._transport.receive_line()
            except DecodeError as exc:
                logger.warning("Dropped unreadable input: %s", exc.message)
                await self._write(envelope.failure(None, exc))
                continue

            if line is None:
                logger.info("Input stream closed")
                return
            if not line.strip():
                continue

            try:
                message = json.loads(line)
            except ValueError as exc:
                logger.warning("Malformed JSON on input: %s", exc)
                await self._write(envelope.failure(None, DecodeError(str(exc))))
                continue

            task = asyncio.create_task(self._handle(message))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def _handle(self, message: object) -> None:
        response = await self._router.route(message)
        if response is not None:
            await self._write(response)

    async def _write(self, response: JsonRpcResponse) -> None:
        try:
            await self._transport.send(response.to_wire())
        except OSError:
            logger.exception("Failed to write response for id %r", response.id)
