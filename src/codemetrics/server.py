"""codemetrics MCP server over the SDK's stdio transport.

Messages arrive already framed by ``mcp.server.stdio.stdio_server``. Requests
are queued on a SequentialDispatcher and answered in arrival order.
Notifications are accepted and never answered. Logging goes to stderr;
stdout carries protocol traffic only.
"""

from __future__ import annotations

import asyncio
import logging

from anyio.abc import ObjectReceiveStream, ObjectSendStream
from mcp.server.stdio import stdio_server
from mcp.shared.message import SessionMessage
from mcp.types import INTERNAL_ERROR, ErrorData, JSONRPCNotification, JSONRPCRequest, RequestId

from codemetrics.config import CodemetricsConfig, load_config
from codemetrics.dispatcher import SequentialDispatcher
from codemetrics.protocol import Reply, failure, malformed
from codemetrics.router import Router

logger = logging.getLogger(__name__)

# A pending reply: either ready now (undecodable input) or awaiting the worker.
_Outgoing = Reply | tuple[RequestId, asyncio.Future[Reply]]


async def serve_streams(
    router: Router,
    read_stream: ObjectReceiveStream[SessionMessage | Exception],
    write_stream: ObjectSendStream[SessionMessage],
) -> None:
    """Answer every request on *read_stream*, one reply per request, in order.

    Stops reading once the writer has failed, so no further requests are
    dispatched into a closed connection; the writer's error is re-raised.
    """
    outbox: asyncio.Queue[_Outgoing | None] = asyncio.Queue()

    async with SequentialDispatcher[JSONRPCRequest, Reply](router.dispatch) as dispatcher:
        writer = asyncio.create_task(_drain(outbox, write_stream))
        try:
            async for item in read_stream:
                if writer.done():
                    logger.warning("Output closed; no longer reading requests")
                    break
                if isinstance(item, Exception):
                    logger.warning("Rejected message: %s", item)
                    outbox.put_nowait(malformed(item))
                    continue

                message = item.message
                if isinstance(message, JSONRPCNotification):
                    logger.debug("Notification %s", message.method)
                    continue
                if not isinstance(message, JSONRPCRequest):
                    logger.warning("Ignoring unexpected %s from client", type(message).__name__)
                    continue
                outbox.put_nowait((message.id, dispatcher.enqueue(message)))
        finally:
            outbox.put_nowait(None)
            await writer


async def _drain(
    outbox: asyncio.Queue[_Outgoing | None],
    write_stream: ObjectSendStream[SessionMessage],
) -> None:
    while True:
        entry = await outbox.get()
        if entry is None:
            return
        if isinstance(entry, tuple):
            request_id, future = entry
            try:
                reply = await future
            except Exception as exc:
                reply = failure(
                    request_id, ErrorData(code=INTERNAL_ERROR, message=str(exc) or "internal error")
                )
        else:
            reply = entry
        await write_stream.send(SessionMessage(reply))


async def run_stdio(config: CodemetricsConfig) -> None:
    router = Router(config)
    logger.info("Code analysis server serving %s on stdio", config.root)
    async with stdio_server() as (read_stream, write_stream):
        async with write_stream:
            await serve_streams(router, read_stream, write_stream)
    logger.info("stdin closed; shutting down")


def serve(root: str | None = None) -> None:
    """Start MCP server on stdio."""
    asyncio.run(run_stdio(load_config(root)))
