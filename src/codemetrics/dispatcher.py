"""Single-worker request queue.

Requests are handled strictly one at a time, in the order they were
enqueued: handler N+1 does not start until handler N has produced its
response. Handlers may suspend on I/O; the queue keeps accepting work
meanwhile but never runs two handlers at once.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class SequentialDispatcher(Generic[T, R]):
    """Run an async handler over queued items, one at a time, FIFO."""

    def __init__(self, handler: Callable[[T], Awaitable[R]]) -> None:
        self._handler = handler
        self._queue: asyncio.Queue[tuple[T, asyncio.Future[R]] | None] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        if self.running:
            return
        self._worker = asyncio.get_running_loop().create_task(self._run())

    def enqueue(self, item: T) -> asyncio.Future[R]:
        """Queue *item* without waiting; the future resolves with its result."""
        if not self.running:
            raise RuntimeError("dispatcher is not running")
        future: asyncio.Future[R] = asyncio.get_running_loop().create_future()
        self._queue.put_nowait((item, future))
        return future

    async def submit(self, item: T) -> R:
        """Queue *item* and wait for its result."""
        return await self.enqueue(item)

    async def close(self) -> None:
        """Finish queued work, then stop the worker."""
        if not self.running:
            return
        self._queue.put_nowait(None)
        assert self._worker is not None
        await self._worker
        self._worker = None

    async def __aenter__(self) -> SequentialDispatcher[T, R]:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _run(self) -> None:
        while True:
            entry = await self._queue.get()
            if entry is None:
                return
            item, future = entry
            try:
                result = await self._handler(item)
            except Exception as exc:
                logger.exception("Handler raised while processing %r", item)
                if not future.done():
                    future.set_exception(exc)
            else:
                if not future.done():
                    future.set_result(result)
