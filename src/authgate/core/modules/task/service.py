import asyncio
from collections.abc import Coroutine
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from authgate.core.core import Service

logger = structlog.get_logger(__name__)


class TaskService(Service):
    """Runs fire-and-forget side effects outside the request that triggered them.

    Failures are logged and never propagate to the submitter.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._tasks: set[asyncio.Task[None]] = set()

    def submit(self, name: str, coro: Coroutine[Any, Any, None]) -> None:
        """Schedule coro in the background."""
        task = asyncio.create_task(self._run(name, coro), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait until every submitted task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def on_stop(self) -> None:
        await self.drain()

    async def _run(self, name: str, coro: Coroutine[Any, Any, None]) -> None:
        try:
            await coro
        except Exception as e:
            logger.exception("background_task_failed", task=name, error=str(e))
        else:
            logger.debug("background_task_done", task=name)
