"""
Tareas de mejor esfuerzo / Best-effort background tasks.

Efectos secundarios (logs de historial, ping) que se lanzan sin esperar su
resultado. Sus fallos van al log de operacion, nunca al llamador.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class BestEffortDispatcher:
    """Lanza corutinas sin esperarlas / Fire-and-forget coroutine dispatcher."""

    def __init__(self):
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def dispatch(self, name: str, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Best-effort task %s failed", task.get_name(), exc_info=exc)

    async def drain(self):
        """Esperar las tareas pendientes (apagado, tests) / Wait for pending tasks."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
