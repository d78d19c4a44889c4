"""
Ping periodico al almacenamiento / Periodic store liveness ping.

Corre en segundo plano cada PING_INTERVAL_SECONDS; sus fallos solo se
registran en el log y nunca afectan a los flujos.
"""

import asyncio
import contextlib
import logging

from autostock.store.records import RecordStore, StoreError

logger = logging.getLogger(__name__)


class LivenessMonitor:
    def __init__(self, records: RecordStore, interval_seconds: float = 300):
        self.records = records
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    async def ping(self) -> bool:
        try:
            await self.records.query("vehicles", limit=1)
        except StoreError as exc:
            logger.warning("[liveness] Store ping failed: %s", exc)
            return False
        except Exception:
            logger.warning("[liveness] Store ping failed", exc_info=True)
            return False
        return True

    async def _run(self):
        while True:
            await self.ping()
            await asyncio.sleep(self.interval_seconds)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if not self.running:
            self._task = asyncio.get_running_loop().create_task(self._run(), name="liveness_ping")

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
