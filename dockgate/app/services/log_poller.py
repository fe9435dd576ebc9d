from __future__ import annotations

import asyncio
import contextlib
import logging

from .engine_client import EngineClient, EngineError
from .log_cache import LogCache
from .redaction import redact

logger = logging.getLogger(__name__)


class LogPoller:
    """
    Background task that refreshes the log cache from the engine.

    Each cycle fetches the full container stdout, redacts it and swaps it into
    the cache. A failed cycle is logged and leaves the previous snapshot in
    place. Cycles start `interval_seconds` apart.
    """

    def __init__(self, *, engine: EngineClient, cache: LogCache, interval_seconds: float = 10.0):
        self._engine = engine
        self._cache = cache
        self._interval_seconds = max(0.0, float(interval_seconds))
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> bool:
        try:
            text = await self._engine.fetch_logs()
        except EngineError as e:
            logger.error("log poll failed: %s: %s", e.code, e.message)
            return False
        self._cache.update(redact(text))
        return True

    async def run_forever(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            started_at = loop.time()
            try:
                await self.tick()
            except Exception:  # noqa: BLE001
                logger.exception("log poll crashed; retrying next cycle")
            elapsed = loop.time() - started_at
            await asyncio.sleep(max(0.0, self._interval_seconds - elapsed))

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self.run_forever(), name="log-poller")
        logger.info("log poller started container=%s interval=%.1fs", self._engine.container, self._interval_seconds)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("log poller stopped")
