"""Ping sweeper - periodically removes expired pings."""

import asyncio

from pingboard.core.logging import get_logger
from pingboard.services.engine import PingEngine

logger = get_logger("sweeper")

# How often to sweep expired pings (in seconds)
SWEEP_INTERVAL_SECONDS = 10.0


class PingSweeper:
    """Background task that runs the expiry sweep independent of requests."""

    def __init__(self, engine: PingEngine, interval: float = SWEEP_INTERVAL_SECONDS):
        self.engine = engine
        self.interval = interval
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def task(self) -> asyncio.Task | None:
        return self._task

    async def start(self) -> None:
        """Start the background sweep task."""
        if self._running:
            logger.warning("Ping sweeper is already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._sweep_loop(), name="ping-sweeper")
        logger.info(f"Ping sweeper started (interval: {self.interval}s)")

    async def stop(self) -> None:
        """Stop the background sweep task."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Ping sweeper stopped")

    async def _sweep_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self.interval)
            try:
                self.engine.sweep_expired()
            except Exception:
                logger.exception("Error sweeping expired pings")
