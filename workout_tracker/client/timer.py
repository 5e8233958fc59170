from __future__ import annotations

import asyncio
from collections.abc import Callable

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_REST_SECONDS = 60


class RestTimer:
    """Local countdown between sets.

    ``on_tick`` receives the remaining seconds after every interval and
    ``None`` once the countdown is over or cancelled. Starting the timer
    again replaces the running countdown instead of stacking a second one.
    """

    def __init__(self, on_tick: Callable[[int | None], None], interval: float = 1.0) -> None:
        self._on_tick = on_tick
        self._interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, seconds: int = DEFAULT_REST_SECONDS) -> asyncio.Task:
        if seconds <= 0:
            raise ValueError("Rest time must be positive")
        self.cancel()
        self._on_tick(seconds)
        self._task = asyncio.get_running_loop().create_task(self._run(seconds))
        logger.debug("rest_timer_started", seconds=seconds)
        return self._task

    def cancel(self) -> None:
        if self.running:
            self._task.cancel()
            self._on_tick(None)
        self._task = None

    async def wait(self) -> None:
        if self._task is not None:
            await asyncio.wait({self._task})

    async def _run(self, seconds: int) -> None:
        remaining = seconds
        while remaining > 1:
            await asyncio.sleep(self._interval)
            remaining -= 1
            self._on_tick(remaining)
        await asyncio.sleep(self._interval)
        self._on_tick(None)
        logger.debug("rest_timer_finished", seconds=seconds)
