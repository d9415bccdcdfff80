"""Scheduler backed by the asyncio event loop."""

import asyncio
import logging
from typing import Callable

from core.interfaces import Scheduler
from core.scheduler import FrameRegistry, Handle

logger = logging.getLogger(__name__)


class AsyncioScheduler(FrameRegistry, Scheduler):
    """Timers run on the event loop; frames are stepped by the client's ticks."""

    def __init__(self, loop: asyncio.AbstractEventLoop = None):
        super().__init__()
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        timer = self.loop.call_later(delay, self._run, callback)
        return Handle(callback, on_cancel=lambda _: timer.cancel())

    def call_every(self, interval: float, callback: Callable[[], None]) -> Handle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        current = {}

        def fire():
            if handle.cancelled:
                return
            current['timer'] = self.loop.call_later(interval, fire)
            self._run(callback)

        def stop(_):
            timer = current.get('timer')
            if timer is not None:
                timer.cancel()

        handle = Handle(callback, on_cancel=stop)
        current['timer'] = self.loop.call_later(interval, fire)
        return handle

    @staticmethod
    def _run(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:
            logger.exception("Scheduled callback failed")
