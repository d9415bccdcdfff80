"""Scheduler handles and a virtual-clock scheduler for host-driven loops."""

import heapq
import itertools
import logging
from typing import Callable

from .interfaces import Scheduler

logger = logging.getLogger(__name__)


class Handle:
    """A registered callback. cancel() may be called any number of times."""

    def __init__(self, callback: Callable, on_cancel: Callable[['Handle'], None] = None):
        self.callback = callback
        self._on_cancel = on_cancel
        self.cancelled = False

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        if self._on_cancel:
            self._on_cancel(self)


class FrameRegistry:
    """Per-frame callbacks, stepped by the host once per display refresh."""

    def __init__(self):
        self._frames: list[Handle] = []

    def on_frame(self, callback: Callable[[float], None]) -> Handle:
        handle = Handle(callback, on_cancel=self._drop_frame)
        self._frames.append(handle)
        return handle

    def _drop_frame(self, handle: Handle) -> None:
        if handle in self._frames:
            self._frames.remove(handle)

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    def step_frames(self, elapsed: float) -> None:
        """Run every live frame callback once."""
        for handle in list(self._frames):
            if not handle.cancelled:
                handle.callback(elapsed)


class ManualScheduler(FrameRegistry, Scheduler):
    """Scheduler driven by an explicit virtual clock.

    advance(elapsed) steps frame callbacks once, then fires timers that fall
    due within the elapsed window in time order.
    """

    def __init__(self):
        super().__init__()
        self.now = 0.0
        self._timers = []
        self._seq = itertools.count()

    def _push(self, due: float, handle: Handle, interval: float | None) -> None:
        heapq.heappush(self._timers, (due, next(self._seq), handle, interval))

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        handle = Handle(callback)
        self._push(self.now + delay, handle, None)
        return handle

    def call_every(self, interval: float, callback: Callable[[], None]) -> Handle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        handle = Handle(callback)
        self._push(self.now + interval, handle, interval)
        return handle

    @property
    def pending(self) -> int:
        """Number of timers still waiting to fire."""
        return sum(1 for _, _, handle, _ in self._timers if not handle.cancelled)

    def advance(self, elapsed: float) -> None:
        self.step_frames(elapsed)
        deadline = self.now + elapsed
        while self._timers and self._timers[0][0] <= deadline:
            due, _, handle, interval = heapq.heappop(self._timers)
            if handle.cancelled:
                continue
            self.now = due
            if interval is not None:
                self._push(due + interval, handle, interval)
            handle.callback()
        self.now = deadline
