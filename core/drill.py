"""Shared lifecycle for drills: epoch-guarded callbacks, frames and teardown."""

import logging
import random
from typing import Callable

from .config import DEFAULT_LANGUAGE
from .errors import InsufficientVocabulary, StaleCallback
from .interfaces import Scheduler
from .ledger import HighScoreBoard, MistakeLedger
from .models import Entry, Outcome
from .vocabulary import unique_by_identity

logger = logging.getLogger(__name__)


class Drill:
    """Base class for the interactive drills.

    Every delayed callback is bound to the epoch it was scheduled in. Restart
    and teardown bump the epoch, so callbacks from a superseded round find a
    stale epoch and leave the current state alone.
    """

    kind = None

    def __init__(self, entries: list[Entry], ledger: MistakeLedger, scheduler: Scheduler,
                 rng: random.Random = None, language: str = DEFAULT_LANGUAGE,
                 ledger_snapshot: dict = None, high_scores: HighScoreBoard = None):
        self.entries = list(entries)
        self.ledger = ledger
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self.language = language
        self._ledger_snapshot = ledger_snapshot
        self.high_scores = high_scores or HighScoreBoard(ledger.storage)
        self._epoch = 0
        self._timers = []
        self._frame_handle = None
        self.closed = False

    # -- weights ----------------------------------------------------------

    def weights(self) -> dict:
        """Mistake weights for round setup.

        A snapshot passed in by the caller is used once; restarts re-read
        the ledger.
        """
        snapshot, self._ledger_snapshot = self._ledger_snapshot, None
        if snapshot is not None:
            return snapshot
        return self.ledger.load()

    def _require(self, pool: list[Entry], minimum: int) -> list[Entry]:
        """Unique pool entries, or InsufficientVocabulary below minimum."""
        unique = unique_by_identity(pool)
        if len(unique) < minimum:
            raise InsufficientVocabulary(self.kind, minimum, len(unique))
        return unique

    def _record_mistake(self, identity: str) -> dict:
        self.ledger.increment(identity)
        return {identity: 1}

    # -- callbacks --------------------------------------------------------

    def _check_epoch(self, epoch: int) -> None:
        if self.closed or epoch != self._epoch:
            raise StaleCallback(f"{self.kind} callback from epoch {epoch}, now {self._epoch}")

    def _guarded(self, callback: Callable, *args) -> Callable:
        epoch = self._epoch

        def run():
            try:
                self._check_epoch(epoch)
            except StaleCallback as e:
                logger.debug(f"Ignoring stale callback: {e}")
                return
            callback(*args)

        return run

    def _later(self, delay: float, callback: Callable, *args):
        guarded = self._guarded(callback, *args)

        def fire():
            if handle in self._timers:
                self._timers.remove(handle)
            guarded()

        handle = self.scheduler.call_later(delay, fire)
        self._timers.append(handle)
        return handle

    def _cancel_timers(self) -> None:
        for handle in self._timers:
            handle.cancel()
        self._timers = []

    # -- continuous update ------------------------------------------------

    @property
    def animating(self) -> bool:
        return self._frame_handle is not None and not self._frame_handle.cancelled

    def _start_frames(self) -> None:
        if not self.animating:
            self._frame_handle = self.scheduler.on_frame(self.tick)

    def _stop_frames(self) -> None:
        if self._frame_handle is not None:
            self._frame_handle.cancel()
            self._frame_handle = None

    def tick(self, elapsed: float) -> None:
        """Advance by elapsed seconds. No-op unless frames are registered."""
        if self.closed or not self.animating:
            return
        self.advance(elapsed)

    def advance(self, elapsed: float) -> None:
        pass

    # -- lifecycle --------------------------------------------------------

    def _reset(self) -> None:
        """Supersede every pending callback of the current round."""
        self._epoch += 1
        self._cancel_timers()
        self._stop_frames()

    def restart(self) -> None:
        self._reset()
        self.setup()

    def setup(self) -> None:
        raise NotImplementedError

    def submit(self, choice) -> Outcome:
        raise NotImplementedError

    def teardown(self) -> None:
        """Cancel all pending callbacks. Safe to call repeatedly."""
        if self.closed:
            return
        self._reset()
        self.closed = True
        logger.info(f"{self.kind} round torn down")

    @property
    def state_name(self) -> str:
        return type(self.state).__name__

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'state': self.state_name, 'language': self.language}
