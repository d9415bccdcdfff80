"""Capture drill: click the falling bubble that matches the current target."""

import itertools
import logging
from dataclasses import dataclass

from .config import (
    ROUND_SIZE, CAPTURE_MIN_WORDS, CAPTURE_DECOY_COUNT, FRAME_SECONDS,
    BUBBLE_MAX_X, BUBBLE_SPAWN_Y, BUBBLE_SPAWN_SPREAD, BUBBLE_EXIT_Y,
    BUBBLE_MIN_SPEED, BUBBLE_SPEED_RANGE, BUBBLE_GRACE_SECONDS
)
from .drill import Drill
from .models import Bubble, Outcome, PracticeItem, Status
from .selector import select, select_decoys
from .vocabulary import VocabularyView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Playing:
    target_index: int


@dataclass(frozen=True)
class Won:
    pass


class CaptureDrill(Drill):
    """Find each target word in turn among the falling bubbles."""

    kind = 'capture'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._ids = itertools.count()
        self.targets: list[PracticeItem] = []
        self.bubbles: list[Bubble] = []
        self.state = Playing(0)
        self.setup()

    def setup(self) -> None:
        words = self._require(VocabularyView(self.entries).words(), CAPTURE_MIN_WORDS)
        self.targets = select(words, self.weights(), ROUND_SIZE, self.rng)
        decoys = select_decoys(words, self.targets, CAPTURE_DECOY_COUNT, self.rng)

        bubbles = [self._spawn(item) for item in self.targets + decoys]
        self.rng.shuffle(bubbles)
        self.bubbles = bubbles

        self.state = Playing(0)
        self._start_frames()
        logger.info(f"Capture round started: {[t.identity for t in self.targets]}")

    def _spawn(self, item: PracticeItem) -> Bubble:
        return Bubble(
            id=f"b{next(self._ids)}",
            item=item,
            x=self.rng.uniform(0, BUBBLE_MAX_X),
            y=BUBBLE_SPAWN_Y - self.rng.uniform(0, BUBBLE_SPAWN_SPREAD),
            speed=BUBBLE_MIN_SPEED + self.rng.uniform(0, BUBBLE_SPEED_RANGE)
        )

    @property
    def current_target(self) -> PracticeItem | None:
        if isinstance(self.state, Playing):
            return self.targets[self.state.target_index]
        return None

    def find_bubble(self, bubble_id: str) -> Bubble | None:
        for bubble in self.bubbles:
            if bubble.id == bubble_id:
                return bubble
        return None

    def submit(self, choice) -> Outcome:
        """Select a bubble by id."""
        return self.select_bubble(choice)

    def select_bubble(self, bubble_id: str) -> Outcome:
        if self.closed or not isinstance(self.state, Playing):
            return Outcome.ignored()
        bubble = self.find_bubble(bubble_id)
        if bubble is None or bubble.status is not Status.ACTIVE:
            return Outcome.ignored()

        index = self.state.target_index
        target = self.targets[index]

        if bubble.item.identity == target.identity:
            bubble.status = Status.CORRECT
            target.collected = True
            if index == len(self.targets) - 1:
                self.state = Won()
                self._stop_frames()
                logger.info("Capture round won")
            else:
                self.state = Playing(index + 1)
            self._later(BUBBLE_GRACE_SECONDS, self._expire_bubble, bubble.id)
            return Outcome(accepted=True, correct=True)

        # The miss counts against the word the player failed to find
        bubble.status = Status.INCORRECT
        delta = self._record_mistake(target.identity)
        self._later(BUBBLE_GRACE_SECONDS, self._expire_bubble, bubble.id)
        return Outcome(accepted=True, correct=False, ledger_delta=delta)

    def _expire_bubble(self, bubble_id: str) -> None:
        bubble = self.find_bubble(bubble_id)
        if bubble is None or bubble.status is Status.ACTIVE:
            return
        pending = {t.identity for t in self.targets if not t.collected}
        if bubble.status is Status.INCORRECT and bubble.item.identity in pending:
            # Still needed later in the sequence: send it back to the top
            bubble.status = Status.ACTIVE
            bubble.y = BUBBLE_SPAWN_Y
            bubble.x = self.rng.uniform(0, BUBBLE_MAX_X)
            return
        self.bubbles = [b for b in self.bubbles if b.id != bubble_id]

    def advance(self, elapsed: float) -> None:
        frames = elapsed / FRAME_SECONDS
        for bubble in self.bubbles:
            if bubble.status is not Status.ACTIVE:
                continue
            bubble.y += bubble.speed * frames
            if bubble.y > BUBBLE_EXIT_Y:
                bubble.y = BUBBLE_SPAWN_Y
                bubble.x = self.rng.uniform(0, BUBBLE_MAX_X)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'target_index': self.state.target_index if isinstance(self.state, Playing) else None,
            'targets': [t.to_dict(self.language) for t in self.targets],
            'bubbles': [b.to_dict(self.language) for b in self.bubbles]
        })
        return data
