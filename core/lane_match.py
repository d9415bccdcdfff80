"""Lane-match drill: drag sliding words onto their English targets against the clock."""

import itertools
import logging
from dataclasses import dataclass

from .config import (
    ROUND_SIZE, LANE_MIN_WORDS, LANE_COUNT, FRAME_SECONDS,
    GAME_DURATION, TIME_BONUS, STARTING_LIVES, POINTS_PER_MATCH, MAX_PASSES,
    TILE_SPAWN_X, TILE_SPAWN_SPREAD, TILE_EXIT_X, TILE_MIN_SPEED, TILE_SPEED_RANGE,
    TILE_RESET_SECONDS, COUNTDOWN_INTERVAL
)
from .drill import Drill
from .models import Outcome, PracticeItem, Status, Tile
from .selector import select
from .vocabulary import VocabularyView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ready:
    pass


@dataclass(frozen=True)
class Playing:
    pass


@dataclass(frozen=True)
class GameOver:
    score: int
    new_high_score: bool
    reason: str


def parse_drop(choice) -> tuple[str, str]:
    """Accept (tile_id, target) or {'tile_id': ..., 'target': ...}."""
    if isinstance(choice, dict):
        return choice['tile_id'], choice['target']
    tile_id, target = choice
    return tile_id, target


class LaneMatchDrill(Drill):
    """Five target slots, four lanes, limited lives and time."""

    kind = 'lane-match'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._ids = itertools.count()
        self._countdown = None
        self.words = []
        self.sequence: list[PracticeItem] = []
        self.tiles: list[Tile] = []
        self.held_tile_id = None
        self.score = 0
        self.lives = STARTING_LIVES
        self.time_left = GAME_DURATION
        self.high_score = 0
        self.state = Ready()
        self.setup()

    def setup(self) -> None:
        self.words = self._require(VocabularyView(self.entries).words(), LANE_MIN_WORDS)
        self.score = 0
        self.lives = STARTING_LIVES
        self.time_left = GAME_DURATION
        self.held_tile_id = None
        self.high_score = self.high_scores.load()

        self.sequence = select(self.words, self.weights(), ROUND_SIZE, self.rng)
        order = list(self.sequence)
        self.rng.shuffle(order)
        self.tiles = [
            Tile(id=f"t{next(self._ids)}", item=item, lane=index % LANE_COUNT,
                 x=self._spawn_x(),
                 speed=TILE_MIN_SPEED + self.rng.uniform(0, TILE_SPEED_RANGE))
            for index, item in enumerate(order)
        ]
        self.state = Ready()
        logger.info(f"Lane-match round ready: {[s.identity for s in self.sequence]}")

    def _spawn_x(self) -> float:
        return TILE_SPAWN_X + self.rng.uniform(0, TILE_SPAWN_SPREAD)

    # -- lifecycle --------------------------------------------------------

    def begin(self) -> bool:
        """Ready -> Playing. Returns False if not Ready."""
        if self.closed or not isinstance(self.state, Ready):
            return False
        self.state = Playing()
        self._stop_countdown()
        self._countdown = self.scheduler.call_every(
            COUNTDOWN_INTERVAL, self._guarded(self._count_down))
        self._start_frames()
        logger.info("Lane-match round started")
        return True

    def _stop_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    def _reset(self) -> None:
        super()._reset()
        self._stop_countdown()

    def _count_down(self) -> None:
        if not isinstance(self.state, Playing):
            return
        self.time_left = max(0, self.time_left - 1)
        if self.time_left == 0:
            self._end_game('time')

    def _end_game(self, reason: str) -> None:
        self._stop_frames()
        self._stop_countdown()
        self._cancel_timers()
        self.held_tile_id = None
        beaten = self.high_scores.record(self.score)
        self.high_score = self.high_scores.best
        self.state = GameOver(score=self.score, new_high_score=beaten, reason=reason)
        logger.info(f"Lane-match game over ({reason}): score {self.score}")

    def _lose_life(self, reason: str) -> None:
        self.lives = max(0, self.lives - 1)
        if self.lives == 0:
            self._end_game(reason)

    # -- lookups ----------------------------------------------------------

    @property
    def is_playing(self) -> bool:
        return not self.closed and isinstance(self.state, Playing)

    @property
    def current_target(self) -> PracticeItem | None:
        """First slot still waiting to be matched."""
        for item in self.sequence:
            if item.is_open:
                return item
        return None

    def find_tile(self, tile_id: str) -> Tile | None:
        for tile in self.tiles:
            if tile.id == tile_id:
                return tile
        return None

    def find_slot(self, identity: str) -> PracticeItem | None:
        for item in self.sequence:
            if item.identity == identity:
                return item
        return None

    # -- dragging ---------------------------------------------------------

    def hold(self, tile_id: str) -> bool:
        tile = self.find_tile(tile_id)
        if not self.is_playing or tile is None or tile.status is Status.CORRECT:
            return False
        self.held_tile_id = tile_id
        return True

    def release(self) -> None:
        self.held_tile_id = None

    def submit(self, choice) -> Outcome:
        return self.drop(*parse_drop(choice))

    def drop(self, tile_id: str, target: str) -> Outcome:
        """Drop a tile onto the slot whose English text is target."""
        if not self.is_playing:
            return Outcome.ignored()
        tile = self.find_tile(tile_id)
        slot = self.find_slot(target)
        if tile is None or tile.status is Status.CORRECT or slot is None or not slot.is_open:
            return Outcome.ignored()
        self.held_tile_id = None

        if tile.item.identity == slot.identity:
            slot.matched = True
            self.time_left = min(GAME_DURATION, self.time_left + TIME_BONUS)
            self.score += POINTS_PER_MATCH
            tile.status = Status.CORRECT
            self._later(TILE_RESET_SECONDS, self._replace, tile.id, slot.identity)
            return Outcome(accepted=True, correct=True, score_delta=POINTS_PER_MATCH)

        delta = self._record_mistake(tile.item.identity)
        self._lose_life('lives')
        if self.is_playing:
            tile.status = Status.INCORRECT
            self._later(TILE_RESET_SECONDS, self._unflag, tile.id)
        return Outcome(accepted=True, correct=False, ledger_delta=delta)

    def _unflag(self, tile_id: str) -> None:
        tile = self.find_tile(tile_id)
        if tile is not None and tile.status is Status.INCORRECT:
            tile.status = Status.ACTIVE

    def _pick_replacement(self, matched_identity: str):
        in_play = {item.identity for item in self.sequence}
        in_play |= {tile.item.identity for tile in self.tiles}
        fresh = [w for w in self.words if w.identity not in in_play]
        if fresh:
            return self.rng.choice(fresh)
        # Anything not held by another slot, which always includes the matched word
        others = {item.identity for item in self.sequence if item.identity != matched_identity}
        return self.rng.choice([w for w in self.words if w.identity not in others])

    def _replace(self, tile_id: str, matched_identity: str) -> None:
        tile = self.find_tile(tile_id)
        index = next((i for i, item in enumerate(self.sequence)
                      if item.identity == matched_identity and item.matched is True), None)
        if tile is None or index is None:
            return
        entry = self._pick_replacement(matched_identity)
        item = PracticeItem(entry, weight=self.ledger.weight(entry.identity))
        self.sequence[index] = item
        tile.item = item
        tile.status = Status.ACTIVE
        tile.x = self._spawn_x()

    # -- frames -----------------------------------------------------------

    def advance(self, elapsed: float) -> None:
        if not self.is_playing:
            return
        frames = elapsed / FRAME_SECONDS
        target = self.current_target
        missed = False
        for tile in self.tiles:
            if tile.status is Status.CORRECT or tile.id == self.held_tile_id:
                continue
            tile.x -= tile.speed * frames
            if tile.x < TILE_EXIT_X:
                if target is not None and tile.item.identity == target.identity:
                    missed = True
                tile.x = self._spawn_x()

        if missed:
            if target.passes + 1 >= MAX_PASSES:
                target.matched = 'skipped'
                self._lose_life('passes')
            else:
                target.passes += 1

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'score': self.score,
            'lives': self.lives,
            'time_left': self.time_left,
            'high_score': self.high_score,
            'held_tile_id': self.held_tile_id,
            'sequence': [s.to_dict(self.language) for s in self.sequence],
            'tiles': [t.to_dict(self.language) for t in self.tiles]
        })
        if isinstance(self.state, GameOver):
            data['new_high_score'] = self.state.new_high_score
            data['reason'] = self.state.reason
        return data
