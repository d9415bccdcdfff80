"""Practice engine: owns the active round and routes host calls to it."""

import logging
import random
import uuid
from dataclasses import dataclass

from .capture import CaptureDrill
from .config import DEFAULT_LANGUAGE, LANGUAGES, SETTINGS_KEY
from .drill import Drill
from .errors import PersistenceUnavailable, UnknownRound
from .interfaces import Scheduler, Storage
from .lane_match import LaneMatchDrill
from .ledger import HighScoreBoard, MistakeLedger
from .models import Entry, Outcome
from .quiz import QuizDrill
from .vocabulary import load_entries

logger = logging.getLogger(__name__)

DRILLS = {
    CaptureDrill.kind: CaptureDrill,
    LaneMatchDrill.kind: LaneMatchDrill,
    QuizDrill.kind: QuizDrill,
}


@dataclass(frozen=True)
class RoundHandle:
    id: str
    kind: str


class PracticeEngine:
    """Entry point for the surrounding application.

    Only one drill is active at a time: starting a round tears down the
    previous one and cancels everything it had scheduled.
    """

    def __init__(self, storage: Storage, scheduler: Scheduler, rng: random.Random = None):
        self.storage = storage
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self.ledger = MistakeLedger(storage)
        self.high_scores = HighScoreBoard(storage)
        self.entries: list[Entry] = []
        self.language = DEFAULT_LANGUAGE
        self._rounds: dict[str, Drill] = {}

    def load(self) -> None:
        """Read dictionary, settings, ledger and high score from the store."""
        self.entries = load_entries(self.storage)
        self.language = self.load_settings().get('learningLanguage', DEFAULT_LANGUAGE)
        self.ledger.load()
        self.high_scores.load()
        logger.info(f"Loaded {len(self.entries)} entries, learning {self.language}")

    def load_entries(self) -> list[Entry]:
        self.entries = load_entries(self.storage)
        return self.entries

    def load_settings(self) -> dict:
        try:
            settings = self.storage.get(SETTINGS_KEY) or {}
        except PersistenceUnavailable as e:
            logger.warning(f"Settings unavailable, using defaults: {e}")
            settings = {}
        if settings.get('learningLanguage') not in LANGUAGES:
            settings['learningLanguage'] = DEFAULT_LANGUAGE
        return settings

    def save_settings(self, settings: dict) -> dict:
        language = settings.get('learningLanguage', self.language)
        if language not in LANGUAGES:
            raise ValueError(f"Unsupported language: {language}")
        merged = {**self.load_settings(), **settings}
        self.storage.set(SETTINGS_KEY, merged)
        self.language = language
        return merged

    # -- rounds -----------------------------------------------------------

    def start_round(self, kind: str, entries: list[Entry] = None,
                    ledger_snapshot: dict = None) -> RoundHandle:
        """Start a drill round.

        Raises KeyError for an unknown kind and InsufficientVocabulary when
        the pool is too small; in both cases nothing is started.
        """
        drill_class = DRILLS[kind]
        drill = drill_class(
            self.entries if entries is None else entries,
            self.ledger,
            self.scheduler,
            rng=self.rng,
            language=self.language,
            ledger_snapshot=ledger_snapshot,
            high_scores=self.high_scores
        )
        self.teardown_all()
        handle = RoundHandle(id=uuid.uuid4().hex[:8], kind=kind)
        self._rounds[handle.id] = drill
        logger.info(f"Started {kind} round {handle.id}")
        return handle

    def _round_id(self, handle) -> str:
        return handle.id if isinstance(handle, RoundHandle) else str(handle)

    def get_drill(self, handle) -> Drill:
        round_id = self._round_id(handle)
        drill = self._rounds.get(round_id)
        if drill is None:
            raise UnknownRound(round_id)
        return drill

    def handle_for(self, round_id: str) -> RoundHandle:
        return RoundHandle(id=round_id, kind=self.get_drill(round_id).kind)

    def submit_answer(self, handle, choice) -> Outcome:
        return self.get_drill(handle).submit(choice)

    def tick(self, handle, elapsed: float) -> None:
        self.get_drill(handle).tick(elapsed)

    def begin(self, handle) -> bool:
        drill = self.get_drill(handle)
        if isinstance(drill, LaneMatchDrill):
            return drill.begin()
        return False

    def restart(self, handle) -> None:
        self.get_drill(handle).restart()

    def hold(self, handle, tile_id: str) -> bool:
        drill = self.get_drill(handle)
        return isinstance(drill, LaneMatchDrill) and drill.hold(tile_id)

    def release(self, handle) -> None:
        drill = self.get_drill(handle)
        if isinstance(drill, LaneMatchDrill):
            drill.release()

    def complete_reveal(self, handle) -> bool:
        drill = self.get_drill(handle)
        return isinstance(drill, QuizDrill) and drill.complete_reveal()

    def snapshot(self, handle) -> dict:
        round_id = self._round_id(handle)
        return {'round_id': round_id, **self.get_drill(round_id).to_dict()}

    def teardown(self, handle) -> None:
        """Cancel everything the round scheduled. Unknown or finished handles are ignored."""
        drill = self._rounds.pop(self._round_id(handle), None)
        if drill is not None:
            drill.teardown()

    def teardown_all(self) -> None:
        for round_id in list(self._rounds):
            self.teardown(round_id)

    @property
    def active_rounds(self) -> list[str]:
        return list(self._rounds)
