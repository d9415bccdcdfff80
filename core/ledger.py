"""Persisted mistake weights and high score."""

import logging

from .config import HIGH_SCORE_KEY, LEDGER_KEY
from .errors import PersistenceUnavailable
from .interfaces import Storage

logger = logging.getLogger(__name__)


def _clean_counts(raw) -> dict[str, int]:
    """Coerce a stored ledger into {identity: non-negative int}."""
    if not isinstance(raw, dict):
        return {}
    counts = {}
    for identity, value in raw.items():
        try:
            count = int(value)
        except (TypeError, ValueError):
            continue
        if count > 0:
            counts[str(identity)] = count
    return counts


class MistakeLedger:
    """Accumulated mistake counts keyed by entry identity.

    Reads fall back to an empty ledger and writes are best-effort: a storage
    failure is logged and the count is kept in memory so gameplay continues.
    Counts are never decremented.
    """

    def __init__(self, storage: Storage):
        self.storage = storage
        self._counts: dict[str, int] = {}

    def _read(self) -> dict[str, int] | None:
        try:
            return _clean_counts(self.storage.get(LEDGER_KEY))
        except PersistenceUnavailable as e:
            logger.warning(f"Mistake ledger unavailable, using in-memory counts: {e}")
            return None

    def load(self) -> dict[str, int]:
        """Refresh from the store and return a snapshot."""
        stored = self._read()
        if stored is not None:
            self._merge(stored)
        return self.snapshot()

    def snapshot(self) -> dict[str, int]:
        return dict(self._counts)

    def weight(self, identity: str) -> int:
        return self._counts.get(identity, 0)

    def _merge(self, other: dict[str, int]) -> None:
        for identity, count in other.items():
            if count > self._counts.get(identity, 0):
                self._counts[identity] = count

    def increment(self, identity: str) -> int:
        """Add one mistake for identity. Returns the new count."""
        stored = self._read()
        if stored is not None:
            self._merge(stored)
        new_count = self._counts.get(identity, 0) + 1
        self._counts[identity] = new_count
        try:
            self.storage.set(LEDGER_KEY, dict(self._counts))
        except PersistenceUnavailable as e:
            logger.warning(f"Failed to persist mistake for {identity!r}: {e}")
        return new_count

    def most_missed(self, limit: int = 20) -> list[tuple[str, int]]:
        """Identities with the most mistakes, highest first."""
        ranked = sorted(self._counts.items(), key=lambda kv: (-kv[1], kv[0]))
        return ranked[:limit]


class HighScoreBoard:
    """Single persisted high score, only ever raised."""

    def __init__(self, storage: Storage):
        self.storage = storage
        self._best = 0

    def load(self) -> int:
        try:
            stored = self.storage.get(HIGH_SCORE_KEY)
        except PersistenceUnavailable as e:
            logger.warning(f"High score unavailable, using {self._best}: {e}")
            return self._best
        try:
            stored = int(stored or 0)
        except (TypeError, ValueError):
            stored = 0
        self._best = max(self._best, stored)
        return self._best

    @property
    def best(self) -> int:
        return self._best

    def record(self, score: int) -> bool:
        """Persist score if it strictly beats the current high score."""
        current = self.load()
        if score <= current:
            return False
        self._best = score
        try:
            self.storage.set(HIGH_SCORE_KEY, score)
        except PersistenceUnavailable as e:
            logger.warning(f"Failed to persist high score {score}: {e}")
        logger.info(f"New high score: {score} (was {current})")
        return True
