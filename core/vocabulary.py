"""Read-only views over the dictionary entries."""

import logging

from .config import DICTIONARY_KEY, SEARCH_THRESHOLD
from .errors import DuplicateIdentity, PersistenceUnavailable
from .interfaces import Storage
from .models import Entry
from .utils import similarity

logger = logging.getLogger(__name__)


def unique_by_identity(entries: list[Entry]) -> list[Entry]:
    """Drop entries whose identity was already seen, keeping the first."""
    seen = set()
    unique = []
    for entry in entries:
        if entry.identity in seen:
            logger.warning(f"Dropping duplicate entry identity: {entry.identity!r}")
            continue
        seen.add(entry.identity)
        unique.append(entry)
    return unique


class VocabularyView:
    """Filtered, read-only view of the dictionary."""

    def __init__(self, entries: list[Entry]):
        self.entries = list(entries)

    def __len__(self) -> int:
        return len(self.entries)

    def words(self) -> list[Entry]:
        return [e for e in self.entries if e.is_word]

    def phrases(self) -> list[Entry]:
        return [e for e in self.entries if e.is_phrase]

    def search(self, query: str, threshold: float = SEARCH_THRESHOLD) -> list[Entry]:
        """Fuzzy search over English and every translation.

        Returns matches best first; an empty query returns everything.
        """
        if not query or not query.strip():
            return list(self.entries)
        scored = []
        for index, entry in enumerate(self.entries):
            fields = [entry.english, *entry.translations.values()]
            score = max(similarity(query, text) for text in fields)
            if score >= threshold:
                scored.append((score, index, entry))
        scored.sort(key=lambda s: (-s[0], s[1]))
        return [entry for _, _, entry in scored]


def load_entries(storage: Storage) -> list[Entry]:
    """Read dictionary entries from the store. Returns [] when unavailable."""
    try:
        raw = storage.get(DICTIONARY_KEY) or []
    except PersistenceUnavailable as e:
        logger.warning(f"Dictionary unavailable: {e}")
        return []
    entries = []
    for row in raw:
        try:
            entries.append(Entry.from_dict(row))
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping malformed dictionary row {row!r}: {e}")
    return entries


def add_entry(storage: Storage, entry: Entry) -> list[Entry]:
    """Append an entry to the stored dictionary.

    Raises DuplicateIdentity if the English text is already present.
    """
    entries = load_entries(storage)
    if any(e.identity == entry.identity for e in entries):
        raise DuplicateIdentity(entry.identity)
    entries.append(entry)
    storage.set(DICTIONARY_KEY, [e.to_dict() for e in entries])
    return entries
