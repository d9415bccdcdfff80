"""Mock port implementations and entry factories shared by the tests."""

import copy

from core.config import PHRASE, WORD
from core.errors import PersistenceUnavailable
from core.interfaces import Storage
from core.models import Entry


class MockStorage(Storage):
    """In-memory storage with switchable failures."""

    def __init__(self, data: dict = None):
        self.data = dict(data or {})
        self.fail_reads = False
        self.fail_writes = False
        self.set_calls = []

    def get(self, key: str):
        if self.fail_reads:
            raise PersistenceUnavailable(f"read of {key} failed")
        return copy.deepcopy(self.data.get(key))

    def set(self, key: str, value) -> None:
        if self.fail_writes:
            raise PersistenceUnavailable(f"write of {key} failed")
        self.set_calls.append((key, copy.deepcopy(value)))
        self.data[key] = copy.deepcopy(value)


def make_entry(english: str, entry_type: str = WORD) -> Entry:
    return Entry(
        english=english,
        type=entry_type,
        translations={'Konkani': f'kok-{english}', 'Telugu': f'tel-{english}'}
    )


def make_words(count: int, prefix: str = 'word') -> list[Entry]:
    return [make_entry(f'{prefix}{i}') for i in range(count)]


def make_phrases(count: int, prefix: str = 'phrase') -> list[Entry]:
    return [make_entry(f'{prefix} {i}', PHRASE) for i in range(count)]
