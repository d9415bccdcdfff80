"""Domain models for lingodrill."""

from dataclasses import dataclass, field
from enum import Enum

from .config import DEFAULT_LANGUAGE, PHRASE, WORD


@dataclass(frozen=True)
class Entry:
    """One bilingual dictionary record, keyed by its English text."""

    english: str
    type: str = WORD
    translations: dict = field(default_factory=dict, hash=False, compare=False)

    @property
    def identity(self) -> str:
        return self.english

    @property
    def is_word(self) -> bool:
        return self.type == WORD

    @property
    def is_phrase(self) -> bool:
        return self.type == PHRASE

    def text(self, language: str = DEFAULT_LANGUAGE) -> str:
        """Translation in a learning language, English if missing."""
        return self.translations.get(language) or self.english

    def to_dict(self) -> dict:
        return {'English': self.english, **self.translations, 'Type': self.type}

    @classmethod
    def from_dict(cls, data: dict) -> 'Entry':
        translations = {
            key: str(value).strip()
            for key, value in data.items()
            if key not in ('English', 'Type') and value is not None and str(value).strip()
        }
        entry_type = str(data.get('Type') or WORD).strip().lower()
        return cls(
            english=str(data['English']).strip(),
            type=entry_type,
            translations=translations
        )


@dataclass
class PracticeItem:
    """An entry plus transient per-round state."""

    entry: Entry
    weight: int = 0
    collected: bool = False
    passes: int = 0
    matched: bool | str = False  # True, False or "skipped"

    @property
    def identity(self) -> str:
        return self.entry.identity

    @property
    def is_open(self) -> bool:
        """Still waiting to be matched (neither solved nor skipped)."""
        return self.matched is False

    def to_dict(self, language: str = DEFAULT_LANGUAGE) -> dict:
        return {
            'english': self.entry.english,
            'text': self.entry.text(language),
            'weight': self.weight,
            'collected': self.collected,
            'passes': self.passes,
            'matched': self.matched
        }


class Status(str, Enum):
    ACTIVE = 'active'
    CORRECT = 'resolved-correct'
    INCORRECT = 'resolved-incorrect'


@dataclass
class Bubble:
    """A falling item in the Capture drill."""

    id: str
    item: PracticeItem
    x: float
    y: float
    speed: float
    status: Status = Status.ACTIVE

    def to_dict(self, language: str = DEFAULT_LANGUAGE) -> dict:
        return {
            'id': self.id,
            'english': self.item.identity,
            'text': self.item.entry.text(language),
            'x': round(self.x, 3),
            'y': round(self.y, 3),
            'speed': self.speed,
            'status': self.status.value
        }


@dataclass
class Tile:
    """A sliding item in one lane of the Lane-Match drill."""

    id: str
    item: PracticeItem
    lane: int
    x: float
    speed: float
    status: Status = Status.ACTIVE

    def to_dict(self, language: str = DEFAULT_LANGUAGE) -> dict:
        return {
            'id': self.id,
            'english': self.item.identity,
            'text': self.item.entry.text(language),
            'lane': self.lane,
            'x': round(self.x, 3),
            'speed': self.speed,
            'status': self.status.value
        }


@dataclass
class Outcome:
    """Result of a submitted answer."""

    accepted: bool
    correct: bool = False
    ledger_delta: dict = field(default_factory=dict)
    score_delta: int = 0

    @classmethod
    def ignored(cls) -> 'Outcome':
        return cls(accepted=False)

    def to_dict(self) -> dict:
        return {
            'accepted': self.accepted,
            'correct': self.correct,
            'ledger_delta': self.ledger_delta,
            'score_delta': self.score_delta
        }
