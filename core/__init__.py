from .models import Entry, PracticeItem, Bubble, Tile, Outcome, Status
from .interfaces import Storage, Scheduler
from .errors import (
    LingodrillError, InsufficientVocabulary, DuplicateIdentity,
    StaleCallback, PersistenceUnavailable, UnknownRound
)
from .engine import PracticeEngine, RoundHandle
from .scheduler import ManualScheduler
from .config import (
    LANGUAGES, DEFAULT_LANGUAGE,
    DICTIONARY_KEY, LEDGER_KEY, HIGH_SCORE_KEY, SETTINGS_KEY
)

__all__ = [
    'Entry', 'PracticeItem', 'Bubble', 'Tile', 'Outcome', 'Status',
    'Storage', 'Scheduler',
    'LingodrillError', 'InsufficientVocabulary', 'DuplicateIdentity',
    'StaleCallback', 'PersistenceUnavailable', 'UnknownRound',
    'PracticeEngine', 'RoundHandle', 'ManualScheduler',
    'LANGUAGES', 'DEFAULT_LANGUAGE',
    'DICTIONARY_KEY', 'LEDGER_KEY', 'HIGH_SCORE_KEY', 'SETTINGS_KEY'
]
