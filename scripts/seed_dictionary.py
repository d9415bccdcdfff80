"""Konkani and Telugu starter dictionary.

Usage:
    python -m scripts.seed_dictionary [--state-dir DIR]

Entries already present (same English text) are left untouched.
"""

import argparse
import logging

from core.config import DICTIONARY_KEY, PHRASE, WORD
from core.interfaces import Storage
from core.models import Entry
from core.vocabulary import load_entries, unique_by_identity

logger = logging.getLogger(__name__)


def get_seed_words():
    """English -> (Konkani, Telugu) for single words."""
    return {
        'water': ('उदक', 'నీళ్ళు'),
        'house': ('घर', 'ఇల్లు'),
        'food': ('जेवण', 'భోజనం'),
        'mother': ('आवय', 'అమ్మ'),
        'father': ('बापूय', 'నాన్న'),
        'fish': ('नुस्तें', 'చేప'),
        'rice': ('भात', 'అన్నం'),
        'milk': ('दूद', 'పాలు'),
        'tree': ('झाड', 'చెట్టు'),
        'sun': ('सुर्य', 'సూర్యుడు'),
        'moon': ('चंद्र', 'చంద్రుడు'),
        'dog': ('सुणें', 'కుక్క'),
        'cat': ('मांजर', 'పిల్లి'),
        'book': ('पुस्तक', 'పుస్తకం'),
        'day': ('दीस', 'రోజు'),
        'night': ('रात', 'రాత్రి'),
        'good': ('बरें', 'మంచి'),
    }


def get_seed_phrases():
    """English -> (Konkani, Telugu) for short phrases."""
    return {
        'hello': ('नमस्कार', 'నమస్కారం'),
        'how are you?': ('कशें आसा?', 'మీరు ఎలా ఉన్నారు?'),
        'thank you': ('देव बरें करूं', 'ధన్యవాదాలు'),
        'what is your name?': ('तुजें नांव कितें?', 'మీ పేరు ఏమిటి?'),
        'i am hungry': ('म्हाका भूक लागल्या', 'నాకు ఆకలిగా ఉంది'),
        'good morning': ('सुप्रभात', 'శుభోదయం'),
        'see you later': ('मागीर मेळूंया', 'మళ్ళీ కలుద్దాం'),
        'where is the market?': ('बाजार खंय आसा?', 'మార్కెట్ ఎక్కడ ఉంది?'),
    }


def build_entries() -> list[Entry]:
    entries = []
    for entry_type, rows in ((WORD, get_seed_words()), (PHRASE, get_seed_phrases())):
        for english, (konkani, telugu) in rows.items():
            entries.append(Entry(
                english=english,
                type=entry_type,
                translations={'Konkani': konkani, 'Telugu': telugu}
            ))
    return entries


def seed(storage: Storage) -> int:
    """Merge the starter entries into storage. Returns how many were added."""
    existing = load_entries(storage)
    known = {e.identity for e in existing}
    added = [e for e in build_entries() if e.identity not in known]
    merged = unique_by_identity(existing + added)
    storage.set(DICTIONARY_KEY, [e.to_dict() for e in merged])
    logger.info(f"Seeded {len(added)} entries ({len(merged)} total)")
    return len(added)


def main():
    parser = argparse.ArgumentParser(description='Seed the lingodrill dictionary')
    parser.add_argument('--state-dir', help='File storage directory (default: LINGODRILL_STATE_DIR)')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    if args.state_dir:
        from server.file_storage import FileStorage
        storage = FileStorage(args.state_dir)
    else:
        from server.app import create_storage
        storage = create_storage()

    added = seed(storage)
    print(f"Added {added} entries")


if __name__ == '__main__':
    main()
