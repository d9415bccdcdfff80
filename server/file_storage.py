"""File-based storage implementation."""

import json
import logging
import os
import re

from core.errors import PersistenceUnavailable
from core.interfaces import Storage

logger = logging.getLogger(__name__)


class FileStorage(Storage):
    """One JSON file per key under a state directory."""

    def __init__(self, state_dir: str = None):
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.state_dir = state_dir or os.environ.get(
            'LINGODRILL_STATE_DIR',
            os.path.join(project_root, 'lingodrill_state')
        )

    def _get_key_file(self, key: str) -> str:
        """Get the file path for a key."""
        safe_key = re.sub(r'[^A-Za-z0-9_-]', '_', key)
        return os.path.join(self.state_dir, f'{safe_key}.json')

    def get(self, key: str):
        key_file = self._get_key_file(key)
        if not os.path.exists(key_file):
            return None
        try:
            with open(key_file, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceUnavailable(f"Cannot read {key} from {key_file}: {e}") from e

    def set(self, key: str, value) -> None:
        key_file = self._get_key_file(key)
        tmp_file = f'{key_file}.tmp'
        try:
            os.makedirs(self.state_dir, exist_ok=True)
            with open(tmp_file, 'w', encoding='utf-8') as f:
                json.dump(value, f, indent=2, ensure_ascii=False)
            os.replace(tmp_file, key_file)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceUnavailable(f"Cannot write {key} to {key_file}: {e}") from e
