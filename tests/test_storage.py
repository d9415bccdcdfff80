"""Tests for the storage backends and dictionary seeding."""

import json
import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

import psycopg2

from core.config import DICTIONARY_KEY, LEDGER_KEY
from core.errors import PersistenceUnavailable
from core.vocabulary import load_entries
from scripts.seed_dictionary import build_entries, seed
from server.file_storage import FileStorage
from server.postgres_storage import PostgresStorage

from tests.mocks import MockStorage, make_entry


class TestFileStorage(unittest.TestCase):
    """Tests for FileStorage."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.storage = FileStorage(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_key(self):
        self.assertIsNone(self.storage.get(LEDGER_KEY))

    def test_set_and_get(self):
        self.storage.set(LEDGER_KEY, {'water': 2})
        self.assertEqual(self.storage.get(LEDGER_KEY), {'water': 2})

    def test_unicode_preserved(self):
        self.storage.set(DICTIONARY_KEY, [{'English': 'water', 'Telugu': 'నీళ్ళు'}])
        self.assertEqual(self.storage.get(DICTIONARY_KEY)[0]['Telugu'], 'నీళ్ళు')

    def test_overwrite(self):
        self.storage.set('high-score', 10)
        self.storage.set('high-score', 20)
        self.assertEqual(self.storage.get('high-score'), 20)

    def test_creates_state_dir(self):
        nested = os.path.join(self.tmp.name, 'a', 'b')
        storage = FileStorage(nested)
        storage.set('settings', {'learningLanguage': 'Telugu'})
        self.assertTrue(os.path.isdir(nested))

    def test_unsafe_key_sanitized(self):
        self.storage.set('../escape', 1)
        self.assertEqual(os.listdir(self.tmp.name), ['___escape.json'])
        self.assertEqual(self.storage.get('../escape'), 1)

    def test_corrupt_file(self):
        with open(os.path.join(self.tmp.name, 'settings.json'), 'w') as f:
            f.write('{not json')
        with self.assertRaises(PersistenceUnavailable):
            self.storage.get('settings')

    def test_unserializable_value(self):
        with self.assertRaises(PersistenceUnavailable):
            self.storage.set('settings', {'bad': object()})

    def test_env_state_dir(self):
        with patch.dict(os.environ, {'LINGODRILL_STATE_DIR': self.tmp.name}):
            self.assertEqual(FileStorage().state_dir, self.tmp.name)


class TestPostgresStorage(unittest.TestCase):
    """Tests for PostgresStorage against a mocked connection."""

    def setUp(self):
        patcher = patch('server.postgres_storage.psycopg2.connect')
        self.connect = patcher.start()
        self.addCleanup(patcher.stop)

        self.conn = MagicMock()
        self.conn.closed = False
        self.cur = MagicMock()
        self.conn.cursor.return_value.__enter__.return_value = self.cur
        self.connect.return_value = self.conn
        self.storage = PostgresStorage('postgresql://test/db', namespace='test')

    def test_lazy_connection(self):
        self.connect.assert_not_called()
        self.storage.get('settings')
        self.connect.assert_called_once_with('postgresql://test/db')
        self.storage.get('settings')
        self.connect.assert_called_once()

    def test_get(self):
        self.cur.fetchone.return_value = {'value': {'water': 3}}
        self.assertEqual(self.storage.get(LEDGER_KEY), {'water': 3})
        self.assertEqual(self.cur.execute.call_args[0][1], ('test', LEDGER_KEY))

    def test_get_missing(self):
        self.cur.fetchone.return_value = None
        self.assertIsNone(self.storage.get(LEDGER_KEY))

    def test_set(self):
        self.storage.set(LEDGER_KEY, {'water': 3})
        params = self.cur.execute.call_args[0][1]
        self.assertEqual(params[:2], ('test', LEDGER_KEY))
        self.assertEqual(json.loads(params[2]), {'water': 3})
        self.conn.commit.assert_called()

    def test_set_failure_rolls_back(self):
        self.storage.get('settings')
        self.cur.execute.side_effect = psycopg2.OperationalError('server closed')
        with self.assertRaises(PersistenceUnavailable):
            self.storage.set(LEDGER_KEY, {'water': 3})
        self.conn.rollback.assert_called_once()

    def test_connect_failure(self):
        self.connect.side_effect = psycopg2.OperationalError('refused')
        with self.assertRaises(PersistenceUnavailable):
            self.storage.get(LEDGER_KEY)


class TestSeedDictionary(unittest.TestCase):
    """Tests for the starter dictionary."""

    def test_entries_complete(self):
        entries = build_entries()
        self.assertGreaterEqual(len([e for e in entries if e.is_word]), 5)
        self.assertGreaterEqual(len([e for e in entries if e.is_phrase]), 4)
        for entry in entries:
            self.assertTrue(entry.translations.get('Konkani'), entry.english)
            self.assertTrue(entry.translations.get('Telugu'), entry.english)

    def test_seed_merges(self):
        storage = MockStorage({DICTIONARY_KEY: [make_entry('water').to_dict()]})
        added = seed(storage)
        self.assertEqual(added, len(build_entries()) - 1)

        entries = load_entries(storage)
        water = next(e for e in entries if e.english == 'water')
        self.assertEqual(water.translations['Konkani'], 'kok-water')
        self.assertEqual(seed(storage), 0)


if __name__ == '__main__':
    unittest.main()
