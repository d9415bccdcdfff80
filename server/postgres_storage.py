"""PostgreSQL storage implementation."""

import json
import logging
import os
import psycopg2
from psycopg2.extras import RealDictCursor

from core.errors import PersistenceUnavailable
from core.interfaces import Storage

logger = logging.getLogger(__name__)


class PostgresStorage(Storage):
    """PostgreSQL-based key-value storage."""

    def __init__(self, db_url: str = None, namespace: str = 'default'):
        self.db_url = db_url or os.environ.get(
            'DATABASE_URL',
            'postgresql://localhost:5432/lingodrill'
        )
        self.namespace = namespace
        self._conn = None
        self._initialized = False

    @property
    def conn(self):
        """Lazy connection initialization."""
        if self._conn is None or self._conn.closed:
            self._conn = psycopg2.connect(self.db_url)
            if not self._initialized:
                self._init_db()
                self._initialized = True
        return self._conn

    def _init_db(self):
        """Create tables if they don't exist."""
        with self._conn.cursor() as cur:
            cur.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    namespace VARCHAR(255) NOT NULL,
                    key VARCHAR(255) NOT NULL,
                    value JSONB NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    PRIMARY KEY (namespace, key)
                )
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_kv_store_updated
                ON kv_store(updated_at)
            """)
        self._conn.commit()

    def close(self):
        """Close the database connection."""
        if self._conn and not self._conn.closed:
            self._conn.close()

    def get(self, key: str):
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(
                    "SELECT value FROM kv_store WHERE namespace = %s AND key = %s",
                    (self.namespace, key)
                )
                row = cur.fetchone()
                if row:
                    return row['value']
                return None
        except psycopg2.Error as e:
            logger.error(f"Error loading {key}: {e}")
            raise PersistenceUnavailable(f"Cannot read {key}: {e}") from e

    def set(self, key: str, value) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO kv_store (namespace, key, value, updated_at)
                    VALUES (%s, %s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (namespace, key)
                    DO UPDATE SET value = EXCLUDED.value, updated_at = CURRENT_TIMESTAMP
                """, (self.namespace, key, json.dumps(value)))
            self.conn.commit()
        except psycopg2.Error as e:
            logger.error(f"Error saving {key}: {e}")
            if self._conn is not None and not self._conn.closed:
                self._conn.rollback()
            raise PersistenceUnavailable(f"Cannot write {key}: {e}") from e
