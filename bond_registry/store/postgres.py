"""PostgreSQL-backed key/value store."""

import logging
from typing import Any, Iterator

import psycopg
from psycopg import sql

from bond_registry.config import PostgresConfig
from bond_registry.store.base import KeyValueStore

logger = logging.getLogger(__name__)


class PostgresStore(KeyValueStore):
    """Ledger state kept in a two-column ``(key, value)`` table.

    ``put_if_absent`` maps to ``INSERT ... ON CONFLICT DO NOTHING``, which
    closes the check-then-create race for bond records. Each statement runs
    in autocommit mode, so there is still no multi-key atomicity.
    """

    supports_conditional_put = True
    supports_scan = True

    def __init__(self, config: PostgresConfig, conn: Any | None = None) -> None:
        """Initialize the store.

        Parameters
        ----------
        config : PostgresConfig
            Connection settings and table name.
        conn : Any | None
            Existing psycopg connection. A new autocommit connection is
            opened when omitted.
        """
        self.config = config
        self.conn = conn if conn is not None else psycopg.connect(config.connection_string, autocommit=True)
        self._table = sql.Identifier(config.table)
        self._ensure_table()

    def _ensure_table(self) -> None:
        with self.conn.cursor() as cur:
            cur.execute(
                sql.SQL(
                    "CREATE TABLE IF NOT EXISTS {} (key TEXT PRIMARY KEY, value BYTEA NOT NULL)"
                ).format(self._table)
            )
        logger.info("Ledger table ready: %s", self.config.table)

    def get(self, key: str) -> bytes | None:
        with self.conn.cursor() as cur:
            cur.execute(sql.SQL("SELECT value FROM {} WHERE key = %s").format(self._table), (key,))
            row = cur.fetchone()
        return bytes(row[0]) if row else None

    def put(self, key: str, value: bytes) -> None:
        with self.conn.cursor() as cur:
            cur.execute(
                sql.SQL(
                    "INSERT INTO {} (key, value) VALUES (%s, %s) "
                    "ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value"
                ).format(self._table),
                (key, value),
            )

    def put_if_absent(self, key: str, value: bytes) -> bool:
        with self.conn.cursor() as cur:
            cur.execute(
                sql.SQL(
                    "INSERT INTO {} (key, value) VALUES (%s, %s) ON CONFLICT (key) DO NOTHING"
                ).format(self._table),
                (key, value),
            )
            return cur.rowcount == 1

    def keys(self) -> Iterator[str]:
        with self.conn.cursor() as cur:
            cur.execute(sql.SQL("SELECT key FROM {} ORDER BY key").format(self._table))
            rows = cur.fetchall()
        return (row[0] for row in rows)

    def close(self) -> None:
        """Close the underlying connection."""
        self.conn.close()
