from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

from .connection import DatabaseConnection
from .sqlite_base import db_cursor, fetchone

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """String-keyed persistent storage (the local-storage counterpart)."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def set_many(self, items: Iterable[tuple[str, str]]) -> None:
        """Write several pairs; either all of them land or none do."""
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_many(self, items: Iterable[tuple[str, str]]) -> None:
        self._data.update(dict(items))

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SQLiteKeyValueStore(KeyValueStore):
    """Key-value pairs in a single ``kv`` table of a local SQLite file."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._create_table()

    def _create_table(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
        logger.debug("key-value table ready at %s", self._conn_factory.path)

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT value FROM kv WHERE key=?", (key,))
            row = fetchone(cur)
            return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                (key, value),
            )

    def set_many(self, items: Iterable[tuple[str, str]]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO kv(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                list(items),
            )

    def remove(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM kv WHERE key=?", (key,))
