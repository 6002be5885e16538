"""Key-value table storage for the ledger components.

Every component owns exactly one table (cases, pools, investments, balances)
and reads/writes plain JSON-compatible dicts through a :class:`KeyValueStore`.
Writes made inside :meth:`KeyValueStore.transaction` become visible to other
transactions only if the block exits without an exception.
"""
from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, ContextManager, Dict, Hashable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

TABLES = ("cases", "pools", "investments", "balances")

Record = Dict[str, Any]


class UnknownTableError(KeyError):
    """Raised when a component addresses a table outside the ledger layout."""


def _check_table(table: str) -> None:
    if table not in TABLES:
        raise UnknownTableError(table)


class KeyValueStore:
    """Interface shared by the in-memory and SQLite backends."""

    def get(self, table: str, key: Hashable) -> Optional[Record]:
        raise NotImplementedError

    def put(self, table: str, key: Hashable, value: Record) -> None:
        raise NotImplementedError

    def items(self, table: str) -> List[Tuple[Hashable, Record]]:
        """All rows of a table in first-insertion order."""
        raise NotImplementedError

    def count(self, table: str) -> int:
        raise NotImplementedError

    def transaction(self) -> ContextManager["KeyValueStore"]:
        """Group writes so they commit together or not at all."""
        raise NotImplementedError

    def close(self) -> None:
        pass


class InMemoryStore(KeyValueStore):
    def __init__(self) -> None:
        self._tables: Dict[str, Dict[Hashable, Record]] = {t: {} for t in TABLES}
        self._pending: Optional[Dict[str, Dict[Hashable, Record]]] = None

    def get(self, table: str, key: Hashable) -> Optional[Record]:
        _check_table(table)
        if self._pending is not None and key in self._pending[table]:
            return dict(self._pending[table][key])
        row = self._tables[table].get(key)
        return dict(row) if row is not None else None

    def put(self, table: str, key: Hashable, value: Record) -> None:
        _check_table(table)
        target = self._pending if self._pending is not None else self._tables
        target[table][key] = dict(value)

    def items(self, table: str) -> List[Tuple[Hashable, Record]]:
        _check_table(table)
        merged = dict(self._tables[table])
        if self._pending is not None:
            merged.update(self._pending[table])
        return [(k, dict(v)) for k, v in merged.items()]

    def count(self, table: str) -> int:
        _check_table(table)
        n = len(self._tables[table])
        if self._pending is not None:
            n += sum(1 for k in self._pending[table] if k not in self._tables[table])
        return n

    @contextmanager
    def transaction(self) -> Iterator["InMemoryStore"]:
        if self._pending is not None:
            # Nested blocks join the outer transaction
            yield self
            return
        self._pending = {t: {} for t in TABLES}
        try:
            yield self
        except BaseException:
            self._pending = None
            raise
        staged, self._pending = self._pending, None
        for table, rows in staged.items():
            self._tables[table].update(rows)


class SqliteStore(KeyValueStore):
    """SQLite backend: one ``(key, value)`` table per ledger table.

    Keys are stored JSON-encoded so that ``1`` and ``"1"`` stay distinct case ids.
    """

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        if str(self.db_path) != ":memory:":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        # Autocommit mode; transaction() issues BEGIN/COMMIT itself.
        # Callers serialize access, so the connection may cross threads.
        self._conn = sqlite3.connect(str(self.db_path), isolation_level=None, check_same_thread=False)
        self._in_tx = False
        self.init_db()

    def init_db(self) -> None:
        cur = self._conn.cursor()
        for table in TABLES:
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def get(self, table: str, key: Hashable) -> Optional[Record]:
        _check_table(table)
        cur = self._conn.cursor()
        cur.execute(f"SELECT value FROM {table} WHERE key=?", (json.dumps(key),))
        row = cur.fetchone()
        if not row:
            return None
        return json.loads(row[0])

    def put(self, table: str, key: Hashable, value: Record) -> None:
        _check_table(table)
        # ON CONFLICT keeps the original rowid, so items() stays in insertion order
        self._conn.execute(
            f"INSERT INTO {table} (key, value) VALUES (?,?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (json.dumps(key), json.dumps(value)),
        )

    def items(self, table: str) -> List[Tuple[Hashable, Record]]:
        _check_table(table)
        cur = self._conn.cursor()
        cur.execute(f"SELECT key, value FROM {table} ORDER BY rowid")
        return [(json.loads(k), json.loads(v)) for k, v in cur.fetchall()]

    def count(self, table: str) -> int:
        _check_table(table)
        cur = self._conn.cursor()
        cur.execute(f"SELECT COUNT(*) FROM {table}")
        return int(cur.fetchone()[0])

    @contextmanager
    def transaction(self) -> Iterator["SqliteStore"]:
        if self._in_tx:
            yield self
            return
        self._conn.execute("BEGIN IMMEDIATE")
        self._in_tx = True
        try:
            yield self
        except BaseException:
            self._conn.execute("ROLLBACK")
            raise
        else:
            self._conn.execute("COMMIT")
        finally:
            self._in_tx = False

    def close(self) -> None:
        self._conn.close()
        logger.info("Closed ledger database", extra={"extra": {"db_path": str(self.db_path)}})
