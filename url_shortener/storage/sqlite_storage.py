"""
SQLiteStorage – file-backed storage for the URL shortener
========================================================

Single-file persistence using the standard `sqlite3` driver. Implements the same
`BaseStorage` contract as the in-memory Storage, so it can be selected from
configuration without touching business logic.

Key Design Points
-----------------
- **Uniqueness**: `alias TEXT NOT NULL UNIQUE`. `save_url` is one INSERT; a
  `UNIQUE constraint failed` error becomes `AliasExists`. No SELECT pre-check.
- **Ids**: `INTEGER PRIMARY KEY AUTOINCREMENT` so ids of deleted rows are never
  handed out again.
- **Connections**: a short-lived connection per call, with a busy timeout so
  concurrent writers wait for the file lock instead of failing immediately.
- **Errors**: every other `sqlite3.Error` becomes `StorageUnavailable` with
  the operation name prefixed and the driver error chained.

Example
-------
>>> storage = SQLiteStorage("./storage/storage.db")
>>> storage.init_schema()
>>> storage.save_url("https://example.com", "ab12cd")
1
>>> storage.get_url("ab12cd")
'https://example.com'
"""

import contextlib
import os
import sqlite3

from ..exceptions import AliasExists, NotFound, StorageUnavailable
from .base import BaseStorage

SCHEMA = """
CREATE TABLE IF NOT EXISTS url(
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    alias TEXT NOT NULL UNIQUE,
    url TEXT NOT NULL);
CREATE INDEX IF NOT EXISTS idx_alias ON url(alias);
"""


def _is_unique_violation(exc: sqlite3.IntegrityError) -> bool:
    name = getattr(exc, "sqlite_errorname", "")
    if name:
        return name == "SQLITE_CONSTRAINT_UNIQUE"
    return "UNIQUE constraint failed" in str(exc)


class SQLiteStorage(BaseStorage):
    """SQLite implementation of the URL storage contract.

    Parameters
    ----------
    path : str
        Database file path. Parent directories are created by `init_schema`.
    timeout : float
        Seconds to wait on a locked database before giving up.
    """

    def __init__(self, path: str, timeout: float = 5.0) -> None:
        if not path or path == ":memory:":
            # Each call opens its own connection; an in-memory db would vanish between calls.
            raise ValueError("SQLite storage needs a file path (use the memory backend instead)")
        self.path = path
        self.timeout = timeout

    # ---- Internal helpers -------------------------------------------------

    @contextlib.contextmanager
    def _conn(self):
        """Context manager creating a sqlite3 connection."""
        con = sqlite3.connect(self.path, timeout=self.timeout)
        try:
            yield con
        finally:
            con.close()

    # ---- Contract methods -------------------------------------------------

    def init_schema(self) -> None:
        op = "storage.sqlite.init_schema"
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with self._conn() as con:
                con.executescript(SCHEMA)
        except (sqlite3.Error, OSError) as exc:
            raise StorageUnavailable(f"{op}: {exc}") from exc

    def save_url(self, url: str, alias: str) -> int:
        """Insert (alias, url) and return the new row id."""
        op = "storage.sqlite.save_url"
        try:
            with self._conn() as con:
                with con:
                    cur = con.execute("INSERT INTO url(url, alias) VALUES(?, ?)", (url, alias))
                return int(cur.lastrowid)
        except sqlite3.IntegrityError as exc:
            if _is_unique_violation(exc):
                raise AliasExists(alias, operation=op) from exc
            raise StorageUnavailable(f"{op}: {exc}") from exc
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"{op}: {exc}") from exc

    def get_url(self, alias: str) -> str:
        op = "storage.sqlite.get_url"
        try:
            with self._conn() as con:
                row = con.execute("SELECT url FROM url WHERE alias = ?", (alias,)).fetchone()
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"{op}: {exc}") from exc
        if row is None:
            raise NotFound(alias, operation=op)
        return row[0]

    def delete_url(self, alias: str) -> None:
        op = "storage.sqlite.delete_url"
        try:
            with self._conn() as con:
                with con:
                    cur = con.execute("DELETE FROM url WHERE alias = ?", (alias,))
                deleted = cur.rowcount
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"{op}: {exc}") from exc
        if deleted == 0:
            raise NotFound(alias, operation=op)
