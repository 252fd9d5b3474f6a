"""
Storage module for the URL shortener (in-memory implementation).

Responsibilities:
    - Save (alias, url) records and hand out monotonically increasing ids
    - Resolve aliases to URLs
    - Delete records by alias
    - Enforce alias uniqueness atomically

Design:
    - This is an in-memory reference implementation that satisfies the BaseStorage contract.
    - It is intentionally simple to keep unit/integration tests fast and deterministic.
    - The check-and-insert runs under the store's own lock, which plays the role
      of the unique index in the SQL backends.
    - For production, use the SQLite or Postgres backend.

LLM Prompt Example:
    "Explain how this in-memory storage can be swapped for a database-backed layer
     (SQLite/Postgres) without changing the manager or API code, by adhering to
     narrow, explicit Saver/Reader/Deleter interfaces."
"""

import itertools
import threading
from typing import Dict, Tuple

from ..exceptions import AliasExists, NotFound
from .base import BaseStorage


class Storage(BaseStorage):
    def __init__(self):
        """
        Initialize empty storage.

        Internal schema:
            self.urls = {
                alias: (id, url),
            }
        """
        self.urls: Dict[str, Tuple[int, str]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def init_schema(self) -> None:
        """Nothing to create for a dict."""
        return None

    def save_url(self, url: str, alias: str) -> int:
        """
        Insert a record unless the alias is already taken.

        Ids come from a counter that is never rewound, so deleting a record
        does not free its id.
        """
        with self._lock:
            if alias in self.urls:
                raise AliasExists(alias, operation="storage.memory.save_url")
            record_id = next(self._ids)
            self.urls[alias] = (record_id, url)
        return record_id

    def get_url(self, alias: str) -> str:
        with self._lock:
            record = self.urls.get(alias)
        if record is None:
            raise NotFound(alias, operation="storage.memory.get_url")
        return record[1]

    def delete_url(self, alias: str) -> None:
        with self._lock:
            removed = self.urls.pop(alias, None)
        if removed is None:
            raise NotFound(alias, operation="storage.memory.delete_url")
