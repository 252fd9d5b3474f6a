"""
Storage interfaces for the URL shortener.

Purpose:
    Define small, stable capability contracts (`Saver`, `Reader`, `Deleter`)
    that every backend (in-memory, SQLite, Postgres) implements, so callers
    depend only on the method they actually use and backends can be swapped
    without touching business logic.

Error contract (see `url_shortener.exceptions`):
    - save_url   -> AliasExists when the alias is taken
    - get_url    -> NotFound when no record has the alias
    - delete_url -> NotFound when nothing was deleted
    - any method -> StorageUnavailable on I/O / connection failure

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.
"""

from abc import ABC, abstractmethod


class Saver(ABC):
    """Anything that can persist an (alias, url) pair."""

    @abstractmethod  # pragma: no cover
    def save_url(self, url: str, alias: str) -> int:
        """
        Insert a new record in a single atomic statement.

        Returns:
            int: The store-owned id of the new record (never reused).

        Raises:
            AliasExists: The alias is already stored. Nothing was written.
            StorageUnavailable: The statement could not be executed.

        LLM Prompt Example:
            "Describe how to enforce alias uniqueness with a single unique index
            instead of a racy SELECT-then-INSERT."
        """
        raise NotImplementedError


class Reader(ABC):
    """Anything that can resolve an alias to its target URL."""

    @abstractmethod  # pragma: no cover
    def get_url(self, alias: str) -> str:
        """
        Return the URL stored under `alias`, byte-for-byte as saved.

        Raises:
            NotFound: No record has this alias.
            StorageUnavailable: The query could not be executed.
        """
        raise NotImplementedError


class Deleter(ABC):
    """Anything that can remove a record by alias."""

    @abstractmethod  # pragma: no cover
    def delete_url(self, alias: str) -> None:
        """
        Permanently remove the record stored under `alias`.

        Raises:
            NotFound: Zero rows were affected.
            StorageUnavailable: The statement could not be executed.
        """
        raise NotImplementedError


class BaseStorage(Saver, Reader, Deleter):
    """Full storage backend: all three capabilities plus schema bootstrap."""

    @abstractmethod  # pragma: no cover
    def init_schema(self) -> None:
        """
        Create the backing table and alias index if they are missing.

        Idempotent and non-destructive; called on every process start.

        Raises:
            StorageUnavailable: Schema could not be created (fatal at startup).
        """
        raise NotImplementedError
