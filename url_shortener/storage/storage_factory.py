"""
Storage factory – switch storage backend from config
====================================================

This module centralizes selection of the storage backend (memory, SQLite, Postgres)
so the rest of the app can stay ignorant of where data lives.

- Settings are passed in (or read from the environment **at call time**).
- The Postgres backend is imported **only if** it is selected, so psycopg is
  not loaded for memory/SQLite deployments.

Backends
--------
- "memory":   in-process dict, lost on restart
- "sqlite":   file at `Settings.storage_path`
- "postgres": DSN from `Settings.db_dsn`

LLM Prompt
----------
You are extending storage backends. Keep defaults safe ("memory"). Don't import heavy
DB modules unless needed.
"""

from typing import Optional

from url_shortener.config import Settings, get_settings
from url_shortener.storage.base import BaseStorage
from url_shortener.storage.storage import Storage
from url_shortener.storage.sqlite_storage import SQLiteStorage


def get_storage(settings: Optional[Settings] = None) -> BaseStorage:
    """
    Return a BaseStorage instance based on configuration.

    The schema is not created here; call `init_schema()` on the result.

    Raises
    ------
    ValueError
        Unknown backend, or a backend missing its required setting.
    """
    settings = settings or get_settings()
    be = settings.storage_backend

    if be == "memory":
        return Storage()

    if be == "sqlite":
        return SQLiteStorage(settings.storage_path, timeout=settings.db_timeout)

    if be == "postgres":
        if not settings.db_dsn:
            raise ValueError("DB_DSN is required for postgres backend (env URLSHORT_DB_DSN)")
        from url_shortener.storage.db_storage import DBStorage  # local import, optional driver
        return DBStorage(dsn=settings.db_dsn)

    raise ValueError(f"Unknown storage backend: {be!r}")
