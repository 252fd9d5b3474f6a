"""
Global pytest fixtures for the URL shortener test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide isolated Storage backends (in-memory, SQLite in tmp_path) for direct testing
    - Provide a UrlManager fixture wired to the Storage fixture
    - Provide a scripted alias generator to force specific aliases and collisions

Why an app factory?
    Using `create_app()` ensures each test gets fresh state, eliminating
    cross-test flakiness.
"""

from typing import Iterable, List, Optional

import pytest
from fastapi.testclient import TestClient

from main import create_app
from url_shortener.config import Settings
from url_shortener.manager.alias_generator import BaseAliasGenerator
from url_shortener.manager.url_manager import UrlManager
from url_shortener.storage.storage import Storage
from url_shortener.storage.sqlite_storage import SQLiteStorage


class ScriptedGenerator(BaseAliasGenerator):
    """Returns the given aliases in order; records how often it was asked."""

    def __init__(self, aliases: Iterable[str]):
        self._aliases: List[str] = list(aliases)
        self.calls = 0

    def generate(self, length: Optional[int] = None) -> str:
        alias = self._aliases[self.calls]
        self.calls += 1
        return alias


@pytest.fixture
def scripted_generator():
    """Factory fixture: `scripted_generator("ab12cd", "zz99yy")`."""
    return ScriptedGenerator


@pytest.fixture
def settings() -> Settings:
    """In-memory backend, prod-style logging, auth disabled."""
    return Settings(env="prod", storage_backend="memory")


@pytest.fixture
def storage() -> Storage:
    """Fresh in-memory Storage backend."""
    return Storage()


@pytest.fixture
def sqlite_storage(tmp_path) -> SQLiteStorage:
    """SQLite backend in a per-test directory, schema created."""
    s = SQLiteStorage(str(tmp_path / "storage" / "storage.db"))
    s.init_schema()
    return s


@pytest.fixture
def manager(storage: Storage) -> UrlManager:
    """UrlManager wired to the in-memory storage fixture."""
    return UrlManager(storage=storage)


@pytest.fixture
def client(settings: Settings, storage: Storage) -> TestClient:
    """
    Fresh TestClient with a new app instance.

    The storage fixture is injected so tests can inspect what the API wrote.
    """
    app = create_app(settings, storage=storage)
    return TestClient(app)
