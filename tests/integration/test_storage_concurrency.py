"""
Concurrency tests: many threads sharing one store instance.

- Distinct aliases saved concurrently all succeed and are retrievable.
- Threads racing on the same alias: exactly one wins, the rest get AliasExists.
- The manager's retry loop under concurrency still yields unique aliases.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from url_shortener.exceptions import AliasExists
from url_shortener.manager.alias_generator import RandomAliasGenerator
from url_shortener.manager.url_manager import UrlManager
from url_shortener.storage.storage import Storage
from url_shortener.storage.sqlite_storage import SQLiteStorage

THREADS = 16


@pytest.fixture(params=["memory", "sqlite"])
def shared_storage(request, tmp_path):
    if request.param == "memory":
        return Storage()
    s = SQLiteStorage(str(tmp_path / "concurrent.db"), timeout=30)
    s.init_schema()
    return s


def test_concurrent_distinct_aliases_all_succeed(shared_storage):
    barrier = threading.Barrier(THREADS)

    def _save(i):
        barrier.wait()
        return shared_storage.save_url(f"https://example.com/{i}", f"alias{i:03d}")

    with ThreadPoolExecutor(max_workers=THREADS) as pool:
        ids = list(pool.map(_save, range(THREADS)))

    assert len(set(ids)) == THREADS
    for i in range(THREADS):
        assert shared_storage.get_url(f"alias{i:03d}") == f"https://example.com/{i}"


def test_concurrent_same_alias_exactly_one_wins(shared_storage):
    barrier = threading.Barrier(THREADS)

    def _save(i):
        barrier.wait()
        try:
            shared_storage.save_url(f"https://example.com/{i}", "contested")
            return i
        except AliasExists:
            return None

    with ThreadPoolExecutor(max_workers=THREADS) as pool:
        results = list(pool.map(_save, range(THREADS)))

    winners = [r for r in results if r is not None]
    assert len(winners) == 1
    assert shared_storage.get_url("contested") == f"https://example.com/{winners[0]}"


def test_manager_retries_under_contention(shared_storage):
    # A two-letter alphabet with length 4 gives only 16 aliases: collisions are certain.
    generator = RandomAliasGenerator(length=4, alphabet="ab")
    manager = UrlManager(storage=shared_storage, generator=generator, max_attempts=200)

    def _save(i):
        return manager.save_url(f"https://example.com/{i}").alias

    with ThreadPoolExecutor(max_workers=8) as pool:
        aliases = list(pool.map(_save, range(12)))

    assert len(set(aliases)) == 12
    for i, alias in enumerate(aliases):
        assert shared_storage.get_url(alias) == f"https://example.com/{i}"
