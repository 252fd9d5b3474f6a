"""
Contract tests run against every available storage backend.

These tests parameterize over backends:
- Always "memory" and "sqlite" (file in tmp_path)
- "postgres" only if URLSHORT_DB_DSN is set; the table is emptied first

Notes:
- Reuse one contract across backends so they stay interchangeable.
"""

import os

import pytest

from url_shortener.config import Settings
from url_shortener.exceptions import AliasExists, NotFound
from url_shortener.storage.storage_factory import get_storage


def available_backends():
    backends = ["memory", "sqlite"]
    if os.getenv("URLSHORT_DB_DSN"):
        backends.append("postgres")
    return backends


@pytest.fixture(params=available_backends())
def backend(request, tmp_path):
    settings = Settings(
        storage_backend=request.param,
        storage_path=str(tmp_path / "contract.db"),
        db_dsn=os.getenv("URLSHORT_DB_DSN", ""),
    )
    storage = get_storage(settings)
    storage.init_schema()
    if request.param == "postgres":
        import psycopg
        with psycopg.connect(settings.db_dsn, autocommit=True) as con:
            con.execute("TRUNCATE url RESTART IDENTITY")
    return storage


def test_round_trip_identity(backend):
    url = "https://example.com/Some/Path?x=1&y=%2F#frag"
    record_id = backend.save_url(url, "rt0001")
    assert isinstance(record_id, int)
    assert backend.get_url("rt0001") == url


def test_second_save_same_alias_fails(backend):
    backend.save_url("https://example.com/first", "same01")
    with pytest.raises(AliasExists):
        backend.save_url("https://example.com/second", "same01")
    assert backend.get_url("same01") == "https://example.com/first"


def test_delete_semantics(backend):
    with pytest.raises(NotFound):
        backend.delete_url("never1")
    backend.save_url("https://example.com", "del001")
    backend.delete_url("del001")
    with pytest.raises(NotFound):
        backend.get_url("del001")


def test_ids_increase(backend):
    a = backend.save_url("https://example.com/1", "id0001")
    b = backend.save_url("https://example.com/2", "id0002")
    assert b > a


def test_init_schema_twice_keeps_data(backend):
    backend.save_url("https://example.com", "keep01")
    backend.init_schema()
    assert backend.get_url("keep01") == "https://example.com"
