"""
NFR: save throughput and latency

How to run (opt-in):
    RUN_NFR=1 pytest tests/nfr/test_perf_save.py -vv
Optional thresholds:
    NFR_TARGET_SAVE_QPS=1000     # assert save QPS >= 1000 (example)
    NFR_TARGET_SAVE_P95_MS=5     # assert p95 latency per save <= 5 ms

Notes:
    - Runs against the in-memory store and, separately, SQLite in tmp_path.
    - Does not assert unless env vars are set (skips otherwise).
"""

import os
import statistics
import time

import pytest

from url_shortener.manager.url_manager import UrlManager
from url_shortener.storage.storage import Storage
from url_shortener.storage.sqlite_storage import SQLiteStorage

pytestmark = pytest.mark.nfr


def _should_run():
    return os.getenv("RUN_NFR") == "1"


@pytest.mark.skipif(not _should_run(), reason="NFR tests are opt-in; set RUN_NFR=1 to enable")
@pytest.mark.parametrize("backend", ["memory", "sqlite"])
def test_save_throughput_and_latency(backend, tmp_path, capsys):
    if backend == "memory":
        storage = Storage()
    else:
        storage = SQLiteStorage(str(tmp_path / "perf.db"))
        storage.init_schema()
    manager = UrlManager(storage=storage)

    n = 2000 if backend == "memory" else 500
    latencies_ms = []

    t0 = time.perf_counter()
    for i in range(n):
        s = time.perf_counter()
        saved = manager.save_url(f"https://example.com/resource/{i}")
        latencies_ms.append((time.perf_counter() - s) * 1000.0)
        assert saved.alias
    total_s = time.perf_counter() - t0

    qps = n / total_s
    p95 = statistics.quantiles(latencies_ms, n=100)[94]

    qps_target = os.getenv("NFR_TARGET_SAVE_QPS")
    p95_target_ms = os.getenv("NFR_TARGET_SAVE_P95_MS")
    if qps_target:
        assert qps >= float(qps_target), f"Save QPS {qps:.1f} < target {qps_target}"
    if p95_target_ms:
        assert p95 <= float(p95_target_ms), f"Save p95 {p95:.2f}ms > target {p95_target_ms}ms"

    with capsys.disabled():
        print(f"\n[{backend}] Save N={n} -> total {total_s:.3f}s, QPS={qps:.1f}, p95={p95:.2f}ms", flush=True)
