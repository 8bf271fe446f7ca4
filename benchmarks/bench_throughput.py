"""Benchmark: commit parsing and object store round-trip throughput.

Measures how many commit payloads can be parsed per second, and how many
blobs can be written to and read back from a loose-object store, using
the public gitodb APIs.
"""
from __future__ import annotations

import json
import sys
import tempfile
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gitodb.objects import Blob, Commit
from gitodb.store import ObjectStore, Repository

_ITERATIONS: int = 5_000
_STORE_ITERATIONS: int = 500

_SAMPLE_COMMIT = (
    b"tree 4b825dc642cb6eb9a060e54bf8d69288fbee4904\n"
    b"parent 3b18e512dba79e4c8300dd08aeb37f8e728b8dad\n"
    b"parent 8ab686eafeb1f44702738c8b0f24f2567c36da6d\n"
    b"author Bench Mark <bench@example.com> 1700000000 +0000\n"
    b"committer Bench Mark <bench@example.com> 1700000000 +0000\n"
    b"\n"
    b"Merge branch 'feature'\n"
)


def _report(result: dict[str, object]) -> dict[str, object]:
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_commit_parse_throughput() -> dict[str, object]:
    """Benchmark commit payload parsing throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        Commit(_SAMPLE_COMMIT)
    total = time.perf_counter() - start

    return _report({
        "operation": "commit_parse_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
    })


def bench_store_roundtrip_throughput() -> dict[str, object]:
    """Benchmark writing distinct blobs and reading each one back.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    with tempfile.TemporaryDirectory() as tmp:
        store = ObjectStore(Repository.create(Path(tmp) / "repo"))
        blobs = [Blob(f"blob number {i}\n".encode()) for i in range(_STORE_ITERATIONS)]

        start = time.perf_counter()
        for blob in blobs:
            store.read(store.write(blob))
        total = time.perf_counter() - start

    return _report({
        "operation": "store_roundtrip_throughput",
        "iterations": _STORE_ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_STORE_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _STORE_ITERATIONS * 1000, 4),
    })


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_commit_parse_throughput, "commit_parse_throughput_baseline.json"),
        (bench_store_roundtrip_throughput, "store_roundtrip_throughput_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
