"""Structural tests for the gitodb benchmark module."""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent / "benchmarks"))


def test_bench_throughput_importable() -> None:
    """Verify bench_throughput module can be imported."""
    mod = importlib.import_module("bench_throughput")
    assert hasattr(mod, "bench_commit_parse_throughput")
    assert hasattr(mod, "bench_store_roundtrip_throughput")


def test_commit_parse_throughput_returns_expected_keys() -> None:
    """Verify bench_commit_parse_throughput returns expected result keys."""
    from bench_throughput import bench_commit_parse_throughput

    result = bench_commit_parse_throughput()
    assert "operation" in result
    assert "iterations" in result
    assert "ops_per_second" in result
    assert "avg_latency_ms" in result
    assert float(result["ops_per_second"]) > 0  # type: ignore[arg-type]


def test_store_roundtrip_throughput_returns_expected_keys() -> None:
    """Verify bench_store_roundtrip_throughput returns expected result keys."""
    from bench_throughput import bench_store_roundtrip_throughput

    result = bench_store_roundtrip_throughput()
    assert result["iterations"] == 500
    assert "ops_per_second" in result
    assert "avg_latency_ms" in result
