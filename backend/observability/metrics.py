"""Lightweight in-process metrics for ComplianceLens.

Covers HTTP requests and scoring passes; no Prometheus client required.
"""

from __future__ import annotations

from collections import defaultdict, deque
from threading import Lock


def _percentiles(samples: list[float]) -> dict:
    ordered = sorted(samples)

    def percentile(p: float) -> float:
        if not ordered:
            return 0.0
        idx = int((len(ordered) - 1) * p)
        return round(ordered[idx], 2)

    return {
        "samples": len(ordered),
        "p50": percentile(0.50),
        "p95": percentile(0.95),
        "p99": percentile(0.99),
    }


class InMemoryMetrics:
    def __init__(self, latency_window: int = 2000) -> None:
        self._lock = Lock()
        self._requests_total = 0
        self._status_counts: dict[str, int] = defaultdict(int)
        self._path_counts: dict[str, int] = defaultdict(int)
        self._latencies_ms = deque(maxlen=latency_window)
        self._scoring_passes = 0
        self._records_scored = 0
        self._scoring_ms = deque(maxlen=latency_window)

    def observe_request(self, path: str, status_code: int, duration_ms: float) -> None:
        bucket = f"{status_code // 100}xx"
        with self._lock:
            self._requests_total += 1
            self._status_counts[bucket] += 1
            self._path_counts[path] += 1
            self._latencies_ms.append(float(duration_ms))

    def observe_scoring_pass(self, records: int, duration_ms: float) -> None:
        with self._lock:
            self._scoring_passes += 1
            self._records_scored += records
            self._scoring_ms.append(float(duration_ms))

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "requests_total": self._requests_total,
                "status_counts": dict(self._status_counts),
                "path_counts": dict(self._path_counts),
                "latency_ms": _percentiles(list(self._latencies_ms)),
                "scoring": {
                    "passes_total": self._scoring_passes,
                    "records_scored": self._records_scored,
                    "duration_ms": _percentiles(list(self._scoring_ms)),
                },
            }


metrics = InMemoryMetrics()
