"""In-memory metrics for the catalog.

The catalog receives a recorder at construction instead of reaching for a
process-wide registry, so tests can pass a fresh ``MetricsRegistry`` or a
``NullMetrics``.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import Counter
from contextlib import contextmanager
from typing import Dict, Iterator, List, Protocol

logger = logging.getLogger(__name__)

BOOKS_ADDED = "library.books.added"
BOOKS_SEARCHED = "library.books.searched"
ADD_BOOK_DURATION = "library.addbook.duration"
SEARCH_BOOK_DURATION = "library.searchbook.duration"


class MetricsRecorder(Protocol):
    def increment(self, name: str, value: int = 1) -> None: ...

    def record_duration(self, name: str, seconds: float) -> None: ...


class NullMetrics:
    """Recorder that drops everything."""

    def increment(self, name: str, value: int = 1) -> None:
        return None

    def record_duration(self, name: str, seconds: float) -> None:
        return None


class MetricsRegistry:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: Counter[str] = Counter()
        self._timers: Dict[str, List[float]] = {}

    def increment(self, name: str, value: int = 1) -> None:
        with self._lock:
            self._counters[name] += value

    def record_duration(self, name: str, seconds: float) -> None:
        with self._lock:
            self._timers.setdefault(name, []).append(seconds)

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        """Record the wall time spent inside the block, even if it raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record_duration(name, time.perf_counter() - start)

    def counter(self, name: str) -> int:
        with self._lock:
            return self._counters[name]

    def timer_count(self, name: str) -> int:
        with self._lock:
            return len(self._timers.get(name, []))

    def snapshot(self) -> Dict[str, Dict]:
        with self._lock:
            timers = {
                name: {"count": len(samples), "total": sum(samples), "max": max(samples, default=0.0)}
                for name, samples in self._timers.items()
            }
            return {"counters": dict(self._counters), "timers": timers}

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._timers.clear()


def log_metrics(registry: MetricsRegistry, prefix: str = "") -> None:
    """Write the current counters and timer summaries to the log."""
    snap = registry.snapshot()
    head = f"{prefix}." if prefix else ""
    for name, value in sorted(snap["counters"].items()):
        logger.info("%s%s count=%d", head, name, value)
    for name, stats in sorted(snap["timers"].items()):
        logger.info(
            "%s%s count=%d total=%.6fs max=%.6fs",
            head, name, stats["count"], stats["total"], stats["max"],
        )
