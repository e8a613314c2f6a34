"""
Pytest configuration for the Record Collector.

Provides fixtures for:
- Settings isolation (env overrides, cache reset)
- Deterministic, latency-free synthetic sources
- Simple fetch functions with fixed outcomes
"""

from __future__ import annotations

import threading
from collections import Counter
from typing import Generator

import pytest

from record_collector.config import get_settings
from record_collector.domain.models import Record
from record_collector.sources.synthetic import SyntheticSource

TEST_SEED = 42


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Clear cached settings around every test and ignore any local .env/env vars.
    """
    for name in (
        "COLLECTOR_ITEMS",
        "COLLECTOR_WORKERS",
        "COLLECTOR_POOL",
        "COLLECTOR_SEED",
        "COLLECTOR_CORRUPTION_RATE",
        "COLLECTOR_LATENCY_MIN_MS",
        "COLLECTOR_LATENCY_MAX_MS",
        "COLLECTOR_SAMPLE_SIZE",
        "LOG_LEVEL",
        "LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def instant_source() -> SyntheticSource:
    """Seeded source with the default corruption rate and no simulated latency."""
    return SyntheticSource(seed=TEST_SEED, corruption_rate=0.05, latency_ms=(0, 0))


class RecordingFetch:
    """
    Fetch function that always returns a valid record and records every id seen.
    """

    def __init__(self, title: str = "Movie") -> None:
        self._lock = threading.Lock()
        self.seen: Counter[int] = Counter()
        self.title = title

    def __call__(self, item_id: int) -> Record:
        with self._lock:
            self.seen[item_id] += 1
        return Record(id=item_id, title=f"{self.title} {item_id}".strip(), year=2010, score=7.5)


@pytest.fixture
def recording_fetch() -> RecordingFetch:
    return RecordingFetch()
