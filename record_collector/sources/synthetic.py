"""
Synthetic data source: stands in for a remote catalogue of movie records.

Every identifier gets its own RNG derived from `(seed, id)`, so which records
come back corrupted depends only on the seed, never on which worker claimed
the identifier or in what order. Without a seed each call draws fresh entropy.
"""

from __future__ import annotations

import random
import time
from typing import Callable, Optional, Tuple

from record_collector.domain.models import CorruptedRecord, FetchOutcome, Record


class SyntheticSource:
    """
    Callable `fetch_fn` that fabricates a record for an identifier.

    Parameters
    ----------
    seed : int | None
        Base seed. None makes every call non-reproducible.
    corruption_rate : float
        Probability in [0, 1] that a fetch yields a CorruptedRecord.
    latency_ms : (int, int)
        Simulated fetch latency range in milliseconds, low inclusive.
        `(0, 0)` disables the delay.
    sleep : callable
        Delay function, `time.sleep` by default. Must be picklable when the
        source is used with the multiprocessing pool.
    """

    title_prefix = "Movie"

    def __init__(
        self,
        seed: Optional[int] = None,
        corruption_rate: float = 0.05,
        latency_ms: Tuple[int, int] = (50, 150),
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not 0.0 <= corruption_rate <= 1.0:
            raise ValueError(f"corruption_rate must be within [0, 1], got {corruption_rate}")
        low, high = latency_ms
        if low < 0 or high < low:
            raise ValueError(f"invalid latency range {latency_ms!r}")
        self.seed = seed
        self.corruption_rate = corruption_rate
        self.latency_ms = (low, high)
        self._sleep = sleep

    def _rng(self, item_id: int) -> random.Random:
        if self.seed is None:
            return random.Random()
        return random.Random(f"{self.seed}:{item_id}")

    def _latency_seconds(self, rng: random.Random) -> float:
        low, high = self.latency_ms
        if high == low:
            return low / 1000.0
        return rng.uniform(low, high) / 1000.0

    def is_corrupted(self, item_id: int) -> bool:
        """Whether `item_id` comes back corrupted, without paying the latency."""
        if self.seed is None:
            raise ValueError("corruption is only predictable for a seeded source")
        rng = self._rng(item_id)
        self._latency_seconds(rng)
        return rng.random() < self.corruption_rate

    def __call__(self, item_id: int) -> FetchOutcome:
        rng = self._rng(item_id)
        delay = self._latency_seconds(rng)
        if delay > 0:
            self._sleep(delay)

        if rng.random() < self.corruption_rate:
            return CorruptedRecord(id=item_id, reason="corrupted payload")

        return Record(
            id=item_id,
            title=f"{self.title_prefix} {item_id}",
            year=2000 + item_id % 21,
            score=5.0 + rng.random() * 5.0,
        )

    def __repr__(self) -> str:
        return (
            f"SyntheticSource(seed={self.seed!r}, corruption_rate={self.corruption_rate}, "
            f"latency_ms={self.latency_ms!r})"
        )


__all__ = ["SyntheticSource"]
