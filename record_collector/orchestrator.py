"""
Orchestrator for running collection pools, profiling execution, and summarizing results.

Usage (example from CLI):
    from record_collector.orchestrator import RunConfig, run_collection

    summaries = run_collection(RunConfig(pool="threaded", items=50, workers=5, seed=7))
    print(summaries[0]["success_count"])

Nothing is persisted; callers render the returned summaries.
"""

from __future__ import annotations

import statistics
from dataclasses import dataclass
from typing import Callable, Dict, List, Literal, Optional, Tuple

from record_collector.config import get_settings
from record_collector.domain.models import CollectionResult
from record_collector.pools.abstract import CollectorPool
from record_collector.pools.multiprocessing import ProcessCollector
from record_collector.pools.threaded import ThreadedCollector
from record_collector.sources.synthetic import SyntheticSource
from record_collector.utils.logging import get_logger
from record_collector.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)

FailurePolicy = Literal["tolerant", "strict"]


@dataclass(frozen=True)
class RunConfig:
    """
    Parameters for one `run_collection` call.

    Unset fields fall back to `Settings`.
    """

    pool: Optional[str] = None
    items: Optional[int] = None
    workers: Optional[int] = None
    seed: Optional[int] = None
    corruption_rate: Optional[float] = None
    latency_ms: Optional[Tuple[int, int]] = None
    runs: int = 1
    failure_policy: FailurePolicy = "tolerant"

    def resolved(self) -> "RunConfig":
        """Return a copy with every optional field filled from settings."""
        settings = get_settings()
        if self.runs < 1:
            raise ValueError(f"runs must be >= 1, got {self.runs}")
        if self.failure_policy not in ("tolerant", "strict"):
            raise ValueError(f"Unknown failure policy '{self.failure_policy}'")
        return RunConfig(
            pool=self.pool or settings.collector_pool,
            items=settings.collector_items if self.items is None else self.items,
            workers=settings.collector_workers if self.workers is None else self.workers,
            seed=settings.collector_seed if self.seed is None else self.seed,
            corruption_rate=(
                settings.collector_corruption_rate
                if self.corruption_rate is None
                else self.corruption_rate
            ),
            latency_ms=self.latency_ms
            or (settings.collector_latency_min_ms, settings.collector_latency_max_ms),
            runs=self.runs,
            failure_policy=self.failure_policy,
        )


def _round_float(value: float, decimals: int = 2) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _describe(values: List[float], decimals: int = 2) -> Dict[str, float]:
    return {
        "median": _round_float(statistics.median(values), decimals),
        "mean": _round_float(statistics.mean(values), decimals),
        "stddev": _round_float(statistics.stdev(values), decimals) if len(values) > 1 else 0.0,
        "min": _round_float(min(values), decimals),
        "max": _round_float(max(values), decimals),
    }


def _aggregate_runs(run_summaries: List[dict]) -> dict:
    """
    Aggregate multiple runs into a statistical summary.

    Failed runs are excluded from the statistics but counted.
    """
    completed = [r for r in run_summaries if not r.get("error")]
    aggregated: dict = {
        "pool": run_summaries[0]["pool"],
        "items": run_summaries[0]["items"],
        "workers": run_summaries[0]["workers"],
        "runs": len(run_summaries),
        "failed_runs": len(run_summaries) - len(completed),
        "individual_runs": run_summaries,
    }
    if completed:
        aggregated["duration_seconds"] = _describe([r["duration_seconds"] for r in completed])
        aggregated["error_rate"] = _describe([r["error_rate"] for r in completed])
        aggregated["throughput_items_per_sec"] = _describe(
            [r["throughput_items_per_sec"] for r in completed]
        )
        cpu = [r["cpu_percent"] for r in completed if r.get("cpu_percent") is not None]
        if cpu:
            aggregated["cpu_percent"] = _describe(cpu, decimals=1)
    return aggregated


def _pool_factories() -> Dict[str, Callable[[], CollectorPool]]:
    """Registry of available pools."""
    return {
        "threaded": lambda: ThreadedCollector(),
        "multiprocessing": lambda: ProcessCollector(),
    }


def available_pools() -> List[str]:
    """List available pool names."""
    return sorted(_pool_factories().keys())


def get_pool(name: str) -> CollectorPool:
    factories = _pool_factories()
    if name not in factories:
        raise ValueError(f"Unknown pool '{name}'. Available: {', '.join(sorted(factories))}")
    return factories[name]()


def _summarize(result: CollectionResult, stats: ProfileStats) -> dict:
    """Merge a collection result with profiler stats, rounding floats for readability."""
    return {
        "pool": result.strategy,
        "items": result.item_count,
        "workers": result.worker_count,
        "success_count": result.success_count,
        "error_count": result.error_count,
        "error_rate": _round_float(result.error_rate),
        "duration_seconds": _round_float(result.duration_seconds, 3),
        "throughput_items_per_sec": _round_float(result.throughput_items_per_sec),
        "peak_rss_bytes": stats.peak_rss_bytes,
        "peak_traced_bytes": stats.peak_traced_bytes,
        "cpu_percent": _round_float(stats.cpu_percent, 1) if stats.cpu_percent else None,
        "error": None,
        "result": result,
    }


def _failure_summary(config: RunConfig, exc: Exception, stats: ProfileStats) -> dict:
    return {
        "pool": config.pool,
        "items": config.items,
        "workers": config.workers,
        "success_count": 0,
        "error_count": 0,
        "error_rate": 0.0,
        "duration_seconds": _round_float(stats.duration_seconds, 3),
        "throughput_items_per_sec": 0.0,
        "peak_rss_bytes": stats.peak_rss_bytes,
        "peak_traced_bytes": stats.peak_traced_bytes,
        "cpu_percent": None,
        "error": str(exc),
        "error_type": type(exc).__name__,
        "failure_policy": config.failure_policy,
        "result": None,
    }


def _profiled_collect(config: RunConfig) -> dict:
    pool = get_pool(config.pool)
    source = SyntheticSource(
        seed=config.seed,
        corruption_rate=config.corruption_rate,
        latency_ms=config.latency_ms,
    )
    log.info(f"[POOL START] {pool.name}", extra={"pool": pool.name, "source": repr(source)})
    with profile_block(pool.name, enable_tracemalloc=False) as stats:
        try:
            result = pool.collect(config.items, config.workers, source)
        except Exception as exc:  # noqa: BLE001 - failure policy decides below
            log.exception(f"[POOL FAILED] {pool.name}", extra={"pool": pool.name})
            if config.failure_policy == "strict":
                raise
            failure: Optional[Exception] = exc
            result = None
        else:
            failure = None
            log.info(
                f"[POOL SUCCESS] {pool.name}",
                extra={
                    "pool": pool.name,
                    "success_count": result.success_count,
                    "error_count": result.error_count,
                },
            )

    if failure is not None:
        return _failure_summary(config, failure, stats)
    return _summarize(result, stats)


def run_collection(config: Optional[RunConfig] = None) -> List[dict]:
    """
    Run one or more collections and return their summaries.

    Parameters
    ----------
    config : RunConfig | None
        Run parameters; unset fields come from settings.

    Returns
    -------
    List[dict]
        One summary per run. With `runs > 1` a single aggregated entry is
        returned whose `individual_runs` holds the per-run summaries.
    """
    config = (config or RunConfig()).resolved()
    get_pool(config.pool)  # fail fast on unknown names

    run_summaries: List[dict] = []
    for run_num in range(1, config.runs + 1):
        log.info(
            f"[RUN {run_num}/{config.runs}] Collecting {config.items} items with {config.pool}",
            extra={"pool": config.pool, "run": run_num, "items": config.items},
        )
        summary = _profiled_collect(config)
        summary["run"] = run_num
        run_summaries.append(summary)
        log.info(
            f"[RUN {run_num}/{config.runs}] Completed {config.pool}",
            extra={
                "pool": config.pool,
                "run": run_num,
                "success_count": summary["success_count"],
                "error_count": summary["error_count"],
                "duration": summary["duration_seconds"],
            },
        )

    if config.runs > 1:
        aggregated = _aggregate_runs(run_summaries)
        log.info(
            f"[AGGREGATION] Results for {config.pool}",
            extra={"pool": config.pool, "runs": config.runs},
        )
        return [aggregated]
    return run_summaries


__all__ = [
    "RunConfig",
    "available_pools",
    "get_pool",
    "run_collection",
]
