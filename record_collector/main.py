from __future__ import annotations

import sys
from typing import Optional

import typer

from record_collector.config import get_settings
from record_collector.orchestrator import RunConfig, available_pools, run_collection
from record_collector.reporter import print_report, print_runs
from record_collector.utils.logging import configure_logging

app = typer.Typer(help="Record Collector CLI.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"pool={settings.collector_pool} items={settings.collector_items} "
        f"workers={settings.collector_workers} seed={settings.collector_seed} | "
        f"corruption_rate={settings.collector_corruption_rate} "
        f"latency_ms=({settings.collector_latency_min_ms},{settings.collector_latency_max_ms})"
    )


@app.command()
def run(
    pool: Optional[str] = typer.Option(
        None,
        "--pool",
        "-p",
        help="Worker pool to use (threaded, multiprocessing, or 'list').",
    ),
    items: Optional[int] = typer.Option(
        None, "--items", "-n", min=0, help="Number of items to collect (default from settings)."
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, help="Number of concurrent workers (default from settings)."
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Seed for the synthetic source; omit for a random run."
    ),
    corruption_rate: Optional[float] = typer.Option(
        None, "--corruption-rate", min=0.0, max=1.0, help="Probability of a corrupted record."
    ),
    latency_min_ms: Optional[int] = typer.Option(None, "--latency-min-ms", min=0),
    latency_max_ms: Optional[int] = typer.Option(None, "--latency-max-ms", min=0),
    runs: int = typer.Option(1, "--runs", "-r", min=1, help="Number of measurement runs."),
    json_logs: Optional[bool] = typer.Option(
        None, "--json-logs/--no-json-logs", help="Emit logs as JSON."
    ),
) -> None:
    """
    Collect synthetic records with a worker pool and print the report.
    """
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_logs=settings.log_json if json_logs is None else json_logs,
    )

    if pool == "list":
        typer.echo("Available pools: " + ", ".join(available_pools()))
        return

    latency_ms = None
    if latency_min_ms is not None or latency_max_ms is not None:
        low = settings.collector_latency_min_ms if latency_min_ms is None else latency_min_ms
        high = settings.collector_latency_max_ms if latency_max_ms is None else latency_max_ms
        if high < low:
            raise typer.BadParameter("--latency-max-ms must be >= --latency-min-ms")
        latency_ms = (low, high)

    config = RunConfig(
        pool=pool,
        items=items,
        workers=workers,
        seed=seed,
        corruption_rate=corruption_rate,
        latency_ms=latency_ms,
        runs=runs,
    )
    try:
        summaries = run_collection(config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if runs > 1:
        print_runs(summaries)
    runs_done = summaries[0]["individual_runs"] if runs > 1 else summaries
    last = next((s["result"] for s in reversed(runs_done) if s.get("result")), None)
    if last is None:
        typer.echo("Collection failed; see log for details.", err=True)
        return
    print_report(last, sample_size=settings.collector_sample_size)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
