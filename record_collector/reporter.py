from __future__ import annotations

from typing import Any, Dict, List, Optional

import psutil
from rich import box
from rich.console import Console
from rich.table import Table

from record_collector.domain.models import CollectionResult


def _host_caption() -> str:
    cpus = psutil.cpu_count(logical=True)
    return f"Host: {cpus} logical CPUs" if cpus else "Host: unknown CPU count"


def print_report(
    result: CollectionResult,
    sample_size: int = 5,
    console: Optional[Console] = None,
) -> None:
    """
    Render a collection result: totals, error rate, timing, and a record sample.
    """
    console = console or Console()

    summary = Table(title="Record Collection Summary", box=box.ROUNDED, caption=_host_caption())
    summary.add_column("Metric", style="cyan", no_wrap=True)
    summary.add_column("Value", justify="right", style="magenta")

    summary.add_row("Pool", result.strategy)
    summary.add_row("Workers", str(result.worker_count))
    summary.add_row("Total items attempted", f"{result.item_count:,}")
    summary.add_row("Successfully collected", f"[green]{result.success_count:,}[/green]")
    summary.add_row("Errors encountered", f"[red]{result.error_count:,}[/red]")
    summary.add_row("Error rate", f"{result.error_rate:.2f}%")
    summary.add_row("Total time", f"{result.duration_seconds * 1000:,.0f} ms")
    summary.add_row("Throughput", f"{result.throughput_items_per_sec:,.2f} items/s")
    console.print(summary)

    sample = result.sample(sample_size)
    if not sample:
        console.print("[yellow]No records collected.[/yellow]")
        return

    records = Table(title=f"Sample collected records ({len(sample)})", box=box.SIMPLE)
    records.add_column("ID", justify="right", style="cyan")
    records.add_column("Title")
    records.add_column("Year", justify="right")
    records.add_column("Score", justify="right", style="bold green")
    for record in sample:
        records.add_row(str(record.id), record.title or "", str(record.year), f"{record.score:.1f}")
    console.print(records)


def print_runs(summaries: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render run summaries as a rich table.

    Handles both single-run summaries and aggregated multi-run summaries.
    """
    console = console or Console()

    if not summaries:
        console.print("[yellow]No results to display.[/yellow]")
        return

    is_aggregated = "individual_runs" in summaries[0]
    runs = summaries[0]["individual_runs"] if is_aggregated else summaries

    table = Table(title="Collection Runs", box=box.ROUNDED)
    table.add_column("Run", justify="right", style="blue")
    table.add_column("Pool", style="cyan", no_wrap=True)
    table.add_column("Items", justify="right", style="magenta")
    table.add_column("OK", justify="right", style="green")
    table.add_column("Errors", justify="right", style="red")
    table.add_column("Error %", justify="right")
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")
    table.add_column("CPU %", justify="right", style="red")

    for res in runs:
        mem_mb = (res.get("peak_rss_bytes") or 0) / (1024 * 1024)
        cpu = res.get("cpu_percent") or 0.0
        if res.get("error"):
            table.add_row(
                str(res.get("run", "")),
                str(res.get("pool")),
                f"{res.get('items', 0):,}",
                "-",
                "-",
                "-",
                f"[red]failed ({res.get('error_type', 'error')}): {res['error']}[/red]",
                f"{mem_mb:.2f}",
                "-",
            )
            continue
        table.add_row(
            str(res.get("run", "")),
            str(res.get("pool")),
            f"{res.get('items', 0):,}",
            f"{res['success_count']:,}",
            f"{res['error_count']:,}",
            f"{res['error_rate']:.2f}",
            f"{res['duration_seconds']:.3f}",
            f"{mem_mb:.2f}",
            f"{cpu:.1f}",
        )

    if is_aggregated and "duration_seconds" in summaries[0]:
        agg = summaries[0]
        table.caption = (
            f"Duration median {agg['duration_seconds']['median']:.3f}s "
            f"± {agg['duration_seconds']['stddev']:.3f} │ "
            f"error rate median {agg['error_rate']['median']:.2f}%"
        )

    console.print(table)


__all__ = ["print_report", "print_runs"]
