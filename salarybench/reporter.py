from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from salarybench.orchestrator import (
    AVG_CONCURRENT,
    AVG_SEQUENTIAL,
    MAX_CONCURRENT,
    MAX_SEQUENTIAL,
    BenchmarkReport,
)

REPORT_HEADER = "\t\t\t\tConcurrent\tSequential"


def format_report(report: BenchmarkReport) -> str:
    """
    Render the fixed two-column timing report.

    Three blank lines, a header, then one row each for max and average,
    all timings in nanoseconds.
    """
    lines = [
        "",
        "",
        "",
        REPORT_HEADER,
        f"Max salary (ns)\t\t{report.elapsed_ns(MAX_CONCURRENT)}\t\t{report.elapsed_ns(MAX_SEQUENTIAL)}",
        f"Avg salary (ns)\t\t{report.elapsed_ns(AVG_CONCURRENT)}\t\t{report.elapsed_ns(AVG_SEQUENTIAL)}",
    ]
    return "\n".join(lines)


def get_cpu_count() -> Optional[int]:
    """
    Number of CPUs this process may run on.

    Prefers the scheduler affinity mask (respects container cpusets) and
    falls back to the host count.
    """
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0))
    return os.cpu_count()


def _ns(value: Any) -> str:
    return f"{value:,}" if isinstance(value, int) else "N/A"


def print_results(results: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render reducer comparison results as a rich table.

    Handles both single-run results and aggregated multi-run results, fastest
    average first.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    is_aggregated = any(isinstance(r.get("avg_ns"), dict) for r in results)

    title = "Salary Aggregation Benchmark"
    cpus = get_cpu_count()
    if cpus:
        title = f"{title}\n[dim]CPUs available: {cpus}[/dim]"

    table = Table(
        title=title,
        box=box.ROUNDED,
        caption="Sorted by average time (ascending)",
    )
    table.add_column("Strategy", style="cyan", no_wrap=True)
    table.add_column("Records", justify="right", style="magenta")
    if is_aggregated:
        table.add_column("Runs", justify="right", style="blue")
        table.add_column("Avg (ns)\n[dim](Median ± StdDev)[/dim]", justify="right", style="green")
        table.add_column("Max (ns)\n[dim](Median ± StdDev)[/dim]", justify="right", style="green")
    else:
        table.add_column("Avg (ns)", justify="right", style="green")
        table.add_column("Max (ns)", justify="right", style="green")
    table.add_column("Average", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Peak threads", justify="right", style="yellow")

    def get_sort_key(r: Dict[str, Any]) -> float:
        if "error" in r:
            return float("inf")
        if is_aggregated:
            return r["avg_ns"]["median"]
        return r["avg_ns"]

    for res in sorted(results, key=get_sort_key):
        strategy = res.get("strategy", "Unknown")
        records = f"{res.get('records', 0):,}"
        if "error" in res:
            error_cells = [f"[red]{res['error']}[/red]", "", "", "", ""]
            if is_aggregated:
                error_cells.insert(0, str(res.get("runs", 0)))
            table.add_row(strategy, records, *error_cells)
            continue

        if is_aggregated:
            timing_cells = [
                str(res.get("runs", 0)),
                f"{res['avg_ns']['median']:,} ± {res['avg_ns']['stddev']:,}",
                f"{res['max_ns']['median']:,} ± {res['max_ns']['stddev']:,}",
            ]
        else:
            timing_cells = [_ns(res.get("avg_ns")), _ns(res.get("max_ns"))]

        table.add_row(
            strategy,
            records,
            *timing_cells,
            str(res.get("average")),
            str(res.get("max")),
            str(res.get("peak_threads") or "N/A"),
        )

    console.print(table)


__all__ = ["REPORT_HEADER", "format_report", "get_cpu_count", "print_results"]
