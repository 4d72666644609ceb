from __future__ import annotations

import json
import sys
from typing import Optional

import typer

from salarybench.config import get_settings
from salarybench.orchestrator import available_reducers, prepare_records, run_benchmark, run_strategies
from salarybench.reducers.abstract import EmptyInputError
from salarybench.reducers.concurrent import ConcurrentReducer
from salarybench.reporter import format_report, print_results
from salarybench.utils.logging import configure_logging

app = typer.Typer(help="Concurrent vs. sequential salary aggregation benchmark.")


def _setup_logging() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


def _fail(exc: Exception) -> None:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def run(
    ctx: typer.Context,
    records: Optional[int] = typer.Option(
        None,
        "--records",
        "-n",
        help="Number of vacancies to generate (default from settings).",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="RNG seed for the vacancies."),
    racy_max: bool = typer.Option(
        False,
        "--racy-max",
        help="Run the concurrent max without its lock to benchmark the lost-update race.",
    ),
) -> None:
    """
    Time concurrent and sequential average/max over synthetic vacancies.
    """
    if ctx.invoked_subcommand is not None:
        return

    _setup_logging()
    guarded = False if racy_max else get_settings().guarded_max
    try:
        data = prepare_records(count=records, seed=seed)
        report = run_benchmark(data, concurrent=ConcurrentReducer(guarded_max=guarded))
    except ValueError as exc:
        _fail(exc)
    typer.echo(format_report(report))


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"records={settings.benchmark_records} salary=[{settings.salary_min}, {settings.salary_max}) "
        f"seed={settings.benchmark_seed} guarded_max={settings.guarded_max} "
        f"concurrency={settings.benchmark_concurrency} runs={settings.benchmark_runs}"
    )


@app.command()
def compare(
    strategy: str = typer.Option(
        "all",
        "--strategy",
        "--strategies",
        "-s",
        help="Reducer to run (e.g., sequential, concurrent, mapreduce, pooled, all, list).",
    ),
    records: Optional[int] = typer.Option(
        None,
        "--records",
        "-n",
        help="Override number of vacancies (default from settings).",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="RNG seed for the vacancies."),
    runs: Optional[int] = typer.Option(None, "--runs", min=1, help="Measurement runs per reducer."),
    warmup: bool = typer.Option(False, "--warmup", help="Run each reducer once before measuring."),
    as_json: bool = typer.Option(False, "--json", help="Print raw results as JSON."),
) -> None:
    """
    Compare every registered reducer over the same vacancies.
    """
    _setup_logging()

    if strategy == "list":
        typer.echo("Available reducers: " + ", ".join(available_reducers()))
        return

    strategy_names = ["all"] if strategy == "all" else [s.strip() for s in strategy.split(",")]
    try:
        data = prepare_records(count=records, seed=seed)
        if not data:
            raise EmptyInputError("average")
        results = run_strategies(strategy_names=strategy_names, records=data, warmup=warmup, runs=runs)
    except ValueError as exc:
        _fail(exc)

    if as_json:
        typer.echo(json.dumps(results, indent=2))
    else:
        print_results(results)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
