"""
End-to-end runs of the CLI through typer's test runner.
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from salarybench.main import app
from salarybench.reporter import REPORT_HEADER
from salarybench.utils.logging import configure_logging

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    # The CLI binds its log handler to the runner's temporary stderr.
    yield
    configure_logging()


def test_default_run_prints_report():
    result = runner.invoke(app, [])

    assert result.exit_code == 0, result.output
    lines = result.stdout.rstrip("\n").split("\n")
    assert lines[3] == REPORT_HEADER
    assert lines[4].startswith("Max salary (ns)\t\t")
    assert lines[5].startswith("Avg salary (ns)\t\t")
    concurrent_ns, sequential_ns = lines[5].split("\t\t")[1:]
    assert int(concurrent_ns) >= 0 and int(sequential_ns) >= 0


def test_run_with_options():
    result = runner.invoke(app, ["--records", "50", "--seed", "7"])

    assert result.exit_code == 0, result.output
    assert "Max salary (ns)" in result.stdout


def test_empty_run_fails_without_report():
    result = runner.invoke(app, ["--records", "0"])

    assert result.exit_code == 1
    assert "empty record sequence" in result.output
    assert "Max salary" not in result.output


def test_negative_record_count_fails_cleanly():
    result = runner.invoke(app, ["--records", "-1"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)
    assert "count must be non-negative" in result.output
    assert "Max salary" not in result.output


def test_compare_empty_run_fails():
    result = runner.invoke(app, ["compare", "-n", "0", "--json"])

    assert result.exit_code == 1
    assert "empty record sequence" in result.output
    assert "strategy" not in result.stdout


def test_records_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BENCHMARK_RECORDS", "0")

    result = runner.invoke(app, [])

    assert result.exit_code == 1


def test_info_command():
    result = runner.invoke(app, ["info"])

    assert result.exit_code == 0
    assert "records=10" in result.stdout
    assert "guarded_max=True" in result.stdout


def test_compare_json():
    result = runner.invoke(app, ["compare", "--json", "-n", "20", "--seed", "3"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert {r["strategy"] for r in payload} == {"concurrent", "mapreduce", "pooled", "sequential"}
    assert len({(r["average"], r["max"]) for r in payload}) == 1


def test_compare_list():
    result = runner.invoke(app, ["compare", "--strategy", "list"])

    assert result.exit_code == 0
    assert "mapreduce" in result.stdout


def test_compare_unknown_strategy():
    result = runner.invoke(app, ["compare", "--strategy", "quantum"])

    assert result.exit_code == 1
    assert "Unknown reducer" in result.output
