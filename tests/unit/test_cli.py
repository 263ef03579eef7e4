"""Unit tests for the excut command line interface."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from excut.cli.main import app

runner = CliRunner()


def _write_job(tmp_path: Path, data: dict[str, Any]) -> Path:
    path = tmp_path / "job.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def small_csv(tmp_path: Path) -> Path:
    path = tmp_path / "small.csv"
    path.write_text("A,2,60\nB,1,30\n", encoding="utf-8")
    return path


class TestOptimizeCommand:
    """Tests for `excut optimize`."""

    def test_help(self) -> None:
        result = runner.invoke(app, ["optimize", "--help"])
        assert result.exit_code == 0
        assert "--stock" in result.output
        assert "--kerf" in result.output
        assert "--policy" in result.output

    def test_text_report(self, small_csv: Path) -> None:
        result = runner.invoke(app, ["optimize", str(small_csv), "--stock", "100"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Bin #1 (60/0/40): 60 (A)",
            "Bin #2 (90/0/10): 60 (A), 30 (B)",
        ]

    def test_kerf_option(self, small_csv: Path) -> None:
        result = runner.invoke(
            app, ["optimize", str(small_csv), "-s", "100", "-k", "5"]
        )
        assert result.exit_code == 0
        assert "Bin #2 (90/10/0): 60 (A), 30 (B)" in result.output

    def test_json_format(self, small_csv: Path) -> None:
        result = runner.invoke(
            app, ["optimize", str(small_csv), "--stock", "100", "--format", "json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["summary"]["total_bins"] == 2

    def test_table_format(self, small_csv: Path) -> None:
        result = runner.invoke(
            app, ["optimize", str(small_csv), "--stock", "100", "-f", "table"]
        )
        assert result.exit_code == 0
        assert result.output.splitlines()[:3] == ["60\t0\t40", "60", "A"]

    def test_policy_option(self, tmp_path: Path) -> None:
        table = tmp_path / "policy.csv"
        table.write_text("x,1,6\ny,1,5\nz,2,4\n", encoding="utf-8")
        current = runner.invoke(app, ["optimize", str(table), "--stock", "10"])
        first_fit = runner.invoke(
            app, ["optimize", str(table), "--stock", "10", "--policy", "first-fit"]
        )
        assert len(current.output.splitlines()) == 3
        assert len(first_fit.output.splitlines()) == 2

    def test_output_file(self, small_csv: Path, tmp_path: Path) -> None:
        target = tmp_path / "plan.csv"
        result = runner.invoke(
            app,
            ["optimize", str(small_csv), "--stock", "100", "-f", "csv", "-o", str(target)],
        )
        assert result.exit_code == 0
        assert "Cutting plan written to" in result.output
        assert target.read_text(encoding="utf-8").startswith("bin,used,cuts,rest,size,label")

    def test_missing_stock(self, small_csv: Path) -> None:
        result = runner.invoke(app, ["optimize", str(small_csv)])
        assert result.exit_code == 1
        assert "--stock is required" in result.output

    def test_missing_table(self) -> None:
        result = runner.invoke(app, ["optimize", "--stock", "100"])
        assert result.exit_code == 1
        assert "cutting table is required" in result.output

    def test_invalid_configuration(self, small_csv: Path) -> None:
        result = runner.invoke(
            app, ["optimize", str(small_csv), "--stock", "10", "--kerf", "10"]
        )
        assert result.exit_code == 1
        assert "Bin size must be greater than cut size" in result.output

    def test_unknown_format(self, small_csv: Path) -> None:
        result = runner.invoke(
            app, ["optimize", str(small_csv), "--stock", "100", "-f", "pdf"]
        )
        assert result.exit_code == 1
        assert "Unknown format: pdf" in result.output

    def test_unknown_policy(self, small_csv: Path) -> None:
        result = runner.invoke(
            app, ["optimize", str(small_csv), "--stock", "100", "-p", "random"]
        )
        assert result.exit_code == 1
        assert "No bin selection policy named 'random'" in result.output

    def test_strict_rejects_bad_cells(self, tmp_path: Path) -> None:
        table = tmp_path / "bad.csv"
        table.write_text("A,two,10\n", encoding="utf-8")
        lenient = runner.invoke(app, ["optimize", str(table), "--stock", "100"])
        strict = runner.invoke(app, ["optimize", str(table), "--stock", "100", "--strict"])
        assert lenient.exit_code == 0
        assert strict.exit_code == 1
        assert "count must be a number" in strict.output

    def test_csv_with_byte_order_mark(self, tmp_path: Path) -> None:
        table = tmp_path / "excel.csv"
        table.write_text("label,count,size\nRail,2,40\n", encoding="utf-8-sig")
        result = runner.invoke(app, ["optimize", str(table), "-s", "100", "--strict"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["Bin #1 (80/0/20): 40 (Rail), 40 (Rail)"]

    def test_non_utf8_csv(self, tmp_path: Path) -> None:
        table = tmp_path / "latin1.csv"
        table.write_bytes(b"Tr\xe4ger,2,40\n")
        result = runner.invoke(app, ["optimize", str(table), "--stock", "100"])
        assert result.exit_code == 1
        assert "Error reading cutting table" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_config_file(self, tmp_path: Path) -> None:
        job = _write_job(
            tmp_path,
            {"stock_size": 100, "kerf": 5, "cutouts": [{"label": "A", "count": 2, "size": 50}]},
        )
        result = runner.invoke(app, ["optimize", "--config", str(job)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Bin #1 (50/5/45): 50 (A)",
            "Bin #2 (50/5/45): 50 (A)",
        ]

    def test_cli_overrides_config(self, tmp_path: Path) -> None:
        job = _write_job(
            tmp_path,
            {"stock_size": 100, "kerf": 5, "cutouts": [{"label": "A", "count": 2, "size": 50}]},
        )
        result = runner.invoke(app, ["optimize", "-c", str(job), "--kerf", "0"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["Bin #1 (100/0/0): 50 (A), 50 (A)"]

    def test_csv_replaces_config_cutouts(self, tmp_path: Path, small_csv: Path) -> None:
        job = _write_job(
            tmp_path,
            {"stock_size": 100, "cutouts": [{"label": "Z", "count": 1, "size": 99}]},
        )
        result = runner.invoke(app, ["optimize", str(small_csv), "-c", str(job)])
        assert result.exit_code == 0
        assert "Z" not in result.output
        assert "60 (A)" in result.output

    def test_invalid_config_file(self, tmp_path: Path) -> None:
        job = _write_job(tmp_path, {"stock_size": 10, "kerf": 10})
        result = runner.invoke(app, ["optimize", "-c", str(job)])
        assert result.exit_code == 1
        assert "Bin size must be greater than cut size" in result.output


class TestValidateCommand:
    """Tests for `excut validate`."""

    def test_valid_job(self, tmp_path: Path) -> None:
        job = _write_job(
            tmp_path, {"stock_size": 100, "cutouts": [{"count": 1, "size": 50}]}
        )
        result = runner.invoke(app, ["validate", str(job)])
        assert result.exit_code == 0
        assert "Job file is valid." in result.output

    def test_skipped_rows_warn(self, tmp_path: Path) -> None:
        job = _write_job(
            tmp_path,
            {
                "stock_size": 100,
                "cutouts": [
                    {"label": "ok", "count": 1, "size": 50},
                    {"label": "none", "count": 0, "size": 50},
                    {"label": "long", "count": 1, "size": 150},
                ],
            },
        )
        result = runner.invoke(app, ["validate", str(job)])
        assert result.exit_code == 2
        assert "cutouts[1]: count 0 requests no pieces" in result.output
        assert "cutouts[2]: size 150 exceeds stock size 100" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_schema_error(self, tmp_path: Path) -> None:
        job = _write_job(tmp_path, {"stock_size": "long"})
        result = runner.invoke(app, ["validate", str(job)])
        assert result.exit_code == 1
        assert "stock_size" in result.output
        assert "Validation failed." in result.output

    def test_job_without_cutouts(self, tmp_path: Path) -> None:
        """Test a job that optimize would reject does not pass validation."""
        job = _write_job(tmp_path, {"stock_size": 100, "kerf": 1})
        result = runner.invoke(app, ["validate", str(job)])
        assert result.exit_code == 1
        assert "cutouts: Cutouts table must have at least one row" in result.output
        assert "Job file is valid" not in result.output

    def test_kerf_not_below_stock(self, tmp_path: Path) -> None:
        job = _write_job(
            tmp_path, {"stock_size": 10, "kerf": 10, "cutouts": [{"count": 1, "size": 5}]}
        )
        result = runner.invoke(app, ["validate", str(job)])
        assert result.exit_code == 1
        assert "kerf: Bin size must be greater than cut size" in result.output

    def test_non_utf8_job(self, tmp_path: Path) -> None:
        job = tmp_path / "job.json"
        job.write_bytes(b'{"stock_size": 100, "cutouts": [{"label": "Tr\xe4ger", "count": 1, "size": 5}]}')
        result = runner.invoke(app, ["validate", str(job)])
        assert result.exit_code == 1
        assert "Error reading config file" in result.output

    def test_unknown_policy(self, tmp_path: Path) -> None:
        job = _write_job(tmp_path, {"stock_size": 100, "policy": "random"})
        result = runner.invoke(app, ["validate", str(job)])
        assert result.exit_code == 1
        assert "unknown bin selection policy 'random'" in result.output


class TestPoliciesCommand:
    """Tests for `excut policies`."""

    def test_lists_policies(self) -> None:
        result = runner.invoke(app, ["policies"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["best-fit", "current", "first-fit"]
