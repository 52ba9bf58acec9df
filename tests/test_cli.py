"""Tests for the CLI entry points."""

import json

import pytest
from rich.console import Console
from typer.testing import CliRunner

from pkgcompare import cli
from pkgcompare.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "PKGCOMPARE_CATEGORY_THRESHOLD",
        "PKGCOMPARE_WORKERS",
        "PKGCOMPARE_METRICS_FILE",
        "PKGCOMPARE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    # Wide console so table cells are not truncated
    monkeypatch.setattr(cli, "console", Console(width=200))


@pytest.fixture
def records_file(tmp_path):
    records = [
        {
            "name": "express",
            "description": "Fast, unopinionated, minimalist web framework for node.",
            "keywords": ["express", "framework", "web", "rest", "router"],
            "language": "JavaScript",
            "platform": "npm",
            "metrics": {
                "stars": 66000,
                "dependents": 90000,
                "last_repository_release": "2026-10-01",
                "latest_version": "5.1.0",
                "license": "MIT",
            },
        },
        {
            "name": "left-pad",
            "description": "String left pad",
            "platform": "npm",
            "metrics": {"stars": 200, "is_deprecated": True},
        },
    ]
    path = tmp_path / "records.json"
    path.write_text(json.dumps(records))
    return path


class TestCLI:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "classify" in result.output
        assert "search" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "pkgcompare v0.1.0" in result.output

    def test_categories(self):
        result = runner.invoke(app, ["categories"])
        assert result.exit_code == 0
        assert "Machine Learning" in result.output

    def test_classify(self):
        result = runner.invoke(
            app,
            [
                "classify",
                "org.slf4j:slf4j-api",
                "--description", "Simple Logging Facade for Java",
                "--keyword", "logging",
                "--keyword", "api",
                "--language", "Java",
            ],
        )
        assert result.exit_code == 0
        assert "Categories: Logging" in result.output
        assert "Primary: Logging" in result.output

    def test_classify_name_only(self):
        result = runner.invoke(app, ["classify", "react", "--language", "JavaScript"])
        assert result.exit_code == 0
        assert "Categories: Other" in result.output

    def test_score(self, records_file):
        result = runner.invoke(app, ["score", str(records_file), "--today", "2026-10-18"])
        assert result.exit_code == 0
        assert "express" in result.output
        assert "left-pad" in result.output

    def test_analyze_writes_output(self, records_file, tmp_path):
        output = tmp_path / "analysis.json"
        result = runner.invoke(
            app,
            ["analyze", str(records_file), "--output", str(output), "--today", "2026-10-18"],
        )
        assert result.exit_code == 0
        assert "2 packages analyzed" in result.output

        data = json.loads(output.read_text())
        assert [a["record"]["name"] for a in data] == ["express", "left-pad"]
        assert data[0]["record"]["categories"] == ["Web Framework"]
        assert data[0]["runtime_environment"] == "nodejs"
        assert data[1]["categories"]["primary"] == "Other"
        assert data[1]["use_case"] == "left-pad helps you solve common development challenges in your projects."

    def test_analyze_single_record_shows_breakdown(self, records_file, tmp_path):
        single = tmp_path / "single.json"
        single.write_text(json.dumps(json.loads(records_file.read_text())[:1]))
        result = runner.invoke(app, ["analyze", str(single), "--today", "2026-10-18"])
        assert result.exit_code == 0
        assert "Score Breakdown" in result.output
        for component in ("Popularity", "Maintenance", "Security", "Community", "Quality"):
            assert component in result.output

    def test_search(self, records_file):
        result = runner.invoke(
            app,
            ["search", str(records_file), "--min-stars", "1000", "--exclude-deprecated", "--today", "2026-10-18"],
        )
        assert result.exit_code == 0
        assert "express" in result.output
        assert "left-pad" not in result.output

    def test_search_by_category(self, records_file):
        result = runner.invoke(
            app,
            ["search", str(records_file), "--category", "Web Framework", "--sort-by", "name"],
        )
        assert result.exit_code == 0
        assert "express" in result.output
        assert "left-pad" not in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["score", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Cannot load records" in result.output

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 1
        assert "invalid JSON" in result.output

    def test_invalid_config(self, records_file, monkeypatch):
        monkeypatch.setenv("PKGCOMPARE_WORKERS", "zero")
        result = runner.invoke(app, ["analyze", str(records_file)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("PKGCOMPARE_LOG_LEVEL", "LOUD")
        result = runner.invoke(app, ["categories"])
        assert result.exit_code == 1
        assert "PKGCOMPARE_LOG_LEVEL" in result.output
