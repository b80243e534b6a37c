"""Tests for CLI commands using Click's CliRunner."""

from __future__ import annotations

import json

from click.testing import CliRunner

from accessaudit.cli import main


def test_main_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "AccessAudit" in result.output
    assert "scan" in result.output
    assert "criteria" in result.output
    assert "server" in result.output


def test_main_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_scan_help():
    runner = CliRunner()
    result = runner.invoke(main, ["scan", "--help"])
    assert result.exit_code == 0
    assert "TARGET" in result.output
    assert "--level" in result.output


def test_scan_clean_file(tmp_path, accessible_page):
    page = tmp_path / "index.html"
    page.write_text(accessible_page, encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(main, ["scan", str(page), "--level", "AAA"])
    assert result.exit_code == 0
    assert "No findings" in result.output


def test_scan_critical_findings_exit_1(tmp_path, img_only_page):
    page = tmp_path / "img.html"
    page.write_text(img_only_page, encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(main, ["scan", str(page), "--level", "A"])
    assert result.exit_code == 1
    assert "critical finding(s)" in result.output


def test_scan_json(tmp_path, img_only_page):
    page = tmp_path / "img.html"
    page.write_text(img_only_page, encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(main, ["scan", str(page), "--level", "a", "--json"])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["status"] == "completed"
    assert data["level"] == "A"
    assert data["metrics"]["elements_scanned"] == 3
    assert "missing-alt-text" in [f["rule_id"] for f in data["findings"]]
    assert data["severity_counts"]["critical"] >= 1


def test_scan_unsupported_target():
    runner = CliRunner()
    result = runner.invoke(main, ["scan", "ftp://example.com/"])
    assert result.exit_code == 2


def test_scan_missing_file(tmp_path):
    runner = CliRunner()
    result = runner.invoke(main, ["scan", str(tmp_path / "missing.html")])
    assert result.exit_code == 2
    assert "Scan failed" in result.output


def test_criteria_level_a():
    runner = CliRunner()
    result = runner.invoke(main, ["criteria", "--level", "A"])
    assert result.exit_code == 0
    assert "1.1.1" in result.output
    assert "30 criteria" in result.output


def test_server_help():
    runner = CliRunner()
    result = runner.invoke(main, ["server", "--help"])
    assert result.exit_code == 0
    assert "--port" in result.output
