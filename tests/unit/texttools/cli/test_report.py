"""Tests for texttools report matchlist / report audit."""

import json

import pytest
from click.testing import CliRunner

from texttools.cli.report import report


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def docs(tmp_path):
    docs = tmp_path / "docs"
    (docs / "nested").mkdir(parents=True)
    (docs / "one.txt").write_text("ticket ABC-12 and ABC-7\n", encoding="utf-8")
    (docs / "nested" / "two.txt").write_text("ABC-12 again\n", encoding="utf-8")
    return docs


class TestMatchlist:
    def test_writes_both_worksheets(self, runner, docs, tmp_path):
        out = tmp_path / "out"
        result = runner.invoke(report, [
            "matchlist", "-d", str(docs), "-o", str(out), "--regex", r"ABC-\d+",
        ])

        assert result.exit_code == 0, result.output
        assert "Text regex: ABC-\\d+" in result.output
        counts = next(out.glob("MatchList-matchcount-*.csv")).read_text(encoding="utf-8").splitlines()
        assert counts == ["match,count", "ABC-12,1", "ABC-7,1"]
        assert len(list(out.glob("MatchList-matchlist-*.csv"))) == 1

    def test_recurse_and_text_output(self, runner, docs, tmp_path):
        out = tmp_path / "out"
        result = runner.invoke(report, [
            "matchlist", "-d", str(docs), "-o", str(out), "-r", "-t", "txt", "--regex", r"ABC-\d+",
        ])

        assert result.exit_code == 0, result.output
        counts = next(out.glob("MatchList-matchcount-*.txt")).read_text(encoding="utf-8").splitlines()
        assert counts == ["match|count", "ABC-12|2", "ABC-7|1"]

    def test_invalid_regex(self, runner, docs):
        result = runner.invoke(report, ["matchlist", "-d", str(docs), "--regex", "[oops"])

        assert result.exit_code == 1
        assert "Invalid regex" in result.output

    def test_regex_required(self, runner, docs):
        result = runner.invoke(report, ["matchlist", "-d", str(docs)])
        assert result.exit_code == 2


class TestAudit:
    @pytest.fixture
    def site_files(self, tmp_path):
        site = tmp_path / "site"
        (site / "setup").mkdir(parents=True)
        (site / "setup" / "index.md").write_text("title: Set up\n", encoding="utf-8")
        navbar = tmp_path / "navbar.json"
        navbar.write_text(json.dumps([{"title": "Setup", "path": "/setup/"}]), encoding="utf-8")
        conductor = tmp_path / "conductor.json"
        conductor.write_text(json.dumps([{"from": "old", "to": "setup"}]), encoding="utf-8")
        return site, navbar, conductor

    def test_writes_file_report(self, runner, site_files, tmp_path):
        site, navbar, conductor = site_files
        out = tmp_path / "out"
        result = runner.invoke(report, [
            "audit", "-d", str(site), "-o", str(out), "-t", "txt",
            "--navbar", str(navbar), "--conductor", str(conductor),
        ])

        assert result.exit_code == 0, result.output
        lines = next(out.glob("IAFileReport-filereport-*.txt")).read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("Directory|Article Title|Variant|In Left Nav?")
        assert lines[1] == "setup|Set up|none|Setup|0||1|old"

    def test_missing_conductor(self, runner, site_files, tmp_path):
        site, navbar, _ = site_files
        result = runner.invoke(report, [
            "audit", "-d", str(site), "--navbar", str(navbar), "--conductor", str(tmp_path / "nope.json"),
        ])

        assert result.exit_code == 1
        assert "Conductor file" in result.output
