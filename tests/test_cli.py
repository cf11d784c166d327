"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from eyec.classifier import classify
from eyec.cli import _build_parser, main
from eyec.models import Report
from eyec.stores import load_report, save_report


def _write_report(path: Path) -> None:
    report = Report()
    classify("/usr/bin/g++", ["g++", "-c", "a.cpp", "-o", "a.o"], report, 120)
    save_report(path, report)


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "summary"])
    assert args.verbose is True
    assert args.command == "summary"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["graph", "--verbose", "r.json"])
    assert args.verbose is True
    assert args.report == "r.json"


def test_cli_run_collects_tool_arguments() -> None:
    parser = _build_parser()
    args = parser.parse_args(["run", "gcc", "-c", "a.c", "-o", "a.o"])
    assert args.command == "run"
    assert args.tool_argv == ["gcc", "-c", "a.c", "-o", "a.o"]


def test_graph_writes_dot_to_stdout(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EYEC_REPORT", raising=False)
    monkeypatch.delenv("EYEC_CONFIG", raising=False)
    _write_report(tmp_path / "eyec-report.json")

    main(["graph"])

    out = capsys.readouterr().out
    assert out.startswith("digraph {")
    assert '"a.cpp" -> "a.o" [ label="120ms" ];' in out


def test_graph_writes_output_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    report_path = tmp_path / "r.json"
    _write_report(report_path)

    main(["graph", str(report_path), "-o", str(tmp_path / "build.dot")])

    assert (tmp_path / "build.dot").read_text(encoding="utf-8").startswith("digraph {")


def test_summary_prints_counts(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    report_path = tmp_path / "r.json"
    _write_report(report_path)

    main(["summary", str(report_path), "--top", "1"])

    out = capsys.readouterr().out
    assert "Stages: 1 (120ms total)" in out
    assert "120ms Compilation a.o" in out


def test_reset_empties_report(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    report_path = tmp_path / "r.json"
    _write_report(report_path)

    main(["reset", str(report_path)])

    assert load_report(report_path).is_empty()
    assert "Report reset at r.json" in capsys.readouterr().out


def test_run_without_tool_exits_with_usage_error(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["run"])

    assert excinfo.value.code == 2


def test_invalid_config_exits_with_config_error(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EYEC_CONFIG", raising=False)
    (tmp_path / ".eyec.yml").write_text("- not a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["summary"])

    assert excinfo.value.code == 78
