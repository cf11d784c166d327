"""Tests for report summaries."""

from __future__ import annotations

from eyec.classifier import classify
from eyec.models import FileKind, Report, StageKind
from eyec.render import summarize


def _build() -> Report:
    report = Report()
    classify("/usr/bin/gcc", ["gcc", "-c", "a.c", "-o", "a.o"], report, 30)
    classify("/usr/bin/gcc", ["gcc", "-c", "b.c", "-o", "b.o"], report, 70)
    classify("/usr/bin/ar", ["ar", "rcs", "libab.a", "a.o", "b.o"], report, 5)
    classify("/usr/bin/gcc", ["gcc", "main.o", "-lab", "-o", "app"], report, 40)
    return report


def test_summary_counts_stages_and_files() -> None:
    summary = summarize(_build())

    assert summary.stage_counts == {
        StageKind.COMPILATION: 2,
        StageKind.ARCHIVING: 1,
        StageKind.LINK: 1,
    }
    assert summary.stage_durations[StageKind.COMPILATION] == 100
    assert summary.total_duration == 145
    assert summary.file_counts[FileKind.OBJECT] == 5
    assert summary.file_counts[FileKind.EXECUTABLE] == 1


def test_summary_lists_slowest_stages_first() -> None:
    summary = summarize(_build(), top=2)

    assert [(t.duration, t.outputs) for t in summary.slowest] == [(70, ["b.o"]), (40, ["app"])]


def test_summary_format_mentions_each_kind() -> None:
    text = summarize(_build()).format()

    assert text.splitlines()[0] == "Stages: 4 (145ms total)"
    assert "  Compilation: 2 (100ms)" in text
    assert "  Library: 2" in text
    assert "Slowest stages:" in text


def test_summary_of_empty_report() -> None:
    summary = summarize(Report())

    assert summary.total_duration == 0
    assert summary.slowest == []
    assert summary.format() == "Stages: 0 (0ms total)\nFiles: 0"
