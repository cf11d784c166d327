"""Tests for the Graphviz renderer."""

from __future__ import annotations

from eyec.classifier import classify
from eyec.models import FileKind, FileRecord, Report, Stage, StageKind
from eyec.render import render_dot
from eyec.render.graph import node_attributes


def test_empty_report_renders_empty_digraph() -> None:
    assert render_dot(Report()) == "digraph {\nrankdir=LR\n}\n"


def test_single_input_stage_labels_the_edge() -> None:
    report = Report()
    classify("/usr/bin/g++", ["g++", "-c", "a.cpp", "-o", "a.o"], report, 120)

    dot = render_dot(report)

    assert dot.splitlines() == [
        "digraph {",
        "rankdir=LR",
        '"a.cpp" -> "a.o" [ label="120ms" ];',
        '"a.cpp" [ ];',
        '"a.o" [ style="filled" fillcolor="lightgray" ];',
        "}",
    ]


def test_multi_input_stage_labels_the_target_node() -> None:
    report = Report()
    classify("/usr/bin/g++", ["g++", "a.o", "b.o", "-lm", "-o", "prog"], report, 50)

    lines = render_dot(report).splitlines()

    assert '"libm.a" -> "prog";' in lines
    assert '"a.o" -> "prog";' in lines
    assert '"b.o" -> "prog";' in lines
    assert '"libm.a" [ style="filled" fillcolor="gray" ];' in lines
    assert '"prog" [ shape=box xlabel="50ms" ];' in lines


def test_stages_without_outputs_are_skipped() -> None:
    report = Report()
    classify("/usr/bin/gcc", ["gcc", "-c", "a.c", "b.c"], report, 5)

    assert render_dot(report) == "digraph {\nrankdir=LR\n}\n"


def test_unknown_input_ids_are_skipped() -> None:
    report = Report(
        files=[FileRecord(id="out", kind=FileKind.LIBRARY, name="libx.a")],
        stages=[Stage(id="s", kind=StageKind.ARCHIVING, duration=1, inputs=["gone"], outputs=["out"])],
    )

    lines = render_dot(report).splitlines()

    assert lines[2:] == ['"libx.a" [ style="filled" fillcolor="gray" ];', "}"]


def test_names_with_quotes_are_escaped() -> None:
    report = Report()
    classify("/usr/bin/gcc", ["gcc", "-c", 'we"ird.c', "-o", "w.o"], report, 1)

    assert '"we\\"ird.c" -> "w.o" [ label="1ms" ];' in render_dot(report)


def test_node_attributes_for_sources_are_empty() -> None:
    assert node_attributes(FileRecord(id="x", kind=FileKind.SOURCE, name="a.c")) == ""
