"""Graphviz rendering of a build report."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from jinja2 import Environment, FileSystemLoader

from ..models import FileKind, FileRecord, Report

_TEMPLATE_NAME = "report.dot.j2"

_NODE_ATTRIBUTES: Dict[FileKind, Dict[str, str]] = {
    FileKind.EXECUTABLE: {"shape": "box"},
    FileKind.LIBRARY: {"style": '"filled"', "fillcolor": '"gray"'},
    FileKind.OBJECT: {"style": '"filled"', "fillcolor": '"lightgray"'},
}


@dataclass(frozen=True)
class GraphEdge:
    source: FileRecord
    label: Optional[str]


@dataclass(frozen=True)
class GraphStage:
    target: FileRecord
    edges: List[GraphEdge]
    xlabel: Optional[str]


class GraphRenderer:
    """Renders stages as edges from each input to the stage's first output."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            keep_trailing_newline=True,
        )
        self._env.filters["dot_escape"] = dot_escape
        self._env.filters["node_attributes"] = node_attributes

    def render(self, report: Report) -> str:
        template = self._env.get_template(_TEMPLATE_NAME)
        return template.render(stages=self.graph_stages(report))

    def graph_stages(self, report: Report) -> List[GraphStage]:
        by_id = {record.id: record for record in report.files}
        stages: List[GraphStage] = []
        for stage in report.stages:
            target = by_id.get(stage.outputs[0]) if stage.outputs else None
            if target is None:
                continue
            duration = _format_duration(stage.duration)
            single_input = len(stage.inputs) == 1
            edges = [
                GraphEdge(source=by_id[input_id], label=duration if single_input else None)
                for input_id in stage.inputs
                if input_id in by_id
            ]
            stages.append(
                GraphStage(
                    target=target,
                    edges=edges,
                    xlabel=duration if len(stage.inputs) > 1 else None,
                )
            )
        return stages


def render_dot(report: Report) -> str:
    return GraphRenderer().render(report)


def node_attributes(record: FileRecord) -> str:
    attributes = _NODE_ATTRIBUTES.get(record.kind, {})
    return "".join(f"{key}={value} " for key, value in attributes.items())


def dot_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _format_duration(duration_ms: int) -> str:
    return f"{duration_ms}ms"


__all__ = ["GraphRenderer", "node_attributes", "render_dot"]
