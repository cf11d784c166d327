"""Aggregate statistics over a build report."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List

from ..models import FileKind, Report, StageKind


@dataclass(frozen=True)
class StageTiming:
    stage_id: str
    kind: StageKind
    duration: int
    outputs: List[str]


@dataclass
class ReportSummary:
    """Counts and timings per stage kind."""

    stage_counts: Dict[StageKind, int] = field(default_factory=dict)
    stage_durations: Dict[StageKind, int] = field(default_factory=dict)
    file_counts: Dict[FileKind, int] = field(default_factory=dict)
    slowest: List[StageTiming] = field(default_factory=list)

    @property
    def total_duration(self) -> int:
        return sum(self.stage_durations.values())

    def format(self) -> str:
        lines = [f"Stages: {sum(self.stage_counts.values())} ({self.total_duration}ms total)"]
        for kind in StageKind:
            count = self.stage_counts.get(kind, 0)
            if count:
                lines.append(f"  {kind.value}: {count} ({self.stage_durations.get(kind, 0)}ms)")
        lines.append(f"Files: {sum(self.file_counts.values())}")
        for kind in FileKind:
            count = self.file_counts.get(kind, 0)
            if count:
                lines.append(f"  {kind.value}: {count}")
        if self.slowest:
            lines.append("Slowest stages:")
            for timing in self.slowest:
                target = ", ".join(timing.outputs) or "(no outputs)"
                lines.append(f"  {timing.duration}ms {timing.kind.value} {target}")
        return "\n".join(lines)


def summarize(report: Report, *, top: int = 5) -> ReportSummary:
    names = {record.id: record.name for record in report.files}
    stage_counts: Counter[StageKind] = Counter()
    stage_durations: Counter[StageKind] = Counter()
    for stage in report.stages:
        stage_counts[stage.kind] += 1
        stage_durations[stage.kind] += stage.duration
    file_counts: Counter[FileKind] = Counter(record.kind for record in report.files)

    ranked = sorted(report.stages, key=lambda stage: stage.duration, reverse=True)
    slowest = [
        StageTiming(
            stage_id=stage.id,
            kind=stage.kind,
            duration=stage.duration,
            outputs=[names[output] for output in stage.outputs if output in names],
        )
        for stage in ranked[: max(top, 0)]
    ]
    return ReportSummary(
        stage_counts=dict(stage_counts),
        stage_durations=dict(stage_durations),
        file_counts=dict(file_counts),
        slowest=slowest,
    )


__all__ = ["ReportSummary", "StageTiming", "summarize"]
