"""Core data models for the build report."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class ReportFormatError(ValueError):
    """Raised when a document does not have the shape of a report."""


class FileKind(str, Enum):
    SOURCE = "Source"
    OBJECT = "Object"
    LIBRARY = "Library"
    EXECUTABLE = "Executable"


class StageKind(str, Enum):
    COMPILATION = "Compilation"
    LINK = "Link"
    ARCHIVING = "Archiving"


@dataclass
class FileRecord:
    """A file observed as the input or output of a stage."""

    id: str
    kind: FileKind
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.kind.value, "name": self.name}

    @classmethod
    def from_dict(cls, payload: object) -> "FileRecord":
        if not isinstance(payload, dict):
            raise ReportFormatError("file entry must be an object")
        file_id = payload.get("id")
        name = payload.get("name")
        if not isinstance(file_id, str) or not isinstance(name, str):
            raise ReportFormatError("file entry requires string 'id' and 'name'")
        return cls(id=file_id, kind=_enum_value(FileKind, payload.get("type")), name=name)


@dataclass
class Stage:
    """One recorded build action.

    ``inputs`` and ``outputs`` hold ids of files appended by the same
    invocation. ``duration`` is the wall-clock time of the wrapped tool in
    milliseconds.
    """

    id: str
    kind: StageKind
    duration: int
    inputs: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
            "type": self.kind.value,
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, payload: object) -> "Stage":
        if not isinstance(payload, dict):
            raise ReportFormatError("stage entry must be an object")
        stage_id = payload.get("id")
        duration = payload.get("duration")
        if not isinstance(stage_id, str):
            raise ReportFormatError("stage entry requires a string 'id'")
        # bool is an int subclass; a boolean duration is not a duration.
        if not isinstance(duration, int) or isinstance(duration, bool) or duration < 0:
            raise ReportFormatError("stage 'duration' must be a non-negative integer")
        return cls(
            id=stage_id,
            kind=_enum_value(StageKind, payload.get("type")),
            duration=duration,
            inputs=_id_list(payload.get("inputs"), "inputs"),
            outputs=_id_list(payload.get("outputs"), "outputs"),
        )


@dataclass
class Report:
    """Accumulated files and stages for a whole build."""

    files: List[FileRecord] = field(default_factory=list)
    stages: List[Stage] = field(default_factory=list)

    def add_stage(self, stage: Stage, files: List[FileRecord]) -> None:
        """Append a stage together with the files it references."""
        self.stages.append(stage)
        self.files.extend(files)

    def file_by_id(self, file_id: str) -> FileRecord | None:
        for record in self.files:
            if record.id == file_id:
                return record
        return None

    def is_empty(self) -> bool:
        return not self.files and not self.stages

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files": [record.to_dict() for record in self.files],
            "stages": [stage.to_dict() for stage in self.stages],
        }

    @classmethod
    def from_dict(cls, payload: object) -> "Report":
        if not isinstance(payload, dict):
            raise ReportFormatError("report must be a JSON object")
        files = payload.get("files")
        stages = payload.get("stages")
        if not isinstance(files, list) or not isinstance(stages, list):
            raise ReportFormatError("report requires 'files' and 'stages' arrays")
        return cls(
            files=[FileRecord.from_dict(item) for item in files],
            stages=[Stage.from_dict(item) for item in stages],
        )


def _enum_value(enum_cls, value: object):
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ReportFormatError(f"unknown {enum_cls.__name__}: {value!r}") from exc


def _id_list(value: object, label: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ReportFormatError(f"stage '{label}' must be an array of strings")
    return list(value)


__all__ = [
    "FileKind",
    "FileRecord",
    "Report",
    "ReportFormatError",
    "Stage",
    "StageKind",
]
