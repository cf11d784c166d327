"""eyec: observe compiler/archiver invocations and record a build report."""

from .classifier import classify
from .models import FileKind, FileRecord, Report, Stage, StageKind
from .stores import ReportStore, load_report, save_report

__all__ = [
    "FileKind",
    "FileRecord",
    "Report",
    "ReportStore",
    "Stage",
    "StageKind",
    "classify",
    "load_report",
    "save_report",
]
