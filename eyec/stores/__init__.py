"""Report persistence."""

from .report_store import ReportStore, ReportStoreError, load_report, save_report

__all__ = ["ReportStore", "ReportStoreError", "load_report", "save_report"]
