"""Views over a recorded build report."""

from .graph import GraphRenderer, render_dot
from .summary import ReportSummary, summarize

__all__ = ["GraphRenderer", "ReportSummary", "render_dot", "summarize"]
