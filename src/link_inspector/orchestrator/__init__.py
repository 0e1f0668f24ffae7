"""Request contracts and dispatch."""

from link_inspector.orchestrator.contracts import (
    AnalyzeRequest,
    AnalyzeResponse,
    ExportRequest,
    ExportResponse,
    GroupRequest,
    GroupResponse,
    Request,
    parse_request,
)
from link_inspector.orchestrator.dispatch import dispatch, run_analyze, run_export, run_group

__all__ = [
    "AnalyzeRequest",
    "AnalyzeResponse",
    "ExportRequest",
    "ExportResponse",
    "GroupRequest",
    "GroupResponse",
    "Request",
    "dispatch",
    "parse_request",
    "run_analyze",
    "run_export",
    "run_group",
]
