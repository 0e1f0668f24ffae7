"""Exhaustive request dispatch over the contract variants."""

from __future__ import annotations

import logging
from typing import Any, NoReturn

from link_inspector.core.errors import ContractError
from link_inspector.domain.url.extract import validate_candidates
from link_inspector.export.exporter import export_results
from link_inspector.orchestrator.contracts import (
    AnalyzeRequest,
    AnalyzeResponse,
    ExportRequest,
    ExportResponse,
    GroupRequest,
    GroupResponse,
    Response,
    parse_request,
)
from link_inspector.orchestrator.tracing import make_event
from link_inspector.scoring.engine import analyze_many
from link_inspector.scoring.rules import RuleSet
from link_inspector.scoring.summary import group_by_domain, summarize

logger = logging.getLogger(__name__)


def run_analyze(request: AnalyzeRequest, rules: RuleSet | None = None) -> AnalyzeResponse:
    candidates = validate_candidates(request.candidates)
    results = analyze_many(candidates, rules)
    summary = summarize(item.analysis for item in results)
    fallbacks = sum(1 for item in results if not item.analysis.analyzable)
    trace = [
        make_event(
            "analyze",
            "ok",
            f"analyzed {summary.total} url(s)",
            {"high": summary.high_risk, "medium": summary.medium_risk, "low": summary.low_risk},
        )
    ]
    if fallbacks:
        trace.append(make_event("analyze", "fallback", f"{fallbacks} url(s) could not be parsed"))
    logger.info("analyzed %d urls (%d high risk)", summary.total, summary.high_risk)
    return AnalyzeResponse(results=results, summary=summary, trace=trace)


def run_group(request: GroupRequest) -> GroupResponse:
    groups = group_by_domain(request.results)
    trace = [make_event("group", "ok", f"{len(groups)} domain group(s)")]
    return GroupResponse(groups=groups, trace=trace)


def run_export(request: ExportRequest) -> ExportResponse:
    exported = export_results(request.results, request.format, request.metadata)
    trace = [make_event("export", "ok", f"exported {len(request.results)} url(s)", {"format": request.format})]
    return ExportResponse(
        filename=exported.filename,
        mime_type=exported.mime_type,
        content=exported.content,
        trace=trace,
    )


def _unhandled(request: Any) -> NoReturn:
    raise ContractError(f"no handler for request type {type(request).__name__}")


def dispatch(payload: Any, rules: RuleSet | None = None) -> Response:
    request = parse_request(payload)
    if isinstance(request, AnalyzeRequest):
        return run_analyze(request, rules)
    if isinstance(request, GroupRequest):
        return run_group(request)
    if isinstance(request, ExportRequest):
        return run_export(request)
    _unhandled(request)
