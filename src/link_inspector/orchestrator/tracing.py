"""Trace events attached to contract responses."""

from __future__ import annotations

from typing import Any, Literal

TraceStatus = Literal["ok", "fallback"]
TraceEvent = dict[str, Any]


def make_event(stage: str, status: TraceStatus, message: str, data: dict[str, Any] | None = None) -> TraceEvent:
    event: TraceEvent = {"stage": stage, "status": status, "message": message}
    if data:
        event["data"] = dict(data)
    return event
