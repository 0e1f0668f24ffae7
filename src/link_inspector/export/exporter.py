"""Render analyzed candidates as CSV or JSON documents.

Rendering only: writing the content somewhere is left to the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
import json
import re
from typing import Any

from link_inspector.core.errors import ExportError
from link_inspector.domain.url.models import Origin, PageMetadata
from link_inspector.scoring.models import AnalyzedCandidate

CSV_HEADERS = ("URL", "Type", "Domain", "Risk Level", "Risk Score", "HTTPS", "Risks", "Link Text")
FILENAME_PREFIX = "smart-link-inspector"
_ORIGIN_LABELS = {Origin.HYPERLINK: "clickable", Origin.PLAIN_TEXT: "plain-text"}
_MIME_TYPES = {"csv": "text/csv", "json": "application/json"}
_TITLE_UNSAFE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    mime_type: str
    content: str


def _iso(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def escape_csv(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    if "," in value or '"' in value or "\n" in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def to_csv(items: Sequence[AnalyzedCandidate], metadata: PageMetadata | None = None) -> str:
    meta = metadata or PageMetadata()
    lines: list[str] = []
    if meta.timestamp is not None:
        lines.append(f"# Exported: {_iso(datetime.fromtimestamp(meta.timestamp, tz=timezone.utc))}")
    if meta.page_url:
        lines.append(f"# Source: {meta.page_url}")
    if meta.page_title:
        lines.append(f"# Page: {meta.page_title}")
    lines.append(",".join(CSV_HEADERS))

    for item in items:
        analysis = item.analysis
        row = [
            escape_csv(item.candidate.raw_text),
            escape_csv(_ORIGIN_LABELS.get(item.candidate.origin, "unknown")),
            escape_csv(analysis.domain),
            escape_csv(analysis.label),
            str(analysis.risk_score),
            "Yes" if analysis.is_https else "No",
            escape_csv("; ".join(analysis.reasons)),
            escape_csv(item.candidate.text),
        ]
        lines.append(",".join(row))
    return "\n".join(lines) + "\n"


def to_json(
    items: Sequence[AnalyzedCandidate],
    metadata: PageMetadata | None = None,
    *,
    now: datetime | None = None,
) -> str:
    meta = metadata or PageMetadata()
    moment = now or datetime.now(timezone.utc)
    payload = {
        "metadata": {
            "pageTitle": meta.page_title,
            "pageUrl": meta.page_url,
            "timestamp": meta.timestamp if meta.timestamp is not None else moment.timestamp(),
            "exportDate": _iso(moment),
            "totalUrls": len(items),
        },
        "urls": [
            {
                "url": item.candidate.raw_text,
                "text": item.candidate.text,
                "type": _ORIGIN_LABELS.get(item.candidate.origin, "unknown"),
                "analysis": {
                    **item.analysis.model_dump(mode="json", exclude={"analyzable"}),
                    "label": item.analysis.label,
                },
            }
            for item in items
        ],
    }
    return json.dumps(payload, indent=2, ensure_ascii=True)


def build_filename(fmt: str, metadata: PageMetadata | None = None, *, now: datetime | None = None) -> str:
    meta = metadata or PageMetadata()
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    stamp = moment.strftime("%Y-%m-%dT%H-%M-%S")
    title = _TITLE_UNSAFE.sub("_", meta.page_title or "urls")[:30]
    return f"{FILENAME_PREFIX}_{title}_{stamp}.{fmt}"


def export_results(
    items: Sequence[AnalyzedCandidate],
    fmt: str,
    metadata: PageMetadata | None = None,
    *,
    now: datetime | None = None,
) -> ExportedFile:
    key = (fmt or "").strip().lower()
    if key == "csv":
        content = to_csv(items, metadata)
    elif key == "json":
        content = to_json(items, metadata, now=now)
    else:
        raise ExportError(f"unsupported export format: {fmt!r}")
    return ExportedFile(
        filename=build_filename(key, metadata, now=now),
        mime_type=_MIME_TYPES[key],
        content=content,
    )
