"""Runner wrappers for the command line."""

from __future__ import annotations

import argparse
from pathlib import Path
import json
import sys

from link_inspector.config.settings import AppConfig, load_config
from link_inspector.core.errors import LinkInspectorError
from link_inspector.core.logging_setup import configure_logging
from link_inspector.domain.url.models import PageMetadata
from link_inspector.domain.url.sources import CandidateSource, LinkCandidateSource, TextCandidateSource, scan_html
from link_inspector.orchestrator.contracts import ExportRequest, GroupRequest
from link_inspector.orchestrator.dispatch import run_export, run_group
from link_inspector.session import ScanSession


def _sources_from_args(args: argparse.Namespace) -> tuple[list[CandidateSource], str]:
    sources: list[CandidateSource] = []
    title = ""
    if args.html:
        page = scan_html(Path(args.html).read_text(encoding="utf-8"), base_url=args.page_url)
        sources.extend(page.sources)
        title = page.title
    if args.url:
        sources.append(LinkCandidateSource([(item, item) for item in args.url], base_url=args.page_url))
    if args.text:
        sources.append(TextCandidateSource(args.text))
    return sources, title


def run_once(
    *,
    html_path: str | None = None,
    text: str | None = None,
    urls: list[str] | None = None,
    page_url: str | None = None,
    external_only: bool = False,
    group: bool = False,
    fmt: str = "json",
    config_path: str | None = None,
    config: AppConfig | None = None,
) -> str:
    if config is None:
        config, _ = load_config(config_path)
    args = argparse.Namespace(html=html_path, text=text, url=urls or [], page_url=page_url)
    sources, title = _sources_from_args(args)

    session = ScanSession(rules=config.rules, external_only=external_only)
    metadata = PageMetadata(page_title=title, page_url=page_url or "")
    session.collect(sources, metadata)
    response = session.analyze()
    snapshot_meta = session.last_scan.metadata if session.last_scan else metadata

    if fmt == "csv":
        return run_export(ExportRequest(format="csv", results=response.results, metadata=snapshot_meta)).content

    payload = response.model_dump(mode="json")
    if group:
        grouped = run_group(GroupRequest(results=[item.analysis for item in response.results]))
        payload["groups"] = [
            {"domain": item.domain, "display_name": item.display_name, "count": item.count}
            for item in grouped.groups
        ]
    return json.dumps(payload, ensure_ascii=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="link-inspector")
    parser.add_argument("--html", help="Scan a saved HTML page for links and plain-text URLs.")
    parser.add_argument("--text", help="Scan free text for URLs.")
    parser.add_argument("--url", action="append", default=[], help="Analyze a URL directly (repeatable).")
    parser.add_argument("--page-url", help="URL of the scanned page; resolves relative links.")
    parser.add_argument("--external-only", action="store_true", help="Only keep links leaving the page's host.")
    parser.add_argument("--group", action="store_true", help="Include per-domain groups in JSON output.")
    parser.add_argument("--format", choices=("json", "csv"), default="json")
    parser.add_argument("--config", help="Path to a YAML config overriding the default rule lists.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config, _ = load_config(args.config)
        configure_logging(config.log_level)
        output = run_once(
            html_path=args.html,
            text=args.text,
            urls=args.url,
            page_url=args.page_url,
            external_only=args.external_only,
            group=args.group,
            fmt=args.format,
            config=config,
        )
    except (LinkInspectorError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(output)
    return 0
