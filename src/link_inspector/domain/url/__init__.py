"""URL candidate models, parsing and collection."""

from link_inspector.domain.url.extract import collect, dedupe, filter_external, validate_candidates
from link_inspector.domain.url.models import NormalizedUrl, Origin, PageMetadata, ScanSnapshot, UrlCandidate
from link_inspector.domain.url.normalize import display_domain, is_ip_address, is_valid_url, normalize
from link_inspector.domain.url.sources import (
    CandidateSource,
    LinkCandidateSource,
    PageScan,
    TextCandidateSource,
    scan_html,
)

__all__ = [
    "CandidateSource",
    "LinkCandidateSource",
    "NormalizedUrl",
    "Origin",
    "PageMetadata",
    "PageScan",
    "ScanSnapshot",
    "TextCandidateSource",
    "UrlCandidate",
    "collect",
    "dedupe",
    "display_domain",
    "filter_external",
    "is_ip_address",
    "is_valid_url",
    "normalize",
    "scan_html",
    "validate_candidates",
]
