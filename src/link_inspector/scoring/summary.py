"""Summary statistics and per-domain grouping over analysis results."""

from __future__ import annotations

from collections.abc import Iterable

from link_inspector.domain.url.normalize import display_domain
from link_inspector.scoring.models import AnalysisResult, DomainGroup, RiskLevel, Summary


def summarize(results: Iterable[AnalysisResult]) -> Summary:
    counts = {"total": 0, "low_risk": 0, "medium_risk": 0, "high_risk": 0, "https_count": 0, "http_count": 0}
    level_keys = {
        RiskLevel.LOW: "low_risk",
        RiskLevel.MEDIUM: "medium_risk",
        RiskLevel.HIGH: "high_risk",
    }
    for item in results:
        counts["total"] += 1
        counts[level_keys[item.risk_level]] += 1
        counts["https_count" if item.is_https else "http_count"] += 1
    return Summary(**counts)


def group_by_domain(results: Iterable[AnalysisResult]) -> list[DomainGroup]:
    """Bucket results by host, largest groups first.

    Equal-sized groups keep the order in which their domain was first seen.
    """

    buckets: dict[str, list[AnalysisResult]] = {}
    for item in results:
        buckets.setdefault(item.domain.lower(), []).append(item)
    groups = [
        DomainGroup(domain=domain, display_name=display_domain(domain), members=members)
        for domain, members in buckets.items()
    ]
    # sorted() is stable, so ties stay in first-seen order.
    return sorted(groups, key=lambda group: -group.count)
