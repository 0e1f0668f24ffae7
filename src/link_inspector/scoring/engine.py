"""Risk heuristics engine: rule aggregation, capping and level banding."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from link_inspector.domain.url.models import UrlCandidate
from link_inspector.domain.url.normalize import normalize
from link_inspector.scoring.models import AnalysisResult, AnalyzedCandidate, RiskLevel
from link_inspector.scoring.rules import DEFAULT_RULES, MAX_SCORE, RuleSet, apply_rules

logger = logging.getLogger(__name__)

FALLBACK_SCORE = 50
FALLBACK_REASON = "Invalid URL format"


def classify(score: int, rules: RuleSet = DEFAULT_RULES) -> RiskLevel:
    """Map a score to its band; the high band is checked first."""

    if score >= rules.high_threshold:
        return RiskLevel.HIGH
    if score >= rules.medium_threshold:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def fallback_result(url: str) -> AnalysisResult:
    return AnalysisResult(
        url=url,
        risk_score=FALLBACK_SCORE,
        risk_level=RiskLevel.MEDIUM,
        reasons=(FALLBACK_REASON,),
        is_https=False,
        domain="unknown",
        scheme="unknown",
        analyzable=False,
    )


def analyze(candidate: UrlCandidate | str, rules: RuleSet | None = None) -> AnalysisResult:
    """Score one URL. Unparsable input yields the fixed fallback result, never an exception."""

    active = rules or DEFAULT_RULES
    raw = candidate.raw_text if isinstance(candidate, UrlCandidate) else candidate
    url = normalize(raw)
    if url is None:
        logger.debug("unparsable url %r, using fallback result", raw)
        return fallback_result(raw if isinstance(raw, str) else str(raw))

    hits = apply_rules(url, active)
    score = min(sum(hit.points for _, hit in hits), MAX_SCORE)
    return AnalysisResult(
        url=raw,
        risk_score=score,
        risk_level=classify(score, active),
        reasons=tuple(hit.reason for _, hit in hits),
        is_https=url.scheme == "https",
        domain=url.host,
        scheme=url.scheme,
    )


def analyze_many(candidates: Iterable[UrlCandidate], rules: RuleSet | None = None) -> list[AnalyzedCandidate]:
    return [AnalyzedCandidate(candidate=item, analysis=analyze(item, rules)) for item in candidates]
