"""Scoring utilities."""

from .engine import analyze, analyze_many, classify, fallback_result
from .models import AnalysisResult, AnalyzedCandidate, DomainGroup, RiskLevel, Summary
from .rules import DEFAULT_RULES, RuleSet, apply_rules
from .summary import group_by_domain, summarize

__all__ = [
    "DEFAULT_RULES",
    "AnalysisResult",
    "AnalyzedCandidate",
    "DomainGroup",
    "RiskLevel",
    "RuleSet",
    "Summary",
    "analyze",
    "analyze_many",
    "apply_rules",
    "classify",
    "fallback_result",
    "group_by_domain",
    "summarize",
]
